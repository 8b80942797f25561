"""Tests for fact extraction."""

import pytest

from higlint.errors import MalformedInputError
from higlint.extract import extract_facts, extract_file, load_document
from higlint.models import Kind


def test_fixture_screen_extracts_in_document_order(fixture_screen):
    facts = extract_facts(fixture_screen)

    assert [f.element_id for f in facts] == [
        "play", "close", "title", "caption", "stack", "wifi",
        "sheet", "blur", "root", "tap", "custom",
    ]
    assert [f.index for f in facts] == list(range(len(facts)))


def test_children_are_flattened_depth_first(fixture_screen):
    facts = {f.element_id: f for f in extract_facts(fixture_screen)}

    assert facts["stack"].path == "[4]"
    assert facts["wifi"].path == "[4].children[0]"
    assert facts["wifi"].kind is Kind.TOGGLE


def test_elements_object_form():
    facts = extract_facts({"elements": [{"kind": "button", "widthPt": 44, "heightPt": 44}]})
    assert len(facts) == 1
    assert facts[0].path == "elements[0]"


def test_default_element_ids():
    facts = extract_facts([
        {"kind": "button", "widthPt": 44, "heightPt": 44},
        {"kind": "container", "spacingPt": 8},
    ])
    assert [f.element_id for f in facts] == ["e0", "e1"]


def test_attributes_are_typed_and_derived():
    (fact,) = extract_facts([
        {"id": "t", "kind": "text", "foregroundColor": "#000", "backgroundColor": "#fff", "fontSizePt": 17},
    ])
    assert fact.font_size_pt == 17.0
    assert fact.contrast_ratio == pytest.approx(21.0)
    assert fact.get("fontSizePt") == 17.0
    assert fact.get("font_size_pt") == 17.0


def test_spring_curve_is_derived():
    facts = extract_facts([
        {"kind": "animation", "durationMs": 300, "curve": "snappy", "respectsReduceMotion": True},
        {"kind": "animation", "durationMs": 300, "curve": "easeInOut", "respectsReduceMotion": True},
    ])
    assert facts[0].uses_spring_curve is True
    assert facts[1].uses_spring_curve is False


def test_kind_matching_ignores_case_and_separators():
    facts = extract_facts([
        {"kind": "text_field", "widthPt": 200, "heightPt": 44,
         "foregroundColor": "#000", "backgroundColor": "#fff", "fontSizePt": 17},
        {"kind": "BUTTON", "widthPt": 44, "heightPt": 44},
    ])
    assert facts[0].kind is Kind.TEXT_FIELD
    assert facts[1].kind is Kind.BUTTON


def test_unknown_kind_is_not_an_error():
    (fact,) = extract_facts([{"id": "x", "kind": "hologram", "glow": 3}])
    assert fact.kind is Kind.UNKNOWN
    assert fact.extra == {"glow": 3}
    assert fact.get("glow") == 3


def test_snake_case_input_keys_are_accepted():
    (fact,) = extract_facts([{"kind": "button", "width_pt": 50, "height_pt": 44}])
    assert fact.width_pt == 50.0


def test_missing_required_attribute_names_index_and_field():
    with pytest.raises(MalformedInputError) as excinfo:
        extract_facts([
            {"kind": "button", "widthPt": 44, "heightPt": 44},
            {"kind": "button", "widthPt": 44},
        ])

    err = excinfo.value
    assert err.index == 1
    assert err.field == "heightPt"
    assert "element 1" in str(err)
    assert "heightPt" in str(err)


def test_missing_kind():
    with pytest.raises(MalformedInputError) as excinfo:
        extract_facts([{"id": "a", "widthPt": 44}])
    assert excinfo.value.field == "kind"
    assert excinfo.value.index == 0


@pytest.mark.parametrize(
    "record, field",
    [
        ({"kind": "button", "widthPt": "44", "heightPt": 44}, "widthPt"),
        ({"kind": "button", "widthPt": -1, "heightPt": 44}, "widthPt"),
        ({"kind": "button", "widthPt": True, "heightPt": 44}, "widthPt"),
        ({"kind": "text", "foregroundColor": "teal-ish", "backgroundColor": "#fff", "fontSizePt": 12}, "foregroundColor"),
        ({"kind": "animation", "durationMs": 200, "curve": "spring", "respectsReduceMotion": "yes"}, "respectsReduceMotion"),
        ({"kind": "screen", "materialSurfaceCount": 2.5}, "materialSurfaceCount"),
    ],
)
def test_bad_attribute_values(record, field):
    with pytest.raises(MalformedInputError) as excinfo:
        extract_facts([record])
    assert excinfo.value.field == field


def test_duplicate_ids_are_rejected():
    with pytest.raises(MalformedInputError) as excinfo:
        extract_facts([
            {"id": "a", "kind": "container", "spacingPt": 8},
            {"id": "a", "kind": "container", "spacingPt": 16},
        ])
    assert excinfo.value.index == 1
    assert excinfo.value.field == "id"


def test_non_object_record():
    with pytest.raises(MalformedInputError) as excinfo:
        extract_facts([{"kind": "container", "spacingPt": 8}, "button"])
    assert excinfo.value.index == 1


def test_document_must_be_array_or_elements_object():
    with pytest.raises(MalformedInputError):
        extract_facts({"screens": []})
    with pytest.raises(MalformedInputError):
        extract_facts("button")


def test_empty_document():
    assert extract_facts([]) == []


def test_load_document_invalid_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("[{", encoding="utf-8")
    with pytest.raises(MalformedInputError) as excinfo:
        load_document(path)
    assert "invalid JSON" in str(excinfo.value)


def test_load_document_missing_file(tmp_path):
    with pytest.raises(MalformedInputError):
        load_document(tmp_path / "missing.json")


def test_extract_file(fixture_screen_path):
    facts = extract_file(fixture_screen_path)
    assert len(facts) == 11


def test_overflowing_color_is_malformed():
    with pytest.raises(MalformedInputError) as excinfo:
        extract_facts([
            {"kind": "text", "foregroundColor": "rgb(1e999, 0, 0)", "backgroundColor": "#fff", "fontSizePt": 17},
        ])
    assert excinfo.value.index == 0
    assert excinfo.value.field == "foregroundColor"


def test_non_array_children_names_parent_index():
    with pytest.raises(MalformedInputError) as excinfo:
        extract_facts([
            {"id": "a", "kind": "container", "spacingPt": 8,
             "children": [{"id": "b", "kind": "container", "spacingPt": 8}]},
            {"id": "c", "kind": "container", "spacingPt": 8, "children": "b"},
        ])
    assert excinfo.value.index == 2
    assert excinfo.value.field == "children"
    assert "element 2" in str(excinfo.value)


def test_load_document_undecodable_bytes(tmp_path):
    path = tmp_path / "latin1.json"
    path.write_bytes(b'[{"kind": "button", "id": "\xff\xfe", "widthPt": 44, "heightPt": 44}]')
    with pytest.raises(MalformedInputError) as excinfo:
        load_document(path)
    assert "cannot decode" in str(excinfo.value)
