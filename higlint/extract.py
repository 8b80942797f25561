"""Fact extraction: turn a UI description document into normalized facts."""

from __future__ import annotations

import json
import logging
import math
import sys
from pathlib import Path
from typing import Any, Iterator

from .colors import contrast_ratio, parse_color
from .errors import MalformedInputError
from .models import Fact, Kind, to_snake

logger = logging.getLogger(__name__)

# Input attribute name -> value type. Fact fields are the snake_case form.
ATTRIBUTE_TYPES: dict[str, str] = {
    "widthPt": "size",
    "heightPt": "size",
    "foregroundColor": "color",
    "backgroundColor": "color",
    "fontSizePt": "size",
    "supportsDynamicType": "bool",
    "accessibilityLabel": "string",
    "spacingPt": "size",
    "paddingPt": "size",
    "durationMs": "size",
    "curve": "string",
    "respectsReduceMotion": "bool",
    "material": "string",
    "respectsReduceTransparency": "bool",
    "materialSurfaceCount": "count",
    "pairedWithVisual": "bool",
}

_SIZE = ("widthPt", "heightPt")
_TEXT = ("foregroundColor", "backgroundColor", "fontSizePt")
_MOTION = ("durationMs", "curve", "respectsReduceMotion")

REQUIRED_ATTRIBUTES: dict[Kind, tuple[str, ...]] = {
    Kind.BUTTON: _SIZE,
    Kind.CONTROL: _SIZE,
    Kind.TOGGLE: _SIZE,
    Kind.SLIDER: _SIZE,
    Kind.TEXT_FIELD: _SIZE + _TEXT,
    Kind.TEXT: _TEXT,
    Kind.LABEL: _TEXT,
    Kind.CONTAINER: ("spacingPt",),
    Kind.ANIMATION: _MOTION,
    Kind.TRANSITION: _MOTION,
    Kind.MATERIAL: ("material", "respectsReduceTransparency"),
    Kind.SCREEN: ("materialSurfaceCount",),
    Kind.HAPTIC: ("pairedWithVisual",),
    Kind.UNKNOWN: (),
}

# SwiftUI spring presets plus the generic name.
SPRING_CURVES = {"spring", "interactivespring", "interpolatingspring", "bouncy", "snappy", "smooth"}

_RESERVED_KEYS = {"kind", "id", "children"}
_SNAKE_TO_INPUT = {to_snake(name): name for name in ATTRIBUTE_TYPES}


def load_document(path: Path | str) -> Any:
    """Read and parse a JSON document. `-` reads standard input."""
    source = "<stdin>" if str(path) == "-" else str(path)
    try:
        if source == "<stdin>":
            text = sys.stdin.read()
        else:
            with open(path, encoding="utf-8") as fh:
                text = fh.read()
    except UnicodeDecodeError as e:
        raise MalformedInputError(f"cannot decode {source}: {e.reason} at byte {e.start}") from e
    except OSError as e:
        raise MalformedInputError(f"cannot read {source}: {e.strerror or e}") from e

    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedInputError(f"invalid JSON in {source}: {e.msg} (line {e.lineno}, column {e.colno})") from e


def iter_records(document: Any) -> Iterator[tuple[str, Any]]:
    """Yield (path, record) for every element, depth-first in document order."""
    if isinstance(document, dict):
        if "elements" not in document:
            raise MalformedInputError("document object has no 'elements' array", field="elements")
        elements = document["elements"]
        prefix = "elements"
    else:
        elements = document
        prefix = ""

    if not isinstance(elements, list):
        raise MalformedInputError("expected an array of element records", field=prefix or None)

    yield from _walk(elements, prefix)


def _walk(records: list[Any], prefix: str) -> Iterator[tuple[str, Any]]:
    for i, record in enumerate(records):
        path = f"{prefix}[{i}]"
        yield path, record
        # extract_fact rejects non-array children before this resumes
        children = record.get("children") if isinstance(record, dict) else None
        if isinstance(children, list):
            yield from _walk(children, f"{path}.children")


def extract_facts(document: Any) -> list[Fact]:
    """Convert a parsed document into facts, one per element, in document order.

    Raises MalformedInputError on the first record that breaks the contract.
    """
    facts: list[Fact] = []
    seen_ids: set[str] = set()

    for index, (path, record) in enumerate(iter_records(document)):
        fact = extract_fact(record, index=index, path=path)
        if fact.element_id in seen_ids:
            raise MalformedInputError(f"duplicate element id {fact.element_id!r}", index=index, field="id")
        seen_ids.add(fact.element_id)
        facts.append(fact)

    logger.debug("extracted %d facts", len(facts))
    return facts


def extract_file(path: Path | str) -> list[Fact]:
    return extract_facts(load_document(path))


def extract_fact(record: Any, *, index: int, path: str = "") -> Fact:
    if not isinstance(record, dict):
        raise MalformedInputError(f"element record must be an object at {path}", index=index)

    raw_kind = record.get("kind")
    if not isinstance(raw_kind, str) or not raw_kind.strip():
        raise MalformedInputError("missing required attribute", index=index, field="kind")
    kind = Kind.parse(raw_kind)
    if kind is Kind.UNKNOWN:
        logger.debug("element %d has unknown kind %r; no rules will apply", index, raw_kind)

    element_id = _element_id(record, index)

    children = record.get("children")
    if children is not None and not isinstance(children, list):
        raise MalformedInputError(f"'children' must be an array at {path}", index=index, field="children")

    values: dict[str, Any] = {}
    extra: dict[str, Any] = {}
    for key, value in record.items():
        if key in _RESERVED_KEYS:
            continue
        name = key if key in ATTRIBUTE_TYPES else _SNAKE_TO_INPUT.get(key)
        if name is None:
            extra[key] = value
            continue
        if value is None:
            continue
        values[name] = _coerce(value, ATTRIBUTE_TYPES[name], index=index, field=key)

    for name in REQUIRED_ATTRIBUTES.get(kind, ()):
        if name not in values:
            raise MalformedInputError(f"missing required attribute for kind '{kind.value}'", index=index, field=name)

    derived: dict[str, Any] = {}
    fg = values.get("foregroundColor")
    bg = values.get("backgroundColor")
    if fg is not None and bg is not None:
        derived["contrast_ratio"] = contrast_ratio(parse_color(fg), parse_color(bg))
    curve = values.get("curve")
    if curve is not None:
        derived["uses_spring_curve"] = curve.strip().lower() in SPRING_CURVES

    return Fact(
        element_id=element_id,
        kind=kind,
        index=index,
        path=path,
        extra=extra,
        **{to_snake(name): value for name, value in values.items()},
        **derived,
    )


def _element_id(record: dict[str, Any], index: int) -> str:
    raw = record.get("id")
    if raw is None:
        return f"e{index}"
    if isinstance(raw, bool) or not isinstance(raw, (str, int)):
        raise MalformedInputError("element id must be a string", index=index, field="id")
    element_id = str(raw).strip()
    if not element_id:
        raise MalformedInputError("element id must not be empty", index=index, field="id")
    return element_id


def _coerce(value: Any, value_type: str, *, index: int, field: str) -> Any:
    if value_type == "size":
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
            raise MalformedInputError("expected a number", index=index, field=field)
        if value < 0:
            raise MalformedInputError("must not be negative", index=index, field=field)
        return float(value)

    if value_type == "count":
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise MalformedInputError("expected a whole number", index=index, field=field)
        if isinstance(value, float) and not value.is_integer():
            raise MalformedInputError("expected a whole number", index=index, field=field)
        if value < 0:
            raise MalformedInputError("must not be negative", index=index, field=field)
        return int(value)

    if value_type == "bool":
        if not isinstance(value, bool):
            raise MalformedInputError("expected true or false", index=index, field=field)
        return value

    if value_type == "color":
        if not isinstance(value, str) or parse_color(value) is None:
            raise MalformedInputError(f"unparseable color {value!r}", index=index, field=field)
        return value.strip()

    if not isinstance(value, str):
        raise MalformedInputError("expected a string", index=index, field=field)
    return value
