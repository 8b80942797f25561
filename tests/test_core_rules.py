"""Golden tests for the built-in HIG rules."""

import pytest

from higlint.engine import Evaluator
from higlint.extract import extract_facts
from higlint.models import Category, Severity
from higlint.rules.registry import RuleRegistry
from higlint.rules.schema import Predicate, RuleDef


def _verdicts(evaluator: Evaluator, record: dict) -> dict:
    verdicts = evaluator.evaluate(extract_facts([record]))
    return {v.rule_id: v for v in verdicts}


@pytest.mark.parametrize(
    "width, height, passed",
    [
        (44, 44, True),
        (60, 48, True),
        (40, 48, False),
        (48, 40, False),
        (43.9, 44, False),
        (20, 20, False),
    ],
)
def test_touch_target_min_size(evaluator, width, height, passed):
    verdicts = _verdicts(evaluator, {"id": "b", "kind": "button", "widthPt": width, "heightPt": height})

    touch = verdicts["touch-target-min-size"]
    assert touch.passed is passed
    assert touch.severity == Severity.ERROR
    assert touch.category == Category.TOUCH_TARGET


def test_touch_target_dimensions_are_checked_independently(evaluator):
    registry = RuleRegistry()
    registry.register(
        RuleDef(
            id="touch-target-min-height",
            category=Category.TOUCH_TARGET,
            predicate=Predicate("min_value", {"attribute": "height_pt", "minimum": 44}),
        )
    )
    height_only = Evaluator(registry)
    record = {"id": "b", "kind": "button", "widthPt": 40, "heightPt": 48}

    assert _verdicts(evaluator, record)["touch-target-min-size"].passed is False
    assert _verdicts(height_only, record)["touch-target-min-height"].passed is True


def test_touch_target_message(evaluator):
    verdicts = _verdicts(evaluator, {"id": "b", "kind": "button", "widthPt": 40, "heightPt": 48})
    assert verdicts["touch-target-min-size"].message == "touch target is 40x48pt (minimum 44x44pt)"


def test_accessibility_label(evaluator):
    unlabeled = _verdicts(evaluator, {"kind": "button", "widthPt": 44, "heightPt": 44})
    labeled = _verdicts(evaluator, {"kind": "button", "widthPt": 44, "heightPt": 44, "accessibilityLabel": "Play"})
    blank = _verdicts(evaluator, {"kind": "button", "widthPt": 44, "heightPt": 44, "accessibilityLabel": "  "})

    assert unlabeled["accessibility-label-present"].passed is False
    assert unlabeled["accessibility-label-present"].severity == Severity.WARNING
    assert labeled["accessibility-label-present"].passed is True
    assert blank["accessibility-label-present"].passed is False


def _text(fg: str = "#000000", bg: str = "#ffffff", size: float = 17, **extra) -> dict:
    return {"kind": "text", "foregroundColor": fg, "backgroundColor": bg, "fontSizePt": size, **extra}


@pytest.mark.parametrize("size, passed", [(10, False), (11, True), (17, True)])
def test_text_min_font_size(evaluator, size, passed):
    assert _verdicts(evaluator, _text(size=size))["text-min-font-size"].passed is passed


def test_dynamic_type(evaluator):
    assert _verdicts(evaluator, _text())["text-dynamic-type"].passed is True
    assert _verdicts(evaluator, _text(supportsDynamicType=True))["text-dynamic-type"].passed is True
    assert _verdicts(evaluator, _text(supportsDynamicType=False))["text-dynamic-type"].passed is False


def test_contrast_minimum(evaluator):
    assert _verdicts(evaluator, _text("#767676"))["text-contrast-minimum"].passed is True
    low = _verdicts(evaluator, _text("#777777"))["text-contrast-minimum"]
    assert low.passed is False
    assert low.severity == Severity.ERROR
    assert "4.48:1" in low.message


def test_contrast_relaxed_for_large_text(evaluator):
    # 4.48:1 fails for body text but clears the 3:1 large-text threshold.
    assert _verdicts(evaluator, _text("#777777", size=18))["text-contrast-minimum"].passed is True
    assert _verdicts(evaluator, _text("#aaaaaa", size=24))["text-contrast-minimum"].passed is False


def test_contrast_enhanced_is_informational(evaluator):
    verdict = _verdicts(evaluator, _text("#767676"))["text-contrast-enhanced"]
    assert verdict.passed is False
    assert verdict.severity == Severity.INFO
    assert verdict.outcome == "pass"


def test_text_field_gets_touch_and_text_rules(evaluator):
    verdicts = _verdicts(
        evaluator,
        {"kind": "textField", "widthPt": 200, "heightPt": 36, "foregroundColor": "#000",
         "backgroundColor": "#fff", "fontSizePt": 17, "accessibilityLabel": "Search"},
    )
    assert verdicts["touch-target-min-size"].passed is False
    assert verdicts["text-contrast-minimum"].passed is True
    assert "spacing-grid" not in verdicts


@pytest.mark.parametrize("spacing, passed", [(12, False), (16, True), (24, True), (0, True), (8, True)])
def test_spacing_grid(evaluator, spacing, passed):
    verdict = _verdicts(evaluator, {"kind": "container", "spacingPt": spacing})["spacing-grid"]
    assert verdict.passed is passed
    assert verdict.severity == Severity.WARNING


def test_spacing_grid_checks_padding_when_present(evaluator):
    verdicts = _verdicts(evaluator, {"kind": "container", "spacingPt": 16, "paddingPt": 12})
    assert verdicts["spacing-grid"].passed is False


def _animation(duration=300, curve="spring", reduce_motion=True, kind="animation") -> dict:
    return {"kind": kind, "durationMs": duration, "curve": curve, "respectsReduceMotion": reduce_motion}


@pytest.mark.parametrize("duration, passed", [(50, False), (100, True), (350, True), (500, True), (800, False)])
def test_motion_duration_range(evaluator, duration, passed):
    assert _verdicts(evaluator, _animation(duration=duration))["motion-duration-range"].passed is passed


def test_motion_spring_curve(evaluator):
    assert _verdicts(evaluator, _animation(curve="spring"))["motion-spring-curve"].passed is True
    linear = _verdicts(evaluator, _animation(curve="linear"))["motion-spring-curve"]
    assert linear.passed is False
    assert linear.severity == Severity.INFO


def test_reduce_motion_fallback(evaluator):
    assert _verdicts(evaluator, _animation(reduce_motion=True))["reduce-motion-fallback"].passed is True
    missing = _verdicts(evaluator, _animation(reduce_motion=False, kind="transition"))["reduce-motion-fallback"]
    assert missing.passed is False
    assert missing.severity == Severity.ERROR
    assert missing.category == Category.ACCESSIBILITY


def test_animation_does_not_get_label_rule(evaluator):
    assert "accessibility-label-present" not in _verdicts(evaluator, _animation())


def test_material_rules(evaluator):
    ok = _verdicts(evaluator, {"kind": "material", "material": "ultraThin", "respectsReduceTransparency": True})
    assert ok["material-known-style"].passed is True
    assert ok["reduce-transparency-fallback"].passed is True

    bad = _verdicts(evaluator, {"kind": "material", "material": "frosted", "respectsReduceTransparency": False})
    assert bad["material-known-style"].passed is False
    assert bad["reduce-transparency-fallback"].passed is False
    assert bad["reduce-transparency-fallback"].severity == Severity.ERROR


@pytest.mark.parametrize("count, passed", [(0, True), (3, True), (4, False)])
def test_material_surface_limit(evaluator, count, passed):
    verdicts = _verdicts(evaluator, {"kind": "screen", "materialSurfaceCount": count})
    assert list(verdicts) == ["material-surface-limit"]
    assert verdicts["material-surface-limit"].passed is passed


def test_haptic_pairing(evaluator):
    assert _verdicts(evaluator, {"kind": "haptic", "pairedWithVisual": True})["haptic-visual-pairing"].passed is True
    verdict = _verdicts(evaluator, {"kind": "haptic", "pairedWithVisual": False})["haptic-visual-pairing"]
    assert verdict.passed is False
    assert verdict.severity == Severity.WARNING
