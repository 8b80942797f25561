"""
Built-in ruleset distilled from Apple's Human Interface Guidelines.

Each rule pairs a guideline with the predicate that checks it. Thresholds live
in predicate params so a project ruleset can restate a rule with different
numbers (disable the built-in id, register a replacement).
"""

from __future__ import annotations

from ..models import Category, Kind, Severity
from .schema import Predicate, RuleDef, RulesetDef, Selector

CORE_RULESET_ID = "hig/core"
CORE_RULESET_VERSION = 1

SYSTEM_MATERIALS = [
    "ultraThin",
    "thin",
    "regular",
    "thick",
    "ultraThick",
    "chrome",
    "bar",
]

_INTERACTIVE_KINDS = frozenset({Kind.BUTTON, Kind.CONTROL, Kind.TOGGLE, Kind.SLIDER, Kind.TEXT_FIELD})
_ANIMATED_KINDS = frozenset({Kind.ANIMATION, Kind.TRANSITION})

CORE_RULES: tuple[RuleDef, ...] = (
    # Touch targets
    RuleDef(
        id="touch-target-min-size",
        category=Category.TOUCH_TARGET,
        severity=Severity.ERROR,
        title="Touch targets are at least 44x44pt",
        predicate=Predicate("min_size", {"min_width": 44, "min_height": 44}),
        message="touch target is {width_pt}x{height_pt}pt (minimum {min_width}x{min_height}pt)",
        rationale="Controls smaller than 44x44 points are hard to hit accurately, especially for people with motor impairments.",
    ),
    RuleDef(
        id="accessibility-label-present",
        category=Category.ACCESSIBILITY,
        severity=Severity.WARNING,
        title="Interactive elements carry an accessibility label",
        predicate=Predicate("non_empty", {"attribute": "accessibility_label"}),
        message="accessibility label: {accessibility_label}",
        rationale="VoiceOver announces the label; icon-only controls are otherwise read as their image name or not at all.",
        selector=Selector(kinds=_INTERACTIVE_KINDS),
    ),
    # Typography
    RuleDef(
        id="text-min-font-size",
        category=Category.TYPOGRAPHY,
        severity=Severity.ERROR,
        title="Text is at least 11pt",
        predicate=Predicate("min_value", {"attribute": "font_size_pt", "minimum": 11}),
        message="font size is {font_size_pt}pt (minimum {minimum}pt)",
        rationale="11 points is the smallest size that stays legible at typical viewing distance on iOS.",
    ),
    RuleDef(
        id="text-dynamic-type",
        category=Category.TYPOGRAPHY,
        severity=Severity.WARNING,
        title="Text scales with Dynamic Type",
        predicate=Predicate("is_true", {"attribute": "supports_dynamic_type", "missing_ok": True}),
        message="Dynamic Type support: {supports_dynamic_type}",
        rationale="People choose a preferred text size in Settings; fixed-size text ignores that choice.",
    ),
    # Color
    RuleDef(
        id="text-contrast-minimum",
        category=Category.COLOR,
        severity=Severity.ERROR,
        title="Text contrast is at least 4.5:1 (3:1 for large text)",
        predicate=Predicate("min_contrast", {"minimum": 4.5, "large_minimum": 3.0, "large_text_pt": 18}),
        message="contrast ratio is {contrast_ratio}:1 for {font_size_pt}pt text (minimum {minimum}:1, {large_minimum}:1 at {large_text_pt}pt and above)",
        rationale="Low-contrast text is unreadable in bright light and for people with low vision.",
    ),
    RuleDef(
        id="text-contrast-enhanced",
        category=Category.COLOR,
        severity=Severity.INFO,
        title="Text contrast reaches 7:1",
        predicate=Predicate("min_contrast", {"minimum": 7.0}),
        message="contrast ratio is {contrast_ratio}:1 (enhanced target {minimum}:1)",
        rationale="7:1 is the enhanced level recommended when Increase Contrast is enabled.",
    ),
    # Spacing
    RuleDef(
        id="spacing-grid",
        category=Category.SPACING,
        severity=Severity.WARNING,
        title="Spacing follows the 8pt grid",
        predicate=Predicate("multiple_of", {"attributes": ["spacing_pt", "padding_pt"], "step": 8}),
        message="spacing {spacing_pt}pt, padding {padding_pt}pt (multiples of {step}pt)",
        rationale="A shared spacing scale keeps layouts rhythmic and consistent across screens.",
    ),
    # Motion
    RuleDef(
        id="motion-duration-range",
        category=Category.MOTION,
        severity=Severity.WARNING,
        title="Animations last 100-500ms",
        predicate=Predicate("value_range", {"attribute": "duration_ms", "minimum": 100, "maximum": 500}),
        message="animation lasts {duration_ms}ms (expected {minimum}-{maximum}ms)",
        rationale="Brief motion communicates change without making people wait.",
    ),
    RuleDef(
        id="motion-spring-curve",
        category=Category.MOTION,
        severity=Severity.INFO,
        title="Animations use spring timing",
        predicate=Predicate("is_true", {"attribute": "uses_spring_curve"}),
        message="timing curve is {curve}",
        rationale="Spring animations feel physical and can be interrupted smoothly.",
    ),
    RuleDef(
        id="reduce-motion-fallback",
        category=Category.ACCESSIBILITY,
        severity=Severity.ERROR,
        title="Animations honor Reduce Motion",
        predicate=Predicate("is_true", {"attribute": "respects_reduce_motion"}),
        message="respects Reduce Motion: {respects_reduce_motion}",
        rationale="Large or sliding motion can cause discomfort; Reduce Motion must swap it for a fade or no animation.",
        selector=Selector(kinds=_ANIMATED_KINDS),
    ),
    # Materials
    RuleDef(
        id="reduce-transparency-fallback",
        category=Category.ACCESSIBILITY,
        severity=Severity.ERROR,
        title="Materials honor Reduce Transparency",
        predicate=Predicate("is_true", {"attribute": "respects_reduce_transparency"}),
        message="respects Reduce Transparency: {respects_reduce_transparency}",
        rationale="Translucent materials must become opaque when Reduce Transparency is on.",
        selector=Selector(kinds=frozenset({Kind.MATERIAL})),
    ),
    RuleDef(
        id="material-known-style",
        category=Category.MATERIAL,
        severity=Severity.WARNING,
        title="Materials use a system material",
        predicate=Predicate("one_of", {"attribute": "material", "values": SYSTEM_MATERIALS}),
        message="material is {material}",
        rationale="System materials adapt to light and dark appearance and to accessibility settings.",
        selector=Selector(kinds=frozenset({Kind.MATERIAL})),
    ),
    RuleDef(
        id="material-surface-limit",
        category=Category.MATERIAL,
        severity=Severity.WARNING,
        title="At most 3 material surfaces per screen",
        predicate=Predicate("max_value", {"attribute": "material_surface_count", "maximum": 3}),
        message="screen uses {material_surface_count} material surfaces (maximum {maximum})",
        rationale="Stacked translucency muddies hierarchy and costs rendering time.",
        selector=Selector(kinds=frozenset({Kind.SCREEN})),
    ),
    # Haptics
    RuleDef(
        id="haptic-visual-pairing",
        category=Category.ACCESSIBILITY,
        severity=Severity.WARNING,
        title="Haptics accompany visible feedback",
        predicate=Predicate("is_true", {"attribute": "paired_with_visual"}),
        message="paired with visual feedback: {paired_with_visual}",
        rationale="Not everyone feels haptics (device settings, accessories); feedback must also be visible.",
        selector=Selector(kinds=frozenset({Kind.HAPTIC})),
    ),
)


def core_ruleset() -> RulesetDef:
    return RulesetDef(
        ruleset_id=CORE_RULESET_ID,
        version=CORE_RULESET_VERSION,
        description="Human Interface Guidelines checks for iOS user interfaces.",
        rules=CORE_RULES,
    )
