"""Data models for UI elements and rule verdicts."""

from __future__ import annotations

import re
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any


class Category(str, Enum):
    """Guideline area a rule belongs to."""

    TYPOGRAPHY = "Typography"
    COLOR = "Color"
    SPACING = "Spacing"
    TOUCH_TARGET = "TouchTarget"
    MOTION = "Motion"
    MATERIAL = "Material"
    ACCESSIBILITY = "Accessibility"

    @classmethod
    def parse(cls, value: str) -> "Category":
        key = _normalize_key(value)
        for member in cls:
            if _normalize_key(member.value) == key:
                return member
        raise ValueError(f"unknown category: {value!r}")


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"

    @classmethod
    def parse(cls, value: str) -> "Severity":
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"unknown severity: {value!r}") from None


class Kind(str, Enum):
    """Closed set of element kinds the checker understands."""

    BUTTON = "button"
    CONTROL = "control"
    TOGGLE = "toggle"
    SLIDER = "slider"
    TEXT_FIELD = "textField"
    TEXT = "text"
    LABEL = "label"
    CONTAINER = "container"
    ANIMATION = "animation"
    TRANSITION = "transition"
    MATERIAL = "material"
    SCREEN = "screen"
    HAPTIC = "haptic"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: str) -> "Kind":
        """Match a kind string ignoring case, '_' and '-'. Unmatched strings are UNKNOWN."""
        key = _normalize_key(value)
        for member in cls:
            if _normalize_key(member.value) == key:
                return member
        return cls.UNKNOWN


def _normalize_key(value: str) -> str:
    return re.sub(r"[-_\s]", "", str(value)).lower()


_INTERACTIVE = frozenset({Category.TOUCH_TARGET, Category.ACCESSIBILITY})
_TEXT = frozenset({Category.TYPOGRAPHY, Category.COLOR})
_ANIMATED = frozenset({Category.MOTION, Category.ACCESSIBILITY})

# Which rule categories can ever apply to a kind.
KIND_CATEGORIES: dict[Kind, frozenset[Category]] = {
    Kind.BUTTON: _INTERACTIVE,
    Kind.CONTROL: _INTERACTIVE,
    Kind.TOGGLE: _INTERACTIVE,
    Kind.SLIDER: _INTERACTIVE,
    Kind.TEXT_FIELD: _INTERACTIVE | _TEXT,
    Kind.TEXT: _TEXT,
    Kind.LABEL: _TEXT,
    Kind.CONTAINER: frozenset({Category.SPACING}),
    Kind.ANIMATION: _ANIMATED,
    Kind.TRANSITION: _ANIMATED,
    Kind.MATERIAL: frozenset({Category.MATERIAL, Category.ACCESSIBILITY}),
    Kind.SCREEN: frozenset({Category.MATERIAL}),
    Kind.HAPTIC: frozenset({Category.ACCESSIBILITY}),
    Kind.UNKNOWN: frozenset(),
}


def categories_for(kind: Kind) -> frozenset[Category]:
    return KIND_CATEGORIES.get(kind, frozenset())


@dataclass(frozen=True)
class Fact:
    """Normalized observation about one UI element."""

    element_id: str
    kind: Kind
    index: int  # position in flattened document order
    path: str = ""  # location in the input document, e.g. "[0].children[2]"

    width_pt: float | None = None
    height_pt: float | None = None
    foreground_color: str | None = None
    background_color: str | None = None
    font_size_pt: float | None = None
    contrast_ratio: float | None = None  # derived from the color pair
    supports_dynamic_type: bool | None = None
    accessibility_label: str | None = None
    spacing_pt: float | None = None
    padding_pt: float | None = None
    duration_ms: float | None = None
    curve: str | None = None
    uses_spring_curve: bool | None = None  # derived from curve
    respects_reduce_motion: bool | None = None
    material: str | None = None
    respects_reduce_transparency: bool | None = None
    material_surface_count: int | None = None
    paired_with_visual: bool | None = None

    extra: dict[str, Any] = field(default_factory=dict)  # attributes the checker does not model

    def get(self, name: str, default: Any = None) -> Any:
        """Look up an attribute by snake_case or camelCase name."""
        attr = to_snake(name)
        if attr in _FACT_FIELDS and attr != "extra":
            value = getattr(self, attr)
            return default if value is None else value
        if name in self.extra:
            return self.extra[name]
        return self.extra.get(attr, default)

    @property
    def categories(self) -> frozenset[Category]:
        return categories_for(self.kind)


_FACT_FIELDS = {f.name for f in fields(Fact)}


def to_snake(name: str) -> str:
    """Convert camelCase to snake_case ('widthPt' -> 'width_pt')."""
    return re.sub(r"(?<!^)(?=[A-Z])", "_", name).lower()


@dataclass(frozen=True)
class Verdict:
    """Outcome of one rule checked against one element."""

    rule_id: str
    element_id: str
    category: Category
    passed: bool
    severity: Severity
    message: str

    @property
    def outcome(self) -> str:
        """'fail', 'warn' or 'pass' as counted in a report summary."""
        if self.passed:
            return "pass"
        if self.severity == Severity.ERROR:
            return "fail"
        if self.severity == Severity.WARNING:
            return "warn"
        return "pass"

    def to_dict(self) -> dict[str, Any]:
        return {
            "ruleId": self.rule_id,
            "elementId": self.element_id,
            "passed": self.passed,
            "severity": self.severity.value,
            "message": self.message,
        }

    def __str__(self) -> str:
        status = "PASS" if self.passed else self.severity.value.upper()
        return f"{status}: [{self.rule_id}] {self.element_id} - {self.message}"
