from __future__ import annotations

import math
from typing import Any, Callable, Mapping

from ..models import Fact

PredicateFn = Callable[[Fact, Mapping[str, Any]], bool]


def _number(fact: Fact, attribute: str) -> float:
    value = fact.get(attribute)
    if value is None:
        raise ValueError(f"element has no {attribute!r}")
    return float(value)


def predicate_noop(fact: Fact, params: Mapping[str, Any]) -> bool:
    return True


def predicate_min_size(fact: Fact, params: Mapping[str, Any]) -> bool:
    """Both dimensions are checked independently against their minimum."""
    min_width = float(params.get("min_width", 44))
    min_height = float(params.get("min_height", 44))
    width_ok = _number(fact, "width_pt") >= min_width
    height_ok = _number(fact, "height_pt") >= min_height
    return width_ok and height_ok


def predicate_min_value(fact: Fact, params: Mapping[str, Any]) -> bool:
    return _number(fact, params["attribute"]) >= float(params["minimum"])


def predicate_max_value(fact: Fact, params: Mapping[str, Any]) -> bool:
    return _number(fact, params["attribute"]) <= float(params["maximum"])


def predicate_value_range(fact: Fact, params: Mapping[str, Any]) -> bool:
    value = _number(fact, params["attribute"])
    return float(params["minimum"]) <= value <= float(params["maximum"])


def predicate_multiple_of(fact: Fact, params: Mapping[str, Any]) -> bool:
    """Every present attribute in `attributes` is a multiple of `step`. Absent ones are ignored."""
    step = float(params.get("step", 8))
    if step <= 0:
        raise ValueError("step must be positive")
    attributes = params.get("attributes", [])
    if isinstance(attributes, str):
        attributes = [attributes]

    for attribute in attributes:
        value = fact.get(attribute)
        if value is None:
            continue
        remainder = float(value) % step
        if not (math.isclose(remainder, 0.0, abs_tol=1e-9) or math.isclose(remainder, step, abs_tol=1e-9)):
            return False
    return True


def predicate_min_contrast(fact: Fact, params: Mapping[str, Any]) -> bool:
    """Contrast meets `minimum`, or `large_minimum` for text at or above `large_text_pt`."""
    ratio = _number(fact, "contrast_ratio")
    minimum = float(params.get("minimum", 4.5))

    large_minimum = params.get("large_minimum")
    large_text_pt = params.get("large_text_pt")
    font_size = fact.get("font_size_pt")
    if large_minimum is not None and large_text_pt is not None and font_size is not None:
        if float(font_size) >= float(large_text_pt):
            minimum = float(large_minimum)

    # No rounding: 4.499:1 fails a 4.5:1 threshold.
    return ratio >= minimum


def predicate_is_true(fact: Fact, params: Mapping[str, Any]) -> bool:
    """Attribute is True. With `missing_ok`, an absent attribute passes too."""
    value = fact.get(params["attribute"])
    if value is None:
        return bool(params.get("missing_ok", False))
    return value is True


def predicate_one_of(fact: Fact, params: Mapping[str, Any]) -> bool:
    value = fact.get(params["attribute"])
    if value is None:
        return False
    allowed = params.get("values", [])
    if params.get("case_insensitive", True):
        return str(value).lower() in {str(v).lower() for v in allowed}
    return value in allowed


def predicate_non_empty(fact: Fact, params: Mapping[str, Any]) -> bool:
    value = fact.get(params["attribute"])
    return isinstance(value, str) and bool(value.strip())


PREDICATES: dict[str, PredicateFn] = {
    "noop": predicate_noop,
    "min_size": predicate_min_size,
    "min_value": predicate_min_value,
    "max_value": predicate_max_value,
    "value_range": predicate_value_range,
    "multiple_of": predicate_multiple_of,
    "min_contrast": predicate_min_contrast,
    "is_true": predicate_is_true,
    "one_of": predicate_one_of,
    "non_empty": predicate_non_empty,
}
