from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any, Iterable

from ..errors import RulesetError
from ..models import Category, Kind, Severity
from .predicates import PREDICATES
from .schema import Predicate, RuleDef, RulesetDef, Selector


def _coerce_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _optional_str(value: Any) -> str | None:
    return str(value) if isinstance(value, str) else None


def _parse_selector(raw: Any, rule_id: str) -> Selector:
    kinds_raw = _coerce_dict(raw).get("kinds", [])
    if isinstance(kinds_raw, str):
        kinds_raw = [kinds_raw]
    if not isinstance(kinds_raw, list):
        raise RulesetError(f"rule {rule_id!r}: selector.kinds must be a list")

    kinds = set()
    for name in kinds_raw:
        kind = Kind.parse(str(name))
        if kind is Kind.UNKNOWN:
            raise RulesetError(f"rule {rule_id!r}: unknown kind {name!r} in selector")
        kinds.add(kind)
    return Selector(kinds=frozenset(kinds))


def parse_ruleset(data: dict[str, Any], *, predicate_names: Iterable[str] | None = None) -> RulesetDef:
    """
    Build a ruleset from parsed TOML data.

    Rules are data, checks are code: every rule names a predicate that must
    exist in the predicate table.
    """
    known_predicates = set(PREDICATES if predicate_names is None else predicate_names)

    ruleset_id = str(data.get("ruleset_id", "")).strip()
    if not ruleset_id:
        raise RulesetError("ruleset_id is required")

    try:
        version = int(data.get("version", 0))
    except (TypeError, ValueError):
        version = 0
    if version <= 0:
        raise RulesetError("version must be a positive integer")

    defaults = _coerce_dict(data.get("defaults"))
    default_category = str(defaults.get("category", "")).strip()
    default_severity = str(defaults.get("severity", "error")).strip() or "error"

    rules: list[RuleDef] = []
    for position, raw in enumerate(data.get("rules", [])):
        if not isinstance(raw, dict):
            raise RulesetError(f"rules[{position}] must be a table")

        rule_id = str(raw.get("id", "")).strip()
        if not rule_id:
            raise RulesetError(f"rules[{position}] is missing an id")

        try:
            category = Category.parse(str(raw.get("category", default_category)))
            severity = Severity.parse(str(raw.get("severity", default_severity)))
        except ValueError as e:
            raise RulesetError(f"rule {rule_id!r}: {e}") from e

        pred_raw = _coerce_dict(raw.get("predicate"))
        pred_name = str(pred_raw.get("name", "")).strip()
        if not pred_name:
            raise RulesetError(f"rule {rule_id!r}: predicate.name is required")
        if pred_name not in known_predicates:
            raise RulesetError(f"rule {rule_id!r}: unknown predicate {pred_name!r}")
        pred_params = _coerce_dict(pred_raw.get("params"))

        rules.append(
            RuleDef(
                id=rule_id,
                category=category,
                severity=severity,
                predicate=Predicate(name=pred_name, params=pred_params),
                message=_optional_str(raw.get("message")),
                title=_optional_str(raw.get("title")),
                rationale=_optional_str(raw.get("rationale")),
                selector=_parse_selector(raw.get("selector"), rule_id),
            )
        )

    return RulesetDef(
        ruleset_id=ruleset_id,
        version=version,
        description=_optional_str(data.get("description")),
        rules=tuple(rules),
    )


def load_ruleset(path: Path, *, predicate_names: Iterable[str] | None = None) -> RulesetDef:
    """Load a ruleset from TOML."""
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise RulesetError(f"cannot read ruleset {path}: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise RulesetError(f"invalid TOML in {path}: {e}") from e
    return parse_ruleset(data, predicate_names=predicate_names)
