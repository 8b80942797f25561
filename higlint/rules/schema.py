from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

from ..models import Category, Kind, Severity


@dataclass(frozen=True)
class Selector:
    """Restricts a rule to some element kinds. Empty means every kind."""

    kinds: frozenset[Kind] = frozenset()

    def admits(self, kind: Kind) -> bool:
        return not self.kinds or kind in self.kinds


def _freeze(value: Any) -> Any:
    if isinstance(value, Mapping):
        return MappingProxyType({k: _freeze(v) for k, v in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(v) for v in value)
    return value


@dataclass(frozen=True)
class Predicate:
    """Named check plus its parameters. Params are copied into a read-only mapping."""

    name: str
    params: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "params", _freeze(self.params))


@dataclass(frozen=True)
class RuleDef:
    id: str
    category: Category
    severity: Severity = Severity.ERROR
    predicate: Predicate = field(default_factory=lambda: Predicate(name="noop"))
    message: str | None = None  # template, formatted with fact attributes and predicate params
    title: str | None = None
    rationale: str | None = None
    selector: Selector = field(default_factory=Selector)

    def applies_to(self, kind: Kind, categories: frozenset[Category]) -> bool:
        return self.category in categories and self.selector.admits(kind)


@dataclass(frozen=True)
class RulesetDef:
    ruleset_id: str
    version: int
    description: str | None = None
    rules: tuple[RuleDef, ...] = ()
