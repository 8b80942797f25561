"""
Rule registry: the ordered, versioned set of rules one validation run uses.

Registries are plain instances. Build one at startup with `build_registry()`
(or by hand in tests), then hand it to the evaluator; nothing here is global.
"""

from __future__ import annotations

from typing import Iterable, Iterator

from ..errors import DuplicateRuleId
from ..models import Category
from .core import core_ruleset
from .predicates import PREDICATES, PredicateFn
from .schema import RuleDef, RulesetDef


class RuleRegistry:
    """Ordered collection of rules plus the predicate table they resolve against."""

    def __init__(self, predicates: dict[str, PredicateFn] | None = None):
        self._rules: list[RuleDef] = []
        self._by_id: dict[str, RuleDef] = {}
        self._predicates: dict[str, PredicateFn] = dict(PREDICATES if predicates is None else predicates)
        self._rulesets: list[tuple[str, int]] = []
        self._frozen = False

    def register(self, rule: RuleDef) -> None:
        """Append a rule. Raises DuplicateRuleId if the id is already present."""
        self._check_mutable()
        if rule.id in self._by_id:
            raise DuplicateRuleId(rule.id)
        self._rules.append(rule)
        self._by_id[rule.id] = rule

    def register_ruleset(self, ruleset: RulesetDef, *, disabled: Iterable[str] = ()) -> None:
        skip = set(disabled)
        for rule in ruleset.rules:
            if rule.id in skip:
                continue
            self.register(rule)
        self._rulesets.append((ruleset.ruleset_id, ruleset.version))

    def register_predicate(self, name: str, fn: PredicateFn) -> None:
        self._check_mutable()
        self._predicates[name] = fn

    def predicate(self, name: str) -> PredicateFn | None:
        return self._predicates.get(name)

    def has_predicate(self, name: str) -> bool:
        return name in self._predicates

    def all(self) -> tuple[RuleDef, ...]:
        return tuple(self._rules)

    def by_category(self, category: Category) -> Iterator[RuleDef]:
        return (rule for rule in self._rules if rule.category == category)

    def get(self, rule_id: str) -> RuleDef | None:
        return self._by_id.get(rule_id)

    @property
    def rulesets(self) -> tuple[tuple[str, int], ...]:
        """(ruleset_id, version) pairs in registration order."""
        return tuple(self._rulesets)

    def freeze(self) -> "RuleRegistry":
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def _check_mutable(self) -> None:
        if self._frozen:
            raise RuntimeError("rule registry is frozen")

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self) -> Iterator[RuleDef]:
        return iter(tuple(self._rules))

    def __contains__(self, rule_id: object) -> bool:
        return rule_id in self._by_id


def build_registry(
    extra_rulesets: Iterable[RulesetDef] = (),
    *,
    disabled: Iterable[str] = (),
    include_core: bool = True,
) -> RuleRegistry:
    """Create a frozen registry: the built-in HIG rules first, then any extra rulesets."""
    disabled = set(disabled)
    registry = RuleRegistry()
    if include_core:
        registry.register_ruleset(core_ruleset(), disabled=disabled)
    for ruleset in extra_rulesets:
        registry.register_ruleset(ruleset, disabled=disabled)
    return registry.freeze()
