"""Declarative HIG rules (rules as data, predicates as code)."""

from .core import core_ruleset
from .load import load_ruleset, parse_ruleset
from .registry import RuleRegistry, build_registry
from .schema import Predicate, RuleDef, RulesetDef, Selector

__all__ = [
    "core_ruleset",
    "load_ruleset",
    "parse_ruleset",
    "RuleRegistry",
    "build_registry",
    "Predicate",
    "RuleDef",
    "RulesetDef",
    "Selector",
]
