"""
Rule evaluation: check every applicable rule against every fact.

Usage:
    registry = build_registry()
    report = validate(document, registry)
    if report.verdict == "fail":
        ...
"""

from __future__ import annotations

import logging
import time
from typing import Any, Iterable, Mapping

from .errors import RuleEvaluationError
from .extract import extract_facts
from .models import Fact, Severity, Verdict
from .report import Report
from .rules.registry import RuleRegistry
from .rules.schema import RuleDef

logger = logging.getLogger(__name__)


class _Placeholder:
    """Template value: bare fields use the readable form, format specs apply to the raw value."""

    __slots__ = ("value",)

    def __init__(self, value: Any):
        self.value = value

    def __format__(self, spec: str) -> str:
        if not spec or self.value is None:
            return _display(self.value)
        return format(self.value, spec)

    def __str__(self) -> str:
        return _display(self.value)


class _TemplateValues(dict):
    """format_map source: fact attributes first, then predicate params."""

    def __init__(self, fact: Fact, params: Mapping[str, Any]):
        super().__init__()
        self._fact = fact
        self._params = params

    def __missing__(self, key: str) -> _Placeholder:
        value = self._fact.get(key)
        if value is None:
            value = self._params.get(key)
        return _Placeholder(value)


def _display(value: Any) -> str:
    if value is None:
        return "n/a"
    if isinstance(value, bool):
        return "yes" if value else "no"
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return f"{value:.2f}".rstrip("0").rstrip(".")
    if isinstance(value, (list, tuple)):
        return ", ".join(_display(v) for v in value)
    return str(value)


def render_message(rule: RuleDef, fact: Fact) -> str:
    template = rule.message or rule.title or rule.id
    return template.format_map(_TemplateValues(fact, rule.predicate.params))


class Evaluator:
    """Applies a registry's rules to facts.

    Facts are visited in input order and rules in registry order, so the
    verdict sequence is reproducible. A rule never sees another rule's verdict.
    """

    def __init__(self, registry: RuleRegistry):
        self.registry = registry

    def evaluate(self, facts: Iterable[Fact]) -> list[Verdict]:
        start_time = time.perf_counter()
        rules = self.registry.all()
        verdicts: list[Verdict] = []
        failures = 0

        for fact in facts:
            categories = fact.categories
            for rule in rules:
                if not rule.applies_to(fact.kind, categories):
                    continue
                try:
                    verdicts.append(self.check(rule, fact))
                except RuleEvaluationError as e:
                    failures += 1
                    logger.warning("rule %s failed on element %s: %s", e.rule_id, e.element_id, e.describe_cause())
                    verdicts.append(
                        Verdict(
                            rule_id=rule.id,
                            element_id=fact.element_id,
                            category=rule.category,
                            passed=False,
                            severity=Severity.ERROR,
                            message=str(e),
                        )
                    )

        logger.info(
            "evaluated %d verdicts (%d rule failures) in %.2fms",
            len(verdicts),
            failures,
            (time.perf_counter() - start_time) * 1000,
        )
        return verdicts

    def check(self, rule: RuleDef, fact: Fact) -> Verdict:
        """Evaluate one rule against one fact. Raises RuleEvaluationError if the predicate fails."""
        fn = self.registry.predicate(rule.predicate.name)
        try:
            if fn is None:
                raise LookupError(f"unknown predicate {rule.predicate.name!r}")
            passed = bool(fn(fact, rule.predicate.params))
            message = render_message(rule, fact)
        except Exception as e:
            raise RuleEvaluationError(rule.id, fact.element_id, e) from e

        return Verdict(
            rule_id=rule.id,
            element_id=fact.element_id,
            category=rule.category,
            passed=passed,
            severity=rule.severity,
            message=message,
        )


def validate(document: Any, registry: RuleRegistry) -> Report:
    """Extract facts from a parsed document, evaluate them and aggregate a report.

    MalformedInputError from extraction propagates; nothing is evaluated then.
    """
    facts = extract_facts(document)
    verdicts = Evaluator(registry).evaluate(facts)
    return Report.from_verdicts(verdicts, rulesets=registry.rulesets)
