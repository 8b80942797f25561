"""Report aggregation over verdicts."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Iterable

from .models import Category, Severity, Verdict

PASS = "pass"
WARN = "warn"
FAIL = "fail"


def _empty_counts() -> dict[str, int]:
    return {"pass": 0, "warn": 0, "fail": 0, "total": 0}


@dataclass(frozen=True)
class Report:
    """Verdicts of one validation run, in evaluation order."""

    verdicts: tuple[Verdict, ...] = ()
    rulesets: tuple[tuple[str, int], ...] = ()

    @classmethod
    def from_verdicts(cls, verdicts: Iterable[Verdict], *, rulesets: Iterable[tuple[str, int]] = ()) -> "Report":
        return cls(verdicts=tuple(verdicts), rulesets=tuple(rulesets))

    def summary(self) -> dict[str, int]:
        """Counts of pass/warn/fail outcomes. Failed info-level verdicts count as pass."""
        counts = _empty_counts()
        for v in self.verdicts:
            counts[v.outcome] += 1
            counts["total"] += 1
        return counts

    def by_category(self) -> dict[Category, tuple[Verdict, ...]]:
        """Verdicts grouped by category, categories in canonical order, empty ones omitted."""
        grouped: dict[Category, list[Verdict]] = {c: [] for c in Category}
        for v in self.verdicts:
            grouped[v.category].append(v)
        return {c: tuple(vs) for c, vs in grouped.items() if vs}

    def category_counts(self) -> dict[Category, dict[str, int]]:
        result: dict[Category, dict[str, int]] = {}
        for category, verdicts in self.by_category().items():
            counts = _empty_counts()
            for v in verdicts:
                counts[v.outcome] += 1
                counts["total"] += 1
            result[category] = counts
        return result

    @property
    def verdict(self) -> str:
        """'fail' if an error-level verdict failed, else 'warn' if a warning-level one did, else 'pass'."""
        failed = {v.severity for v in self.verdicts if not v.passed}
        if Severity.ERROR in failed:
            return FAIL
        if Severity.WARNING in failed:
            return WARN
        return PASS

    @property
    def passed(self) -> bool:
        return self.verdict != FAIL

    def failures(self) -> list[Verdict]:
        return [v for v in self.verdicts if not v.passed]

    def to_dict(self) -> dict[str, Any]:
        return {
            "summary": self.summary(),
            "verdict": self.verdict,
            "categories": {
                category.value: [v.to_dict() for v in verdicts]
                for category, verdicts in self.by_category().items()
            },
            "rulesets": [{"id": rid, "version": version} for rid, version in self.rulesets],
        }

    def to_json(self, indent: int | None = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)


def aggregate(verdicts: Iterable[Verdict], *, rulesets: Iterable[tuple[str, int]] = ()) -> Report:
    return Report.from_verdicts(verdicts, rulesets=rulesets)
