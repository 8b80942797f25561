"""Exception types raised by the checker."""

from __future__ import annotations


class HiglintError(Exception):
    """Base class for checker errors."""


class MalformedInputError(HiglintError, ValueError):
    """The UI description violates the element record contract.

    Raised during extraction; aborts the run before any rule is evaluated.
    """

    def __init__(self, reason: str, *, index: int | None = None, field: str | None = None):
        self.reason = reason
        self.index = index
        self.field = field
        super().__init__(self._format())

    def _format(self) -> str:
        parts = []
        if self.index is not None:
            parts.append(f"element {self.index}")
        if self.field:
            parts.append(f"field '{self.field}'")
        where = ", ".join(parts)
        return f"{where}: {self.reason}" if where else self.reason


class DuplicateRuleId(HiglintError, ValueError):
    """A rule id was registered twice."""

    def __init__(self, rule_id: str):
        self.rule_id = rule_id
        super().__init__(f"rule id already registered: {rule_id!r}")


class RulesetError(HiglintError, ValueError):
    """A ruleset or configuration file could not be loaded."""


class RuleEvaluationError(HiglintError, RuntimeError):
    """A rule predicate raised while checking one element."""

    def __init__(self, rule_id: str, element_id: str, cause: BaseException):
        self.rule_id = rule_id
        self.element_id = element_id
        self.cause = cause
        super().__init__(f"rule evaluation failed: {self.describe_cause()}")

    def describe_cause(self) -> str:
        text = str(self.cause)
        name = type(self.cause).__name__
        return f"{name}: {text}" if text else name
