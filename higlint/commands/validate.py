"""Validate command implementation."""

import logging
from collections import defaultdict
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from ..config import HiglintConfig
from ..engine import validate
from ..errors import DuplicateRuleId, MalformedInputError, RulesetError
from ..extract import load_document
from ..models import Severity, Verdict
from ..report import FAIL, WARN, Report
from ..rules import build_registry, core_ruleset, load_ruleset
from ..rules.registry import RuleRegistry

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_MALFORMED = 2


def registry_from_config(config: HiglintConfig) -> RuleRegistry:
    """Build the frozen registry for a run. Ruleset problems become usage errors."""
    try:
        extra = [load_ruleset(path) for path in config.rulesets]
        registry = build_registry(extra, disabled=config.disable)
    except (RulesetError, DuplicateRuleId) as e:
        raise click.UsageError(str(e)) from e

    defined = {rule.id for ruleset in (core_ruleset(), *extra) for rule in ruleset.rules}
    for rule_id in config.disable:
        if rule_id not in defined:
            logger.warning("disabled rule %r is not defined by any ruleset", rule_id)

    logger.debug("registry has %d rules from %s", len(registry), registry.rulesets)
    return registry


def exit_code_for(report: Report, fail_on: str) -> int:
    verdict = report.verdict
    if verdict == FAIL:
        return EXIT_FAILED
    if verdict == WARN and fail_on == "warning":
        return EXIT_FAILED
    return EXIT_OK


def run_validate(
    input_path: Path,
    config: HiglintConfig,
    show_passing: bool = False,
) -> int:
    """Validate a UI description and print the report.

    Returns:
        Exit code (0 = pass, 1 = failures at or above fail_on, 2 = malformed input)
    """
    status = Console(stderr=True)
    registry = registry_from_config(config)

    try:
        document = load_document(input_path)
        report = validate(document, registry)
    except MalformedInputError as e:
        status.print(f"✗ Malformed input: {e}", style="bold red", markup=False)
        return EXIT_MALFORMED

    if config.output_format == "json":
        print(report.to_json())
    else:
        _print_text_report(Console(), report, show_passing=show_passing)

    return exit_code_for(report, config.fail_on)


def _status(counts: dict[str, int]) -> tuple[str, str]:
    if counts["fail"] > 0:
        return "✗", "bold red"
    if counts["warn"] > 0:
        return "⚠", "yellow"
    return "✓", "bold green"


def _prefix(verdict: Verdict) -> tuple[str, str]:
    if verdict.passed:
        return "PASS", "dim green"
    if verdict.severity == Severity.ERROR:
        return "ERROR", "bold red"
    if verdict.severity == Severity.WARNING:
        return "WARN", "yellow"
    return "INFO", "dim"


def _print_text_report(console: Console, report: Report, show_passing: bool = False) -> None:
    """Print category-grouped report."""
    counts_by_category = report.category_counts()

    for category, verdicts in report.by_category().items():
        counts = counts_by_category[category]
        status, status_style = _status(counts)

        console.print()
        console.print(f"{status} {category.value}", style=status_style)
        console.print(
            f"  {counts['pass']} passed, {counts['warn']} warning(s), {counts['fail']} failure(s)",
            style="dim",
        )

        shown = [v for v in verdicts if show_passing or not v.passed]
        if not shown:
            console.print("  ✓ All rules passing", style="dim green")
            continue

        by_rule: dict[str, list[Verdict]] = defaultdict(list)
        for v in shown:
            by_rule[v.rule_id].append(v)

        for rule_id, rule_verdicts in by_rule.items():
            console.print(f"\n  Rule: {rule_id}", style="bold")
            for v in rule_verdicts:
                prefix, prefix_style = _prefix(v)
                console.print(f"    {prefix}: {v.element_id} - {v.message}", style=prefix_style, markup=False)

    summary = report.summary()
    console.print()

    table = Table(title="Summary", show_header=False)
    table.add_column("Metric", style="cyan")
    table.add_column("Count", justify="right")
    table.add_row("Passed", str(summary["pass"]))
    table.add_row("Warnings", str(summary["warn"]))
    table.add_row("Failures", str(summary["fail"]))
    table.add_row("Total checks", str(summary["total"]))
    console.print(table)

    console.print()
    verdict = report.verdict
    if verdict == FAIL:
        console.print(f"❌ FAIL: {summary['fail']} failure(s)", style="bold red")
    elif verdict == WARN:
        console.print(f"⚠️  WARN: {summary['warn']} warning(s)", style="yellow")
    else:
        console.print("✅ PASS", style="bold green")
