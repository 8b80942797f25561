"""Rule listing and explanation commands."""

import json

from rich.console import Console
from rich.table import Table

from ..models import Category
from ..rules.registry import RuleRegistry
from ..rules.schema import RuleDef


def _rule_to_dict(rule: RuleDef) -> dict:
    return {
        "id": rule.id,
        "category": rule.category.value,
        "severity": rule.severity.value,
        "title": rule.title,
        "predicate": rule.predicate.name,
        "params": rule.predicate.params,
        "kinds": sorted(k.value for k in rule.selector.kinds),
        "rationale": rule.rationale,
    }


def run_list_rules(registry: RuleRegistry, category: Category | None = None, output_json: bool = False) -> int:
    rules = list(registry.by_category(category)) if category else list(registry.all())

    if output_json:
        output = {
            "rulesets": [{"id": rid, "version": version} for rid, version in registry.rulesets],
            "rules": [_rule_to_dict(r) for r in rules],
        }
        print(json.dumps(output, indent=2, default=dict))
        return 0

    console = Console()
    table = Table(title="Rules")
    table.add_column("Rule", style="bold")
    table.add_column("Category", style="cyan")
    table.add_column("Severity")
    table.add_column("Checks")

    for rule in rules:
        table.add_row(rule.id, rule.category.value, rule.severity.value, rule.title or "")

    console.print(table)
    console.print(f"{len(rules)} rule(s)", style="dim")
    return 0


def run_explain(registry: RuleRegistry, rule_id: str) -> int:
    """Show what a rule checks and why. Returns 1 if the rule is unknown."""
    console = Console()
    rule = registry.get(rule_id)
    if rule is None:
        console.print(f"Unknown rule: {rule_id}", style="bold red", markup=False)
        console.print(f"Available: {', '.join(r.id for r in registry.all())}", style="dim", markup=False)
        return 1

    console.print(f"\n{rule.id}", style="bold")
    if rule.title:
        console.print(f"  {rule.title}", markup=False)
    console.print(f"\n  Category: {rule.category.value}", style="cyan")
    console.print(f"  Severity: {rule.severity.value}", style="cyan")
    if rule.selector.kinds:
        console.print(f"  Applies to: {', '.join(sorted(k.value for k in rule.selector.kinds))}", style="cyan")

    params = ", ".join(f"{k}={v}" for k, v in rule.predicate.params.items())
    console.print(f"  Check: {rule.predicate.name}({params})", style="dim", markup=False)

    if rule.rationale:
        console.print("\n  Why:", style="bold")
        console.print(f"  {rule.rationale}", markup=False)
    console.print()
    return 0
