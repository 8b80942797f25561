"""CLI entrypoint for higlint."""

import logging
import sys
from pathlib import Path

import click

from . import __version__
from .config import FAIL_ON_CHOICES, FORMAT_CHOICES, HiglintConfig, resolve_config
from .errors import RulesetError
from .models import Category

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


@click.group()
@click.version_option(__version__, prog_name="higlint")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Path to higlint.toml (defaults to the nearest one above the current directory)",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    help="Logging verbosity (written to stderr)",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None, log_level: str) -> None:
    """higlint - Check UI descriptions against Apple's Human Interface Guidelines.

    Validate scene-graph JSON for touch targets, contrast, typography, spacing,
    motion, materials and accessibility fallbacks.
    """
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
        force=True,
    )

    ctx.ensure_object(dict)
    try:
        ctx.obj["config"] = resolve_config(config_path, Path.cwd())
    except RulesetError as e:
        raise click.UsageError(str(e)) from e


@cli.command()
@click.argument("input_path", metavar="INPUT", type=click.Path(dir_okay=False, allow_dash=True, path_type=Path))
@click.option(
    "--format",
    "output_format",
    type=click.Choice(FORMAT_CHOICES),
    default=None,
    help="Output format (default: text, or 'format' from higlint.toml)",
)
@click.option(
    "--fail-on",
    type=click.Choice(FAIL_ON_CHOICES),
    default=None,
    help="Exit with status 1 if this level or higher fails (default: error)",
)
@click.option(
    "--ruleset",
    "rulesets",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    multiple=True,
    help="Additional TOML ruleset (repeatable)",
)
@click.option(
    "--disable",
    "disabled",
    type=str,
    multiple=True,
    metavar="RULE_ID",
    help="Skip a rule (repeatable)",
)
@click.option(
    "--show-passing",
    is_flag=True,
    help="List passing checks in text output",
)
@click.pass_context
def validate(
    ctx: click.Context,
    input_path: Path,
    output_format: str | None,
    fail_on: str | None,
    rulesets: tuple[Path, ...],
    disabled: tuple[str, ...],
    show_passing: bool,
) -> None:
    """Validate a UI description (JSON) against the guideline rules.

    INPUT is a JSON array of element records, or an object with an "elements"
    array; use - to read standard input.

    Exit status: 0 pass, 1 fail (or warnings with --fail-on warning),
    2 malformed input.

    Examples:

        higlint validate screen.json

        higlint validate screen.json --format json --fail-on warning

        export-scene | higlint validate -
    """
    from .commands.validate import run_validate

    config: HiglintConfig = ctx.obj["config"].merged(
        fail_on=fail_on,
        output_format=output_format,
        rulesets=rulesets,
        disable=disabled,
    )
    exit_code = run_validate(input_path, config, show_passing=show_passing)
    sys.exit(exit_code)


@cli.command()
@click.option(
    "--category",
    type=click.Choice([c.value for c in Category], case_sensitive=False),
    default=None,
    help="Only list rules in this category",
)
@click.option("--json", "output_json", is_flag=True, help="Output rules as JSON")
@click.option(
    "--ruleset",
    "rulesets",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    multiple=True,
    help="Additional TOML ruleset (repeatable)",
)
@click.pass_context
def rules(ctx: click.Context, category: str | None, output_json: bool, rulesets: tuple[Path, ...]) -> None:
    """List the registered rules."""
    from .commands.rules import run_list_rules
    from .commands.validate import registry_from_config

    registry = registry_from_config(ctx.obj["config"].merged(rulesets=rulesets))
    selected = Category.parse(category) if category else None
    sys.exit(run_list_rules(registry, selected, output_json))


@cli.command()
@click.argument("rule_id")
@click.pass_context
def explain(ctx: click.Context, rule_id: str) -> None:
    """Explain what a rule checks and why.

    Example:

        higlint explain touch-target-min-size
    """
    from .commands.rules import run_explain
    from .commands.validate import registry_from_config

    registry = registry_from_config(ctx.obj["config"])
    sys.exit(run_explain(registry, rule_id))


def main() -> None:
    """Main entrypoint."""
    cli()


if __name__ == "__main__":
    main()
