"""Project configuration loaded from higlint.toml."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

from .errors import RulesetError

CONFIG_FILENAME = "higlint.toml"

FAIL_ON_CHOICES = ("error", "warning")
FORMAT_CHOICES = ("json", "text")


@dataclass(frozen=True)
class HiglintConfig:
    fail_on: str = "error"
    output_format: str = "text"
    rulesets: tuple[Path, ...] = ()
    disable: tuple[str, ...] = ()
    path: Path | None = None  # file the values came from, if any

    def merged(
        self,
        *,
        fail_on: str | None = None,
        output_format: str | None = None,
        rulesets: tuple[Path, ...] = (),
        disable: tuple[str, ...] = (),
    ) -> "HiglintConfig":
        """Apply command-line overrides. Ruleset and disable lists are appended."""
        return replace(
            self,
            fail_on=fail_on or self.fail_on,
            output_format=output_format or self.output_format,
            rulesets=self.rulesets + tuple(rulesets),
            disable=self.disable + tuple(disable),
        )


def find_config(start: Path) -> Path | None:
    """Find higlint.toml by walking up from `start`."""
    cur = start.resolve()
    for p in (cur, *cur.parents):
        candidate = p / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def _str_list(value: Any, key: str) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise RulesetError(f"{key} must be a list of strings")
    return list(value)


def _choice(value: Any, key: str, choices: tuple[str, ...], default: str) -> str:
    if value is None:
        return default
    text = str(value).strip().lower()
    if text not in choices:
        raise RulesetError(f"{key} must be one of {', '.join(choices)} (got {value!r})")
    return text


def load_config(path: Path) -> HiglintConfig:
    """Load the [higlint] table. Ruleset paths are resolved relative to the file."""
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise RulesetError(f"cannot read config {path}: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise RulesetError(f"invalid TOML in {path}: {e}") from e

    section = data.get("higlint", {})
    if not isinstance(section, dict):
        raise RulesetError("[higlint] must be a table")

    base = path.parent
    rulesets = tuple((base / p).resolve() for p in _str_list(section.get("rulesets"), "rulesets"))

    return HiglintConfig(
        fail_on=_choice(section.get("fail_on"), "fail_on", FAIL_ON_CHOICES, "error"),
        output_format=_choice(section.get("format"), "format", FORMAT_CHOICES, "text"),
        rulesets=rulesets,
        disable=tuple(_str_list(section.get("disable"), "disable")),
        path=path,
    )


def resolve_config(explicit: Path | None, start: Path) -> HiglintConfig:
    """Load the explicit config, else the nearest discovered one, else defaults."""
    path = explicit if explicit is not None else find_config(start)
    if path is None:
        return HiglintConfig()
    return load_config(path)
