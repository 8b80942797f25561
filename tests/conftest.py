"""Pytest configuration and fixtures."""

import json
from pathlib import Path

import pytest

from higlint.engine import Evaluator
from higlint.rules import build_registry
from higlint.rules.registry import RuleRegistry


@pytest.fixture
def fixture_screen_path() -> Path:
    """Path to the sample screen description."""
    return Path(__file__).parent / "fixtures" / "screen.json"


@pytest.fixture
def fixture_screen(fixture_screen_path: Path) -> list:
    return json.loads(fixture_screen_path.read_text(encoding="utf-8"))


@pytest.fixture
def registry() -> RuleRegistry:
    """Frozen registry with the built-in rules."""
    return build_registry()


@pytest.fixture
def evaluator(registry: RuleRegistry) -> Evaluator:
    return Evaluator(registry)


@pytest.fixture
def write_json(tmp_path: Path):
    """Write a JSON document into tmp_path and return its path."""

    def _write(data, name: str = "input.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write
