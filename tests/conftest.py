"""
Shared pytest fixtures for the SheetGen test suite.

This module provides fixtures that are automatically available to all test files:
- Raw rule-table payloads (the small "Stoic Wanderer" ruleset and variants)
- Parsed RulesDataset instances
- Temporary rules directories written as YAML or JSON
- Seeded random generators for replayable generation

Function scope is used throughout; every fixture is cheap to build.
"""

import copy
import json
import random
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
import yaml

from sheetgen.rules import RulesDataset, load_rules, parse_rules
from tests.constants import REPO_RULES_DIR

# ============================================================================
# RULE PAYLOADS
# ============================================================================

_SCENARIO_PAYLOAD: dict[str, Any] = {
    "stats": {"stats": ["Might"]},
    "natures": {
        "Stoic": {"name": "Stoic", "hp": 10, "abilities": ["Iron Will"]},
    },
    "backgrounds": {
        "Wanderer": {
            "name": "Wanderer",
            "statMods": {"Might": "2"},
            "hpBonus": "1d6",
            "shreds": "1d4",
            "talent": "keen",
        },
    },
    "talents": {"keen": {"effect": "+1 perception"}},
}

_MULTI_PAYLOAD: dict[str, Any] = {
    "stats": {"stats": ["Might", "Grace", "Wit"]},
    "natures": {
        "stoic": {"name": "Stoic", "hp": 10, "abilities": ["Iron Will"]},
        "curious": {
            "name": "Curious",
            "hp": 8,
            "abilities": [{"name": "Prying Eyes", "effect": "Advantage on searches."}],
        },
        "fierce": {"name": "Fierce", "hp": 12, "abilities": []},
    },
    "backgrounds": {
        "wanderer": {
            "name": "Wanderer",
            "statMods": {"Might": "2"},
            "hpBonus": "1d6",
            "shreds": "1d4",
            "talent": "keen",
        },
        "scholar": {
            "name": "Scholar",
            "statMods": {"Wit": "+2", "Might": "-1"},
            "hpBonus": "1d4",
            "shreds": "1d8",
            "talent": "well_read",
        },
        "drifter": {
            "name": "Drifter",
            "statMods": {},
            "hpBonus": "none",
            "shreds": "",
            "talent": "missing_talent",
        },
    },
    "talents": {
        "keen": {"effect": "+1 perception"},
        "well_read": {"effect": "Recall an obscure fact."},
    },
}


@pytest.fixture
def scenario_payload() -> dict[str, Any]:
    """Single-entry ruleset: one stat, one nature, one background."""
    return copy.deepcopy(_SCENARIO_PAYLOAD)


@pytest.fixture
def multi_payload() -> dict[str, Any]:
    """Three stats, three natures, three backgrounds (one with no dice or talent)."""
    return copy.deepcopy(_MULTI_PAYLOAD)


@pytest.fixture
def scenario_rules(scenario_payload: dict[str, Any]) -> RulesDataset:
    """Parsed single-entry ruleset."""
    return parse_rules(scenario_payload)


@pytest.fixture
def multi_rules(multi_payload: dict[str, Any]) -> RulesDataset:
    """Parsed multi-entry ruleset."""
    return parse_rules(multi_payload)


@pytest.fixture
def repo_rules() -> RulesDataset:
    """The ruleset shipped in data/rules."""
    return load_rules(REPO_RULES_DIR)


# ============================================================================
# RULES DIRECTORIES
# ============================================================================


@pytest.fixture
def write_rules(tmp_path: Path) -> Callable[..., Path]:
    """
    Factory writing a payload to a temporary rules directory.

    Usage:
        rules_dir = write_rules(payload)               # YAML files
        rules_dir = write_rules(payload, suffix=".json")

    Tables absent from the payload are not written.
    """

    def _write(payload: dict[str, Any], suffix: str = ".yaml") -> Path:
        rules_dir = tmp_path / "rules"
        rules_dir.mkdir(exist_ok=True)
        for table, content in payload.items():
            path = rules_dir / f"{table}{suffix}"
            if suffix == ".json":
                path.write_text(json.dumps(content), encoding="utf-8")
            else:
                path.write_text(yaml.safe_dump(content), encoding="utf-8")
        return rules_dir

    return _write


# ============================================================================
# RANDOMNESS
# ============================================================================


@pytest.fixture
def rng() -> random.Random:
    """A seeded generator so generation tests are replayable."""
    return random.Random(1234)
