"""
Unit tests for CLI module (sheetgen/cli.py).

Tests cover:
- Lock argument parsing
- generate command (text and JSON output, seeds, lock errors)
- list, validate and show-config commands
- Logging configuration
"""

import argparse
import json
import logging
from unittest.mock import patch

import pytest

from sheetgen import cli
from sheetgen.config import config
from tests.constants import REPO_RULES_DIR


@pytest.fixture(autouse=True)
def _restore_root_logging():
    """main() reconfigures the root logger; put it back after each test."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def _run(*argv: str) -> int:
    with patch("sys.argv", ["sheetgen", *argv]):
        return cli.main()


# ============================================================================
# ARGUMENT PARSING
# ============================================================================


@pytest.mark.unit
def test_parse_lock_valid():
    assert cli.parse_lock("Might=5") == ("Might", 5)
    assert cli.parse_lock(" Grace = -2 ") == ("Grace", -2)


@pytest.mark.unit
@pytest.mark.parametrize("text", ["Might", "=5", "Might=", "Might=high"])
def test_parse_lock_invalid(text):
    with pytest.raises(argparse.ArgumentTypeError):
        cli.parse_lock(text)


@pytest.mark.unit
def test_invalid_lock_exits_with_usage_error(capsys):
    with pytest.raises(SystemExit) as exc_info:
        _run("generate", "--lock", "Might=high")
    assert exc_info.value.code == 2


@pytest.mark.unit
def test_main_no_command(capsys):
    """Test main with no command shows help."""
    assert _run() == 0
    assert "generate" in capsys.readouterr().out


# ============================================================================
# GENERATE COMMAND TESTS
# ============================================================================


@pytest.mark.unit
def test_generate_text(capsys):
    result = _run(
        "generate",
        "--rules",
        str(REPO_RULES_DIR),
        "--nature",
        "stoic",
        "--background",
        "wanderer",
        "--lock",
        "Might=5",
        "--seed",
        "3",
    )

    out = capsys.readouterr().out
    assert result == 0
    assert out.splitlines()[0] == "Wanderer Stoic"
    assert "  Might: 7" in out.splitlines()
    assert "Talent: +1 perception" in out


@pytest.mark.unit
def test_generate_json(capsys):
    result = _run(
        "generate",
        "--rules",
        str(REPO_RULES_DIR),
        "--nature",
        "stoic",
        "--format",
        "json",
        "--seed",
        "11",
    )

    data = json.loads(capsys.readouterr().out)
    assert result == 0
    assert data["nature"] == "Stoic"
    assert set(data["stats"]) == {"Might", "Grace", "Wit", "Resolve", "Lore"}
    assert data["abilities"][0] == {"name": "Iron Will", "effect": ""}
    assert data["hp"] >= 10


@pytest.mark.unit
def test_generate_same_seed_same_output(capsys):
    _run("generate", "--rules", str(REPO_RULES_DIR), "--seed", "99")
    first = capsys.readouterr().out
    _run("generate", "--rules", str(REPO_RULES_DIR), "--seed", "99")
    second = capsys.readouterr().out
    assert first == second


@pytest.mark.unit
def test_generate_uses_configured_seed(capsys, monkeypatch):
    monkeypatch.setattr(config.generation, "seed", 5)
    _run("generate", "--rules", str(REPO_RULES_DIR))
    first = capsys.readouterr().out
    _run("generate", "--rules", str(REPO_RULES_DIR), "--seed", "5")
    second = capsys.readouterr().out
    assert first == second


@pytest.mark.unit
def test_generate_unknown_nature_fails(capsys):
    result = _run("generate", "--rules", str(REPO_RULES_DIR), "--nature", "ghost")

    assert result == 1
    assert "ghost" in capsys.readouterr().err


@pytest.mark.unit
def test_generate_lenient_locks(capsys):
    result = _run(
        "generate", "--rules", str(REPO_RULES_DIR), "--nature", "ghost", "--lenient-locks"
    )

    assert result == 0
    assert "HP:" in capsys.readouterr().out


@pytest.mark.unit
def test_generate_missing_rules_dir(tmp_path, capsys):
    result = _run("generate", "--rules", str(tmp_path / "missing"))

    assert result == 1
    assert "Error loading rules" in capsys.readouterr().err


@pytest.mark.unit
def test_generate_empty_natures(write_rules, scenario_payload, capsys):
    scenario_payload["natures"] = {}
    result = _run("generate", "--rules", str(write_rules(scenario_payload)))

    assert result == 1
    assert "Error generating character" in capsys.readouterr().err


@pytest.mark.unit
def test_cmd_generate_defaults_to_configured_rules(capsys):
    """cmd_generate falls back to config.rules when --rules is absent."""
    with patch.object(config.rules, "path", str(REPO_RULES_DIR)):
        result = cli.cmd_generate(argparse.Namespace())

    assert result == 0
    assert "Shreds of Insight:" in capsys.readouterr().out


# ============================================================================
# LIST / VALIDATE / SHOW-CONFIG TESTS
# ============================================================================


@pytest.mark.unit
def test_list(capsys):
    result = _run("list", "--rules", str(REPO_RULES_DIR))

    out = capsys.readouterr().out
    assert result == 0
    assert "stoic" in out
    assert "wanderer" in out
    assert "  Might" in out.splitlines()


@pytest.mark.unit
def test_validate_repo_rules(capsys):
    assert _run("validate", "--rules", str(REPO_RULES_DIR)) == 0
    assert "Status:      OK" in capsys.readouterr().out


@pytest.mark.unit
def test_validate_reports_problems(write_rules, multi_payload, capsys):
    result = _run("validate", "--rules", str(write_rules(multi_payload)))

    assert result == 1
    assert "missing_talent" in capsys.readouterr().out


@pytest.mark.unit
def test_validate_bad_rules(write_rules, scenario_payload, capsys):
    scenario_payload["natures"]["Stoic"]["hp"] = "lots"
    result = _run("validate", "--rules", str(write_rules(scenario_payload)))

    assert result == 1
    assert "hp" in capsys.readouterr().err


@pytest.mark.unit
def test_show_config(capsys):
    assert _run("show-config") == 0
    assert "SHEETGEN CONFIGURATION" in capsys.readouterr().out


# ============================================================================
# LOGGING TESTS
# ============================================================================


@pytest.mark.unit
def test_configure_logging_sets_level():
    cli.configure_logging("debug", "detailed")

    assert logging.getLogger().level == logging.DEBUG


@pytest.mark.unit
def test_configure_logging_unknown_level_falls_back():
    cli.configure_logging("chatty", "simple")

    assert logging.getLogger().level == logging.WARNING


@pytest.mark.unit
def test_configure_logging_writes_to_stderr(capsys):
    cli.configure_logging("info", "detailed")

    logging.getLogger("sheetgen.builder").info("rolled %d", 7)

    captured = capsys.readouterr()
    assert captured.out == ""
    assert "INFO [sheetgen.builder] rolled 7" in captured.err


@pytest.mark.unit
def test_configure_logging_unknown_format_uses_simple(capsys):
    cli.configure_logging("warning", "xml")

    logging.getLogger("sheetgen").warning("careful")

    assert "WARNING: careful" in capsys.readouterr().err
