"""
Command-line interface for SheetGen.

Provides CLI commands for working with a ruleset:
- generate: Roll a character sheet, optionally locking stats, nature or background
- list: Show the stats and the nature/background keys that can be locked
- validate: Report gaps in a ruleset
- show-config: Print the resolved configuration

Usage:
    sheetgen generate [--nature KEY] [--background KEY] [--lock STAT=VALUE ...]
                      [--seed N] [--format text|json] [--rules DIR]
    sheetgen list [--rules DIR]
    sheetgen validate [--rules DIR]
    sheetgen show-config

Environment Variables:
    SHEETGEN_RULES_PATH: Rules directory (default: data/rules)
    SHEETGEN_SEED: Fixed seed for replayable output (default: unset)
    SHEETGEN_STRICT_LOCKS: Reject unknown locked keys (default: true)
    SHEETGEN_LOG_LEVEL: Log level (default: WARNING)
"""

import argparse
import json
import logging
import random
import sys
from pathlib import Path

from sheetgen.builder import UnknownLockedKeyError, generate_character
from sheetgen.randomizer import EmptyCandidatesError
from sheetgen.render import format_character, format_rules_listing, format_validation_report
from sheetgen.rules import LockedFields, RulesDataset, RulesError, load_rules, validate_rules

logger = logging.getLogger(__name__)

_LOG_FORMATS = {
    "simple": "%(levelname)s: %(message)s",
    "detailed": "%(asctime)s %(levelname)s [%(name)s] %(message)s",
}


def configure_logging(level: str, fmt: str = "simple") -> None:
    """
    Configure the root logger for a CLI run.

    Library modules only create loggers; the root logger is configured here,
    once, and writes to stderr so stdout stays clean for sheet output.

    Args:
        level: Level name such as ``"INFO"``. Unknown names fall back to WARNING.
        fmt: One of ``"simple"`` or ``"detailed"``.
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format=_LOG_FORMATS.get(fmt, _LOG_FORMATS["simple"]),
        stream=sys.stderr,
        force=True,
    )


def parse_lock(text: str) -> tuple[str, int]:
    """
    Parse a ``STAT=VALUE`` lock argument.

    Returns:
        Tuple of (stat_name, value).

    Raises:
        argparse.ArgumentTypeError: If the text is not ``NAME=INTEGER``.
    """
    name, sep, value = text.partition("=")
    name = name.strip()
    if not sep or not name:
        raise argparse.ArgumentTypeError(f"expected STAT=VALUE, got {text!r}")
    try:
        return name, int(value.strip())
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"lock value for {name!r} must be an integer, got {value!r}"
        ) from None


def _load_rules_for(args: argparse.Namespace) -> RulesDataset | None:
    """Load the ruleset named by ``--rules`` or the configured rules path."""
    from sheetgen.config import config

    rules_arg = getattr(args, "rules", None)
    rules_path = Path(rules_arg) if rules_arg else config.rules.absolute_path
    try:
        return load_rules(rules_path)
    except (FileNotFoundError, RulesError) as e:
        print(f"Error loading rules: {e}", file=sys.stderr)
        return None


def cmd_generate(args: argparse.Namespace) -> int:
    """
    Generate one character sheet and print it.

    Returns:
        0 on success, 1 on error
    """
    from sheetgen.config import config

    rules = _load_rules_for(args)
    if rules is None:
        return 1

    locked = LockedFields(
        stats=dict(getattr(args, "lock", None) or []),
        nature=getattr(args, "nature", None),
        background=getattr(args, "background", None),
    )

    seed = getattr(args, "seed", None)
    if seed is None:
        seed = config.generation.seed
    rng = random.Random(seed) if seed is not None else None
    strict_locks = config.generation.strict_locks and not getattr(args, "lenient_locks", False)

    try:
        record = generate_character(rules, locked, rng=rng, strict_locks=strict_locks)
    except (UnknownLockedKeyError, EmptyCandidatesError) as e:
        print(f"Error generating character: {e}", file=sys.stderr)
        return 1

    if getattr(args, "format", "text") == "json":
        print(json.dumps(record.to_dict(), ensure_ascii=False, indent=2))
    else:
        print(format_character(record))
    return 0


def cmd_list(args: argparse.Namespace) -> int:
    """
    List stats plus the nature and background keys accepted by ``generate``.

    Returns:
        0 on success, 1 on error
    """
    rules = _load_rules_for(args)
    if rules is None:
        return 1
    print(format_rules_listing(rules))
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    """
    Validate a ruleset and print the report.

    Returns:
        0 when the ruleset has no problems, 1 otherwise
    """
    rules = _load_rules_for(args)
    if rules is None:
        return 1

    report = validate_rules(rules)
    print(format_validation_report(report))
    if not report.is_valid:
        logger.warning("Ruleset has %d problem(s)", len(report.missing_components))
        return 1
    return 0


def cmd_show_config(args: argparse.Namespace) -> int:
    """Print the resolved configuration."""
    from sheetgen.config import print_config_summary

    print_config_summary()
    return 0


def main() -> int:
    """Main entry point for the CLI."""
    from sheetgen.config import config

    parser = argparse.ArgumentParser(
        prog="sheetgen",
        description="SheetGen - Randomized character sheets from rule tables",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Shared --rules option
    rules_parent = argparse.ArgumentParser(add_help=False)
    rules_parent.add_argument(
        "--rules",
        "-r",
        type=str,
        help="Rules directory (default: data/rules, or SHEETGEN_RULES_PATH env var)",
    )

    # generate command
    generate_parser = subparsers.add_parser(
        "generate",
        parents=[rules_parent],
        help="Generate a character sheet",
        description=(
            "Roll a character sheet. Locked fields are kept as given; "
            "everything else is randomized."
        ),
    )
    generate_parser.add_argument("--nature", "-n", type=str, help="Lock the nature key")
    generate_parser.add_argument("--background", "-b", type=str, help="Lock the background key")
    generate_parser.add_argument(
        "--lock",
        "-l",
        type=parse_lock,
        action="append",
        metavar="STAT=VALUE",
        help="Lock a stat value (repeatable)",
    )
    generate_parser.add_argument(
        "--seed",
        "-s",
        type=int,
        help="Seed for replayable output (default: SHEETGEN_SEED env var, or random)",
    )
    generate_parser.add_argument(
        "--format",
        "-f",
        choices=("text", "json"),
        default="text",
        help="Output format (default: text)",
    )
    generate_parser.add_argument(
        "--lenient-locks",
        action="store_true",
        help="Treat unknown locked keys as unlocked instead of failing",
    )
    generate_parser.set_defaults(func=cmd_generate)

    # list command
    list_parser = subparsers.add_parser(
        "list",
        parents=[rules_parent],
        help="List stats, natures and backgrounds",
    )
    list_parser.set_defaults(func=cmd_list)

    # validate command
    validate_parser = subparsers.add_parser(
        "validate",
        parents=[rules_parent],
        help="Validate a ruleset",
        description="Load a ruleset and report missing or unusable entries.",
    )
    validate_parser.set_defaults(func=cmd_validate)

    # show-config command
    config_parser = subparsers.add_parser("show-config", help="Print the resolved configuration")
    config_parser.set_defaults(func=cmd_show_config)

    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        return 0

    configure_logging(config.logging.level, config.logging.format)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
