"""SheetGen: randomized character sheets from rule tables.

A ruleset (stats, natures, backgrounds, talents) is loaded once; each call
to :func:`generate_character` rolls a fresh sheet, keeping any fields the
caller has locked.

Typical usage::

    from sheetgen import LockedFields, generate_character, load_rules

    rules = load_rules(Path("my_rules"))
    sheet = generate_character(rules, LockedFields(nature="stoic"))

Version Management
------------------
``__version__`` is read from the installed package metadata at import time.
The single source of truth is the ``version`` field in ``pyproject.toml``.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from sheetgen.builder import UnknownLockedKeyError, generate_character
from sheetgen.randomizer import EmptyCandidatesError, random_pick, roll_dice, roll_stat
from sheetgen.rules import CharacterRecord, LockedFields, RulesDataset, load_rules, parse_rules

# ---------------------------------------------------------------------------
# Package version, read from pyproject.toml via importlib.metadata.
#
# If the package is imported without being installed we fall back to
# "0.0.0-dev" so the CLI can still start.
# ---------------------------------------------------------------------------
try:
    __version__: str = version("sheetgen")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"

__all__ = [
    "CharacterRecord",
    "EmptyCandidatesError",
    "LockedFields",
    "RulesDataset",
    "UnknownLockedKeyError",
    "__version__",
    "generate_character",
    "load_rules",
    "parse_rules",
    "random_pick",
    "roll_dice",
    "roll_stat",
]
