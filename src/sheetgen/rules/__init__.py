"""Rule tables package.

Exports the types, loader and validator for rulesets.

Typical usage::

    from sheetgen.rules import load_rules

    rules = load_rules(Path("my_rules"))

The returned :class:`RulesDataset` is immutable and is passed to
:func:`~sheetgen.builder.generate_character` for every generation request.
"""

from sheetgen.rules.dice import DiceExpression, parse_dice
from sheetgen.rules.loader import RulesError, load_rules, normalize_ability, parse_rules
from sheetgen.rules.types import (
    Ability,
    Background,
    CharacterRecord,
    LockedFields,
    Nature,
    RulesDataset,
    Talent,
)
from sheetgen.rules.validator import RulesValidationReport, validate_rules

__all__ = [
    "Ability",
    "Background",
    "CharacterRecord",
    "DiceExpression",
    "LockedFields",
    "Nature",
    "RulesDataset",
    "RulesError",
    "RulesValidationReport",
    "Talent",
    "load_rules",
    "normalize_ability",
    "parse_dice",
    "parse_rules",
    "validate_rules",
]
