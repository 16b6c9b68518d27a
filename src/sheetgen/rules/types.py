"""Immutable rule-table and character types.

These frozen dataclasses are the in-memory form of a ruleset and the
inputs and outputs of one generation request.  The loader builds the rule
types once; the builder reads them and never mutates them.

Design note: ability entries arrive in the rule files either as a bare
name or as a ``{name, effect}`` mapping.  The loader resolves both forms
into :class:`Ability` before anything else sees them, so the builder works
with a single shape.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Ability:
    """A named ability granted by a nature.

    Attributes:
        name:   Display name, e.g. ``"Iron Will"``.
        effect: Rules text.  Empty when the rule file lists the bare name.
    """

    name: str
    effect: str = ""


@dataclass(frozen=True)
class Nature:
    """A character archetype.

    Attributes:
        name:      Display name shown on the sheet.
        hp:        Base hit points before any background bonus.  Non-negative.
        abilities: Normalized abilities, in rule-file order.
    """

    name: str
    hp: int
    abilities: tuple[Ability, ...] = ()


@dataclass(frozen=True)
class Background:
    """A character origin.

    Attributes:
        name:      Display name shown on the sheet.
        stat_mods: Additive stat deltas keyed by stat name.
        hp_bonus:  Raw dice expression for bonus hit points, e.g. ``"1d6"``.
                   Kept unparsed; see :func:`~sheetgen.rules.dice.parse_dice`.
        shreds:    Raw dice expression for Shreds of Insight.
        talent:    Key into the talents table, or ``None``.
    """

    name: str
    stat_mods: Mapping[str, int] = field(default_factory=dict)
    hp_bonus: str | None = None
    shreds: str | None = None
    talent: str | None = None


@dataclass(frozen=True)
class Talent:
    """A talent granted through a background."""

    effect: str = ""


@dataclass(frozen=True)
class RulesDataset:
    """The four rule tables, loaded once per session.

    Attributes:
        stats:       Stat names in sheet order.
        natures:     Natures keyed by rule-file key, in file order.
        backgrounds: Backgrounds keyed by rule-file key, in file order.
        talents:     Talents keyed by talent key.
    """

    stats: tuple[str, ...]
    natures: Mapping[str, Nature]
    backgrounds: Mapping[str, Background]
    talents: Mapping[str, Talent]


@dataclass(frozen=True)
class LockedFields:
    """Caller-chosen values that bypass randomization.

    Attributes:
        stats:      Locked stat values keyed by stat name.  Stats not present
                    here are rolled.
        nature:     Locked nature key.  ``None`` or ``""`` means random.
        background: Locked background key.  ``None`` or ``""`` means random.
    """

    stats: Mapping[str, int] = field(default_factory=dict)
    nature: str | None = None
    background: str | None = None


@dataclass(frozen=True)
class CharacterRecord:
    """One generated character sheet.

    Attributes:
        nature:     Display name of the selected nature.
        background: Display name of the selected background.
        hp:         Nature base hp plus the rolled background bonus.
        stats:      Final stat values (after background modifiers), keyed
                    in ruleset order.
        shreds:     Rolled Shreds of Insight.
        abilities:  The nature's abilities.
        talent:     Effect text of the background's talent, or ``""``.
    """

    nature: str
    background: str
    hp: int
    stats: Mapping[str, int]
    shreds: int
    abilities: tuple[Ability, ...]
    talent: str

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serialisable mapping of the sheet."""
        return {
            "nature": self.nature,
            "background": self.background,
            "hp": self.hp,
            "stats": dict(self.stats),
            "shreds": self.shreds,
            "abilities": [{"name": a.name, "effect": a.effect} for a in self.abilities],
            "talent": self.talent,
        }
