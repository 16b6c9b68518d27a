"""Ruleset validation report.

A ruleset can load cleanly and still generate poor characters: a
background may point at a talent that does not exist, a dice expression
may not parse (and so silently roll nothing), or a table may be empty.
Generation tolerates all of these by design.  This module surfaces them
as a summary report that can be logged or printed by the CLI.
"""

from __future__ import annotations

from dataclasses import dataclass
from hashlib import sha256
from typing import Any

import yaml

from sheetgen.rules.dice import parse_dice
from sheetgen.rules.types import RulesDataset


@dataclass(slots=True)
class RulesValidationReport:
    """Structured validation report for a ruleset.

    Attributes:
        stats: Stat names in sheet order.
        natures: Nature keys discovered in the ruleset.
        backgrounds: Background keys discovered in the ruleset.
        talents: Talent keys discovered in the ruleset.
        missing_components: Human-readable missing/invalid entries.
        rules_hash: Deterministic hash of the normalized ruleset.
    """

    stats: list[str]
    natures: list[str]
    backgrounds: list[str]
    talents: list[str]
    missing_components: list[str]
    rules_hash: str

    @property
    def is_valid(self) -> bool:
        """True when no component is missing or invalid."""
        return not self.missing_components


def validate_rules(rules: RulesDataset) -> RulesValidationReport:
    """Inspect ``rules`` and return a :class:`RulesValidationReport`."""
    missing: list[str] = []

    # Random selection needs at least one candidate in each table.
    if not rules.stats:
        missing.append("stats list missing or empty")
    if not rules.natures:
        missing.append("natures table missing or empty")
    if not rules.backgrounds:
        missing.append("backgrounds table missing or empty")

    # The loader rejects negative hp; this catches datasets built without it.
    for key, nature in rules.natures.items():
        if nature.hp < 0:
            missing.append(f"negative base hp for nature: {key}")

    for key, background in rules.backgrounds.items():
        if background.talent is None:
            missing.append(f"talent missing for background: {key}")
        elif background.talent not in rules.talents:
            missing.append(f"unknown talent {background.talent!r} for background: {key}")
        if parse_dice(background.hp_bonus) is None:
            missing.append(f"hpBonus rolls no dice for background: {key}")
        if parse_dice(background.shreds) is None:
            missing.append(f"shreds rolls no dice for background: {key}")

    return RulesValidationReport(
        stats=list(rules.stats),
        natures=list(rules.natures),
        backgrounds=list(rules.backgrounds),
        talents=list(rules.talents),
        missing_components=missing,
        rules_hash=_hash_rules(rules),
    )


def _canonical_payload(rules: RulesDataset) -> dict[str, Any]:
    """Plain-data form of ``rules`` suitable for a stable YAML dump."""
    return {
        "stats": list(rules.stats),
        "natures": {
            key: {
                "name": nature.name,
                "hp": nature.hp,
                "abilities": [
                    {"name": ability.name, "effect": ability.effect}
                    for ability in nature.abilities
                ],
            }
            for key, nature in rules.natures.items()
        },
        "backgrounds": {
            key: {
                "name": background.name,
                "statMods": dict(background.stat_mods),
                "hpBonus": background.hp_bonus,
                "shreds": background.shreds,
                "talent": background.talent,
            }
            for key, background in rules.backgrounds.items()
        },
        "talents": {key: {"effect": talent.effect} for key, talent in rules.talents.items()},
    }


def _hash_rules(rules: RulesDataset) -> str:
    """Compute a deterministic hash for the normalized ruleset."""
    serialized = yaml.safe_dump(_canonical_payload(rules), sort_keys=True)
    return sha256(serialized.encode("utf-8")).hexdigest()
