"""Character builder.

:func:`generate_character` turns a ruleset and a set of locked fields into
one :class:`~sheetgen.rules.types.CharacterRecord`.  It is a single-pass
transform with no I/O and no shared mutable state; the ruleset is only
read.

Generation sequence:

1. Stats: locked value if present, otherwise ``2d6 - 2d4``.
2. Nature: locked key if present and non-empty, otherwise a uniform pick
   over the natures table.
3. Background: same as nature, chosen independently.
4. Background stat modifiers are added to the stats from step 1.
5. Hit points: nature base hp plus the background ``hpBonus`` roll.
6. Shreds of Insight: the background ``shreds`` roll, no base value.
7. Abilities: the nature's normalized ability list.
8. Talent: effect text of the background's talent, or ``""``.

Missing optional data (unparseable dice, unknown talent key) degrades to
a zero or empty value.  Locked keys that are not in the ruleset raise
:exc:`UnknownLockedKeyError` unless ``strict_locks`` is false, in which
case they are logged and treated as unlocked.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Mapping
from typing import TypeVar

from sheetgen.randomizer import random_pick, roll_stat
from sheetgen.rules.dice import roll_bonus
from sheetgen.rules.types import CharacterRecord, LockedFields, RulesDataset

logger = logging.getLogger(__name__)

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class UnknownLockedKeyError(KeyError):
    """Raised when a locked field names a key the ruleset does not define.

    Attributes:
        field: Which locked field was rejected (``"stats"``, ``"nature"`` or
               ``"background"``).
        key:   The key that could not be resolved.
    """

    def __init__(self, field: str, key: str) -> None:
        self.field = field
        self.key = key
        super().__init__(f"Locked {field} {key!r} is not defined in the ruleset.")

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message.
        return str(self.args[0])


# ---------------------------------------------------------------------------
# Generation
# ---------------------------------------------------------------------------


def generate_character(
    rules: RulesDataset,
    locked: LockedFields | None = None,
    *,
    rng: random.Random | None = None,
    strict_locks: bool = True,
) -> CharacterRecord:
    """Generate one character sheet.

    Args:
        rules:        The loaded ruleset.  Not modified.
        locked:       Fields that bypass randomization.  ``None`` locks
                      nothing.
        rng:          Generator for every dice roll and selection.  Defaults
                      to the ambient entropy source.  Pass a seeded
                      ``random.Random`` for replayable output.
        strict_locks: When true, unknown locked keys raise.  When false they
                      are ignored with a warning.

    Returns:
        The assembled :class:`CharacterRecord`.

    Raises:
        UnknownLockedKeyError: A locked key is unknown and ``strict_locks``
                               is true.
        EmptyCandidatesError:  A table needed for random selection is empty.
    """
    locked = locked or LockedFields()

    stats = _roll_stats(rules, locked.stats, rng=rng, strict_locks=strict_locks)

    nature_key = _select_key(
        "nature", rules.natures, locked.nature, rng=rng, strict_locks=strict_locks
    )
    nature = rules.natures[nature_key]

    background_key = _select_key(
        "background", rules.backgrounds, locked.background, rng=rng, strict_locks=strict_locks
    )
    background = rules.backgrounds[background_key]

    for stat, delta in background.stat_mods.items():
        if stat in stats:
            stats[stat] += delta

    hp = nature.hp + roll_bonus(background.hp_bonus, rng=rng)
    shreds = roll_bonus(background.shreds, rng=rng)

    talent = rules.talents.get(background.talent) if background.talent is not None else None

    logger.debug(
        "Generated character nature=%s background=%s hp=%d shreds=%d",
        nature_key,
        background_key,
        hp,
        shreds,
    )

    return CharacterRecord(
        nature=nature.name,
        background=background.name,
        hp=hp,
        stats=stats,
        shreds=shreds,
        abilities=tuple(nature.abilities),
        talent=talent.effect if talent is not None else "",
    )


# ---------------------------------------------------------------------------
# Private helpers
# ---------------------------------------------------------------------------


def _roll_stats(
    rules: RulesDataset,
    locked_stats: Mapping[str, int],
    *,
    rng: random.Random | None,
    strict_locks: bool,
) -> dict[str, int]:
    """Return one value per ruleset stat, honouring locked values."""
    for name in locked_stats:
        if name not in rules.stats:
            if strict_locks:
                raise UnknownLockedKeyError("stats", name)
            logger.warning("Ignoring locked stat %r: not defined in the ruleset", name)

    stats: dict[str, int] = {}
    for name in rules.stats:
        if name in locked_stats:
            stats[name] = int(locked_stats[name])
        else:
            stats[name] = roll_stat(rng=rng)
    return stats


def _select_key(
    field: str,
    table: Mapping[str, T],
    locked_key: str | None,
    *,
    rng: random.Random | None,
    strict_locks: bool,
) -> str:
    """Return the locked key for ``table`` or pick one at random."""
    if locked_key:
        if locked_key in table:
            return locked_key
        if strict_locks:
            raise UnknownLockedKeyError(field, locked_key)
        logger.warning("Ignoring locked %s %r: not defined in the ruleset", field, locked_key)
    return random_pick(list(table), rng=rng)
