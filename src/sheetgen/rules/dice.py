"""Dice-expression parsing.

Rule tables describe bonus resources as short dice strings such as
``"1d6"`` or ``"d4"``.  Only the number of sides matters: the count in
front of the ``d`` is ignored and a bonus is always a single die.
Anything that does not name a die (a flat amount like ``"2"``, an empty
string, ``None``, a number) means *no bonus*.

:func:`parse_dice` makes that fallback explicit: it returns a
:class:`DiceExpression` when a die is present and ``None`` otherwise.  It
never raises.
"""

from __future__ import annotations

import random
import re
from dataclasses import dataclass
from typing import Any

from sheetgen.randomizer import roll_dice

# Everything up to the first "d" is ignored, then the number of sides.
# Trailing text is ignored so "1d6 (reroll 1s)" still yields a d6.
_DICE_RE = re.compile(r"^[^dD]*[dD]\s*\+?(\d+)")


@dataclass(frozen=True)
class DiceExpression:
    """A parsed single-die expression.

    Attributes:
        sides: Faces on the die.  Always positive.
    """

    sides: int

    def roll(self, *, rng: random.Random | None = None) -> int:
        """Roll the die once and return the result."""
        return roll_dice(self.sides, rng=rng)

    def __str__(self) -> str:
        return f"1d{self.sides}"


def parse_dice(expression: Any) -> DiceExpression | None:
    """Parse ``expression`` into a :class:`DiceExpression`.

    ``"2d6"``, ``"0d6"`` and ``"+1d6"`` all parse as a single d6.

    Args:
        expression: Raw value from a rule table.  Usually a string, but
                    any value is accepted.

    Returns:
        The parsed expression, or ``None`` when no positive side count
        follows the first ``d``.
    """
    if not isinstance(expression, str):
        return None

    match = _DICE_RE.match(expression)
    if match is None:
        return None

    sides = int(match.group(1))
    if sides <= 0:
        return None
    return DiceExpression(sides=sides)


def roll_bonus(expression: Any, *, rng: random.Random | None = None) -> int:
    """Roll ``expression`` once if it parses, otherwise return ``0``."""
    dice = parse_dice(expression)
    if dice is None:
        return 0
    return dice.roll(rng=rng)
