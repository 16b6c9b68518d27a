"""Dice and selection primitives.

Every function here draws from an injectable :class:`random.Random`.  When
no generator is passed the functions use a module-level
:class:`random.SystemRandom`, which reads from the OS entropy pool and keeps
ambient generation independent of the global ``random`` module state.

Contract:
- Pure apart from the entropy draw: no I/O, no shared mutable state.
- Preconditions fail fast with :exc:`ValueError`; nothing is clamped.

Tests (and the ``--seed`` CLI flag) pass a seeded ``random.Random`` so a
whole generation run can be replayed.
"""

from __future__ import annotations

import random
from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")

#: Ambient entropy source used when the caller does not inject a generator.
_SYSTEM_RNG = random.SystemRandom()

#: Canonical stat roll: ``2d6 - 2d4``.
STAT_POSITIVE_DIE = (6, 2)
STAT_NEGATIVE_DIE = (4, 2)


class EmptyCandidatesError(ValueError):
    """Raised when :func:`random_pick` is given nothing to choose from.

    An empty candidate set means the ruleset itself is malformed (for
    example a natures table with no entries).  Callers are not expected to
    recover from this.
    """


def _resolve(rng: random.Random | None) -> random.Random:
    return _SYSTEM_RNG if rng is None else rng


def roll_dice(sides: int, count: int = 1, *, rng: random.Random | None = None) -> int:
    """Sum ``count`` independent uniform draws from ``1..sides``.

    Args:
        sides: Number of faces on each die.  Must be positive.
        count: Number of dice to roll.  Must be positive.
        rng:   Generator to draw from.  Defaults to the ambient entropy
               source.

    Returns:
        An integer in ``[count, count * sides]``.

    Raises:
        ValueError: If ``sides`` or ``count`` is not positive.
    """
    if sides <= 0:
        raise ValueError(f"Dice must have at least one side, got sides={sides}.")
    if count <= 0:
        raise ValueError(f"At least one die must be rolled, got count={count}.")

    source = _resolve(rng)
    return sum(source.randint(1, sides) for _ in range(count))


def roll_stat(*, rng: random.Random | None = None) -> int:
    """Roll one stat value as ``2d6 - 2d4``.

    The result always lies in ``[-6, 10]``.
    """
    positive_sides, positive_count = STAT_POSITIVE_DIE
    negative_sides, negative_count = STAT_NEGATIVE_DIE
    return roll_dice(positive_sides, positive_count, rng=rng) - roll_dice(
        negative_sides, negative_count, rng=rng
    )


def random_pick(candidates: Sequence[T], *, rng: random.Random | None = None) -> T:
    """Return one uniformly chosen element of ``candidates``.

    Raises:
        EmptyCandidatesError: If ``candidates`` is empty.
    """
    if not candidates:
        raise EmptyCandidatesError("Cannot pick from an empty candidate set.")
    return _resolve(rng).choice(candidates)
