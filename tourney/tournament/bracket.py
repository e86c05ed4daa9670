"""Construction of the opening round of a single-elimination bracket."""

from __future__ import annotations

import random
from collections.abc import Iterable
from typing import NamedTuple

from tourney.constants import MIN_PARTICIPANTS
from tourney.errors import InvalidParticipantCount

from .models import Match, new_match

_system_random = random.SystemRandom()


class Bracket(NamedTuple):
    """The opening round and the padded size of the bracket."""

    matches: list[Match]
    bracket_size: int


def next_power_of_two(n: int) -> int:
    """Return the smallest power of two that is >= n."""
    size = 1
    while size < n:
        size <<= 1
    return size


def dedupe_participants(participant_ids: Iterable[str | None]) -> list[str]:
    """Drop empty ids and duplicates, keeping first-seen order."""
    return list(dict.fromkeys(str(pid) for pid in participant_ids if pid))


def shuffle_participants(
    participant_ids: list[str], rng: random.Random | None = None
) -> list[str]:
    """Return a uniformly shuffled copy of ``participant_ids`` (Fisher-Yates).

    Only ``rng`` is consumed; the input list is left untouched.
    """
    if rng is None:
        rng = _system_random
    seeds = list(participant_ids)
    for i in range(len(seeds) - 1, 0, -1):
        j = rng.randint(0, i)
        seeds[i], seeds[j] = seeds[j], seeds[i]
    return seeds


def pair_slots(slots: list[str | None]) -> list[Match]:
    """Pair consecutive slots into matches, auto-advancing byes."""
    matches = []
    for i in range(0, len(slots), 2):
        p1 = slots[i]
        p2 = slots[i + 1] if i + 1 < len(slots) else None
        winner = None
        if p1 and not p2:
            winner = p1
        elif p2 and not p1:
            winner = p2
        matches.append(new_match(p1, p2, winner))
    return matches


def build_bracket(
    participant_ids: Iterable[str | None], rng: random.Random | None = None
) -> Bracket:
    """Seed the participants into a power-of-two bracket padded with byes.

    Raises:
        InvalidParticipantCount: If fewer than two distinct participants remain.
    """
    participants = dedupe_participants(participant_ids)
    if len(participants) < MIN_PARTICIPANTS:
        raise InvalidParticipantCount()

    size = next_power_of_two(len(participants))
    byes = size - len(participants)
    seeds = shuffle_participants(participants, rng)

    # Each bye sits next to a seeded participant so no match is left empty.
    contested = len(seeds) - byes
    slots: list[str | None] = list(seeds[:contested])
    for seed in seeds[contested:]:
        slots.extend([seed, None])
    return Bracket(matches=pair_slots(slots), bracket_size=size)
