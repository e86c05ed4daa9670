"""Data models for the tournament blueprint."""

from __future__ import annotations

from typing import Any, TypedDict

from tourney.core.types import FirestoreDocument


class Match(TypedDict):
    """A single pairing inside a round.

    A null slot is a bye; the present participant is the winner from the start.
    """

    p1: str | None
    p2: str | None
    winner: str | None
    p1Score: float
    p2Score: float


class Round(TypedDict):
    """An ordered list of matches. The list index addresses each match."""

    matches: list[Match]


class TournamentResults(TypedDict, total=False):
    """Final results, filled in on completion."""

    champion: str


class Tournament(FirestoreDocument, total=False):
    """A single-elimination tournament document in Firestore."""

    name: str
    game: str
    season: int | None
    status: str
    participants: list[str]
    rounds: list[Round]
    currentRound: int
    bracketSize: int
    results: TournamentResults
    createdBy: str | None


class PublicTournament(TypedDict):
    """The summary of a tournament shown to every authenticated user."""

    id: str
    name: str
    status: str
    game: str


def new_match(p1: str | None, p2: str | None, winner: str | None = None) -> Match:
    """Return a match with zeroed scores."""
    return {"p1": p1, "p2": p2, "winner": winner, "p1Score": 0, "p2Score": 0}


def is_contested(match: dict[str, Any]) -> bool:
    """Return True if both slots of the match hold a participant."""
    return bool(match.get("p1")) and bool(match.get("p2"))
