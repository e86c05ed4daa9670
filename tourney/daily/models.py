"""Data models for daily fixtures and their results."""

from __future__ import annotations

from typing import Any, TypedDict

from tourney.core.types import FirestoreDocument


class FixtureDefinition(TypedDict):
    """A recurring daily tournament, materialized once per UTC day."""

    slug: str
    title: str
    game: str


class DailyTournament(FirestoreDocument, total=False):
    """One day's instance of a fixture."""

    date: str
    slug: str
    title: str
    game: str
    participants: list[str]
    locked: bool
    results: list[Any]


class Score(TypedDict, total=False):
    """An entry in the score ledger."""

    player: str
    game: str
    score: float
    season: str
    createdAt: Any


class TopScore(TypedDict):
    user: str
    name: str
    email: str | None
    score: float


class FixtureResults(TypedDict):
    date: str
    slug: str
    title: str
    game: str
    top: list[TopScore]
