"""Data models for users."""

from __future__ import annotations

from typing import TypedDict

from tourney.core.types import FirestoreDocument


class User(FirestoreDocument, total=False):
    """A user document in Firestore."""

    email: str
    username: str
    name: str
    isAdmin: bool


class UserIdentity(TypedDict):
    """The public display identity of a user."""

    name: str
    email: str | None
