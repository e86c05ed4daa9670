"""Utility functions for tournament presentation."""

from __future__ import annotations

import copy
from typing import TYPE_CHECKING, Any

from tourney.user import UserDirectory

if TYPE_CHECKING:
    from google.cloud.firestore_v1.client import Client

    from tourney.user import UserIdentity


def _identity(
    user_id: str | None, identities: dict[str, UserIdentity]
) -> dict[str, Any] | None:
    if not user_id:
        return None
    found = identities.get(user_id)
    return {
        "id": user_id,
        "name": found["name"] if found else None,
        "email": found["email"] if found else None,
    }


def collect_user_ids(tournament: dict[str, Any]) -> set[str]:
    """Every user id referenced by the participants list or any match slot."""
    user_ids = set(tournament.get("participants") or [])
    for rnd in tournament.get("rounds") or []:
        for match in rnd.get("matches") or []:
            for slot in ("p1", "p2", "winner"):
                if match.get(slot):
                    user_ids.add(match[slot])
    return user_ids


def resolve_tournament(db: Client, tournament: dict[str, Any]) -> dict[str, Any]:
    """Replace user ids in a tournament with ``{id, name, email}`` identities."""
    identities = UserDirectory.lookup(collect_user_ids(tournament), db=db)
    resolved = copy.deepcopy(tournament)
    resolved["participants"] = [
        _identity(uid, identities) for uid in tournament.get("participants") or []
    ]
    for rnd in resolved.get("rounds") or []:
        for match in rnd.get("matches") or []:
            for slot in ("p1", "p2", "winner"):
                match[slot] = _identity(match.get(slot), identities)

    champion = (resolved.get("results") or {}).get("champion")
    if champion:
        resolved["results"]["champion"] = _identity(champion, identities)
    return resolved
