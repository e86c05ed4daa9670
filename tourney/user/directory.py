"""Batched lookups against the users collection."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Any, cast

from firebase_admin import firestore

from tourney.constants import UNKNOWN_PLAYER_NAME, USERS_COLLECTION

from .models import UserIdentity

if TYPE_CHECKING:
    from google.cloud.firestore_v1.base_document import DocumentSnapshot
    from google.cloud.firestore_v1.client import Client


def display_name(user: dict[str, Any]) -> str:
    """Return the name to show for a user."""
    return user.get("name") or user.get("username") or UNKNOWN_PLAYER_NAME


class UserDirectory:
    """Resolves user ids to ``{name, email}``."""

    @staticmethod
    def lookup(
        user_ids: Iterable[str | None], db: Client | None = None
    ) -> dict[str, UserIdentity]:
        """Fetch display identities for ``user_ids`` in one round-trip.

        Null ids are skipped and ids without a user document are left out of
        the returned map.
        """
        if db is None:
            db = firestore.client()
        unique_ids = list(dict.fromkeys(uid for uid in user_ids if uid))
        if not unique_ids:
            return {}

        refs = [db.collection(USERS_COLLECTION).document(uid) for uid in unique_ids]
        user_docs = cast(list["DocumentSnapshot"], db.get_all(refs))
        identities: dict[str, UserIdentity] = {}
        for doc in user_docs:
            if not doc.exists:
                continue
            data = doc.to_dict() or {}
            identities[doc.id] = {
                "name": display_name(data),
                "email": data.get("email"),
            }
        return identities
