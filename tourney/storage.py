"""Versioned read-modify-write of a single Firestore document.

Every aggregate document carries an integer ``version``. A mutation reads the
document, applies a pure function to a copy of its data and commits only if
nobody else has committed in between. A lost race re-reads and re-applies the
mutation, so the mutation's own checks always run against the latest state.
"""

from __future__ import annotations

import copy
import datetime
import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, cast

from firebase_admin import firestore

from .constants import MAX_WRITE_ATTEMPTS, VERSION_FIELD
from .errors import ConcurrencyError, NotFoundError

if TYPE_CHECKING:
    from google.cloud.firestore_v1.base_document import DocumentSnapshot
    from google.cloud.firestore_v1.client import Client
    from google.cloud.firestore_v1.document import DocumentReference
    from google.cloud.firestore_v1.transaction import Transaction

logger = logging.getLogger(__name__)

Mutator = Callable[[dict[str, Any]], Any]


class VersionConflictError(Exception):
    """The document version changed between read and commit."""


def snapshot_to_dict(snapshot: Any) -> dict[str, Any] | None:
    """Return the document data with its id, or None if it does not exist."""
    if not snapshot.exists:
        return None
    data = snapshot.to_dict()
    if data is None:
        return None
    data["id"] = snapshot.id
    return data


def _commit_if_unchanged(
    transaction: Transaction,
    ref: DocumentReference,
    expected_version: int,
    data: dict[str, Any],
) -> None:
    """Write ``data`` only if the stored version is still ``expected_version``."""
    snapshot = cast("DocumentSnapshot", ref.get(transaction=transaction))
    current = (snapshot.to_dict() or {}) if snapshot.exists else None
    if current is None:
        raise NotFoundError(f"Document {ref.id} no longer exists.")
    if current.get(VERSION_FIELD, 0) != expected_version:
        raise VersionConflictError(ref.id)
    transaction.set(ref, data)


def mutate_document(
    db: Client,
    ref: DocumentReference,
    mutator: Mutator,
    not_found_message: str = "not found",
    max_attempts: int = MAX_WRITE_ATTEMPTS,
) -> dict[str, Any]:
    """Apply ``mutator`` to the document behind ``ref`` and persist the result.

    The mutator receives a deep copy of the stored data and edits it in place.
    Any exception it raises aborts the write, leaving the document untouched.

    Returns:
        The committed document data, including ``id`` and the new ``version``.

    Raises:
        NotFoundError: If the document does not exist.
        ConcurrencyError: If every attempt lost a race with another writer.
    """
    for attempt in range(1, max_attempts + 1):
        snapshot = cast("DocumentSnapshot", ref.get())
        stored = snapshot.to_dict() if snapshot.exists else None
        if stored is None:
            raise NotFoundError(not_found_message)

        version = stored.get(VERSION_FIELD, 0)
        data = copy.deepcopy(stored)
        mutator(data)
        data[VERSION_FIELD] = version + 1
        data["updatedAt"] = datetime.datetime.now(datetime.timezone.utc)

        commit = firestore.transactional(_commit_if_unchanged)
        try:
            commit(db.transaction(), ref, version, data)
        except VersionConflictError:
            logger.warning(
                "Version conflict on %s (attempt %d/%d)", ref.id, attempt, max_attempts
            )
            continue

        data["id"] = ref.id
        return data

    raise ConcurrencyError(
        "The resource was modified concurrently. Please try again."
    )
