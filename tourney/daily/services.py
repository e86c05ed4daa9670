"""Service layer for the recurring daily fixtures."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, cast

from firebase_admin import firestore
from google.api_core.exceptions import AlreadyExists

from tourney.constants import DAILY_FIXTURES, DAILY_TOURNAMENTS_COLLECTION
from tourney.errors import AlreadyLocked, NotFoundError
from tourney.storage import mutate_document, snapshot_to_dict

from .models import DailyTournament, FixtureDefinition
from .utils import fixture_document_id, parse_date, today_utc

if TYPE_CHECKING:
    from google.cloud.firestore_v1.client import Client
    from google.cloud.firestore_v1.document import DocumentReference

logger = logging.getLogger(__name__)


def get_fixture_definition(slug: str) -> FixtureDefinition:
    """Return the static definition for ``slug`` or raise NotFoundError."""
    for definition in DAILY_FIXTURES:
        if definition["slug"] == slug:
            return cast(FixtureDefinition, definition)
    raise NotFoundError(f"Unknown daily tournament '{slug}'.")


def _fixture_ref(db: Client, date: str, slug: str) -> DocumentReference:
    return db.collection(DAILY_TOURNAMENTS_COLLECTION).document(
        fixture_document_id(date, slug)
    )


class DailyFixtureService:
    """Materializes and manages the fixed set of daily tournaments."""

    @staticmethod
    def ensure_today(today: str | None = None, db: Client | None = None) -> str:
        """Create any of today's fixtures that do not exist yet.

        Safe to call repeatedly and concurrently: losing a creation race to
        another caller counts as the fixture already existing.

        Returns:
            The UTC date the fixtures were ensured for.
        """
        if db is None:
            db = firestore.client()
        date = today or today_utc()

        for definition in DAILY_FIXTURES:
            ref = _fixture_ref(db, date, definition["slug"])
            if ref.get().exists:
                continue
            try:
                ref.create(
                    {
                        "date": date,
                        "slug": definition["slug"],
                        "title": definition["title"],
                        "game": definition["game"],
                        "participants": [],
                        "locked": False,
                        "results": [],
                        "createdAt": firestore.SERVER_TIMESTAMP,
                        "version": 0,
                    }
                )
                logger.info("Created daily fixture %s for %s", definition["slug"], date)
            except AlreadyExists:
                logger.info(
                    "Daily fixture %s for %s was created concurrently",
                    definition["slug"],
                    date,
                )
        return date

    @staticmethod
    def list_fixtures(date: str, db: Client | None = None) -> list[DailyTournament]:
        """Fetch the fixtures stored for ``date`` in definition order."""
        if db is None:
            db = firestore.client()
        docs = (
            db.collection(DAILY_TOURNAMENTS_COLLECTION)
            .where(filter=firestore.FieldFilter("date", "==", date))
            .stream()
        )
        fixtures = [data for data in (snapshot_to_dict(doc) for doc in docs) if data]
        order = {d["slug"]: i for i, d in enumerate(DAILY_FIXTURES)}
        fixtures.sort(
            key=lambda f: (order.get(f.get("slug"), len(order)), f.get("slug"))
        )
        return cast(list[DailyTournament], fixtures)

    @staticmethod
    def list_today(db: Client | None = None) -> list[DailyTournament]:
        """Ensure today's fixtures exist and return them."""
        if db is None:
            db = firestore.client()
        date = DailyFixtureService.ensure_today(db=db)
        return DailyFixtureService.list_fixtures(date, db=db)

    @staticmethod
    def join(slug: str, user_id: str, db: Client | None = None) -> DailyTournament:
        """Add ``user_id`` to today's ``slug`` fixture. Re-joining is a no-op."""
        if db is None:
            db = firestore.client()
        get_fixture_definition(slug)
        date = DailyFixtureService.ensure_today(db=db)

        def _join(data: dict[str, Any]) -> None:
            if data.get("locked"):
                raise AlreadyLocked()
            participants = list(data.get("participants") or [])
            if user_id not in participants:
                participants.append(user_id)
            data["participants"] = participants

        updated = mutate_document(
            db,
            _fixture_ref(db, date, slug),
            _join,
            not_found_message="Daily tournament not found.",
        )
        return cast(DailyTournament, updated)

    @staticmethod
    def lock(
        slug: str, date: str | None = None, db: Client | None = None
    ) -> DailyTournament:
        """Close a fixture to new participants. Locking twice is a no-op."""
        if db is None:
            db = firestore.client()
        get_fixture_definition(slug)
        if date is None:
            date = DailyFixtureService.ensure_today(db=db)
        else:
            parse_date(date)

        def _lock(data: dict[str, Any]) -> None:
            data["locked"] = True

        updated = mutate_document(
            db,
            _fixture_ref(db, date, slug),
            _lock,
            not_found_message="Daily tournament not found.",
        )
        logger.info("Locked daily fixture %s for %s", slug, date)
        return cast(DailyTournament, updated)
