"""Per-fixture leaderboards built from the score ledger."""

from __future__ import annotations

from typing import TYPE_CHECKING, cast

from firebase_admin import firestore

from tourney.constants import DAILY_RESULTS_LIMIT, SCORES_COLLECTION
from tourney.user import UserDirectory

from .models import FixtureResults, Score, TopScore
from .services import DailyFixtureService
from .utils import day_bounds, parse_date, yesterday_utc

if TYPE_CHECKING:
    from google.cloud.firestore_v1.client import Client


def fetch_day_scores(db: Client, game: str, date: str) -> list[Score]:
    """Fetch every ledger entry for ``game`` created during the UTC day ``date``."""
    start, end = day_bounds(date)
    docs = (
        db.collection(SCORES_COLLECTION)
        .where(filter=firestore.FieldFilter("game", "==", game))
        .where(filter=firestore.FieldFilter("createdAt", ">=", start))
        .where(filter=firestore.FieldFilter("createdAt", "<=", end))
        .stream()
    )
    return [cast(Score, data) for data in (doc.to_dict() for doc in docs) if data]


def top_scores(
    scores: list[Score],
    participants: list[str],
    limit: int = DAILY_RESULTS_LIMIT,
) -> list[Score]:
    """Keep the participants' entries, highest score first, capped at ``limit``."""
    allowed = set(participants)
    entries = [s for s in scores if s.get("player") in allowed]
    entries.sort(key=lambda s: s.get("score", 0), reverse=True)
    return entries[:limit]


class ResultsAggregator:
    """Read-only leaderboards for a day's fixtures."""

    @staticmethod
    def get_results(
        date: str | None = None, db: Client | None = None
    ) -> list[FixtureResults]:
        """Return the top scores of each fixture held on ``date``.

        ``date`` defaults to yesterday (UTC); today is still open for joining.
        """
        if db is None:
            db = firestore.client()
        if date is None:
            date = yesterday_utc()
        else:
            parse_date(date)

        fixtures = DailyFixtureService.list_fixtures(date, db=db)
        results: list[FixtureResults] = []
        for fixture in fixtures:
            scores = fetch_day_scores(db, fixture["game"], date)
            best = top_scores(scores, fixture.get("participants") or [])
            identities = UserDirectory.lookup((s["player"] for s in best), db=db)

            top: list[TopScore] = []
            for entry in best:
                identity = identities.get(entry["player"])
                if identity is None:
                    continue
                top.append(
                    {
                        "user": entry["player"],
                        "name": identity["name"],
                        "email": identity["email"],
                        "score": entry["score"],
                    }
                )
            results.append(
                {
                    "date": date,
                    "slug": fixture["slug"],
                    "title": fixture["title"],
                    "game": fixture["game"],
                    "top": top,
                }
            )
        return results
