"""Service layer for tournament business logic."""

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING, Any, cast

from firebase_admin import firestore

from tourney.constants import (
    GAMES,
    MIN_PARTICIPANTS,
    PUBLIC_STATUSES,
    STATUS_COMPLETED,
    STATUS_RUNNING,
    STATUS_UPCOMING,
    TOURNAMENTS_COLLECTION,
)
from tourney.errors import (
    InsufficientParticipants,
    InvalidRound,
    InvalidStateError,
    InvalidWinner,
    MatchAlreadyDecided,
    MatchNotFound,
    NotAllDecided,
    NotFoundError,
    ValidationError,
)
from tourney.storage import mutate_document, snapshot_to_dict

from .bracket import build_bracket, dedupe_participants, pair_slots
from .models import PublicTournament, Tournament, is_contested
from .utils import resolve_tournament

if TYPE_CHECKING:
    from google.cloud.firestore_v1.client import Client
    from google.cloud.firestore_v1.document import DocumentReference

logger = logging.getLogger(__name__)


def _tournament_ref(db: Client, tournament_id: str) -> DocumentReference:
    return db.collection(TOURNAMENTS_COLLECTION).document(tournament_id)


def _require_status(data: dict[str, Any], status: str, message: str) -> None:
    if data.get("status") != status:
        raise InvalidStateError(message)


def _get_match(data: dict[str, Any], round_index: int, match_index: int) -> dict:
    rounds = data.get("rounds") or []
    if not 0 <= round_index < len(rounds):
        raise MatchNotFound()
    matches = rounds[round_index].get("matches") or []
    if not 0 <= match_index < len(matches):
        raise MatchNotFound()
    return matches[match_index]


def _round_winners(matches: list[dict[str, Any]]) -> list[str]:
    """Return each match's survivor in match order; byes carry their player."""
    winners = []
    for match in matches:
        survivor = match.get("winner") or match.get("p1") or match.get("p2")
        if survivor:
            winners.append(survivor)
    return winners


class TournamentService:
    """Handles the single-elimination tournament lifecycle."""

    @staticmethod
    def create_tournament(
        name: str,
        game: str,
        season: int | None = None,
        created_by: str | None = None,
        db: Client | None = None,
    ) -> Tournament:
        """Create an upcoming tournament with no participants."""
        if db is None:
            db = firestore.client()
        if not name or not game:
            raise ValidationError("name and game required")
        if game not in GAMES:
            raise ValidationError(f"game must be one of {', '.join(GAMES)}")

        payload = {
            "name": name,
            "game": game,
            "season": season,
            "status": STATUS_UPCOMING,
            "participants": [],
            "rounds": [],
            "currentRound": 0,
            "bracketSize": 0,
            "results": {},
            "createdBy": created_by,
            "createdAt": firestore.SERVER_TIMESTAMP,
            "version": 0,
        }
        _, ref = db.collection(TOURNAMENTS_COLLECTION).add(payload)
        logger.info("Created tournament %s (%s)", ref.id, name)
        return TournamentService.get_tournament(ref.id, db=db)

    @staticmethod
    def list_tournaments(db: Client | None = None) -> list[Tournament]:
        """Fetch every tournament, newest first."""
        if db is None:
            db = firestore.client()
        docs = (
            db.collection(TOURNAMENTS_COLLECTION)
            .order_by("createdAt", direction=firestore.Query.DESCENDING)
            .stream()
        )
        return [
            cast(Tournament, data)
            for data in (snapshot_to_dict(doc) for doc in docs)
            if data
        ]

    @staticmethod
    def list_public_tournaments(db: Client | None = None) -> list[PublicTournament]:
        """Fetch the name, status and game of upcoming and running tournaments."""
        if db is None:
            db = firestore.client()
        docs = (
            db.collection(TOURNAMENTS_COLLECTION)
            .where(filter=firestore.FieldFilter("status", "in", PUBLIC_STATUSES))
            .order_by("createdAt", direction=firestore.Query.DESCENDING)
            .stream()
        )
        public = []
        for doc in docs:
            data = doc.to_dict()
            if data:
                public.append(
                    {
                        "id": doc.id,
                        "name": data.get("name"),
                        "status": data.get("status"),
                        "game": data.get("game"),
                    }
                )
        return cast(list[PublicTournament], public)

    @staticmethod
    def get_tournament(tournament_id: str, db: Client | None = None) -> Tournament:
        """Fetch a tournament or raise NotFoundError."""
        if db is None:
            db = firestore.client()
        data = snapshot_to_dict(_tournament_ref(db, tournament_id).get())
        if data is None:
            raise NotFoundError("Tournament not found.")
        return cast(Tournament, data)

    @staticmethod
    def get_resolved_tournament(
        tournament_id: str, db: Client | None = None
    ) -> dict[str, Any]:
        """Fetch a tournament with participants and match slots as identities."""
        if db is None:
            db = firestore.client()
        tournament = TournamentService.get_tournament(tournament_id, db=db)
        return resolve_tournament(db, tournament)

    @staticmethod
    def add_participants(
        tournament_id: str, participant_ids: list[str], db: Client | None = None
    ) -> Tournament:
        """Merge ``participant_ids`` into an upcoming tournament's participants."""
        if db is None:
            db = firestore.client()
        if not isinstance(participant_ids, list):
            raise ValidationError("participantIds array required")

        def _add(data: dict[str, Any]) -> None:
            _require_status(
                data, STATUS_UPCOMING, "cannot add participants after start"
            )
            data["participants"] = dedupe_participants(
                list(data.get("participants") or []) + participant_ids
            )

        updated = mutate_document(
            db,
            _tournament_ref(db, tournament_id),
            _add,
            not_found_message="Tournament not found.",
        )
        return cast(Tournament, updated)

    @staticmethod
    def join_tournament(
        tournament_id: str, user_id: str, db: Client | None = None
    ) -> None:
        """Enroll ``user_id`` in an upcoming tournament. Re-joining is a no-op."""
        if db is None:
            db = firestore.client()

        def _join(data: dict[str, Any]) -> None:
            _require_status(data, STATUS_UPCOMING, "tournament already started")
            data["participants"] = dedupe_participants(
                list(data.get("participants") or []) + [user_id]
            )

        mutate_document(
            db,
            _tournament_ref(db, tournament_id),
            _join,
            not_found_message="Tournament not found.",
        )

    @staticmethod
    def start_tournament(
        tournament_id: str,
        participant_ids: list[str] | None = None,
        rng: random.Random | None = None,
        db: Client | None = None,
    ) -> Tournament:
        """Seed the bracket and move the tournament from upcoming to running.

        A non-empty ``participant_ids`` replaces the enrolled participants as
        the seeding list.
        """
        if db is None:
            db = firestore.client()

        def _start(data: dict[str, Any]) -> None:
            _require_status(data, STATUS_UPCOMING, "tournament already started")
            seeding = participant_ids or data.get("participants") or []
            if len(dedupe_participants(seeding)) < MIN_PARTICIPANTS:
                raise InsufficientParticipants()

            bracket = build_bracket(seeding, rng=rng)
            data["rounds"] = [{"matches": bracket.matches}]
            data["bracketSize"] = bracket.bracket_size
            data["currentRound"] = 0
            data["status"] = STATUS_RUNNING

        updated = mutate_document(
            db,
            _tournament_ref(db, tournament_id),
            _start,
            not_found_message="Tournament not found.",
        )
        logger.info(
            "Started tournament %s with bracket size %s",
            tournament_id,
            updated["bracketSize"],
        )
        return cast(Tournament, updated)

    @staticmethod
    def report_match(  # noqa: PLR0913
        tournament_id: str,
        round_index: int,
        match_index: int,
        winner_id: str | None = None,
        p1_score: float | None = None,
        p2_score: float | None = None,
        db: Client | None = None,
    ) -> Tournament:
        """Record the outcome of one match.

        Without an explicit winner the higher score wins. Equal scores leave
        the match pending.
        """
        if db is None:
            db = firestore.client()

        def _report(data: dict[str, Any]) -> None:
            match = _get_match(data, round_index, match_index)
            if match.get("winner"):
                raise MatchAlreadyDecided()
            if winner_id and winner_id not in (match.get("p1"), match.get("p2")):
                raise InvalidWinner()

            if p1_score is not None:
                match["p1Score"] = p1_score
            if p2_score is not None:
                match["p2Score"] = p2_score

            if winner_id:
                match["winner"] = winner_id
                return
            s1 = match.get("p1Score") or 0
            s2 = match.get("p2Score") or 0
            if s1 > s2:
                match["winner"] = match.get("p1")
            elif s2 > s1:
                match["winner"] = match.get("p2")
            else:
                match["winner"] = None

        updated = mutate_document(
            db,
            _tournament_ref(db, tournament_id),
            _report,
            not_found_message="Tournament not found.",
        )
        return cast(Tournament, updated)

    @staticmethod
    def advance_round(
        tournament_id: str, round_index: int, db: Client | None = None
    ) -> Tournament:
        """Pair the winners of ``round_index`` into the next round.

        When a single winner remains the tournament is completed instead and
        that winner is recorded as champion.
        """
        if db is None:
            db = firestore.client()

        def _advance(data: dict[str, Any]) -> None:
            rounds = data.get("rounds") or []
            if not 0 <= round_index < len(rounds):
                raise InvalidRound()
            _require_status(data, STATUS_RUNNING, "tournament is not running")
            if round_index != len(rounds) - 1:
                raise InvalidStateError("round already advanced")

            matches = rounds[round_index].get("matches") or []
            if any(is_contested(m) and not m.get("winner") for m in matches):
                raise NotAllDecided()

            winners = _round_winners(matches)
            if len(winners) == 1:
                data["status"] = STATUS_COMPLETED
                data["currentRound"] = round_index
                data["results"] = {"champion": winners[0]}
                return

            next_round = {"matches": pair_slots(list(winners))}
            for match in next_round["matches"]:
                match["winner"] = None
            data["rounds"] = rounds + [next_round]
            data["currentRound"] = round_index + 1

        updated = mutate_document(
            db,
            _tournament_ref(db, tournament_id),
            _advance,
            not_found_message="Tournament not found.",
        )
        if updated["status"] == STATUS_COMPLETED:
            logger.info(
                "Tournament %s completed, champion %s",
                tournament_id,
                updated["results"]["champion"],
            )
        return cast(Tournament, updated)
