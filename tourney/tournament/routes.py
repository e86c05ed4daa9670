"""Routes for the tournament blueprint."""

from __future__ import annotations

from typing import Any

from firebase_admin import firestore
from flask import jsonify, request, session

from tourney.auth.decorators import login_required, require_admin
from tourney.errors import ValidationError
from tourney.utils import json_body, json_formdata, validate_form

from . import bp
from .forms import ReportMatchForm, TournamentForm
from .services import TournamentService


def _participant_ids(payload: dict[str, Any], required: bool) -> list[str] | None:
    ids = payload.get("participantIds")
    if ids is None and not required:
        return None
    if not isinstance(ids, list) or not all(
        isinstance(pid, str) or pid is None for pid in ids
    ):
        raise ValidationError("participantIds array required")
    return ids


@bp.route("", methods=["GET"])
@login_required
def list_tournaments() -> Any:
    """List tournaments: the public summary, or everything for admins."""
    db = firestore.client()
    if "public" in request.args:
        return jsonify(TournamentService.list_public_tournaments(db=db))
    require_admin()
    return jsonify(TournamentService.list_tournaments(db=db))


@bp.route("", methods=["POST"])
@login_required(admin_required=True)
def create_tournament() -> Any:
    """Create a new tournament."""
    form = TournamentForm(formdata=json_formdata())
    validate_form(form)
    db = firestore.client()
    tournament = TournamentService.create_tournament(
        name=form.name.data,
        game=form.game.data,
        season=form.season.data,
        created_by=session.get("user_id"),
        db=db,
    )
    return jsonify(tournament), 201


@bp.route("/<string:tournament_id>", methods=["GET"])
@login_required
def view_tournament(tournament_id: str) -> Any:
    """View a single tournament with display identities."""
    db = firestore.client()
    return jsonify(TournamentService.get_resolved_tournament(tournament_id, db=db))


@bp.route("/<string:tournament_id>/participants", methods=["POST"])
@login_required(admin_required=True)
def add_participants(tournament_id: str) -> Any:
    """Add participants to an upcoming tournament."""
    participant_ids = _participant_ids(json_body(), required=True)
    db = firestore.client()
    return jsonify(
        TournamentService.add_participants(tournament_id, participant_ids, db=db)
    )


@bp.route("/<string:tournament_id>/start", methods=["POST"])
@login_required(admin_required=True)
def start_tournament(tournament_id: str) -> Any:
    """Seed the bracket and start the tournament."""
    participant_ids = _participant_ids(json_body(), required=False)
    db = firestore.client()
    return jsonify(
        TournamentService.start_tournament(tournament_id, participant_ids, db=db)
    )


@bp.route("/<string:tournament_id>/join", methods=["POST"])
@login_required
def join_tournament(tournament_id: str) -> Any:
    """Join an upcoming tournament as the current user."""
    db = firestore.client()
    TournamentService.join_tournament(tournament_id, session["user_id"], db=db)
    return jsonify({"ok": True})


@bp.route(
    "/<string:tournament_id>/rounds/<int:round_index>/matches/<int:match_index>",
    methods=["POST"],
)
@login_required(admin_required=True)
def report_match(tournament_id: str, round_index: int, match_index: int) -> Any:
    """Report the result of a match."""
    form = ReportMatchForm(formdata=json_formdata())
    validate_form(form)
    db = firestore.client()
    TournamentService.report_match(
        tournament_id,
        round_index,
        match_index,
        winner_id=form.winnerId.data or None,
        p1_score=form.p1Score.data,
        p2_score=form.p2Score.data,
        db=db,
    )
    return jsonify({"ok": True})


@bp.route("/<string:tournament_id>/rounds/<int:round_index>/advance", methods=["POST"])
@login_required(admin_required=True)
def advance_round(tournament_id: str, round_index: int) -> Any:
    """Advance the winners of a round."""
    db = firestore.client()
    return jsonify(TournamentService.advance_round(tournament_id, round_index, db=db))
