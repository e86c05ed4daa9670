"""Routes for the daily tournaments blueprint."""

from __future__ import annotations

from typing import Any

from firebase_admin import firestore
from flask import jsonify, request, session

from tourney.auth.decorators import login_required
from tourney.utils import json_formdata, validate_form

from . import bp
from .forms import LockFixtureForm
from .results import ResultsAggregator
from .services import DailyFixtureService


@bp.route("", methods=["GET"])
@login_required
def list_daily() -> Any:
    """List today's fixtures, creating them on first access."""
    db = firestore.client()
    fixtures = DailyFixtureService.list_today(db=db)
    return jsonify(
        [
            {
                "id": f["id"],
                "date": f.get("date"),
                "slug": f.get("slug"),
                "title": f.get("title"),
                "game": f.get("game"),
                "participants": f.get("participants", []),
                "locked": f.get("locked", False),
            }
            for f in fixtures
        ]
    )


@bp.route("/<string:slug>/join", methods=["POST"])
@login_required
def join_daily(slug: str) -> Any:
    """Join today's fixture as the current user."""
    db = firestore.client()
    DailyFixtureService.join(slug, session["user_id"], db=db)
    return jsonify({"ok": True})


@bp.route("/<string:slug>/lock", methods=["POST"])
@login_required(admin_required=True)
def lock_daily(slug: str) -> Any:
    """Close a fixture to new participants."""
    form = LockFixtureForm(formdata=json_formdata())
    validate_form(form)
    db = firestore.client()
    fixture = DailyFixtureService.lock(slug, date=form.date.data or None, db=db)
    return jsonify(fixture)


@bp.route("/results", methods=["GET"])
@login_required
def daily_results() -> Any:
    """Top scores per fixture for a day, yesterday by default."""
    db = firestore.client()
    date = request.args.get("date") or None
    return jsonify(ResultsAggregator.get_results(date, db=db))
