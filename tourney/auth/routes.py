"""Routes for the auth blueprint."""

from firebase_admin import auth, firestore
from flask import current_app, jsonify, session
from flask_wtf.csrf import generate_csrf

from tourney.constants import USERS_COLLECTION
from tourney.errors import AuthorizationError, ValidationError
from tourney.user import User
from tourney.utils import json_body

from . import bp


@bp.route("/session_login", methods=["POST"])
def session_login():
    """
    Called from the client after a successful Firebase login.
    It receives the ID token, verifies it, and creates a server-side session.
    """
    id_token = json_body().get("idToken")
    if not id_token:
        raise ValidationError("idToken required")
    try:
        decoded_token = auth.verify_id_token(id_token)
    except (auth.InvalidIdTokenError, auth.ExpiredIdTokenError, ValueError) as e:
        current_app.logger.warning(f"Rejected ID token: {e}")
        raise AuthorizationError("Invalid token.") from e

    uid = decoded_token["uid"]
    db = firestore.client()
    user_doc = db.collection(USERS_COLLECTION).document(uid).get()
    if not user_doc.exists:
        raise AuthorizationError("User not found.")

    user_info: User = user_doc.to_dict() or {}
    session["user_id"] = uid
    session["is_admin"] = bool(user_info.get("isAdmin", False))
    return jsonify({"status": "success"})


@bp.route("/logout", methods=["POST"])
def logout():
    """Clear the server-side session."""
    session.clear()
    return jsonify({"status": "success"})


@bp.route("/csrf_token", methods=["GET"])
def csrf_token():
    """Issue a CSRF token for JSON clients to send as X-CSRFToken."""
    return jsonify({"csrfToken": generate_csrf()})
