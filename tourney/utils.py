"""Utility functions for the application."""

from __future__ import annotations

from typing import Any

from flask import request
from werkzeug.datastructures import ImmutableMultiDict

from .errors import ValidationError


def json_body() -> dict[str, Any]:
    """Return the JSON object sent with the request, or an empty dict."""
    payload = request.get_json(silent=True)
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object.")
    return payload


def json_formdata() -> ImmutableMultiDict:
    """Expose the scalar, non-null JSON fields as form data for WTForms."""
    return ImmutableMultiDict(
        {
            key: value
            for key, value in json_body().items()
            if value is not None and not isinstance(value, (list, dict))
        }
    )


def validate_form(form: Any) -> None:
    """Raise ValidationError with every field error if ``form`` is invalid."""
    if form.validate_on_submit():
        return
    messages = [
        f"{name}: {error}"
        for name, errors in form.errors.items()
        for error in errors
    ]
    raise ValidationError("; ".join(messages) or "Validation failed.")
