"""Forms for the daily tournaments blueprint."""

from flask_wtf import FlaskForm
from wtforms import StringField
from wtforms.validators import Optional, Regexp

DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"


class LockFixtureForm(FlaskForm):
    """Payload for locking a fixture; defaults to today."""

    date = StringField(
        "Date",
        validators=[Optional(), Regexp(DATE_PATTERN, message="Use YYYY-MM-DD.")],
    )
