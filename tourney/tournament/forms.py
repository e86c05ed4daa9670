"""Forms for the tournament blueprint."""

from flask_wtf import FlaskForm
from wtforms import FloatField, IntegerField, SelectField, StringField
from wtforms.validators import DataRequired, Length, Optional

from tourney.constants import GAMES


class TournamentForm(FlaskForm):
    """Payload for creating a tournament."""

    name = StringField("Tournament Name", validators=[DataRequired(), Length(max=120)])

    game = SelectField(
        "Game",
        choices=[(game, game) for game in GAMES],
        validators=[DataRequired()],
    )

    season = IntegerField("Season", validators=[Optional()])


class ReportMatchForm(FlaskForm):
    """Payload for reporting a match result."""

    winnerId = StringField("Winner", validators=[Optional()])
    p1Score = FloatField("Player 1 Score", validators=[Optional()])
    p2Score = FloatField("Player 2 Score", validators=[Optional()])
