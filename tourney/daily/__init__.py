"""Daily tournaments blueprint."""

from flask import Blueprint

bp = Blueprint("daily", __name__, url_prefix="/tournaments/daily")

from . import routes  # noqa: E402, F401
from .results import ResultsAggregator  # noqa: E402
from .services import DailyFixtureService  # noqa: E402

__all__ = ["DailyFixtureService", "ResultsAggregator", "routes"]
