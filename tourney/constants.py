"""Global constants for the tourney application."""

# Firestore collections
USERS_COLLECTION = "users"
TOURNAMENTS_COLLECTION = "tournaments"
DAILY_TOURNAMENTS_COLLECTION = "daily_tournaments"
SCORES_COLLECTION = "scores"

# Tournament lifecycle
STATUS_UPCOMING = "upcoming"
STATUS_RUNNING = "running"
STATUS_COMPLETED = "completed"
PUBLIC_STATUSES = [STATUS_UPCOMING, STATUS_RUNNING]

GAMES = ["bugSmasher", "memory", "sudoku", "tictactoe"]

MIN_PARTICIPANTS = 2

# Daily fixtures, materialized once per UTC day
DAILY_FIXTURES = [
    {"slug": "sprint", "title": "Daily Sprint", "game": "typeRacer"},
    {"slug": "brain", "title": "Daily Brain", "game": "mathSprint"},
]
DAILY_RESULTS_LIMIT = 10
DATE_FORMAT = "%Y-%m-%d"

# Optimistic concurrency
MAX_WRITE_ATTEMPTS = 5
VERSION_FIELD = "version"

UNKNOWN_PLAYER_NAME = "Unknown Player"
