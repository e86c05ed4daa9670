"""Custom exception classes for the application."""


class AppError(Exception):
    """Base application error class."""

    def __init__(self, message, status_code=400):
        """Initialize the error."""
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class ValidationError(AppError):
    """Raised when user input fails validation."""

    def __init__(self, message="Validation failed."):
        """Initialize the error."""
        super().__init__(message, 400)


class NotFoundError(AppError):
    """Raised when a resource is not found."""

    def __init__(self, message="Resource not found."):
        """Initialize the error."""
        super().__init__(message, 404)


class InvalidStateError(AppError):
    """Raised when an operation is illegal in the aggregate's current state."""

    def __init__(self, message="Operation not allowed in the current state."):
        """Initialize the error."""
        super().__init__(message, 409)


class AuthorizationError(AppError):
    """Raised when the caller is not authenticated or lacks a role."""

    def __init__(self, message="Authentication required.", status_code=401):
        """Initialize the error."""
        super().__init__(message, status_code)


class ConcurrencyError(AppError):
    """Raised when a document keeps changing underneath a write."""

    def __init__(self, message="The resource was modified concurrently."):
        """Initialize the error."""
        super().__init__(message, 409)


class InvalidParticipantCount(ValidationError):
    """Raised when a bracket is built from fewer than two participants."""

    def __init__(self, message="A bracket needs at least 2 participants."):
        """Initialize the error."""
        super().__init__(message)


class InsufficientParticipants(ValidationError):
    """Raised when a tournament is started with fewer than two participants."""

    def __init__(self, message="need at least 2 participants"):
        """Initialize the error."""
        super().__init__(message)


class InvalidWinner(ValidationError):
    """Raised when the reported winner is not in the match."""

    def __init__(self, message="winner must be p1 or p2"):
        """Initialize the error."""
        super().__init__(message)


class MatchNotFound(NotFoundError):
    """Raised when a round or match index does not resolve."""

    def __init__(self, message="invalid match"):
        """Initialize the error."""
        super().__init__(message)


class InvalidRound(NotFoundError):
    """Raised when advancing a round that does not exist."""

    def __init__(self, message="invalid round"):
        """Initialize the error."""
        super().__init__(message)


class MatchAlreadyDecided(InvalidStateError):
    """Raised when reporting a match that already has a winner."""

    def __init__(self, message="match already decided"):
        """Initialize the error."""
        super().__init__(message)


class NotAllDecided(InvalidStateError):
    """Raised when advancing a round with contested matches still pending."""

    def __init__(self, message="not all matches decided"):
        """Initialize the error."""
        super().__init__(message)


class AlreadyLocked(InvalidStateError):
    """Raised when joining a daily fixture that has been locked."""

    def __init__(self, message="tournament locked for today"):
        """Initialize the error."""
        super().__init__(message)
