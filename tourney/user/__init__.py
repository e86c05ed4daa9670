"""User directory: resolves user ids to display identities."""

from .directory import UserDirectory
from .models import User, UserIdentity

__all__ = ["User", "UserDirectory", "UserIdentity"]
