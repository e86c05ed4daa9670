"""Core module for the tourney application."""

from .types import FirestoreDocument

__all__ = ["FirestoreDocument"]
