"""Utility modules."""

from .persistence import PydanticPersistence

__all__ = ["PydanticPersistence"]
