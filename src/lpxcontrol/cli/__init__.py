"""CLI package for lpxcontrol."""

from .main import cli

__all__ = ["cli"]
