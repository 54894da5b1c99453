"""Conflict-safe placement of resolved files."""

from .service import PlacementGuard

__all__ = ["PlacementGuard"]
