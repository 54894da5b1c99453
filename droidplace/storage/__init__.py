"""Project tree abstraction for droidplace."""

from .interface import ProjectTree
from .local import LocalProjectTree

__all__ = ["ProjectTree", "LocalProjectTree"]
