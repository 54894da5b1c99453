"""Path resolution for candidate files."""

from .service import PathResolver

__all__ = ["PathResolver"]
