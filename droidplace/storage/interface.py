"""
Project tree interface.

Defines the abstract access the engine needs to an Android project: read-only
probing for the classification pipeline, and the two mutating operations the
placement guard relies on. The host application (an IDE, a CLI) supplies the
implementation.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator
from pathlib import Path


class ProjectTree(ABC):
    """Abstract view of a project's file tree."""

    @property
    @abstractmethod
    def root(self) -> Path:
        """Root directory of the project."""
        ...

    @abstractmethod
    def exists(self, relative_path: str) -> bool:
        """Check whether a file or directory exists.

        Args:
            relative_path: Project-relative path.

        Returns:
            True if something exists at the path, False otherwise.
        """
        ...

    @abstractmethod
    def is_dir(self, relative_path: str) -> bool:
        """Check whether a directory exists at the path."""
        ...

    @abstractmethod
    def read_text(self, relative_path: str) -> str:
        """Read a text file.

        Args:
            relative_path: Project-relative path of the file.

        Returns:
            The decoded file content.

        Raises:
            ProbeError: If the file is missing, unreadable or undecodable.
        """
        ...

    @abstractmethod
    def iter_files(
        self, relative_dir: str, suffixes: Iterable[str] | None = None
    ) -> Iterator[str]:
        """Walk files below a directory in a deterministic order.

        Directories are visited depth-first with entries sorted by name.
        A missing directory yields nothing.

        Args:
            relative_dir: Project-relative directory to walk.
            suffixes: Optional file suffixes (e.g. ".kt") to keep.

        Yields:
            Project-relative paths of matching files.
        """
        ...

    @abstractmethod
    async def ensure_directory(self, relative_dir: str) -> None:
        """Create a directory and its parents if missing.

        Raises:
            PlacementError: If the directory cannot be created.
        """
        ...

    @abstractmethod
    async def create_file(self, relative_path: str, content: str) -> None:
        """Atomically create a new file; never overwrites.

        The content becomes visible in one step or not at all.

        Raises:
            FileExistsError: If a file already exists at the path.
            PlacementError: If the file cannot be written.
        """
        ...

    @staticmethod
    def normalize_relative_path(path: str) -> str:
        """Normalize a caller-supplied path to project-relative form.

        Converts backslashes, drops leading slashes, empty, "." and ".."
        segments and drive colons, so the result stays inside the project.

        Args:
            path: Raw path text.

        Returns:
            A "/"-separated relative path, possibly empty.
        """
        segments = []
        for segment in path.replace("\\", "/").split("/"):
            segment = segment.replace(":", "").strip()
            if segment in ("", ".", ".."):
                continue
            segments.append(segment)
        return "/".join(segments)

    @staticmethod
    def join(*parts: str) -> str:
        """Join project-relative path fragments, skipping empty ones."""
        return "/".join(part.strip("/") for part in parts if part and part.strip("/"))
