"""
Local filesystem project tree.

Filesystem-backed implementation of ProjectTree. Probes are synchronous
pathlib reads; writes go through aiofiles and publish a fully written
temporary file with a hard link, which refuses to replace an existing file.
"""

from __future__ import annotations

import errno
import os
import uuid
from collections.abc import Iterable, Iterator
from pathlib import Path

import aiofiles
import aiofiles.os

from ..core.exceptions import PlacementError, ProbeError
from ..core.logging import get_logger
from .interface import ProjectTree

logger = get_logger(__name__)

# Filesystems without hard links fall back to an exclusive create
_NO_LINK_ERRNOS = {errno.EPERM, errno.EXDEV, errno.ENOTSUP, errno.EOPNOTSUPP, errno.EMLINK}


class LocalProjectTree(ProjectTree):
    """Project tree rooted at a local directory."""

    def __init__(self, root: Path, encoding: str = "utf-8") -> None:
        """Initialize the tree.

        Args:
            root: Project root directory
            encoding: Text encoding for reads and writes
        """
        self._root = Path(root).resolve()
        self.encoding = encoding

    @property
    def root(self) -> Path:
        return self._root

    def _get_full_path(self, relative_path: str) -> Path:
        """Map a project-relative path onto the filesystem.

        Args:
            relative_path: The project-relative path.

        Returns:
            An absolute path inside the project root.
        """
        clean = self.normalize_relative_path(relative_path)
        full_path = (self._root / clean).resolve() if clean else self._root

        # Symlinks may still point outside the project
        try:
            full_path.relative_to(self._root)
        except ValueError:
            full_path = self._root / clean.replace("/", "_")

        return full_path

    def get_local_path(self, relative_path: str) -> Path:
        """Absolute filesystem path for a project-relative path."""
        return self._get_full_path(relative_path)

    def exists(self, relative_path: str) -> bool:
        return self._get_full_path(relative_path).exists()

    def is_dir(self, relative_path: str) -> bool:
        return self._get_full_path(relative_path).is_dir()

    def read_text(self, relative_path: str) -> str:
        full_path = self._get_full_path(relative_path)
        try:
            return full_path.read_text(encoding=self.encoding)
        except (OSError, UnicodeDecodeError) as e:
            raise ProbeError(
                message="Unable to read file",
                relative_path=relative_path,
                cause=e,
            ) from e

    def iter_files(
        self, relative_dir: str, suffixes: Iterable[str] | None = None
    ) -> Iterator[str]:
        top = self._get_full_path(relative_dir)
        if not top.is_dir():
            return
        wanted = tuple(suffixes) if suffixes else None

        for dirpath, dirnames, filenames in os.walk(top):
            dirnames.sort()
            for filename in sorted(filenames):
                if wanted and not filename.endswith(wanted):
                    continue
                full_path = Path(dirpath) / filename
                yield full_path.relative_to(self._root).as_posix()

    async def ensure_directory(self, relative_dir: str) -> None:
        full_path = self._get_full_path(relative_dir)
        try:
            await aiofiles.os.makedirs(full_path, exist_ok=True)
        except OSError as e:
            raise PlacementError(
                message="Unable to create directory",
                target_path=relative_dir,
                operation="mkdir",
                cause=e,
            ) from e

    async def create_file(self, relative_path: str, content: str) -> None:
        target = self._get_full_path(relative_path)
        temp = target.with_name(f".{target.name}.{uuid.uuid4().hex}.tmp")

        try:
            async with aiofiles.open(temp, "w", encoding=self.encoding, newline="") as f:
                await f.write(content)
            await aiofiles.os.link(temp, target)
        except FileExistsError:
            raise
        except OSError as e:
            if e.errno in _NO_LINK_ERRNOS and temp.exists():
                await self._create_exclusive(target, relative_path, content)
                return
            raise PlacementError(
                message="Unable to write file",
                target_path=relative_path,
                operation="write",
                cause=e,
            ) from e
        except UnicodeEncodeError as e:
            raise PlacementError(
                message=f"Content cannot be encoded as {self.encoding}",
                target_path=relative_path,
                operation="write",
                cause=e,
            ) from e
        finally:
            if temp.exists():
                await aiofiles.os.remove(temp)

    async def _create_exclusive(self, target: Path, relative_path: str, content: str) -> None:
        """Create the target with O_EXCL and remove it again if the write fails."""
        logger.debug("Hard links unavailable, using exclusive create", path=relative_path)
        try:
            async with aiofiles.open(target, "x", encoding=self.encoding, newline="") as f:
                await f.write(content)
        except FileExistsError:
            raise
        except (OSError, UnicodeEncodeError) as e:
            if target.exists():
                await aiofiles.os.remove(target)
            raise PlacementError(
                message="Unable to write file",
                target_path=relative_path,
                operation="write",
                cause=e,
            ) from e
