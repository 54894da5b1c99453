"""
Placement Guard.

Writes a resolved file exactly once and never over an existing one:

    resolved -> directory ensured -> existence check -> written | skipped_existing

A directory that cannot be created ends in ``failed`` without writing.
Placements to the same target are serialized so two concurrent calls cannot
both pass the existence check.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from ...core.config import PlacementConfig
from ...core.exceptions import PlacementError
from ...core.logging import get_logger
from ...core.types import PlacementOutcome
from ...models.artifact import FileMetadata, PlacementDecision
from ...storage.interface import ProjectTree

logger = get_logger(__name__)


class PlacementGuard:
    """Enforces the no-clobber policy and performs the write."""

    def __init__(self, tree: ProjectTree, config: PlacementConfig | None = None) -> None:
        """Initialize the guard.

        Args:
            tree: Project tree that receives the files.
            config: Placement policy (language markers, encoding).
        """
        self.tree = tree
        self.config = config or PlacementConfig()
        # Per-path lock and the number of placements holding or awaiting it
        self._locks: dict[str, tuple[asyncio.Lock, int]] = {}

    @asynccontextmanager
    async def _serialized(self, relative_path: str) -> AsyncIterator[None]:
        """Hold the lock for a target path; the entry is dropped by its last user."""
        lock, users = self._locks.get(relative_path, (None, 0))
        if lock is None:
            lock = asyncio.Lock()
        self._locks[relative_path] = (lock, users + 1)
        try:
            async with lock:
                yield
        finally:
            _, users = self._locks[relative_path]
            if users == 1:
                del self._locks[relative_path]
            else:
                self._locks[relative_path] = (lock, users - 1)

    def strip_language_marker(self, content: str) -> str:
        """Drop a bare language token (e.g. "kotlin") on the first line.

        Everything after the marker line is kept byte for byte.
        """
        first_line, _, rest = content.partition("\n")
        if first_line.strip().lower() in self.config.language_markers:
            return rest
        return content

    async def place(self, decision: PlacementDecision, content: str) -> PlacementOutcome:
        """Write content at the decision's target unless something is already there.

        Args:
            decision: The resolved placement.
            content: File content; a leading language-marker line is stripped.

        Returns:
            written, skipped_existing or failed.
        """
        target = decision.relative_path
        if decision.conflicts_existing:
            logger.info("Target already exists, skipping", path=target)
            return PlacementOutcome.skipped_existing(target)

        async with self._serialized(target):
            try:
                await self.tree.ensure_directory(decision.directory_path)
            except PlacementError as e:
                logger.error("Directory creation failed", path=decision.directory_path, error=str(e))
                return PlacementOutcome.failed(str(e), target)

            if self.tree.exists(target):
                logger.info("Target already exists, skipping", path=target)
                return PlacementOutcome.skipped_existing(target)

            try:
                await self.tree.create_file(target, self.strip_language_marker(content))
            except FileExistsError:
                logger.info("Target appeared during placement, skipping", path=target)
                return PlacementOutcome.skipped_existing(target)
            except PlacementError as e:
                logger.error("Write failed", path=target, error=str(e))
                return PlacementOutcome.failed(str(e), target)

        logger.info("File placed", path=target)
        return PlacementOutcome.written(target)

    async def save(self, metadata: FileMetadata) -> PlacementOutcome:
        """Place a metadata record carried from the caller.

        Args:
            metadata: File record with its target directory and content.

        Returns:
            The placement outcome.
        """
        try:
            decision = metadata.to_decision()
        except ValueError as e:
            return PlacementOutcome.failed(f"Invalid target for {metadata.file_name}: {e}")
        return await self.place(decision, metadata.content)
