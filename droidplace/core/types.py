"""
Core type definitions for droidplace.

Provides type aliases and the tri-state placement result handed back to
callers for user notification.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

# Project-relative, "/"-separated path without a leading slash or ".." segments
RelativePath = str


class PlacementStatus(str, Enum):
    """Terminal state of a placement."""

    WRITTEN = "written"
    SKIPPED_EXISTING = "skipped_existing"
    FAILED = "failed"


@dataclass(frozen=True)
class PlacementOutcome:
    """Result of a placement.

    Exactly one of three shapes: written (with the project-relative path),
    skipped because the target already existed, or failed with a reason.
    """

    status: PlacementStatus
    path: RelativePath | None = None
    reason: str | None = None

    @classmethod
    def written(cls, path: RelativePath) -> PlacementOutcome:
        """Create a result for a file that was written."""
        return cls(status=PlacementStatus.WRITTEN, path=path)

    @classmethod
    def skipped_existing(cls, path: RelativePath) -> PlacementOutcome:
        """Create a result for a target that already existed."""
        return cls(
            status=PlacementStatus.SKIPPED_EXISTING,
            path=path,
            reason=f"{path} already exists",
        )

    @classmethod
    def failed(cls, reason: str, path: RelativePath | None = None) -> PlacementOutcome:
        """Create a failed result."""
        return cls(status=PlacementStatus.FAILED, path=path, reason=reason)

    @property
    def success(self) -> bool:
        """Whether the content reached the filesystem."""
        return self.status is PlacementStatus.WRITTEN
