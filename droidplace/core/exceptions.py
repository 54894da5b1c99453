"""
Custom exception hierarchy for droidplace.

All exceptions inherit from DroidPlaceError. Classification never raises;
these types only travel between the storage layer and the services that
consume it (probe failures are swallowed, placement failures are reported).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class DroidPlaceError(Exception):
    """Base exception for all droidplace errors."""

    message: str
    context: dict[str, Any] = field(default_factory=dict)
    cause: Exception | None = None

    def __str__(self) -> str:
        ctx = f" | context: {self.context}" if self.context else ""
        cause = f" | caused by: {self.cause}" if self.cause else ""
        return f"{self.message}{ctx}{cause}"


@dataclass
class ProbeError(DroidPlaceError):
    """Raised when a read-only probe of the project tree fails.

    Callers in the inference chain treat this as "no signal" and move on.
    """

    relative_path: str = ""

    def __str__(self) -> str:
        base = super().__str__()
        return f"Probe of '{self.relative_path}' failed: {base}"


@dataclass
class PlacementError(DroidPlaceError):
    """Raised when a directory cannot be created or a file cannot be written."""

    target_path: str = ""
    operation: str = ""

    def __str__(self) -> str:
        base = super().__str__()
        return f"[{self.operation}] {self.target_path}: {base}"
