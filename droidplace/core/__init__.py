"""Core infrastructure components for droidplace."""

from .config import Config, get_config
from .exceptions import DroidPlaceError, PlacementError, ProbeError
from .logging import get_logger, setup_logging
from .types import PlacementOutcome, PlacementStatus, RelativePath

__all__ = [
    "Config",
    "get_config",
    "DroidPlaceError",
    "PlacementError",
    "ProbeError",
    "get_logger",
    "setup_logging",
    "PlacementOutcome",
    "PlacementStatus",
    "RelativePath",
]
