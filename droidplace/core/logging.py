"""
Structured logging for droidplace.

Every engine module logs through structlog with a ``component`` field naming
the service it belongs to (``sniffing``, ``placement``, ...), so a host can
follow one candidate file through classification and placement. Output goes
to stderr: coloured key-value lines on a terminal, JSON lines otherwise (for
IDE host processes that parse the stream).
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

import structlog
from rich.console import Console
from rich.logging import RichHandler

if TYPE_CHECKING:
    from .config import Config

_PACKAGE = "droidplace"


def component_name(module_name: str | None) -> str:
    """Short component name for a module path.

    ``droidplace.services.placement.service`` becomes ``placement`` and
    ``droidplace.storage.local`` becomes ``storage``.
    """
    if not module_name:
        return _PACKAGE
    parts = [p for p in module_name.split(".") if p not in (_PACKAGE, "service")]
    if not parts:
        return _PACKAGE
    if parts[0] == "services" and len(parts) > 1:
        return parts[1]
    return parts[0]


def _processors(json_output: bool) -> list[structlog.types.Processor]:
    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
    ]
    if json_output:
        processors += [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    return processors


def setup_logging(config: Config | None = None, json_output: bool | None = None) -> None:
    """Configure structlog and route library logging through rich.

    Args:
        config: Configuration supplying the level; INFO when omitted.
        json_output: Force JSON (True) or console (False) rendering; by
            default JSON is used when stderr is not a terminal.
    """
    level_name = config.log_level if config else "INFO"
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.INFO
    if json_output is None:
        json_output = not sys.stderr.isatty()

    # Third-party loggers (asyncio, aiofiles) share the level
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[
            RichHandler(
                console=Console(stderr=True),
                show_path=False,
                rich_tracebacks=True,
                tracebacks_show_locals=level <= logging.DEBUG,
            )
        ],
        force=True,
    )

    structlog.configure(
        processors=_processors(json_output),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Logger for a module, tagged with its component.

    Args:
        name: Module name, typically ``__name__``.
    """
    return structlog.get_logger(name, component=component_name(name))


def bind_context(**kwargs: object) -> None:
    """Attach fields (e.g. the project root) to every later entry in this context."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
