"""Surface language sniffing."""

from .service import ContentSniffer

__all__ = ["ContentSniffer"]
