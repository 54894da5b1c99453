"""Android signature detection."""

from .service import AndroidSignatureDetector

__all__ = ["AndroidSignatureDetector"]
