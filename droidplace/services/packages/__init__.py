"""Root package inference."""

from .service import PackageInferencer

__all__ = ["PackageInferencer"]
