"""Data models for droidplace."""

from .artifact import (
    ArtifactRequest,
    ClassificationResult,
    DeclaredLanguage,
    FileMetadata,
    PackageInfo,
    PlacementDecision,
    ResourceCategory,
    SourceRoot,
    SurfaceKind,
)
from .signatures import DEFAULT_SIGNATURES, AndroidSignatureCatalog

__all__ = [
    "ArtifactRequest",
    "ClassificationResult",
    "DeclaredLanguage",
    "FileMetadata",
    "PackageInfo",
    "PlacementDecision",
    "ResourceCategory",
    "SourceRoot",
    "SurfaceKind",
    "AndroidSignatureCatalog",
    "DEFAULT_SIGNATURES",
]
