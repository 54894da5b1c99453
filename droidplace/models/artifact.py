"""
Artifact data models.

Request-scoped value objects that flow through the engine: the incoming
artifact, its classification, the inferred package, the placement decision
and the metadata record carried through to the writer.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path, PurePosixPath
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator


class DeclaredLanguage(str, Enum):
    """Language hint attached to a candidate file."""

    KOTLIN = "kotlin"
    JAVA = "java"
    XML = "xml"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, tag: str | None) -> DeclaredLanguage:
        """Map a free-form tag (e.g. a fence info string) to a language.

        Args:
            tag: Raw tag such as "Kotlin", "kt" or "xml". May be None.

        Returns:
            The matching language, or UNKNOWN for anything unrecognized.
        """
        if not tag:
            return cls.UNKNOWN
        normalized = tag.strip().lower()
        return _LANGUAGE_ALIASES.get(normalized, cls.UNKNOWN)


_LANGUAGE_ALIASES: dict[str, DeclaredLanguage] = {
    "kotlin": DeclaredLanguage.KOTLIN,
    "kt": DeclaredLanguage.KOTLIN,
    "kts": DeclaredLanguage.KOTLIN,
    "java": DeclaredLanguage.JAVA,
    "xml": DeclaredLanguage.XML,
}


class SurfaceKind(str, Enum):
    """Surface language/format of a candidate file."""

    KOTLIN_SOURCE = "kotlin_source"
    JAVA_SOURCE = "java_source"
    XML_RESOURCE = "xml_resource"
    PLAIN_TEXT = "plain_text"

    @property
    def extension(self) -> str:
        """File extension (without the dot) for this surface kind."""
        return _EXTENSIONS[self]

    @property
    def is_source(self) -> bool:
        return self in (SurfaceKind.KOTLIN_SOURCE, SurfaceKind.JAVA_SOURCE)


_EXTENSIONS: dict[SurfaceKind, str] = {
    SurfaceKind.KOTLIN_SOURCE: "kt",
    SurfaceKind.JAVA_SOURCE: "java",
    SurfaceKind.XML_RESOURCE: "xml",
    SurfaceKind.PLAIN_TEXT: "txt",
}


class ResourceCategory(str, Enum):
    """Android resource category of a markup artifact."""

    LAYOUT = "layout"
    DRAWABLE = "drawable"
    VALUES = "values"
    MENU = "menu"
    NAVIGATION = "navigation"
    ANIMATION = "anim"
    COLOR = "color"
    MANIFEST = "manifest"
    GENERIC_XML = "xml"


class SourceRoot(str, Enum):
    """Source tree convention of the project."""

    KOTLIN_TREE = "kotlin"
    JAVA_TREE = "java"


class ArtifactRequest(BaseModel):
    """A candidate file submitted for classification and placement."""

    content: str = Field(description="Raw candidate text")
    declared_language: DeclaredLanguage = Field(
        default=DeclaredLanguage.UNKNOWN, description="Language hint, trusted when present"
    )
    suggested_name: str | None = Field(default=None, description="Caller-supplied file name")
    project_root: Path = Field(description="Root directory of the Android project")
    directory_hint: str | None = Field(
        default=None, description="Caller-supplied project-relative directory"
    )

    model_config = {"frozen": True}

    @field_validator("declared_language", mode="before")
    @classmethod
    def _parse_language(cls, value: Any) -> Any:
        if value is None or isinstance(value, DeclaredLanguage):
            return value or DeclaredLanguage.UNKNOWN
        if isinstance(value, str):
            return DeclaredLanguage.parse(value)
        return value


class ClassificationResult(BaseModel):
    """What kind of artifact a candidate file is."""

    surface_kind: SurfaceKind
    resource_category: ResourceCategory | None = Field(
        default=None, description="Set for markup artifacts only"
    )
    is_android_component: bool = Field(default=False)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_category(self) -> ClassificationResult:
        is_xml = self.surface_kind is SurfaceKind.XML_RESOURCE
        if is_xml != (self.resource_category is not None):
            raise ValueError("resource_category must be set exactly for XML resources")
        return self


class PackageInfo(BaseModel):
    """Root package and source tree of a project, computed per resolution."""

    root_package: str = Field(min_length=1, description="Dotted root package")
    source_root: SourceRoot

    model_config = {"frozen": True}

    @property
    def package_path(self) -> str:
        """Root package as a "/"-separated path."""
        return self.root_package.replace(".", "/")


class PlacementDecision(BaseModel):
    """Resolved file name and project-relative directory for an artifact."""

    file_name: str = Field(min_length=1)
    directory_path: str = Field(description="Project-relative, '/'-separated")
    conflicts_existing: bool = Field(default=False)
    classification: ClassificationResult | None = Field(default=None)

    model_config = {"frozen": True}

    @field_validator("directory_path")
    @classmethod
    def _check_directory(cls, value: str) -> str:
        if value.startswith("/") or "\\" in value:
            raise ValueError(f"directory_path must be relative and '/'-separated: {value!r}")
        if ".." in PurePosixPath(value).parts:
            raise ValueError(f"directory_path must not contain '..': {value!r}")
        return value

    @field_validator("file_name")
    @classmethod
    def _check_file_name(cls, value: str) -> str:
        if "/" in value or "\\" in value or value in (".", ".."):
            raise ValueError(f"file_name must be a bare name: {value!r}")
        return value

    @property
    def relative_path(self) -> str:
        """Project-relative path of the target file."""
        if not self.directory_path:
            return self.file_name
        return f"{self.directory_path}/{self.file_name}"


class FileMetadata(BaseModel):
    """A file as carried from the caller through to the writer."""

    relative_path: str = Field(description="Project-relative directory")
    file_name: str = Field(description="File name including extension")
    content: str = Field(description="File content")
    suggested_name: str = Field(default="", description="Defaults to file_name")
    file_type: str = Field(default="", description="Extension derived from file_name")
    description: str = Field(default="")

    @model_validator(mode="before")
    @classmethod
    def _fill_defaults(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("file_name"):
            data = dict(data)
            if not data.get("suggested_name"):
                data["suggested_name"] = data["file_name"]
            if not data.get("file_type"):
                data["file_type"] = data["file_name"].rsplit(".", 1)[-1]
        return data

    @classmethod
    def from_decision(
        cls, decision: PlacementDecision, content: str, description: str = ""
    ) -> FileMetadata:
        """Build the metadata record for a resolved decision.

        Args:
            decision: The resolved placement.
            content: Content to be written.
            description: Optional human-readable description.

        Returns:
            Metadata record pointing at the decision's target.
        """
        return cls(
            relative_path=decision.directory_path,
            file_name=decision.file_name,
            content=content,
            description=description,
        )

    def to_decision(self) -> PlacementDecision:
        """Convert back into a placement decision for the writer."""
        return PlacementDecision(file_name=self.file_name, directory_path=self.relative_path)
