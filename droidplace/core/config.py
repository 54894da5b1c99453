"""
Configuration management for droidplace.

Provides type-safe configuration for the project layout conventions, the
bounds of package inference and the placement policy, with environment
variable overrides and defaults that match a stock Android Studio project.
"""

from __future__ import annotations

import os
from functools import lru_cache
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Load .env file if it exists (looks in cwd and parent directories)
load_dotenv()


class LayoutConfig(BaseModel):
    """Conventional Android project layout."""

    app_module: str = Field(default="app", description="Application module directory")
    main_source_set: str = Field(default="src/main", description="Main source set, relative to the module")
    kotlin_dir: str = Field(default="kotlin", description="Kotlin source tree name")
    java_dir: str = Field(default="java", description="Java source tree name")
    resource_dir: str = Field(default="res", description="Resource directory name")
    manifest_name: str = Field(default="AndroidManifest.xml", description="Manifest file name")
    kotlin_build_file: str = Field(default="build.gradle.kts", description="Kotlin-script build file")
    groovy_build_file: str = Field(default="build.gradle", description="Groovy build file")

    model_config = {"frozen": True}

    @property
    def main_root(self) -> str:
        """Project-relative path of the main source set."""
        return f"{self.app_module}/{self.main_source_set}".strip("/")

    @property
    def kotlin_root(self) -> str:
        """Project-relative path of the Kotlin source tree."""
        return f"{self.main_root}/{self.kotlin_dir}"

    @property
    def java_root(self) -> str:
        """Project-relative path of the Java source tree."""
        return f"{self.main_root}/{self.java_dir}"

    @property
    def resource_root(self) -> str:
        """Project-relative path of the resource directory."""
        return f"{self.main_root}/{self.resource_dir}"

    @property
    def manifest_path(self) -> str:
        """Project-relative path of the manifest."""
        return f"{self.main_root}/{self.manifest_name}"


class InferenceConfig(BaseModel):
    """Bounds and fallbacks for root package inference."""

    source_scan_limit: int = Field(
        default=5, ge=1, description="Source files scanned for a package statement after entry points"
    )
    entry_point_markers: tuple[str, ...] = Field(
        default=("MainActivity", "Application", "App.kt", "App.java"),
        description="File-name fragments that mark likely entry-point sources",
    )
    fallback_prefix: str = Field(default="com.example", description="Prefix of the synthetic package")
    fallback_name: str = Field(
        default="app", description="Used when the project directory name sanitizes to nothing"
    )

    model_config = {"frozen": True}


class PlacementConfig(BaseModel):
    """Placement policy."""

    language_markers: tuple[str, ...] = Field(
        default=("kotlin", "xml", "java", "groovy", "gradle", "json"),
        description="Bare first-line tokens stripped before writing",
    )
    encoding: str = Field(default="utf-8", description="Encoding for reads and writes")

    model_config = {"frozen": True}


class Config(BaseModel):
    """Root configuration for droidplace."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Logging level"
    )
    layout: LayoutConfig = Field(default_factory=LayoutConfig)
    inference: InferenceConfig = Field(default_factory=InferenceConfig)
    placement: PlacementConfig = Field(default_factory=PlacementConfig)

    model_config = {"extra": "ignore"}

    @classmethod
    def from_env(cls) -> Config:
        """Create configuration from environment variables."""
        return cls(
            log_level=os.environ.get("DROIDPLACE_LOG_LEVEL", "INFO"),  # type: ignore
            layout=LayoutConfig(
                app_module=os.environ.get("DROIDPLACE_APP_MODULE", "app"),
            ),
            inference=InferenceConfig(
                source_scan_limit=int(os.environ.get("DROIDPLACE_SOURCE_SCAN_LIMIT", "5")),
                fallback_prefix=os.environ.get("DROIDPLACE_FALLBACK_PREFIX", "com.example"),
            ),
            placement=PlacementConfig(
                encoding=os.environ.get("DROIDPLACE_ENCODING", "utf-8"),
            ),
        )


@lru_cache(maxsize=1)
def get_config() -> Config:
    """Get cached configuration instance."""
    return Config.from_env()
