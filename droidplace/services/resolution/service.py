"""
Path Resolver.

Orchestrates sniffing, signature detection, resource classification, naming
and package inference into a final (file name, directory) decision. Only
performs read-only probes of the project tree; nothing is written here.
"""

from __future__ import annotations

from pathlib import PurePosixPath

from ...core.config import Config, get_config
from ...core.logging import get_logger
from ...models.artifact import (
    ArtifactRequest,
    ClassificationResult,
    PlacementDecision,
    ResourceCategory,
    SurfaceKind,
)
from ...storage import LocalProjectTree, ProjectTree
from ..naming import PLACEHOLDER_NAME, SourceFileNamer
from ..packages import PackageInferencer
from ..resources import ResourceClassifier
from ..signatures import AndroidSignatureDetector
from ..sniffing import ContentSniffer

logger = get_logger(__name__)


class PathResolver:
    """Resolves where a candidate file belongs in an Android project.

    Safe to call concurrently for independent requests: every call reads the
    project tree afresh and returns a new decision.
    """

    def __init__(
        self,
        config: Config | None = None,
        detector: AndroidSignatureDetector | None = None,
        sniffer: ContentSniffer | None = None,
        resources: ResourceClassifier | None = None,
        namer: SourceFileNamer | None = None,
        packages: PackageInferencer | None = None,
    ) -> None:
        """Initialize the resolver and its collaborators.

        Args:
            config: Configuration; defaults to the environment-derived config.
            detector: Android signature detector.
            sniffer: Surface language sniffer.
            resources: Resource classifier.
            namer: Source file namer.
            packages: Root package inferencer.
        """
        self.config = config or get_config()
        self.detector = detector or AndroidSignatureDetector()
        self.sniffer = sniffer or ContentSniffer(self.detector)
        self.resources = resources or ResourceClassifier(self.config.layout)
        self.namer = namer or SourceFileNamer()
        self.packages = packages or PackageInferencer(self.config.layout, self.config.inference)

    def tree_for(self, request: ArtifactRequest) -> ProjectTree:
        """Project tree for a request's project root."""
        return LocalProjectTree(request.project_root, encoding=self.config.placement.encoding)

    def classify(self, request: ArtifactRequest) -> ClassificationResult:
        """Classify a candidate file without resolving its location.

        Args:
            request: The candidate file.

        Returns:
            The surface kind, resource category (markup only) and Android flag.
        """
        surface = self.sniffer.classify_surface(request.content, request.declared_language)
        category = None
        if surface is SurfaceKind.XML_RESOURCE:
            category = self.resources.classify(request.content)

        return ClassificationResult(
            surface_kind=surface,
            resource_category=category,
            is_android_component=self.detector.is_android_component(request.content),
        )

    def resolve(self, request: ArtifactRequest, tree: ProjectTree | None = None) -> PlacementDecision:
        """Resolve the file name and project-relative directory for a request.

        Args:
            request: The candidate file.
            tree: Project tree to probe; defaults to the local filesystem at
                the request's project root.

        Returns:
            The placement decision, flagged if a file already exists there.
        """
        tree = tree or self.tree_for(request)
        classification = self.classify(request)
        surface = classification.surface_kind

        if surface.is_source:
            default_name, directory = self._resolve_source(request, tree, surface)
        elif surface is SurfaceKind.XML_RESOURCE:
            default_name, directory = self._resolve_resource(request, classification)
        else:
            default_name = f"{PLACEHOLDER_NAME}.{surface.extension}"
            directory = self._hint(request) or self.config.layout.main_root

        file_name = self._apply_suggested_name(request.suggested_name, default_name, surface)
        relative_path = ProjectTree.join(directory, file_name)

        decision = PlacementDecision(
            file_name=file_name,
            directory_path=directory,
            conflicts_existing=tree.exists(relative_path),
            classification=classification,
        )
        logger.debug(
            "Resolved placement",
            surface=surface.value,
            path=decision.relative_path,
            conflicts=decision.conflicts_existing,
        )
        return decision

    def _resolve_source(
        self, request: ArtifactRequest, tree: ProjectTree, surface: SurfaceKind
    ) -> tuple[str, str]:
        sub_package, class_name = self.namer.derive_name_and_package(request.content)
        default_name = f"{class_name}.{surface.extension}"

        hint = self._hint(request)
        if hint:
            return default_name, hint

        package = self.packages.infer(tree, surface is SurfaceKind.KOTLIN_SOURCE)
        directory = ProjectTree.join(
            self.packages.source_root_path(package.source_root),
            package.package_path,
            sub_package,
        )
        return default_name, directory

    def _resolve_resource(
        self, request: ArtifactRequest, classification: ClassificationResult
    ) -> tuple[str, str]:
        category = classification.resource_category or ResourceCategory.GENERIC_XML
        default_name = self.resources.default_file_name(category, request.content)
        directory = self.resources.resource_directory(category, request.directory_hint)
        return default_name, directory

    @staticmethod
    def _hint(request: ArtifactRequest) -> str:
        if not request.directory_hint:
            return ""
        return ProjectTree.normalize_relative_path(request.directory_hint)

    @staticmethod
    def _apply_suggested_name(
        suggested_name: str | None, default_name: str, surface: SurfaceKind
    ) -> str:
        """Explicit names win; only the base name is kept and an extension added if missing."""
        if not suggested_name:
            return default_name
        base = PurePosixPath(suggested_name.replace("\\", "/")).name.strip()
        if base in ("", ".", ".."):
            return default_name
        if "." not in base.lstrip("."):
            return f"{base}.{surface.extension}"
        return base
