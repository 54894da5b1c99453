"""
Package Inferencer.

Determines a project's root package by probing, in strict priority order:

1. The module build file (Kotlin script, then Groovy): ``namespace``, then
   ``applicationId``.
2. The manifest's ``package`` attribute.
3. Existing sources: entry-point files first, then the first few source files
   in traversal order.
4. A synthetic ``com.example.<project>`` name.

A failed or empty probe counts as "no match" and the chain moves on, so
inference always terminates with a non-empty package.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator

from ...core.config import InferenceConfig, LayoutConfig
from ...core.exceptions import ProbeError
from ...core.logging import get_logger
from ...models.artifact import PackageInfo, SourceRoot
from ...storage.interface import ProjectTree

logger = get_logger(__name__)

_KTS_NAMESPACE = re.compile(r"""namespace\s*=\s*["']([^"']+)["']""")
_KTS_APPLICATION_ID = re.compile(r"""applicationId\s*=\s*["']([^"']+)["']""")
_GROOVY_NAMESPACE = re.compile(r"""namespace\s*=?\s*["']([^"']+)["']""")
_GROOVY_APPLICATION_ID = re.compile(r"""applicationId\s*=?\s*["']([^"']+)["']""")
_MANIFEST_PACKAGE = re.compile(r"""\bpackage\s*=\s*["']([^"']+)["']""")
_PACKAGE_STATEMENT = re.compile(r"^\s*package\s+([A-Za-z0-9_.]+)", re.MULTILINE)
_VALID_PACKAGE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(?:\.[A-Za-z_][A-Za-z0-9_]*)*$")
_NON_ALPHANUMERIC = re.compile(r"[^a-zA-Z0-9]")

_SOURCE_SUFFIXES = (".kt", ".java")


class PackageInferencer:
    """Infers a project's root package and source tree."""

    def __init__(
        self,
        layout: LayoutConfig | None = None,
        inference: InferenceConfig | None = None,
    ) -> None:
        """Initialize the inferencer.

        Args:
            layout: Project layout conventions.
            inference: Scan bounds and fallback naming.
        """
        self.layout = layout or LayoutConfig()
        self.inference = inference or InferenceConfig()

    def infer(self, tree: ProjectTree, is_kotlin: bool) -> PackageInfo:
        """Select the source tree and infer the root package for it.

        Args:
            tree: Project tree to probe.
            is_kotlin: Whether the artifact being placed is Kotlin.

        Returns:
            Package info for this resolution call.
        """
        source_root = self.select_source_root(tree, is_kotlin)
        root_package = self.infer_root_package(tree, source_root is SourceRoot.KOTLIN_TREE)
        return PackageInfo(root_package=root_package, source_root=source_root)

    def select_source_root(self, tree: ProjectTree, is_kotlin: bool) -> SourceRoot:
        """Prefer the tree that already exists, matching the language first.

        Kotlin is the default only when neither tree exists.
        """
        kotlin_exists = tree.is_dir(self.layout.kotlin_root)
        java_exists = tree.is_dir(self.layout.java_root)

        if is_kotlin and kotlin_exists:
            return SourceRoot.KOTLIN_TREE
        if not is_kotlin and java_exists:
            return SourceRoot.JAVA_TREE
        if kotlin_exists:
            return SourceRoot.KOTLIN_TREE
        if java_exists:
            return SourceRoot.JAVA_TREE
        return SourceRoot.KOTLIN_TREE

    def source_root_path(self, source_root: SourceRoot) -> str:
        """Project-relative path of a source tree."""
        if source_root is SourceRoot.KOTLIN_TREE:
            return self.layout.kotlin_root
        return self.layout.java_root

    def infer_root_package(self, tree: ProjectTree, is_kotlin: bool) -> str:
        """Run the fallback chain and return the first package found.

        Args:
            tree: Project tree to probe.
            is_kotlin: Search the Kotlin tree (True) or the Java tree (False).

        Returns:
            A non-empty dotted package name.
        """
        strategies: list[tuple[str, Callable[[], str | None]]] = [
            ("build_file", lambda: self._from_build_files(tree)),
            ("manifest", lambda: self._from_manifest(tree)),
            ("sources", lambda: self._from_sources(tree, is_kotlin)),
        ]
        for strategy, probe in strategies:
            package = probe()
            if package:
                logger.debug("Root package inferred", strategy=strategy, package=package)
                return package

        package = self.fallback_package(tree)
        logger.debug("Root package synthesized", package=package)
        return package

    def fallback_package(self, tree: ProjectTree) -> str:
        """Deterministic package derived from the project directory name."""
        sanitized = _NON_ALPHANUMERIC.sub("", tree.root.name).lower()
        return f"{self.inference.fallback_prefix}.{sanitized or self.inference.fallback_name}"

    def _read(self, tree: ProjectTree, relative_path: str) -> str | None:
        if not tree.exists(relative_path):
            return None
        try:
            return tree.read_text(relative_path)
        except ProbeError as e:
            logger.debug("Probe failed, treating as no signal", path=relative_path, error=str(e))
            return None

    def _first_valid(self, content: str | None, *patterns: re.Pattern[str]) -> str | None:
        if not content:
            return None
        for pattern in patterns:
            match = pattern.search(content)
            if match and _VALID_PACKAGE.match(match.group(1)):
                return match.group(1)
        return None

    def _from_build_files(self, tree: ProjectTree) -> str | None:
        module = self.layout.app_module
        kts = self._read(tree, ProjectTree.join(module, self.layout.kotlin_build_file))
        package = self._first_valid(kts, _KTS_NAMESPACE, _KTS_APPLICATION_ID)
        if package:
            return package

        groovy = self._read(tree, ProjectTree.join(module, self.layout.groovy_build_file))
        return self._first_valid(groovy, _GROOVY_NAMESPACE, _GROOVY_APPLICATION_ID)

    def _from_manifest(self, tree: ProjectTree) -> str | None:
        return self._first_valid(self._read(tree, self.layout.manifest_path), _MANIFEST_PACKAGE)

    def _from_sources(self, tree: ProjectTree, is_kotlin: bool) -> str | None:
        source_dir = self.layout.kotlin_root if is_kotlin else self.layout.java_root
        if not tree.is_dir(source_dir):
            return None

        markers = self.inference.entry_point_markers
        entry_points = (
            path for path in self._sources(tree, source_dir)
            if any(marker in path.rsplit("/", 1)[-1] for marker in markers)
        )
        for path in entry_points:
            package = self._first_valid(self._read(tree, path), _PACKAGE_STATEMENT)
            if package:
                return package

        limit = self.inference.source_scan_limit
        for index, path in enumerate(self._sources(tree, source_dir)):
            if index >= limit:
                break
            package = self._first_valid(self._read(tree, path), _PACKAGE_STATEMENT)
            if package:
                return package
        return None

    @staticmethod
    def _sources(tree: ProjectTree, source_dir: str) -> Iterator[str]:
        return tree.iter_files(source_dir, _SOURCE_SUFFIXES)
