"""
Content Sniffer.

Decides the surface language of a candidate file. A declared language is
trusted when it names kotlin, java or xml; otherwise the text is sniffed
structurally. Every input yields exactly one SurfaceKind.
"""

from __future__ import annotations

import re

from ...core.logging import get_logger
from ...models.artifact import DeclaredLanguage, SurfaceKind
from ..signatures import AndroidSignatureDetector

logger = get_logger(__name__)

_XML_DECLARATION = "<?xml"

# <tag ... prefix:attr= with an Android-style namespace prefix
_NAMESPACED_TAG = re.compile(
    r"<[A-Za-z_][\w.\-]*\s[^<>]*?\b(?:(?:android|app|tools):[\w\-]+|xmlns(?::[\w\-]+)?)\s*="
)

_DECLARATION = re.compile(
    r"(?:^|[\s;{}(@])(?:class|interface|object|fun|enum)\s+[A-Za-z_`]", re.MULTILINE
)

_KOTLIN_MARKERS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\bfun\s+[\w`<]"),
    re.compile(r"\b(?:val|var)\s+\w+\s*[:=]"),
    re.compile(r"(?:^|\s)object\s+\w+"),
    re.compile(r"\bdata\s+class\b"),
    re.compile(r"@Composable\b"),
    re.compile(r"\bclass\s+\w+(?:<[^>]*>)?\s*(?:\([^)]*\))?\s*:\s*\w"),
    re.compile(r"^\s*package\s+[\w.]+\s*$", re.MULTILINE),
)

_JAVA_MARKERS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\b(?:public|private|protected)\s+(?:(?:final|abstract|static)\s+)*(?:class|interface|enum)\b"),
    re.compile(r"\bclass\s+\w+(?:<[^>]*>)?\s+(?:extends|implements)\s+\w"),
    re.compile(r"@Override\b"),
    re.compile(r"\bvoid\s+\w+\s*\("),
    re.compile(r"^\s*package\s+[\w.]+\s*;", re.MULTILINE),
    re.compile(r"^\s*import\s+[\w.*]+\s*;", re.MULTILINE),
    re.compile(r"@interface\s+\w"),
)


class ContentSniffer:
    """Classifies raw text as Kotlin, Java, XML or plain text."""

    def __init__(self, detector: AndroidSignatureDetector | None = None) -> None:
        """Initialize the sniffer.

        Args:
            detector: Signature detector used to bias ambiguous text towards source.
        """
        self.detector = detector or AndroidSignatureDetector()

    def classify_surface(
        self, content: str, declared_language: DeclaredLanguage | str | None = None
    ) -> SurfaceKind:
        """Decide the surface kind of a candidate file.

        Args:
            content: Raw candidate text.
            declared_language: Language hint; trusted when it is kotlin, java or xml.

        Returns:
            The surface kind. Never raises.
        """
        if not isinstance(declared_language, DeclaredLanguage):
            declared_language = DeclaredLanguage.parse(declared_language)

        if declared_language is DeclaredLanguage.KOTLIN:
            return SurfaceKind.KOTLIN_SOURCE
        if declared_language is DeclaredLanguage.JAVA:
            return SurfaceKind.JAVA_SOURCE
        if declared_language is DeclaredLanguage.XML:
            if self._is_misdeclared_markup(content):
                logger.debug("Declared xml carries no markup, sniffing as source")
                return self.sniff(content)
            return SurfaceKind.XML_RESOURCE

        return self.sniff(content)

    def sniff(self, content: str) -> SurfaceKind:
        """Structurally sniff text with no usable language hint."""
        if self.looks_like_xml(content):
            return SurfaceKind.XML_RESOURCE
        if _DECLARATION.search(content):
            return self.source_kind(content)
        if self.detector.is_android_component(content):
            return SurfaceKind.KOTLIN_SOURCE
        return SurfaceKind.PLAIN_TEXT

    @staticmethod
    def looks_like_xml(content: str) -> bool:
        """Return True for an XML declaration or Android-namespaced tags."""
        if content.lstrip().startswith(_XML_DECLARATION):
            return True
        return _NAMESPACED_TAG.search(content) is not None

    @staticmethod
    def source_kind(content: str) -> SurfaceKind:
        """Weigh Kotlin against Java markers; ties default to Kotlin."""
        kotlin_score = sum(1 for pattern in _KOTLIN_MARKERS if pattern.search(content))
        java_score = sum(1 for pattern in _JAVA_MARKERS if pattern.search(content))
        if java_score > kotlin_score:
            return SurfaceKind.JAVA_SOURCE
        return SurfaceKind.KOTLIN_SOURCE

    def _is_misdeclared_markup(self, content: str) -> bool:
        stripped = content.lstrip()
        if not stripped or stripped.startswith("<"):
            return False
        return self.detector.is_android_component(content)
