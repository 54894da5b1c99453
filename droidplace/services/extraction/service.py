"""
Code Block Extractor.

Pulls fenced code blocks out of a chat response and turns each into an
ArtifactRequest. The fence's info string becomes the declared language and
the nearest preceding bold header such as ``**LoginScreen.kt**`` becomes the
suggested file name.
"""

from __future__ import annotations

import re
from pathlib import Path

from pydantic import BaseModel, Field

from ...core.logging import get_logger
from ...models.artifact import ArtifactRequest, DeclaredLanguage

logger = get_logger(__name__)

FENCE = "```"

_HEADER = re.compile(r"\*\*([\w\-]+\.[A-Za-z]+)[^*]*?\*\*")

_KOTLIN_GENERATABLE = ("class ", "interface ", "object ", "fun ", "@Composable", "Activity", "Fragment", "ViewModel")
_XML_GENERATABLE = (
    "<?xml",
    "<resources",
    "<layout",
    "<LinearLayout",
    "<RelativeLayout",
    "<ConstraintLayout",
    "<navigation",
    "<menu",
    "<vector",
    "<shape",
    "<selector",
)
_JAVA_GENERATABLE = ("class ", "interface ", "enum ", "@interface")

_GENERATABLE_MARKERS: dict[DeclaredLanguage, tuple[str, ...]] = {
    DeclaredLanguage.KOTLIN: _KOTLIN_GENERATABLE,
    DeclaredLanguage.XML: _XML_GENERATABLE,
    DeclaredLanguage.JAVA: _JAVA_GENERATABLE,
}


def can_generate_file(content: str, language: DeclaredLanguage | str | None) -> bool:
    """Whether a block is substantial enough to become a file.

    Args:
        content: Block content.
        language: Declared language of the block.

    Returns:
        True if the block carries a construct worth writing out; always False
        for languages other than kotlin, java and xml.
    """
    if not isinstance(language, DeclaredLanguage):
        language = DeclaredLanguage.parse(language)
    markers = _GENERATABLE_MARKERS.get(language, ())
    return any(marker in content for marker in markers)


class ExtractedBlock(BaseModel):
    """A fenced code block lifted from a response."""

    language: DeclaredLanguage = Field(default=DeclaredLanguage.UNKNOWN)
    language_tag: str = Field(default="", description="Raw fence info string")
    code: str = Field(description="Block content without the fence line")
    suggested_name: str | None = Field(default=None)
    index: int = Field(default=0, description="Position among the response's blocks")

    @property
    def generatable(self) -> bool:
        return can_generate_file(self.code, self.language)

    def to_request(self, project_root: Path, directory_hint: str | None = None) -> ArtifactRequest:
        """Build the engine request for this block."""
        return ArtifactRequest(
            content=self.code,
            declared_language=self.language,
            suggested_name=self.suggested_name,
            project_root=project_root,
            directory_hint=directory_hint,
        )


class CodeBlockExtractor:
    """Splits a model response into fenced code blocks."""

    def extract(self, message: str) -> list[ExtractedBlock]:
        """Extract every fenced block from a response.

        Args:
            message: Markdown text of the response.

        Returns:
            Blocks in order of appearance. An unterminated final fence is
            treated as running to the end of the message.
        """
        parts = message.split(FENCE)
        blocks: list[ExtractedBlock] = []

        for i in range(1, len(parts), 2):
            tag, code = self._split_info_string(parts[i])
            blocks.append(
                ExtractedBlock(
                    language=DeclaredLanguage.parse(tag),
                    language_tag=tag,
                    code=code,
                    suggested_name=self._suggested_name(parts[i - 1]),
                    index=len(blocks),
                )
            )

        logger.debug("Extracted code blocks", count=len(blocks))
        return blocks

    @staticmethod
    def _split_info_string(raw: str) -> tuple[str, str]:
        """Separate the opening fence's info string from the block body."""
        first_line, newline, body = raw.partition("\n")
        if not newline:
            return "", raw.strip()
        words = first_line.split()
        tag = words[0] if words else ""
        return tag, body.strip("\n")

    @staticmethod
    def _suggested_name(preceding_text: str) -> str | None:
        """The last bold file-name header before the block, if any."""
        matches = _HEADER.findall(preceding_text)
        return matches[-1] if matches else None
