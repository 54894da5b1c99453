"""
Android Signature Detector.

Flags source text as Android platform code from a conservative OR of
independent signals: framework supertypes, Android annotations, android/androidx
imports and lifecycle callbacks. False positives are acceptable; the flag only
biases naming and default extensions.
"""

from __future__ import annotations

import re

from ...core.logging import get_logger
from ...models.signatures import DEFAULT_SIGNATURES, AndroidSignatureCatalog

logger = get_logger(__name__)


class AndroidSignatureDetector:
    """Detects Android framework signatures in source text."""

    def __init__(self, catalog: AndroidSignatureCatalog = DEFAULT_SIGNATURES) -> None:
        """Compile the catalog into matchers.

        Args:
            catalog: Signature tables to match against.
        """
        self.catalog = catalog
        self._matchers: list[tuple[str, re.Pattern[str]]] = []

        for base_type in catalog.base_types:
            # Java "extends X" or Kotlin ": X"
            pattern = rf"(?:\bextends\s+|:\s*){re.escape(base_type)}\b"
            self._matchers.append((f"supertype:{base_type}", re.compile(pattern)))
        for annotation in catalog.annotations:
            pattern = rf"@{re.escape(annotation)}\b"
            self._matchers.append((f"annotation:{annotation}", re.compile(pattern)))
        for prefix in catalog.import_prefixes:
            pattern = rf"\bimport\s+{re.escape(prefix)}"
            self._matchers.append((f"import:{prefix}", re.compile(pattern)))
        for method in catalog.lifecycle_methods:
            pattern = rf"\b{re.escape(method)}"
            self._matchers.append((f"lifecycle:{method}", re.compile(pattern)))

    def matched_signals(self, content: str) -> list[str]:
        """List every signal present in the text.

        Args:
            content: Source text.

        Returns:
            Signal names such as "supertype:ViewModel" or "import:androidx.".
        """
        return [name for name, pattern in self._matchers if pattern.search(content)]

    def is_android_component(self, content: str) -> bool:
        """Return True if any Android signal is present."""
        for name, pattern in self._matchers:
            if pattern.search(content):
                logger.debug("Android signature matched", signal=name)
                return True
        return False
