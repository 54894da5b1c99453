"""Source file naming and architectural sub-package selection."""

from .service import (
    DEFAULT_SUFFIX_RULES,
    DEFAULT_SUPERTYPE_RULES,
    PLACEHOLDER_NAME,
    SourceFileNamer,
    SuffixRule,
    SupertypeRule,
)

__all__ = [
    "DEFAULT_SUFFIX_RULES",
    "DEFAULT_SUPERTYPE_RULES",
    "PLACEHOLDER_NAME",
    "SourceFileNamer",
    "SuffixRule",
    "SupertypeRule",
]
