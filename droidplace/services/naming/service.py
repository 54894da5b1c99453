"""
Source File Namer.

Derives a class/file name and an architectural sub-package (UI, data, domain,
network, DI, utilities) for Kotlin/Java source text. Signals are tried from
strongest to weakest:

1. A composable function declaration.
2. A class with an explicit supertype.
3. A bare class/interface/object declaration, classified by name suffix.
4. No declaration at all (placeholder name).

The function is total: every input produces a decision.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from ...core.logging import get_logger

logger = get_logger(__name__)

PLACEHOLDER_NAME = "GeneratedFile"
COMPOSE_SUB_PACKAGE = "ui/compose/screens"
COMPOSE_SUFFIX = "Screen"

_COMPOSABLE = re.compile(
    r"@Composable\s+(?:(?:private|internal|public|inline)\s+)*fun\s+([A-Za-z0-9_]+)"
)
# Kotlin "class Name(...) : Super" or Java "class Name extends Super"
_CLASS_WITH_SUPERTYPE = re.compile(
    r"\bclass\s+([A-Za-z0-9_]+)"
    r"(?:\s*<[^>{]*>)?"
    r"(?:\s*(?:@\w+\s*)*(?:(?:private|internal|protected|public)\s+)?constructor)?"
    r"(?:\s*\((?:[^()]|\([^()]*\))*\))?"
    r"(?:\s*:\s*|\s+extends\s+)"
    r"([A-Za-z0-9_.]+)"
)
_DECLARATION = re.compile(r"\b(?:enum\s+class|class|interface|object|enum)\s+([A-Za-z0-9_]+)")


@dataclass(frozen=True)
class SupertypeRule:
    """Supertype fragment mapped to a sub-package and canonical name suffix."""

    fragment: str
    sub_package: str
    suffix: str


@dataclass(frozen=True)
class SuffixRule:
    """Declared-name suffixes mapped to a sub-package.

    ``requires`` names a marker that must also appear in the text.
    """

    suffixes: tuple[str, ...]
    sub_package: str
    requires: str | None = None

    def matches(self, name: str, content: str) -> bool:
        if not name.endswith(self.suffixes):
            return False
        return self.requires is None or self.requires in content


DEFAULT_SUPERTYPE_RULES: tuple[SupertypeRule, ...] = (
    SupertypeRule("Activity", "ui/activities", "Activity"),
    SupertypeRule("Fragment", "ui/fragments", "Fragment"),
    SupertypeRule("ViewModel", "ui/viewmodels", "ViewModel"),
    SupertypeRule("Adapter", "ui/adapters", "Adapter"),
    SupertypeRule("Repository", "data/repositories", "Repository"),
    SupertypeRule("DataSource", "data/sources", "DataSource"),
)

DEFAULT_SUFFIX_RULES: tuple[SuffixRule, ...] = (
    # UI layer
    SuffixRule(("Activity",), "ui/activities"),
    SuffixRule(("Fragment",), "ui/fragments"),
    SuffixRule(("Dialog",), "ui/dialogs"),
    SuffixRule(("BottomSheet",), "ui/bottomsheets"),
    SuffixRule(("ViewModel",), "ui/viewmodels"),
    SuffixRule(("Adapter",), "ui/adapters"),
    SuffixRule(("ViewHolder",), "ui/viewholders"),
    # Data layer
    SuffixRule(("Repository",), "data/repositories"),
    SuffixRule(("DataSource",), "data/sources"),
    SuffixRule(("Database",), "data/database"),
    SuffixRule(("Dao",), "data/database/dao"),
    SuffixRule(("Entity",), "data/database/entities"),
    SuffixRule(("Model", "Dto"), "data/models"),
    # Domain layer
    SuffixRule(("UseCase",), "domain/usecases"),
    SuffixRule(("Interactor",), "domain/interactors"),
    # Network layer
    SuffixRule(("Api", "Service"), "data/network"),
    SuffixRule(("Client",), "data/network/clients"),
    SuffixRule(("Interceptor",), "data/network/interceptors"),
    # Dependency injection
    SuffixRule(("Module",), "di/modules"),
    SuffixRule(("Component",), "di/components", requires="@Component"),
    SuffixRule(("Qualifier",), "di/qualifiers"),
    # Utilities
    SuffixRule(("Util", "Utils"), "utils"),
    SuffixRule(("Helper",), "utils/helpers"),
    SuffixRule(("Manager",), "utils/managers"),
    SuffixRule(("Provider",), "utils/providers"),
    SuffixRule(("Factory",), "utils/factories"),
    SuffixRule(("Constants",), "utils/constants"),
)


def _with_suffix(name: str, suffix: str) -> str:
    return name if name.endswith(suffix) else f"{name}{suffix}"


class SourceFileNamer:
    """Derives file names and sub-packages from source text."""

    def __init__(
        self,
        supertype_rules: tuple[SupertypeRule, ...] = DEFAULT_SUPERTYPE_RULES,
        suffix_rules: tuple[SuffixRule, ...] = DEFAULT_SUFFIX_RULES,
    ) -> None:
        self.supertype_rules = supertype_rules
        self.suffix_rules = suffix_rules

    def derive_name_and_package(self, content: str) -> tuple[str, str]:
        """Derive the sub-package path and class name for source text.

        Args:
            content: Kotlin or Java source text.

        Returns:
            Tuple of ("/"-separated sub-package, class name). The sub-package
            may be empty.
        """
        composable = _COMPOSABLE.search(content)
        if composable:
            name = _with_suffix(composable.group(1), COMPOSE_SUFFIX)
            logger.debug("Naming by composable", name=name)
            return COMPOSE_SUB_PACKAGE, name

        inherited = _CLASS_WITH_SUPERTYPE.search(content)
        if inherited:
            return self._by_supertype(inherited.group(1), inherited.group(2))

        declared = _DECLARATION.search(content)
        if declared:
            return self._by_suffix(declared.group(1), content)

        return "", PLACEHOLDER_NAME

    def _by_supertype(self, name: str, supertype: str) -> tuple[str, str]:
        for rule in self.supertype_rules:
            if rule.fragment in supertype:
                logger.debug("Naming by supertype", name=name, supertype=supertype)
                return rule.sub_package, _with_suffix(name, rule.suffix)
        return "", name

    def _by_suffix(self, name: str, content: str) -> tuple[str, str]:
        for rule in self.suffix_rules:
            if rule.matches(name, content):
                logger.debug("Naming by suffix", name=name, sub_package=rule.sub_package)
                return rule.sub_package, name
        return "", name
