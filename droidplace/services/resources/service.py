"""
Resource Classifier.

Assigns markup content to exactly one Android resource category using an
ordered decision list of (predicate, category) rules; the first match wins.
Order matters because categories overlap: manifests embed activity
declarations, layouts embed attributes that look like values or colors.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass

from ...core.config import LayoutConfig
from ...core.logging import get_logger
from ...models.artifact import ResourceCategory
from ...storage.interface import ProjectTree

logger = get_logger(__name__)


def _tags(*names: str) -> re.Pattern[str]:
    """Match an opening tag for any of the names."""
    alternatives = "|".join(re.escape(name) for name in names)
    return re.compile(rf"<(?:{alternatives})(?=[\s/>]|$)")


def _qualified_tags(*names: str) -> re.Pattern[str]:
    """Match an opening tag, optionally package-qualified (androidx.*.Name)."""
    alternatives = "|".join(re.escape(name) for name in names)
    return re.compile(rf"<(?:[A-Za-z_][\w]*\.)*(?:{alternatives})(?=[\s/>]|$)")


_MANIFEST_TAGS = _tags("manifest", "application", "activity", "service", "receiver", "provider")
_LAYOUT_ROOTS = _qualified_tags(
    "LinearLayout",
    "RelativeLayout",
    "FrameLayout",
    "ConstraintLayout",
    "CoordinatorLayout",
    "DrawerLayout",
    "SwipeRefreshLayout",
)
_NAVIGATION_TAG = _tags("navigation")
_FRAGMENT_TAG = _tags("fragment")
_NAME_ATTRIBUTE = re.compile(r"\bname\s*=")
_MENU_TAG = _tags("menu")
_ITEM_TAG = _tags("item")
_MENU_CATEGORY_ATTRIBUTE = re.compile(r":menuCategory\s*=")
_ANIMATOR_TAGS = _tags("animator", "objectAnimator")
_SET_TAG = _tags("set")
_INTERPOLATOR_ATTRIBUTE = re.compile(r":interpolator\s*=")
_DRAWABLE_TAGS = _tags(
    "vector",
    "animated-vector",
    "shape",
    "selector",
    "ripple",
    "inset",
    "bitmap",
    "nine-patch",
    "layer-list",
)
_DRAWABLE_ATTRIBUTE = re.compile(r"android:drawable\w*\s*=")
_COLOR_TAG = _tags("color")
_COLOR_ATTRIBUTE = re.compile(r"android:color\s*=")
_VALUES_TAGS = _tags(
    "resources",
    "string",
    "string-array",
    "dimen",
    "style",
    "declare-styleable",
    "integer",
    "integer-array",
    "bool",
    "array",
    "plurals",
    "attr",
)
_LAYOUT_ATTRIBUTE = re.compile(r"\b(?:android|app):layout_")
_LAYOUT_WIDGETS = _qualified_tags(
    "Button",
    "TextView",
    "ImageView",
    "EditText",
    "RecyclerView",
    "ScrollView",
    "LinearLayout",
    "RelativeLayout",
    "ConstraintLayout",
    "FrameLayout",
)


def has_layout_tags(content: str) -> bool:
    """Return True if any layout-like tag or attribute is present.

    Suppresses the color and values rules so that a color reference inside a
    layout does not misfile the layout.
    """
    return bool(_LAYOUT_ATTRIBUTE.search(content) or _LAYOUT_WIDGETS.search(content))


def _is_manifest(content: str) -> bool:
    return bool(_MANIFEST_TAGS.search(content))


def _is_layout(content: str) -> bool:
    if _LAYOUT_ROOTS.search(content):
        return True
    return "layout_width" in content and "<" in content


def _is_navigation(content: str) -> bool:
    if _NAVIGATION_TAG.search(content):
        return True
    return bool(_FRAGMENT_TAG.search(content) and _NAME_ATTRIBUTE.search(content))


def _is_menu(content: str) -> bool:
    if _MENU_TAG.search(content):
        return True
    return bool(_ITEM_TAG.search(content) and _MENU_CATEGORY_ATTRIBUTE.search(content))


def _is_animation(content: str) -> bool:
    if _ANIMATOR_TAGS.search(content):
        return True
    return bool(_SET_TAG.search(content) and _INTERPOLATOR_ATTRIBUTE.search(content))


def _is_drawable(content: str) -> bool:
    return bool(_DRAWABLE_TAGS.search(content) or _DRAWABLE_ATTRIBUTE.search(content))


def _is_color(content: str) -> bool:
    if has_layout_tags(content):
        return False
    return bool(_COLOR_TAG.search(content) or _COLOR_ATTRIBUTE.search(content))


def _is_values(content: str) -> bool:
    if has_layout_tags(content):
        return False
    return bool(_VALUES_TAGS.search(content))


@dataclass(frozen=True)
class ResourceRule:
    """One entry of the ordered decision list."""

    name: str
    predicate: Callable[[str], bool]
    category: ResourceCategory


DEFAULT_RESOURCE_RULES: tuple[ResourceRule, ...] = (
    ResourceRule("manifest", _is_manifest, ResourceCategory.MANIFEST),
    ResourceRule("layout", _is_layout, ResourceCategory.LAYOUT),
    ResourceRule("navigation", _is_navigation, ResourceCategory.NAVIGATION),
    ResourceRule("menu", _is_menu, ResourceCategory.MENU),
    ResourceRule("animation", _is_animation, ResourceCategory.ANIMATION),
    ResourceRule("drawable", _is_drawable, ResourceCategory.DRAWABLE),
    ResourceRule("color", _is_color, ResourceCategory.COLOR),
    ResourceRule("values", _is_values, ResourceCategory.VALUES),
)

_DEFAULT_FILE_NAMES: dict[ResourceCategory, str] = {
    ResourceCategory.LAYOUT: "layout_generated.xml",
    ResourceCategory.DRAWABLE: "drawable_generated.xml",
    ResourceCategory.VALUES: "values.xml",
    ResourceCategory.MENU: "menu_generated.xml",
    ResourceCategory.NAVIGATION: "nav_graph.xml",
    ResourceCategory.ANIMATION: "anim_generated.xml",
    ResourceCategory.COLOR: "color_generated.xml",
    ResourceCategory.MANIFEST: "AndroidManifest.xml",
    ResourceCategory.GENERIC_XML: "xml_generated.xml",
}

# Values files named by their dominant content; first match wins
_VALUES_FILE_NAMES: tuple[tuple[Callable[[str], bool], str], ...] = (
    (lambda c: bool(_tags("string").search(c)) and not _tags("style").search(c), "strings.xml"),
    (lambda c: bool(_tags("dimen").search(c)), "dimens.xml"),
    (lambda c: bool(_tags("style").search(c)), "styles.xml"),
)


class ResourceClassifier:
    """Classifies XML content into an Android resource category."""

    def __init__(
        self,
        layout: LayoutConfig | None = None,
        rules: tuple[ResourceRule, ...] = DEFAULT_RESOURCE_RULES,
    ) -> None:
        """Initialize the classifier.

        Args:
            layout: Project layout conventions.
            rules: Ordered decision list; the first matching rule wins.
        """
        self.layout = layout or LayoutConfig()
        self.rules = rules

    def classify(self, xml_content: str) -> ResourceCategory:
        """Determine the resource category of markup content.

        Args:
            xml_content: XML-like text.

        Returns:
            Exactly one category; GENERIC_XML when no rule matches.
        """
        for rule in self.rules:
            if rule.predicate(xml_content):
                logger.debug("Resource rule matched", rule=rule.name, category=rule.category.value)
                return rule.category
        return ResourceCategory.GENERIC_XML

    def default_file_name(self, category: ResourceCategory, xml_content: str = "") -> str:
        """Default file name for a category, refined by content for values."""
        if category is ResourceCategory.VALUES:
            for predicate, file_name in _VALUES_FILE_NAMES:
                if predicate(xml_content):
                    return file_name
        return _DEFAULT_FILE_NAMES[category]

    def resource_directory(self, category: ResourceCategory, base_path: str | None = None) -> str:
        """Project-relative directory for a category.

        A base path that already contains a resource segment is respected
        as-is; otherwise the category sub-directory is appended to it (or to
        the main source set when no base path is given).

        Args:
            category: The resource category.
            base_path: Optional caller-supplied project-relative directory.

        Returns:
            Normalized project-relative directory.
        """
        base = ProjectTree.normalize_relative_path(base_path) if base_path else ""
        if base and self.layout.resource_dir in base.split("/"):
            return base

        root = base or self.layout.main_root
        if category is ResourceCategory.MANIFEST:
            return root
        return ProjectTree.join(root, self.layout.resource_dir, category.value)
