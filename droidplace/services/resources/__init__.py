"""Android resource classification."""

from .service import DEFAULT_RESOURCE_RULES, ResourceClassifier, ResourceRule, has_layout_tags

__all__ = ["DEFAULT_RESOURCE_RULES", "ResourceClassifier", "ResourceRule", "has_layout_tags"]
