"""Display vocabulary for match types and ingredient categories."""

from types import MappingProxyType
from typing import NamedTuple

from pantrymatch.schemas import IngredientCategory, MatchType


class MatchTypeDisplay(NamedTuple):
    """Icon kind and label rendered next to a recipe ingredient."""

    icon: str
    label: str


MATCH_TYPE_DISPLAY = MappingProxyType(
    {
        MatchType.EXACT: MatchTypeDisplay(icon="check", label="You have it"),
        MatchType.SUBSTITUTE: MatchTypeDisplay(icon="swap", label="Substitute available"),
        MatchType.PARTIAL: MatchTypeDisplay(icon="similar", label="Similar ingredient"),
        MatchType.NONE: MatchTypeDisplay(icon="cart", label="Need to buy"),
    }
)

CATEGORY_LABELS = MappingProxyType(
    {
        IngredientCategory.KEY: "Key",
        IngredientCategory.IMPORTANT: "Important",
        IngredientCategory.FLAVOR: "Flavor",
        IngredientCategory.BASE: "Base",
    }
)


def match_type_display(match_type: MatchType | str | None) -> MatchTypeDisplay:
    """Look up how to render a match type; unset or unknown renders as "Need to buy"."""
    if isinstance(match_type, str):
        match_type = match_type.strip().lower()
    try:
        key = MatchType(match_type) if match_type else MatchType.NONE
    except ValueError:
        key = MatchType.NONE
    return MATCH_TYPE_DISPLAY[key]


def category_label(category: IngredientCategory | str | None) -> str | None:
    """Look up a category's label; None for unset or unknown categories."""
    if isinstance(category, str):
        category = category.strip().lower()
    if not category:
        return None
    try:
        return CATEGORY_LABELS[IngredientCategory(category)]
    except ValueError:
        return None
