"""Common data schemas shared by the extractor, the matcher and the batch tools."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class IngredientCategory(str, Enum):
    """How much an ingredient matters to a recipe."""

    KEY = "key"
    IMPORTANT = "important"
    FLAVOR = "flavor"
    BASE = "base"


class MatchType(str, Enum):
    """How a recipe ingredient is covered by the user's pantry."""

    EXACT = "exact"
    SUBSTITUTE = "substitute"
    PARTIAL = "partial"
    NONE = "none"


class StructuredIngredient(BaseModel):
    """
    One ingredient of a recipe, split into amount, unit and name.

    `amount` and `unit` are both empty when the quantity is unknown.
    `display_name` is for rendering only; lookups always use `name`.
    `match_type` is a transient annotation and is never persisted.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: str
    amount: str = ""
    unit: str = ""
    category: IngredientCategory | None = None
    substitutes: list[str] = Field(default_factory=list)
    notes: str | None = None
    is_required: bool | None = None
    display_name: str | None = None
    match_type: MatchType | None = Field(default=None, alias="matchType")

    @field_validator("amount", "unit", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> Any:
        if value is None:
            return ""
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("category", "match_type", mode="before")
    @classmethod
    def _normalize_label(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower() or None
        return value

    @field_validator("substitutes", mode="before")
    @classmethod
    def _coerce_substitutes(cls, value: Any) -> Any:
        return [] if value is None else value

    @property
    def is_base(self) -> bool:
        return self.category == IngredientCategory.BASE

    def to_record(self) -> dict[str, Any]:
        """
        Convert to the JSON dict stored in the recipe's ingredient list.

        Only keys that were present on input or set since are written, so a
        stored `"notes": null` survives a rewrite. `amount` and `unit` are
        always written.
        """
        record = self.model_dump(
            mode="json",
            by_alias=True,
            exclude={"match_type"},
            exclude_unset=True,
        )
        record.setdefault("amount", self.amount)
        record.setdefault("unit", self.unit)
        return record


class MatchDetails(BaseModel):
    """Aggregate match summary for one recipe, recomputed on every request."""

    exact_matches: int = 0
    substitute_matches: int = 0
    partial_matches: int = 0
    missing_ingredients: list[str] = Field(default_factory=list)


class MatchPercentage(BaseModel):
    """Share of recipe ingredients found in the pantry, for "X% match" badges."""

    matching_count: int
    total_count: int
    percentage: int


class MatchCounts(BaseModel):
    """Per-type counts over non-base ingredients."""

    exact: int = 0
    substitute: int = 0
    missing: int = 0
    total: int = 0
