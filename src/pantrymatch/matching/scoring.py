"""Weighted recipe scoring against a user's pantry."""

import math
from collections.abc import Iterable, Sequence
from functools import cmp_to_key
from types import MappingProxyType
from typing import Literal

from pydantic import BaseModel, Field
from rapidfuzz import fuzz, process

from pantrymatch.config import settings
from pantrymatch.logging_config import get_logger
from pantrymatch.matching.availability import normalize_name
from pantrymatch.matching.substitutions import (
    categorize_ingredient,
    clean_name,
    lookup_substitutes,
)
from pantrymatch.schemas import IngredientCategory, MatchDetails, MatchType, StructuredIngredient

logger = get_logger(__name__)


# =============================================================================
# Scoring Tables
# =============================================================================

INGREDIENT_WEIGHTS = MappingProxyType(
    {
        IngredientCategory.KEY: 10,  # main protein or dish base
        IngredientCategory.IMPORTANT: 5,  # vegetables, sauces, cheeses
        IngredientCategory.FLAVOR: 2,  # spices, herbs, seasonings
        IngredientCategory.BASE: 0,  # salt, oil, water: never scored
    }
)

MATCH_MULTIPLIERS = MappingProxyType(
    {
        MatchType.EXACT: 1.0,
        MatchType.SUBSTITUTE: 0.7,
        MatchType.PARTIAL: 0.5,
        MatchType.NONE: 0.0,
    }
)

# Matches found only in the user's base pantry earn a reduced share
BASE_INGREDIENT_WEIGHT = 0.3
MIN_SCORE_THRESHOLD = 40
REQUIRE_KEY_INGREDIENT = True
ALL_KEYS_BONUS = 10
MAX_POSSIBLE_SUBSTITUTES = 5
# Scores closer than this are ordered by missing count instead
SCORE_TIE_MARGIN = 5


class IngredientMatch(BaseModel):
    """Classification of a single recipe ingredient."""

    ingredient: StructuredIngredient
    category: IngredientCategory
    match_type: MatchType
    matched_with: str | None = None
    match_source: Literal["main", "base"] | None = None
    possible_substitutes: list[str] = Field(default_factory=list)


class WeightedScoreResult(BaseModel):
    """Weighted score and per-ingredient classifications for one recipe."""

    recipe_id: str | None = None
    score: float
    matches: list[IngredientMatch] = Field(default_factory=list)
    missing_count: int = 0
    match_details: MatchDetails = Field(default_factory=MatchDetails)

    @property
    def annotated_ingredients(self) -> list[StructuredIngredient]:
        return [match.ingredient for match in self.matches]


# =============================================================================
# Matching Tiers
# =============================================================================


def _significant_tokens(cleaned: str) -> list[str]:
    return [token for token in cleaned.split(" ") if len(token) > 2]


def is_exact_match(ingredient_name: str, pantry: Iterable[str]) -> bool:
    """
    Stricter pantry check used for scoring.

    Unlike `is_available`, a single shared word is not enough between
    multi-word names ("tomato sauce" does not match "tomato paste").
    """
    name = clean_name(ingredient_name)
    if not name:
        return False
    tokens = _significant_tokens(name)

    for entry in pantry:
        item = clean_name(entry)
        if not item:
            continue

        if name == item:
            return True

        item_tokens = _significant_tokens(item)

        # "olive oil" vs "extra virgin olive oil"
        if name in item or item in name:
            if len(tokens) <= len(item_tokens):
                shorter, longer = tokens, item
            else:
                shorter, longer = item_tokens, name
            if all(token in longer for token in shorter):
                return True

        if len(tokens) == 1 or len(item_tokens) == 1:
            if len(tokens) == 1 and len(item_tokens) == 1 and tokens[0] == item_tokens[0]:
                return True
            continue

        shared = [
            token
            for token in tokens
            if any(other == token or other in token or token in other for other in item_tokens)
        ]
        if len(shared) >= 2:
            return True

    return False


def find_substitute_match(
    ingredient_name: str,
    substitutes: Sequence[str],
    pantry: Sequence[str],
) -> str | None:
    """
    Find a substitute for an ingredient that the pantry can cover.

    The ingredient's own substitutes are tried before the global map.
    Returns the substitute name, or None.
    """
    for substitute in substitutes:
        if is_exact_match(substitute, pantry):
            return substitute

    for substitute in lookup_substitutes(ingredient_name):
        if is_exact_match(substitute, pantry):
            return substitute

    return None


def find_partial_match(
    ingredient_name: str,
    pantry: Sequence[str],
    threshold: float | None = None,
) -> str | None:
    """
    Find a pantry entry spelled similarly to the ingredient ("chilli" / "chili").

    Returns the pantry entry, or None when nothing reaches the threshold.
    """
    if threshold is None:
        threshold = settings.partial_match_threshold

    query = normalize_name(ingredient_name)
    choices = [entry for entry in pantry if normalize_name(entry)]
    if not query or not choices:
        return None

    result = process.extractOne(
        query,
        choices,
        scorer=fuzz.ratio,
        processor=normalize_name,
        score_cutoff=threshold,
    )
    if result is None:
        return None

    return result[0]


def _classify(
    ingredient: StructuredIngredient,
    pantry: Sequence[str],
    threshold: float | None,
) -> tuple[MatchType, str | None]:
    if not pantry:
        return MatchType.NONE, None

    if is_exact_match(ingredient.name, pantry):
        return MatchType.EXACT, None

    substitute = find_substitute_match(ingredient.name, ingredient.substitutes, pantry)
    if substitute:
        return MatchType.SUBSTITUTE, substitute

    similar = find_partial_match(ingredient.name, pantry, threshold)
    if similar:
        return MatchType.PARTIAL, similar

    return MatchType.NONE, None


# =============================================================================
# Recipe Scoring
# =============================================================================


def calculate_weighted_score(
    ingredients: Sequence[StructuredIngredient],
    pantry: Sequence[str],
    base_pantry: Sequence[str] = (),
    recipe_id: str | None = None,
    partial_threshold: float | None = None,
) -> WeightedScoreResult:
    """
    Score a recipe against the user's pantry.

    Args:
        ingredients: The recipe's structured ingredients (never mutated).
        pantry: Ingredients the user listed for this search.
        base_pantry: Staples from the user's profile; matches here earn
            only BASE_INGREDIENT_WEIGHT of the usual points.
        recipe_id: Optional id carried through for ranking.
        partial_threshold: Override for the "similar ingredient" threshold.

    Returns:
        WeightedScoreResult with a 0-100 score, annotated matches and MatchDetails.
    """
    total_weight = 0.0
    earned_points = 0.0
    details = MatchDetails()
    matches: list[IngredientMatch] = []

    for ingredient in ingredients:
        category = ingredient.category or categorize_ingredient(ingredient.name)

        # Base ingredients are assumed to be on hand
        if category == IngredientCategory.BASE:
            matches.append(
                IngredientMatch(
                    ingredient=ingredient.model_copy(update={"match_type": MatchType.EXACT}),
                    category=category,
                    match_type=MatchType.EXACT,
                )
            )
            continue

        weight = INGREDIENT_WEIGHTS[category]
        total_weight += weight

        match_type, matched_with = _classify(ingredient, pantry, partial_threshold)
        source: Literal["main", "base"] | None = "main"
        share = 1.0

        if match_type == MatchType.NONE:
            match_type, matched_with = _classify(ingredient, base_pantry, partial_threshold)
            source = "base"
            share = BASE_INGREDIENT_WEIGHT

        earned_points += weight * MATCH_MULTIPLIERS[match_type] * share

        possible_substitutes: list[str] = []
        if match_type == MatchType.EXACT:
            details.exact_matches += 1
        elif match_type == MatchType.SUBSTITUTE:
            details.substitute_matches += 1
        elif match_type == MatchType.PARTIAL:
            details.partial_matches += 1
        else:
            source = None
            details.missing_ingredients.append(ingredient.name)
            possible_substitutes = list(
                dict.fromkeys([*ingredient.substitutes, *lookup_substitutes(ingredient.name)])
            )[:MAX_POSSIBLE_SUBSTITUTES]

        matches.append(
            IngredientMatch(
                ingredient=ingredient.model_copy(update={"match_type": match_type}),
                category=category,
                match_type=match_type,
                matched_with=matched_with,
                match_source=source,
                possible_substitutes=possible_substitutes,
            )
        )

    score = earned_points / total_weight * 100 if total_weight > 0 else 0.0

    key_matches = [m for m in matches if m.category == IngredientCategory.KEY]
    if key_matches and all(m.match_type != MatchType.NONE for m in key_matches):
        score = min(100.0, score + ALL_KEYS_BONUS)

    result = WeightedScoreResult(
        recipe_id=recipe_id,
        score=math.floor(score * 10 + 0.5) / 10,
        matches=matches,
        missing_count=len(details.missing_ingredients),
        match_details=details,
    )

    logger.debug(
        f"Scored recipe {recipe_id or '<unsaved>'}: score={result.score}, "
        f"exact={details.exact_matches}, substitute={details.substitute_matches}, "
        f"missing={result.missing_count}"
    )
    return result


def annotate_match_types(
    ingredients: Sequence[StructuredIngredient],
    pantry: Sequence[str],
    base_pantry: Sequence[str] = (),
) -> list[StructuredIngredient]:
    """Return copies of the ingredients with `match_type` filled in for display."""
    return calculate_weighted_score(ingredients, pantry, base_pantry).annotated_ingredients


def _passes_filters(result: WeightedScoreResult) -> bool:
    if result.score < MIN_SCORE_THRESHOLD:
        return False

    if REQUIRE_KEY_INGREDIENT and not any(
        m.category == IngredientCategory.KEY and m.match_type != MatchType.NONE
        for m in result.matches
    ):
        return False

    # Recipes matched only through base staples are not worth showing
    return any(
        m.category in (IngredientCategory.KEY, IngredientCategory.IMPORTANT)
        and m.match_type != MatchType.NONE
        and m.match_source == "main"
        for m in result.matches
    )


def filter_by_score(results: Iterable[WeightedScoreResult]) -> list[WeightedScoreResult]:
    """Keep recipes worth showing for the user's pantry."""
    return [result for result in results if _passes_filters(result)]


def _compare_results(a: WeightedScoreResult, b: WeightedScoreResult) -> float:
    if abs(a.score - b.score) > SCORE_TIE_MARGIN:
        return b.score - a.score
    return a.missing_count - b.missing_count


def sort_by_score(results: Iterable[WeightedScoreResult]) -> list[WeightedScoreResult]:
    """Order recipes by score, using missing count when scores are close."""
    return sorted(results, key=cmp_to_key(_compare_results))
