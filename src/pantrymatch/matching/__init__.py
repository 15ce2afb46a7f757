"""Match recipe ingredients against a user's pantry."""

from pantrymatch.matching.availability import (
    count_match_types,
    count_matching_ingredients,
    is_available,
    match_percentage,
    normalize_name,
    tokenize,
    tokens_overlap_enough,
)
from pantrymatch.matching.scoring import (
    IngredientMatch,
    WeightedScoreResult,
    annotate_match_types,
    calculate_weighted_score,
    filter_by_score,
    find_partial_match,
    find_substitute_match,
    is_exact_match,
    sort_by_score,
)
from pantrymatch.matching.substitutions import (
    SUBSTITUTION_MAP,
    categorize_ingredient,
    lookup_substitutes,
    to_structured_ingredient,
)

__all__ = [
    "SUBSTITUTION_MAP",
    "IngredientMatch",
    "WeightedScoreResult",
    "annotate_match_types",
    "calculate_weighted_score",
    "categorize_ingredient",
    "count_match_types",
    "count_matching_ingredients",
    "filter_by_score",
    "find_partial_match",
    "find_substitute_match",
    "is_available",
    "is_exact_match",
    "lookup_substitutes",
    "match_percentage",
    "normalize_name",
    "sort_by_score",
    "to_structured_ingredient",
    "tokenize",
    "tokens_overlap_enough",
]
