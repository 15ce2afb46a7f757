"""Pantry availability checks and per-recipe match statistics."""

import math
import re
from collections.abc import Iterable, Sequence

from pantrymatch.schemas import MatchCounts, MatchPercentage, MatchType, StructuredIngredient

_NON_WORD = re.compile(r"[^\w\s]")

# Share of the smaller token set that must appear in the larger one
TOKEN_OVERLAP_RATIO = 0.5


def normalize_name(name: str) -> str:
    """Lowercase and trim an ingredient name for comparison."""
    return name.lower().strip()


def tokenize(name: str) -> set[str]:
    """
    Split a name into a set of comparison tokens.

    Punctuation is dropped and single-character tokens are ignored:
        "Yellow onion, diced" -> {"yellow", "onion", "diced"}
    """
    cleaned = _NON_WORD.sub("", name.lower())
    return {token for token in cleaned.split() if len(token) > 1}


def tokens_overlap_enough(a: str, b: str) -> bool:
    """
    Check whether two names share enough tokens to be the same ingredient.

    At least one token, and at least half of the smaller name's tokens,
    must appear in the larger one. Names without tokens never match.
    """
    tokens_a = tokenize(a)
    tokens_b = tokenize(b)

    if not tokens_a or not tokens_b:
        return False

    if len(tokens_a) <= len(tokens_b):
        smaller, larger = tokens_a, tokens_b
    else:
        smaller, larger = tokens_b, tokens_a

    match_count = len(smaller & larger)

    return (
        match_count >= min(len(smaller), 1)
        and match_count >= len(smaller) * TOKEN_OVERLAP_RATIO
    )


def is_available(ingredient_name: str, pantry: Iterable[str]) -> bool:
    """
    Check whether a recipe ingredient is covered by any pantry entry.

    A pantry entry covers the ingredient when either name contains the other,
    or when their tokens overlap enough. "yellow onion, diced" is covered
    by "onion". The empty string is contained in every name, so a blank
    pantry entry covers everything and a blank ingredient is covered by
    any entry.
    """
    name = normalize_name(ingredient_name)

    for entry in pantry:
        item = normalize_name(entry)
        if item in name or name in item or tokens_overlap_enough(name, item):
            return True

    return False


def count_matching_ingredients(
    ingredients: Sequence[StructuredIngredient], pantry: Sequence[str]
) -> int:
    """Count ingredients available in the pantry."""
    return sum(1 for ingredient in ingredients if is_available(ingredient.name, pantry))


def match_percentage(
    ingredients: Sequence[StructuredIngredient], pantry: Sequence[str]
) -> MatchPercentage:
    """
    Compute the share of a recipe's ingredients found in the pantry.

    The percentage is rounded half up and is 0 for an empty recipe.
    """
    total_count = len(ingredients)
    matching_count = count_matching_ingredients(ingredients, pantry)

    if total_count > 0:
        percentage = math.floor(matching_count / total_count * 100 + 0.5)
    else:
        percentage = 0

    return MatchPercentage(
        matching_count=matching_count,
        total_count=total_count,
        percentage=percentage,
    )


def count_match_types(ingredients: Iterable[StructuredIngredient]) -> MatchCounts:
    """
    Count annotated match types over a recipe's ingredients.

    Base ingredients (salt, oil, water...) are skipped: they are assumed to be
    on hand and would dilute the counts. Unannotated ingredients count as
    missing; partial matches are left out of every bucket.
    """
    counts = MatchCounts()

    for ingredient in ingredients:
        if ingredient.is_base:
            continue

        if ingredient.match_type == MatchType.EXACT:
            counts.exact += 1
        elif ingredient.match_type == MatchType.SUBSTITUTE:
            counts.substitute += 1
        elif ingredient.match_type in (MatchType.NONE, None):
            counts.missing += 1

    counts.total = counts.exact + counts.substitute + counts.missing
    return counts
