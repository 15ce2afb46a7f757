"""Normalize raw ingredient text into structured ingredient records."""

from pantrymatch.normalize.fractions import UNICODE_FRACTIONS, normalize_unicode_fractions
from pantrymatch.normalize.units import (
    UNIT_LOOKUP,
    canonical_unit,
    extract_structured,
    is_known_unit,
    parse_ingredient_line,
)

__all__ = [
    "UNICODE_FRACTIONS",
    "UNIT_LOOKUP",
    "canonical_unit",
    "extract_structured",
    "is_known_unit",
    "normalize_unicode_fractions",
    "parse_ingredient_line",
]
