"""Unicode vulgar fraction normalization."""

import re
from decimal import Decimal
from types import MappingProxyType

# Fixed decimal values, rounded as stored; never computed from the glyph
UNICODE_FRACTIONS = MappingProxyType(
    {
        "½": "0.5",
        "⅓": "0.33",
        "⅔": "0.67",
        "¼": "0.25",
        "¾": "0.75",
        "⅕": "0.2",
        "⅖": "0.4",
        "⅗": "0.6",
        "⅘": "0.8",
        "⅙": "0.17",
        "⅚": "0.83",
        "⅛": "0.125",
        "⅜": "0.375",
        "⅝": "0.625",
        "⅞": "0.875",
    }
)

_FRACTION_PATTERN = re.compile(rf"(\d*)([{''.join(UNICODE_FRACTIONS)}])")


def _replace_fraction(match: re.Match) -> str:
    whole, glyph = match.group(1), match.group(2)
    decimal = UNICODE_FRACTIONS[glyph]
    if not whole:
        return decimal
    return str(Decimal(whole) + Decimal(decimal))


def normalize_unicode_fractions(text: str) -> str:
    """
    Replace unicode fraction glyphs with decimal literals.

    Examples:
        "1½ cups flour" -> "1.5 cups flour"
        "¾ tsp salt" -> "0.75 tsp salt"

    A glyph directly preceded by digits is added to that whole number;
    a glyph on its own becomes its bare decimal value. Any other
    character passes through unchanged.
    """
    if not text:
        return text
    return _FRACTION_PATTERN.sub(_replace_fraction, text)
