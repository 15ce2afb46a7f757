"""Unit vocabulary and quantity/unit extraction from ingredient names."""

import re
from types import MappingProxyType

from pantrymatch.logging_config import get_logger
from pantrymatch.matching.substitutions import categorize_ingredient, lookup_substitutes
from pantrymatch.normalize.fractions import normalize_unicode_fractions
from pantrymatch.schemas import IngredientCategory, StructuredIngredient

logger = get_logger(__name__)


# =============================================================================
# Unit Vocabulary (alias -> canonical unit)
# =============================================================================

WEIGHT_UNITS = MappingProxyType(
    {
        "g": "g",
        "gram": "g",
        "grams": "g",
        "kg": "kg",
        "kilogram": "kg",
        "kilograms": "kg",
        "oz": "oz",
        "ounce": "oz",
        "ounces": "oz",
        "lb": "lb",
        "lbs": "lb",
        "pound": "lb",
        "pounds": "lb",
    }
)

VOLUME_UNITS = MappingProxyType(
    {
        "ml": "ml",
        "milliliter": "ml",
        "milliliters": "ml",
        "millilitre": "ml",
        "millilitres": "ml",
        "l": "l",
        "liter": "l",
        "liters": "l",
        "litre": "l",
        "litres": "l",
        "tbsp": "tbsp",
        "tablespoon": "tbsp",
        "tablespoons": "tbsp",
        "tsp": "tsp",
        "teaspoon": "tsp",
        "teaspoons": "tsp",
        "cup": "cup",
        "cups": "cup",
    }
)

COUNT_UNITS = MappingProxyType(
    {
        "can": "can",
        "cans": "can",
        "jar": "jar",
        "jars": "jar",
        "slice": "slice",
        "slices": "slice",
        "piece": "piece",
        "pieces": "piece",
        "clove": "clove",
        "cloves": "clove",
        "bunch": "bunch",
        "bunches": "bunch",
        "sprig": "sprig",
        "sprigs": "sprig",
        "head": "head",
        "heads": "head",
        "stalk": "stalk",
        "stalks": "stalk",
        "strip": "strip",
        "strips": "strip",
        "fillet": "fillet",
        "fillets": "fillet",
        "breast": "breast",
        "breasts": "breast",
        "thigh": "thigh",
        "thighs": "thigh",
        "leg": "leg",
        "legs": "leg",
        "sheet": "sheet",
        "sheets": "sheet",
        "pack": "pack",
        "packs": "pack",
    }
)

INFORMAL_UNITS = MappingProxyType(
    {
        "handful": "handful",
        "handfuls": "handful",
        "pinch": "pinch",
        "pinches": "pinch",
        "dash": "dash",
        "dashes": "dash",
    }
)

UNIT_LOOKUP = MappingProxyType(
    {**WEIGHT_UNITS, **VOLUME_UNITS, **COUNT_UNITS, **INFORMAL_UNITS}
)

# A single number: "2", "2.5", ".5" or a slash fraction kept as a literal ("1/2")
_NUMBER = r"\d*\.?\d+(?:/\d+)?"
# Mixed numbers keep their fractional part: "1 1/2", or "1 0.5" once "1 ½" is normalized
_MIXED_NUMBER = rf"{_NUMBER}(?:\s+(?:\d+/\d+|\d*\.\d+))?"
_QUANTITY = rf"{_MIXED_NUMBER}(?:-{_NUMBER})?"
# Longest alias first so "lbs" is never shadowed by "lb"
_UNIT_ALTERNATION = "|".join(
    re.escape(unit) for unit in sorted(UNIT_LOOKUP, key=len, reverse=True)
)

QUANTITY_WITH_UNIT_PATTERN = re.compile(
    rf"^({_QUANTITY})\s+({_UNIT_ALTERNATION})\s+(.+)$",
    re.IGNORECASE,
)
QUANTITY_PATTERN = re.compile(rf"^({_QUANTITY})\s+(.+)$")

# Line-level forms handled by parse_ingredient_line
_INFORMAL_ALTERNATION = "|".join(sorted(INFORMAL_UNITS, key=len, reverse=True))
INFORMAL_OF_PATTERN = re.compile(
    rf"^({_INFORMAL_ALTERNATION})\s+of\s+(.+)$",
    re.IGNORECASE,
)
TO_TASTE_PATTERN = re.compile(r"^(.+?)\s+to\s+taste$", re.IGNORECASE)
NOTES_PATTERN = re.compile(r"^(.+?),\s*(.+)$")

TO_TASTE_UNIT = "to taste"
MAX_LINE_SUBSTITUTES = 5


def canonical_unit(unit: str) -> str:
    """
    Map a unit alias to its canonical form.

    Examples:
        "Cloves" -> "clove"
        "tablespoons" -> "tbsp"

    Unknown units are returned lowercased and stripped.
    """
    unit = unit.lower().strip()
    return UNIT_LOOKUP.get(unit, unit)


def is_known_unit(unit: str) -> bool:
    """Check whether a unit belongs to the fixed vocabulary."""
    return unit.lower().strip() in UNIT_LOOKUP


def extract_structured(ingredient: StructuredIngredient) -> StructuredIngredient:
    """
    Move a leading quantity (and unit) out of an ingredient's name.

    Ingredients that already carry an amount are returned as is, which makes
    the function safe to run again over already-fixed data.

    Examples:
        "2 cloves garlic" -> amount="2", unit="clove", name="garlic"
        "1½ cups flour"   -> amount="1.5", unit="cup", name="flour"
        "3 eggs"          -> amount="3", name="eggs" (unit untouched)
        "salt to taste"   -> unchanged

    Ranges ("2-3") and slash fractions ("1/2") are stored as literal strings.
    """
    if ingredient.amount and ingredient.amount.strip():
        return ingredient

    name = normalize_unicode_fractions(ingredient.name.strip())

    match = QUANTITY_WITH_UNIT_PATTERN.match(name)
    if match:
        rest = match.group(3).strip()
        return ingredient.model_copy(
            update={
                "amount": match.group(1),
                "unit": canonical_unit(match.group(2)),
                "name": rest,
                "display_name": rest,
            }
        )

    match = QUANTITY_PATTERN.match(name)
    if match:
        rest = match.group(2).strip()
        return ingredient.model_copy(
            update={
                "amount": match.group(1),
                "name": rest,
                "display_name": rest,
            }
        )

    return ingredient


def parse_ingredient_line(text: str) -> StructuredIngredient:
    """
    Build a full ingredient record from one raw line of a recipe.

    Examples:
        "2 cloves garlic, minced" -> amount="2", unit="clove", name="garlic", notes="minced"
        "pinch of Salt"           -> amount="1", unit="pinch", name="salt"
        "black pepper to taste"   -> unit="to taste", name="black pepper"

    `name` is lowercased for lookups; `display_name` keeps the line's casing.
    Category, substitutes and `is_required` are filled from the keyword
    rules and the substitution map.
    """
    line = text.strip()
    amount = ""
    unit = ""
    name = line

    extracted = extract_structured(StructuredIngredient(name=line))
    informal = INFORMAL_OF_PATTERN.match(line)
    to_taste = TO_TASTE_PATTERN.match(line)

    if extracted.amount:
        amount, unit, name = extracted.amount, extracted.unit, extracted.name
    elif informal:
        amount, unit, name = "1", canonical_unit(informal.group(1)), informal.group(2)
    elif to_taste:
        unit, name = TO_TASTE_UNIT, to_taste.group(1).rstrip(" ,")
    else:
        logger.debug(f"No quantity found in ingredient line: {text!r}")

    notes = None
    match = NOTES_PATTERN.match(name)
    if match:
        name, notes = match.group(1), match.group(2).strip()

    display_name = name.strip()
    category = categorize_ingredient(display_name)

    return StructuredIngredient(
        name=display_name.lower(),
        display_name=display_name,
        amount=amount,
        unit=unit,
        category=category,
        substitutes=list(lookup_substitutes(display_name)[:MAX_LINE_SUBSTITUTES]),
        notes=notes,
        is_required=category != IngredientCategory.BASE,
    )
