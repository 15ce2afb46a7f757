"""
Batch fix for stored ingredients whose name still carries the quantity.

Older imports stored lines like "2 cloves garlic" or "1½ cups flour" entirely
in `name`. This job runs every stored ingredient through `extract_structured`
and, in apply mode, writes back each recipe that changed.

Run with:
    pantrymatch-fix          # dry run: report what would change
    pantrymatch-fix --fix    # persist the changes

Fixing is idempotent, so a run that hit write errors can simply be repeated.
"""

import argparse
import sys
import uuid
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pantrymatch.config import settings
from pantrymatch.database import Base, sync_engine
from pantrymatch.logging_config import LoggingContext, configure_logging, get_logger
from pantrymatch.normalize.units import extract_structured
from pantrymatch.repository import RecipeRepository
from pantrymatch.schemas import StructuredIngredient

logger = get_logger(__name__)


@dataclass
class IngredientChange:
    """One ingredient rewritten by the fixer."""

    before: StructuredIngredient
    after: StructuredIngredient

    def describe(self) -> str:
        return (
            f'"{self.before.name}" -> name="{self.after.name}" '
            f'amount="{self.after.amount}" unit="{self.after.unit}"'
        )


@dataclass
class _RecipeFix:
    recipe_id: str
    title: str
    ingredients: list[StructuredIngredient]
    changes: list[IngredientChange]


class FixResult:
    """Result of a fix run."""

    def __init__(self, dry_run: bool) -> None:
        self.dry_run = dry_run
        self.recipes_total: int = 0
        self.recipes_changed: int = 0
        self.recipes_updated: int = 0
        self.recipes_failed: int = 0
        self.recipes_skipped: int = 0
        self.ingredients_fixed: int = 0
        self.examples: list[str] = []
        self.errors: list[str] = []

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "dry_run": self.dry_run,
            "recipes_total": self.recipes_total,
            "recipes_changed": self.recipes_changed,
            "recipes_updated": self.recipes_updated,
            "recipes_failed": self.recipes_failed,
            "recipes_skipped": self.recipes_skipped,
            "ingredients_fixed": self.ingredients_fixed,
            "examples": self.examples,
            "errors": self.errors,
        }


def fix_recipe_ingredients(
    records: list[dict[str, Any]],
) -> tuple[list[StructuredIngredient], list[IngredientChange]]:
    """
    Run the extractor over one recipe's stored ingredient records.

    Args:
        records: The recipe's stored ingredient dicts.

    Returns:
        The full fixed ingredient list and the ingredients whose name or
        amount changed.

    Raises:
        ValidationError: If a record is not a valid ingredient.
    """
    fixed: list[StructuredIngredient] = []
    changes: list[IngredientChange] = []

    for record in records:
        ingredient = StructuredIngredient.model_validate(record)
        result = extract_structured(ingredient)
        if result.name != ingredient.name or result.amount != ingredient.amount:
            changes.append(IngredientChange(before=ingredient, after=result))
        fixed.append(result)

    return fixed, changes


def _iter_recipe_fixes(repository: RecipeRepository, result: FixResult) -> Iterator[_RecipeFix]:
    # Snapshot rows first: commits during apply expire ORM instances
    rows = [
        (recipe.id, recipe.title, recipe.structured_ingredients or [])
        for recipe in repository.list_with_structured_ingredients()
    ]
    result.recipes_total = len(rows)
    logger.info(f"Found {len(rows)} recipes with structured ingredients")

    for recipe_id, title, records in rows:
        try:
            ingredients, changes = fix_recipe_ingredients(records)
        except ValidationError as e:
            logger.warning(f"Skipping recipe {title!r}: invalid ingredient record: {e}")
            result.recipes_skipped += 1
            result.errors.append(f"{title}: invalid ingredient record")
            continue

        yield _RecipeFix(recipe_id=recipe_id, title=title, ingredients=ingredients, changes=changes)


def preview_changes(repository: RecipeRepository, limit: int | None = None) -> FixResult:
    """
    Report which ingredients would change, without writing anything.

    Args:
        repository: Recipe store to read from.
        limit: Maximum number of example diffs to keep (defaults to settings).

    Returns:
        FixResult where `ingredients_fixed` counts ingredients that would change.
    """
    if limit is None:
        limit = settings.fix_preview_limit

    result = FixResult(dry_run=True)

    for recipe_fix in _iter_recipe_fixes(repository, result):
        if not recipe_fix.changes:
            continue
        result.recipes_changed += 1
        result.ingredients_fixed += len(recipe_fix.changes)
        for change in recipe_fix.changes:
            if len(result.examples) < limit:
                result.examples.append(change.describe())

    logger.info(
        f"Dry run: {result.ingredients_fixed} ingredients in "
        f"{result.recipes_changed} recipes would be fixed"
    )
    for example in result.examples:
        logger.info(f"  {example}")

    return result


def apply_fixes(repository: RecipeRepository) -> FixResult:
    """
    Fix and persist every recipe with at least one changed ingredient.

    Recipes are written one at a time. A failed write is logged and the run
    moves on to the next recipe.
    """
    result = FixResult(dry_run=False)

    for recipe_fix in _iter_recipe_fixes(repository, result):
        if not recipe_fix.changes:
            continue
        result.recipes_changed += 1

        with LoggingContext(recipe_id=recipe_fix.recipe_id):
            for change in recipe_fix.changes:
                logger.info(f"[{recipe_fix.title}] {change.describe()}")

            try:
                repository.update_structured_ingredients(
                    recipe_fix.recipe_id,
                    [ingredient.to_record() for ingredient in recipe_fix.ingredients],
                )
            except SQLAlchemyError as e:
                logger.error(f"Failed to update recipe {recipe_fix.title!r}: {e}")
                result.recipes_failed += 1
                result.errors.append(f"{recipe_fix.title}: {e}")
                continue
            except Exception as e:
                logger.exception(f"Unexpected error updating recipe {recipe_fix.title!r}")
                result.recipes_failed += 1
                result.errors.append(f"{recipe_fix.title}: {e}")
                continue

        result.recipes_updated += 1
        result.ingredients_fixed += len(recipe_fix.changes)

    logger.info(
        f"Fix completed: {result.ingredients_fixed} ingredients fixed, "
        f"{result.recipes_updated} recipes updated, {result.recipes_failed} failed"
    )
    return result


def run_fix(apply: bool = False, limit: int | None = None) -> dict[str, Any]:
    """
    Entry point for the fix job against the configured database.

    Args:
        apply: Persist changes; otherwise only preview them.
        limit: Maximum number of example diffs in dry-run mode.

    Returns:
        Dictionary with the run summary.
    """
    Base.metadata.create_all(sync_engine)

    with LoggingContext(run_id=uuid.uuid4().hex), Session(sync_engine) as session:
        repository = RecipeRepository(session)
        if apply:
            result = apply_fixes(repository)
        else:
            result = preview_changes(repository, limit=limit)

    return result.to_dict()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Move leading quantities and units out of stored ingredient names"
    )
    parser.add_argument(
        "--fix", action="store_true", help="Write the changes (default: dry run)"
    )
    parser.add_argument(
        "--limit",
        "-l",
        type=int,
        default=settings.fix_preview_limit,
        help="Number of example changes to show in dry-run mode",
    )
    args = parser.parse_args(argv)

    configure_logging(log_level=settings.log_level)
    summary = run_fix(apply=args.fix, limit=args.limit)

    if not args.fix and summary["ingredients_fixed"] > 0:
        logger.info("Run again with --fix to apply these changes")

    return 0


if __name__ == "__main__":
    sys.exit(main())
