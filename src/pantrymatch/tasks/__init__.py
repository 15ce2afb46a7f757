"""Batch jobs run over the stored recipe collection."""

from pantrymatch.tasks.fix_ingredients import (
    FixResult,
    apply_fixes,
    fix_recipe_ingredients,
    preview_changes,
    run_fix,
)

__all__ = [
    "FixResult",
    "apply_fixes",
    "fix_recipe_ingredients",
    "preview_changes",
    "run_fix",
]
