"""Tests for the stored ingredient batch fix."""

from unittest.mock import MagicMock, patch

import pytest
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from pantrymatch.models import Recipe
from pantrymatch.repository import RecipeRepository
from pantrymatch.tasks import apply_fixes, fix_recipe_ingredients, preview_changes, run_fix
from pantrymatch.tasks.fix_ingredients import main


def _stored_ingredients(session, recipe_id: str) -> list[dict]:
    session.expire_all()
    return session.get(Recipe, recipe_id).structured_ingredients


class TestFixRecipeIngredients:
    """Tests for fixing one recipe's ingredient records."""

    def test_changes_reported(self):
        """Test that only rewritten ingredients are reported as changes."""
        records = [
            {"name": "2 cloves garlic", "amount": "", "unit": ""},
            {"name": "chicken breast", "amount": "500", "unit": "g"},
        ]

        fixed, changes = fix_recipe_ingredients(records)

        assert [i.name for i in fixed] == ["garlic", "chicken breast"]
        assert len(changes) == 1
        assert changes[0].before.name == "2 cloves garlic"
        assert changes[0].describe() == (
            '"2 cloves garlic" -> name="garlic" amount="2" unit="clove"'
        )

    def test_no_changes(self):
        """Test records that are already structured."""
        fixed, changes = fix_recipe_ingredients([{"name": "salt", "amount": "", "unit": ""}])

        assert fixed[0].name == "salt"
        assert changes == []

    def test_invalid_record_raises(self):
        """Test that invalid records surface as validation errors."""
        with pytest.raises(ValidationError):
            fix_recipe_ingredients([{"name": "2 cups sugar", "category": "dessert"}])


class TestPreviewChanges:
    """Tests for dry-run mode."""

    def test_preview_counts(self, test_session, sample_recipes):
        """Test the counts reported by a dry run."""
        result = preview_changes(RecipeRepository(test_session))

        assert result.dry_run is True
        assert result.recipes_total == 3
        assert result.recipes_changed == 2
        assert result.ingredients_fixed == 3
        assert result.recipes_updated == 0
        assert result.examples[0] == (
            '"2 cloves garlic" -> name="garlic" amount="2" unit="clove"'
        )

    def test_preview_writes_nothing(self, test_session, sample_recipes):
        """Test that a dry run leaves stored data untouched."""
        preview_changes(RecipeRepository(test_session))

        stored = _stored_ingredients(test_session, "recipe-001")
        assert stored[0]["name"] == "2 cloves garlic"
        assert stored[0]["amount"] == ""

    def test_preview_limit(self, test_session, sample_recipes):
        """Test that the example list is capped but counts are not."""
        result = preview_changes(RecipeRepository(test_session), limit=1)

        assert len(result.examples) == 1
        assert result.ingredients_fixed == 3

    def test_preview_empty_store(self, test_session):
        """Test a dry run with no recipes."""
        result = preview_changes(RecipeRepository(test_session))

        assert result.recipes_total == 0
        assert result.ingredients_fixed == 0
        assert result.examples == []


class TestApplyFixes:
    """Tests for apply mode."""

    def test_apply_persists(self, test_session, sample_recipes):
        """Test that fixed ingredients are written back."""
        result = apply_fixes(RecipeRepository(test_session))

        assert result.dry_run is False
        assert result.recipes_updated == 2
        assert result.ingredients_fixed == 3
        assert result.recipes_failed == 0

        garlic, chicken = _stored_ingredients(test_session, "recipe-001")
        assert garlic["name"] == "garlic"
        assert garlic["amount"] == "2"
        assert garlic["unit"] == "clove"
        assert garlic["category"] == "flavor"
        assert chicken == {
            "name": "chicken breast",
            "amount": "500",
            "unit": "g",
            "category": "key",
        }

        flour = _stored_ingredients(test_session, "recipe-002")[0]
        assert flour["amount"] == "1.5"
        assert flour["unit"] == "cup"
        assert flour["name"] == "flour"

    def test_unchanged_recipe_not_written(self, test_session, sample_recipes):
        """Test that recipes without changes keep their stored records."""
        apply_fixes(RecipeRepository(test_session))

        assert _stored_ingredients(test_session, "recipe-003") == [
            {"name": "lettuce", "amount": "1", "unit": "head", "category": "key"},
        ]

    def test_stored_nulls_survive(self, test_session):
        """Test that a rewrite only touches the extracted fields."""
        test_session.add(
            Recipe(
                id="recipe-010",
                title="Omelette",
                structured_ingredients=[
                    {"name": "3 eggs", "amount": "", "unit": "", "notes": None},
                ],
            )
        )
        test_session.commit()

        apply_fixes(RecipeRepository(test_session))

        assert _stored_ingredients(test_session, "recipe-010") == [
            {"name": "eggs", "amount": "3", "unit": "", "notes": None, "display_name": "eggs"},
        ]

    def test_second_run_is_noop(self, test_session, sample_recipes):
        """Test that fixing is idempotent."""
        repository = RecipeRepository(test_session)
        apply_fixes(repository)

        second = apply_fixes(repository)

        assert second.recipes_changed == 0
        assert second.ingredients_fixed == 0
        assert preview_changes(repository).ingredients_fixed == 0

    def test_failed_write_does_not_stop_run(self, test_session, sample_recipes):
        """Test that a failing recipe is counted and the next one is still written."""
        repository = RecipeRepository(test_session)

        with patch.object(
            repository,
            "update_structured_ingredients",
            side_effect=[SQLAlchemyError("disk full"), None],
        ) as mock_update:
            result = apply_fixes(repository)

        assert mock_update.call_count == 2
        assert result.recipes_failed == 1
        assert result.recipes_updated == 1
        # Only the pancake fixes were written
        assert result.ingredients_fixed == 2
        assert result.errors[0].startswith("Garlic Chicken:")

    def test_unexpected_error_does_not_stop_run(self, test_session, sample_recipes):
        """Test that a non-database error on one recipe is logged and the run continues."""
        repository = RecipeRepository(test_session)

        with patch.object(
            repository,
            "update_structured_ingredients",
            side_effect=[None, ValueError("unserializable record")],
        ):
            result = apply_fixes(repository)

        assert result.recipes_updated == 1
        assert result.recipes_failed == 1
        assert result.ingredients_fixed == 1
        assert result.errors == ["Pancakes: unserializable record"]

    def test_invalid_recipe_skipped(self, test_session, sample_recipes):
        """Test that a recipe with invalid records is skipped, not fatal."""
        test_session.add(
            Recipe(
                id="recipe-000",
                title="Broken Import",
                structured_ingredients=[{"name": "2 cups sugar", "category": "dessert"}],
            )
        )
        test_session.commit()

        result = apply_fixes(RecipeRepository(test_session))

        assert result.recipes_total == 4
        assert result.recipes_skipped == 1
        assert result.recipes_updated == 2
        assert _stored_ingredients(test_session, "recipe-000")[0]["name"] == "2 cups sugar"


class TestRecipeRepository:
    """Tests for the recipe store adapter."""

    def test_lists_only_structured(self, test_session, sample_recipes):
        """Test that recipes without an ingredient list are left out."""
        recipes = RecipeRepository(test_session).list_with_structured_ingredients()

        assert [r.id for r in recipes] == ["recipe-001", "recipe-002", "recipe-003"]

    def test_update_rolls_back_on_error(self):
        """Test that a failed write rolls the session back and re-raises."""
        session = MagicMock()
        session.execute.side_effect = SQLAlchemyError("boom")
        repository = RecipeRepository(session)

        with pytest.raises(SQLAlchemyError):
            repository.update_structured_ingredients("recipe-001", [])

        session.rollback.assert_called_once()
        session.commit.assert_not_called()


class TestRunFix:
    """Tests for the job entry points."""

    def test_run_fix_apply(self, test_db_engine, sample_recipes):
        """Test a full apply run against a database."""
        with patch("pantrymatch.tasks.fix_ingredients.sync_engine", test_db_engine):
            summary = run_fix(apply=True)

        assert summary["dry_run"] is False
        assert summary["recipes_updated"] == 2
        assert summary["ingredients_fixed"] == 3

    def test_run_fix_defaults_to_dry_run(self, test_db_engine, sample_recipes):
        """Test that run_fix previews unless asked to apply."""
        with patch("pantrymatch.tasks.fix_ingredients.sync_engine", test_db_engine):
            summary = run_fix()

        assert summary["dry_run"] is True
        assert summary["recipes_updated"] == 0

    @patch("pantrymatch.tasks.fix_ingredients.configure_logging")
    @patch("pantrymatch.tasks.fix_ingredients.run_fix")
    def test_main_dry_run(self, mock_run_fix, mock_configure_logging):
        """Test that the CLI previews by default."""
        mock_run_fix.return_value = {"ingredients_fixed": 0}

        assert main([]) == 0
        mock_run_fix.assert_called_once_with(apply=False, limit=20)

    @patch("pantrymatch.tasks.fix_ingredients.configure_logging")
    @patch("pantrymatch.tasks.fix_ingredients.run_fix")
    def test_main_fix_flag(self, mock_run_fix, mock_configure_logging):
        """Test that --fix switches to apply mode."""
        mock_run_fix.return_value = {"ingredients_fixed": 3}

        assert main(["--fix", "--limit", "5"]) == 0
        mock_run_fix.assert_called_once_with(apply=True, limit=5)
