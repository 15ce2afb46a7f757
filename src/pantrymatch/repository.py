"""Repository for reading and rewriting stored recipe ingredient lists."""

from typing import Any

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pantrymatch.logging_config import get_logger
from pantrymatch.models import Recipe

logger = get_logger(__name__)


class RecipeRepository:
    """Recipe store operations used by the batch tools."""

    def __init__(self, session: Session):
        self.session = session

    def list_with_structured_ingredients(self) -> list[Recipe]:
        """Get every recipe that has a structured ingredient list, ordered by id."""
        recipes = (
            self.session.execute(
                select(Recipe)
                .where(Recipe.structured_ingredients.is_not(None))
                .order_by(Recipe.id)
            )
            .scalars()
            .all()
        )
        logger.debug(f"Loaded {len(recipes)} recipes with structured ingredients")
        return list(recipes)

    def update_structured_ingredients(
        self,
        recipe_id: str,
        ingredients: list[dict[str, Any]],
    ) -> None:
        """
        Replace a recipe's structured ingredient list.

        Args:
            recipe_id: Id of the recipe to update.
            ingredients: Ingredient records as stored (see StructuredIngredient.to_record).

        Raises:
            SQLAlchemyError: If the write fails; the session is rolled back first.
        """
        try:
            self.session.execute(
                update(Recipe)
                .where(Recipe.id == recipe_id)
                .values(structured_ingredients=ingredients)
            )
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise
