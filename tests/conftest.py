"""Pytest configuration and shared fixtures."""

import os

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from pantrymatch.database import Base
from pantrymatch.models import Recipe
from pantrymatch.schemas import IngredientCategory, MatchType, StructuredIngredient

# =============================================================================
# Ingredient Fixtures
# =============================================================================


@pytest.fixture
def sample_pantry():
    """A user's pantry as typed into the search box."""
    return ["chicken breast", "onion", "Greek yogurt", "pasta"]


@pytest.fixture
def annotated_ingredients():
    """Recipe ingredients already annotated by the scoring step."""
    return [
        StructuredIngredient(
            name="chicken breast",
            amount="500",
            unit="g",
            category=IngredientCategory.KEY,
            match_type=MatchType.EXACT,
        ),
        StructuredIngredient(
            name="paprika",
            amount="1",
            unit="tsp",
            category=IngredientCategory.FLAVOR,
            match_type=MatchType.NONE,
        ),
        StructuredIngredient(
            name="parsley",
            category=IngredientCategory.FLAVOR,
        ),
        StructuredIngredient(
            name="salt",
            category=IngredientCategory.BASE,
            match_type=MatchType.NONE,
        ),
    ]


# =============================================================================
# Test Database Fixtures
# =============================================================================


def get_test_database_url() -> str:
    """Get the test database URL from environment or use in-memory SQLite."""
    return os.environ.get("TEST_DATABASE_URL", "sqlite://")


@pytest.fixture(scope="function")
def test_db_engine():
    """Create a test database engine.

    The default in-memory database is shared across connections through
    StaticPool, so data committed in one session is visible to the next.
    """
    database_url = get_test_database_url()
    if database_url.startswith("sqlite"):
        engine = create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        engine = create_engine(database_url, echo=False)

    Base.metadata.create_all(engine)

    yield engine

    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture(scope="function")
def test_session(test_db_engine):
    """Create a test database session."""
    with Session(test_db_engine) as session:
        yield session


@pytest.fixture
def sample_recipes(test_session):
    """Store recipes in the shapes older imports left behind."""
    recipes = [
        Recipe(
            id="recipe-001",
            title="Garlic Chicken",
            structured_ingredients=[
                {"name": "2 cloves garlic", "amount": "", "unit": "", "category": "flavor"},
                {"name": "chicken breast", "amount": "500", "unit": "g", "category": "key"},
            ],
        ),
        Recipe(
            id="recipe-002",
            title="Pancakes",
            structured_ingredients=[
                {"name": "1½ cups flour", "amount": "", "unit": "", "category": "base"},
                {"name": "2 eggs", "amount": "", "unit": "", "category": "important"},
                {"name": "salt to taste", "amount": "", "unit": "", "category": "base"},
            ],
        ),
        Recipe(
            id="recipe-003",
            title="Green Salad",
            structured_ingredients=[
                {"name": "lettuce", "amount": "1", "unit": "head", "category": "key"},
            ],
        ),
        Recipe(
            id="recipe-004",
            title="Untouched Import",
            structured_ingredients=None,
        ),
    ]
    test_session.add_all(recipes)
    test_session.commit()
    return recipes
