import asyncio

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from conftest import make_recipe_payload
from db.recipe import RecipeLabor, RecipePart
from db.repository import RecipeRepository
from schemas.recipes import Labor, RecipeCreate


def run(session_maker, operation):
    async def scenario():
        async with session_maker() as session:
            return await operation(RecipeRepository(session))

    return asyncio.run(scenario())


def test_failed_create_writes_nothing(session_maker):
    data = RecipeCreate(**make_recipe_payload())
    # Bypass validation so the labor row violates NOT NULL on insert
    data.labor.append(Labor.model_construct(type=None, cost_per_hour=1.0, hours_needed=1.0))

    with pytest.raises(IntegrityError):
        run(session_maker, lambda repository: repository.create(data))

    assert run(session_maker, lambda repository: repository.get_all()) == []


def test_update_merges_over_existing(session_maker):
    created = run(session_maker, lambda repository: repository.create(RecipeCreate(**make_recipe_payload())))

    updated = run(
        session_maker,
        lambda repository: repository.update(created.id, {"name": "Renamed", "inventory_location": "Bin 4"}),
    )

    assert updated.name == "Renamed"
    assert updated.inventory_location == "Bin 4"
    assert updated.weight == created.weight
    assert updated.dimensions == created.dimensions
    assert updated.parts == created.parts


def test_update_unknown_id_returns_none(session_maker):
    assert run(session_maker, lambda repository: repository.update("missing", {"name": "x"})) is None


def test_delete_unknown_id_returns_false(session_maker):
    assert run(session_maker, lambda repository: repository.delete("missing")) is False


def test_delete_cascades_to_line_items(session_maker):
    created = run(session_maker, lambda repository: repository.create(RecipeCreate(**make_recipe_payload())))

    assert run(session_maker, lambda repository: repository.delete(created.id)) is True
    assert run(session_maker, lambda repository: repository.get_by_id(created.id)) is None

    async def count_line_items(repository):
        parts = await repository.session.scalar(select(func.count()).select_from(RecipePart))
        labor = await repository.session.scalar(select(func.count()).select_from(RecipeLabor))
        return parts, labor

    assert run(session_maker, count_line_items) == (0, 0)
