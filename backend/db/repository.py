import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from db.recipe import Recipe as RecipeModel, RecipeLabor, RecipePart
from schemas.recipes import Recipe, RecipeCreate

logger = logging.getLogger(__name__)

SCALAR_FIELDS = (
    "name",
    "weight",
    "yield_percentage",
    "waste_factor",
    "unit_of_measure",
    "inventory_location",
)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _build_parts(parts: List[Dict[str, Any]]) -> List[RecipePart]:
    return [
        RecipePart(name=part["name"], quantity=part["quantity"], cost_per_unit=part["cost_per_unit"])
        for part in parts
    ]


def _build_labor(labor: List[Dict[str, Any]]) -> List[RecipeLabor]:
    return [
        RecipeLabor(type=job["type"], cost_per_hour=job["cost_per_hour"], hours_needed=job["hours_needed"])
        for job in labor
    ]


def _apply_dimensions(recipe: RecipeModel, dimensions: Dict[str, Any]) -> None:
    recipe.length = dimensions["length"]
    recipe.width = dimensions["width"]
    recipe.height = dimensions["height"]
    recipe.dimension_unit = dimensions["unit"]


class RecipeRepository:
    """Persistence for recipes and their parts and labor line items.

    Every write runs in a single transaction, so a failure part way through
    leaves no partial recipe behind. Lookups of unknown ids return ``None``
    (or ``False`` for delete) instead of raising.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _get_model(self, recipe_id: str) -> Optional[RecipeModel]:
        result = await self.session.execute(
            select(RecipeModel).where(RecipeModel.id == recipe_id)
        )
        return result.scalar_one_or_none()

    async def get_by_id(self, recipe_id: str) -> Optional[Recipe]:
        recipe = await self._get_model(recipe_id)
        if not recipe:
            return None
        return Recipe.model_validate(recipe.to_schema)

    async def get_all(self) -> List[Recipe]:
        """All recipes, newest first"""
        result = await self.session.execute(
            select(RecipeModel).order_by(RecipeModel.created_at.desc())
        )
        return [Recipe.model_validate(recipe.to_schema) for recipe in result.scalars().all()]

    async def create(self, data: RecipeCreate) -> Recipe:
        fields = data.model_dump()
        now = _now()
        async with self.session.begin():
            recipe = RecipeModel(
                created_at=now,
                updated_at=now,
                parts=_build_parts(fields["parts"]),
                labor=_build_labor(fields["labor"]),
            )
            for field in SCALAR_FIELDS:
                setattr(recipe, field, fields[field])
            _apply_dimensions(recipe, fields["dimensions"])
            self.session.add(recipe)
            await self.session.flush()
            recipe_id = recipe.id

        logger.info("Created recipe %s (%s)", recipe_id, data.name)
        return await self.get_by_id(recipe_id)

    async def update(self, recipe_id: str, changes: Dict[str, Any]) -> Optional[Recipe]:
        """Merge ``changes`` over the stored recipe.

        ``dimensions`` is replaced as a whole. ``parts`` and ``labor`` are
        replaced only when present in ``changes``.
        """
        async with self.session.begin():
            recipe = await self._get_model(recipe_id)
            if not recipe:
                return None

            for field in SCALAR_FIELDS:
                if field in changes:
                    setattr(recipe, field, changes[field])
            if "dimensions" in changes:
                _apply_dimensions(recipe, changes["dimensions"])
            if "parts" in changes:
                recipe.parts = _build_parts(changes["parts"])
            if "labor" in changes:
                recipe.labor = _build_labor(changes["labor"])
            recipe.updated_at = _now()

        logger.info("Updated recipe %s (fields: %s)", recipe_id, ", ".join(sorted(changes)) or "none")
        return await self.get_by_id(recipe_id)

    async def delete(self, recipe_id: str) -> bool:
        async with self.session.begin():
            recipe = await self._get_model(recipe_id)
            if not recipe:
                return False
            await self.session.delete(recipe)

        logger.info("Deleted recipe %s", recipe_id)
        return True
