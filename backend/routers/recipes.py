from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from core.costing import compute_cost, compute_fleet_summary
from core.errors import RecipeNotFoundError
from core.validation import parse_recipe_create, parse_recipe_update
from db.database import get_async_session
from db.repository import RecipeRepository
from schemas.recipes import CostBreakdown, FleetSummary, Recipe

router = APIRouter()


def get_repository(db: AsyncSession = Depends(get_async_session)) -> RecipeRepository:
    return RecipeRepository(db)


@router.get("", response_model=List[Recipe])
async def get_recipes(repository: RecipeRepository = Depends(get_repository)):
    """Get all recipes, newest first"""
    return await repository.get_all()


# Declared ahead of the per-recipe routes, which share its prefix
@router.get("/cost/summary", response_model=FleetSummary)
async def get_cost_summary(repository: RecipeRepository = Depends(get_repository)):
    """Cost of every recipe plus fleet totals"""
    recipes = await repository.get_all()
    return compute_fleet_summary(recipes)


@router.get("/{recipe_id}/cost", response_model=CostBreakdown)
async def get_recipe_cost(recipe_id: str, repository: RecipeRepository = Depends(get_repository)):
    """Get the cost breakdown of a single recipe"""
    recipe = await repository.get_by_id(recipe_id)
    if not recipe:
        raise RecipeNotFoundError()
    return compute_cost(recipe)


@router.get("/{recipe_id}", response_model=Recipe)
async def get_recipe(recipe_id: str, repository: RecipeRepository = Depends(get_repository)):
    """Get a single recipe by ID"""
    recipe = await repository.get_by_id(recipe_id)
    if not recipe:
        raise RecipeNotFoundError()
    return recipe


@router.post("", response_model=Recipe, status_code=status.HTTP_201_CREATED)
async def create_recipe(request: Request, repository: RecipeRepository = Depends(get_repository)):
    """Create a new recipe"""
    # The body is checked as raw JSON before it becomes a typed RecipeCreate
    data = parse_recipe_create(await request.json())
    return await repository.create(data)


@router.put("/{recipe_id}", response_model=Recipe)
async def update_recipe(recipe_id: str, request: Request, repository: RecipeRepository = Depends(get_repository)):
    """Update the fields present in the request body"""
    changes = parse_recipe_update(await request.json())
    recipe = await repository.update(recipe_id, changes)
    if not recipe:
        raise RecipeNotFoundError()
    return recipe


@router.delete("/{recipe_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_recipe(recipe_id: str, repository: RecipeRepository = Depends(get_repository)):
    """Delete a recipe with its parts and labor"""
    deleted = await repository.delete(recipe_id)
    if not deleted:
        raise RecipeNotFoundError()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
