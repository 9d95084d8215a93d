import asyncio
import sys
from pathlib import Path

"""
Seed a few demo recipes into the configured database.

This script can be run from either:
- backend/: `python scripts/seed_demo_recipes.py`
- repo root: `python backend/scripts/seed_demo_recipes.py`
"""

# Allow running from repo root by ensuring `backend/` is on sys.path
BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

from db.database import async_session_maker, create_db_and_tables
from db.repository import RecipeRepository
from schemas.recipes import RecipeCreate


DEMO_RECIPES = [
    {
        "name": "Oak Side Table",
        "weight": 12.5,
        "dimensions": {"length": 60, "width": 45, "height": 55, "unit": "cm"},
        "yield_percentage": 95,
        "waste_factor": 0.12,
        "unit_of_measure": "piece",
        "inventory_location": "Warehouse A",
        "parts": [
            {"name": "oak board", "quantity": 4, "cost_per_unit": 18.5},
            {"name": "wood screw", "quantity": 16, "cost_per_unit": 0.08},
            {"name": "finish oil", "quantity": 0.2, "cost_per_unit": 22},
        ],
        "labor": [
            {"type": "cutting", "cost_per_hour": 28, "hours_needed": 1.5},
            {"type": "assembly", "cost_per_hour": 32, "hours_needed": 2},
            {"type": "finishing", "cost_per_hour": 30, "hours_needed": 1},
        ],
    },
    {
        "name": "Steel Wall Bracket",
        "weight": 0.8,
        "dimensions": {"length": 20, "width": 4, "height": 15, "unit": "cm"},
        "yield_percentage": 98,
        "waste_factor": 0.05,
        "unit_of_measure": "piece",
        "inventory_location": "Shelf B-12",
        "parts": [
            {"name": "steel flat bar", "quantity": 0.35, "cost_per_unit": 6.4},
            {"name": "powder coat", "quantity": 0.05, "cost_per_unit": 40},
        ],
        "labor": [
            {"type": "bending", "cost_per_hour": 35, "hours_needed": 0.25},
            {"type": "welding", "cost_per_hour": 45, "hours_needed": 0.2},
        ],
    },
    {
        "name": "Ceramic Mug",
        "weight": 0.35,
        "dimensions": {"length": 12, "width": 9, "height": 10, "unit": "cm"},
        "yield_percentage": 88,
        "waste_factor": 0.15,
        "unit_of_measure": "piece",
        "inventory_location": "Studio Rack 3",
        "parts": [
            {"name": "stoneware clay", "quantity": 0.45, "cost_per_unit": 2.2},
            {"name": "glaze", "quantity": 0.05, "cost_per_unit": 30},
        ],
        "labor": [
            {"type": "throwing", "cost_per_hour": 25, "hours_needed": 0.3},
            {"type": "glazing", "cost_per_hour": 25, "hours_needed": 0.15},
        ],
    },
]


async def seed():
    await create_db_and_tables()

    async with async_session_maker() as session:
        existing = {recipe.name for recipe in await RecipeRepository(session).get_all()}

    for data in DEMO_RECIPES:
        if data["name"] in existing:
            print(f"Skipping {data['name']} (already exists)")
            continue
        # One session per recipe keeps each insert in its own transaction
        async with async_session_maker() as session:
            recipe = await RecipeRepository(session).create(RecipeCreate(**data))
        print(f"Created {recipe.name} ({recipe.id})")


if __name__ == "__main__":
    asyncio.run(seed())
