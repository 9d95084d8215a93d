"""
Recipe cost calculation.

All arithmetic is plain floating point; results are not rounded.
"""
from typing import Iterable, Optional, Sequence

from core.errors import InvalidRecipeError
from schemas.recipes import (
    CostBreakdown,
    CostSummary,
    FleetSummary,
    FleetTotals,
    Labor,
    Part,
    Recipe,
    RecipeCostLine,
)

CURRENCY = "USD"
DEFAULT_UNIT_OF_MEASURE = "piece"


def parts_cost(parts: Iterable[Part]) -> float:
    return sum((part.quantity * part.cost_per_unit for part in parts), 0)


def labor_cost(labor: Iterable[Labor]) -> float:
    return sum((job.hours_needed * job.cost_per_hour for job in labor), 0)


def compute_cost(recipe: Optional[Recipe]) -> CostBreakdown:
    """Cost breakdown for one recipe, inflating the subtotal by its waste factor"""
    if recipe is None:
        raise InvalidRecipeError("Recipe is required for cost calculation")

    subtotal = parts_cost(recipe.parts) + labor_cost(recipe.labor)
    total = subtotal / (1 - (recipe.waste_factor or 0))

    return CostBreakdown(
        recipe_id=recipe.id,
        recipe_name=recipe.name,
        cost_summary=CostSummary(
            subtotal=subtotal,
            waste_factor=recipe.waste_factor,
            waste_amount=total - subtotal,
            total=total,
            currency=CURRENCY,
            unit_of_measure=recipe.unit_of_measure or DEFAULT_UNIT_OF_MEASURE,
        ),
    )


def compute_fleet_summary(recipes: Sequence[Recipe]) -> FleetSummary:
    """Per-recipe cost lines plus totals across every recipe"""
    lines = []
    for recipe in recipes:
        breakdown = compute_cost(recipe)
        lines.append(
            RecipeCostLine(
                recipe_id=recipe.id,
                recipe_name=recipe.name,
                total_cost=breakdown.cost_summary.total,
                parts_cost=parts_cost(recipe.parts),
                labor_cost=labor_cost(recipe.labor),
                unit_of_measure=breakdown.cost_summary.unit_of_measure,
            )
        )

    grand_total = sum((line.total_cost for line in lines), 0)
    return FleetSummary(
        recipes=lines,
        totals=FleetTotals(
            total_parts_cost=sum((line.parts_cost for line in lines), 0),
            total_labor_cost=sum((line.labor_cost for line in lines), 0),
            grand_total=grand_total,
            average_cost_per_recipe=grand_total / len(lines) if lines else 0,
            total_recipes=len(lines),
            currency=CURRENCY,
        ),
    )
