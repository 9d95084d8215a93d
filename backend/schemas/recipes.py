from pydantic import BaseModel, Field
from typing import Annotated, List, Optional

# Incoming JSON numbers: no booleans, numeric strings, Infinity or NaN
Number = Annotated[float, Field(strict=True, allow_inf_nan=False)]


class Dimensions(BaseModel):
    length: Number
    width: Number
    height: Number
    unit: str


class Part(BaseModel):
    name: str
    quantity: Number = Field(ge=0)
    cost_per_unit: Number = Field(ge=0)


class Labor(BaseModel):
    type: str
    cost_per_hour: Number = Field(ge=0)
    hours_needed: Number = Field(ge=0)


class Recipe(BaseModel):
    id: str
    name: str
    weight: float
    dimensions: Dimensions
    yield_percentage: float
    waste_factor: float
    unit_of_measure: str
    inventory_location: str
    parts: List[Part]
    labor: List[Labor]
    created_at: str
    updated_at: str


class RecipeCreate(BaseModel):
    name: str
    weight: Number = Field(ge=0)
    dimensions: Dimensions
    yield_percentage: Number = Field(ge=0, le=100)
    waste_factor: Number = Field(ge=0, lt=1)
    unit_of_measure: str
    inventory_location: str
    parts: List[Part]
    labor: List[Labor]


class RecipeUpdate(BaseModel):
    """Partial update; only fields present in the request are applied"""
    name: Optional[str] = None
    weight: Optional[Annotated[Number, Field(ge=0)]] = None
    dimensions: Optional[Dimensions] = None
    yield_percentage: Optional[Annotated[Number, Field(ge=0, le=100)]] = None
    waste_factor: Optional[Annotated[Number, Field(ge=0, lt=1)]] = None
    unit_of_measure: Optional[str] = None
    inventory_location: Optional[str] = None
    parts: Optional[List[Part]] = None
    labor: Optional[List[Labor]] = None


class CostSummary(BaseModel):
    subtotal: float
    waste_factor: float
    waste_amount: float
    total: float
    currency: str
    unit_of_measure: str


class CostBreakdown(BaseModel):
    recipe_id: str
    recipe_name: str
    cost_summary: CostSummary


class RecipeCostLine(BaseModel):
    recipe_id: str
    recipe_name: str
    total_cost: float
    parts_cost: float
    labor_cost: float
    unit_of_measure: str


class FleetTotals(BaseModel):
    total_parts_cost: float
    total_labor_cost: float
    grand_total: float
    average_cost_per_recipe: float
    total_recipes: int
    currency: str


class FleetSummary(BaseModel):
    recipes: List[RecipeCostLine]
    totals: FleetTotals


class ValidationResult(BaseModel):
    valid: bool
    message: Optional[str] = None
