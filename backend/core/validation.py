"""
Recipe payload validation.

Request bodies arrive as untyped JSON values. ``validate_recipe`` and
``validate_partial_recipe`` check their shape without raising; the
``parse_*`` helpers run the matching check and then build the typed schema,
raising ``RecipeValidationError`` on any failure.
"""
import math
from typing import Any, Dict

from pydantic import ValidationError

from core.errors import RecipeValidationError
from schemas.recipes import RecipeCreate, RecipeUpdate, ValidationResult

REQUIRED_FIELDS = (
    "name",
    "weight",
    "dimensions",
    "yield_percentage",
    "waste_factor",
    "unit_of_measure",
    "inventory_location",
    "parts",
    "labor",
)

INVALID_DIMENSIONS = "Invalid dimensions object. Must include length, width, height, and unit"
INVALID_PARTS = "Invalid parts array. Each part must have name, quantity, and cost_per_unit"
INVALID_LABOR = "Invalid labor array. Each labor item must have type, cost_per_hour, and hours_needed"
INVALID_WEIGHT = "Weight must be a positive number"
INVALID_YIELD = "Yield percentage must be a number between 0 and 100"
INVALID_WASTE_FACTOR = "Waste factor must be a number between 0 and 1"


def _is_number(value: Any) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def _valid_dimensions(dims: Any) -> bool:
    # Every axis must be truthy, so a 0 dimension is rejected
    return (
        isinstance(dims, dict)
        and bool(dims.get("length"))
        and bool(dims.get("width"))
        and bool(dims.get("height"))
        and bool(dims.get("unit"))
    )


def _valid_parts(parts: Any) -> bool:
    if not isinstance(parts, list):
        return False
    return all(
        isinstance(part, dict)
        and bool(part.get("name"))
        and "quantity" in part
        and "cost_per_unit" in part
        for part in parts
    )


def _valid_labor(labor: Any) -> bool:
    if not isinstance(labor, list):
        return False
    return all(
        isinstance(job, dict)
        and bool(job.get("type"))
        and "cost_per_hour" in job
        and "hours_needed" in job
        for job in labor
    )


def _invalid(message: str) -> ValidationResult:
    return ValidationResult(valid=False, message=message)


def validate_recipe(payload: Any) -> ValidationResult:
    """Validate a full recipe payload for creation"""
    fields = payload if isinstance(payload, dict) else {}
    missing = [field for field in REQUIRED_FIELDS if field not in fields]
    if missing:
        return _invalid(f"Missing required fields: {', '.join(missing)}")

    if not _valid_dimensions(fields["dimensions"]):
        return _invalid(INVALID_DIMENSIONS)
    if not _valid_parts(fields["parts"]):
        return _invalid(INVALID_PARTS)
    if not _valid_labor(fields["labor"]):
        return _invalid(INVALID_LABOR)

    return ValidationResult(valid=True)


def validate_partial_recipe(payload: Any) -> ValidationResult:
    """Validate the fields present in a recipe update; absent fields are skipped"""
    if not isinstance(payload, dict):
        return _invalid("Request body must be a JSON object")

    if "dimensions" in payload and not _valid_dimensions(payload["dimensions"]):
        return _invalid(INVALID_DIMENSIONS)
    if "parts" in payload and not _valid_parts(payload["parts"]):
        return _invalid(INVALID_PARTS)
    if "labor" in payload and not _valid_labor(payload["labor"]):
        return _invalid(INVALID_LABOR)

    if "weight" in payload:
        weight = payload["weight"]
        if not _is_number(weight) or weight < 0:
            return _invalid(INVALID_WEIGHT)

    if "yield_percentage" in payload:
        yield_percentage = payload["yield_percentage"]
        if not _is_number(yield_percentage) or not 0 <= yield_percentage <= 100:
            return _invalid(INVALID_YIELD)

    if "waste_factor" in payload:
        waste_factor = payload["waste_factor"]
        if not _is_number(waste_factor) or not 0 <= waste_factor < 1:
            return _invalid(INVALID_WASTE_FACTOR)

    return ValidationResult(valid=True)


def _schema_error_message(exc: ValidationError) -> str:
    error = exc.errors()[0]
    location = ".".join(str(part) for part in error["loc"])
    return f"Invalid value for {location}: {error['msg']}"


def parse_recipe_create(payload: Any) -> RecipeCreate:
    result = validate_recipe(payload)
    if not result.valid:
        raise RecipeValidationError(result.message)
    try:
        return RecipeCreate.model_validate(payload)
    except ValidationError as exc:
        raise RecipeValidationError(_schema_error_message(exc)) from exc


def parse_recipe_update(payload: Any) -> Dict[str, Any]:
    """Return only the fields supplied in the update, typed and normalized"""
    result = validate_partial_recipe(payload)
    if not result.valid:
        raise RecipeValidationError(result.message)
    try:
        update = RecipeUpdate.model_validate(payload)
    except ValidationError as exc:
        raise RecipeValidationError(_schema_error_message(exc)) from exc
    return update.model_dump(exclude_unset=True)
