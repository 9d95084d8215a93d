class RecipeServiceError(Exception):
    """Base class for errors surfaced to API clients"""
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class RecipeValidationError(RecipeServiceError):
    """Malformed or out-of-range recipe input"""
    status_code = 400


class InvalidRecipeError(RecipeValidationError):
    """Cost calculation requested without a recipe"""


class RecipeNotFoundError(RecipeServiceError):
    status_code = 404

    def __init__(self, message: str = "Recipe not found"):
        super().__init__(message)
