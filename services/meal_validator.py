"""Request validation for meal submissions"""

from typing import Any, Mapping

from app.exceptions import InvalidInputError
from domain.schemas.meal_schemas import MealSubmission

MEAL_TEXT_FIELD = "mealText"
MEAL_TYPE_FIELD = "mealType"
DEFAULT_MAX_LENGTH = 500


def validate_submission(payload: Any, max_length: int = DEFAULT_MAX_LENGTH) -> MealSubmission:
    """
    Check a raw ``{mealText, mealType}`` body.

    Absent means a missing key or ``null``. Empty strings are accepted as-is;
    category membership is not checked here.

    Raises:
        InvalidInputError: body not an object, a field absent or not a string,
            or the description longer than ``max_length`` characters
    """
    if not isinstance(payload, Mapping):
        raise InvalidInputError("Request body must be a JSON object")

    meal_text = payload.get(MEAL_TEXT_FIELD)
    meal_type = payload.get(MEAL_TYPE_FIELD)

    missing = [
        name
        for name, value in ((MEAL_TEXT_FIELD, meal_text), (MEAL_TYPE_FIELD, meal_type))
        if value is None
    ]
    if missing:
        raise InvalidInputError(
            f"Missing {MEAL_TEXT_FIELD} or {MEAL_TYPE_FIELD}",
            details={"missing": missing},
        )

    for name, value in ((MEAL_TEXT_FIELD, meal_text), (MEAL_TYPE_FIELD, meal_type)):
        if not isinstance(value, str):
            raise InvalidInputError(f"{name} must be a string")

    if len(meal_text) > max_length:
        raise InvalidInputError(
            f"Meal description too long (max {max_length} characters)",
            details={"length": len(meal_text)},
        )

    return MealSubmission(meal_text=meal_text, meal_type=meal_type)
