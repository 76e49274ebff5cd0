"""
Meal domain mappers.
Handles transformation between ORM models and DTOs for meal records.
"""

from domain.models import Meal
from domain.schemas.meal_schemas import MealRecordResponse, MacroTotals


class MealMapper:
    """Mapper for meal-related transformations."""

    @staticmethod
    def to_response(meal: Meal) -> MealRecordResponse:
        """
        Convert Meal ORM model to MealRecordResponse DTO.

        Args:
            meal: Meal ORM instance loaded after insert

        Returns:
            MealRecordResponse DTO including server-assigned id and timestamp
        """
        return MealRecordResponse.model_validate(meal)

    @staticmethod
    def to_totals(meals) -> MacroTotals:
        """Sum the macro fields of the given meals."""
        totals = MacroTotals()
        for meal in meals:
            totals.calories += meal.calories or 0
            totals.protein += meal.protein or 0
            totals.fat += meal.fat or 0
            totals.fibre += meal.fibre or 0
            totals.sugar += meal.sugar or 0
        return totals
