"""Services package - Business logic layer"""

from services.meal_service import MealService
from services.consumption_service import ConsumptionService
from services.macro_estimator import MacroEstimator
from services.retry_policy import RetryPolicy

# Note: meal_validator and estimate_normalizer contain functions, not classes

__all__ = [
    "MealService",
    "ConsumptionService",
    "MacroEstimator",
    "RetryPolicy",
]
