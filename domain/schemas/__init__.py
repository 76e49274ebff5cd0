"""
Domain schemas package - Pydantic models for validation.
"""

from domain.schemas.meal_schemas import (
    MacroEstimate,
    MealSubmission,
    MealRecordResponse,
    MacroTotals,
    DailyTargets,
    DailySummaryResponse,
    TrendDay,
    TrendsResponse,
)

__all__ = [
    # Pipeline schemas
    "MacroEstimate",
    "MealSubmission",
    "MealRecordResponse",
    # Summary schemas
    "MacroTotals",
    "DailyTargets",
    "DailySummaryResponse",
    "TrendDay",
    "TrendsResponse",
]
