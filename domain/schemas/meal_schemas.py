"""Schemas for meal logging, macro estimates and consumption summaries"""

from pydantic import BaseModel, Field
from typing import List
from datetime import datetime, date
from uuid import UUID


class MacroEstimate(BaseModel):
    """Five-field nutritional approximation returned by the language model"""

    calories: float
    protein: float = Field(..., description="Protein in grams")
    fat: float = Field(..., description="Fat in grams")
    fibre: float = Field(..., description="Fibre in grams")
    sugar: float = Field(..., description="Sugar in grams")

    model_config = {"frozen": True}


class MealSubmission(BaseModel):
    """A meal submission that passed request validation"""

    meal_text: str = Field(..., description="Free-text meal description")
    meal_type: str = Field(..., description="Meal category label, e.g. 'Breakfast'")

    model_config = {"frozen": True}


class MealRecordResponse(BaseModel):
    """Schema for a persisted meal record"""

    id: UUID
    user_id: str
    meal_type: str
    text_entry: str
    calories: float
    protein: float
    fat: float
    fibre: float
    sugar: float
    created_at: datetime

    model_config = {"from_attributes": True}


class MacroTotals(BaseModel):
    """Summed macros over a set of meals"""

    calories: float = 0
    protein: float = 0
    fat: float = 0
    fibre: float = 0
    sugar: float = 0


class DailyTargets(BaseModel):
    """Daily consumption targets derived from the calorie goal and body weight"""

    calories: int = Field(..., description="Daily calorie goal")
    protein: int = Field(..., description="Protein target in grams")
    fat: int = Field(..., description="Fat target in grams")


class DailySummaryResponse(BaseModel):
    """Dashboard data for one day"""

    date: date
    meal_count: int
    totals: MacroTotals
    targets: DailyTargets
    calorie_progress: float = Field(
        ..., description="Consumed calories as a percentage of the goal, capped at 100"
    )


class TrendDay(BaseModel):
    """Totals for a single day of a trend window"""

    date: date
    meal_count: int
    totals: MacroTotals


class TrendsResponse(BaseModel):
    """Per-day totals over a window, oldest day first"""

    start: date
    end: date
    days: List[TrendDay]
