"""Meal logging and consumption routes"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from datetime import date
from typing import Any, Callable, List, Optional

from adapters.identity_adapter import AuthenticatedUser
from api.dependencies import (
    get_current_user,
    get_db,
    get_macro_estimator_factory,
    read_meal_payload,
)
from app.config import settings
from domain.enums import MealCategory
from domain.schemas.meal_schemas import (
    MealRecordResponse,
    DailySummaryResponse,
    TrendsResponse,
)
from services import MealService, ConsumptionService, MacroEstimator
from services.consumption_service import MAX_TREND_DAYS

router = APIRouter(tags=["Meals"])

MEAL_SUBMISSION_BODY = {
    "requestBody": {
        "required": True,
        "content": {
            "application/json": {
                "schema": {
                    "type": "object",
                    "properties": {
                        "mealText": {"type": "string", "maxLength": 500},
                        "mealType": {
                            "type": "string",
                            "examples": [c.value for c in MealCategory],
                        },
                    },
                    "required": ["mealText", "mealType"],
                }
            }
        },
    }
}


@router.post(
    "/parse-meal",
    response_model=MealRecordResponse,
    openapi_extra=MEAL_SUBMISSION_BODY,
)
def parse_meal(
    payload: Any = Depends(read_meal_payload),
    user: AuthenticatedUser = Depends(get_current_user),
    estimator_factory: Callable[[], MacroEstimator] = Depends(get_macro_estimator_factory),
    db: Session = Depends(get_db),
):
    """
    Log a meal from a natural-language description.

    Flow:
    1. Resolve the caller from the bearer token (401 otherwise)
    2. Validate ``mealText`` / ``mealType`` (400)
    3. Ask the language model for a macro estimate
    4. Strip code fences and parse the five macro fields
    5. Insert the meal and return the stored row

    Steps 3-5 fail with 500 and leave nothing behind.
    """
    return MealService.log_meal(
        db,
        user.id,
        payload,
        estimator_factory,
        max_length=settings.meal_text_max_length,
    )


@router.get("/meals", response_model=List[MealRecordResponse])
def list_meals(
    day: Optional[date] = Query(None, alias="date", description="UTC date, defaults to today"),
    user: AuthenticatedUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """The caller's meals for one day, newest first."""
    return ConsumptionService.list_meals_for_day(db, user.id, day)


@router.get("/meals/summary", response_model=DailySummaryResponse)
def daily_summary(
    day: Optional[date] = Query(None, alias="date", description="UTC date, defaults to today"),
    daily_calories: Optional[int] = Query(None, gt=0, description="Daily calorie goal"),
    weight: Optional[float] = Query(None, gt=0, description="Body weight in kg"),
    user: AuthenticatedUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Consumed totals for a day against calorie, protein and fat targets."""
    return ConsumptionService.daily_summary(
        db, user.id, day, daily_calories=daily_calories, weight=weight
    )


@router.get("/meals/trends", response_model=TrendsResponse)
def trends(
    days: int = Query(7, ge=1, le=MAX_TREND_DAYS, description="Number of days"),
    user: AuthenticatedUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Per-day totals for the last ``days`` days."""
    return ConsumptionService.trends(db, user.id, days=days)
