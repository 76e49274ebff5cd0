"""
Consumption readers backing the dashboard and trend screens.

Days are UTC calendar days.
"""

from typing import List, Optional
from datetime import date, datetime, time, timedelta, timezone
from sqlalchemy.orm import Session
import logging

from domain.mappers import MealMapper
from domain.schemas.meal_schemas import (
    MealRecordResponse,
    DailyTargets,
    DailySummaryResponse,
    TrendDay,
    TrendsResponse,
)
from repositories import MealRepository
from app.exceptions import InvalidInputError

logger = logging.getLogger("macrolog.consumption")

DEFAULT_CALORIE_GOAL = 2400
DEFAULT_PROTEIN_TARGET = 180
DEFAULT_FAT_TARGET = 80
PROTEIN_G_PER_KG = 1.8
FAT_CALORIE_SHARE = 0.25
KCAL_PER_G_FAT = 9
MAX_TREND_DAYS = 31


def _day_bounds(day: date):
    start = datetime.combine(day, time.min, tzinfo=timezone.utc)
    return start, start + timedelta(days=1)


def _as_utc_date(value: datetime) -> date:
    # SQLite hands back naive UTC timestamps
    if value.tzinfo is None:
        return value.date()
    return value.astimezone(timezone.utc).date()


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def compute_targets(daily_calories: Optional[int] = None, weight: Optional[float] = None) -> DailyTargets:
    """Targets shown on the dashboard: 1.8 g protein per kg, 25% of calories from fat."""
    goal = daily_calories or DEFAULT_CALORIE_GOAL
    protein = round(weight * PROTEIN_G_PER_KG) if weight else DEFAULT_PROTEIN_TARGET
    fat = round(goal * FAT_CALORIE_SHARE / KCAL_PER_G_FAT) if goal else DEFAULT_FAT_TARGET
    return DailyTargets(calories=goal, protein=protein, fat=fat)


class ConsumptionService:
    """Per-user read models over logged meals"""

    @staticmethod
    def list_meals_for_day(db: Session, user_id: str, day: Optional[date] = None) -> List[MealRecordResponse]:
        """Return the user's meals for a day, newest first."""
        start, end = _day_bounds(day or utc_today())
        meals = MealRepository(db).get_by_user_between(user_id, start, end)
        return [MealMapper.to_response(m) for m in meals]

    @staticmethod
    def daily_summary(
        db: Session,
        user_id: str,
        day: Optional[date] = None,
        daily_calories: Optional[int] = None,
        weight: Optional[float] = None,
    ) -> DailySummaryResponse:
        """Totals for one day against the user's targets."""
        day = day or utc_today()
        start, end = _day_bounds(day)
        meals = MealRepository(db).get_by_user_between(user_id, start, end)

        totals = MealMapper.to_totals(meals)
        targets = compute_targets(daily_calories, weight)
        progress = min(totals.calories * 100 / targets.calories, 100) if targets.calories else 0

        logger.info(
            f"daily_summary user_id={user_id} date={day} meals={len(meals)} calories={totals.calories}"
        )
        return DailySummaryResponse(
            date=day,
            meal_count=len(meals),
            totals=totals,
            targets=targets,
            calorie_progress=progress,
        )

    @staticmethod
    def trends(db: Session, user_id: str, days: int = 7, end_day: Optional[date] = None) -> TrendsResponse:
        """Per-day totals for the last ``days`` days ending on ``end_day``, oldest first."""
        if days < 1 or days > MAX_TREND_DAYS:
            raise InvalidInputError(f"days must be between 1 and {MAX_TREND_DAYS}")

        end_day = end_day or utc_today()
        start_day = end_day - timedelta(days=days - 1)
        start, _ = _day_bounds(start_day)
        _, end = _day_bounds(end_day)

        meals = MealRepository(db).get_by_user_between(user_id, start, end, newest_first=False)

        by_day = {start_day + timedelta(days=i): [] for i in range(days)}
        for meal in meals:
            bucket = by_day.get(_as_utc_date(meal.created_at))
            if bucket is not None:
                bucket.append(meal)

        return TrendsResponse(
            start=start_day,
            end=end_day,
            days=[
                TrendDay(date=d, meal_count=len(ms), totals=MealMapper.to_totals(ms))
                for d, ms in by_day.items()
            ],
        )
