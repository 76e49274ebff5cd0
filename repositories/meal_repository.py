"""
Meal Repository - Data access layer for meal records
"""

import logging
from typing import List, Optional
from uuid import UUID
from datetime import datetime
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from repositories.base import BaseRepository
from domain.models import Meal
from domain.schemas.meal_schemas import MacroEstimate
from app.exceptions import PersistenceError

logger = logging.getLogger("macrolog.repositories.meal")


class MealRepository(BaseRepository[Meal]):
    """Repository for meal record data access"""

    def __init__(self, db: Session):
        super().__init__(db, Meal)

    def get_by_id(self, meal_id: UUID) -> Optional[Meal]:
        """Get meal by ID"""
        return self.db.query(Meal).filter(Meal.id == meal_id).first()

    def create_meal(
        self, user_id: str, meal_type: str, text_entry: str, estimate: MacroEstimate
    ) -> Meal:
        """
        Insert one meal row and return it with its generated id and timestamp.

        Raises:
            PersistenceError: on any storage-layer fault (the session is rolled back)
        """
        meal = Meal(
            user_id=user_id,
            meal_type=meal_type,
            text_entry=text_entry,
            calories=estimate.calories,
            protein=estimate.protein,
            fat=estimate.fat,
            fibre=estimate.fibre,
            sugar=estimate.sugar,
        )
        try:
            return self.create(meal)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to insert meal for user {user_id}: {e}")
            raise PersistenceError(details={"reason": str(e)}) from e

    def get_by_user_between(
        self, user_id: str, start: datetime, end: datetime, newest_first: bool = True
    ) -> List[Meal]:
        """Get a user's meals created in [start, end)"""
        order = Meal.created_at.desc() if newest_first else Meal.created_at.asc()
        try:
            return (
                self.db.query(Meal)
                .filter(
                    Meal.user_id == user_id,
                    Meal.created_at >= start,
                    Meal.created_at < end,
                )
                .order_by(order)
                .all()
            )
        except SQLAlchemyError as e:
            logger.error(f"Failed to load meals for user {user_id}: {e}")
            raise PersistenceError(
                "Failed to load meals", details={"reason": str(e)}
            ) from e
