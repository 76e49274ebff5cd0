"""
Tests for MealRepository against the in-memory database.
"""

import uuid
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.exceptions import PersistenceError
from domain.models import Meal
from domain.schemas.meal_schemas import MacroEstimate
from repositories import MealRepository

from test_fixtures import db_session, make_meal, EGGS_AND_COFFEE


def test_create_meal_assigns_id_and_timestamp(db_session: Session):
    repo = MealRepository(db_session)

    meal = repo.create_meal(
        user_id="sarah",
        meal_type="Breakfast",
        text_entry="2 eggs and black coffee",
        estimate=MacroEstimate(**EGGS_AND_COFFEE),
    )

    assert isinstance(meal.id, uuid.UUID)
    assert meal.created_at is not None
    assert meal.calories == 220
    assert meal.fibre == 0
    assert repo.get_by_id(meal.id).text_entry == "2 eggs and black coffee"


def test_get_by_id_unknown(db_session: Session):
    assert MealRepository(db_session).get_by_id(uuid.uuid4()) is None


def test_get_by_user_between_filters_owner_and_range(db_session: Session):
    base = datetime(2025, 3, 1, tzinfo=timezone.utc)
    db_session.add_all(
        [
            make_meal(text_entry="in range", created_at=base + timedelta(hours=9)),
            make_meal(text_entry="at end bound", created_at=base + timedelta(days=1)),
            make_meal(text_entry="before", created_at=base - timedelta(minutes=1)),
            make_meal(user_id="other", text_entry="not mine", created_at=base + timedelta(hours=10)),
        ]
    )
    db_session.commit()

    meals = MealRepository(db_session).get_by_user_between(
        "user-1", base, base + timedelta(days=1)
    )

    assert [m.text_entry for m in meals] == ["in range"]


def test_insert_failure_is_wrapped_and_rolled_back(db_session: Session, monkeypatch):
    def failing_commit():
        raise IntegrityError("INSERT INTO meals", {}, Exception("constraint failed"))

    monkeypatch.setattr(db_session, "commit", failing_commit)

    with pytest.raises(PersistenceError) as exc_info:
        MealRepository(db_session).create_meal(
            "sarah", "Lunch", "soup", MacroEstimate(**EGGS_AND_COFFEE)
        )

    assert exc_info.value.message == "Failed to save meal"
    assert exc_info.value.http_status == 500
    monkeypatch.undo()
    assert db_session.query(Meal).count() == 0
