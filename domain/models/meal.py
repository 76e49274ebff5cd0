"""
Meal logging models.
"""

from sqlalchemy import Column, Text, TIMESTAMP, Float, Uuid, Index
from sqlalchemy.dialects import sqlite
from sqlalchemy.sql import func
import uuid

from domain.models.database import Base

# SQLite's CURRENT_TIMESTAMP has second precision; bound values must use the
# same text format or range filters skip rows stamped at the boundary.
SQLITE_TIMESTAMP = sqlite.DATETIME(
    storage_format="%(year)04d-%(month)02d-%(day)02d %(hour)02d:%(minute)02d:%(second)02d"
)


class Meal(Base):
    """A logged meal with its AI-estimated macros. Rows are never updated."""

    __tablename__ = "meals"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Text, nullable=False)
    meal_type = Column(Text, nullable=False)
    text_entry = Column(Text, nullable=False)
    calories = Column(Float, nullable=False)
    protein = Column(Float, nullable=False)
    fat = Column(Float, nullable=False)
    fibre = Column(Float, nullable=False)
    sugar = Column(Float, nullable=False)
    created_at = Column(
        TIMESTAMP(timezone=True).with_variant(SQLITE_TIMESTAMP, "sqlite"),
        nullable=False,
        server_default=func.now(),
    )

    __table_args__ = (Index("ix_meals_user_created", "user_id", "created_at"),)
