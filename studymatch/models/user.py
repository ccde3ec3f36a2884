"""User model: account, study profile and running rating aggregate."""
from datetime import datetime

from sqlalchemy import JSON, DateTime, Integer, String, func
from sqlalchemy.ext.mutable import MutableDict, MutableList
from sqlalchemy.orm import Mapped, mapped_column

from studymatch.models.base import Base

WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday")


def default_availability() -> dict[str, list[str]]:
    return {day: [] for day in WEEKDAYS}


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    major: Mapped[str | None] = mapped_column(String(255), nullable=True)
    # Course codes as entered, e.g. "CS 110"
    courses: Mapped[list[str]] = mapped_column(MutableList.as_mutable(JSON), nullable=False, default=list)
    # weekday -> list of time slots
    availability: Mapped[dict[str, list[str]]] = mapped_column(
        MutableDict.as_mutable(JSON), nullable=False, default=default_availability
    )
    average_rating: Mapped[int | None] = mapped_column(Integer, nullable=True)
    total_ratings: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
