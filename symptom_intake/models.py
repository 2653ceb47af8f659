# symptom_intake/models.py
from datetime import datetime, timezone
import uuid

from sqlalchemy import (
    String,
    DateTime,
    Integer,
    Text,
    CheckConstraint,
    Index,
)
from sqlalchemy.orm import Mapped, mapped_column

from symptom_intake.db import Base, JSONType


def generate_uuid() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UserProfile(Base):
    """
    One row per authenticated identity. The primary key *is* the
    identity provider's user id.
    """
    __tablename__ = "user_profiles"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    full_name: Mapped[str] = mapped_column(String, nullable=False)
    age: Mapped[int | None] = mapped_column(Integer, nullable=True)
    medical_history: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow
    )

    __table_args__ = (
        CheckConstraint(
            "age IS NULL OR (age >= 0 AND age <= 150)",
            name="ck_user_profiles_age_range",
        ),
    )


class SymptomCondition(Base):
    """
    Reference data: symptom -> candidate conditions -> severity indicators.
    Seeded outside the request path, never written by it.
    """
    __tablename__ = "symptom_conditions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    symptom: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    possible_conditions: Mapped[list] = mapped_column(JSONType, nullable=False, default=list)
    severity_indicators: Mapped[list] = mapped_column(JSONType, nullable=False, default=list)


class SymptomAnalysis(Base):
    """
    Append-only record of one completed analysis.
    urgency_level duplicates analysis_result["urgencyLevel"] for filtering.
    """
    __tablename__ = "symptom_analyses"

    id: Mapped[str] = mapped_column(
        String, primary_key=True, default=generate_uuid
    )
    user_id: Mapped[str] = mapped_column(String, nullable=False)
    symptoms_text: Mapped[str] = mapped_column(Text, nullable=False)
    analysis_result: Mapped[dict] = mapped_column(JSONType, nullable=False)
    urgency_level: Mapped[str] = mapped_column(String, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow
    )

    __table_args__ = (
        CheckConstraint(
            "urgency_level IN ('normal', 'moderate', 'critical')",
            name="ck_symptom_analyses_urgency_valid",
        ),
        Index("ix_symptom_analyses_user_created", "user_id", "created_at"),
    )
