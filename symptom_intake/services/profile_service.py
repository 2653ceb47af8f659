# symptom_intake/services/profile_service.py
from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from symptom_intake.db import SessionLocal
from symptom_intake.errors import StorageError, ValidationError
from symptom_intake.models import UserProfile, utcnow
from symptom_intake.services.session import SessionFactory, db_session
from symptom_intake.services.validators import (
    check_age,
    clean_optional_text,
    require_user,
)

logger = logging.getLogger(__name__)


class ProfileService:
    def __init__(self, session_factory: SessionFactory = SessionLocal):
        self.session_factory = session_factory

    def get_profile(self, user_id: Optional[str]) -> Optional[UserProfile]:
        user_id = require_user(user_id)
        try:
            with db_session(self.session_factory) as session:
                return session.get(UserProfile, user_id)
        except SQLAlchemyError as exc:
            logger.exception("Failed to load profile for user %s", user_id)
            raise StorageError("Failed to load profile") from exc

    def upsert_profile(
        self,
        user_id: Optional[str],
        full_name: Optional[str],
        age: Optional[int] = None,
        medical_history: Optional[str] = None,
    ) -> UserProfile:
        """
        Create or update the caller's profile. Submitting the same values
        again leaves the same row, only updated_at moves forward.
        """
        user_id = require_user(user_id)

        name = (full_name or "").strip()
        if not name:
            raise ValidationError("Full name is required")
        age = check_age(age)
        medical_history = clean_optional_text(medical_history)

        try:
            with db_session(self.session_factory) as session:
                profile = session.get(UserProfile, user_id)
                now = utcnow()
                if profile is None:
                    profile = UserProfile(id=user_id, created_at=now)
                    session.add(profile)

                profile.full_name = name
                profile.age = age
                profile.medical_history = medical_history
                profile.updated_at = now
                session.flush()
        except SQLAlchemyError as exc:
            logger.exception("Failed to update profile for user %s", user_id)
            raise StorageError("Failed to update profile") from exc

        return profile
