# symptom_intake/services/history_service.py
from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from symptom_intake.config import get_settings
from symptom_intake.db import SessionLocal
from symptom_intake.errors import NotFoundError, StorageError, ValidationError
from symptom_intake.models import SymptomAnalysis
from symptom_intake.services.session import SessionFactory, db_session
from symptom_intake.services.validators import require_user

logger = logging.getLogger(__name__)


class AnalysisHistoryService:
    """
    Read side of the analysis store. Needs no completion provider.
    """

    def __init__(self, session_factory: SessionFactory = SessionLocal):
        self.session_factory = session_factory
        self.history_limit = get_settings().history_limit

    def list_history(
        self,
        user_id: Optional[str],
        limit: Optional[int] = None,
    ) -> List[SymptomAnalysis]:
        """
        Most recent analyses for a user, newest first, at most history_limit.
        """
        user_id = require_user(user_id)
        if limit is None or limit > self.history_limit:
            limit = self.history_limit
        if limit < 1:
            raise ValidationError("Limit must be at least 1")

        stmt = (
            select(SymptomAnalysis)
            .where(SymptomAnalysis.user_id == user_id)
            .order_by(SymptomAnalysis.created_at.desc())
            .limit(limit)
        )
        try:
            with db_session(self.session_factory) as session:
                return list(session.scalars(stmt))
        except SQLAlchemyError as exc:
            logger.exception("Failed to load history for user %s", user_id)
            raise StorageError("Failed to load analyses") from exc

    def get_analysis(self, user_id: Optional[str], analysis_id: str) -> SymptomAnalysis:
        user_id = require_user(user_id)
        try:
            with db_session(self.session_factory) as session:
                record = session.get(SymptomAnalysis, analysis_id)
        except SQLAlchemyError as exc:
            logger.exception("Failed to load analysis %s", analysis_id)
            raise StorageError("Failed to load analyses") from exc

        # Other users' records are reported exactly like missing ones
        if record is None or record.user_id != user_id:
            raise NotFoundError("Analysis not found")
        return record
