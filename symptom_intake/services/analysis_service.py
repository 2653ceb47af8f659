# symptom_intake/services/analysis_service.py
from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError

from symptom_intake.analysis import (
    AnalysisResult,
    ReferenceRow,
    build_analysis_messages,
    format_medical_context,
    load_reference_rows,
    parse_analysis_result,
)
from symptom_intake.config import get_settings
from symptom_intake.db import SessionLocal
from symptom_intake.errors import StorageError, ValidationError
from symptom_intake.llm import LLMClient
from symptom_intake.models import SymptomAnalysis
from symptom_intake.services.session import SessionFactory, db_session
from symptom_intake.services.validators import (
    check_age,
    clean_optional_text,
    require_user,
)

logger = logging.getLogger(__name__)

class SymptomAnalysisService:
    """
    Service that coordinates one analysis request:
      - reading the symptom/condition reference table
      - calling the completion provider
      - persisting the validated result as a SymptomAnalysis row

    Each step uses its own session (or none), so no database
    connection is held while waiting on the provider.
    """

    def __init__(
        self,
        llm_client: LLMClient,
        session_factory: SessionFactory = SessionLocal,
    ):
        settings = get_settings()
        self.llm_client = llm_client
        self.session_factory = session_factory
        self.model = settings.llm_model
        self.temperature = settings.llm_temperature

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def analyze(
        self,
        user_id: Optional[str],
        symptoms_text: Optional[str],
        user_age: Optional[int] = None,
        medical_history: Optional[str] = None,
    ) -> SymptomAnalysis:
        """
        Run one analysis and return the stored record.

        Raises:
          - AuthError       no user identity
          - ValidationError blank symptoms or out-of-range age
          - UpstreamError   provider failure or malformed reply
          - StorageError    reference read or insert failed
        """
        user_id = require_user(user_id)

        text = (symptoms_text or "").strip()
        if not text:
            raise ValidationError("Symptoms text is required")
        user_age = check_age(user_age)
        medical_history = clean_optional_text(medical_history)

        rows = self._load_reference_rows()
        messages = build_analysis_messages(
            symptoms_text=text,
            medical_context=format_medical_context(rows),
            user_age=user_age,
            medical_history=medical_history,
        )

        raw = self.llm_client.chat(
            messages,
            temperature=self.temperature,
            model=self.model,
            json_mode=True,
        )
        result = parse_analysis_result(raw)

        record = self._store(user_id, text, result)
        logger.info(
            "Stored analysis %s for user %s (urgency=%s)",
            record.id,
            user_id,
            record.urgency_level,
        )
        return record

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _load_reference_rows(self) -> List[ReferenceRow]:
        try:
            with db_session(self.session_factory) as session:
                return load_reference_rows(session)
        except SQLAlchemyError as exc:
            logger.exception("Failed to load symptom reference data")
            raise StorageError("Failed to load symptom reference data") from exc

    def _store(self, user_id: str, symptoms_text: str, result: AnalysisResult) -> SymptomAnalysis:
        record = SymptomAnalysis(
            user_id=user_id,
            symptoms_text=symptoms_text,
            analysis_result=result.to_storage(),
            urgency_level=result.urgency_level.value,
        )
        try:
            with db_session(self.session_factory) as session:
                session.add(record)
                session.flush()
        except SQLAlchemyError as exc:
            # The computed result is dropped; the caller only sees the failure.
            logger.exception("Database insert error for user %s", user_id)
            raise StorageError() from exc
        return record
