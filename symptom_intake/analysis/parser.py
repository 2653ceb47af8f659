# symptom_intake/analysis/parser.py
from __future__ import annotations

import json
import logging

from pydantic import ValidationError as PydanticValidationError

from symptom_intake.analysis.schema import AnalysisResult
from symptom_intake.errors import UpstreamError

logger = logging.getLogger(__name__)


def _clean_json_from_llm(raw: str) -> dict:
    """
    Parse JSON from the LLM response.
    Handles cases where the model wraps it in ```json ... ``` fences
    despite JSON mode.
    """
    text = raw.strip()

    if text.startswith("```"):
        text = text.lstrip("`")
        if text.lower().startswith("json"):
            text = text[4:]
        text = text.rstrip("`").strip()

    return json.loads(text)


def parse_analysis_result(raw: str) -> AnalysisResult:
    """
    Turn the provider's reply into an AnalysisResult.

    Raises UpstreamError when the reply is not JSON or does not carry
    every required field.
    """
    if not raw or not raw.strip():
        logger.warning("Completion provider returned an empty reply")
        raise UpstreamError()

    try:
        data = _clean_json_from_llm(raw)
    except json.JSONDecodeError as exc:
        logger.warning("Completion reply is not valid JSON: %s", exc)
        raise UpstreamError() from exc

    try:
        return AnalysisResult.model_validate(data)
    except PydanticValidationError as exc:
        logger.warning(
            "Completion reply does not match AnalysisResult (%d errors)",
            exc.error_count(),
        )
        raise UpstreamError() from exc
