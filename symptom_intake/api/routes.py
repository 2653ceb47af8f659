# symptom_intake/api/routes.py
from __future__ import annotations

import logging
from functools import lru_cache
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response
from fastapi.responses import JSONResponse

from symptom_intake.analysis import AnalysisResult, UrgencyLevel
from symptom_intake.auth import get_current_user_id
from symptom_intake.errors import ConfigurationError, ServiceError
from symptom_intake.llm import LLMClient, OpenAILLMClient
from symptom_intake.services import (
    AnalysisHistoryService,
    ProfileService,
    SymptomAnalysisService,
)
from .presenters import format_analysis_reply, format_error_reply, urgency_display
from .schemas import (
    AnalysisRequest,
    AnalysisResponse,
    AnalysisHistoryResponse,
    AnalysisRecordSchema,
    ChatRequest,
    ChatResponse,
    ProfileUpdateRequest,
    ProfileResponse,
    ProfileSchema,
    UrgencyDisplaySchema,
)

logger = logging.getLogger(__name__)

router = APIRouter()

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization, X-Client-Info, Apikey",
}


@lru_cache(maxsize=1)
def _build_llm_client() -> LLMClient:
    return OpenAILLMClient()


def get_llm_client() -> LLMClient:
    try:
        return _build_llm_client()
    except RuntimeError as exc:
        logger.error("Completion provider unavailable: %s", exc)
        raise ConfigurationError("Symptom analysis is not configured") from exc


def get_analysis_service(
    llm_client: LLMClient = Depends(get_llm_client),
) -> SymptomAnalysisService:
    return SymptomAnalysisService(llm_client=llm_client)


def get_history_service() -> AnalysisHistoryService:
    return AnalysisHistoryService()


def get_profile_service() -> ProfileService:
    return ProfileService()


@router.options("/analyze-symptoms")
def analyze_symptoms_preflight() -> Response:
    return Response(status_code=200, headers=CORS_HEADERS)


@router.post("/analyze-symptoms", response_model=AnalysisResponse)
def analyze_symptoms(
    payload: AnalysisRequest,
    user_id: str = Depends(get_current_user_id),
    service: SymptomAnalysisService = Depends(get_analysis_service),
) -> AnalysisResponse:
    """
    Analyze free-text symptoms and store the result for the caller.
    """
    record = service.analyze(
        user_id=user_id,
        symptoms_text=payload.symptoms_text,
        user_age=payload.user_age,
        medical_history=payload.medical_history,
    )
    return AnalysisResponse(analysis=AnalysisRecordSchema.model_validate(record))


@router.get("/analyses", response_model=AnalysisHistoryResponse)
def list_analyses(
    limit: Optional[int] = Query(None),
    user_id: str = Depends(get_current_user_id),
    service: AnalysisHistoryService = Depends(get_history_service),
) -> AnalysisHistoryResponse:
    records = service.list_history(user_id, limit=limit)
    return AnalysisHistoryResponse(
        analyses=[AnalysisRecordSchema.model_validate(r) for r in records]
    )


@router.get("/analyses/{analysis_id}", response_model=AnalysisResponse)
def get_analysis(
    analysis_id: str,
    user_id: str = Depends(get_current_user_id),
    service: AnalysisHistoryService = Depends(get_history_service),
) -> AnalysisResponse:
    record = service.get_analysis(user_id, analysis_id)
    return AnalysisResponse(analysis=AnalysisRecordSchema.model_validate(record))


@router.get("/profile", response_model=ProfileResponse)
def get_profile(
    user_id: str = Depends(get_current_user_id),
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    profile = service.get_profile(user_id)
    return ProfileResponse(
        profile=ProfileSchema.model_validate(profile) if profile else None
    )


@router.put("/profile", response_model=ProfileResponse)
def update_profile(
    payload: ProfileUpdateRequest,
    user_id: str = Depends(get_current_user_id),
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    profile = service.upsert_profile(
        user_id=user_id,
        full_name=payload.full_name,
        age=payload.age,
        medical_history=payload.medical_history,
    )
    return ProfileResponse(profile=ProfileSchema.model_validate(profile))


@router.post("/chat", response_model=ChatResponse)
def chat(
    payload: ChatRequest,
    user_id: str = Depends(get_current_user_id),
    analysis_service: SymptomAnalysisService = Depends(get_analysis_service),
    profile_service: ProfileService = Depends(get_profile_service),
):
    """
    One chat turn: the message is analyzed with the caller's saved
    age and medical history, and answered with a readable summary.
    Failures are answered with a chat message too.
    """
    try:
        profile = profile_service.get_profile(user_id)
        record = analysis_service.analyze(
            user_id=user_id,
            symptoms_text=payload.message,
            user_age=profile.age if profile else None,
            medical_history=profile.medical_history if profile else None,
        )
    except ServiceError as exc:
        logger.warning("Chat analysis failed for user %s: %s", user_id, exc.message)
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "success": False,
                "error": exc.message,
                "reply": format_error_reply(exc.message),
            },
        )

    result = AnalysisResult.model_validate(record.analysis_result)
    return ChatResponse(
        reply=format_analysis_reply(result),
        analysis=AnalysisRecordSchema.model_validate(record),
        urgency=UrgencyDisplaySchema(**urgency_display(result.urgency_level)),
    )


@router.get("/urgency-levels")
def urgency_levels() -> dict:
    return {level.value: urgency_display(level) for level in UrgencyLevel}
