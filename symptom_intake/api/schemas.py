# symptom_intake/api/schemas.py
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, StrictInt


class AnalysisRequest(BaseModel):
    # Blank/missing text is rejected by the service with a readable message
    symptoms_text: Optional[str] = Field(None, alias="symptomsText")
    user_age: Optional[StrictInt] = Field(None, alias="userAge")
    medical_history: Optional[str] = Field(None, alias="medicalHistory")

    model_config = {
        "populate_by_name": True,
    }


class AnalysisRecordSchema(BaseModel):
    id: str
    user_id: str
    symptoms_text: str
    analysis_result: Dict[str, Any]
    urgency_level: str
    created_at: datetime

    model_config = {
        "from_attributes": True,
    }


class AnalysisResponse(BaseModel):
    success: bool = True
    analysis: AnalysisRecordSchema


class AnalysisHistoryResponse(BaseModel):
    success: bool = True
    analyses: List[AnalysisRecordSchema]


class ProfileUpdateRequest(BaseModel):
    full_name: Optional[str] = Field(None, alias="fullName")
    age: Optional[StrictInt] = None
    medical_history: Optional[str] = Field(None, alias="medicalHistory")

    model_config = {
        "populate_by_name": True,
    }


class ProfileSchema(BaseModel):
    id: str
    full_name: str
    age: Optional[int]
    medical_history: Optional[str]
    created_at: datetime
    updated_at: datetime

    model_config = {
        "from_attributes": True,
    }


class ProfileResponse(BaseModel):
    success: bool = True
    profile: Optional[ProfileSchema]


class ChatRequest(BaseModel):
    message: Optional[str] = None


class UrgencyDisplaySchema(BaseModel):
    level: str
    label: str
    description: str
    emoji: str


class ChatResponse(BaseModel):
    success: bool = True
    reply: str
    analysis: AnalysisRecordSchema
    urgency: UrgencyDisplaySchema
