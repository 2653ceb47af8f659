# symptom_intake/analysis/schema.py
from __future__ import annotations

from enum import Enum
from typing import List

from pydantic import BaseModel, Field, field_validator


class Probability(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class UrgencyLevel(str, Enum):
    NORMAL = "normal"
    MODERATE = "moderate"
    CRITICAL = "critical"


def _normalise_label(value):
    # Models are not consistent about case ("High", " MODERATE")
    if isinstance(value, str):
        return value.strip().lower()
    return value


class PossibleCondition(BaseModel):
    condition: str
    probability: Probability
    description: str

    model_config = {
        "extra": "ignore",
    }

    @field_validator("probability", mode="before")
    @classmethod
    def _probability_lower(cls, value):
        return _normalise_label(value)


class AnalysisResult(BaseModel):
    """
    The contract between the completion provider and storage.

    The provider is asked to reply with exactly this shape (camelCase keys);
    it is stored as-is in symptom_analyses.analysis_result. Every field must
    be present, lists may be empty.
    """

    possible_conditions: List[PossibleCondition] = Field(..., alias="possibleConditions")
    urgency_level: UrgencyLevel = Field(..., alias="urgencyLevel")
    preventive_suggestions: List[str] = Field(..., alias="preventiveSuggestions")
    when_to_seek_help: List[str] = Field(..., alias="whenToSeekHelp")
    general_advice: str = Field(..., alias="generalAdvice")

    # Allow extra fields from the LLM without crashing
    model_config = {
        "extra": "ignore",
        "populate_by_name": True,
    }

    @field_validator("urgency_level", mode="before")
    @classmethod
    def _urgency_lower(cls, value):
        return _normalise_label(value)

    def to_storage(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
