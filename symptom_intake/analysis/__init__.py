# symptom_intake/analysis/__init__.py
from .schema import AnalysisResult, PossibleCondition, Probability, UrgencyLevel
from .knowledge_base import (
    ReferenceRow,
    load_reference_rows,
    format_medical_context,
    seed_symptom_conditions,
)
from .prompt import build_analysis_messages
from .parser import parse_analysis_result

__all__ = [
    "AnalysisResult",
    "PossibleCondition",
    "Probability",
    "UrgencyLevel",
    "ReferenceRow",
    "load_reference_rows",
    "format_medical_context",
    "seed_symptom_conditions",
    "build_analysis_messages",
    "parse_analysis_result",
]
