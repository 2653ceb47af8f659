# symptom_intake/services/__init__.py
from .session import db_session, init_db
from .analysis_service import SymptomAnalysisService
from .history_service import AnalysisHistoryService
from .profile_service import ProfileService

__all__ = [
    "db_session",
    "init_db",
    "SymptomAnalysisService",
    "AnalysisHistoryService",
    "ProfileService",
]
