# symptom_intake/api/presenters.py
"""
Text and display metadata the chat and dashboard views render.
"""
from __future__ import annotations

from typing import Dict

from symptom_intake.analysis import AnalysisResult, UrgencyLevel


URGENCY_DISPLAY: Dict[UrgencyLevel, Dict[str, str]] = {
    UrgencyLevel.CRITICAL: {
        "label": "Critical",
        "description": "Seek immediate medical attention",
        "emoji": "🚨",
    },
    UrgencyLevel.MODERATE: {
        "label": "Moderate",
        "description": "Consult a healthcare provider soon",
        "emoji": "⚠️",
    },
    UrgencyLevel.NORMAL: {
        "label": "Normal",
        "description": "Monitor symptoms and take preventive measures",
        "emoji": "ℹ️",
    },
}


def urgency_display(level: UrgencyLevel | str) -> Dict[str, str]:
    # Unknown levels render like "normal", matching the dashboard default
    try:
        level = UrgencyLevel(level)
    except ValueError:
        level = UrgencyLevel.NORMAL
    return {"level": level.value, **URGENCY_DISPLAY[level]}


def format_analysis_reply(result: AnalysisResult) -> str:
    conditions = "\n".join(
        f"• {c.condition} ({c.probability.value} probability): {c.description}"
        for c in result.possible_conditions
    )
    emoji = URGENCY_DISPLAY[result.urgency_level]["emoji"]
    return (
        f"{emoji} Analysis Complete\n\n"
        f"Possible Conditions:\n{conditions}\n\n"
        f"Urgency Level: {result.urgency_level.value.upper()}\n\n"
        "I've completed the full analysis. Open the full analysis to see "
        "detailed recommendations and preventive measures."
    )


def format_error_reply(message: str) -> str:
    return f"I encountered an error: {message}. Please try again."
