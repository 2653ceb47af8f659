# symptom_intake/analysis/prompt.py
from __future__ import annotations

from typing import Dict, List, Optional


RESPONSE_SCHEMA_DESCRIPTION = """
Respond in JSON format with this structure:
{
  "possibleConditions": [{"condition": "name", "probability": "high/medium/low", "description": "brief explanation"}],
  "urgencyLevel": "normal/moderate/critical",
  "preventiveSuggestions": ["suggestion1", "suggestion2"],
  "whenToSeekHelp": ["sign1", "sign2"],
  "generalAdvice": "overall advice"
}
""".strip()


def _user_context(user_age: Optional[int], medical_history: Optional[str]) -> str:
    age_part = f"Age: {user_age}" if user_age is not None else "Age unknown"
    history_part = (
        f"Medical history: {medical_history}"
        if medical_history
        else "No medical history provided"
    )
    return f"{age_part}, {history_part}"


def build_system_prompt(
    medical_context: str,
    user_age: Optional[int] = None,
    medical_history: Optional[str] = None,
) -> str:
    return (
        "You are a medical AI assistant that analyzes symptoms and provides "
        "preliminary health information. You must:\n"
        "1. Analyze the provided symptoms carefully\n"
        "2. Suggest possible conditions ranked by likelihood\n"
        "3. Determine urgency level: normal, moderate, or critical\n"
        "4. Provide preventive suggestions\n"
        "5. Indicate when to seek medical help\n"
        "6. Always remind users this is not a diagnosis and they should "
        "consult healthcare professionals\n\n"
        "Medical Knowledge Base:\n"
        f"{medical_context}\n\n"
        f"User context: {_user_context(user_age, medical_history)}\n\n"
        f"{RESPONSE_SCHEMA_DESCRIPTION}"
    )


def build_analysis_messages(
    symptoms_text: str,
    medical_context: str,
    user_age: Optional[int] = None,
    medical_history: Optional[str] = None,
) -> List[Dict[str, str]]:
    return [
        {
            "role": "system",
            "content": build_system_prompt(medical_context, user_age, medical_history),
        },
        {
            "role": "user",
            "content": f"Analyze these symptoms: {symptoms_text}",
        },
    ]
