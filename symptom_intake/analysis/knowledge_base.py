# symptom_intake/analysis/knowledge_base.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List

from sqlalchemy import select
from sqlalchemy.orm import Session

from symptom_intake.models import SymptomCondition

logger = logging.getLogger(__name__)


@dataclass
class ReferenceRow:
    symptom: str
    possible_conditions: List[str] = field(default_factory=list)
    severity_indicators: List[str] = field(default_factory=list)


# Starter rows for an empty database. Production data is maintained
# outside this service.
DEFAULT_SYMPTOM_CONDITIONS: List[ReferenceRow] = [
    ReferenceRow(
        "headache",
        ["tension headache", "migraine", "sinusitis", "dehydration"],
        ["sudden severe onset", "stiff neck", "confusion", "vision loss"],
    ),
    ReferenceRow(
        "fever",
        ["viral infection", "influenza", "bacterial infection"],
        ["temperature above 39.5C", "rash", "difficulty breathing"],
    ),
    ReferenceRow(
        "chest pain",
        ["muscle strain", "acid reflux", "angina", "heart attack"],
        ["pain spreading to arm or jaw", "shortness of breath", "sweating"],
    ),
    ReferenceRow(
        "cough",
        ["common cold", "bronchitis", "asthma", "pneumonia"],
        ["coughing blood", "lasting more than 3 weeks", "high fever"],
    ),
    ReferenceRow(
        "abdominal pain",
        ["gastroenteritis", "indigestion", "appendicitis"],
        ["pain in lower right abdomen", "rigid abdomen", "vomiting blood"],
    ),
]


def load_reference_rows(session: Session) -> List[ReferenceRow]:
    """
    Read every symptom/condition row, ordered by symptom for a stable prompt.
    """
    stmt = select(SymptomCondition).order_by(SymptomCondition.symptom.asc())
    rows = [
        ReferenceRow(
            symptom=sc.symptom,
            possible_conditions=list(sc.possible_conditions or []),
            severity_indicators=list(sc.severity_indicators or []),
        )
        for sc in session.scalars(stmt)
    ]
    logger.debug("Loaded %d reference rows", len(rows))
    return rows


def format_medical_context(rows: Iterable[ReferenceRow]) -> str:
    """
    Render reference rows as the knowledge-base block of the prompt:

      Symptom: headache
      Possible conditions: migraine, sinusitis
      Severity indicators: stiff neck

    with a blank line between rows. No rows -> empty string.
    """
    blocks: List[str] = []
    for row in rows:
        blocks.append(
            f"Symptom: {row.symptom}\n"
            f"Possible conditions: {', '.join(row.possible_conditions)}\n"
            f"Severity indicators: {', '.join(row.severity_indicators)}"
        )
    return "\n\n".join(blocks)


def seed_symptom_conditions(
    session: Session,
    rows: Iterable[ReferenceRow] = DEFAULT_SYMPTOM_CONDITIONS,
) -> int:
    """
    Insert reference rows whose symptom is not present yet.

    Returns: number of rows inserted.
    """
    existing = set(session.scalars(select(SymptomCondition.symptom)))
    inserted = 0
    for row in rows:
        if row.symptom in existing:
            continue
        session.add(
            SymptomCondition(
                symptom=row.symptom,
                possible_conditions=list(row.possible_conditions),
                severity_indicators=list(row.severity_indicators),
            )
        )
        existing.add(row.symptom)
        inserted += 1

    logger.info("Seeded %d symptom condition rows", inserted)
    return inserted
