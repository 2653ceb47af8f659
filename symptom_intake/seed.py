# symptom_intake/seed.py
"""
Create tables and load the starter symptom/condition rows.

    python -m symptom_intake.seed
"""
import logging

from symptom_intake.analysis import seed_symptom_conditions
from symptom_intake.services import db_session, init_db

logger = logging.getLogger(__name__)


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    init_db()
    with db_session() as session:
        inserted = seed_symptom_conditions(session)
    logger.info("Done, %d new rows", inserted)


if __name__ == "__main__":
    main()
