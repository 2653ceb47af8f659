# symptom_intake/services/session.py
from __future__ import annotations

from contextlib import contextmanager
from typing import Callable, Iterator

from sqlalchemy.orm import Session

from symptom_intake.db import SessionLocal, engine, Base
from symptom_intake import models  # noqa: F401  (registers tables on Base.metadata)


SessionFactory = Callable[[], Session]


@contextmanager
def db_session(factory: SessionFactory = SessionLocal) -> Iterator[Session]:
    db = factory()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def init_db() -> None:
    """
    Create all tables that do not exist yet.
    Call this once at startup (e.g. from scripts).
    """
    Base.metadata.create_all(bind=engine)
