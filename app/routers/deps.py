"""
Shared router dependencies.
"""
from fastapi import BackgroundTasks, Depends
from sqlalchemy.orm import Session, sessionmaker

from app.db.base import get_db, get_session_factory
from app.db.store import DocumentStore
from app.services.triggers import run_change


def get_store(
    background: BackgroundTasks,
    db: Session = Depends(get_db),
    session_factory: sessionmaker = Depends(get_session_factory),
) -> DocumentStore:
    """
    Request-scoped store whose committed writes are handed to the change
    handlers as background tasks (they run after the response is sent).
    """
    return DocumentStore(
        db,
        publish=lambda change: background.add_task(run_change, change, session_factory),
    )
