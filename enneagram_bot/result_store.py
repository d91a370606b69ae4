from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy import Column, DateTime, Integer, String, create_engine, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker

from .models import ResultSummary, StoredResult

logger = logging.getLogger("enneagram.results")

Base = declarative_base()


class PersistenceError(RuntimeError):
    """Raised when stored results cannot be read."""


class QuizResult(Base):
    __tablename__ = "results"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String, nullable=False)
    name = Column(String, nullable=True)
    basic_type = Column(String, nullable=False)
    wing = Column(String, nullable=False)
    created_at = Column(DateTime, server_default=func.now())


class ResultStore:
    """Append-only store of confirmed quiz results backed by SQLAlchemy."""

    def __init__(self, database_url: str) -> None:
        """Purpose: Configure the engine and session factory for the result table.
        Inputs/Outputs: Input is a SQLAlchemy database URL; no return value.
        Side Effects / State: Creates a lazy engine; no connection is opened yet.
        Dependencies: sqlalchemy create_engine/sessionmaker.
        Failure Modes: An unparseable URL raises ArgumentError immediately.
        Testing Notes: Use a file-backed sqlite URL under tmp_path.
        """
        connect_args = {"check_same_thread": False} if database_url.startswith("sqlite") else {}
        self._engine = create_engine(database_url, connect_args=connect_args)
        self._session_factory = sessionmaker(bind=self._engine, autoflush=False)

    def init_schema(self) -> None:
        """Create the results table when it does not exist yet."""
        Base.metadata.create_all(self._engine)

    def insert_result(
        self,
        user_id: str,
        display_name: Optional[str],
        personality_type: str,
        wing_label: str,
    ) -> bool:
        """Purpose: Append one confirmed result.
        Inputs/Outputs: Inputs are the session's user id, name, type and wing label;
            output is True on success and False when the write failed.
        Side Effects / State: Inserts one row and commits.
        Dependencies: QuizResult ORM model.
        Failure Modes: SQLAlchemyError is logged and reported as False so the caller
            can keep the session and let the user retry.
        Testing Notes: Insert twice and verify list_results returns both in order.
        """
        record = QuizResult(user_id=user_id, name=display_name, basic_type=personality_type, wing=wing_label)
        try:
            with self._session_factory() as db:
                db.add(record)
                db.commit()
        except SQLAlchemyError as exc:
            logger.error("result insert failed user=%s error=%s", user_id, exc)
            return False
        return True

    def list_results(self) -> List[ResultSummary]:
        """Purpose: Return every stored result in insertion order.
        Inputs/Outputs: No inputs; output is a list of ResultSummary.
        Side Effects / State: Reads the results table.
        Failure Modes: SQLAlchemyError is wrapped in PersistenceError.
        Testing Notes: Empty store returns an empty list.
        """
        try:
            with self._session_factory() as db:
                rows = db.query(QuizResult).order_by(QuizResult.id).all()
                return [
                    ResultSummary(display_name=row.name, personality_type=row.basic_type, wing_label=row.wing)
                    for row in rows
                ]
        except SQLAlchemyError as exc:
            logger.error("result listing failed error=%s", exc)
            raise PersistenceError("stored results are unavailable") from exc

    def list_records(self, user_id: str) -> List[StoredResult]:
        """Return the full records stored for one user, oldest first."""
        try:
            with self._session_factory() as db:
                rows = (
                    db.query(QuizResult)
                    .filter(QuizResult.user_id == user_id)
                    .order_by(QuizResult.id)
                    .all()
                )
                return [
                    StoredResult(
                        user_id=row.user_id,
                        display_name=row.name,
                        personality_type=row.basic_type,
                        wing_label=row.wing,
                        created_at=row.created_at,
                    )
                    for row in rows
                ]
        except SQLAlchemyError as exc:
            logger.error("result records failed user=%s error=%s", user_id, exc)
            raise PersistenceError("stored results are unavailable") from exc

    def dispose(self) -> None:
        self._engine.dispose()
