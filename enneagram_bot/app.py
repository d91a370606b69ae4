from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from .classification_table import ClassificationTable, TableLoader
from .config import DATA_DIR, Settings, load_settings
from .models import HealthResponse, MessageRequest, MessageResponse, StoredResult
from .quiz_machine import QuizStateMachine
from .result_store import PersistenceError, ResultStore
from .session_store import SessionStore

BASE_DIR = Path(__file__).resolve().parent
DEFAULT_USER_ID = "default"

log_level_name = os.getenv("LOG_LEVEL", "INFO").upper()
log_level = getattr(logging, log_level_name, logging.INFO)
if not logging.getLogger().handlers:
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

logging.getLogger("enneagram").setLevel(log_level)
logger = logging.getLogger("enneagram.app")

ENV_PATH = BASE_DIR / ".env"
if ENV_PATH.exists():
    load_dotenv(ENV_PATH, override=True)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Purpose: Build the quiz API with its table loader, session map and result store.
    Inputs/Outputs: Input is optional Settings (defaults to load_settings()); output is
        a FastAPI application.
    Side Effects / State: On startup creates the result schema and starts the
        background table load; on shutdown stops the loader and disposes the engine.
    Dependencies: ClassificationTable, TableLoader, SessionStore, ResultStore,
        QuizStateMachine.
    Failure Modes: A missing table source is logged and leaves the API answering with
        the not-ready reply.
    If Removed: The quiz has no HTTP surface.
    Testing Notes: Build with temp Settings and drive it through TestClient.
    """
    settings = settings or load_settings()

    table = ClassificationTable()
    loader = TableLoader(table, settings.table_path, delimiter=settings.table_delimiter)
    session_store = SessionStore(ttl_sec=settings.session_ttl_sec, max_sessions=settings.max_sessions)
    result_store = ResultStore(settings.database_url)
    machine = QuizStateMachine(
        sessions=session_store,
        table=table,
        results=result_store,
        restart_keyword=settings.restart_keyword,
    )

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        DATA_DIR.mkdir(parents=True, exist_ok=True)
        result_store.init_schema()
        loader.start()
        logger.info("startup table=%s", settings.table_path)
        yield
        loader.shutdown()
        result_store.dispose()

    app = FastAPI(title="Enneagram Quiz Chat", lifespan=lifespan)
    app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])
    app.state.table = table
    app.state.loader = loader
    app.state.sessions = session_store
    app.state.results = result_store
    app.state.machine = machine

    @app.post("/message", response_model=MessageResponse)
    def message(request: MessageRequest) -> MessageResponse:
        """Purpose: Advance the caller's quiz by one message.
        Inputs/Outputs: Input is MessageRequest; output is MessageResponse with the reply.
        Side Effects / State: Mutates the caller's session; may write a stored result.
        Dependencies: QuizStateMachine.handle_message.
        Failure Modes: Unexpected exceptions propagate as 500 errors.
        Testing Notes: Post a full quiz and verify each reply.
        """
        user_id = request.userId or DEFAULT_USER_ID
        reply = machine.handle_message(user_id, request.message)
        return MessageResponse(reply=reply)

    @app.get("/health", response_model=HealthResponse)
    def health() -> HealthResponse:
        # Row count is diagnostic only.
        return HealthResponse(ready=table.is_ready, rows=len(table))

    @app.get("/results/{user_id}", response_model=List[StoredResult])
    def results(user_id: str) -> List[StoredResult]:
        """Return every stored result of one user, oldest first."""
        try:
            return result_store.list_records(user_id)
        except PersistenceError as exc:
            raise HTTPException(status_code=503, detail=str(exc)) from exc

    return app


app = create_app()
