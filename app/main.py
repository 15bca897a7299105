from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

import config
import state
from draft_repo import DraftRepo
from app.api.router import api_router

logger = logging.getLogger(__name__)


def _configure_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app(db_path: Optional[str] = None) -> FastAPI:
    _configure_logging()
    app = FastAPI(title="Draft Engine")

    @app.on_event("startup")
    def _startup_init_db() -> None:
        # 1) resolve db path (explicit arg > DRAFT_DB_PATH > default)
        # 2) apply schema + migrations
        # 3) integrity validate once
        path = db_path or config.DB_PATH
        Path(path).parent.mkdir(parents=True, exist_ok=True)
        state.set_db_path(path)
        with DraftRepo(path) as repo:
            repo.init_db()
            repo.validate_integrity()
        logger.info("draft db ready: %s", path)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(Exception)
    async def _unhandled_exception(request: Request, exc: Exception):
        logger.exception("unhandled error: %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content={"ok": False, "error": {"code": "INTERNAL", "message": "Internal error", "details": {}}},
        )

    app.include_router(api_router)
    return app


app = create_app()
