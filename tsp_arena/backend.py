from __future__ import annotations

import logging
from typing import List, Optional

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from .arena import Arena
from .config import ArenaConfig
from .errors import ArenaError, ConfigurationError, SearchBudgetError
from .solution import instance_payload, report_payload

logger = logging.getLogger(__name__)


class NewGameRequest(BaseModel):
    playerName: Optional[str] = None


class CheckAnswerRequest(BaseModel):
    sessionId: int
    route: Optional[List[str]] = None
    routeBetween: Optional[List[str]] = None
    playerName: Optional[str] = None


def _arena(request: Request) -> Arena:
    return request.app.state.arena


def create_app(config: Optional[ArenaConfig] = None, arena: Optional[Arena] = None) -> FastAPI:
    app = FastAPI(title="TSP Arena")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.arena = arena if arena is not None else Arena(config)

    @app.exception_handler(ArenaError)
    async def arena_error_handler(request: Request, exc: ArenaError):
        if isinstance(exc, (ConfigurationError, SearchBudgetError)):
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        else:
            logger.warning("%s %s rejected: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        if errors:
            first = errors[0]
            where = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
            message = f"Invalid request: {where} {first.get('msg', '')}".strip()
        else:
            message = "Invalid request"
        return JSONResponse(status_code=400, content={"error": message})

    # Plain def endpoints run on the threadpool, so rounds are evaluated concurrently.
    @app.post("/api/new-game")
    @app.post("/api/new-instance")
    def api_new_game(request: Request, body: Optional[NewGameRequest] = None):
        session = _arena(request).new_game(player_name=body.playerName if body else None)
        return JSONResponse(instance_payload(session.session_id, session.model, session.home))

    @app.post("/api/check-answer")
    @app.post("/api/evaluate")
    def api_check_answer(request: Request, body: CheckAnswerRequest):
        report = _arena(request).check_answer(
            body.sessionId,
            route=body.route,
            route_between=body.routeBetween,
            player_name=body.playerName,
        )
        return JSONResponse(report_payload(report))

    @app.get("/api/complexity")
    def api_complexity(request: Request):
        return JSONResponse(_arena(request).complexity())

    @app.get("/api/health")
    def api_health(request: Request):
        return JSONResponse({"status": "ok", "sessions": len(_arena(request).store)})

    return app


def get_app() -> FastAPI:
    """App factory for `uvicorn tsp_arena.backend:get_app --factory`; reads .env and TSP_ARENA_* variables."""
    load_dotenv()
    return create_app(ArenaConfig.from_env())


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("tsp_arena.backend:get_app", factory=True, host="0.0.0.0", port=8000, reload=False)
