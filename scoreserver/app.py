from __future__ import annotations

import os
import asyncio
import logging
from dataclasses import dataclass, field

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from starlette.exceptions import HTTPException as StarletteHTTPException

from scoreclient.models import ErrorPayload, User
from scoreserver.store import UserStore


def _level_from_env() -> str:
    raw = os.getenv("SCORE_LOG_LEVEL", "INFO").strip().upper()
    return raw if isinstance(logging.getLevelName(raw), int) else "INFO"


LOG_LEVEL = _level_from_env()

logger = logging.getLogger(__name__)
logger.setLevel(LOG_LEVEL)

app = FastAPI(title="Score Server", version="0.1.0")


class ScoreUpdate(BaseModel):
    score: float = Field(ge=0, strict=True, allow_inf_nan=False)


@dataclass
class Runtime:
    users: UserStore = field(default_factory=UserStore)
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)


RT = Runtime()


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorPayload(error=message).model_dump(by_alias=True),
    )


def _describe_validation(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "bad request"
    first = errors[0]
    loc = ".".join(str(x) for x in first.get("loc", ()) if x != "body")
    msg = str(first.get("msg", "invalid value"))
    return f"{loc}: {msg}" if loc else msg


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    message = _describe_validation(exc)
    logger.info("rejected %s %s: %s", request.method, request.url.path, message)
    return _error(400, message)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return _error(exc.status_code, str(exc.detail))


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception("unexpected failure on %s %s", request.method, request.url.path)
    return _error(500, f"internal error: {exc}")


@app.get("/health")
def health():
    return {"status": "ok", "service": "scoreserver"}


@app.get("/users/{user_id}", response_model=User)
async def get_user(user_id: str):
    async with RT.lock:
        user = RT.users.get(user_id)
    if user is None:
        raise HTTPException(status_code=404, detail="user not found")
    return user


@app.post("/users/{user_id}", response_model=User)
async def post_user(user_id: str, payload: ScoreUpdate):
    async with RT.lock:
        user, created = RT.users.upsert(user_id, payload.score)

    if created:
        logger.info("created user %s with score %s", user_id, user.score)
        return JSONResponse(status_code=201, content=user.model_dump())

    logger.info("updated user %s to score %s", user_id, user.score)
    return user


@app.delete("/users")
async def clear_users():
    async with RT.lock:
        n = RT.users.clear()
    return {"ok": True, "cleared": n}
