from __future__ import annotations

import os
import json
import logging
from typing import Any, Optional

import httpx

from scoreclient.models import MalformedResponseError, Response

logger = logging.getLogger(__name__)


def _timeout_from_env() -> Optional[float]:
    raw = os.getenv("SCORE_API_TIMEOUT_SEC", "").strip()
    return float(raw) if raw else None


REQUEST_TIMEOUT_SEC = _timeout_from_env()


def _to_response(r: httpx.Response) -> Response:
    try:
        body = r.json()
    except ValueError as e:
        logger.warning("malformed JSON body from %s %s (HTTP %d)", r.request.method, r.request.url, r.status_code)
        raise MalformedResponseError(r.status_code, r.text) from e
    logger.debug("%s %s -> %d", r.request.method, r.request.url, r.status_code)
    return Response(status=r.status_code, data=body)


async def get(url: str) -> Response:
    """Read a resource. Resolves for every HTTP status; a non-JSON body raises MalformedResponseError."""
    async with httpx.AsyncClient(timeout=REQUEST_TIMEOUT_SEC) as client:
        r = await client.get(url)
        return _to_response(r)


async def post(url: str, data: Any) -> Response:
    """Send ``data`` as a JSON body. Same result contract as :func:`get`."""
    content = json.dumps(data, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
    async with httpx.AsyncClient(timeout=REQUEST_TIMEOUT_SEC) as client:
        r = await client.post(
            url,
            content=content,
            headers={"Content-Type": "application/json"},
        )
        return _to_response(r)
