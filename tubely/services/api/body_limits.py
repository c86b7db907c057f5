# tubely/services/api/body_limits.py
from __future__ import annotations

from http import HTTPStatus
from typing import List, Optional, Tuple

from fastapi import HTTPException
from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from tubely.common.logging import get_logger
from tubely.common.settings import UploadLimits, get_settings

logger = get_logger()


def _too_large(limit: int) -> str:
    return f"Upload exceeds the {limit} byte limit"


def _declared_length(scope: Scope) -> Optional[int]:
    for name, value in scope.get("headers") or []:
        if name == b"content-length":
            try:
                return int(value)
            except ValueError:
                return None
    return None


class UploadBodyLimit:
    """
    ASGI middleware that caps request bodies on the upload routes.

    FastAPI parses multipart forms (and spools them to disk) before any route
    dependency runs, so the cap has to sit in front of the app:

    - a declared Content-Length over the cap gets a 413 without the body ever
      being read
    - otherwise the body is counted as it is received and the read fails with
      a 413 once the count goes over the cap
    """

    def __init__(self, app: ASGIApp, limits: Optional[UploadLimits] = None, prefix: Optional[str] = None) -> None:
        cfg = get_settings()
        limits = limits or cfg.uploads
        prefix = cfg.api.prefix if prefix is None else prefix
        slack = limits.multipart_overhead_bytes
        self.app = app
        # (route prefix, file limit, body cap)
        self.routes: List[Tuple[str, int, int]] = [
            (f"{prefix}/video_upload/", limits.max_video_bytes, limits.max_video_bytes + slack),
            (f"{prefix}/thumbnail_upload/", limits.max_thumbnail_bytes, limits.max_thumbnail_bytes + slack),
        ]

    def _limits_for(self, scope: Scope) -> Optional[Tuple[int, int]]:
        if scope["type"] != "http" or scope.get("method") != "POST":
            return None
        path = scope.get("path", "")
        for route, limit, cap in self.routes:
            if path.startswith(route):
                return limit, cap
        return None

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        found = self._limits_for(scope)
        if found is None:
            await self.app(scope, receive, send)
            return
        limit, cap = found

        declared = _declared_length(scope)
        if declared is not None and declared > cap:
            logger.info("refusing %s: declared body of %d bytes is over the %d byte cap", scope["path"], declared, cap)
            response = JSONResponse({"detail": _too_large(limit)}, status_code=HTTPStatus.REQUEST_ENTITY_TOO_LARGE)
            await response(scope, receive, send)
            return

        received = 0

        async def capped_receive() -> Message:
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > cap:
                    logger.info("aborting %s: body went over the %d byte cap", scope["path"], cap)
                    # HTTPException passes through FastAPI's body parsing untouched
                    raise HTTPException(status_code=HTTPStatus.REQUEST_ENTITY_TOO_LARGE, detail=_too_large(limit))
            return message

        await self.app(scope, capped_receive, send)
