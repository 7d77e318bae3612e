"""
HTTP surface for the transcript resolver.

``POST /transcript`` takes ``{"videoId": "..."}`` and answers with the
TranscriptResult wire shape. By default every answer is HTTP 200 so that
clients which discard bodies of non-2xx responses still see the error code.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from .config import config
from .errors import ErrorKind
from .models import TranscriptResult
from .resolver import TranscriptResolver

logger = logging.getLogger(__name__)


def _respond(result: TranscriptResult, always_ok: bool) -> JSONResponse:
    status = 200
    if not always_ok and result.error_code is not None:
        status = result.error_code.http_status
    return JSONResponse(result.to_dict(), status_code=status)


def create_app(resolver: TranscriptResolver | None = None, always_ok: bool | None = None) -> FastAPI:
    """Build the FastAPI application."""
    app = FastAPI(title="transcript-resolver")
    app.state.resolver = resolver or TranscriptResolver()
    app.state.always_ok = config.ALWAYS_OK_STATUS if always_ok is None else always_ok

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
    )

    @app.get("/health")
    def health():
        return {"status": "ok", "hosted": app.state.resolver.hosted.configured}

    @app.post("/transcript")
    async def transcript(request: Request):
        try:
            body = await request.json()
        except ValueError:
            return _respond(
                TranscriptResult.failure(ErrorKind.INVALID_REQUEST, "Invalid request body"),
                app.state.always_ok,
            )

        video_id = body.get("videoId") if isinstance(body, dict) else None
        if not isinstance(body, dict) or not isinstance(video_id, (str, type(None))):
            return _respond(
                TranscriptResult.failure(ErrorKind.INVALID_REQUEST, "Invalid request body"),
                app.state.always_ok,
            )

        result = await run_in_threadpool(app.state.resolver.resolve, video_id)
        return _respond(result, app.state.always_ok)

    return app


app = create_app()
