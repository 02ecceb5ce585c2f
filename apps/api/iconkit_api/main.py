"""FastAPI entrypoint for the iconkit API."""

from __future__ import annotations

import logging
import os
import sys

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from packages.iconkit_core.errors import (
    ArchiveAssemblyError,
    EncodeFailureError,
    IconPipelineError,
    InvalidBackgroundColorError,
    UnreadableImageError,
)

from .routers.icons import router as icons_router

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logging.getLogger("PIL").setLevel(logging.WARNING)
logger = logging.getLogger("iconkit_api")

# Ordered most specific first; the base class catches anything else.
_STATUS_BY_ERROR: tuple[tuple[type[IconPipelineError], int], ...] = (
    (UnreadableImageError, 422),
    (InvalidBackgroundColorError, 400),
    (EncodeFailureError, 500),
    (ArchiveAssemblyError, 500),
    (IconPipelineError, 500),
)

app = FastAPI(title="iconkit API", version="0.1.0")

_cors_origins = [o.strip() for o in os.environ.get("ICONKIT_CORS_ORIGINS", "*").split(",")]
_cors_allow_credentials = "*" not in _cors_origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_credentials=_cors_allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition", "X-Icon-Count"],
)
app.include_router(icons_router)


def status_for_error(exc: IconPipelineError) -> int:
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return 500


@app.exception_handler(IconPipelineError)
async def _icon_pipeline_error_handler(request: Request, exc: IconPipelineError):
    status_code = status_for_error(exc)
    log = logger.error if status_code >= 500 else logger.warning
    log("[API] %s %s failed (%s): %s", request.method, request.url.path, exc.error_code, exc)
    return JSONResponse(
        status_code=status_code,
        content={"detail": str(exc), "error_code": exc.error_code},
    )


@app.get("/healthz")
def healthz() -> dict[str, str]:
    logger.debug("[HEALTH] Health check requested")
    return {"status": "ok"}
