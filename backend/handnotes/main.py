from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api.auth import router as auth_router
from .api.notes import router as notes_router
from .api.process import router as process_router
from .config import settings
from .db import init_db
from .errors import HandnotesError

LOGGER = logging.getLogger("handnotes")
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)


@asynccontextmanager
async def lifespan(_: FastAPI):
    init_db()
    LOGGER.info("Database ready, using model %s", settings.ai_model)
    yield


app = FastAPI(title="handnotes", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=settings.cors_allow_headers,
)

app.include_router(process_router)
app.include_router(notes_router)
app.include_router(auth_router)


@app.exception_handler(HandnotesError)
async def handnotes_error_handler(request: Request, exc: HandnotesError):
    if exc.status_code >= 500:
        LOGGER.warning("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    LOGGER.exception("Unhandled exception on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


@app.get("/healthz")
def healthz() -> dict[str, str]:
    return {"status": "ok"}


def run() -> None:
    import uvicorn

    uvicorn.run("handnotes.main:app", host="0.0.0.0", port=8000)


if __name__ == "__main__":
    run()
