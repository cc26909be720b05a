import logging
import sys
from contextlib import asynccontextmanager
from functools import partial
from typing import Any, Callable, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from prometheus_fastapi_instrumentator import Instrumentator

from app.core.config import Settings, get_settings
from app.core.firebase import get_firestore, init_firebase
from app.watering.api import router as watering_router
from app.watering.dispatcher import send_push_via_fcm
from app.watering.exceptions import WateringError


LIVENESS_TEXT = "UrbanRoots Notifications Backend"

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Connect to Firebase before serving; bad credentials abort startup."""
    settings: Settings = app.state.settings
    logger.info("Starting up UrbanRoots notifications backend...")
    if app.state.firestore is None or app.state.push_sender is None:
        fb_app = init_firebase(settings)
        if app.state.firestore is None:
            app.state.firestore = get_firestore(fb_app)
        if app.state.push_sender is None:
            app.state.push_sender = partial(send_push_via_fcm, app=fb_app)
    yield
    logger.info("Shutting down UrbanRoots notifications backend")


def create_app(
    settings: Optional[Settings] = None,
    firestore_client: Any = None,
    push_sender: Optional[Callable[..., Any]] = None,
) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(title="UrbanRoots Notifications", lifespan=lifespan)
    app.state.settings = settings
    app.state.firestore = firestore_client
    app.state.push_sender = push_sender

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(watering_router)

    @app.get("/", response_class=PlainTextResponse)
    def liveness():
        return LIVENESS_TEXT

    @app.exception_handler(WateringError)
    async def watering_error_handler(request: Request, exc: WateringError):
        if exc.status_code >= 500:
            logger.error(f"HTTP {exc.status_code}: {exc.message} - {request.url}")
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"Rejected request body - {request.url}: {exc.errors()}")
        return JSONResponse(status_code=400, content={"error": "Invalid request body"})

    if settings.METRICS_ENABLED:
        Instrumentator().instrument(app).expose(app, endpoint="/metrics")
    return app


app = create_app()


if __name__ == "__main__":
    _settings = get_settings()
    uvicorn.run(
        "app.main:app",
        host=_settings.SERVER_HOST,
        port=_settings.PORT,
        log_level=_settings.LOG_LEVEL.lower(),
    )
