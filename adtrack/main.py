from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from adtrack.api.routers import admin, me, subscription
from adtrack.shared.config import get_settings


logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    settings = get_settings()
    logging.basicConfig(level=settings.log_level)

    application = FastAPI(title="AdTrack Feature Access API")
    application.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_allow_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )
    application.include_router(subscription.router)
    application.include_router(admin.router)
    application.include_router(me.router)

    @application.exception_handler(SQLAlchemyError)
    async def _storage_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        logger.exception("storage_error method=%s path=%s", request.method, request.url.path, exc_info=exc)
        return JSONResponse(status_code=500, content={"detail": "Storage unavailable."})

    return application


app = create_app()
