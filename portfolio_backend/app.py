"""
FastAPI application entry point for the portfolio backend.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool
from starlette.middleware.sessions import SessionMiddleware

from portfolio_backend.config import Settings, get_settings
from portfolio_backend.db import RecordStore
from portfolio_backend.dependencies import (
    build_mail_transport,
    build_record_store,
    build_storage_client,
)
from portfolio_backend.errors import PortfolioError
from portfolio_backend.mail import ContactRelay, MailTransport
from portfolio_backend.routes import router, site_router
from portfolio_backend.storage import StorageClient

logger = logging.getLogger(__name__)


async def _portfolio_error_handler(request: Request, exc: PortfolioError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@asynccontextmanager
async def _lifespan(app: FastAPI):
    if await run_in_threadpool(app.state.mail_transport.verify):
        logger.info("Email service ready to send messages")
    yield


def create_app(
    settings: Optional[Settings] = None,
    *,
    record_store: Optional[RecordStore] = None,
    storage_client: Optional[StorageClient] = None,
    mail_transport: Optional[MailTransport] = None,
) -> FastAPI:
    """
    Build the app and its long-lived clients. Any client passed in is used
    as-is instead of being built from settings.
    """
    settings = settings or get_settings()
    app = FastAPI(title="Portfolio Backend", version="0.1.0", lifespan=_lifespan)

    app.state.settings = settings
    if record_store is None:
        record_store = build_record_store(settings)
    if storage_client is None:
        storage_client = build_storage_client(settings)
    if mail_transport is None:
        mail_transport = build_mail_transport(settings)
    app.state.record_store = record_store
    app.state.storage_client = storage_client
    app.state.mail_transport = mail_transport
    app.state.contact_relay = ContactRelay(
        transport=app.state.mail_transport,
        recipient=settings.contact_recipient or settings.email_user or "",
    )

    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.session_secret,
        session_cookie=settings.session_cookie,
        max_age=settings.session_max_age,
        https_only=settings.session_https_only,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(PortfolioError, _portfolio_error_handler)

    app.include_router(router, prefix=settings.api_prefix)
    app.include_router(site_router)
    return app
