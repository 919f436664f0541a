"""
Dependency wiring for the FastAPI app.

Clients are built once by ``create_app`` and kept on ``app.state``; routes
reach them through the ``get_*`` providers below.
"""

from __future__ import annotations

import logging

from fastapi import Request

from portfolio_backend.config import Settings
from portfolio_backend.db import InMemoryRecordStore, RecordStore, SqlRecordStore
from portfolio_backend.mail import (
    ContactRelay,
    InMemoryMailTransport,
    MailTransport,
    SmtpMailTransport,
)
from portfolio_backend.storage import (
    FirebaseStorageClient,
    InMemoryStorageClient,
    S3StorageClient,
    StorageClient,
)

logger = logging.getLogger(__name__)


def build_record_store(settings: Settings) -> RecordStore:
    if settings.use_in_memory_backends or not settings.database_url:
        logger.info("Using in-memory record store")
        return InMemoryRecordStore()
    return SqlRecordStore(settings.database_url)


def build_storage_client(settings: Settings) -> StorageClient:
    if settings.use_in_memory_backends:
        return InMemoryStorageClient()
    firebase_credentials = settings.firebase_credentials()
    if firebase_credentials:
        return FirebaseStorageClient(
            credentials_info=firebase_credentials,
            bucket_name=settings.storage_bucket,
        )
    if settings.s3_bucket:
        return S3StorageClient(
            bucket=settings.s3_bucket,
            region=settings.s3_region or "",
            endpoint=settings.s3_endpoint or "",
            access_key_id=settings.aws_access_key_id or "",
            secret_access_key=settings.aws_secret_access_key or "",
        )
    logger.info("No object storage configured; using in-memory storage")
    return InMemoryStorageClient()


def build_mail_transport(settings: Settings) -> MailTransport:
    if settings.use_in_memory_backends or not (
        settings.email_user and settings.email_pass
    ):
        logger.info("No mail credentials configured; using in-memory transport")
        return InMemoryMailTransport()
    return SmtpMailTransport(
        host=settings.smtp_host,
        port=settings.smtp_port,
        username=settings.email_user,
        password=settings.email_pass,
    )


def get_record_store(request: Request) -> RecordStore:
    return request.app.state.record_store


def get_storage_client(request: Request) -> StorageClient:
    return request.app.state.storage_client


def get_contact_relay(request: Request) -> ContactRelay:
    return request.app.state.contact_relay
