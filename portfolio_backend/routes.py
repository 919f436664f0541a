"""
HTTP routes for the portfolio backend API.
"""

from __future__ import annotations

import logging
import re
from contextlib import contextmanager
from typing import Optional

from fastapi import APIRouter, Body, Depends, Form, Request, Response
from fastapi.responses import JSONResponse

from portfolio_backend.assets import remove_record_assets
from portfolio_backend.db import RecordStore, RecordTable, resolve_table
from portfolio_backend.dependencies import (
    get_contact_relay,
    get_record_store,
    get_storage_client,
)
from portfolio_backend.errors import (
    InvalidId,
    LogoutFailed,
    PortfolioError,
    RecordNotFound,
    ServerError,
)
from portfolio_backend.mail import ContactRelay
from portfolio_backend.schemas import (
    ContactRequest,
    ContactResponse,
    MessageResponse,
    RecordResponse,
)
from portfolio_backend.storage import StorageClient
from portfolio_backend.updates import build_partial_update, parse_text_para

logger = logging.getLogger(__name__)

# Record CRUD, mounted under the API prefix.
router = APIRouter()
# Site-level endpoints (contact form, logout), mounted at the root.
site_router = APIRouter()

_ID_PATTERN = re.compile(r"^-?\d+$")


def _parse_id(raw: str) -> int:
    if not _ID_PATTERN.match(raw or ""):
        raise InvalidId()
    return int(raw)


@contextmanager
def _store_errors(action: str, table: RecordTable):
    """Log unexpected store failures and surface them as opaque 500s."""
    try:
        yield
    except PortfolioError:
        raise
    except Exception:
        logger.exception("Error %s %s", action, table.value)
        raise ServerError() from None


def _to_response(record) -> RecordResponse:
    return RecordResponse(**record.as_dict())


@router.get("/{table}", response_model=list[RecordResponse])
def list_records(table: str, store: RecordStore = Depends(get_record_store)):
    record_table = resolve_table(table)
    with _store_errors("listing", record_table):
        records = store.list_records(record_table)
    return [_to_response(record) for record in records]


@router.get("/{table}/{record_id}", response_model=RecordResponse)
def get_record(
    table: str, record_id: str, store: RecordStore = Depends(get_record_store)
):
    record_table = resolve_table(table)
    parsed_id = _parse_id(record_id)
    with _store_errors("fetching from", record_table):
        record = store.get_record(record_table, parsed_id)
    if record is None:
        raise RecordNotFound()
    return _to_response(record)


@router.post("/{table}", response_model=RecordResponse, status_code=201)
def create_record(
    table: str,
    size: Optional[str] = Form(None),
    text: Optional[str] = Form(None),
    textPara: Optional[str] = Form(None),
    img: Optional[str] = Form(None),
    pdfUrl: Optional[str] = Form(None),
    detailsRoute: Optional[str] = Form(None),
    store: RecordStore = Depends(get_record_store),
):
    """
    Insert a record from the supplied form fields. ``textPara`` is a JSON
    array string; unsupplied fields keep their column defaults.
    """
    record_table = resolve_table(table)
    supplied = {
        "size": size,
        "img": img,
        "text": text,
        "pdfUrl": pdfUrl,
        "detailsRoute": detailsRoute,
    }
    values = {name: value for name, value in supplied.items() if value is not None}
    values["textPara"] = parse_text_para(textPara)
    with _store_errors("adding to", record_table):
        record = store.create_record(record_table, values)
    logger.info("Created %s record %s", record_table.value, record.id)
    return _to_response(record)


@router.put("/{table}/{record_id}", response_model=Optional[RecordResponse])
def update_record(
    table: str,
    record_id: str,
    size: Optional[str] = Form(None),
    text: Optional[str] = Form(None),
    textPara: Optional[str] = Form(None),
    img: Optional[str] = Form(None),
    pdfUrl: Optional[str] = Form(None),
    detailsRoute: Optional[str] = Form(None),
    store: RecordStore = Depends(get_record_store),
):
    """
    Apply a sparse patch: only non-empty fields are written.
    """
    record_table = resolve_table(table)
    parsed_id = _parse_id(record_id)
    patch = build_partial_update(
        {
            "size": size,
            "text": text,
            "textPara": parse_text_para(textPara),
            "detailsRoute": detailsRoute,
            "img": img,
            "pdfUrl": pdfUrl,
        }
    )
    with _store_errors("updating in", record_table):
        record = store.update_record(record_table, parsed_id, patch)
    if record is None:
        # No existence check is made before patching; unknown ids yield null.
        logger.warning(
            "Update of %s matched no record with id %s", record_table.value, parsed_id
        )
        return None
    return _to_response(record)


@router.delete("/{table}/{record_id}", response_model=MessageResponse)
def delete_record(
    table: str,
    record_id: str,
    store: RecordStore = Depends(get_record_store),
    storage: StorageClient = Depends(get_storage_client),
):
    """
    Delete a record and the assets it references.

    Asset deletion runs first and is best-effort; the row is always removed
    afterwards, so a failed asset deletion can leave an orphaned object.
    """
    record_table = resolve_table(table)
    parsed_id = _parse_id(record_id)
    with _store_errors("deleting from", record_table):
        record = store.get_record(record_table, parsed_id)
        if record is None:
            raise RecordNotFound(f"{record_table.value} not found")
        remove_record_assets(storage, record)
        if not store.delete_record(record_table, parsed_id):
            raise RecordNotFound(f"{record_table.value} not found")
    return MessageResponse(
        message=f"{record_table.value} and associated files deleted successfully"
    )


@site_router.post("/contact", response_model=ContactResponse)
def contact(
    payload: Optional[ContactRequest] = Body(None),
    relay: ContactRelay = Depends(get_contact_relay),
):
    # No required fields; an absent body renders an empty template.
    payload = payload or ContactRequest()
    sent = relay.send(
        payload.firstName,
        payload.lastName,
        payload.email,
        payload.phone,
        payload.message,
    )
    if not sent:
        failure = ContactResponse(
            success=False,
            message="Failed to send message. Please try again later.",
        )
        return JSONResponse(status_code=500, content=failure.model_dump())
    return ContactResponse(success=True, message="Message sent successfully!")


@site_router.post("/logout", response_model=MessageResponse)
def logout(request: Request, response: Response):
    try:
        request.session.clear()
    except Exception as e:
        logger.exception("Failed to destroy session")
        raise LogoutFailed() from e
    response.delete_cookie(request.app.state.settings.session_cookie)
    return MessageResponse(message="Logout successful")
