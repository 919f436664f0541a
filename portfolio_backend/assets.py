"""
Helpers for the object-store assets referenced by records.
"""

from __future__ import annotations

import logging
import re
from typing import Optional
from urllib.parse import unquote

from portfolio_backend.db import Record
from portfolio_backend.storage import StorageClient

logger = logging.getLogger(__name__)

# Public download URLs look like .../o/<percent-encoded path>?alt=media...
_OBJECT_PATH_PATTERN = re.compile(r"/o/(.*?)\?")


def extract_object_path(url: Optional[str]) -> Optional[str]:
    """Return the object path encoded in a public download URL, if any."""
    if not url or not isinstance(url, str):
        return None
    match = _OBJECT_PATH_PATTERN.search(unquote(url))
    if not match or not match.group(1):
        return None
    return match.group(1)


def remove_record_assets(storage: StorageClient, record: Record) -> list[str]:
    """
    Delete the image and PDF a record points at.

    Deletion is best-effort: a failure for one asset is logged and the next
    one is still attempted. Returns the paths that were deleted.
    """
    deleted: list[str] = []
    for label, url in (("img", record.img), ("pdfUrl", record.pdf_url)):
        if not url:
            continue
        path = extract_object_path(url)
        if not path:
            logger.warning(
                "Skipping %s for record %s: unrecognised asset URL %r",
                label,
                record.id,
                url,
            )
            continue
        try:
            storage.delete_object(path)
        except Exception:
            logger.exception(
                "Failed to delete %s asset %s for record %s", label, path, record.id
            )
            continue
        deleted.append(path)
    return deleted
