"""
Sparse-patch support for record updates.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

logger = logging.getLogger(__name__)

# Declaration order drives placeholder numbering.
UPDATABLE_FIELDS = ("size", "text", "textPara", "detailsRoute", "img", "pdfUrl")


@dataclass
class PartialUpdate:
    """Columns to touch and their bind values, kept in lockstep."""

    columns: list[str] = field(default_factory=list)
    values: list[Any] = field(default_factory=list)

    @property
    def fragments(self) -> list[str]:
        return [
            f"{column} = ${position}"
            for position, column in enumerate(self.columns, start=1)
        ]

    @property
    def is_empty(self) -> bool:
        return not self.columns

    def as_dict(self) -> dict[str, Any]:
        return dict(zip(self.columns, self.values))


def _is_present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, (str, list, tuple)):
        return len(value) > 0
    return True


def build_partial_update(fields: Mapping[str, Any]) -> PartialUpdate:
    """
    Build an update touching only the fields that carry a value.

    Fields are visited in ``UPDATABLE_FIELDS`` order regardless of the order
    of ``fields``; ``None``, empty strings and empty ``textPara`` lists are
    skipped. Unknown keys are ignored.
    """
    update = PartialUpdate()
    for name in UPDATABLE_FIELDS:
        value = fields.get(name)
        if not _is_present(value):
            continue
        update.columns.append(name)
        update.values.append(list(value) if name == "textPara" else value)
    return update


def parse_text_para(raw: Optional[str]) -> list[str]:
    """
    Decode the JSON array string sent for ``textPara``.

    Anything that is not a JSON array (including malformed JSON) becomes an
    empty list.
    """
    if raw is None or raw == "":
        return []
    try:
        decoded = json.loads(raw)
    except (TypeError, ValueError):
        logger.warning("Ignoring malformed textPara payload: %r", raw)
        return []
    if not isinstance(decoded, list):
        logger.warning("Ignoring non-array textPara payload: %r", raw)
        return []
    # Nulls are dropped; other non-string items keep their JSON spelling.
    return [
        item if isinstance(item, str) else json.dumps(item)
        for item in decoded
        if item is not None
    ]
