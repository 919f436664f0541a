"""
Record store for the portfolio tables: SQLAlchemy-backed and in-memory
implementations.
"""

from __future__ import annotations

import copy
import itertools
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Protocol

from sqlalchemy import (
    JSON,
    Column,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    create_engine,
    delete,
    insert,
    select,
    update,
)
from sqlalchemy.dialects.postgresql import ARRAY

from portfolio_backend.errors import InvalidTable, NoUpdatesProvided
from portfolio_backend.updates import PartialUpdate


class RecordTable(str, Enum):
    """Tables exposed through the CRUD API."""

    WORKCARDS = "workcards"
    PITCHES = "pitches"
    COMPETITION = "competition"


def resolve_table(name: str) -> RecordTable:
    try:
        return RecordTable(name)
    except ValueError:
        raise InvalidTable() from None


@dataclass
class Record:
    id: int
    size: Optional[str] = None
    img: Optional[str] = None
    text: Optional[str] = None
    pdf_url: Optional[str] = None
    text_para: list[str] = field(default_factory=list)
    details_route: Optional[str] = None

    @classmethod
    def from_row(cls, row: dict) -> "Record":
        return cls(
            id=row["id"],
            size=row.get("size"),
            img=row.get("img"),
            text=row.get("text"),
            pdf_url=row.get("pdfUrl"),
            text_para=list(row.get("textPara") or []),
            details_route=row.get("detailsRoute"),
        )

    def as_dict(self) -> dict:
        return {
            "id": self.id,
            "size": self.size,
            "img": self.img,
            "text": self.text,
            "pdfUrl": self.pdf_url,
            "textPara": list(self.text_para),
            "detailsRoute": self.details_route,
        }


class RecordStore(Protocol):
    """Interface for record persistence."""

    def list_records(self, table: RecordTable) -> list[Record]:
        ...

    def get_record(self, table: RecordTable, record_id: int) -> Optional[Record]:
        ...

    def create_record(self, table: RecordTable, values: dict[str, Any]) -> Record:
        ...

    def update_record(
        self, table: RecordTable, record_id: int, patch: PartialUpdate
    ) -> Optional[Record]:
        ...

    def delete_record(self, table: RecordTable, record_id: int) -> bool:
        ...


class InMemoryRecordStore:
    """Simple in-memory record store for development and tests."""

    def __init__(self):
        self.rows: Dict[RecordTable, Dict[int, dict]] = {t: {} for t in RecordTable}
        # Ids are never reused, even after deletes.
        self._ids = {t: itertools.count(1) for t in RecordTable}

    def list_records(self, table: RecordTable) -> list[Record]:
        return [Record.from_row(row) for row in self.rows[table].values()]

    def get_record(self, table: RecordTable, record_id: int) -> Optional[Record]:
        row = self.rows[table].get(record_id)
        return Record.from_row(row) if row else None

    def create_record(self, table: RecordTable, values: dict[str, Any]) -> Record:
        record_id = next(self._ids[table])
        row = {
            "id": record_id,
            "size": None,
            "img": None,
            "text": None,
            "pdfUrl": None,
            "textPara": [],
            "detailsRoute": None,
        }
        row.update(copy.deepcopy(values))
        row["id"] = record_id
        self.rows[table][record_id] = row
        return Record.from_row(row)

    def update_record(
        self, table: RecordTable, record_id: int, patch: PartialUpdate
    ) -> Optional[Record]:
        if patch.is_empty:
            raise NoUpdatesProvided()
        row = self.rows[table].get(record_id)
        if not row:
            return None
        row.update(copy.deepcopy(patch.as_dict()))
        return Record.from_row(row)

    def delete_record(self, table: RecordTable, record_id: int) -> bool:
        return self.rows[table].pop(record_id, None) is not None


metadata = MetaData()

# Postgres stores paragraphs as TEXT[]; SQLite (tests) falls back to JSON.
TEXT_LIST = ARRAY(Text).with_variant(JSON(), "sqlite")


def _record_table(name: str) -> Table:
    return Table(
        name,
        metadata,
        Column("id", Integer, primary_key=True, autoincrement=True),
        Column("size", String(50)),
        Column("img", Text),
        Column("text", Text),
        Column("pdfUrl", Text),
        Column("textPara", TEXT_LIST, default=lambda: []),
        Column("detailsRoute", String(255)),
    )


TABLES: Dict[RecordTable, Table] = {t: _record_table(t.value) for t in RecordTable}


class SqlRecordStore:
    """
    SQLAlchemy Core implementation. Accepts any SQLAlchemy URL (e.g., Postgres
    or SQLite for tests). Tables are created on construction if missing.
    """

    def __init__(self, database_url: str):
        if not database_url:
            raise ValueError("DATABASE_URL is required for SqlRecordStore")
        self.engine = create_engine(
            database_url,
            future=True,
            pool_pre_ping=True,
            pool_recycle=1800,
        )
        metadata.create_all(self.engine)

    def list_records(self, table: RecordTable) -> list[Record]:
        t = TABLES[table]
        with self.engine.connect() as conn:
            rows = conn.execute(select(t).order_by(t.c.id)).mappings().all()
        return [Record.from_row(dict(row)) for row in rows]

    def get_record(self, table: RecordTable, record_id: int) -> Optional[Record]:
        t = TABLES[table]
        with self.engine.connect() as conn:
            row = conn.execute(select(t).where(t.c.id == record_id)).mappings().first()
        return Record.from_row(dict(row)) if row else None

    def create_record(self, table: RecordTable, values: dict[str, Any]) -> Record:
        t = TABLES[table]
        with self.engine.begin() as conn:
            row = conn.execute(insert(t).values(**values).returning(t)).mappings().one()
        return Record.from_row(dict(row))

    def update_record(
        self, table: RecordTable, record_id: int, patch: PartialUpdate
    ) -> Optional[Record]:
        if patch.is_empty:
            raise NoUpdatesProvided()
        t = TABLES[table]
        stmt = (
            update(t)
            .where(t.c.id == record_id)
            .values(**patch.as_dict())
            .returning(t)
        )
        with self.engine.begin() as conn:
            row = conn.execute(stmt).mappings().first()
        return Record.from_row(dict(row)) if row else None

    def delete_record(self, table: RecordTable, record_id: int) -> bool:
        t = TABLES[table]
        with self.engine.begin() as conn:
            deleted = conn.execute(delete(t).where(t.c.id == record_id)).rowcount
        return deleted > 0
