# labdesk/services/data_service.py
#
# CSV import/export for admin/staff.

import csv
import io
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from uuid import UUID

from loguru import logger
from pydantic import ValidationError
from sqlmodel import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError

from labdesk.models.booking import Booking
from labdesk.models.computer import Computer
from labdesk.models.issue import Issue
from labdesk.models.session_log import SessionLog
from labdesk.models.software import Software
from labdesk.models.user import Profile
from labdesk.schemas.computer import ComputerCreate
from labdesk.schemas.software import SoftwareCreate

EXPORT_KINDS = ("computers", "software", "bookings", "issues", "sessions")
IMPORT_KINDS = {
    "computers": (Computer, ComputerCreate),
    "software": (Software, SoftwareCreate),
}

# Rows joined with their computer and owner; value is the owner column
ENRICHED = {
    "bookings": (Booking, "user_id"),
    "issues": (Issue, "reported_by"),
    "sessions": (SessionLog, "user_id"),
}


# ------------------------------------------------------------
# FLATTEN + SERIALIZE
# ------------------------------------------------------------
def _cell(value) -> str:
    if value is None:
        return ""
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (UUID, Decimal)):
        return str(value)
    return str(value)


def flatten(row: dict) -> dict:
    """One level: {"computers": {"name": x}} -> {"computers_name": x}."""
    flat = {}
    for key, value in row.items():
        if isinstance(value, dict):
            for nested_key, nested_value in value.items():
                flat[f"{key}_{nested_key}"] = nested_value
        else:
            flat[key] = value
    return flat


def to_csv(rows: list[dict]) -> str:
    """
    Header line from the first row's keys, then one line per row.
    Every field is double-quoted.
    """
    if not rows:
        raise ValueError("No data to export")

    flat_rows = [flatten(r) for r in rows]
    headers = list(flat_rows[0].keys())

    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(headers)
    for row in flat_rows:
        writer.writerow([_cell(row.get(h)) for h in headers])

    # No trailing newline: N rows -> N + 1 lines
    return buffer.getvalue().rstrip("\n")


def export_filename(kind: str, today: date) -> str:
    return f"{kind}_{today.isoformat()}.csv"


# ------------------------------------------------------------
# EXPORT
# ------------------------------------------------------------
async def export_rows(session: AsyncSession, kind: str) -> list[dict]:
    if kind not in EXPORT_KINDS:
        raise ValueError(f"Unknown export type '{kind}'. Allowed: {list(EXPORT_KINDS)}")

    if kind == "computers":
        result = await session.execute(select(Computer).order_by(Computer.name))
        return [c.model_dump() for c in result.scalars().all()]

    if kind == "software":
        result = await session.execute(select(Software).order_by(Software.name))
        return [s.model_dump() for s in result.scalars().all()]

    model, owner_field = ENRICHED[kind]
    owner_column = getattr(model, owner_field)
    result = await session.execute(
        select(model, Computer.name, Computer.system_id, Profile.full_name, Profile.email)
        .join(Computer, Computer.id == model.computer_id, isouter=True)
        .join(Profile, Profile.id == owner_column, isouter=True)
        .order_by(model.created_at)
    )

    rows = []
    for obj, computer_name, system_id, full_name, email in result.all():
        row = obj.model_dump()
        row["computers"] = {"name": computer_name, "system_id": system_id}
        row["profiles"] = {"full_name": full_name or "Unknown", "email": email or ""}
        rows.append(row)
    return rows


# ------------------------------------------------------------
# IMPORT
# ------------------------------------------------------------
def parse_csv(text: str) -> list[dict]:
    """
    Header row gives the keys. Values are trimmed, blanks become None,
    rows with fewer than two fields are skipped.
    """
    reader = csv.reader(io.StringIO(text.lstrip("﻿")))
    rows = [r for r in reader]
    if not rows:
        return []

    headers = [h.strip() for h in rows[0]]
    records = []
    for raw in rows[1:]:
        if len(raw) <= 1:
            continue
        record = {}
        for index, header in enumerate(headers):
            value = raw[index].strip() if index < len(raw) else ""
            record[header] = value or None
        records.append(record)
    return records


async def import_rows(session: AsyncSession, kind: str, text: str) -> int:
    """Validates every row, then inserts them all in one transaction."""
    if kind not in IMPORT_KINDS:
        raise ValueError(f"Unknown import type '{kind}'. Allowed: {list(IMPORT_KINDS)}")

    model, schema = IMPORT_KINDS[kind]
    allowed = set(schema.model_fields)

    objects = []
    for line_no, record in enumerate(parse_csv(text), start=2):
        data = {k: v for k, v in record.items() if k in allowed and v is not None}
        try:
            objects.append(model(**schema(**data).model_dump()))
        except ValidationError as e:
            raise ValueError(f"Row {line_no}: {e.errors()[0]['msg']}")

    if not objects:
        raise ValueError("No rows to import")

    session.add_all(objects)
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise ValueError("Import failed: duplicate or invalid rows")

    logger.info(f"Imported {len(objects)} {kind} rows")
    return len(objects)
