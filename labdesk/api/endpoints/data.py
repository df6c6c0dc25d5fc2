# labdesk/api/endpoints/data.py

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from labdesk.api.deps import get_db_session, require_admin_or_staff, to_http
from labdesk.core.clock import utc_now
from labdesk.schemas.user import CurrentUser
from labdesk.services.data_service import export_filename, export_rows, import_rows, to_csv
from loguru import logger

router = APIRouter(
    prefix="/api/data",
    tags=["Import / Export"],
    dependencies=[Depends(require_admin_or_staff)],
)


# ------------------------------------------------------------
# EXPORT
# ------------------------------------------------------------
@router.get("/export/{kind}")
async def export_csv(
    kind: str,
    session: AsyncSession = Depends(get_db_session),
):
    try:
        rows = await export_rows(session, kind)
    except ValueError as e:
        raise to_http(e)

    if not rows:
        raise HTTPException(status_code=404, detail="No data to export")

    filename = export_filename(kind, utc_now().date())
    return Response(
        content=to_csv(rows),
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename={filename}"}
    )


# ------------------------------------------------------------
# IMPORT (raw CSV request body)
# ------------------------------------------------------------
@router.post("/import/{kind}")
async def import_csv(
    kind: str,
    request: Request,
    session: AsyncSession = Depends(get_db_session),
    current_user: CurrentUser = Depends(require_admin_or_staff),
):
    body = await request.body()
    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError:
        raise HTTPException(status_code=400, detail="CSV must be UTF-8 encoded")

    try:
        imported = await import_rows(session, kind, text)
    except ValueError as e:
        raise to_http(e)

    logger.info(f"{current_user.email} imported {imported} {kind} rows")
    return {"imported": imported}
