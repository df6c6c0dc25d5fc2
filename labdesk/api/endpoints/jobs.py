# labdesk/api/endpoints/jobs.py

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from loguru import logger

from labdesk.api.deps import get_db_session
from labdesk.core.config import settings
from labdesk.services.cleanup_service import delete_old_issues

router = APIRouter(prefix="/api/jobs", tags=["Background Jobs"])


@router.post("/cleanup-old-issues")
async def cleanup_old_issues(
    secret_key: str,
    session: AsyncSession = Depends(get_db_session)
):
    """
    CRON JOB ENDPOINT.
    Deletes issues older than ISSUE_RETENTION_MINUTES, whatever their status.
    """
    # 1. Security Check
    expected_key = settings.JOB_SECRET
    if not expected_key or secret_key != expected_key:
        logger.warning("Unauthorized access attempt to cleanup job.")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid or missing Job Secret Key."
        )

    # 2. Delete
    try:
        deleted_count = await delete_old_issues(session)
    except SQLAlchemyError:
        await session.rollback()
        logger.exception("Error deleting old issues")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Failed to delete old issues"},
        )

    return {"success": True, "deleted_count": deleted_count}
