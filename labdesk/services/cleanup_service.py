# labdesk/services/cleanup_service.py

from datetime import datetime, timedelta

from loguru import logger
from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from labdesk.core.clock import utc_now
from labdesk.core.config import settings
from labdesk.models.issue import Issue


async def delete_old_issues(
    session: AsyncSession,
    now: datetime | None = None,
    retention_minutes: int | None = None,
) -> int:
    """
    Deletes every issue created before now - retention, whatever its status.
    Returns the number of rows removed.
    """
    now = now or utc_now()
    minutes = settings.ISSUE_RETENTION_MINUTES if retention_minutes is None else retention_minutes
    cutoff = now - timedelta(minutes=minutes)

    logger.info(f"Deleting issues created before: {cutoff.isoformat()}")

    result = await session.execute(
        delete(Issue).where(Issue.created_at < cutoff)
    )
    deleted = result.rowcount
    await session.commit()

    logger.info(f"Deleted {deleted} old issues")
    return deleted
