# labdesk/api/endpoints/reminders.py

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from labdesk.api.deps import get_current_user, get_db_session
from labdesk.schemas.reminder import Reminders
from labdesk.schemas.user import CurrentUser
from labdesk.services import reminder_service

router = APIRouter(prefix="/api/reminders", tags=["Reminders"])


@router.get("", response_model=Reminders)
async def get_reminders(
    session: AsyncSession = Depends(get_db_session),
    current_user: CurrentUser = Depends(get_current_user),
):
    """Upcoming bookings for everyone; licenses and maintenance for admin/staff."""
    return await reminder_service.collect(session, current_user.id, current_user.scope)
