# labdesk/services/reminder_service.py

from datetime import timedelta
from uuid import UUID

from sqlmodel import select
from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession

from labdesk.core.clock import utc_now
from labdesk.core.config import settings
from labdesk.core.scoping import AccessScope, apply_scope
from labdesk.models.booking import Booking
from labdesk.models.computer import Computer
from labdesk.models.enums import BookingStatus
from labdesk.models.maintenance import MaintenanceLog
from labdesk.models.software import Software
from labdesk.schemas.reminder import (
    BookingReminder,
    LicenseReminder,
    MaintenanceReminder,
    Reminders,
)


# ------------------------------------------------------------
# URGENCY THRESHOLDS
# ------------------------------------------------------------
def booking_urgency(hours_until: int) -> str:
    if hours_until <= 1:
        return "critical"
    if hours_until <= 6:
        return "warning"
    return "info"


def license_urgency(days_until: int) -> str:
    if days_until <= 0:
        return "critical"
    if days_until <= 7:
        return "warning"
    return "info"


# ------------------------------------------------------------
# 1. BOOKINGS STARTING SOON
# ------------------------------------------------------------
async def upcoming_bookings(session: AsyncSession, user_id: UUID, scope: AccessScope, now=None) -> list[BookingReminder]:
    now = now or utc_now()
    horizon = now + timedelta(hours=settings.BOOKING_REMINDER_HOURS)

    query = (
        select(Booking, Computer.name)
        .join(Computer, Computer.id == Booking.computer_id, isouter=True)
        .where(Booking.start_time >= now)
        .where(Booking.start_time <= horizon)
        .where(Booking.status.in_((BookingStatus.pending, BookingStatus.confirmed)))
        .order_by(Booking.start_time)
    )
    query = apply_scope(query, Booking.user_id, scope, user_id)

    reminders = []
    for booking, computer_name in (await session.execute(query)).all():
        hours = int((booking.start_time - now) // timedelta(hours=1))
        reminders.append(BookingReminder(
            id=booking.id,
            computer_name=computer_name or "Unknown",
            start_time=booking.start_time,
            end_time=booking.end_time,
            purpose=booking.purpose,
            status=BookingStatus(booking.status).value,
            hours_until=hours,
            urgency=booking_urgency(hours),
        ))
    return reminders


# ------------------------------------------------------------
# 2. LICENSES EXPIRING (already expired ones included)
# ------------------------------------------------------------
async def expiring_licenses(session: AsyncSession, now=None) -> list[LicenseReminder]:
    today = (now or utc_now()).date()
    horizon = today + timedelta(days=settings.LICENSE_REMINDER_DAYS)

    result = await session.execute(
        select(Software)
        .where(Software.license_expiry.is_not(None))
        .where(Software.license_expiry <= horizon)
        .order_by(Software.license_expiry)
    )

    reminders = []
    for sw in result.scalars().all():
        days = (sw.license_expiry - today).days
        reminders.append(LicenseReminder(
            id=sw.id,
            name=sw.name,
            vendor=sw.vendor or "",
            license_expiry=sw.license_expiry,
            days_until=days,
            urgency=license_urgency(days),
        ))
    return reminders


# ------------------------------------------------------------
# 3. COMPUTERS DUE FOR MAINTENANCE (one aggregate query)
# ------------------------------------------------------------
async def maintenance_due(session: AsyncSession, now=None) -> list[MaintenanceReminder]:
    now = now or utc_now()
    last_completed = func.max(MaintenanceLog.completed_at).label("last_completed")

    result = await session.execute(
        select(Computer.id, Computer.name, Computer.status, last_completed)
        .join(MaintenanceLog, MaintenanceLog.computer_id == Computer.id, isouter=True)
        .group_by(Computer.id, Computer.name, Computer.status)
        .order_by(Computer.name)
    )

    reminders = []
    for computer_id, name, status, last in result.all():
        days_since = (now - last).days if last else None
        if last is None or days_since > settings.MAINTENANCE_INTERVAL_DAYS:
            reminders.append(MaintenanceReminder(
                computer_id=computer_id,
                computer_name=name,
                status=getattr(status, "value", status),
                last_maintenance=last,
                days_since_last_maintenance=days_since,
            ))
    return reminders


async def collect(session: AsyncSession, user_id: UUID, scope: AccessScope) -> Reminders:
    """License and maintenance reminders are for admin/staff only."""
    now = utc_now()
    bookings = await upcoming_bookings(session, user_id, scope, now)

    licenses: list[LicenseReminder] = []
    maintenance: list[MaintenanceReminder] = []
    if scope == AccessScope.all:
        licenses = await expiring_licenses(session, now)
        maintenance = await maintenance_due(session, now)

    return Reminders(
        bookings=bookings,
        licenses=licenses,
        maintenance=maintenance,
        total=len(bookings) + len(licenses) + len(maintenance),
    )
