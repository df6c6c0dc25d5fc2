# labdesk/services/booking_service.py

from datetime import datetime
from uuid import UUID

from loguru import logger
from sqlmodel import select
from sqlalchemy.ext.asyncio import AsyncSession

from labdesk.core.clock import utc_now
from labdesk.core.config import settings
from labdesk.core.errors import ConflictError, NotFoundError
from labdesk.core.scoping import AccessScope, apply_scope, can_access
from labdesk.models.booking import Booking
from labdesk.models.computer import Computer
from labdesk.models.enums import BookingStatus

OVERLAP_POLICIES = {"allow", "warn", "reject"}

# Legal status moves. Anything else is a conflict.
TRANSITIONS = {
    BookingStatus.pending: {BookingStatus.confirmed, BookingStatus.cancelled},
    BookingStatus.confirmed: {BookingStatus.completed},
    BookingStatus.cancelled: set(),
    BookingStatus.completed: set(),
}

# Statuses that still hold the machine
ACTIVE_STATUSES = (BookingStatus.pending, BookingStatus.confirmed)


def overlap_policy() -> str:
    policy = (settings.BOOKING_OVERLAP_POLICY or "allow").strip().lower()
    if policy not in OVERLAP_POLICIES:
        logger.warning(f"Unknown BOOKING_OVERLAP_POLICY '{policy}', falling back to 'allow'")
        return "allow"
    return policy


async def find_conflicts(
    session: AsyncSession,
    computer_id: UUID,
    start_time: datetime,
    end_time: datetime,
) -> list[Booking]:
    """
    Active bookings on the same computer whose window overlaps
    [start_time, end_time). Touching windows do not conflict.
    """
    result = await session.execute(
        select(Booking)
        .where(Booking.computer_id == computer_id)
        .where(Booking.status.in_(ACTIVE_STATUSES))
        .where(Booking.start_time < end_time)
        .where(Booking.end_time > start_time)
        .order_by(Booking.start_time)
    )
    return list(result.scalars().all())


async def create_booking(
    session: AsyncSession,
    user_id: UUID,
    computer_id: UUID,
    start_time: datetime,
    end_time: datetime,
    purpose: str | None = None,
) -> tuple[Booking, list[UUID]]:
    """
    Books a computer for the caller. Status is always pending.
    Returns the booking and the ids of overlapping bookings
    (only populated under the "warn" policy).
    """
    if end_time <= start_time:
        raise ValueError("end_time must be after start_time")

    computer = await session.get(Computer, computer_id)
    if not computer:
        raise NotFoundError("Computer not found")

    policy = overlap_policy()
    conflict_ids: list[UUID] = []

    if policy != "allow":
        conflicts = await find_conflicts(session, computer_id, start_time, end_time)
        conflict_ids = [b.id for b in conflicts]

        if conflicts and policy == "reject":
            raise ConflictError("Booking conflicts with an existing reservation.")
        if conflicts:
            logger.warning(
                f"Booking on computer {computer.system_id} overlaps {len(conflicts)} existing booking(s)"
            )

    booking = Booking(
        computer_id=computer_id,
        user_id=user_id,
        start_time=start_time,
        end_time=end_time,
        purpose=purpose,
        status=BookingStatus.pending,
    )
    session.add(booking)
    await session.commit()
    await session.refresh(booking)

    logger.info(f"Booking {booking.id} created by {user_id} for computer {computer.system_id}")
    return booking, conflict_ids


async def get_booking(session: AsyncSession, booking_id: UUID, user_id: UUID, scope: AccessScope) -> Booking:
    booking = await session.get(Booking, booking_id)
    if not booking:
        raise NotFoundError("Booking not found")
    if not can_access(booking.user_id, user_id, scope):
        raise PermissionError("Not allowed to view this booking")
    return booking


async def list_bookings(
    session: AsyncSession,
    user_id: UUID,
    scope: AccessScope,
    status: BookingStatus | None = None,
) -> list[Booking]:
    query = select(Booking).order_by(Booking.start_time.desc())
    query = apply_scope(query, Booking.user_id, scope, user_id)

    if status:
        query = query.where(Booking.status == status)

    result = await session.execute(query)
    return list(result.scalars().all())


async def change_status(session: AsyncSession, booking_id: UUID, new_status: BookingStatus) -> Booking:
    """Admin/staff only; callers enforce the role."""
    booking = await session.get(Booking, booking_id)
    if not booking:
        raise NotFoundError("Booking not found")

    current = BookingStatus(booking.status)
    if new_status not in TRANSITIONS[current]:
        raise ConflictError(f"Cannot move booking from '{current.value}' to '{new_status.value}'")

    booking.status = new_status
    booking.updated_at = utc_now()
    session.add(booking)
    await session.commit()
    await session.refresh(booking)

    logger.info(f"Booking {booking.id}: {current.value} -> {new_status.value}")
    return booking
