# labdesk/services/dashboard_service.py

from collections import Counter, defaultdict
from datetime import date, datetime, time, timedelta
from uuid import UUID

from sqlmodel import select
from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession

from labdesk.core.clock import utc_now
from labdesk.core.scoping import AccessScope, apply_scope
from labdesk.models.booking import Booking
from labdesk.models.computer import Computer
from labdesk.models.enums import AppRole
from labdesk.models.issue import Issue
from labdesk.models.session_log import SessionLog
from labdesk.models.software import Software
from labdesk.models.user import Profile
from labdesk.schemas.report import ComputerUsage, DailyCount, DashboardStats, ReportRead


def _value(status) -> str:
    return getattr(status, "value", status)


async def _count_by(session: AsyncSession, column, query_filter=None) -> dict[str, int]:
    query = select(column, func.count()).group_by(column)
    if query_filter is not None:
        query = query_filter(query)
    result = await session.execute(query)
    return {_value(row[0]): row[1] for row in result.all()}


# ===================================================================
# SUMMARY COUNTS (dashboard header cards)
# ===================================================================
async def dashboard_stats(session: AsyncSession, user_id: UUID, role: AppRole, scope: AccessScope) -> DashboardStats:
    computers = await _count_by(session, Computer.status)
    bookings = await _count_by(
        session, Booking.status,
        lambda q: apply_scope(q, Booking.user_id, scope, user_id),
    )
    issues = await _count_by(
        session, Issue.status,
        lambda q: apply_scope(q, Issue.reported_by, scope, user_id),
    )

    stats = DashboardStats(
        total_computers=sum(computers.values()),
        available_computers=computers.get("available", 0),
        in_use_computers=computers.get("in_use", 0),
        maintenance_computers=computers.get("maintenance", 0),
        total_bookings=sum(bookings.values()),
        pending_bookings=bookings.get("pending", 0),
        confirmed_bookings=bookings.get("confirmed", 0),
        total_issues=sum(issues.values()),
        pending_issues=issues.get("pending", 0),
        resolved_issues=issues.get("resolved", 0),
    )

    if role == AppRole.admin:
        stats.total_users = (await session.execute(select(func.count()).select_from(Profile))).scalar_one()
        stats.total_software = (await session.execute(select(func.count()).select_from(Software))).scalar_one()

    return stats


# ===================================================================
# REPORTS (date range analytics)
# ===================================================================
async def build_report(session: AsyncSession, start: date | None = None, end: date | None = None) -> ReportRead:
    end = end or utc_now().date()
    start = start or end - timedelta(days=30)
    if start > end:
        raise ValueError("start must not be after end")

    # Whole days, inclusive of the end date
    window_start = datetime.combine(start, time.min)
    window_end = datetime.combine(end + timedelta(days=1), time.min)

    # 1. Bookings per day
    created = await session.execute(
        select(Booking.created_at)
        .where(Booking.created_at >= window_start)
        .where(Booking.created_at < window_end)
    )
    per_day = Counter(ts.date() for ts in created.scalars().all())
    bookings_per_day = [DailyCount(date=day, count=per_day[day]) for day in sorted(per_day)]

    # 2. Issues by status
    issues_by_status = await _count_by(
        session, Issue.status,
        lambda q: q.where(Issue.created_at >= window_start).where(Issue.created_at < window_end),
    )

    # 3. Usage per computer (top 10 by hours)
    sessions = await session.execute(
        select(SessionLog.computer_id, SessionLog.duration_minutes, Computer.name)
        .join(Computer, Computer.id == SessionLog.computer_id, isouter=True)
        .where(SessionLog.login_time >= window_start)
        .where(SessionLog.login_time < window_end)
    )
    usage = defaultdict(lambda: {"minutes": 0, "sessions": 0, "name": None})
    for computer_id, minutes, name in sessions.all():
        entry = usage[computer_id]
        entry["minutes"] += minutes or 0
        entry["sessions"] += 1
        entry["name"] = name

    usage_by_computer = sorted(
        (
            ComputerUsage(
                computer_id=str(computer_id),
                computer=entry["name"] or f"PC-{str(computer_id)[:8]}",
                hours=round(entry["minutes"] / 60),
                sessions=entry["sessions"],
            )
            for computer_id, entry in usage.items()
        ),
        key=lambda u: (u.hours, u.sessions),
        reverse=True,
    )[:10]

    # 4. Computers by status
    computers_by_status = await _count_by(session, Computer.status)

    return ReportRead(
        start=start,
        end=end,
        bookings_per_day=bookings_per_day,
        issues_by_status=issues_by_status,
        usage_by_computer=usage_by_computer,
        computers_by_status=computers_by_status,
    )
