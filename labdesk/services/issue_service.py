# labdesk/services/issue_service.py

from uuid import UUID

from loguru import logger
from sqlmodel import select
from sqlalchemy.ext.asyncio import AsyncSession

from labdesk.core.clock import utc_now
from labdesk.core.errors import NotFoundError
from labdesk.core.scoping import AccessScope, apply_scope, can_access
from labdesk.models.computer import Computer
from labdesk.models.enums import IssuePriority, IssueStatus
from labdesk.models.issue import Issue

# Moving into these stamps resolved_at / resolved_by
CLOSING_STATUSES = {IssueStatus.resolved, IssueStatus.closed}


async def create_issue(
    session: AsyncSession,
    reporter_id: UUID,
    computer_id: UUID,
    title: str,
    description: str,
    priority: IssuePriority = IssuePriority.medium,
) -> Issue:
    if not await session.get(Computer, computer_id):
        raise NotFoundError("Computer not found")

    issue = Issue(
        computer_id=computer_id,
        reported_by=reporter_id,
        title=title,
        description=description,
        priority=priority,
        status=IssueStatus.pending,
    )
    session.add(issue)
    await session.commit()
    await session.refresh(issue)

    logger.info(f"Issue {issue.id} reported on computer {computer_id} ({priority.value})")
    return issue


async def list_issues(
    session: AsyncSession,
    user_id: UUID,
    scope: AccessScope,
    status: IssueStatus | None = None,
) -> list[Issue]:
    query = select(Issue).order_by(Issue.created_at.desc())
    query = apply_scope(query, Issue.reported_by, scope, user_id)

    if status:
        query = query.where(Issue.status == status)

    result = await session.execute(query)
    return list(result.scalars().all())


async def get_issue(session: AsyncSession, issue_id: UUID, user_id: UUID, scope: AccessScope) -> Issue:
    issue = await session.get(Issue, issue_id)
    if not issue:
        raise NotFoundError("Issue not found")
    if not can_access(issue.reported_by, user_id, scope):
        raise PermissionError("Not allowed to view this issue")
    return issue


async def update_status(
    session: AsyncSession,
    issue_id: UUID,
    status: IssueStatus,
    actor_id: UUID,
    resolution_notes: str | None = None,
) -> Issue:
    issue = await session.get(Issue, issue_id)
    if not issue:
        raise NotFoundError("Issue not found")

    issue.status = status
    if status in CLOSING_STATUSES:
        issue.resolved_at = utc_now()
        issue.resolved_by = actor_id
    else:
        # Reopened
        issue.resolved_at = None
        issue.resolved_by = None
    if resolution_notes is not None:
        issue.resolution_notes = resolution_notes
    issue.updated_at = utc_now()

    session.add(issue)
    await session.commit()
    await session.refresh(issue)

    logger.info(f"Issue {issue.id} marked as {status.value} by {actor_id}")
    return issue


async def delete_issue(session: AsyncSession, issue_id: UUID) -> None:
    issue = await session.get(Issue, issue_id)
    if not issue:
        raise NotFoundError("Issue not found")

    await session.delete(issue)
    await session.commit()
