# labdesk/api/endpoints/issues.py

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
from uuid import UUID

from labdesk.api.deps import (
    get_current_user,
    get_db_session,
    require_admin_or_staff,
    to_http,
    SERVICE_ERRORS,
)
from labdesk.models.enums import IssueStatus
from labdesk.schemas.issue import IssueCreate, IssueRead, IssueStatusUpdate
from labdesk.schemas.user import CurrentUser
from labdesk.services import issue_service

router = APIRouter(prefix="/api/issues", tags=["Issues"])


@router.post("", response_model=IssueRead, status_code=201)
async def report_issue(
    payload: IssueCreate,
    session: AsyncSession = Depends(get_db_session),
    current_user: CurrentUser = Depends(get_current_user),
):
    try:
        return await issue_service.create_issue(
            session,
            reporter_id=current_user.id,
            computer_id=payload.computer_id,
            title=payload.title,
            description=payload.description,
            priority=payload.priority,
        )
    except SERVICE_ERRORS as e:
        raise to_http(e)


@router.get("", response_model=List[IssueRead])
async def list_issues(
    status: Optional[IssueStatus] = None,
    session: AsyncSession = Depends(get_db_session),
    current_user: CurrentUser = Depends(get_current_user),
):
    return await issue_service.list_issues(session, current_user.id, current_user.scope, status)


@router.get("/{issue_id}", response_model=IssueRead)
async def get_issue(
    issue_id: UUID,
    session: AsyncSession = Depends(get_db_session),
    current_user: CurrentUser = Depends(get_current_user),
):
    try:
        return await issue_service.get_issue(session, issue_id, current_user.id, current_user.scope)
    except SERVICE_ERRORS as e:
        raise to_http(e)


# ------------------------------------------------------------
# TRIAGE (Admin / Staff)
# ------------------------------------------------------------
@router.patch("/{issue_id}/status", response_model=IssueRead)
async def update_issue_status(
    issue_id: UUID,
    payload: IssueStatusUpdate,
    session: AsyncSession = Depends(get_db_session),
    current_user: CurrentUser = Depends(require_admin_or_staff),
):
    try:
        return await issue_service.update_status(
            session, issue_id, payload.status, current_user.id, payload.resolution_notes
        )
    except SERVICE_ERRORS as e:
        raise to_http(e)


@router.delete("/{issue_id}")
async def delete_issue(
    issue_id: UUID,
    session: AsyncSession = Depends(get_db_session),
    _: CurrentUser = Depends(require_admin_or_staff),
):
    try:
        await issue_service.delete_issue(session, issue_id)
    except SERVICE_ERRORS as e:
        raise to_http(e)
    return {"detail": "Issue deleted"}
