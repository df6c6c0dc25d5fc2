# labdesk/api/endpoints/account.py

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from labdesk.api.deps import get_current_user, get_db_session, to_http
from labdesk.schemas.account import ChangePasswordRequest, DeleteAccountRequest
from labdesk.schemas.user import CurrentUser
from labdesk.services.account_service import delete_account
from labdesk.services.auth_service import change_password as change_user_password

router = APIRouter(prefix="/api/account", tags=["Account"])


@router.post("/change-password")
async def change_password(
    payload: ChangePasswordRequest,
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session)
):
    try:
        await change_user_password(session, current_user.id, payload.old_password, payload.new_password)
    except (ValueError, LookupError) as e:
        raise to_http(e)

    return {"detail": "Password changed successfully"}


@router.delete("")
async def remove_account(
    payload: DeleteAccountRequest,
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session)
):
    """
    Deletes the caller's account and everything it owns.
    Body must be {"confirm": "DELETE"}.
    """
    try:
        await delete_account(session, current_user.id)
    except LookupError as e:
        raise to_http(e)
    except SQLAlchemyError:
        raise HTTPException(status_code=500, detail="Failed to delete account")

    return {"detail": "Account deleted"}
