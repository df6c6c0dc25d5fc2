# labdesk/core/scoping.py

from enum import Enum
from uuid import UUID

from labdesk.models.enums import AppRole

PRIVILEGED_ROLES = {AppRole.admin, AppRole.lab_staff}


class AccessScope(str, Enum):
    own = "own"   # rows owned by the caller only
    all = "all"   # every row


def scope_for_role(role: AppRole | str | None) -> AccessScope:
    if role is None:
        return AccessScope.own
    return AccessScope.all if AppRole(role) in PRIVILEGED_ROLES else AccessScope.own


def apply_scope(query, owner_column, scope: AccessScope, user_id: UUID):
    """
    Single place where ownership filtering happens.
    Every list over owned rows (bookings, issues, sessions,
    notifications) is built through here.
    """
    if scope == AccessScope.all:
        return query
    return query.where(owner_column == user_id)


def can_access(owner_id: UUID, user_id: UUID, scope: AccessScope) -> bool:
    return scope == AccessScope.all or owner_id == user_id
