"""
Shared target resolution for permission use cases.
"""

from typing import Optional, Tuple
from uuid import UUID

from libs.result import Error
from src.app.services.access_validator import AccessValidator, denial_error, outranks
from src.app.services.identity import Identity
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import PermissionAction, PermissionModule, UserProfile


async def load_target(
    uow: UnitOfWork,
    identity: Optional[Identity],
    user_id: UUID,
    team_id: UUID,
    action: PermissionAction,
    allow_self: bool = False,
) -> Tuple[Optional[UserProfile], Optional[Error]]:
    """
    Load the target profile and authorize team_management:<action> on it.

    Returns:
        (profile, None) on success, (None, error) otherwise
    """
    target = await uow.users.get_by_id(user_id)
    if target is None:
        return None, Error("USER_NOT_FOUND", "User not found")

    team = await uow.teams.get_by_id(team_id)
    if team is None or team.tenant_id != target.tenant_id:
        return None, Error("TEAM_NOT_FOUND", "Team not found")

    if allow_self and identity is not None and identity.user_id == target.id:
        return target, None

    decision = await AccessValidator(uow).check(
        identity, target.tenant_id, PermissionModule.TEAM_MANAGEMENT, action
    )
    if not decision.allowed:
        return None, denial_error(decision)

    return target, None


def parse_permission(module: str, action: str):
    """(PermissionModule, PermissionAction) or None when either is unknown"""
    try:
        return PermissionModule(module.lower()), PermissionAction(action.lower())
    except ValueError:
        return None


def check_override_write(
    identity: Identity, target: UserProfile, team_id: UUID
) -> Optional[Error]:
    """
    Hierarchy and scope rules for writing an override on target.

    Overrides are only written for the team access checks read, the target's
    own team. Below SUPER_ADMIN, callers may only override users they outrank
    and never themselves.

    Returns:
        None when the write is allowed, the Error otherwise
    """
    if target.team_id != team_id:
        return Error("TEAM_MISMATCH", "Overrides must target the user's own team")

    if identity.is_super_admin:
        return None

    if identity.user_id == target.id:
        return Error("CANNOT_CHANGE_OWN_PERMISSIONS", "You cannot change your own permissions")

    if not outranks(identity.role, target.role):
        return Error(
            "INSUFFICIENT_ROLE", "You can only change permissions of users below you"
        )

    return None
