# routers/user_roles.py

from fastapi import APIRouter, Depends, HTTPException

from core import access_gate, roles
from core.logging_config import logger
from core.permission_helpers import (
    get_access_profile,
    require_manage_user,
    requires_route,
    resolve_target_level,
)
from core.role_assignments import (
    create_role_assignment,
    deactivate_role_assignment,
    fetch_role_assignments,
    get_role_assignment,
)
from dependencies.auth import get_current_user, CurrentUser
from models.access_profile import EffectiveAccessProfile
from models.role_assignment import RoleAssignmentCreate

router = APIRouter(
    prefix="/users/{user_id}/roles",
    tags=["Role Management"],
)


# -----------------------------------------------------
# GET: full assignment history (active + inactive)
# -----------------------------------------------------
@router.get("", summary="List a user's role assignments")
def list_user_roles(
    user_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    profile: EffectiveAccessProfile = Depends(get_access_profile),
):
    if current_user.id != user_id:
        target_level = resolve_target_level(user_id)
        if not access_gate.can_view_user_data(profile, current_user.id, user_id, target_level):
            raise HTTPException(403, "You can only view users below your own level")

    assignments = fetch_role_assignments(user_id, include_inactive=True)
    return {"success": True, "data": assignments}


# -----------------------------------------------------
# POST: grant a role
# -----------------------------------------------------
@router.post(
    "",
    summary="Assign a role to a user",
    dependencies=[Depends(requires_route("/role-management"))],
)
def assign_role(
    user_id: str,
    payload: RoleAssignmentCreate,
    current_user: CurrentUser = Depends(get_current_user),
    profile: EffectiveAccessProfile = Depends(get_access_profile),
):
    require_manage_user(profile, current_user, user_id)

    if not access_gate.can_assign_role(profile, payload.role):
        raise HTTPException(
            403,
            f"Role {payload.role} is at or above your own level",
        )

    if not access_gate.can_bind_location(profile, payload.district_id, payload.community_id):
        raise HTTPException(403, "Assignment location is outside your scope")

    assignment = create_role_assignment(user_id, payload, assigned_by=current_user.id)
    return {"success": True, "data": assignment}


# -----------------------------------------------------
# POST: deactivate (terminal; re-granting creates a new row)
# -----------------------------------------------------
@router.post(
    "/{assignment_id}/deactivate",
    summary="Deactivate a role assignment",
    dependencies=[Depends(requires_route("/role-management"))],
)
def deactivate_role(
    user_id: str,
    assignment_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    profile: EffectiveAccessProfile = Depends(get_access_profile),
):
    require_manage_user(profile, current_user, user_id)

    existing = get_role_assignment(user_id, assignment_id)
    if not access_gate.can_bind_location(profile, existing.district_id, existing.community_id):
        raise HTTPException(403, "Assignment location is outside your scope")

    if roles.is_known_role(existing.role):
        if not access_gate.can_assign_role(profile, existing.role):
            raise HTTPException(403, f"Role {existing.role} is at or above your own level")
    else:
        logger.warning(f"Deactivating assignment {assignment_id} with unknown role {existing.role!r}")

    assignment = deactivate_role_assignment(user_id, assignment_id)
    return {"success": True, "data": assignment}
