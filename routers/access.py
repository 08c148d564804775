# routers/access.py

from fastapi import APIRouter, Depends, HTTPException, Query

from core import access_gate, roles
from core.permission_helpers import (
    get_access_profile,
    requires_capability,
    resolve_target_level,
)
from core.role_assignments import load_access_snapshot
from dependencies.auth import get_current_user, CurrentUser
from models.access_profile import AccessProfileRead, EffectiveAccessProfile
from models.enums import Capability, GeoScope

router = APIRouter(
    prefix="/access",
    tags=["Access Control"],
)


# -----------------------------------------------------
# GET /access/roles: role catalog
# -----------------------------------------------------
@router.get("/roles", summary="List the role catalog")
def list_roles(current_user: CurrentUser = Depends(get_current_user)):
    return {
        "success": True,
        "data": [
            {
                "role": str(r.name),
                "level": r.level,
                "scope": str(r.scope),
                "capabilities": sorted(str(c) for c in r.capabilities),
                "description": r.description,
            }
            for r in roles.all_roles()
        ],
    }


# -----------------------------------------------------
# GET /access/me: caller's resolved profile
# -----------------------------------------------------
@router.get("/me", summary="Resolved access profile of the caller")
def read_my_access(profile: EffectiveAccessProfile = Depends(get_access_profile)):
    return {
        "success": True,
        "data": AccessProfileRead.from_profile(profile),
        "filters": access_gate.data_filters(profile),
    }


@router.get("/me/routes", summary="Routes the caller can reach")
def read_my_routes(profile: EffectiveAccessProfile = Depends(get_access_profile)):
    return {"success": True, "data": access_gate.accessible_routes(profile)}


# -----------------------------------------------------
# Decision checks
# -----------------------------------------------------
@router.get("/check/route", summary="Can the caller reach a route")
def check_route(
    path: str = Query(..., min_length=1),
    profile: EffectiveAccessProfile = Depends(get_access_profile),
):
    return {"path": path, "allowed": access_gate.can_access_route(profile, path)}


@router.get("/check/function/{capability}", summary="Does the caller hold a capability")
def check_function(
    capability: str,
    profile: EffectiveAccessProfile = Depends(get_access_profile),
):
    return {
        "capability": capability,
        "allowed": access_gate.can_invoke_function(profile, capability),
    }


@router.get("/check/scope/{scope}", summary="Does the caller's scope cover a geography")
def check_scope(
    scope: GeoScope,
    profile: EffectiveAccessProfile = Depends(get_access_profile),
):
    return {"scope": str(scope), "allowed": access_gate.can_access_scope(profile, scope)}


# -----------------------------------------------------
# Other users
# -----------------------------------------------------
@router.get("/users/{user_id}/manage", summary="Can the caller manage a user")
def check_manage_user(
    user_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    profile: EffectiveAccessProfile = Depends(get_access_profile),
):
    target_level = resolve_target_level(user_id)
    allowed = user_id != current_user.id and access_gate.can_manage_user(profile, target_level)
    return {
        "user_id": user_id,
        "target_level": target_level,
        "allowed": allowed,
    }


@router.get(
    "/users/{user_id}/profile",
    summary="Resolved access profile of another user",
    dependencies=[Depends(requires_capability(Capability.administration))],
)
def read_user_access(
    user_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    profile: EffectiveAccessProfile = Depends(get_access_profile),
):
    target = access_gate.build_access_profile(load_access_snapshot(user_id))

    if not access_gate.can_view_user_data(profile, current_user.id, user_id, target.level):
        raise HTTPException(403, "You can only view users below your own level")

    return {"success": True, "data": AccessProfileRead.from_profile(target)}
