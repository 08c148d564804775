from fastapi import Depends, HTTPException

from core import access_gate
from core.logging_config import logger
from core.role_assignments import load_access_snapshot
from dependencies.auth import get_current_user, CurrentUser
from models.access_profile import EffectiveAccessProfile
from models.enums import Capability


# -----------------------------------------------------
# Resolve the caller's profile once per request
# -----------------------------------------------------
def get_access_profile(current_user: CurrentUser = Depends(get_current_user)) -> EffectiveAccessProfile:
    profile = access_gate.build_access_profile(load_access_snapshot(current_user.id))

    if profile.unknown_roles:
        logger.warning(
            f"User {current_user.id} holds unknown roles {sorted(profile.unknown_roles)}; ignored"
        )
    return profile


def resolve_target_level(user_id: str):
    """Highest active level held by *user_id* (None when roleless)."""
    return access_gate.build_access_profile(load_access_snapshot(user_id)).level


# -----------------------------------------------------
# FastAPI dependency wrappers
# -----------------------------------------------------
def requires_capability(capability: Capability):
    """
    Usage:
        @router.post("/", dependencies=[Depends(requires_capability(Capability.administration))])
    """

    def dependency(profile: EffectiveAccessProfile = Depends(get_access_profile)):
        if not access_gate.can_invoke_function(profile, capability):
            raise HTTPException(
                status_code=403,
                detail=f"Insufficient permissions: '{capability}' required"
            )
        return profile

    return dependency


def requires_route(route: str):
    """Guard an endpoint with the same rule the front end applies to *route*."""

    def dependency(profile: EffectiveAccessProfile = Depends(get_access_profile)):
        if not access_gate.can_access_route(profile, route):
            raise HTTPException(
                status_code=403,
                detail=f"Access to {route} denied"
            )
        return profile

    return dependency


# ============================================================
# USER-LEVEL PERMISSION HELPERS
# ============================================================

def require_manage_user(profile: EffectiveAccessProfile, actor: CurrentUser, target_user_id: str) -> int:
    """
    Raise 403 unless the actor outranks the target. Returns the target's level (0 if roleless).
    """
    target_level = resolve_target_level(target_user_id) or 0

    if actor.id == target_user_id or not access_gate.can_manage_user(profile, target_level):
        raise HTTPException(
            status_code=403,
            detail="You can only manage users below your own level"
        )
    return target_level
