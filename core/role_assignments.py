# core/role_assignments.py

"""
Supabase access for role assignments (enhanced_user_roles) and the
profile location (profiles) they fall back to.

This is the only I/O behind access decisions. Snapshots are cached per
user for settings.ACCESS_SNAPSHOT_TTL_SECONDS and invalidated whenever
this service changes that user's assignments.
"""

from datetime import datetime, timezone
from typing import List, Optional, Tuple

from fastapi import HTTPException

from core import roles
from core.cache import cache_delete, cache_get, cache_set
from core.config import settings
from core.errors import handle_supabase_error
from core.logging_config import logger
from core.supabase_client import get_supabase_client
from models.enums import GeoScope
from models.role_assignment import RoleAssignment, RoleAssignmentCreate


ROLE_TABLE = "enhanced_user_roles"
PROFILE_TABLE = "profiles"


def _client():
    client = get_supabase_client()
    if not client:
        raise HTTPException(500, "Supabase client not configured")
    return client


def _snapshot_key(user_id: str) -> str:
    return f"access_snapshot:{user_id}"


# ============================================================
# Reads
# ============================================================
def fetch_role_assignments(user_id: str, include_inactive: bool = False) -> List[RoleAssignment]:
    client = _client()

    try:
        query = client.table(ROLE_TABLE).select("*").eq("user_id", user_id)
        if not include_inactive:
            query = query.eq("is_active", True)
        result = query.execute()
    except Exception as e:
        raise handle_supabase_error(e, "Failed to fetch role assignments")

    return [RoleAssignment.from_row(row) for row in (result.data or [])]


def fetch_profile_location(user_id: str) -> dict:
    """
    Home district/community of a user's profile.
    Missing profile → both None.
    """
    client = _client()

    try:
        result = (
            client.table(PROFILE_TABLE)
            .select("district_id, community_id")
            .eq("id", user_id)
            .limit(1)
            .execute()
        )
    except Exception as e:
        raise handle_supabase_error(e, "Failed to fetch profile location")

    row = (result.data or [{}])[0]
    return {
        "district_id": row.get("district_id"),
        "community_id": row.get("community_id"),
    }


def _binding_field(assignment: RoleAssignment) -> Optional[str]:
    """The identifier column a known role binds, or None (state/unknown)."""
    if not roles.is_known_role(assignment.role):
        return None
    scope = roles.lookup(assignment.role).scope
    if scope is GeoScope.community:
        return "community_id"
    if scope is GeoScope.district:
        return "district_id"
    return None


def _needs_profile_location(assignment: RoleAssignment) -> bool:
    field = _binding_field(assignment)
    return field is not None and not getattr(assignment, field)


def _with_profile_location(assignment: RoleAssignment, location: dict) -> RoleAssignment:
    """Fill the identifier a role binds from the profile when the row lacks it."""
    if not _needs_profile_location(assignment):
        return assignment

    field = _binding_field(assignment)
    if location.get(field):
        return assignment.model_copy(update={field: location[field]})
    return assignment


def load_access_snapshot(user_id: str) -> Tuple[RoleAssignment, ...]:
    """
    Active assignments of *user_id*, completed with the profile location.
    """
    key = _snapshot_key(user_id)
    cached = cache_get(key)
    if cached is not None:
        return cached

    assignments = fetch_role_assignments(user_id)

    if any(_needs_profile_location(a) for a in assignments):
        location = fetch_profile_location(user_id)
        assignments = [_with_profile_location(a, location) for a in assignments]

    snapshot = tuple(assignments)
    if settings.ACCESS_SNAPSHOT_TTL_SECONDS > 0:
        cache_set(key, snapshot, ttl_seconds=settings.ACCESS_SNAPSHOT_TTL_SECONDS)
    return snapshot


def invalidate_access_snapshot(user_id: str):
    cache_delete(_snapshot_key(user_id))


# ============================================================
# Lifecycle: active → inactive (terminal)
# ============================================================
def create_role_assignment(user_id: str, payload: RoleAssignmentCreate, assigned_by: Optional[str]) -> RoleAssignment:
    """
    Insert a new active assignment. Reactivating a role always goes
    through here; inactive rows are never flipped back.
    """
    client = _client()

    row = {
        "user_id": user_id,
        "role": str(payload.role),
        "district_id": payload.district_id,
        "community_id": payload.community_id,
        "is_active": True,
        "assigned_by": assigned_by,
        "notes": payload.notes,
        "created_at": datetime.now(timezone.utc).isoformat(),
    }

    try:
        result = client.table(ROLE_TABLE).insert(row).execute()
    except Exception as e:
        raise handle_supabase_error(e, "Failed to assign role")

    invalidate_access_snapshot(user_id)
    logger.info(f"Role {payload.role} assigned to {user_id} by {assigned_by}")

    created = (result.data or [row])[0]
    return RoleAssignment.from_row(created)


def get_role_assignment(user_id: str, assignment_id: str) -> RoleAssignment:
    client = _client()

    try:
        result = (
            client.table(ROLE_TABLE)
            .select("*")
            .eq("id", assignment_id)
            .eq("user_id", user_id)
            .limit(1)
            .execute()
        )
    except Exception as e:
        raise handle_supabase_error(e, "Failed to fetch role assignment")

    if not result.data:
        raise HTTPException(404, f"Role assignment {assignment_id} not found")
    return RoleAssignment.from_row(result.data[0])


def deactivate_role_assignment(user_id: str, assignment_id: str) -> RoleAssignment:
    """
    Soft-disable an assignment. Already-inactive rows are rejected (409).
    """
    assignment = get_role_assignment(user_id, assignment_id)
    if not assignment.active:
        raise HTTPException(409, "Role assignment is already inactive")

    client = _client()
    try:
        (
            client.table(ROLE_TABLE)
            .update({"is_active": False})
            .eq("id", assignment_id)
            .eq("user_id", user_id)
            .execute()
        )
    except Exception as e:
        raise handle_supabase_error(e, "Failed to deactivate role assignment")

    invalidate_access_snapshot(user_id)
    logger.info(f"Role assignment {assignment_id} ({assignment.role}) deactivated for {user_id}")

    return assignment.model_copy(update={"active": False})
