# ============================================
# CENTRALIZED ROLE REGISTRY
# ============================================
"""
Single source of truth for role levels, default geographic scope and
default capabilities. Nothing else in the codebase hardcodes role facts.

Level orders management seniority only. It is deliberately NOT monotonic
with scope or capability breadth: state_service_manager (level 2) is
state-scoped while community_admin (level 8) is community-scoped.
"""

from dataclasses import dataclass
from typing import FrozenSet, List, Union

from core.errors import UnknownRoleError
from models.enums import Capability, GeoScope, RoleName

_ALL = frozenset(Capability)


@dataclass(frozen=True)
class RoleDefinition:
    name: RoleName
    level: int
    scope: GeoScope
    capabilities: FrozenSet[Capability]
    description: str = ""


ROLE_REGISTRY = {

    # =====================================================
    # RESIDENT
    # =====================================================
    RoleName.resident: RoleDefinition(
        RoleName.resident, 1, GeoScope.community,
        frozenset({Capability.community}),
        "Community residents with basic access to community life",
    ),

    # =====================================================
    # STATE SERVICE MANAGER: low level, state-wide reach
    # =====================================================
    RoleName.state_service_manager: RoleDefinition(
        RoleName.state_service_manager, 2, GeoScope.state,
        frozenset({Capability.services, Capability.administration}),
        "State-level service quality and provider management",
    ),

    # =====================================================
    # COMMUNITY LEADER: same grants as resident (level only)
    # =====================================================
    RoleName.community_leader: RoleDefinition(
        RoleName.community_leader, 3, GeoScope.community,
        frozenset({Capability.community}),
        "Moderates discussions and organizes events",
    ),

    # =====================================================
    # SERVICE PROVIDER
    # =====================================================
    RoleName.service_provider: RoleDefinition(
        RoleName.service_provider, 4, GeoScope.community,
        frozenset({Capability.services, Capability.community}),
        "Creates marketplace listings and handles service requests",
    ),

    # =====================================================
    # MAINTENANCE STAFF
    # =====================================================
    RoleName.maintenance_staff: RoleDefinition(
        RoleName.maintenance_staff, 5, GeoScope.community,
        frozenset({Capability.facilities, Capability.maintenance}),
        "Technical staff handling repairs and facility upkeep",
    ),

    # =====================================================
    # SECURITY OFFICER
    # =====================================================
    RoleName.security_officer: RoleDefinition(
        RoleName.security_officer, 6, GeoScope.community,
        frozenset({Capability.security}),
        "Security personnel responsible for community safety and monitoring",
    ),

    # =====================================================
    # FACILITY MANAGER
    # =====================================================
    RoleName.facility_manager: RoleDefinition(
        RoleName.facility_manager, 7, GeoScope.community,
        frozenset({Capability.facilities, Capability.maintenance}),
        "Staff managing community facilities, bookings, and maintenance",
    ),

    # =====================================================
    # COMMUNITY ADMIN: everything, one community
    # =====================================================
    RoleName.community_admin: RoleDefinition(
        RoleName.community_admin, 8, GeoScope.community, _ALL,
        "Administrators managing a specific community within a district",
    ),

    # =====================================================
    # DISTRICT COORDINATOR
    # =====================================================
    RoleName.district_coordinator: RoleDefinition(
        RoleName.district_coordinator, 9, GeoScope.district, _ALL,
        "Coordinators overseeing multiple communities in a district",
    ),

    # =====================================================
    # STATE ADMIN
    # =====================================================
    RoleName.state_admin: RoleDefinition(
        RoleName.state_admin, 10, GeoScope.state, _ALL,
        "Top-level administrators with full system access",
    ),
}


def lookup(role_id: Union[str, RoleName]) -> RoleDefinition:
    """
    Return the catalog entry for *role_id*.

    Raises UnknownRoleError for anything outside the ten known roles.
    """
    try:
        return ROLE_REGISTRY[RoleName(role_id)]
    except ValueError:
        raise UnknownRoleError(str(role_id)) from None


def is_known_role(role_id: str) -> bool:
    return role_id in RoleName.list()


def all_roles() -> List[RoleDefinition]:
    """All roles, ascending by level (1..10)."""
    return sorted(ROLE_REGISTRY.values(), key=lambda r: r.level)
