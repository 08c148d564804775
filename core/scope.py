# core/scope.py

"""
Scope resolution: which geographic breadth a set of role assignments
reaches, and which district/community identifiers it is bound to.
"""

from dataclasses import dataclass
from typing import FrozenSet, Iterable, List, Tuple

from core import roles
from core.errors import UnknownRoleError
from core.logging_config import logger
from models.access_profile import InconsistentAssignment
from models.enums import GeoScope
from models.role_assignment import RoleAssignment


@dataclass(frozen=True)
class ScopeResolution:
    scope: GeoScope = GeoScope.none
    district_ids: FrozenSet[str] = frozenset()
    community_ids: FrozenSet[str] = frozenset()
    advisories: Tuple[InconsistentAssignment, ...] = ()
    unknown_roles: FrozenSet[str] = frozenset()


# Which identifier each default scope binds
_BINDING_FIELD = {
    GeoScope.community: "community_id",
    GeoScope.district: "district_id",
    GeoScope.state: None,
}


def _check_bindings(assignment: RoleAssignment, scope: GeoScope) -> Tuple[dict, List[InconsistentAssignment]]:
    """Split an assignment's identifiers into bound ones and advisories."""
    bound = {}
    advisories = []
    for field in ("district_id", "community_id"):
        value = getattr(assignment, field)
        if not value:
            continue
        if _BINDING_FIELD[scope] == field:
            bound[field] = value
        else:
            advisories.append(
                InconsistentAssignment(role=assignment.role, field=field, value=value, scope=scope)
            )
    return bound, advisories


def resolve_scope(assignments: Iterable[RoleAssignment]) -> ScopeResolution:
    """
    Broadest default scope among active assignments wins
    (state > district > community). Identifiers are unioned.
    """
    scope = GeoScope.none
    district_ids = set()
    community_ids = set()
    advisories = []
    unknown = set()

    for assignment in assignments:
        if not assignment.active:
            continue

        try:
            role = roles.lookup(assignment.role)
        except UnknownRoleError as e:
            logger.warning(f"Scope resolution skipped assignment: {e}")
            unknown.add(assignment.role)
            continue

        if role.scope.breadth > scope.breadth:
            scope = role.scope

        bound, notes = _check_bindings(assignment, role.scope)
        if "district_id" in bound:
            district_ids.add(bound["district_id"])
        if "community_id" in bound:
            community_ids.add(bound["community_id"])
        for note in notes:
            logger.info(f"Inconsistent role assignment: {note}")
        advisories.extend(notes)

    return ScopeResolution(
        scope=scope,
        district_ids=frozenset(district_ids),
        community_ids=frozenset(community_ids),
        advisories=tuple(sorted(advisories, key=lambda a: (a.role, a.field, a.value))),
        unknown_roles=frozenset(unknown),
    )
