# core/capabilities.py

"""
Capability aggregation over a user's role assignments.

A fold with identity (None, {}) and combine (max level, union of
capabilities): associative and commutative, so assignment order never
matters and adding an assignment never removes access.
"""

from dataclasses import dataclass
from functools import reduce
from typing import FrozenSet, Iterable, Optional

from core import roles
from core.errors import UnknownRoleError
from core.logging_config import logger
from models.enums import Capability
from models.role_assignment import RoleAssignment


@dataclass(frozen=True)
class CapabilitySummary:
    level: Optional[int] = None
    capabilities: FrozenSet[Capability] = frozenset()
    roles: FrozenSet[str] = frozenset()
    unknown_roles: FrozenSet[str] = frozenset()

    def combine(self, other: "CapabilitySummary") -> "CapabilitySummary":
        if self.level is None:
            level = other.level
        elif other.level is None:
            level = self.level
        else:
            level = max(self.level, other.level)

        return CapabilitySummary(
            level=level,
            capabilities=self.capabilities | other.capabilities,
            roles=self.roles | other.roles,
            unknown_roles=self.unknown_roles | other.unknown_roles,
        )


EMPTY_SUMMARY = CapabilitySummary()


def summarize_assignment(assignment: RoleAssignment) -> CapabilitySummary:
    """Contribution of a single assignment (identity when inactive)."""
    if not assignment.active:
        return EMPTY_SUMMARY

    try:
        role = roles.lookup(assignment.role)
    except UnknownRoleError as e:
        logger.warning(f"Capability aggregation skipped assignment: {e}")
        return CapabilitySummary(unknown_roles=frozenset({assignment.role}))

    return CapabilitySummary(
        level=role.level,
        capabilities=role.capabilities,
        roles=frozenset({str(role.name)}),
    )


def aggregate_capabilities(assignments: Iterable[RoleAssignment]) -> CapabilitySummary:
    return reduce(
        CapabilitySummary.combine,
        (summarize_assignment(a) for a in assignments),
        EMPTY_SUMMARY,
    )
