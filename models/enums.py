from enum import Enum


class BaseStrEnum(str, Enum):
    """
    Base enum that serializes cleanly to a string
    and provides a .list() method for UI dropdowns.
    """

    def __str__(self):
        return str(self.value)

    @classmethod
    def list(cls):
        return [item.value for item in cls]


# -----------------------------------------------------
# ROLE NAME
# -----------------------------------------------------
class RoleName(BaseStrEnum):
    """The ten platform roles, in ascending level order."""

    resident = "resident"
    state_service_manager = "state_service_manager"
    community_leader = "community_leader"
    service_provider = "service_provider"
    maintenance_staff = "maintenance_staff"
    security_officer = "security_officer"
    facility_manager = "facility_manager"
    community_admin = "community_admin"
    district_coordinator = "district_coordinator"
    state_admin = "state_admin"


# -----------------------------------------------------
# CAPABILITY
# -----------------------------------------------------
class Capability(BaseStrEnum):
    """Functional grant, independent of level and scope."""

    security = "security"
    facilities = "facilities"
    services = "services"
    administration = "administration"
    maintenance = "maintenance"
    community = "community"


# -----------------------------------------------------
# GEOGRAPHIC SCOPE
# -----------------------------------------------------
class GeoScope(BaseStrEnum):
    """Geographic breadth of access. Declared narrowest first."""

    none = "none"
    community = "community"
    district = "district"
    state = "state"

    @property
    def breadth(self) -> int:
        return list(GeoScope).index(self)

    def covers(self, other: "GeoScope") -> bool:
        """True when this scope includes *other* (state ⊃ district ⊃ community)."""
        if self is GeoScope.none or other is GeoScope.none:
            return False
        return self.breadth >= other.breadth


# -----------------------------------------------------
# ROUTE RULE MATCH MODE
# -----------------------------------------------------
class RuleMatch(BaseStrEnum):
    """How a route rule combines its level and capability requirements."""

    all = "all"
    any = "any"


# -----------------------------------------------------
# UNLISTED ROUTE POLICY
# -----------------------------------------------------
class RoutePolicy(BaseStrEnum):
    allow = "allow"
    deny = "deny"
