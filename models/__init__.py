# -------------------------
# Enums
# -------------------------
from .enums import (
    RoleName,
    Capability,
    GeoScope,
    RuleMatch,
    RoutePolicy,
)

# -------------------------
# Role Assignment Models
# -------------------------
from .role_assignment import (
    RoleAssignment,
    RoleAssignmentCreate,
)

# -------------------------
# Access Profile Models
# -------------------------
from .access_profile import (
    EffectiveAccessProfile,
    InconsistentAssignment,
    AccessProfileRead,
)

__all__ = [
    # enums
    "RoleName",
    "Capability",
    "GeoScope",
    "RuleMatch",
    "RoutePolicy",

    # role assignments
    "RoleAssignment",
    "RoleAssignmentCreate",

    # access profiles
    "EffectiveAccessProfile",
    "InconsistentAssignment",
    "AccessProfileRead",
]
