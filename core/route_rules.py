# ============================================
# ROUTE → REQUIREMENT TABLE
# ============================================
"""
Static route requirements for the front end's guarded pages.

Matching: an exact path wins; otherwise the longest "/prefix/*" pattern
that contains the path. Paths matching nothing fall under the unlisted
route policy (settings.UNLISTED_ROUTE_POLICY).
"""

from dataclasses import dataclass
from typing import Iterable, Optional

from models.enums import Capability, RuleMatch


@dataclass(frozen=True)
class RouteRule:
    pattern: str
    min_level: int = 1
    capability: Optional[Capability] = None
    match: RuleMatch = RuleMatch.all

    @property
    def is_wildcard(self) -> bool:
        return self.pattern.endswith("/*")

    @property
    def prefix(self) -> str:
        return self.pattern[:-2] if self.is_wildcard else self.pattern

    def matches(self, path: str) -> bool:
        if not self.is_wildcard:
            return path == self.pattern
        return path == self.prefix or path.startswith(self.prefix + "/")


def _rule(pattern, min_level=1, capability=None, match=RuleMatch.all) -> RouteRule:
    return RouteRule(pattern, min_level, capability, match)


ROUTE_RULES = [

    # =====================================================
    # BASE: every user holding a role
    # =====================================================
    _rule("/"),
    _rule("/my-profile"),
    _rule("/announcements"),
    _rule("/events"),
    _rule("/discussions"),
    _rule("/communication"),
    _rule("/communication-hub"),

    # =====================================================
    # FUNCTIONAL: capability gated
    # =====================================================
    _rule("/facilities", capability=Capability.facilities),
    _rule("/my-bookings", capability=Capability.facilities),

    _rule("/marketplace", capability=Capability.services),
    _rule("/service-requests", capability=Capability.services),

    _rule("/directory", capability=Capability.community),
    _rule("/my-complaints", capability=Capability.community),

    # Security staff, or anyone at security-officer level and above
    _rule("/cctv-live", 6, Capability.security, RuleMatch.any),
    _rule("/visitor-security", capability=Capability.security),
    _rule("/panic-alerts", capability=Capability.security),

    _rule("/role-management", capability=Capability.administration),

    _rule("/asset-management", 5, Capability.maintenance),
    _rule("/inventory-management", 5, Capability.maintenance),

    # =====================================================
    # ADMIN: community admin and above unless narrowed
    # =====================================================
    _rule("/admin/*", 8),
    _rule("/admin/users", 8, Capability.administration),
    _rule("/admin/cctv", 6, Capability.security),
    _rule("/admin/facilities", 7),
    _rule("/admin/maintenance", 7),
    _rule("/admin/service-providers", 2, Capability.administration),
    _rule("/financial-management", 8),

    # District coordinator +
    _rule("/admin/district", 9),
    _rule("/admin/districts", 9),
    _rule("/visitor-analytics", 9),

    # State admin
    _rule("/admin/security", 10),
    _rule("/admin/security-dashboard", 10),
    _rule("/admin/smart-monitoring", 10),
    _rule("/admin/sensors", 10),
    _rule("/admin/sensor-management", 10),
]


def _normalize(path: str) -> str:
    path = path.split("?", 1)[0].split("#", 1)[0]
    if len(path) > 1:
        path = path.rstrip("/")
    return path or "/"


def find_rule(path: str, rules: Optional[Iterable[RouteRule]] = None) -> Optional[RouteRule]:
    """
    Resolve *path* to its governing rule, or None when unlisted.
    """
    path = _normalize(path)
    rules = ROUTE_RULES if rules is None else list(rules)

    best: Optional[RouteRule] = None
    for rule in rules:
        if not rule.matches(path):
            continue
        if not rule.is_wildcard:
            return rule
        if best is None or len(rule.prefix) > len(best.prefix):
            best = rule
    return best
