# core/access_gate.py

"""
Authorization decisions over an already-resolved EffectiveAccessProfile.

Nothing here fetches data: callers resolve the profile from an assignment
snapshot first (build_access_profile), then ask questions of it. Every
"no" is a plain False, never an exception.
"""

from typing import Iterable, List, Optional, Union

from core import roles
from core.capabilities import aggregate_capabilities
from core.config import settings
from core.route_rules import RouteRule, ROUTE_RULES, find_rule
from core.scope import resolve_scope
from models.access_profile import EffectiveAccessProfile
from models.enums import Capability, GeoScope, RoleName, RoutePolicy, RuleMatch
from models.role_assignment import RoleAssignment


EMPTY_PROFILE = EffectiveAccessProfile()


# -----------------------------------------------------
# Profile construction
# -----------------------------------------------------
def build_access_profile(assignments: Iterable[RoleAssignment]) -> EffectiveAccessProfile:
    """
    Resolve scope and capabilities from one assignment snapshot.
    """
    snapshot = tuple(assignments)
    scope = resolve_scope(snapshot)
    summary = aggregate_capabilities(snapshot)

    return EffectiveAccessProfile(
        level=summary.level,
        scope=scope.scope,
        capabilities=summary.capabilities,
        district_ids=scope.district_ids,
        community_ids=scope.community_ids,
        roles=summary.roles,
        unknown_roles=summary.unknown_roles | scope.unknown_roles,
        advisories=scope.advisories,
    )


# -----------------------------------------------------
# Level / capability / scope primitives
# -----------------------------------------------------
def can_access_level(profile: EffectiveAccessProfile, level: int) -> bool:
    return profile.level is not None and profile.level >= level


def can_invoke_function(profile: EffectiveAccessProfile, capability: Union[str, Capability]) -> bool:
    """True iff *capability* is in the profile's capability set."""
    try:
        return Capability(capability) in profile.capabilities
    except ValueError:
        return False


def can_access_scope(profile: EffectiveAccessProfile, scope: Union[str, GeoScope]) -> bool:
    return profile.scope.covers(GeoScope(scope))


# -----------------------------------------------------
# Routes
# -----------------------------------------------------
def rule_allows(profile: EffectiveAccessProfile, rule: RouteRule) -> bool:
    if profile.is_empty:
        return False

    level_ok = can_access_level(profile, rule.min_level)
    if rule.capability is None:
        return level_ok

    capability_ok = can_invoke_function(profile, rule.capability)
    if rule.match is RuleMatch.any:
        return level_ok or capability_ok
    return level_ok and capability_ok


def can_access_route(
    profile: EffectiveAccessProfile,
    route: str,
    rules: Optional[Iterable[RouteRule]] = None,
    unlisted_policy: Optional[Union[str, RoutePolicy]] = None,
) -> bool:
    """
    Decide whether *profile* may reach *route*.

    Unlisted routes follow *unlisted_policy* (default from settings),
    but a profile with no active role is denied everything.
    """
    if profile.is_empty:
        return False

    rule = find_rule(route, rules)
    if rule is not None:
        return rule_allows(profile, rule)

    policy = RoutePolicy(unlisted_policy or settings.UNLISTED_ROUTE_POLICY)
    return policy is RoutePolicy.allow


def accessible_routes(profile: EffectiveAccessProfile, rules: Optional[Iterable[RouteRule]] = None) -> List[str]:
    """Patterns of every listed route the profile passes, in table order."""
    rules = ROUTE_RULES if rules is None else rules
    return [rule.pattern for rule in rules if rule_allows(profile, rule)]


# -----------------------------------------------------
# User management
# -----------------------------------------------------
def can_manage_user(profile: EffectiveAccessProfile, target_max_level: Optional[int]) -> bool:
    """
    Strictly-greater rule: level L manages levels 1..L-1 only.
    A target without any role counts as level 0.
    """
    if profile.is_empty:
        return False
    return profile.level > (target_max_level or 0)


def can_view_user_data(
    profile: EffectiveAccessProfile,
    actor_id: str,
    target_id: str,
    target_level: Optional[int] = 1,
) -> bool:
    if profile.is_empty:
        return False
    if actor_id == target_id:
        return True
    return can_manage_user(profile, target_level)


def can_assign_role(profile: EffectiveAccessProfile, role: Union[str, RoleName]) -> bool:
    """
    Raises UnknownRoleError for roles outside the catalog.
    """
    return can_manage_user(profile, roles.lookup(role).level)


def can_approve_role_change(
    profile: EffectiveAccessProfile,
    current_role: Union[str, RoleName],
    requested_role: Union[str, RoleName],
) -> bool:
    highest = max(roles.lookup(current_role).level, roles.lookup(requested_role).level)
    return can_manage_user(profile, highest)


def can_bind_location(
    profile: EffectiveAccessProfile,
    district_id: Optional[str] = None,
    community_id: Optional[str] = None,
) -> bool:
    """
    May *profile* write an assignment bound to this district/community?

    State scope may bind anything. Narrower scopes must name a location
    inside their own geography: district scope needs one of its
    district_ids, community scope one of its community_ids (plus, if
    given, a district_id it also holds). An unbound row would inherit the
    target's profile location, so only state scope may write one.
    """
    if profile.is_empty:
        return False
    if profile.scope is GeoScope.state:
        return True
    if not (district_id or community_id):
        return False

    if profile.scope is GeoScope.district:
        return district_id in profile.district_ids
    if profile.scope is GeoScope.community:
        if district_id and district_id not in profile.district_ids:
            return False
        return community_id in profile.community_ids
    return False


# -----------------------------------------------------
# Scoped query filters
# -----------------------------------------------------
def data_filters(profile: EffectiveAccessProfile) -> Optional[dict]:
    """
    Column filters restricting reads to the profile's geography.

    Returns {} for state scope (no restriction) and None when the
    profile may read nothing.
    """
    if profile.scope is GeoScope.state:
        return {}
    if profile.scope is GeoScope.district:
        return {"district_id": sorted(profile.district_ids)}
    if profile.scope is GeoScope.community:
        return {"community_id": sorted(profile.community_ids)}
    return None
