# models/access_profile.py

from typing import FrozenSet, Optional, Tuple
from pydantic import BaseModel

from models.enums import Capability, GeoScope


class InconsistentAssignment(BaseModel):
    """
    Advisory: an assignment carried an identifier that does not fit its
    role's default scope. The identifier was ignored.
    """
    role: str
    field: str
    value: str
    scope: GeoScope

    class Config:
        frozen = True

    def __str__(self):
        return (
            f"{self.role} is {self.scope}-scoped; ignoring {self.field}={self.value}"
        )


class EffectiveAccessProfile(BaseModel):
    """
    Resolved access of one user. Derived on demand, never persisted.

    `level is None` means no active role at all (empty access).
    """
    level: Optional[int] = None
    scope: GeoScope = GeoScope.none
    capabilities: FrozenSet[Capability] = frozenset()
    district_ids: FrozenSet[str] = frozenset()
    community_ids: FrozenSet[str] = frozenset()

    roles: FrozenSet[str] = frozenset()
    unknown_roles: FrozenSet[str] = frozenset()
    advisories: Tuple[InconsistentAssignment, ...] = ()

    class Config:
        frozen = True

    @property
    def is_empty(self) -> bool:
        return self.level is None

    @property
    def community_id(self) -> Optional[str]:
        """The bound community when there is exactly one."""
        if len(self.community_ids) == 1:
            return next(iter(self.community_ids))
        return None


class AccessProfileRead(BaseModel):
    """
    API shape of a profile (sorted lists instead of sets).
    """
    level: Optional[int]
    scope: GeoScope
    capabilities: list[str]
    district_ids: list[str]
    community_ids: list[str]
    roles: list[str]
    unknown_roles: list[str]
    advisories: list[str]

    @classmethod
    def from_profile(cls, profile: EffectiveAccessProfile) -> "AccessProfileRead":
        return cls(
            level=profile.level,
            scope=profile.scope,
            capabilities=sorted(str(c) for c in profile.capabilities),
            district_ids=sorted(profile.district_ids),
            community_ids=sorted(profile.community_ids),
            roles=sorted(profile.roles),
            unknown_roles=sorted(profile.unknown_roles),
            advisories=[str(a) for a in profile.advisories],
        )
