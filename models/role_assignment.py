# models/role_assignment.py

from typing import Optional
from datetime import datetime
from pydantic import BaseModel

from models.enums import RoleName


# ===============================================================
# ROLE ASSIGNMENT (row of enhanced_user_roles)
# ===============================================================

class RoleAssignment(BaseModel):
    """
    One role held by one user, optionally bound to a district/community.

    `role` stays a plain string: rows may carry identifiers that are not
    in the catalog, and those must reach the resolvers to be reported.
    """
    role: str
    district_id: Optional[str] = None
    community_id: Optional[str] = None
    active: bool = True

    id: Optional[str] = None
    user_id: Optional[str] = None
    assigned_by: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        frozen = True

    @classmethod
    def from_row(cls, row: dict) -> "RoleAssignment":
        """Build from a Supabase row (`is_active` column → `active`)."""
        return cls(
            role=row["role"],
            district_id=row.get("district_id"),
            community_id=row.get("community_id"),
            active=bool(row.get("is_active", True)),
            id=str(row["id"]) if row.get("id") is not None else None,
            user_id=row.get("user_id"),
            assigned_by=row.get("assigned_by"),
            notes=row.get("notes"),
            created_at=row.get("created_at"),
        )


class RoleAssignmentCreate(BaseModel):
    """
    Payload for granting a role to a user.
    """
    role: RoleName
    district_id: Optional[str] = None
    community_id: Optional[str] = None
    notes: Optional[str] = None
