"""Domain entity representing the authenticated staff member."""

from dataclasses import dataclass

ROLE_OWNER = "owner"
ROLE_MANAGER = "manager"
ROLE_STAFF = "staff"


@dataclass(frozen=True)
class StaffUser:
    """Identity resolved from an access token."""

    id: str
    restaurant_id: str
    role: str

    def has_role(self, *roles: str) -> bool:
        """Return ``True`` when the user's role is one of ``roles``."""

        return self.role.lower() in {role.lower() for role in roles}

    def can_publish_events(self) -> bool:
        return self.has_role(ROLE_OWNER, ROLE_MANAGER)


__all__ = ["ROLE_MANAGER", "ROLE_OWNER", "ROLE_STAFF", "StaffUser"]
