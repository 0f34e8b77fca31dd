"""Who is using the store.

The engine never sees credentials, only the Identity an AuthGateway
hands back.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Role(Enum):
    ADMIN = "admin"
    CUSTOMER = "user"


@dataclass(frozen=True)
class Identity:
    username: str
    role: Role = Role.CUSTOMER

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN


ADMIN_USERNAME = "admin"
ADMIN = Identity(username=ADMIN_USERNAME, role=Role.ADMIN)


@dataclass(frozen=True)
class UserProfile:
    """A registered customer as kept in the user table."""

    username: str
    name: str = ""
    email: str = ""
    role: Role = Role.CUSTOMER

    def identity(self) -> Identity:
        return Identity(username=self.username, role=self.role)
