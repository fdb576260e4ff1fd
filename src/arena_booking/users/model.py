from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: User.

    Plain data object, no database access. ``role`` is fixed at registration.
    """

    user_id: int
    username: str
    full_name: str
    email: str
    password_hash: str
    role: Role
    phone: Optional[str] = None

    def public_dict(self) -> dict:
        return {
            "id": self.user_id,
            "username": self.username,
            "fullName": self.full_name,
            "email": self.email,
            "role": self.role.value,
            "phone": self.phone,
        }
