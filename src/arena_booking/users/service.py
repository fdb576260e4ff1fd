from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import parse_enum, require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, NotFoundError, ValidationError
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


@dataclass(frozen=True)
class SessionUser:
    """What we store into the Flask session after login."""

    user_id: int
    username: str
    full_name: str
    role: Role


class AuthService:
    """Use cases: register an account, authenticate (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def register(
        self,
        *,
        username: str,
        password: str,
        email: str,
        full_name: str,
        role: str | Role = Role.PLAYER,
        phone: Optional[str] = None,
    ) -> User:
        username = require_non_empty(username, "Username")
        full_name = require_non_empty(full_name, "Full name")
        email = require_non_empty(email, "Email").lower()
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)
        role = parse_enum(Role, role or Role.PLAYER, "Role")

        if not _EMAIL_RE.match(email):
            raise ValidationError("Email is invalid")
        if self._users.get_by_username(username):
            raise ValidationError("Username already exists")
        if self._users.get_by_email(email):
            raise ValidationError("Email already exists")

        user_id = self._users.create_user(
            username=username,
            full_name=full_name,
            email=email,
            password_hash=generate_password_hash(password),
            role=role,
            phone=(phone or "").strip() or None,
        )
        logger.info("Registered user %s (%s) as %s", user_id, username, role.value)
        return self._users.get_by_id(user_id)

    def authenticate(self, username: str, password: str) -> SessionUser:
        user = self._users.get_by_username((username or "").strip())
        if not user:
            raise AuthenticationError("Invalid credentials")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            raise AuthenticationError("Invalid credentials")

        return SessionUser(
            user_id=user.user_id,
            username=user.username,
            full_name=user.full_name,
            role=user.role,
        )


class UserService:
    """Read-side user queries used by the other features."""

    def __init__(self, users: UserRepository):
        self._users = users

    def get(self, user_id: int) -> User:
        user = self._users.get_by_id(int(user_id))
        if not user:
            raise NotFoundError("User not found")
        return user

    def list_supervisors(self) -> Sequence[User]:
        return self._users.list_by_role(Role.SUPERVISOR)

    def list_employees(self, *, current_role: Role) -> Sequence[User]:
        if current_role != Role.SUPERVISOR:
            raise AuthorizationError("You do not have permission to access this resource")
        return self._users.list_by_role(Role.EMPLOYEE)
