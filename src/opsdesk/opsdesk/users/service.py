from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH, USERS_MANAGE
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, NotFoundError, ValidationError
from ..permissions.model import Actor
from ..permissions.service import require_permission
from .repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What we store into the Flask session after login."""

    user_id: int
    name: str
    role: Role
    team_id: Optional[int]


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, email: str, password: str) -> SessionUser:
        user = self._users.get_by_email((email or "").strip().lower())
        if not user or not user.is_active:
            raise AuthenticationError("Invalid email or password")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # placeholder or corrupted hashes
            ok = False

        if not ok:
            logger.info("failed login for %s", user.email)
            raise AuthenticationError("Invalid email or password")

        return SessionUser(user_id=user.user_id, name=user.name, role=user.role, team_id=user.team_id)


class UserService:
    """Use case: manage users (admin/HR)."""

    def __init__(self, users: UserRepository):
        self._users = users

    @staticmethod
    def require_manager(actor: Actor) -> None:
        require_permission(actor, USERS_MANAGE)

    def create_account(
        self,
        *,
        actor: Actor,
        name: str,
        email: str,
        password: str,
        role: Role | str = Role.EMPLOYEE,
        team_id: Optional[int] = None,
    ) -> int:
        require_permission(actor, USERS_MANAGE)

        name = require_non_empty(name, "Name")
        email = require_non_empty(email, "Email").lower()
        if "@" not in email:
            raise ValidationError("Email is invalid")
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

        try:
            role = Role(role)
        except ValueError:
            raise ValidationError(f"Unknown role: {role}")
        if role == Role.ADMIN and actor.role != Role.ADMIN:
            raise AuthorizationError("Only an Admin can create another Admin")

        if self._users.get_by_email(email):
            raise ValidationError("Email is already registered")

        user_id = self._users.create_user(
            name=name,
            email=email,
            password_hash=generate_password_hash(password),
            role=role,
            team_id=int(team_id) if team_id else None,
        )
        logger.info("user %s (%s) created by %s", user_id, role.value, actor.user_id)
        return user_id

    def list_users(self) -> list[dict]:
        return [
            {
                "user_id": u.user_id,
                "name": u.name,
                "email": u.email,
                "role": u.role.value,
                "team_id": u.team_id,
                "is_active": u.is_active,
            }
            for u in self._users.list_users()
        ]

    def set_active(self, *, actor: Actor, user_id: int, is_active: bool) -> None:
        require_permission(actor, USERS_MANAGE)

        user = self._users.get_by_id(int(user_id))
        if not user:
            raise NotFoundError("User not found")
        if user.role == Role.ADMIN and actor.role != Role.ADMIN:
            raise AuthorizationError("Only an Admin can deactivate an Admin")
        if int(user_id) == actor.user_id and not is_active:
            raise ValidationError("You cannot deactivate your own account")

        if not self._users.set_active(int(user_id), is_active=bool(is_active)):
            raise ValidationError("Updating the account failed")

    def get_role(self, user_id: int) -> Optional[Role]:
        user = self._users.get_by_id(int(user_id))
        return user.role if user else None
