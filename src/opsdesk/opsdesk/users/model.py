from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: an account in the organization.

    Plain data object; it carries no database access code.
    """

    user_id: int
    name: str
    email: str
    password_hash: str
    role: Role
    team_id: Optional[int] = None
    is_active: bool = True
