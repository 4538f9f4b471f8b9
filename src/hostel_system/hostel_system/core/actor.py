from __future__ import annotations

from dataclasses import dataclass

from .enums import Role, is_admin_role


@dataclass(frozen=True)
class Actor:
    """The authenticated caller a service acts on behalf of."""

    user_id: int
    role: Role

    @property
    def is_admin(self) -> bool:
        return is_admin_role(self.role)
