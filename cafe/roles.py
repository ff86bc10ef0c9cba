"""
Role predicates used to decide which records and actions a user is offered.

Every predicate accepts ``None`` for "not logged in" and answers False rather
than raising. ``user`` can be a ``User`` row, a token payload dict or anything
else with a ``role`` (and, for cashiers, ``status``) attribute or key.
"""

import enum
from typing import Iterable, Optional


class Role(str, enum.Enum):
    CUSTOMER = "customer"
    CASHIER = "cashier"
    ADMIN = "admin"
    SUPER_ADMIN = "super_admin"

    @property
    def is_staff(self) -> bool:
        return self in (Role.CASHIER, Role.ADMIN, Role.SUPER_ADMIN)

    @property
    def needs_approval(self) -> bool:
        return self is Role.CASHIER

    @classmethod
    def parse(cls, value) -> Optional["Role"]:
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return None


def _field(user, name):
    if isinstance(user, dict):
        return user.get(name)
    return getattr(user, name, None)


def role_of(user) -> Optional[Role]:
    if user is None:
        return None
    return Role.parse(_field(user, "role"))


def is_staff(user) -> bool:
    role = role_of(user)
    return role is not None and role.is_staff


def is_super_admin(user) -> bool:
    return role_of(user) is Role.SUPER_ADMIN


def is_admin(user) -> bool:
    return role_of(user) is Role.ADMIN


def is_cashier(user) -> bool:
    return role_of(user) is Role.CASHIER


def is_customer(user) -> bool:
    return role_of(user) is Role.CUSTOMER


def has_role(user, roles: Iterable) -> bool:
    role = role_of(user)
    if role is None:
        return False
    return role in {Role.parse(r) for r in roles}


def is_pending_cashier(user) -> bool:
    return is_cashier(user) and _field(user, "status") == "pending"


def can_access_staff_area(user) -> bool:
    """A cashier waiting for approval is never treated as staff."""
    return is_staff(user) and not is_pending_cashier(user)


def can_manage_users(user) -> bool:
    return has_role(user, (Role.ADMIN, Role.SUPER_ADMIN))


def can_edit_menu(user) -> bool:
    return has_role(user, (Role.ADMIN, Role.SUPER_ADMIN))
