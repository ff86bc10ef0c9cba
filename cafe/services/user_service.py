# Accounts: registration, login and staff approval
import bcrypt

from ..constants import AccountStatus
from ..errors import (
    AccountPending,
    Forbidden,
    InvalidCredentials,
    NotFound,
    ValidationError,
)
from ..models import User
from ..roles import Role, is_pending_cashier
from ..utils.validators import require_text, validate_email

MIN_PASSWORD_LENGTH = 6
SELF_SERVICE_ROLES = (Role.CUSTOMER, Role.CASHIER)


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def check_password(password: str, stored_hash) -> bool:
    if not password or not stored_hash:
        return False
    if isinstance(stored_hash, str):
        stored_hash = stored_hash.encode("utf-8")
    try:
        return bcrypt.checkpw(password.encode("utf-8"), stored_hash)
    except ValueError:
        return False


def _validate_password(password):
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters."
        )
    return password


def _parse_role(role):
    parsed = Role.parse(role)
    if parsed is None:
        raise ValidationError(f"Role '{role}' is not a valid role.")
    return parsed


class UserService:
    def __init__(self, store):
        self.store = store

    def _new_user(self, email, name, password, role, status=None):
        email = validate_email(email)
        name = require_text(name, "name", min_length=2)
        _validate_password(password)

        if self.store.users.get_by_email(email) is not None:
            raise ValidationError("Email already in use")

        user = User(
            email=email,
            name=name,
            password_hash=hash_password(password),
            role=role.value,
            status=status,
        )
        try:
            self.store.users.add(user)
            self.store.commit()
        except Exception:
            self.store.rollback()
            raise
        return user

    def register_user(self, email, name, password, role=Role.CUSTOMER.value):
        """Public sign-up. Cashiers wait in ``pending`` until an admin approves them."""
        role = _parse_role(role or Role.CUSTOMER.value)
        if role not in SELF_SERVICE_ROLES:
            raise ValidationError(
                f"Role '{role.value}' is not a valid or supported role for this signup."
            )
        status = AccountStatus.PENDING.value if role.needs_approval else None
        user = self._new_user(email, name, password, role, status)
        print(f"[AUTH] registered {user.email} as {user.role}")
        return user

    def add_user(self, email, name, password, role, status=None):
        """Super admin creation of any account; cashiers default to approved."""
        role = _parse_role(role)
        if role.needs_approval:
            status = status or AccountStatus.APPROVED.value
            if status not in (s.value for s in AccountStatus):
                raise ValidationError(f"Invalid account status '{status}'.")
        else:
            status = None
        return self._new_user(email, name, password, role, status)

    def authenticate_user(self, email, password):
        """The matching user, or None when the email/password pair is wrong."""
        if not email or not password:
            return None
        user = self.store.users.get_by_email(str(email).strip().lower())
        if user is None or not check_password(password, user.password_hash):
            return None
        return user

    def login(self, email, password):
        if not email or not password:
            raise ValidationError("Email and password required")
        user = self.authenticate_user(email, password)
        if user is None:
            raise InvalidCredentials()
        if is_pending_cashier(user):
            raise AccountPending()
        return user

    def get(self, user_id):
        user = self.store.users.get(user_id)
        if user is None:
            raise NotFound(f"No user found with ID {user_id}")
        return user

    def get_users_by_role(self, role):
        return self.store.users.list_by_role(_parse_role(role).value)

    def get_pending_users(self):
        return self.store.users.list_pending()

    def approve_user(self, user_id):
        user = self.get(user_id)
        if not Role(user.role).needs_approval:
            raise ValidationError("Only cashier accounts need approval.")
        user.status = AccountStatus.APPROVED.value
        self.store.commit()
        print(f"[AUTH] approved {user.email}")
        return user

    def delete_user(self, user_id, acting_user=None):
        user = self.get(user_id)
        if acting_user is not None and acting_user.id == user.id:
            raise Forbidden("You cannot delete your own account.")
        if user.role == Role.SUPER_ADMIN.value and (
            acting_user is None or acting_user.role != Role.SUPER_ADMIN.value
        ):
            raise Forbidden("Only a super admin can delete a super admin.")
        self.store.users.delete(user)
        self.store.commit()

    def update_user(self, user_id, changes, acting_user=None):
        """Update name, email or password. Role and id never change here."""
        user = self.get(user_id)
        if user.role == Role.SUPER_ADMIN.value and (
            acting_user is None or acting_user.role != Role.SUPER_ADMIN.value
        ):
            raise Forbidden("Only a super admin can modify a super admin.")
        changes = dict(changes or {})
        changes.pop("id", None)
        changes.pop("role", None)

        if "name" in changes:
            user.name = require_text(changes["name"], "name", min_length=2)
        if "email" in changes:
            email = validate_email(changes["email"])
            existing = self.store.users.get_by_email(email)
            if existing is not None and existing.id != user.id:
                raise ValidationError("Email already in use")
            user.email = email
        if changes.get("password"):
            user.password_hash = hash_password(_validate_password(changes["password"]))

        self.store.commit()
        return user
