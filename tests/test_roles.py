import pytest

from cafe.models import User
from cafe.roles import (
    Role,
    can_access_staff_area,
    can_edit_menu,
    can_manage_users,
    has_role,
    is_admin,
    is_cashier,
    is_customer,
    is_staff,
    is_super_admin,
    role_of,
)


@pytest.mark.roles
class TestRolePredicates:
    @pytest.mark.parametrize(
        "role,staff",
        [("customer", False), ("cashier", True), ("admin", True), ("super_admin", True)],
    )
    def test_is_staff(self, role, staff):
        """Test which roles count as staff."""
        assert is_staff({"role": role}) is staff

    @pytest.mark.parametrize(
        "role,allowed",
        [("customer", False), ("cashier", False), ("admin", True), ("super_admin", True)],
    )
    def test_can_edit_menu(self, role, allowed):
        """Test only admins and super admins may edit the menu."""
        assert can_edit_menu({"role": role}) is allowed

    def test_none_is_nobody(self):
        """Test no user passes any check."""
        for predicate in (
            is_staff,
            is_super_admin,
            is_admin,
            is_cashier,
            is_customer,
            can_access_staff_area,
            can_manage_users,
            can_edit_menu,
        ):
            assert predicate(None) is False
        assert has_role(None, ["admin"]) is False
        assert role_of(None) is None

    def test_unknown_role_never_raises(self):
        """Test an unknown role is simply no role."""
        assert role_of({"role": "barista"}) is None
        assert is_staff({"role": "barista"}) is False

    def test_works_with_model_rows(self):
        """Test predicates on ORM rows."""
        user = User(email="a@example.com", name="A", role="super_admin")

        assert is_super_admin(user)
        assert has_role(user, [Role.ADMIN, "super_admin"])
        assert not is_customer(user)

    def test_pending_cashier_is_not_staff_area(self):
        """Test a pending cashier is kept out of the staff area."""
        assert can_access_staff_area({"role": "cashier", "status": "approved"})
        assert not can_access_staff_area({"role": "cashier", "status": "pending"})

    def test_manage_users(self):
        """Test who may manage users."""
        assert can_manage_users({"role": "admin"})
        assert not can_manage_users({"role": "cashier", "status": "approved"})
