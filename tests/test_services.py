"""
Service-level tests against the in-memory store; no Flask app or database.
"""

import datetime
from decimal import Decimal

import pytest

from cafe.errors import (
    AccountPending,
    InvalidCredentials,
    InvalidTransition,
    NoCapacity,
    NotFound,
    SlotTaken,
    ValidationError,
)
from cafe.models import DiningTable, MenuItem, Reservation
from cafe.seed import TABLE_LAYOUT
from cafe.services.notification_service import NotificationService
from cafe.services.order_service import OrderService
from cafe.services.reservation_service import ReservationService
from cafe.services.user_service import UserService

JUNE_1 = datetime.date(2025, 6, 1)


@pytest.fixture
def floor(store):
    for first, last, capacity in TABLE_LAYOUT:
        for table_id in range(first, last + 1):
            store.tables.add(DiningTable(id=table_id, name=f"Table {table_id}", capacity=capacity))
    store.commit()
    return store


@pytest.fixture
def guest(store):
    return UserService(store).register_user("guest@example.com", "Guest", "password123")


@pytest.fixture
def reservations(floor):
    return ReservationService(floor)


def _create(service, user, guests=4, when="7:00 PM"):
    return service.create_reservation(
        user_id=user.id,
        name="Guest",
        email="guest@example.com",
        phone="5551234567",
        reservation_date="2025-06-01",
        reservation_time=when,
        guests=guests,
    )


@pytest.mark.reservations
class TestReservationService:
    def test_first_fitting_table_and_payment(self, reservations, guest, floor):
        """Test the first fitting table is taken and paid for."""
        reservation = _create(reservations, guest)

        assert reservation.table_id == 16
        payment = floor.payments.get_for_reservation(reservation.id)
        assert payment.amount == Decimal("80.00")
        assert payment.status == "pending"

    def test_available_tables_never_too_small(self, reservations):
        """Test availability never offers a small table."""
        for guests in range(1, 9):
            tables = reservations.get_available_tables(JUNE_1, "7:00 PM", guests)
            assert tables
            assert all(t.capacity >= guests for t in tables)

    def test_party_larger_than_any_table(self, reservations, guest):
        """Test a party bigger than any table."""
        with pytest.raises(NoCapacity):
            _create(reservations, guest, guests=9)

    def test_24h_time_is_normalized(self, reservations, guest):
        """Test 24 hour times map to slot labels."""
        reservation = _create(reservations, guest, when="19:00")

        assert reservation.reservation_time == "7:00 PM"

    def test_slot_clash_is_rejected(self, reservations, guest, floor):
        """Test a slot clash is refused."""
        first = _create(reservations, guest)
        clash = Reservation(
            user_id=guest.id,
            name="Guest",
            email="guest@example.com",
            phone="5551234567",
            reservation_date=JUNE_1,
            reservation_time="7:00 PM",
            guests=4,
            table_id=first.table_id,
            status="pending",
        )
        clash.hold_slot()

        with pytest.raises(SlotTaken):
            floor.reservations.add(clash)
        assert len(floor.reservations.rows) == 1

    def test_guarded_transitions(self, reservations, guest):
        """Test reservation transitions are guarded."""
        reservation = _create(reservations, guest)
        reservations.update_reservation_status(reservation.id, "cancelled")

        with pytest.raises(InvalidTransition):
            reservations.update_reservation_status(reservation.id, "confirmed")
        assert reservation.slot_key is None

    def test_status_change_notifies_in_same_commit(self, reservations, guest, floor):
        """Test the notification lands with the status change."""
        reservation = _create(reservations, guest)
        commits = floor.commits

        reservations.update_reservation_status(reservation.id, "confirmed")

        assert floor.commits == commits + 1
        titles = [n.title for n in floor.notifications.list_for_user(guest.id)]
        assert titles == ["Reservation Confirmed"]

    def test_payment_is_permissive(self, reservations, guest):
        """Test any payment status may follow any other."""
        reservation = _create(reservations, guest)

        for status in ("paid", "pending", "refunded", "paid"):
            reservations.update_payment_status(reservation.id, status)
        assert reservation.payment.status == "paid"

    def test_missing_reservation(self, reservations):
        """Test a missing reservation."""
        with pytest.raises(NotFound):
            reservations.update_reservation_status(42, "confirmed")


@pytest.mark.orders
class TestOrderService:
    @pytest.fixture
    def orders(self, store):
        store.menu_items.add(MenuItem(name="Latte", price=Decimal("4.75"), category="coffee"))
        store.commit()
        return OrderService(store)

    def test_round_trip(self, orders, guest):
        """Test creating then reading an order."""
        order = orders.create_order(guest.id, [{"menu_item_id": 1, "quantity": 2}])

        mine = orders.get_user_orders(guest.id)
        assert mine == [order]
        assert order.total == Decimal("9.50")
        assert [(i.name, i.quantity) for i in order.items] == [("Latte", 2)]

    def test_any_transition_when_permissive(self, orders, guest):
        """Test permissive mode allows any order transition."""
        order = orders.create_order(guest.id, [{"menu_item_id": 1}])

        orders.update_order_status(order.id, "completed")
        orders.update_order_status(order.id, "pending")
        assert order.status == "pending"

    def test_strict_graph(self, store, orders, guest):
        """Test the strict order graph."""
        order = orders.create_order(guest.id, [{"menu_item_id": 1}])
        strict = OrderService(store, strict_transitions=True)

        with pytest.raises(InvalidTransition):
            strict.update_order_status(order.id, "completed")
        strict.update_order_status(order.id, "processing")
        strict.update_order_status(order.id, "completed")

    def test_zero_quantity(self, orders, guest):
        """Test a zero quantity line."""
        with pytest.raises(ValidationError):
            orders.create_order(guest.id, [{"menu_item_id": 1, "quantity": 0}])


@pytest.mark.notifications
class TestNotificationService:
    def test_mark_as_read_is_idempotent(self, store, guest):
        """Test marking read is idempotent."""
        service = NotificationService(store)
        notification = service.create_notification(guest.id, "Hi", "Welcome")

        service.mark_as_read(notification.id)
        commits = store.commits
        service.mark_as_read(notification.id)

        assert store.commits == commits
        assert service.unread_count(guest.id) == 0

    def test_missing(self, store):
        """Test a missing notification."""
        with pytest.raises(NotFound):
            NotificationService(store).mark_as_read(1)


@pytest.mark.auth
class TestUserService:
    def test_login_flow(self, store):
        """Test register then log in."""
        users = UserService(store)
        users.register_user("cash@example.com", "Cash", "cashier123", role="cashier")

        with pytest.raises(AccountPending):
            users.login("cash@example.com", "cashier123")
        with pytest.raises(InvalidCredentials):
            users.login("cash@example.com", "wrong-password")

        users.approve_user(store.users.get_by_email("cash@example.com").id)
        assert users.login("cash@example.com", "cashier123").role == "cashier"

    def test_authenticate_returns_none(self, store, guest):
        """Test a failed authenticate returns None."""
        assert UserService(store).authenticate_user(guest.email, "nope") is None

    def test_email_is_unique(self, store, guest):
        """Test emails are unique."""
        with pytest.raises(ValidationError, match="Email already in use"):
            UserService(store).register_user(guest.email, "Again", "password123")
