"""
SQLAlchemy-backed record store.

Services never touch ``db.session`` directly; they receive a store exposing one
repository per record kind plus ``flush``/``commit``/``rollback``. Tests swap in
the in-memory store from ``tests/fakes.py``, which has the same surface.
"""

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import selectinload

from .constants import AccountStatus, ReservationStatus
from .errors import SlotTaken
from .extensions import db
from .models import (
    DiningTable,
    MenuItem,
    Notification,
    Order,
    Payment,
    Reservation,
    User,
)


class UserRepository:
    def __init__(self, session):
        self.session = session

    def get(self, user_id):
        return self.session.get(User, user_id)

    def get_by_email(self, email):
        return self.session.scalar(select(User).where(User.email == email))

    def add(self, user):
        self.session.add(user)
        return user

    def delete(self, user):
        self.session.delete(user)

    def list_by_role(self, role):
        stmt = select(User).where(User.role == role).order_by(User.id)
        return list(self.session.scalars(stmt))

    def list_pending(self):
        stmt = (
            select(User)
            .where(User.status == AccountStatus.PENDING.value)
            .order_by(User.created_at, User.id)
        )
        return list(self.session.scalars(stmt))


class MenuItemRepository:
    def __init__(self, session):
        self.session = session

    def list(self, category=None):
        stmt = select(MenuItem)
        if category:
            stmt = stmt.where(MenuItem.category == category)
        return list(self.session.scalars(stmt.order_by(MenuItem.id)))

    def get(self, item_id):
        return self.session.get(MenuItem, item_id)

    def add(self, item):
        self.session.add(item)
        return item

    def delete(self, item):
        self.session.delete(item)


class TableRepository:
    def __init__(self, session):
        self.session = session

    def list(self, min_capacity=None):
        stmt = select(DiningTable)
        if min_capacity is not None:
            stmt = stmt.where(DiningTable.capacity >= min_capacity)
        return list(self.session.scalars(stmt.order_by(DiningTable.id)))

    def get(self, table_id):
        return self.session.get(DiningTable, table_id)

    def add(self, table):
        self.session.add(table)
        return table

    def max_capacity(self):
        return self.session.scalar(select(func.max(DiningTable.capacity))) or 0


class ReservationRepository:
    def __init__(self, session):
        self.session = session

    def get(self, reservation_id):
        return self.session.get(Reservation, reservation_id)

    def add(self, reservation):
        """Insert and flush so a clash on the slot key surfaces here."""
        self.session.add(reservation)
        try:
            self.session.flush()
        except IntegrityError as e:
            self.session.rollback()
            raise SlotTaken(
                "That table was just booked for the selected time. Please try again."
            ) from e
        return reservation

    def delete(self, reservation):
        self.session.delete(reservation)

    def list_all(self):
        stmt = (
            select(Reservation)
            .options(selectinload(Reservation.payment))
            .order_by(Reservation.reservation_date, Reservation.id)
        )
        return list(self.session.scalars(stmt))

    def list_for_user(self, user_id):
        stmt = (
            select(Reservation)
            .options(selectinload(Reservation.payment))
            .where(Reservation.user_id == user_id)
            .order_by(Reservation.reservation_date, Reservation.id)
        )
        return list(self.session.scalars(stmt))

    def occupied_table_ids(self, reservation_date, reservation_time):
        stmt = select(Reservation.table_id).where(
            Reservation.reservation_date == reservation_date,
            Reservation.reservation_time == reservation_time,
            Reservation.status != ReservationStatus.CANCELLED.value,
        )
        return set(self.session.scalars(stmt))


class PaymentRepository:
    def __init__(self, session):
        self.session = session

    def get_for_reservation(self, reservation_id):
        return self.session.scalar(
            select(Payment).where(Payment.reservation_id == reservation_id)
        )

    def add(self, payment):
        self.session.add(payment)
        return payment

    def list_with_reservations(self):
        stmt = (
            select(Payment, Reservation)
            .join(Reservation, Payment.reservation_id == Reservation.id)
            .order_by(Reservation.reservation_date, Payment.id)
        )
        return [(payment, reservation) for payment, reservation in self.session.execute(stmt)]


class OrderRepository:
    def __init__(self, session):
        self.session = session

    def get(self, order_id):
        return self.session.get(Order, order_id)

    def add(self, order):
        self.session.add(order)
        return order

    def list_all(self):
        stmt = select(Order).order_by(Order.created_at.desc(), Order.id.desc())
        return list(self.session.scalars(stmt))

    def list_for_user(self, user_id):
        stmt = (
            select(Order)
            .where(Order.user_id == user_id)
            .order_by(Order.created_at.desc(), Order.id.desc())
        )
        return list(self.session.scalars(stmt))


class NotificationRepository:
    def __init__(self, session):
        self.session = session

    def get(self, notification_id):
        return self.session.get(Notification, notification_id)

    def add(self, notification):
        self.session.add(notification)
        return notification

    def list_for_user(self, user_id):
        stmt = (
            select(Notification)
            .where(Notification.user_id == user_id)
            .order_by(Notification.created_at.desc(), Notification.id.desc())
        )
        return list(self.session.scalars(stmt))


class SqlStore:
    def __init__(self, session):
        self.session = session
        self.users = UserRepository(session)
        self.menu_items = MenuItemRepository(session)
        self.tables = TableRepository(session)
        self.reservations = ReservationRepository(session)
        self.payments = PaymentRepository(session)
        self.orders = OrderRepository(session)
        self.notifications = NotificationRepository(session)

    def flush(self):
        self.session.flush()

    def commit(self):
        self.session.commit()

    def rollback(self):
        self.session.rollback()


def get_store():
    """Store bound to the current request's Flask-SQLAlchemy session."""
    return SqlStore(db.session)
