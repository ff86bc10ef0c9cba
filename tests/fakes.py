"""
In-memory stand-in for ``cafe.repositories.SqlStore``.

Records are the real model classes, just never attached to a session. Adds are
staged until ``commit``; ``rollback`` drops whatever was staged since the last
commit. Attribute changes on existing records are not undone.
"""

import datetime
import itertools

from cafe.constants import AccountStatus, ReservationStatus
from cafe.errors import SlotTaken


class _Table:
    def __init__(self, store, name):
        self.store = store
        self.name = name
        self.rows = {}
        self._ids = itertools.count(1)

    def _add(self, record):
        if getattr(record, "id", None) is None:
            record.id = next(self._ids)
        if hasattr(record, "created_at") and record.created_at is None:
            record.created_at = datetime.datetime.utcnow()
        self.rows[record.id] = record
        self.store._staged.append((self, record.id))
        return record

    def get(self, record_id):
        return self.rows.get(record_id)

    def add(self, record):
        return self._add(record)

    def delete(self, record):
        self.rows.pop(record.id, None)


class FakeUsers(_Table):
    def get_by_email(self, email):
        return next((u for u in self.rows.values() if u.email == email), None)

    def list_by_role(self, role):
        return sorted((u for u in self.rows.values() if u.role == role), key=lambda u: u.id)

    def list_pending(self):
        return sorted(
            (u for u in self.rows.values() if u.status == AccountStatus.PENDING.value),
            key=lambda u: (u.created_at, u.id),
        )

    def delete(self, user):
        super().delete(user)
        for table in (self.store.reservations, self.store.orders, self.store.notifications):
            for record in [r for r in table.rows.values() if r.user_id == user.id]:
                table.delete(record)


class FakeMenuItems(_Table):
    def list(self, category=None):
        items = sorted(self.rows.values(), key=lambda i: i.id)
        if category:
            items = [i for i in items if i.category == category]
        return items


class FakeTables(_Table):
    def list(self, min_capacity=None):
        tables = sorted(self.rows.values(), key=lambda t: t.id)
        if min_capacity is not None:
            tables = [t for t in tables if t.capacity >= min_capacity]
        return tables

    def max_capacity(self):
        return max((t.capacity for t in self.rows.values()), default=0)


class FakeReservations(_Table):
    def add(self, reservation):
        if reservation.slot_key and any(
            r.slot_key == reservation.slot_key for r in self.rows.values()
        ):
            self.store.rollback()
            raise SlotTaken(
                "That table was just booked for the selected time. Please try again."
            )
        return self._add(reservation)

    def delete(self, reservation):
        super().delete(reservation)
        payment = self.store.payments.get_for_reservation(reservation.id)
        if payment is not None:
            self.store.payments.delete(payment)

    def list_all(self):
        return sorted(self.rows.values(), key=lambda r: (r.reservation_date, r.id))

    def list_for_user(self, user_id):
        return [r for r in self.list_all() if r.user_id == user_id]

    def occupied_table_ids(self, reservation_date, reservation_time):
        return {
            r.table_id
            for r in self.rows.values()
            if r.reservation_date == reservation_date
            and r.reservation_time == reservation_time
            and r.status != ReservationStatus.CANCELLED.value
        }


class FakePayments(_Table):
    def get_for_reservation(self, reservation_id):
        return next(
            (p for p in self.rows.values() if p.reservation_id == reservation_id), None
        )

    def add(self, payment):
        if payment.reservation_id is None and payment.reservation is not None:
            payment.reservation_id = payment.reservation.id
        return self._add(payment)

    def list_with_reservations(self):
        rows = [
            (p, self.store.reservations.get(p.reservation_id))
            for p in self.rows.values()
        ]
        rows = [(p, r) for p, r in rows if r is not None]
        return sorted(rows, key=lambda pr: (pr[1].reservation_date, pr[0].id))


class _NewestFirst(_Table):
    def list_all(self):
        return sorted(
            self.rows.values(), key=lambda r: (r.created_at, r.id), reverse=True
        )

    def list_for_user(self, user_id):
        return [r for r in self.list_all() if r.user_id == user_id]


class FakeOrders(_NewestFirst):
    pass


class FakeNotifications(_NewestFirst):
    pass


class InMemoryStore:
    def __init__(self):
        self._staged = []
        self.commits = 0
        self.users = FakeUsers(self, "users")
        self.menu_items = FakeMenuItems(self, "menu_items")
        self.tables = FakeTables(self, "tables")
        self.reservations = FakeReservations(self, "reservations")
        self.payments = FakePayments(self, "payments")
        self.orders = FakeOrders(self, "orders")
        self.notifications = FakeNotifications(self, "notifications")

    def flush(self):
        pass

    def commit(self):
        self._staged = []
        self.commits += 1

    def rollback(self):
        for table, record_id in reversed(self._staged):
            table.rows.pop(record_id, None)
        self._staged = []
