# Table availability, booking and the reservation/payment lifecycle
from datetime import datetime
from decimal import Decimal

from ..config import RATE_PER_GUEST
from ..constants import PaymentStatus, ReservationStatus
from ..errors import NoCapacity, NotFound
from ..models import Payment, Reservation
from ..utils.validators import (
    TIME_SLOTS,
    normalize_time_slot,
    parse_date,
    parse_positive_int,
    validate_contact,
)
from .notification_service import NotificationService
from .status import RESERVATION_TRANSITIONS, check_transition, parse_status


class ReservationService:
    def __init__(self, store, rate_per_guest=RATE_PER_GUEST, notifier=None):
        self.store = store
        self.rate_per_guest = Decimal(rate_per_guest)
        self.notifier = notifier or NotificationService(store)

    # ------------------------------------------------------------------
    # Availability
    # ------------------------------------------------------------------
    @staticmethod
    def get_time_slots():
        return list(TIME_SLOTS)

    def get_max_guest_capacity(self):
        return self.store.tables.max_capacity()

    def get_available_tables(self, reservation_date, reservation_time, guests):
        """
        Tables seating at least ``guests`` with no live booking at the slot,
        lowest id first. An empty list means the slot is full for that party.
        """
        reservation_date = parse_date(reservation_date)
        reservation_time = normalize_time_slot(reservation_time)
        guests = parse_positive_int(guests, "guests")

        taken = self.store.reservations.occupied_table_ids(
            reservation_date, reservation_time
        )
        return [
            table
            for table in self.store.tables.list(min_capacity=guests)
            if table.id not in taken
        ]

    def payment_amount(self, guests):
        return (self.rate_per_guest * guests).quantize(Decimal("0.01"))

    # ------------------------------------------------------------------
    # Booking
    # ------------------------------------------------------------------
    def create_reservation(
        self,
        user_id,
        name,
        email,
        phone,
        reservation_date,
        reservation_time,
        guests,
        special_requests=None,
    ):
        if self.store.users.get(user_id) is None:
            raise NotFound(f"No user found with ID {user_id}")

        name, email, phone = validate_contact(name, email, phone)
        reservation_date = parse_date(reservation_date)
        reservation_time = normalize_time_slot(reservation_time)
        guests = parse_positive_int(guests, "guests")

        tables = self.get_available_tables(reservation_date, reservation_time, guests)
        if not tables:
            raise NoCapacity()
        table = tables[0]

        reservation = Reservation(
            user_id=user_id,
            name=name,
            email=email,
            phone=phone,
            reservation_date=reservation_date,
            reservation_time=reservation_time,
            guests=guests,
            table_id=table.id,
            special_requests=(special_requests or "").strip() or None,
            status=ReservationStatus.PENDING.value,
        )
        reservation.hold_slot()

        try:
            self.store.reservations.add(reservation)
            self.store.payments.add(
                Payment(
                    reservation=reservation,
                    reservation_id=reservation.id,
                    user_id=user_id,
                    amount=self.payment_amount(guests),
                    status=PaymentStatus.PENDING.value,
                )
            )
            self.store.commit()
        except Exception:
            self.store.rollback()
            raise

        print(
            f"[RESERVATIONS] #{reservation.id} table {table.id} "
            f"{reservation_date.isoformat()} {reservation_time} x{guests}"
        )
        return reservation

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def get(self, reservation_id):
        reservation = self.store.reservations.get(reservation_id)
        if reservation is None:
            raise NotFound(f"Reservation {reservation_id} not found")
        return reservation

    def get_user_reservations(self, user_id):
        return self.store.reservations.list_for_user(user_id)

    def get_all_reservations(self):
        return self.store.reservations.list_all()

    def get_payment_reports(self):
        rows = []
        totals = {status.value: Decimal("0.00") for status in PaymentStatus}
        for payment, reservation in self.store.payments.list_with_reservations():
            totals[payment.status] = totals.get(payment.status, Decimal("0.00")) + payment.amount
            rows.append(
                {
                    "payment_id": payment.id,
                    "reservation_id": reservation.id,
                    "user_id": reservation.user_id,
                    "customer_name": reservation.name,
                    "reservation_date": reservation.reservation_date.isoformat(),
                    "reservation_time": reservation.reservation_time,
                    "reservation_status": reservation.status,
                    "amount": float(payment.amount),
                    "status": payment.status,
                }
            )
        return {
            "payments": rows,
            "totals": {status: float(amount) for status, amount in totals.items()},
        }

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def update_reservation_status(self, reservation_id, status):
        target = parse_status(ReservationStatus, status, "reservation")
        reservation = self.get(reservation_id)
        check_transition(
            RESERVATION_TRANSITIONS, reservation.status, target, "reservation"
        )

        try:
            reservation.status = target.value
            if target is ReservationStatus.CANCELLED:
                reservation.release_slot()
            self.notifier.notify_reservation_status(reservation, target)
            self.store.commit()
        except Exception:
            self.store.rollback()
            raise

        print(f"[RESERVATIONS] #{reservation.id} -> {target.value}")
        return reservation

    def cancel_reservation(self, reservation_id):
        return self.update_reservation_status(
            reservation_id, ReservationStatus.CANCELLED.value
        )

    def update_payment_status(self, reservation_id, status):
        """Any payment status may follow any other; staff use this to correct mistakes."""
        target = parse_status(PaymentStatus, status, "payment")
        reservation = self.get(reservation_id)

        try:
            payment = self.store.payments.get_for_reservation(reservation.id)
            if payment is None:
                payment = self.store.payments.add(
                    Payment(
                        reservation=reservation,
                        reservation_id=reservation.id,
                        user_id=reservation.user_id,
                        amount=self.payment_amount(reservation.guests),
                        status=target.value,
                    )
                )
            else:
                payment.status = target.value
                payment.updated_at = datetime.utcnow()
            self.notifier.notify_payment_status(reservation, payment)
            self.store.commit()
        except Exception:
            self.store.rollback()
            raise

        print(f"[RESERVATIONS] #{reservation.id} payment -> {target.value}")
        return reservation

    def delete_reservation(self, reservation_id):
        reservation = self.get(reservation_id)
        self.store.reservations.delete(reservation)
        self.store.commit()


def reservation_payment(reservation, rate_per_guest=RATE_PER_GUEST):
    """(status, amount) for a reservation, defaulting when no payment row exists."""
    payment = reservation.payment
    if payment is not None:
        return payment.status, payment.amount
    return PaymentStatus.PENDING.value, Decimal(rate_per_guest) * reservation.guests

