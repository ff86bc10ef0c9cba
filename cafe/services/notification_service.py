# In-app notifications and the messages sent on reservation/payment changes
from ..constants import (
    NotificationStatus,
    NotificationType,
    PaymentStatus,
    ReservationStatus,
)
from ..errors import NotFound, ValidationError
from ..models import Notification
from ..utils.validators import human_date


def reservation_status_message(reservation, status):
    """Return (title, message) for a reservation that just moved to ``status``."""
    when = f"{human_date(reservation.reservation_date)} at {reservation.reservation_time}"
    status = ReservationStatus(status)

    if status is ReservationStatus.CONFIRMED:
        return (
            "Reservation Confirmed",
            f"Your reservation for {when} has been confirmed.",
        )
    if status is ReservationStatus.FINISHED:
        return (
            "Thank You for Visiting",
            "Thank you for dining with us. We hope you enjoyed your experience "
            "and look forward to serving you again soon!",
        )
    if status is ReservationStatus.CANCELLED:
        return (
            "Reservation Cancelled",
            f"Your reservation for {when} has been cancelled.",
        )
    return (
        "Reservation Updated",
        f"Your reservation for {when} is now {status.value}.",
    )


def payment_status_message(reservation, payment):
    when = human_date(reservation.reservation_date)
    amount = f"${payment.amount:.2f}"
    status = PaymentStatus(payment.status)

    if status is PaymentStatus.PAID:
        return (
            "Payment Received",
            f"We received your payment of {amount} for your reservation on {when}.",
        )
    if status is PaymentStatus.REFUNDED:
        return (
            "Payment Refunded",
            f"Your payment of {amount} for your reservation on {when} has been refunded.",
        )
    return (
        "Payment Pending",
        f"A payment of {amount} for your reservation on {when} is pending.",
    )


class NotificationService:
    def __init__(self, store):
        self.store = store

    def build(self, user_id, title, message, type=NotificationType.SYSTEM.value):
        """Stage a notification without committing."""
        if not user_id:
            raise ValidationError("'user_id' is required.")
        if not title or not str(title).strip():
            raise ValidationError("'title' is required.")
        if not message or not str(message).strip():
            raise ValidationError("'message' is required.")
        try:
            kind = NotificationType(str(type).strip().lower())
        except ValueError:
            allowed = ", ".join(t.value for t in NotificationType)
            raise ValidationError(f"Invalid notification type '{type}'. Must be one of: {allowed}")

        notification = Notification(
            user_id=user_id,
            title=str(title).strip(),
            message=str(message).strip(),
            type=kind.value,
            status=NotificationStatus.UNREAD.value,
        )
        return self.store.notifications.add(notification)

    def create_notification(self, user_id, title, message, type=NotificationType.SYSTEM.value):
        if self.store.users.get(user_id) is None:
            raise NotFound(f"No user found with ID {user_id}")
        notification = self.build(user_id, title, message, type)
        self.store.commit()
        print(f"[NOTIFY] '{notification.title}' -> user {user_id}")
        return notification

    def notify_reservation_status(self, reservation, status):
        title, message = reservation_status_message(reservation, status)
        return self.build(
            reservation.user_id, title, message, NotificationType.RESERVATION.value
        )

    def notify_payment_status(self, reservation, payment):
        title, message = payment_status_message(reservation, payment)
        return self.build(
            reservation.user_id, title, message, NotificationType.PAYMENT.value
        )

    def get_user_notifications(self, user_id):
        return self.store.notifications.list_for_user(user_id)

    def unread_count(self, user_id):
        return sum(
            1
            for n in self.get_user_notifications(user_id)
            if n.status == NotificationStatus.UNREAD.value
        )

    def get(self, notification_id):
        notification = self.store.notifications.get(notification_id)
        if notification is None:
            raise NotFound(f"Notification {notification_id} not found")
        return notification

    def mark_as_read(self, notification_id):
        notification = self.get(notification_id)
        if notification.status != NotificationStatus.READ.value:
            notification.status = NotificationStatus.READ.value
            self.store.commit()
        return notification
