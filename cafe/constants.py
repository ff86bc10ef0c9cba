import enum


class ReservationStatus(str, enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    FINISHED = "finished"
    CANCELLED = "cancelled"


class PaymentStatus(str, enum.Enum):
    PENDING = "pending"
    PAID = "paid"
    REFUNDED = "refunded"


class OrderStatus(str, enum.Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class NotificationType(str, enum.Enum):
    RESERVATION = "reservation"
    ORDER = "order"
    SYSTEM = "system"
    PAYMENT = "payment"
    ADMIN = "admin"


class NotificationStatus(str, enum.Enum):
    UNREAD = "unread"
    READ = "read"


class AccountStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"


MENU_CATEGORIES = ("coffee", "tea", "pastry", "breakfast", "lunch", "dessert")


def values(enum_cls):
    return [member.value for member in enum_cls]
