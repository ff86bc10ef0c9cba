from ..constants import OrderStatus, ReservationStatus
from ..errors import InvalidTransition, ValidationError

RESERVATION_TRANSITIONS = {
    ReservationStatus.PENDING: {ReservationStatus.CONFIRMED, ReservationStatus.CANCELLED},
    ReservationStatus.CONFIRMED: {ReservationStatus.FINISHED, ReservationStatus.CANCELLED},
    ReservationStatus.FINISHED: set(),
    ReservationStatus.CANCELLED: set(),
}

ORDER_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.PROCESSING, OrderStatus.CANCELLED},
    OrderStatus.PROCESSING: {OrderStatus.COMPLETED},
    OrderStatus.COMPLETED: set(),
    OrderStatus.CANCELLED: set(),
}


def parse_status(enum_cls, value, kind):
    try:
        return enum_cls(str(value).strip().lower())
    except (ValueError, AttributeError):
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValidationError(f"Invalid {kind} status '{value}'. Must be one of: {allowed}")


def check_transition(transitions, current, target, kind):
    current = type(target)(current)
    if target not in transitions[current]:
        raise InvalidTransition(current.value, target.value, kind=kind)
    return target
