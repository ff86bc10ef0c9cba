from flask import current_app

from ..config import RATE_PER_GUEST
from ..services.reservation_service import reservation_payment


def _iso(value):
    return value.isoformat() if value else None


def serialize_user(user):
    return {
        "id": user.id,
        "email": user.email,
        "name": user.name,
        "role": user.role,
        "status": user.status,
        "created_at": _iso(user.created_at),
    }


def serialize_menu_item(item):
    return {
        "id": item.id,
        "name": item.name,
        "description": item.description,
        "price": float(item.price),
        "image": item.image,
        "category": item.category,
    }


def serialize_table(table):
    return {"id": table.id, "name": table.name, "capacity": table.capacity}


def serialize_reservation(reservation):
    rate = current_app.config.get("RATE_PER_GUEST", RATE_PER_GUEST)
    payment_status, payment_amount = reservation_payment(reservation, rate)
    return {
        "id": reservation.id,
        "user_id": reservation.user_id,
        "name": reservation.name,
        "email": reservation.email,
        "phone": reservation.phone,
        "date": reservation.reservation_date.isoformat(),
        "time": reservation.reservation_time,
        "guests": reservation.guests,
        "table_id": reservation.table_id,
        "special_requests": reservation.special_requests,
        "status": reservation.status,
        "payment_status": payment_status,
        "payment_amount": float(payment_amount),
        "created_at": _iso(reservation.created_at),
    }


def serialize_order(order):
    return {
        "id": order.id,
        "user_id": order.user_id,
        "total": float(order.total),
        "status": order.status,
        "created_at": _iso(order.created_at),
        "items": [
            {
                "menu_item_id": item.menu_item_id,
                "name": item.name,
                "price": float(item.price),
                "quantity": item.quantity,
            }
            for item in order.items
        ],
    }


def serialize_notification(notification):
    return {
        "id": notification.id,
        "user_id": notification.user_id,
        "title": notification.title,
        "message": notification.message,
        "type": notification.type,
        "status": notification.status,
        "created_at": _iso(notification.created_at),
    }
