from flask import Blueprint, current_app, g, request, jsonify
import traceback

from ...errors import CafeError
from ...extensions import db
from ...repositories import get_store
from ...roles import can_access_staff_area, can_manage_users, is_super_admin
from ...services.reservation_service import ReservationService
from ...utils.auth import login_required, roles_required
from ...utils.payload import json_body
from ...utils.serializers import serialize_reservation, serialize_table

reservations_bp = Blueprint("reservations", __name__, url_prefix="/api/reservations")


def _service():
    return ReservationService(
        get_store(), rate_per_guest=current_app.config["RATE_PER_GUEST"]
    )


def _error(e):
    if isinstance(e, CafeError):
        db.session.rollback()
        return jsonify(e.to_dict()), e.status_code
    db.session.rollback()
    traceback.print_exc()
    return jsonify({
        "status": "error",
        "message": "Internal server error",
        "details": str(e)
    }), 500


@reservations_bp.route("/time-slots", methods=["GET"])
def time_slots():
    """
    Bookable time slots
    ---
    tags:
      - Reservations
    responses:
      200:
        description: Slot labels in 30 minute steps, 10:00 AM to 9:00 PM
    """
    try:
        service = _service()
        return jsonify({
            "status": "success",
            "time_slots": service.get_time_slots(),
            "max_guests": service.get_max_guest_capacity()
        }), 200
    except Exception as e:
        return _error(e)


@reservations_bp.route("/available-tables", methods=["GET"])
def available_tables():
    """
    Tables free for a date, slot and party size
    ---
    tags:
      - Reservations
    parameters:
      - in: query
        name: date
        type: string
        required: true
        example: "2025-06-01"
      - in: query
        name: time
        type: string
        required: true
        example: "7:00 PM"
      - in: query
        name: guests
        type: integer
        required: true
        example: 4
    responses:
      200:
        description: Available tables, lowest id first
      400:
        description: Invalid date, time or party size
    """
    try:
        tables = _service().get_available_tables(
            request.args.get("date"),
            request.args.get("time"),
            request.args.get("guests"),
        )
        return jsonify({
            "status": "success",
            "available": bool(tables),
            "tables": [serialize_table(t) for t in tables]
        }), 200
    except Exception as e:
        return _error(e)


@reservations_bp.route("", methods=["POST"])
@login_required
def create_reservation():
    """
    Book a table
    ---
    tags:
      - Reservations
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          required: [name, email, phone, date, time, guests]
          properties:
            name:
              type: string
              example: Ada Lovelace
            email:
              type: string
              example: ada@example.com
            phone:
              type: string
              example: "5551234567"
            date:
              type: string
              example: "2025-06-01"
            time:
              type: string
              example: "7:00 PM"
            guests:
              type: integer
              example: 4
            special_requests:
              type: string
    responses:
      201:
        description: Reservation created with a pending payment of guests x rate
      400:
        description: Invalid input
      409:
        description: No table available for that slot and party size
    """
    try:
        data = json_body()
        reservation = _service().create_reservation(
            user_id=g.current_user.id,
            name=data.get("name"),
            email=data.get("email"),
            phone=data.get("phone"),
            reservation_date=data.get("date"),
            reservation_time=data.get("time"),
            guests=data.get("guests"),
            special_requests=data.get("special_requests"),
        )
        return jsonify({
            "status": "success",
            "message": "Reservation created",
            "reservation": serialize_reservation(reservation)
        }), 201
    except Exception as e:
        return _error(e)


@reservations_bp.route("/mine", methods=["GET"])
@login_required
def my_reservations():
    try:
        reservations = _service().get_user_reservations(g.current_user.id)
        return jsonify({
            "status": "success",
            "reservations": [serialize_reservation(r) for r in reservations]
        }), 200
    except Exception as e:
        return _error(e)


@reservations_bp.route("", methods=["GET"])
@roles_required(can_access_staff_area)
def all_reservations():
    try:
        reservations = _service().get_all_reservations()
        return jsonify({
            "status": "success",
            "reservations": [serialize_reservation(r) for r in reservations]
        }), 200
    except Exception as e:
        return _error(e)


@reservations_bp.route("/<int:reservation_id>/status", methods=["PUT"])
@roles_required(can_access_staff_area)
def update_status(reservation_id):
    """
    Move a reservation through pending, confirmed, finished or cancelled (staff)
    ---
    tags:
      - Reservations
    parameters:
      - in: path
        name: reservation_id
        type: integer
        required: true
      - in: body
        name: body
        required: true
        schema:
          type: object
          required: [status]
          properties:
            status:
              type: string
              enum: [pending, confirmed, finished, cancelled]
    responses:
      200:
        description: Updated reservation; the customer is notified
      400:
        description: Unknown status
      404:
        description: Reservation not found
      409:
        description: Transition not allowed
    """
    try:
        data = json_body()
        reservation = _service().update_reservation_status(
            reservation_id, data.get("status")
        )
        return jsonify({
            "status": "success",
            "reservation": serialize_reservation(reservation)
        }), 200
    except Exception as e:
        return _error(e)


@reservations_bp.route("/<int:reservation_id>/cancel", methods=["POST"])
@roles_required(can_access_staff_area)
def cancel(reservation_id):
    try:
        reservation = _service().cancel_reservation(reservation_id)
        return jsonify({
            "status": "success",
            "reservation": serialize_reservation(reservation)
        }), 200
    except Exception as e:
        return _error(e)


@reservations_bp.route("/<int:reservation_id>", methods=["DELETE"])
@roles_required(can_manage_users, "Only admins can delete reservations")
def delete(reservation_id):
    try:
        _service().delete_reservation(reservation_id)
        return jsonify({"status": "success", "message": "Reservation deleted"}), 200
    except Exception as e:
        return _error(e)


@reservations_bp.route("/<int:reservation_id>/payment", methods=["PUT"])
@roles_required(can_access_staff_area)
def update_payment(reservation_id):
    """
    Set a reservation's payment status (staff)
    ---
    tags:
      - Reservations
    parameters:
      - in: path
        name: reservation_id
        type: integer
        required: true
      - in: body
        name: body
        required: true
        schema:
          type: object
          required: [status]
          properties:
            status:
              type: string
              enum: [pending, paid, refunded]
    responses:
      200:
        description: Updated reservation; the customer is notified
      400:
        description: Unknown payment status
      404:
        description: Reservation not found
    """
    try:
        data = json_body()
        reservation = _service().update_payment_status(
            reservation_id, data.get("status")
        )
        return jsonify({
            "status": "success",
            "reservation": serialize_reservation(reservation)
        }), 200
    except Exception as e:
        return _error(e)


@reservations_bp.route("/payment-reports", methods=["GET"])
@roles_required(is_super_admin, "Only a super admin can view payment reports")
def payment_reports():
    """
    Every reservation payment with totals per status (super admin)
    ---
    tags:
      - Reservations
    responses:
      200:
        description: Payment rows and totals
      403:
        description: Not a super admin
    """
    try:
        report = _service().get_payment_reports()
        return jsonify({"status": "success", **report}), 200
    except Exception as e:
        return _error(e)
