from flask import Blueprint, g, jsonify
import traceback

from ...constants import NotificationType
from ...errors import CafeError, Forbidden
from ...extensions import db
from ...repositories import get_store
from ...roles import can_access_staff_area
from ...services.notification_service import NotificationService
from ...utils.auth import login_required, roles_required
from ...utils.payload import json_body
from ...utils.serializers import serialize_notification

notifications_bp = Blueprint("notifications", __name__, url_prefix="/api/notifications")


@notifications_bp.route("", methods=["GET"])
@login_required
def my_notifications():
    """
    The caller's notifications, newest first
    ---
    tags:
      - Notifications
    responses:
      200:
        description: Notifications plus the unread count
        schema:
          type: object
          properties:
            status:
              type: string
              example: success
            unread_count:
              type: integer
              example: 2
            notifications:
              type: array
              items:
                type: object
    """
    try:
        service = NotificationService(get_store())
        notifications = service.get_user_notifications(g.current_user.id)
        return jsonify({
            "status": "success",
            "unread_count": service.unread_count(g.current_user.id),
            "notifications": [serialize_notification(n) for n in notifications]
        }), 200
    except Exception as e:
        traceback.print_exc()
        return jsonify({
            "status": "error",
            "message": "Internal server error",
            "details": str(e)
        }), 500


@notifications_bp.route("", methods=["POST"])
@roles_required(can_access_staff_area)
def create_notification():
    """
    Send an in-app notification to a user (staff)
    ---
    tags:
      - Notifications
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          required: [user_id, title, message]
          properties:
            user_id:
              type: integer
              example: 4
            title:
              type: string
              example: Your table is ready
            message:
              type: string
            type:
              type: string
              enum: [reservation, order, system, payment, admin]
    responses:
      201:
        description: Notification created as unread
      400:
        description: Missing title/message or unknown type
      404:
        description: User not found
    """
    try:
        data = json_body()
        notification = NotificationService(get_store()).create_notification(
            user_id=data.get("user_id"),
            title=data.get("title"),
            message=data.get("message"),
            type=data.get("type") or NotificationType.SYSTEM.value,
        )
        return jsonify({
            "status": "success",
            "notification": serialize_notification(notification)
        }), 201

    except CafeError as e:
        db.session.rollback()
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        db.session.rollback()
        traceback.print_exc()
        return jsonify({
            "status": "error",
            "message": "Internal server error",
            "details": str(e)
        }), 500


@notifications_bp.route("/<int:notification_id>/read", methods=["PUT"])
@login_required
def mark_as_read(notification_id):
    """
    Mark one of the caller's notifications as read
    ---
    tags:
      - Notifications
    parameters:
      - in: path
        name: notification_id
        type: integer
        required: true
    responses:
      200:
        description: Notification is read (repeat calls are no-ops)
      403:
        description: Notification belongs to someone else
      404:
        description: Notification not found
    """
    try:
        service = NotificationService(get_store())
        if service.get(notification_id).user_id != g.current_user.id:
            raise Forbidden("This notification belongs to another user")
        notification = service.mark_as_read(notification_id)
        return jsonify({
            "status": "success",
            "notification": serialize_notification(notification)
        }), 200

    except CafeError as e:
        db.session.rollback()
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        db.session.rollback()
        traceback.print_exc()
        return jsonify({
            "status": "error",
            "message": "Internal server error",
            "details": str(e)
        }), 500
