from flask import Blueprint, g, request, jsonify
import traceback

from ...errors import CafeError
from ...extensions import db
from ...repositories import get_store
from ...roles import can_manage_users, is_super_admin
from ...services.user_service import UserService
from ...utils.auth import roles_required
from ...utils.payload import json_body
from ...utils.serializers import serialize_user

admin_users_bp = Blueprint("admin_users", __name__, url_prefix="/api/admin/users")


def _error(e):
    db.session.rollback()
    if isinstance(e, CafeError):
        return jsonify(e.to_dict()), e.status_code
    traceback.print_exc()
    return jsonify({
        "status": "error",
        "message": "Internal server error",
        "details": str(e)
    }), 500


@admin_users_bp.route("", methods=["GET"])
@roles_required(can_manage_users, "Only admins can manage users")
def list_users():
    """
    Users with a given role
    ---
    tags:
      - Admin
    parameters:
      - in: query
        name: role
        type: string
        required: true
        enum: [customer, cashier, admin, super_admin]
    responses:
      200:
        description: Users
      400:
        description: Unknown role
    """
    try:
        users = UserService(get_store()).get_users_by_role(request.args.get("role"))
        return jsonify({
            "status": "success",
            "users": [serialize_user(u) for u in users]
        }), 200
    except Exception as e:
        return _error(e)


@admin_users_bp.route("/pending", methods=["GET"])
@roles_required(can_manage_users, "Only admins can manage users")
def pending_users():
    """
    Cashier accounts waiting for approval
    ---
    tags:
      - Admin
    responses:
      200:
        description: Pending users, oldest first
    """
    try:
        users = UserService(get_store()).get_pending_users()
        return jsonify({
            "status": "success",
            "users": [serialize_user(u) for u in users]
        }), 200
    except Exception as e:
        return _error(e)


@admin_users_bp.route("/<int:user_id>/approve", methods=["PUT"])
@roles_required(can_manage_users, "Only admins can manage users")
def approve(user_id):
    try:
        user = UserService(get_store()).approve_user(user_id)
        return jsonify({
            "status": "success",
            "message": "User approved",
            "user": serialize_user(user)
        }), 200
    except Exception as e:
        return _error(e)


@admin_users_bp.route("", methods=["POST"])
@roles_required(is_super_admin, "Only a super admin can add users")
def add_user():
    """
    Create an account with any role (super admin)
    ---
    tags:
      - Admin
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          required: [email, name, password, role]
          properties:
            email:
              type: string
            name:
              type: string
            password:
              type: string
            role:
              type: string
              enum: [customer, cashier, admin, super_admin]
            status:
              type: string
              enum: [pending, approved]
    responses:
      201:
        description: Created; cashiers are approved unless a status is given
      400:
        description: Invalid input or email already in use
      403:
        description: Not a super admin
    """
    try:
        data = json_body()
        user = UserService(get_store()).add_user(
            email=data.get("email"),
            name=data.get("name"),
            password=data.get("password"),
            role=data.get("role"),
            status=data.get("status"),
        )
        return jsonify({"status": "success", "user": serialize_user(user)}), 201
    except Exception as e:
        return _error(e)


@admin_users_bp.route("/<int:user_id>", methods=["PUT"])
@roles_required(can_manage_users, "Only admins can manage users")
def update_user(user_id):
    try:
        data = json_body()
        user = UserService(get_store()).update_user(
            user_id, data, acting_user=g.current_user
        )
        return jsonify({"status": "success", "user": serialize_user(user)}), 200
    except Exception as e:
        return _error(e)


@admin_users_bp.route("/<int:user_id>", methods=["DELETE"])
@roles_required(can_manage_users, "Only admins can manage users")
def delete_user(user_id):
    try:
        UserService(get_store()).delete_user(user_id, acting_user=g.current_user)
        return jsonify({"status": "success", "message": "User deleted"}), 200
    except Exception as e:
        return _error(e)
