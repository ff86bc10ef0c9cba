from flask import Blueprint, jsonify, g
import traceback

from ..errors import CafeError
from ..extensions import db
from ..repositories import get_store
from ..services.user_service import UserService
from ..utils.auth import issue_token, login_required
from ..utils.payload import json_body
from ..utils.serializers import serialize_user

auth_bp = Blueprint("auth", __name__, url_prefix="/api/auth")


@auth_bp.route("/register", methods=["POST"])
def register_user():
    """
    Register a customer or cashier account
    ---
    tags:
      - Authentication
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          required: [email, name, password]
          properties:
            email:
              type: string
              example: guest@example.com
            name:
              type: string
              example: Jamie Guest
            password:
              type: string
              example: secret123
            role:
              type: string
              enum: [customer, cashier]
    responses:
      201:
        description: Account created. Cashier accounts start pending approval.
      400:
        description: Invalid input or email already in use
    """
    try:
        data = json_body()
        user = UserService(get_store()).register_user(
            email=data.get("email"),
            name=data.get("name"),
            password=data.get("password"),
            role=data.get("role", "customer"),
        )

        message = "User registered successfully"
        if user.status == "pending":
            message = "Registration received. Your account requires approval from a super admin."

        return jsonify({
            "status": "success",
            "message": message,
            "user": serialize_user(user)
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


@auth_bp.route("/login", methods=["POST"])
def login_user():
    """
    Log in and receive a bearer token
    ---
    tags:
      - Authentication
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          required: [email, password]
          properties:
            email:
              type: string
            password:
              type: string
    responses:
      200:
        description: Login successful
      401:
        description: Invalid credentials
      403:
        description: Cashier account still pending approval
    """
    try:
        data = json_body()
        user = UserService(get_store()).login(data.get("email"), data.get("password"))
        token = issue_token(user)
        print(f"[AUTH] login {user.email}")

        return jsonify({
            "status": "success",
            "message": "Login successful",
            "token": token,
            "user": serialize_user(user)
        }), 200

    except CafeError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        traceback.print_exc()
        return jsonify({
            "status": "error",
            "message": "Internal server error",
            "details": str(e)
        }), 500


@auth_bp.route("/me", methods=["GET"])
@login_required
def current_user():
    """
    The logged-in user
    ---
    tags:
      - Authentication
    responses:
      200:
        description: Current user
      401:
        description: Missing or invalid token
    """
    return jsonify({"status": "success", "user": serialize_user(g.current_user)}), 200
