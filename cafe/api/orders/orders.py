from flask import Blueprint, current_app, g, request, jsonify
import traceback

from ...errors import CafeError
from ...extensions import db
from ...repositories import get_store
from ...roles import can_access_staff_area
from ...services.order_service import OrderService
from ...utils.auth import login_required, roles_required
from ...utils.payload import json_body
from ...utils.serializers import serialize_order

orders_bp = Blueprint("orders", __name__, url_prefix="/api/orders")


def _service():
    return OrderService(
        get_store(),
        strict_transitions=current_app.config.get("STRICT_ORDER_TRANSITIONS", False),
    )


@orders_bp.route("", methods=["POST"])
@login_required
def create_order():
    """
    Place an order from the cart
    ---
    tags:
      - Orders
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          required: [items]
          properties:
            items:
              type: array
              items:
                type: object
                properties:
                  menu_item_id:
                    type: integer
                  name:
                    type: string
                  price:
                    type: number
                  quantity:
                    type: integer
            total:
              type: number
    responses:
      201:
        description: Order created in pending status
      400:
        description: Empty cart, unknown item or total mismatch
    """
    try:
        data = json_body()
        order = _service().create_order(
            g.current_user.id, data.get("items"), data.get("total")
        )
        return jsonify({
            "status": "success",
            "message": "Order placed",
            "order": serialize_order(order)
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


@orders_bp.route("/mine", methods=["GET"])
@login_required
def my_orders():
    try:
        orders = _service().get_user_orders(g.current_user.id)
        return jsonify({
            "status": "success",
            "orders": [serialize_order(o) for o in orders]
        }), 200
    except Exception as e:
        traceback.print_exc()
        return jsonify({
            "status": "error",
            "message": "Internal server error",
            "details": str(e)
        }), 500


@orders_bp.route("", methods=["GET"])
@roles_required(can_access_staff_area)
def all_orders():
    """
    All orders, newest first (staff)
    ---
    tags:
      - Orders
    parameters:
      - in: query
        name: status
        type: string
        enum: [pending, processing, completed, cancelled]
    responses:
      200:
        description: Orders
      403:
        description: Not staff
    """
    try:
        orders = _service().get_all_orders(request.args.get("status"))
        return jsonify({
            "status": "success",
            "orders": [serialize_order(o) for o in orders]
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


@orders_bp.route("/<int:order_id>/status", methods=["PUT"])
@roles_required(can_access_staff_area)
def update_order_status(order_id):
    """
    Change an order's status (staff)
    ---
    tags:
      - Orders
    parameters:
      - in: path
        name: order_id
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
              enum: [pending, processing, completed, cancelled]
    responses:
      200:
        description: Updated order
      400:
        description: Unknown status
      404:
        description: Order not found
      409:
        description: Transition not allowed (strict mode only)
    """
    try:
        data = json_body()
        order = _service().update_order_status(order_id, data.get("status"))
        return jsonify({"status": "success", "order": serialize_order(order)}), 200

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
