from flask import Blueprint, request, jsonify
import traceback

from ...errors import CafeError
from ...extensions import db
from ...repositories import get_store
from ...roles import can_edit_menu
from ...services.menu_service import MenuService
from ...utils.auth import roles_required
from ...utils.payload import json_body
from ...utils.serializers import serialize_menu_item

menu_bp = Blueprint("menu", __name__, url_prefix="/api/menu")


def _server_error(e):
    db.session.rollback()
    traceback.print_exc()
    return jsonify({
        "status": "error",
        "message": "Internal server error",
        "details": str(e)
    }), 500


@menu_bp.route("", methods=["GET"])
def list_menu_items():
    """
    List menu items, optionally by category
    ---
    tags:
      - Menu
    parameters:
      - in: query
        name: category
        type: string
        enum: [coffee, tea, pastry, breakfast, lunch, dessert]
    responses:
      200:
        description: Menu items
      400:
        description: Unknown category
    """
    try:
        items = MenuService(get_store()).get_menu_items(request.args.get("category"))
        return jsonify({
            "status": "success",
            "items": [serialize_menu_item(i) for i in items]
        }), 200
    except CafeError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        return _server_error(e)


@menu_bp.route("/<int:item_id>", methods=["GET"])
def get_menu_item(item_id):
    try:
        item = MenuService(get_store()).get(item_id)
        return jsonify({"status": "success", "item": serialize_menu_item(item)}), 200
    except CafeError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        return _server_error(e)


@menu_bp.route("", methods=["POST"])
@roles_required(can_edit_menu, "Only admins can edit the menu")
def create_menu_item():
    """
    Add a menu item
    ---
    tags:
      - Menu
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          required: [name, price, category]
          properties:
            name:
              type: string
              example: Flat White
            description:
              type: string
            price:
              type: number
              example: 4.25
            category:
              type: string
              example: coffee
            image:
              type: string
    responses:
      201:
        description: Created
      400:
        description: Invalid input
      403:
        description: Not an admin
    """
    try:
        data = json_body()
        item = MenuService(get_store()).create_menu_item(
            name=data.get("name"),
            price=data.get("price"),
            category=data.get("category"),
            description=data.get("description"),
            image=data.get("image"),
        )
        return jsonify({"status": "success", "item": serialize_menu_item(item)}), 201
    except CafeError as e:
        db.session.rollback()
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        return _server_error(e)


@menu_bp.route("/<int:item_id>", methods=["PUT"])
@roles_required(can_edit_menu, "Only admins can edit the menu")
def update_menu_item(item_id):
    try:
        data = json_body()
        item = MenuService(get_store()).update_menu_item(item_id, data)
        return jsonify({"status": "success", "item": serialize_menu_item(item)}), 200
    except CafeError as e:
        db.session.rollback()
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        return _server_error(e)


@menu_bp.route("/<int:item_id>", methods=["DELETE"])
@roles_required(can_edit_menu, "Only admins can edit the menu")
def delete_menu_item(item_id):
    try:
        MenuService(get_store()).delete_menu_item(item_id)
        return jsonify({"status": "success", "message": "Menu item deleted"}), 200
    except CafeError as e:
        db.session.rollback()
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        return _server_error(e)
