# Product orders placed from the menu
from decimal import Decimal

from ..constants import OrderStatus
from ..errors import NotFound, ValidationError
from ..models import Order, OrderItem
from ..utils.validators import parse_money, parse_positive_int
from .status import ORDER_TRANSITIONS, check_transition, parse_status


class OrderService:
    def __init__(self, store, strict_transitions=False):
        self.store = store
        self.strict_transitions = strict_transitions

    def _build_items(self, items):
        if not items or not isinstance(items, (list, tuple)):
            raise ValidationError("Your cart is empty.")

        lines = []
        for position, raw in enumerate(items):
            if not isinstance(raw, dict):
                raise ValidationError("Each order item must be an object.")

            menu_item_id = raw.get("menu_item_id")
            if menu_item_id is None:
                raise ValidationError("'menu_item_id' is required for every item.")
            menu_item = self.store.menu_items.get(menu_item_id)
            if menu_item is None:
                raise ValidationError(f"Menu item {menu_item_id} does not exist.")

            # Name and price are snapshotted from the cart; fall back to the catalog
            name = raw.get("name") or menu_item.name
            price = parse_money(
                raw["price"] if raw.get("price") is not None else menu_item.price,
                "price",
            )
            quantity = parse_positive_int(raw.get("quantity", 1), "quantity")

            lines.append(
                OrderItem(
                    position=position,
                    menu_item_id=menu_item.id,
                    name=name,
                    price=price,
                    quantity=quantity,
                )
            )
        return lines

    def create_order(self, user_id, items, total=None):
        if self.store.users.get(user_id) is None:
            raise NotFound(f"No user found with ID {user_id}")

        lines = self._build_items(items)
        computed = sum((line.price * line.quantity for line in lines), Decimal("0.00"))

        if total is not None and parse_money(total, "total") != computed:
            raise ValidationError(
                f"Order total {total} does not match the items ({computed:.2f})."
            )

        order = Order(
            user_id=user_id,
            total=computed,
            status=OrderStatus.PENDING.value,
            items=lines,
        )
        try:
            self.store.orders.add(order)
            self.store.commit()
        except Exception:
            self.store.rollback()
            raise

        print(f"[ORDERS] #{order.id} user {user_id} total {computed:.2f}")
        return order

    def get(self, order_id):
        order = self.store.orders.get(order_id)
        if order is None:
            raise NotFound("Order not found")
        return order

    def get_user_orders(self, user_id):
        return self.store.orders.list_for_user(user_id)

    def get_all_orders(self, status=None):
        orders = self.store.orders.list_all()
        if status:
            wanted = parse_status(OrderStatus, status, "order")
            orders = [o for o in orders if o.status == wanted.value]
        return orders

    def update_order_status(self, order_id, status):
        """
        Orders accept any status change unless strict transitions are on, in
        which case the pending -> processing -> completed / pending -> cancelled
        graph is enforced. No notification is sent for order changes.
        """
        target = parse_status(OrderStatus, status, "order")
        order = self.get(order_id)

        if self.strict_transitions:
            check_transition(ORDER_TRANSITIONS, order.status, target, "order")

        order.status = target.value
        self.store.commit()
        print(f"[ORDERS] #{order.id} -> {target.value}")
        return order
