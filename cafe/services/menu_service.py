from ..constants import MENU_CATEGORIES
from ..errors import NotFound, ValidationError
from ..models import MenuItem
from ..utils.validators import parse_money, require_text

DEFAULT_IMAGE = "https://images.unsplash.com/photo-1504630083234-14187a9df0f5"


def _parse_category(category):
    value = str(category or "").strip().lower()
    if value not in MENU_CATEGORIES:
        raise ValidationError(
            f"Invalid category '{category}'. Must be one of: {', '.join(MENU_CATEGORIES)}"
        )
    return value


class MenuService:
    def __init__(self, store):
        self.store = store

    def get_menu_items(self, category=None):
        if category:
            return self.store.menu_items.list(category=_parse_category(category))
        return self.store.menu_items.list()

    def get(self, item_id):
        item = self.store.menu_items.get(item_id)
        if item is None:
            raise NotFound(f"Menu item {item_id} not found")
        return item

    def create_menu_item(self, name, price, category, description=None, image=None):
        item = MenuItem(
            name=require_text(name, "name"),
            description=(description or "").strip(),
            price=parse_money(price, "price"),
            category=_parse_category(category),
            image=image or DEFAULT_IMAGE,
        )
        self.store.menu_items.add(item)
        self.store.commit()
        return item

    def update_menu_item(self, item_id, changes):
        item = self.get(item_id)
        if "name" in changes:
            item.name = require_text(changes["name"], "name")
        if "description" in changes:
            item.description = (changes["description"] or "").strip()
        if "price" in changes:
            item.price = parse_money(changes["price"], "price")
        if "category" in changes:
            item.category = _parse_category(changes["category"])
        if "image" in changes:
            item.image = changes["image"] or DEFAULT_IMAGE
        self.store.commit()
        return item

    def delete_menu_item(self, item_id):
        item = self.get(item_id)
        self.store.menu_items.delete(item)
        self.store.commit()
