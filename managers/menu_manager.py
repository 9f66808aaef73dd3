# managers/menu_manager.py
from typing import List, Optional
import time

from models import MenuItem
from utils import db
from utils.errors import ValidationFailed, NotFound


def list_menu(category: str = "All") -> List[MenuItem]:
    items = db.get_menu()
    if category == "All":
        return items
    return [it for it in items if it.category == category]


def categories() -> List[str]:
    return ["All"] + db.get_menu_categories()


def find_item(item_id: str) -> MenuItem:
    item = next((it for it in db.get_menu() if it.id == item_id), None)
    if item is None:
        raise NotFound(f"menu item {item_id} not found")
    return item


def add_item(name: str, price: float, category: str = "Main", image: Optional[str] = None,
             description: Optional[str] = None) -> MenuItem:
    if not name or not price:
        raise ValidationFailed("Name and price are required")
    item = MenuItem(
        id=str(int(time.time() * 1000)),
        name=name,
        price=float(price),
        category=category,
        image=image,
        description=description,
    )
    items = db.get_menu()
    items.append(item)
    db.save_menu(items)
    return item


def delete_item(item_id: str) -> None:
    items = db.get_menu()
    kept = [it for it in items if it.id != item_id]
    if len(kept) == len(items):
        raise NotFound(f"menu item {item_id} not found")
    db.save_menu(kept)
