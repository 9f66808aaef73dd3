# managers/inventory_manager.py
from datetime import date
from typing import Any, Dict, List
import time

from app.logging_hooks import waste_logger
from models import InventoryItem
from utils import db, llm
from utils.context import format_inventory_context
from utils.errors import ValidationFailed, NotFound


def filter_items(items: List[InventoryItem], flt: str = "All") -> List[InventoryItem]:
    """``flt`` is All, Low, Critical, or a category name."""
    if flt == "All":
        return items
    if flt in ("Low", "Critical"):
        return [it for it in items if it.status == flt]
    return [it for it in items if it.category == flt]


def list_items(flt: str = "All", search: str = "") -> List[InventoryItem]:
    items = filter_items(db.get_inventory(), flt)
    if search:
        s = search.lower()
        items = [it for it in items if s in it.name.lower()]
    return items


def summary() -> Dict[str, Any]:
    items = db.get_inventory()
    return {
        "total_value": sum(it.quantity * it.cost_per_unit for it in items),
        "low_stock_count": len([it for it in items if it.status in ("Low", "Critical")]),
        "waste_cost": db.get_waste_cost(),
        "item_count": len(items),
    }


def add_item(name: str, category: str, quantity: float = 0, unit: str = "kg",
             min_threshold: float = 5, cost_per_unit: float = 0) -> InventoryItem:
    if not name or not category:
        raise ValidationFailed("Name and category are required")
    item = InventoryItem(
        id=str(int(time.time() * 1000)),
        name=name,
        category=category,
        quantity=float(quantity),
        unit=unit or "kg",
        min_threshold=float(min_threshold),
        cost_per_unit=float(cost_per_unit),
        expiry_date=date.today().isoformat(),
        status="Good",
    )
    items = db.get_inventory()
    items.append(item)
    db.save_inventory(items)
    return item


def delete_item(item_id: str) -> None:
    items = db.get_inventory()
    kept = [it for it in items if it.id != item_id]
    if len(kept) == len(items):
        raise NotFound(f"inventory item {item_id} not found")
    db.save_inventory(kept)


def categories() -> List[str]:
    return db.get_inventory_categories()


def add_category(name: str) -> List[str]:
    cats = db.get_inventory_categories()
    if not name:
        raise ValidationFailed("Category name is required")
    if name in cats:
        raise ValidationFailed(f"Category {name!r} already exists")
    cats.append(name)
    db.save_inventory_categories(cats)
    return cats


def stock_status(quantity: float, min_threshold: float, current: str) -> str:
    if quantity < min_threshold / 2:
        return "Critical"
    if quantity < min_threshold:
        return "Low"
    # recovered stock keeps its previous label until someone edits it
    return current


def log_waste(item_id: str) -> InventoryItem:
    """Write off one unit (half a kilo for kg stock) and book its cost as waste."""
    items = db.get_inventory()
    target = next((it for it in items if it.id == item_id), None)
    if target is None:
        raise NotFound(f"inventory item {item_id} not found")

    amount = 0.5 if target.unit == "kg" else 1
    value = amount * target.cost_per_unit
    target.quantity = max(0.0, target.quantity - amount)
    target.status = stock_status(target.quantity, target.min_threshold, target.status)

    db.save_inventory(items)
    db.save_waste_cost(db.get_waste_cost() + value)
    waste_logger(item_id, amount, value)
    return target


def stock_insight() -> str:
    return llm.generate_inventory_insight(format_inventory_context(db.get_inventory()))
