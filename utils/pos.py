# utils/pos.py
from typing import List, Optional
from datetime import datetime, timezone
import time

from models import CartItem, CustomerDetails, MenuItem, Order, OrderLine
from utils import db
from utils.config import TAX_RATE
from utils.errors import ValidationFailed, NotFound


def add_to_cart(cart: List[CartItem], item: MenuItem) -> List[CartItem]:
    for line in cart:
        if line.id == item.id:
            line.qty += 1
            return cart
    cart.append(CartItem(**item.model_dump(), qty=1))
    return cart


def remove_from_cart(cart: List[CartItem], item_id: str) -> List[CartItem]:
    return [line for line in cart if line.id != item_id]


def update_qty(cart: List[CartItem], item_id: str, delta: int, *, floor: int = 1) -> List[CartItem]:
    """
    Shift a line's qty by ``delta``. Staff tills keep at least one of each line
    (floor=1); the customer view uses floor=0 and drops emptied lines.
    """
    if not any(line.id == item_id for line in cart):
        raise NotFound(f"item {item_id} is not in the cart")
    for line in cart:
        if line.id == item_id:
            line.qty = max(floor, line.qty + delta)
    return [line for line in cart if line.qty > 0]


def cart_total(cart: List[CartItem]) -> float:
    return float(sum(line.price * line.qty for line in cart))


def cart_count(cart: List[CartItem]) -> int:
    return sum(line.qty for line in cart)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def place_order(cart: List[CartItem], *, method: str, table: Optional[str] = None,
                customer: Optional[CustomerDetails] = None) -> Order:
    """Turn a cart into a pending order and append it to the orders collection."""
    if not cart:
        raise ValidationFailed("Cart is empty")
    if method == "Online" and (customer is None or not customer.name or not customer.phone or not customer.address):
        raise ValidationFailed("Name, phone and address are required for online orders")

    subtotal = cart_total(cart)
    tax = subtotal * TAX_RATE
    order = Order(
        id=f"ORD-{int(time.time() * 1000)}",
        items=[OrderLine(id=line.id, name=line.name, price=line.price, qty=line.qty) for line in cart],
        subtotal=subtotal,
        tax=tax,
        total=subtotal + tax,
        timestamp=_now_iso(),
        status="pending",
        method=method,
        customer_details=customer,
        table=table if method == "Dine-in" else None,
    )
    db.add_order(order)
    return order
