# managers/checkout_manager.py
"""Per-session cart kept next to the session record, plus checkout."""
from typing import Any, Dict, Optional

from managers import menu_manager
from models import AuthUser, CustomerDetails, Order
from state import SessionModel
from utils import db, pos


def pack_cart(session: SessionModel) -> Dict[str, Any]:
    return {
        "items": [line.model_dump() for line in session.cart],
        "count": pos.cart_count(session.cart),
        "total": pos.cart_total(session.cart),
    }


def _qty_floor(user: AuthUser) -> int:
    return 0 if user.role == "CUSTOMER" else 1


def add(session: SessionModel, item_id: str) -> Dict[str, Any]:
    item = menu_manager.find_item(item_id)
    session.cart = pos.add_to_cart(session.cart, item)
    db.save_session(session)
    return pack_cart(session)


def change_qty(session: SessionModel, user: AuthUser, item_id: str, delta: int) -> Dict[str, Any]:
    session.cart = pos.update_qty(session.cart, item_id, delta, floor=_qty_floor(user))
    db.save_session(session)
    return pack_cart(session)


def remove(session: SessionModel, item_id: str) -> Dict[str, Any]:
    session.cart = pos.remove_from_cart(session.cart, item_id)
    db.save_session(session)
    return pack_cart(session)


def clear(session: SessionModel) -> None:
    session.cart = []
    db.save_session(session)


def checkout(session: SessionModel, user: AuthUser, *, table: Optional[str] = None,
             customer: Optional[CustomerDetails] = None, method: Optional[str] = None) -> Order:
    """
    Customers always check out as Online with delivery details; staff tills
    default to Dine-in against a table number.
    """
    if user.role == "CUSTOMER":
        method = "Online"
    else:
        method = method or "Dine-in"
    order = pos.place_order(session.cart, method=method, table=table, customer=customer)
    clear(session)
    return order
