# managers/ordering_manager.py
"""Kitchen display and online order board."""
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, get_args

from app.logging_hooks import status_logger
from models import Order, OrderStatus
from utils import db, llm
from utils.config import DELIVERY_ESTIMATE_PROMPT
from utils.context import format_order_items
from utils.errors import NotFound, ValidationFailed

LATE_MINUTES = 20
URGENT_MINUTES = 30

KITCHEN_STATUSES = ("pending", "preparing", "ready")

# next step for each status; delivery orders pass through out_for_delivery
_NEXT_ONLINE = {
    "pending": "preparing",
    "preparing": "ready",
    "ready": "out_for_delivery",
    "out_for_delivery": "delivered",
}
_NEXT_TABLE = {
    "pending": "preparing",
    "preparing": "ready",
    "ready": "delivered",
}

BOARD_COLUMNS = [
    ("incoming", "Incoming", ("pending",)),
    ("kitchen", "Kitchen", ("preparing",)),
    ("logistics", "Ready / Dispatch", ("ready", "out_for_delivery")),
    ("completed", "Completed", ("delivered",)),
]


def _parse_ts(ts: str) -> datetime:
    dt = datetime.fromisoformat(ts.replace("Z", "+00:00"))
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def elapsed_minutes(order: Order, now: Optional[datetime] = None) -> int:
    now = now or datetime.now(timezone.utc)
    return int((now - _parse_ts(order.timestamp)).total_seconds() // 60)


def _ticket(order: Order, now: datetime) -> Dict[str, Any]:
    elapsed = elapsed_minutes(order, now)
    return {
        "order": order.model_dump(),
        "label": f"Table {order.table}" if order.table else
                 (order.customer_details.name if order.customer_details and order.customer_details.name
                  else "Online Order"),
        "elapsed": elapsed,
        "late": elapsed > LATE_MINUTES,
        "urgent": elapsed > URGENT_MINUTES,
    }


def kitchen_queue(now: Optional[datetime] = None) -> List[Dict[str, Any]]:
    """Active tickets, preparing first, then pending, then ready; FIFO within each."""
    now = now or datetime.now(timezone.utc)
    active = sorted(
        (o for o in db.get_orders() if o.status in KITCHEN_STATUSES),
        key=lambda o: _parse_ts(o.timestamp),
    )
    ordered = [o for o in active if o.status == "preparing"]
    ordered += [o for o in active if o.status == "pending"]
    ordered += [o for o in active if o.status == "ready"]
    return [_ticket(o, now) for o in ordered]


def online_orders() -> List[Order]:
    orders = [o for o in db.get_orders() if o.method == "Online" and o.status != "cancelled"]
    return sorted(orders, key=lambda o: _parse_ts(o.timestamp), reverse=True)


def online_board() -> Dict[str, Any]:
    orders = online_orders()
    board = {}
    for key, label, statuses in BOARD_COLUMNS:
        board[key] = {
            "label": label,
            "orders": [o.model_dump() for o in orders if o.status in statuses],
        }
    return board


def get_order(order_id: str) -> Order:
    order = next((o for o in db.get_orders() if o.id == order_id), None)
    if order is None:
        raise NotFound(f"order {order_id} not found")
    return order


def update_status(order_id: str, status: str) -> Order:
    """Write the status as given; transitions are not checked."""
    if status not in get_args(OrderStatus):
        raise ValidationFailed(f"unknown status {status!r}")
    orders = db.get_orders()
    target = next((o for o in orders if o.id == order_id), None)
    if target is None:
        raise NotFound(f"order {order_id} not found")
    old = target.status
    target.status = status
    db.save_orders(orders)
    status_logger(order_id, old, status)
    return target


def next_status(order: Order) -> Optional[str]:
    steps = _NEXT_ONLINE if order.method == "Online" else _NEXT_TABLE
    return steps.get(order.status)


def advance(order_id: str) -> Order:
    order = get_order(order_id)
    nxt = next_status(order)
    if nxt is None:
        return order
    return update_status(order_id, nxt)


def estimate_delivery(order_id: str) -> str:
    order = get_order(order_id)
    address = (order.customer_details.address if order.customer_details else "") or "Unknown"
    prompt = DELIVERY_ESTIMATE_PROMPT.format(address=address, items=format_order_items(order))
    return llm.generate_insights(prompt)
