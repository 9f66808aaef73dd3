# utils/db.py
import copy
import json
import logging
from typing import Any, Optional, Union, Dict, List

import redis
from pydantic import ValidationError

from models import (
    AuthUser, MenuItem, Order, InventoryItem, Booking, Customer, Employee, Shift,
    users_adapter, menu_adapter, orders_adapter, inventory_adapter,
    bookings_adapter, customers_adapter, employees_adapter, shifts_adapter,
)
from state import SessionModel, from_stored, to_stored
from utils.config import REDIS_URL, STORE_PREFIX
from utils.errors import StoreError
from utils.seed import SEEDS

logger = logging.getLogger(__name__)

# 🔹 Create a single Redis client, reusable everywhere
_redis: redis.Redis = redis.Redis.from_url(REDIS_URL, decode_responses=False)


def _key(key: str) -> str:
    return f"{STORE_PREFIX}{key}"


def _decode(raw: Union[bytes, bytearray, memoryview, str]) -> str:
    if isinstance(raw, (bytes, bytearray, memoryview)):
        return bytes(raw).decode("utf-8")
    return str(raw)


def load(key: str, initial: Any) -> Any:
    """Return the stored value for ``key``, or ``initial`` if nothing was ever written."""
    try:
        raw = _redis.get(_key(key))
    except redis.RedisError as e:
        raise StoreError(f"load {key!r} failed: {e}") from e
    if raw is None:
        return copy.deepcopy(initial)
    try:
        return json.loads(_decode(raw))
    except ValueError:  # includes UnicodeDecodeError
        logger.warning("stored value under %r is not valid JSON; using initial data", key)
        return copy.deepcopy(initial)


def save(key: str, data: Any) -> None:
    try:
        _redis.set(_key(key), json.dumps(data))
    except redis.RedisError as e:
        raise StoreError(f"save {key!r} failed: {e}") from e


def ping() -> bool:
    try:
        return bool(_redis.ping())
    except redis.RedisError:
        return False


# ---- collections -------------------------------------------
def _load_list(key: str, adapter) -> list:
    try:
        return adapter.validate_python(load(key, SEEDS[key]))
    except ValidationError:
        logger.warning("stored value under %r does not match its records; using initial data", key)
        return adapter.validate_python(copy.deepcopy(SEEDS[key]))


def _save_list(key: str, items: list) -> None:
    save(key, [it.model_dump() for it in items])


def get_users() -> List[AuthUser]:
    return _load_list("users", users_adapter)


def save_users(users: List[AuthUser]) -> None:
    _save_list("users", users)


def add_user(user: AuthUser) -> None:
    users = get_users()
    users.append(user)
    save_users(users)


def get_menu() -> List[MenuItem]:
    return _load_list("menu", menu_adapter)


def save_menu(items: List[MenuItem]) -> None:
    _save_list("menu", items)


def get_menu_categories() -> List[str]:
    return list(load("menu_categories", SEEDS["menu_categories"]))


def get_orders() -> List[Order]:
    return _load_list("orders", orders_adapter)


def save_orders(orders: List[Order]) -> None:
    _save_list("orders", orders)


def add_order(order: Order) -> None:
    orders = get_orders()
    orders.append(order)
    save_orders(orders)


def get_inventory() -> List[InventoryItem]:
    return _load_list("inventory", inventory_adapter)


def save_inventory(items: List[InventoryItem]) -> None:
    _save_list("inventory", items)


def get_inventory_categories() -> List[str]:
    return list(load("inventory_categories", SEEDS["inventory_categories"]))


def save_inventory_categories(categories: List[str]) -> None:
    save("inventory_categories", categories)


def get_waste_cost() -> float:
    return float(load("waste_cost", SEEDS["waste_cost"]))


def save_waste_cost(value: float) -> None:
    save("waste_cost", value)


def get_bookings() -> List[Booking]:
    return _load_list("bookings", bookings_adapter)


def save_bookings(bookings: List[Booking]) -> None:
    _save_list("bookings", bookings)


def get_customers() -> List[Customer]:
    return _load_list("customers", customers_adapter)


def save_customers(customers: List[Customer]) -> None:
    _save_list("customers", customers)


def get_employees() -> List[Employee]:
    return _load_list("employees", employees_adapter)


def save_employees(employees: List[Employee]) -> None:
    _save_list("employees", employees)


def get_shifts() -> List[Shift]:
    return _load_list("shifts", shifts_adapter)


def save_shifts(shifts: List[Shift]) -> None:
    _save_list("shifts", shifts)


def export_all() -> Dict[str, Any]:
    """Everything a backup needs, admin credentials included."""
    return {
        "credentials": [u.model_dump() for u in get_users()],
        "menu": [m.model_dump() for m in get_menu()],
        "inventory": [i.model_dump() for i in get_inventory()],
        "bookings": [b.model_dump() for b in get_bookings()],
        "customers": [c.model_dump() for c in get_customers()],
        "staff": [e.model_dump() for e in get_employees()],
        "shifts": [s.model_dump() for s in get_shifts()],
        "orders": [o.model_dump() for o in get_orders()],
    }


def reset() -> None:
    for key, value in SEEDS.items():
        save(key, value)


# ---- sessions ----------------------------------------------
def save_session(session: SessionModel) -> None:
    save(f"session:{session.session_id}", to_stored(session))


def load_session(session_id: str) -> Optional[SessionModel]:
    raw: Optional[Dict[str, Any]] = load(f"session:{session_id}", None)
    return from_stored(raw)


def delete_session(session_id: str) -> None:
    try:
        _redis.delete(_key(f"session:{session_id}"))
    except redis.RedisError as e:
        raise StoreError(f"delete session failed: {e}") from e
