import logging

from langsmith import traceable

logger = logging.getLogger("cenit.audit")


@traceable(name="auth.login", tags=["auth", "log"])
def login_logger(user_id: str, ok: bool, role: str | None = None):
    logger.info("login %s user=%s role=%s", "ok" if ok else "rejected", user_id, role)
    return {"user_id": user_id, "ok": ok, "role": role}


@traceable(name="orders.status", tags=["orders", "log"])
def status_logger(order_id: str, old: str, new: str):
    logger.info("order %s: %s -> %s", order_id, old, new)
    return {"order_id": order_id, "from": old, "to": new}


@traceable(name="inventory.waste", tags=["inventory", "log"])
def waste_logger(item_id: str, amount: float, value: float):
    logger.info("waste logged item=%s amount=%s value=%.2f", item_id, amount, value)
    return {"item_id": item_id, "amount": amount, "value": value}
