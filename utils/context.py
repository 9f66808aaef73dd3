# utils/context.py
from typing import List

from models import Customer, Employee, InventoryItem, Order


def _num(v: float) -> str:
    return str(int(v)) if float(v).is_integer() else str(v)


def format_inventory_context(items: List[InventoryItem]) -> str:
    return ", ".join(f"{i.name}: {_num(i.quantity)}{i.unit} ({i.status})" for i in items)


def format_staffing_context(employees: List[Employee]) -> str:
    return ", ".join(f"{e.name} ({e.role}): {_num(e.weekly_hours)}hrs/week" for e in employees)


def format_customer_profile(customer: Customer) -> str:
    return f"Name: {customer.name}, Likes: {', '.join(customer.preferences)}"


def format_order_items(order: Order) -> str:
    return ", ".join(line.name for line in order.items)
