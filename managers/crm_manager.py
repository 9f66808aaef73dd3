# managers/crm_manager.py
from typing import List

from models import Customer
from utils import db, llm
from utils.context import format_customer_profile
from utils.errors import NotFound


def list_customers() -> List[Customer]:
    return db.get_customers()


def get_customer(customer_id: str) -> Customer:
    customer = next((c for c in db.get_customers() if c.id == customer_id), None)
    if customer is None:
        raise NotFound(f"customer {customer_id} not found")
    return customer


def marketing_draft(customer_id: str) -> str:
    customer = get_customer(customer_id)
    return llm.generate_marketing_campaign(customer.segment, format_customer_profile(customer))
