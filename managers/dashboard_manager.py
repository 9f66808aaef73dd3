# managers/dashboard_manager.py
from typing import Any, Dict

from utils import db, llm
from utils.config import DASHBOARD_CONTEXT
from utils.seed import SALES_BY_HOUR


def overview() -> Dict[str, Any]:
    sales = [dict(row) for row in SALES_BY_HOUR]
    orders = db.get_orders()
    return {
        "sales_by_hour": sales,
        "revenue": sum(r["sales"] for r in sales),
        "visitors": sum(r["visitors"] for r in sales),
        "open_orders": len([o for o in orders if o.status in ("pending", "preparing", "ready")]),
        "bookings_today": len(db.get_bookings()),
    }


def insight() -> str:
    return llm.generate_insights(DASHBOARD_CONTEXT)
