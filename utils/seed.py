# utils/seed.py
"""Initial contents for every collection, used when a key has never been written."""
from __future__ import annotations
from typing import Any, Dict, List

INITIAL_USERS: List[Dict[str, Any]] = [
    {"id": "admin", "password": "password", "role": "ADMIN", "name": "Administrator"},
]

INITIAL_MENU_ITEMS: List[Dict[str, Any]] = [
    {"id": "1", "name": "Chicken Momo", "price": 250, "category": "Starter"},
    {"id": "2", "name": "Buff Chowmein", "price": 200, "category": "Main"},
    {"id": "3", "name": "Thakali Set (Veg)", "price": 450, "category": "Main"},
    {"id": "4", "name": "Chicken Sekuwa", "price": 350, "category": "Starter"},
    {"id": "5", "name": "Sel Roti", "price": 50, "category": "Starter"},
    {"id": "6", "name": "Milk Tea", "price": 40, "category": "Drink"},
    {"id": "7", "name": "Gorkha Beer", "price": 650, "category": "Drink"},
    {"id": "8", "name": "Lassi", "price": 150, "category": "Drink"},
]

INITIAL_MENU_CATEGORIES: List[str] = ["Starter", "Main", "Dessert", "Drink"]

INITIAL_INVENTORY_CATEGORIES: List[str] = ["Produce", "Meat", "Dairy", "Dry Goods", "Beverage", "Supplies"]

INITIAL_INVENTORY: List[Dict[str, Any]] = [
    {"id": "1", "name": "Wagyu Beef A5", "category": "Meat", "quantity": 4.5, "unit": "kg",
     "min_threshold": 5, "cost_per_unit": 1200, "expiry_date": "2023-11-20", "status": "Low"},
    {"id": "2", "name": "Truffle Oil", "category": "Dry Goods", "quantity": 12, "unit": "btl",
     "min_threshold": 2, "cost_per_unit": 4500, "expiry_date": "2024-05-15", "status": "Good"},
    {"id": "3", "name": "San Marzano Tomatoes", "category": "Produce", "quantity": 8, "unit": "cans",
     "min_threshold": 10, "cost_per_unit": 1200, "expiry_date": "2025-01-01", "status": "Low"},
    {"id": "4", "name": "House Red Wine", "category": "Beverage", "quantity": 2, "unit": "cases",
     "min_threshold": 3, "cost_per_unit": 15000, "expiry_date": "2024-12-31", "status": "Critical"},
    {"id": "5", "name": "00 Flour", "category": "Dry Goods", "quantity": 25, "unit": "kg",
     "min_threshold": 10, "cost_per_unit": 250, "expiry_date": "2024-03-20", "status": "Good"},
    {"id": "6", "name": "Atlantic Salmon", "category": "Meat", "quantity": 3.2, "unit": "kg",
     "min_threshold": 4, "cost_per_unit": 2800, "expiry_date": "2023-11-15", "status": "Low"},
]

INITIAL_BOOKINGS: List[Dict[str, Any]] = [
    {"id": "1", "customer_name": "Alice Johnson", "time": "19:00", "guests": 2, "status": "confirmed",
     "tags": ["Anniversary"]},
    {"id": "2", "customer_name": "Michael Chen", "time": "19:15", "guests": 4, "status": "seated",
     "tags": ["VIP", "Regular"], "table": "T4"},
    {"id": "3", "customer_name": "Sarah Smith", "time": "19:30", "guests": 6, "status": "pending",
     "tags": ["Allergy: Nuts"]},
    {"id": "4", "customer_name": "James Wilson", "time": "20:00", "guests": 2, "status": "confirmed", "tags": []},
    {"id": "5", "customer_name": "Emma Davis", "time": "20:15", "guests": 3, "status": "confirmed",
     "tags": ["Outdoor"]},
]

INITIAL_CUSTOMERS: List[Dict[str, Any]] = [
    {"id": "1", "name": "Alice Johnson", "email": "alice@example.com", "phone": "+1 234 567 8900",
     "visits": 12, "total_spent": 14500, "last_visit": "2 days ago",
     "preferences": ["Window seat", "Red Wine"], "segment": "VIP"},
    {"id": "2", "name": "Michael Chen", "email": "michael@example.com", "phone": "+1 234 567 8901",
     "visits": 4, "total_spent": 3200, "last_visit": "1 week ago",
     "preferences": ["Quiet area"], "segment": "Regular"},
    {"id": "3", "name": "Sarah Smith", "email": "sarah@example.com", "phone": "+1 234 567 8902",
     "visits": 1, "total_spent": 850, "last_visit": "1 month ago",
     "preferences": ["Vegan"], "segment": "New"},
]

INITIAL_EMPLOYEES: List[Dict[str, Any]] = [
    {"id": "1", "name": "Ram Bahadur", "role": "Chef", "rate": 1200.0, "status": "Working",
     "weekly_hours": 42, "email": "ram@cenit.com"},
    {"id": "2", "name": "Sita Sharma", "role": "Manager", "rate": 1500.0, "status": "Working",
     "weekly_hours": 40, "email": "sita@cenit.com"},
    {"id": "3", "name": "Rohan Gupta", "role": "Server", "rate": 600.0, "status": "Off",
     "weekly_hours": 32, "email": "rohan@cenit.com"},
    {"id": "4", "name": "Anita Sherpa", "role": "Host", "rate": 550.0, "status": "Break",
     "weekly_hours": 28, "email": "anita@cenit.com"},
    {"id": "5", "name": "Bikash Thapa", "role": "Bartender", "rate": 800.0, "status": "Off",
     "weekly_hours": 35, "email": "bikash@cenit.com"},
]

INITIAL_SHIFTS: List[Dict[str, Any]] = [
    {"id": "1", "employee_id": "1", "day": "Today", "start_time": "10:00", "end_time": "22:00", "area": "Kitchen"},
    {"id": "2", "employee_id": "2", "day": "Today", "start_time": "09:00", "end_time": "18:00", "area": "FOH"},
    {"id": "3", "employee_id": "4", "day": "Today", "start_time": "17:00", "end_time": "23:00", "area": "Reception"},
    {"id": "4", "employee_id": "3", "day": "Tomorrow", "start_time": "16:00", "end_time": "00:00", "area": "Dining"},
]

INITIAL_WASTE_COST = 14500

# Hourly sales curve shown on the dashboard chart
SALES_BY_HOUR: List[Dict[str, Any]] = [
    {"name": "12pm", "sales": 4000, "visitors": 24},
    {"name": "2pm", "sales": 3000, "visitors": 18},
    {"name": "4pm", "sales": 2000, "visitors": 12},
    {"name": "6pm", "sales": 12000, "visitors": 65},
    {"name": "8pm", "sales": 18000, "visitors": 85},
    {"name": "10pm", "sales": 14000, "visitors": 55},
    {"name": "12am", "sales": 6000, "visitors": 30},
]

# key -> seed value
SEEDS: Dict[str, Any] = {
    "users": INITIAL_USERS,
    "menu": INITIAL_MENU_ITEMS,
    "menu_categories": INITIAL_MENU_CATEGORIES,
    "inventory": INITIAL_INVENTORY,
    "inventory_categories": INITIAL_INVENTORY_CATEGORIES,
    "bookings": INITIAL_BOOKINGS,
    "customers": INITIAL_CUSTOMERS,
    "employees": INITIAL_EMPLOYEES,
    "shifts": INITIAL_SHIFTS,
    "orders": [],
    "waste_cost": INITIAL_WASTE_COST,
}
