# models.py
from __future__ import annotations
from typing import List, Optional, Literal

from pydantic import BaseModel, Field
from pydantic.type_adapter import TypeAdapter

UserRole = Literal["ADMIN", "WAITER", "CUSTOMER"]
MenuCategory = Literal["Starter", "Main", "Dessert", "Drink"]
OrderStatus = Literal["pending", "preparing", "ready", "out_for_delivery", "delivered", "cancelled"]
OrderMethod = Literal["Dine-in", "Online", "Takeaway"]
StockStatus = Literal["Good", "Low", "Critical"]
BookingStatus = Literal["confirmed", "pending", "seated", "completed", "cancelled"]
Segment = Literal["VIP", "Regular", "New", "At Risk"]
EmployeeRole = Literal["Chef", "Server", "Bartender", "Host", "Manager"]
EmployeeStatus = Literal["Working", "Off", "Break"]


class AuthUser(BaseModel):
    id: str
    password: str
    role: UserRole
    name: str


class MenuItem(BaseModel):
    id: str
    name: str
    price: float
    category: MenuCategory
    image: Optional[str] = None
    description: Optional[str] = None


class CartItem(MenuItem):
    qty: int = Field(default=1, ge=0)


class OrderLine(BaseModel):
    id: str
    name: str
    price: float
    qty: int


class CustomerDetails(BaseModel):
    name: str = ""
    phone: str = ""
    address: str = ""


class Order(BaseModel):
    id: str
    items: List[OrderLine]
    subtotal: float
    tax: float
    total: float
    timestamp: str
    status: OrderStatus = "pending"
    method: OrderMethod
    customer_details: Optional[CustomerDetails] = None
    table: Optional[str] = None


class InventoryItem(BaseModel):
    id: str
    name: str
    category: str
    quantity: float
    unit: str
    min_threshold: float
    cost_per_unit: float
    expiry_date: str
    status: StockStatus = "Good"


class Booking(BaseModel):
    id: str
    customer_name: str
    time: str
    guests: int
    table: Optional[str] = None
    status: BookingStatus = "pending"
    tags: List[str] = Field(default_factory=list)


class Customer(BaseModel):
    id: str
    name: str
    email: str
    phone: str
    visits: int
    total_spent: float
    last_visit: str
    preferences: List[str] = Field(default_factory=list)
    segment: Segment


class Employee(BaseModel):
    id: str
    name: str
    role: EmployeeRole
    rate: float
    status: EmployeeStatus
    weekly_hours: float
    email: str


class Shift(BaseModel):
    id: str
    employee_id: str
    day: str
    start_time: str
    end_time: str
    area: str


users_adapter = TypeAdapter(List[AuthUser])
menu_adapter = TypeAdapter(List[MenuItem])
orders_adapter = TypeAdapter(List[Order])
inventory_adapter = TypeAdapter(List[InventoryItem])
bookings_adapter = TypeAdapter(List[Booking])
customers_adapter = TypeAdapter(List[Customer])
employees_adapter = TypeAdapter(List[Employee])
shifts_adapter = TypeAdapter(List[Shift])
