# managers/booking_manager.py
from typing import List, Optional, get_args
import time

from models import Booking, BookingStatus
from utils import db
from utils.errors import ValidationFailed, NotFound


def list_bookings(search: str = "") -> List[Booking]:
    bookings = db.get_bookings()
    if not search:
        return bookings
    s = search.lower()
    return [
        b for b in bookings
        if s in b.customer_name.lower()
        or s in (b.table or "").lower()
        or any(s in t.lower() for t in b.tags)
    ]


def create_booking(customer_name: str, time_slot: str, guests: int,
                   table: Optional[str] = None, tags: Optional[List[str]] = None,
                   status: str = "pending") -> Booking:
    if not customer_name or not time_slot or guests < 1:
        raise ValidationFailed("Name, time and at least one guest are required")
    booking = Booking(
        id=str(int(time.time() * 1000)),
        customer_name=customer_name,
        time=time_slot,
        guests=guests,
        table=table or None,
        status=status,
        tags=tags or [],
    )
    bookings = db.get_bookings()
    bookings.append(booking)
    db.save_bookings(bookings)
    return booking


def set_status(booking_id: str, status: str) -> Booking:
    if status not in get_args(BookingStatus):
        raise ValidationFailed(f"unknown status {status!r}")
    bookings = db.get_bookings()
    target = next((b for b in bookings if b.id == booking_id), None)
    if target is None:
        raise NotFound(f"booking {booking_id} not found")
    target.status = status
    db.save_bookings(bookings)
    return target


def auto_allocate() -> List[Booking]:
    """Give every unseated booking a table and confirm pending ones."""
    bookings = db.get_bookings()
    for i, b in enumerate(bookings):
        b.table = b.table or f"T{i + 10}"
        if b.status == "pending":
            b.status = "confirmed"
    db.save_bookings(bookings)
    return bookings
