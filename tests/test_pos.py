"""Cart arithmetic and order placement."""

import pytest

from models import CustomerDetails, MenuItem
from utils import db, pos
from utils.errors import NotFound, ValidationFailed

MOMO = MenuItem(id="1", name="Chicken Momo", price=250, category="Starter")
TEA = MenuItem(id="6", name="Milk Tea", price=40, category="Drink")


def _cart():
    cart = pos.add_to_cart([], MOMO)
    cart = pos.add_to_cart(cart, TEA)
    return pos.add_to_cart(cart, MOMO)


def test_add_increments_existing_line():
    cart = _cart()
    assert [(c.id, c.qty) for c in cart] == [("1", 2), ("6", 1)]
    assert pos.cart_total(cart) == 540
    assert pos.cart_count(cart) == 3


def test_staff_qty_never_drops_below_one():
    cart = pos.update_qty(_cart(), "6", -5)
    assert [(c.id, c.qty) for c in cart] == [("1", 2), ("6", 1)]


def test_customer_qty_zero_removes_line():
    cart = pos.update_qty(_cart(), "6", -1, floor=0)
    assert [c.id for c in cart] == ["1"]


def test_update_unknown_line():
    with pytest.raises(NotFound):
        pos.update_qty(_cart(), "99", 1)


def test_remove_line():
    assert [c.id for c in pos.remove_from_cart(_cart(), "1")] == ["6"]


def test_dine_in_order_totals_and_persistence():
    order = pos.place_order(_cart(), method="Dine-in", table="5")

    assert order.id.startswith("ORD-")
    assert order.subtotal == 540
    assert order.tax == pytest.approx(70.2)
    assert order.total == pytest.approx(610.2)
    assert order.status == "pending"
    assert order.table == "5"
    assert [o.id for o in db.get_orders()] == [order.id]


def test_online_order_keeps_customer_and_drops_table():
    details = CustomerDetails(name="Maya", phone="9841001234", address="Thamel, Kathmandu")
    order = pos.place_order(_cart(), method="Online", table="5", customer=details)
    assert order.table is None
    assert order.customer_details.address == "Thamel, Kathmandu"


def test_online_order_needs_details():
    with pytest.raises(ValidationFailed):
        pos.place_order(_cart(), method="Online", customer=CustomerDetails(name="Maya"))


def test_empty_cart_rejected():
    with pytest.raises(ValidationFailed):
        pos.place_order([], method="Dine-in", table="1")
