"""Inventory table, waste logging and stock analysis."""

import pytest

from managers import inventory_manager
from utils import db
from utils.errors import NotFound, ValidationFailed


class TestWaste:
    def test_kg_item_loses_half_unit(self):
        # Wagyu: 4.5kg, min 5, cost 1200
        item = inventory_manager.log_waste("1")
        assert item.quantity == 4.0
        assert item.status == "Low"
        assert db.get_waste_cost() == 14500 + 600

    def test_unit_item_loses_one(self):
        # House Red Wine: 2 cases, min 3
        item = inventory_manager.log_waste("4")
        assert item.quantity == 1
        assert item.status == "Critical"
        assert db.get_waste_cost() == 14500 + 15000

    def test_quantity_floors_at_zero(self):
        for _ in range(5):
            item = inventory_manager.log_waste("4")
        assert item.quantity == 0

    def test_healthy_stock_keeps_status(self):
        item = inventory_manager.log_waste("2")
        assert item.quantity == 11
        assert item.status == "Good"

    def test_waste_persists(self):
        inventory_manager.log_waste("5")
        stored = next(i for i in db.get_inventory() if i.id == "5")
        assert stored.quantity == 24.5

    def test_unknown_item(self):
        with pytest.raises(NotFound):
            inventory_manager.log_waste("missing")


@pytest.mark.parametrize("qty,status", [(1.9, "Critical"), (2.0, "Low"), (3.9, "Low"), (4.0, "Good")])
def test_stock_status_thresholds(qty, status):
    assert inventory_manager.stock_status(qty, 4, "Good") == status


class TestFilters:
    def test_low_and_critical(self):
        assert [i.id for i in inventory_manager.list_items("Low")] == ["1", "3", "6"]
        assert [i.id for i in inventory_manager.list_items("Critical")] == ["4"]

    def test_category(self):
        assert [i.name for i in inventory_manager.list_items("Dry Goods")] == ["Truffle Oil", "00 Flour"]

    def test_search(self):
        assert [i.id for i in inventory_manager.list_items(search="salmon")] == ["6"]


class TestEditing:
    def test_add_item_defaults(self):
        item = inventory_manager.add_item("Paneer", "Dairy", quantity=3, unit="kg", min_threshold=2,
                                          cost_per_unit=900)
        assert item.status == "Good"
        assert len(item.expiry_date) == 10
        assert db.get_inventory()[-1].name == "Paneer"

    def test_add_item_requires_name_and_category(self):
        with pytest.raises(ValidationFailed):
            inventory_manager.add_item("Paneer", "")

    def test_delete_item(self):
        inventory_manager.delete_item("2")
        assert "2" not in [i.id for i in db.get_inventory()]

    def test_add_category(self):
        cats = inventory_manager.add_category("Spices")
        assert cats[-1] == "Spices"
        assert db.get_inventory_categories()[-1] == "Spices"

    @pytest.mark.parametrize("name", ["", "Meat"])
    def test_add_category_rejects_blank_and_duplicate(self, name):
        with pytest.raises(ValidationFailed):
            inventory_manager.add_category(name)


def test_summary():
    s = inventory_manager.summary()
    assert s["total_value"] == pytest.approx(
        4.5 * 1200 + 12 * 4500 + 8 * 1200 + 2 * 15000 + 25 * 250 + 3.2 * 2800
    )
    assert s["low_stock_count"] == 4
    assert s["waste_cost"] == 14500


def test_stock_insight_context(model):
    inventory_manager.stock_insight()
    prompt = model.calls[0]["json"]["contents"][0]["parts"][0]["text"]
    assert "Wagyu Beef A5: 4.5kg (Low), Truffle Oil: 12btl (Good)" in prompt
    assert model.calls[0]["json"]["generationConfig"] == {"thinkingConfig": {"thinkingBudget": 0}}
