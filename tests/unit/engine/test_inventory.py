"""Tests for inventory-full resolution."""

from __future__ import annotations

from uuid import uuid4

import pytest

from virtual_player.engine.inventory import InventoryReplacementPolicy, item_value
from virtual_player.models import Item


def _item(item_type: str) -> Item:
    return Item(item_id=uuid4(), type=item_type, name=item_type.title())


@pytest.fixture
def policy() -> InventoryReplacementPolicy:
    return InventoryReplacementPolicy()


class TestItemValue:
    @pytest.mark.parametrize(
        ("item_type", "value"),
        [("axe", 3), ("sword", 2), ("dagger", 1), ("key", 0)],
    )
    def test_values(self, item_type: str, value: int) -> None:
        assert item_value(_item(item_type)) == value


class TestChooseReplacement:
    """Tests for InventoryReplacementPolicy.choose_replacement."""

    def test_replaces_weakest_item(self, policy: InventoryReplacementPolicy) -> None:
        """Test a sword replaces the dagger, the cheapest item carried."""
        dagger = _item("dagger")

        assert policy.choose_replacement(_item("sword"), [dagger, _item("axe")]) is dagger

    def test_keeps_inventory_when_new_item_is_weaker(
        self,
        policy: InventoryReplacementPolicy,
    ) -> None:
        assert policy.choose_replacement(_item("dagger"), [_item("sword")]) is None

    def test_equal_value_is_not_replaced(self, policy: InventoryReplacementPolicy) -> None:
        assert policy.choose_replacement(_item("sword"), [_item("sword"), _item("axe")]) is None

    def test_first_weakest_wins(self, policy: InventoryReplacementPolicy) -> None:
        first, second = _item("dagger"), _item("dagger")

        assert policy.choose_replacement(_item("axe"), [_item("sword"), first, second]) is first

    def test_unknown_items_are_replaced_first(self, policy: InventoryReplacementPolicy) -> None:
        key = _item("key")

        assert policy.choose_replacement(_item("dagger"), [_item("sword"), key]) is key

    def test_empty_inventory(self, policy: InventoryReplacementPolicy) -> None:
        assert policy.choose_replacement(_item("axe"), []) is None
