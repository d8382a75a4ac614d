"""Inventory-full resolution."""

from __future__ import annotations

from collections.abc import Sequence

from virtual_player.core.constants import ITEM_VALUES
from virtual_player.models.player import Item


def item_value(item: Item) -> int:
    """Strategic value of an item; unknown types are worth 0."""
    return ITEM_VALUES.get(item.type, 0)


class InventoryReplacementPolicy:
    """Decide which carried item, if any, makes room for a new one."""

    def choose_replacement(self, new_item: Item, inventory: Sequence[Item]) -> Item | None:
        """The lowest-value carried item, if it is worth less than ``new_item``.

        The first item wins among equal values. ``None`` means the new item
        is left where it lies.
        """
        if not inventory:
            return None
        weakest = min(inventory, key=item_value)
        if item_value(weakest) < item_value(new_item):
            return weakest
        return None


__all__ = [
    "item_value",
    "InventoryReplacementPolicy",
]
