"""Player models: inventory items and player state."""

from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator


class Item(BaseModel):
    """An item in a player's inventory or offered by the engine.

    Attributes:
        item_id: Engine identifier.
        type: Item type, e.g. ``sword`` or ``fireball``.
        name: Display name.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    item_id: UUID
    type: str
    name: str = ""


class Consumable(Item):
    """A single-use item that can be spent to swing a battle."""


class PlayerState(BaseModel):
    """Health and inventory of a player.

    Attributes:
        player_id: Engine identifier.
        hp: Current hit points.
        max_hp: Maximum hit points.
        inventory: Items carried, in engine order.
        is_defeated: Stunned after losing a battle; can only end the turn.

    Example:
        >>> player = PlayerState(player_id=uuid4(), hp=1, max_hp=3)
        >>> player.needs_healing(threshold=1)
        True
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    player_id: UUID
    hp: int = Field(ge=0)
    max_hp: int = Field(gt=0)
    inventory: tuple[Item, ...] = ()
    is_defeated: bool = False

    @model_validator(mode="after")
    def validate_hp(self) -> "PlayerState":
        """Ensure current HP does not exceed maximum HP."""
        if self.hp > self.max_hp:
            msg = f"hp ({self.hp}) cannot exceed max_hp ({self.max_hp})"
            raise ValueError(msg)
        return self

    @computed_field(description="Fraction of hit points remaining")
    @property
    def hp_ratio(self) -> float:
        return self.hp / self.max_hp

    @property
    def is_wounded(self) -> bool:
        return self.hp < self.max_hp

    def needs_healing(self, threshold: int) -> bool:
        """HP is at or below the threshold and below maximum."""
        return self.hp <= threshold and self.is_wounded


__all__ = [
    "Item",
    "Consumable",
    "PlayerState",
]
