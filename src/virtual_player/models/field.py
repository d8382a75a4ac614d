"""Field models: positions, placed tiles, items on the field.

The field is a growing grid of placed tiles. Positions are integer pairs
with a canonical ``"x,y"`` string form that the game engine also uses as
the key of its item map.

Models:
    Position: A grid cell.
    FieldBounds: The rectangle currently covered by tiles.
    PlacedTile: A tile on the field with its features.
    ItemOnField: An item lying on a tile, possibly guarded.
    FieldState: Everything the policy needs to know about the field.
"""

from __future__ import annotations

from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from virtual_player.core.constants import TELEPORTATION_GATE


# =============================================================================
# Positions
# =============================================================================


class Position(BaseModel):
    """A cell on the field grid.

    Accepts either ``{"x": 1, "y": -2}`` or the canonical ``"1,-2"`` form.

    Example:
        >>> Position.parse("0,0").distance_to(Position(x=3, y=-2))
        5
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    x: int
    y: int

    @model_validator(mode="before")
    @classmethod
    def parse_canonical_string(cls, value: Any) -> Any:
        """Allow construction from the ``"x,y"`` string form."""
        if isinstance(value, str):
            parts = value.split(",")
            if len(parts) != 2:
                msg = f"Position must look like 'x,y', got {value!r}"
                raise ValueError(msg)
            return {"x": int(parts[0].strip()), "y": int(parts[1].strip())}
        if isinstance(value, (tuple, list)) and len(value) == 2:
            return {"x": value[0], "y": value[1]}
        return value

    @classmethod
    def parse(cls, value: str | tuple[int, int] | Position) -> Position:
        """Build a Position from any accepted representation."""
        if isinstance(value, Position):
            return value
        return cls.model_validate(value)

    @property
    def key(self) -> str:
        """Canonical string form, used as a map key."""
        return f"{self.x},{self.y}"

    def distance_to(self, other: Position) -> int:
        """Manhattan distance to another position."""
        return abs(self.x - other.x) + abs(self.y - other.y)

    def neighbors(self) -> tuple[Position, Position, Position, Position]:
        """The four side-adjacent cells: top, right, bottom, left."""
        return (
            Position(x=self.x, y=self.y - 1),
            Position(x=self.x + 1, y=self.y),
            Position(x=self.x, y=self.y + 1),
            Position(x=self.x - 1, y=self.y),
        )

    def __str__(self) -> str:
        return self.key


def distance(a: Position, b: Position) -> int:
    """Manhattan distance between two positions."""
    return a.distance_to(b)


class FieldBounds(BaseModel):
    """Rectangle covered by the tiles placed so far (inclusive)."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    min_x: int = 0
    max_x: int = 0
    min_y: int = 0
    max_y: int = 0

    def contains(self, position: Position) -> bool:
        """Whether the position lies inside the rectangle."""
        return self.min_x <= position.x <= self.max_x and self.min_y <= position.y <= self.max_y


# =============================================================================
# Tiles and Items
# =============================================================================


class PlacedTile(BaseModel):
    """A tile already placed on the field.

    Attributes:
        position: Where the tile lies.
        features: Feature names such as ``teleportation_gate``.
        orientation: Open sides as reported by the engine.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    position: Position
    features: tuple[str, ...] = ()
    orientation: str = ""


class ItemOnField(BaseModel):
    """An item lying on the field, usually guarded by a monster.

    Attributes:
        type: Item type, e.g. ``sword`` or ``chest``.
        name: Display name.
        item_id: Identifier once the engine has assigned one.
        locked: Needs a key before it can be picked up.
        guard_defeated: The guarding monster has been beaten.
        picked_up: Already taken by some player.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    type: str
    name: str = ""
    item_id: UUID | None = None
    locked: bool = False
    guard_defeated: bool = False
    picked_up: bool = False

    @property
    def is_claimable(self) -> bool:
        """Guard beaten, not locked and still lying on the field."""
        return self.guard_defeated and not self.locked and not self.picked_up


# =============================================================================
# Field
# =============================================================================


class FieldState(BaseModel):
    """Snapshot of the field as seen by the AI.

    Attributes:
        tiles: Tiles placed so far.
        items: Items keyed by canonical position string.
        healing_fountain_positions: Fountain cells, in engine order.
        bounds: Rectangle currently covered by tiles.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    tiles: tuple[PlacedTile, ...] = ()
    items: dict[str, ItemOnField] = Field(default_factory=dict)
    healing_fountain_positions: tuple[Position, ...] = ()
    bounds: FieldBounds = Field(default_factory=FieldBounds)

    @field_validator("items", mode="before")
    @classmethod
    def normalize_item_keys(cls, value: Any) -> Any:
        """Re-key items by canonical position string."""
        if isinstance(value, dict):
            return {Position.parse(k).key: v for k, v in value.items()}
        return value

    def tile_at(self, position: Position) -> PlacedTile | None:
        """The tile placed at a position, if any."""
        for tile in self.tiles:
            if tile.position == position:
                return tile
        return None

    def has_tile(self, position: Position) -> bool:
        return self.tile_at(position) is not None

    def item_at(self, position: Position) -> ItemOnField | None:
        return self.items.get(position.key)

    def has_claimable_item(self, position: Position) -> bool:
        item = self.item_at(position)
        return item is not None and item.is_claimable

    def is_teleportation_gate(self, position: Position) -> bool:
        tile = self.tile_at(position)
        return tile is not None and TELEPORTATION_GATE in tile.features

    def is_healing_fountain(self, position: Position) -> bool:
        return position in self.healing_fountain_positions


__all__ = [
    "Position",
    "distance",
    "FieldBounds",
    "PlacedTile",
    "ItemOnField",
    "FieldState",
]
