"""Action plans returned by the decision policy.

An action plan says what to do; the turn executor does it. Every plan
exposes ``kind``, ``ends_now`` (before any battle) and ``block_key``, the
key under which the executor remembers a failed attempt so the policy
can move on to something else for the rest of the turn.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from virtual_player.core.constants import DEFAULT_REQUIRED_OPEN_SIDES
from virtual_player.models.enums import ActionKind
from virtual_player.models.field import Position


PLACE_TILE_BLOCK_KEY = "place_tile"


def move_block_key(target: Position) -> str:
    return f"move:{target.key}"


def pickup_block_key(position: Position) -> str:
    return f"pick:{position.key}"


@dataclass(frozen=True)
class HealAction:
    """Move towards a healing fountain.

    Attributes:
        target: Cell to move to.
        from_position: Where the player stands.
        direct: The target is the fountain itself, not a step towards it.
    """

    target: Position
    from_position: Position
    direct: bool = True

    kind: ClassVar[ActionKind] = ActionKind.HEAL
    ends_now: ClassVar[bool] = True

    @property
    def block_key(self) -> str:
        return move_block_key(self.target)


@dataclass(frozen=True)
class PlaceTileAction:
    """Pick, orient and place a tile, then step onto it."""

    target: Position
    from_position: Position
    required_open_sides: int = DEFAULT_REQUIRED_OPEN_SIDES

    kind: ClassVar[ActionKind] = ActionKind.PLACE_TILE
    ends_now: ClassVar[bool] = False

    @property
    def block_key(self) -> str:
        return PLACE_TILE_BLOCK_KEY


@dataclass(frozen=True)
class PickupAction:
    """Pick up whatever lies at the player's position."""

    position: Position

    kind: ClassVar[ActionKind] = ActionKind.PICK_ITEM
    ends_now: ClassVar[bool] = False

    @property
    def target(self) -> Position:
        return self.position

    @property
    def block_key(self) -> str:
        return pickup_block_key(self.position)


@dataclass(frozen=True)
class MoveAction:
    """Move to a reachable cell for a teleport, a fountain, an item or exploration."""

    kind: ActionKind
    target: Position
    from_position: Position
    ends_now: bool = False

    @property
    def block_key(self) -> str:
        return move_block_key(self.target)


Action = HealAction | PlaceTileAction | PickupAction | MoveAction


__all__ = [
    "PLACE_TILE_BLOCK_KEY",
    "move_block_key",
    "pickup_block_key",
    "HealAction",
    "PlaceTileAction",
    "PickupAction",
    "MoveAction",
    "Action",
]
