"""Game state models read from the game engine.

Models:
    GameInfo: Game identifier and lifecycle status.
    CurrentTurn: Whose turn it is.
    AvailablePlaces: Where the player may place a tile or move this turn.
    BattleOutcome: Result of a monster battle triggered by a move.
    GameSnapshot: Everything the policy looks at when choosing an action.
"""

from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from virtual_player.models.enums import BattleResult
from virtual_player.models.field import FieldState, Position
from virtual_player.models.player import Consumable, Item, PlayerState


FINISHED_GAME_STATUSES = frozenset({"ended", "finished"})


class GameInfo(BaseModel):
    """Game identifier and lifecycle status."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    game_id: UUID
    status: str = "started"

    @property
    def is_finished(self) -> bool:
        return self.status in FINISHED_GAME_STATUSES


class CurrentTurn(BaseModel):
    """The turn currently being played."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    turn_id: UUID
    player_id: UUID


class AvailablePlaces(BaseModel):
    """Options the engine offers the player for this turn.

    Attributes:
        place_tile: Cells where a new tile may be placed, in engine order.
        move_to: Cells reachable by movement this turn, in engine order.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    place_tile: tuple[Position, ...] = ()
    move_to: tuple[Position, ...] = ()

    def can_move_to(self, position: Position) -> bool:
        return position in self.move_to


class BattleOutcome(BaseModel):
    """Outcome of a battle triggered by entering a guarded tile.

    Attributes:
        battle_id: Identifier needed to finalize the battle.
        result: Win, draw or loss.
        monster_type: Type of the monster fought.
        total_damage: Damage dealt by the player without consumables.
        monster_hp: Monster hit points to beat.
        reward: Item guarded by the monster, if any.
        position: Where the battle took place.
        available_consumables: Consumables the player may spend, in order.
        reward_already_collected: The engine picked up the reward itself.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    battle_id: UUID
    result: BattleResult
    monster_type: str = "unknown"
    total_damage: int = Field(default=0, ge=0)
    monster_hp: int = Field(default=0, ge=0)
    reward: Item | None = None
    position: Position | None = None
    available_consumables: tuple[Consumable, ...] = ()
    reward_already_collected: bool = False


class GameSnapshot(BaseModel):
    """State fetched before every decision.

    Attributes:
        game: Game identifier and status.
        turn: The current turn.
        player: The AI player's health and inventory.
        field: The field.
        position: Where the AI player stands.
        available: Placement and movement options for this turn.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    game: GameInfo
    turn: CurrentTurn
    player: PlayerState
    field: FieldState
    position: Position
    available: AvailablePlaces = Field(default_factory=AvailablePlaces)


__all__ = [
    "FINISHED_GAME_STATUSES",
    "GameInfo",
    "CurrentTurn",
    "AvailablePlaces",
    "BattleOutcome",
    "GameSnapshot",
]
