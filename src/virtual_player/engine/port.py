"""Port to the surrounding game engine.

The decision engine never talks to the game directly. Every query and
command goes through an object implementing :class:`GamePort`, a
synchronous request/response interface. Calls are blocking and each one
observes the effects of every earlier call made during the same turn.

Result models:
    SequenceStep: One step of a composite tile placement.
    PlaceTileSequenceResult: Outcome of pick, rotate, place and move.
    MoveResult: Outcome of a move, possibly with a battle.
    PickItemResult: Outcome of picking up an item.
    CommandResult: Outcome of any other command.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from virtual_player.models.field import FieldState, Position
from virtual_player.models.game_state import AvailablePlaces, BattleOutcome, CurrentTurn, GameInfo
from virtual_player.models.player import Item, PlayerState


MOVE_PLAYER_STEP = "move_player"


# =============================================================================
# Command Results
# =============================================================================


class CommandResult(BaseModel):
    """Outcome of a command without a payload."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    success: bool
    error: str | None = None


class SequenceStep(BaseModel):
    """One step of a tile placement sequence.

    Attributes:
        step: Step name, e.g. ``pick_tile``, ``place_tile`` or ``move_player``.
        success: Whether the step succeeded.
        battle: Battle triggered by a ``move_player`` step.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    step: str
    success: bool = True
    battle: BattleOutcome | None = None


class PlaceTileSequenceResult(CommandResult):
    """Outcome of the composite pick, rotate, place and move operation."""

    steps: tuple[SequenceStep, ...] = ()

    @property
    def battle(self) -> BattleOutcome | None:
        """Battle triggered by the move embedded in the sequence, if any."""
        for step in self.steps:
            if step.step == MOVE_PLAYER_STEP and step.battle is not None:
                return step.battle
        return None


class MoveResult(CommandResult):
    """Outcome of moving the player; ``battle`` is set when a monster was met."""

    battle: BattleOutcome | None = None


class PickItemResult(CommandResult):
    """Outcome of picking up an item.

    Attributes:
        inventory_full: The item was not stored because the inventory is full.
        item: The item that was picked up or offered.
        current_inventory: Inventory at the time of the pickup.
    """

    inventory_full: bool = False
    item: Item | None = None
    current_inventory: tuple[Item, ...] = ()


# =============================================================================
# Port
# =============================================================================


@runtime_checkable
class GamePort(Protocol):
    """Synchronous queries and commands exposed by the game engine.

    Queries return ``None`` only where noted. Commands report rejection
    through ``success=False``; any exception they raise is treated the
    same way.
    """

    def get_game(self, game_id: UUID) -> GameInfo: ...

    def get_current_turn(self, game_id: UUID) -> CurrentTurn | None:
        """The turn being played, or ``None`` when the game has no turn."""
        ...

    def get_field(self, game_id: UUID) -> FieldState: ...

    def get_player(self, game_id: UUID, player_id: UUID) -> PlayerState: ...

    def get_player_position(self, game_id: UUID, player_id: UUID) -> Position: ...

    def get_available_places(self, game_id: UUID, player_id: UUID) -> AvailablePlaces: ...

    def place_tile_sequence(
        self,
        game_id: UUID,
        player_id: UUID,
        turn_id: UUID,
        target: Position,
        required_open_sides: int,
        from_position: Position,
    ) -> PlaceTileSequenceResult: ...

    def move_player(
        self,
        game_id: UUID,
        player_id: UUID,
        turn_id: UUID,
        from_position: Position,
        to_position: Position,
        ignore_monster: bool = False,
    ) -> MoveResult: ...

    def pick_item(
        self,
        game_id: UUID,
        player_id: UUID,
        turn_id: UUID,
        position: Position,
    ) -> PickItemResult: ...

    def finalize_battle(
        self,
        game_id: UUID,
        player_id: UUID,
        turn_id: UUID,
        battle_id: UUID,
        consumable_ids: list[UUID],
        attempt_pickup: bool,
    ) -> CommandResult: ...

    def inventory_replace(
        self,
        game_id: UUID,
        player_id: UUID,
        turn_id: UUID,
        new_item_id: UUID,
        removed_item_id: UUID,
    ) -> CommandResult: ...

    def end_turn(self, game_id: UUID, player_id: UUID, turn_id: UUID) -> CommandResult: ...


__all__ = [
    "MOVE_PLAYER_STEP",
    "CommandResult",
    "SequenceStep",
    "PlaceTileSequenceResult",
    "MoveResult",
    "PickItemResult",
    "GamePort",
]
