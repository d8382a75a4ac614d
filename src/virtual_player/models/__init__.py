"""Pydantic models for the virtual player engine.

Modules:
    enums: Battle results, feature levels, action kinds, log entry types.
    field: Positions, tiles, items on the field, the field itself.
    player: Inventory items and player state.
    game_state: Game, turn, available places, battle outcome, snapshot.
"""

from __future__ import annotations

from virtual_player.models.enums import ActionKind, BattleResult, FeatureLevel, LogEntryType
from virtual_player.models.field import (
    FieldBounds,
    FieldState,
    ItemOnField,
    PlacedTile,
    Position,
    distance,
)
from virtual_player.models.game_state import (
    AvailablePlaces,
    BattleOutcome,
    CurrentTurn,
    GameInfo,
    GameSnapshot,
)
from virtual_player.models.player import Consumable, Item, PlayerState


__all__ = [
    # Enums
    "ActionKind",
    "BattleResult",
    "FeatureLevel",
    "LogEntryType",
    # Field
    "Position",
    "distance",
    "FieldBounds",
    "PlacedTile",
    "ItemOnField",
    "FieldState",
    # Player
    "Item",
    "Consumable",
    "PlayerState",
    # Game state
    "GameInfo",
    "CurrentTurn",
    "AvailablePlaces",
    "BattleOutcome",
    "GameSnapshot",
]
