"""Enumeration types for the virtual player engine."""

from __future__ import annotations

from enum import StrEnum


class BattleResult(StrEnum):
    """Outcome of a monster battle as reported by the game engine.

    The engine spells a defeat ``loose``; ``lose`` is accepted as well.
    """

    WIN = "win"
    DRAW = "draw"
    LOSS = "loose"

    @classmethod
    def _missing_(cls, value: object) -> "BattleResult | None":
        if isinstance(value, str) and value.lower() in ("lose", "loss", "lost"):
            return cls.LOSS
        return None


class FeatureLevel(StrEnum):
    """How much of the decision policy is enabled.

    Levels:
        MINIMAL: Analyze the state and end the turn.
        HEURISTIC: Tile placement, pickups and beneficial movement.
        FULL: Everything, including healing detours and exploration.
    """

    MINIMAL = "minimal"
    HEURISTIC = "heuristic"
    FULL = "full"


class ActionKind(StrEnum):
    """Kinds of actions the policy can take."""

    HEAL = "heal"
    PLACE_TILE = "place_tile"
    PICK_ITEM = "pick_item"
    MOVE_TELEPORT = "move_teleport"
    MOVE_HEALING = "move_healing"
    MOVE_COLLECT = "move_collect"
    EXPLORE = "explore"

    @property
    def is_movement(self) -> bool:
        """Whether this action moves the player to another tile."""
        return self not in (ActionKind.PLACE_TILE, ActionKind.PICK_ITEM)


class LogEntryType(StrEnum):
    """Types of audit log entries produced during a turn."""

    AI_CHECK_FAILED = "ai_check_failed"
    AI_STUNNED = "ai_stunned"
    AI_START = "ai_start"
    AI_DECISION = "ai_decision"
    AI_HEALING = "ai_healing"
    TILE_PLACED = "tile_placed"
    BATTLE_DETECTED = "battle_detected"
    BATTLE_FINALIZED = "battle_finalized"
    ITEM_PICKED = "item_picked"
    PICK_ITEM_FAILED = "pick_item_failed"
    INVENTORY_REPLACED = "inventory_replaced"
    INVENTORY_ITEM_LEFT = "inventory_item_left"
    AI_ERROR = "ai_error"
    TURN_ENDED = "turn_ended"


__all__ = [
    "BattleResult",
    "FeatureLevel",
    "ActionKind",
    "LogEntryType",
]
