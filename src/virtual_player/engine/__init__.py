"""Turn decision engine for AI players.

This package contains the decision logic:
- Position scoring heuristics
- Battle outcome and inventory-full handling
- The priority-ordered decision policy
- The turn executor and the AI player manager
"""

from __future__ import annotations

from virtual_player.engine.actions import (
    Action,
    HealAction,
    MoveAction,
    PickupAction,
    PlaceTileAction,
)
from virtual_player.engine.battle import (
    BattleOutcomeHandler,
    BattleResolution,
    consumable_damage,
    monster_difficulty,
    select_consumables,
)
from virtual_player.engine.context import ActionRecord, LogEntry, TurnContext, TurnReport
from virtual_player.engine.executor import TurnExecutor
from virtual_player.engine.inventory import InventoryReplacementPolicy, item_value
from virtual_player.engine.manager import AIPlayerManager, AIPlayerRecord, GameRunSummary
from virtual_player.engine.pacing import NoWait, SleepWait, WaitPolicy, wait_policy_from_settings
from virtual_player.engine.policy import DecisionPolicy
from virtual_player.engine.port import (
    CommandResult,
    GamePort,
    MoveResult,
    PickItemResult,
    PlaceTileSequenceResult,
    SequenceStep,
)
from virtual_player.engine.scoring import PositionScorer, nearest_position


__all__ = [
    # Actions
    "Action",
    "HealAction",
    "PlaceTileAction",
    "PickupAction",
    "MoveAction",
    # Battle
    "BattleOutcomeHandler",
    "BattleResolution",
    "consumable_damage",
    "monster_difficulty",
    "select_consumables",
    # Context
    "ActionRecord",
    "LogEntry",
    "TurnContext",
    "TurnReport",
    # Executor
    "TurnExecutor",
    # Inventory
    "InventoryReplacementPolicy",
    "item_value",
    # Manager
    "AIPlayerManager",
    "AIPlayerRecord",
    "GameRunSummary",
    # Pacing
    "WaitPolicy",
    "NoWait",
    "SleepWait",
    "wait_policy_from_settings",
    # Policy
    "DecisionPolicy",
    # Port
    "GamePort",
    "CommandResult",
    "SequenceStep",
    "PlaceTileSequenceResult",
    "MoveResult",
    "PickItemResult",
    # Scoring
    "PositionScorer",
    "nearest_position",
]
