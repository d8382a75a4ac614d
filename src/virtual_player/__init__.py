"""Dungeon Virtual Player - turn decision engine for AI players.

Plays a full turn of a tile-exploration dungeon game on behalf of an
AI-controlled player: place a tile, pick up items, head for healing
fountains and teleports, fight or finalize battles, then end the turn.

Example:
    >>> from virtual_player import AIPlayerManager
    >>>
    >>> manager = AIPlayerManager(port)
    >>> manager.register_ai_player(game_id, player_id, strategy="defensive")
    >>> report = manager.execute_ai_turn_if_needed(game_id)
    >>> report.entry_types
    [<LogEntryType.AI_START: 'ai_start'>, ..., <LogEntryType.TURN_ENDED: 'turn_ended'>]

Modules:
    core: Configuration, logging, constants and exceptions.
    models: Pydantic schemas for the field, players and game state.
    engine: Scoring, policy, battle handling, turn executor and manager.
"""

from __future__ import annotations

# Core
from virtual_player.core.config import AISettings, Settings, get_settings
from virtual_player.core.exceptions import VirtualPlayerError
from virtual_player.core.logging import configure_logging, get_logger

# Models
from virtual_player.models import (
    BattleOutcome,
    FeatureLevel,
    FieldState,
    GameSnapshot,
    PlayerState,
    Position,
    distance,
)

# Engine
from virtual_player.engine import (
    AIPlayerManager,
    DecisionPolicy,
    GamePort,
    PositionScorer,
    TurnExecutor,
    TurnReport,
)


__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Core
    "Settings",
    "AISettings",
    "get_settings",
    "VirtualPlayerError",
    "configure_logging",
    "get_logger",
    # Models
    "Position",
    "distance",
    "FieldState",
    "PlayerState",
    "BattleOutcome",
    "GameSnapshot",
    "FeatureLevel",
    # Engine
    "GamePort",
    "PositionScorer",
    "DecisionPolicy",
    "TurnExecutor",
    "TurnReport",
    "AIPlayerManager",
]
