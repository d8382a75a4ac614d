"""Engine-wide constants for the virtual player.

This module holds the turn budget, strategy presets, item and consumable
tables, and the weights used by the position scorer.
"""

from __future__ import annotations

# =============================================================================
# Turn Budget
# =============================================================================

MAX_ACTIONS_PER_TURN = 4
"""Maximum number of actions the AI may take before a forced turn end."""

DEFAULT_ACTION_DELAY_MS = 100
"""Pause between actions, in milliseconds."""

DEFAULT_MAX_DECISION_ATTEMPTS = 12
"""Upper bound on policy evaluations in one turn, successful or not."""

DEFAULT_HEALING_THRESHOLD = 1
"""HP at or below which the AI looks for a healing fountain."""

DEFAULT_REQUIRED_OPEN_SIDES = 3
"""Open sides requested for a freshly picked tile."""

# =============================================================================
# Strategy Presets
# =============================================================================

DEFAULT_STRATEGY = "balanced"

STRATEGY_PRESETS: dict[str, dict[str, object]] = {
    "aggressive": {
        "healing_threshold": 1,
        "description": "High risk, high reward - focuses on combat and treasure hunting",
    },
    "defensive": {
        "healing_threshold": 3,
        "description": "Cautious approach - prioritizes survival and healing",
    },
    "treasure_hunter": {
        "healing_threshold": 2,
        "description": "Focuses on collecting treasures and valuable items",
    },
    "balanced": {
        "healing_threshold": 2,
        "description": "Balanced approach between risk and reward",
    },
    "speedrun": {
        "healing_threshold": 1,
        "description": "Fastest possible completion, ignores non-essential items",
    },
}

# =============================================================================
# Items and Battles
# =============================================================================

ITEM_VALUES = {
    "axe": 3,
    "sword": 2,
    "dagger": 1,
}
"""Strategic value of inventory items; unknown types are worth 0."""

CONSUMABLE_DAMAGE = {
    "fireball": 9,
}
"""Extra damage a consumable adds in battle; unknown types add 0."""

MONSTER_DIFFICULTY = {
    "skeleton": 1,
    "skeleton_archer": 2,
    "skeleton_turnkey": 2,
    "skeleton_king": 3,
    "orc": 2,
    "orc_berserker": 3,
    "dragon": 5,
}
"""Difficulty rating per monster type; unknown monsters rate 1."""

# =============================================================================
# Tile Features
# =============================================================================

TELEPORTATION_GATE = "teleportation_gate"

# =============================================================================
# Position Scoring Weights
# =============================================================================

EXPANSION_SCORE = 5.0
ITEM_PROXIMITY_WEIGHT = 10.0

MOVE_ITEM_SCORE = 10.0
MOVE_HEALING_WEIGHT = 15.0
MOVE_TELEPORT_SCORE = 5.0

EXPLORE_UNEXPLORED_SCORE = 8.0
EXPLORE_NEARBY_ITEM_SCORE = 5.0
EXPLORE_TELEPORT_SCORE = 3.0
EXPLORE_EXPANSION_SCORE = 6.0
EXPLORE_UNEXPLORED_MIN_SIDES = 2


__all__ = [
    "MAX_ACTIONS_PER_TURN",
    "DEFAULT_ACTION_DELAY_MS",
    "DEFAULT_MAX_DECISION_ATTEMPTS",
    "DEFAULT_HEALING_THRESHOLD",
    "DEFAULT_REQUIRED_OPEN_SIDES",
    "DEFAULT_STRATEGY",
    "STRATEGY_PRESETS",
    "ITEM_VALUES",
    "CONSUMABLE_DAMAGE",
    "MONSTER_DIFFICULTY",
    "TELEPORTATION_GATE",
    "EXPANSION_SCORE",
    "ITEM_PROXIMITY_WEIGHT",
    "MOVE_ITEM_SCORE",
    "MOVE_HEALING_WEIGHT",
    "MOVE_TELEPORT_SCORE",
    "EXPLORE_UNEXPLORED_SCORE",
    "EXPLORE_NEARBY_ITEM_SCORE",
    "EXPLORE_TELEPORT_SCORE",
    "EXPLORE_EXPANSION_SCORE",
    "EXPLORE_UNEXPLORED_MIN_SIDES",
]
