"""Core module providing configuration, logging, and base exceptions.

Exports:
    Exceptions:
        VirtualPlayerError: Base exception for all engine errors.
        StateFetchError, DispatchError, BattleResolutionError: Action-level failures.

    Configuration:
        Settings: Main application settings class.
        get_settings: Get the settings singleton.
        get_strategy: Resolve a strategy preset.

    Logging:
        configure_logging: Set up application logging.
        configure_logging_from_settings: Set up logging from Settings.
        get_logger: Get a configured logger instance.
        turn_logging_context: Bind turn identifiers to log lines.
"""

from __future__ import annotations

from virtual_player.core.config import (
    AISettings,
    Settings,
    StrategyProfile,
    clear_settings_cache,
    get_settings,
    get_strategy,
    is_valid_strategy,
)
from virtual_player.core.exceptions import (
    BattleResolutionError,
    ConfigurationError,
    DispatchError,
    GameStateError,
    NoCurrentTurnError,
    NotMyTurnError,
    PolicyError,
    StateFetchError,
    VirtualPlayerError,
)
from virtual_player.core.logging import (
    bind_context,
    clear_context,
    configure_logging,
    configure_logging_from_settings,
    get_logger,
    turn_logging_context,
)


__all__ = [
    # Exceptions
    "VirtualPlayerError",
    "ConfigurationError",
    "GameStateError",
    "StateFetchError",
    "NoCurrentTurnError",
    "NotMyTurnError",
    "DispatchError",
    "BattleResolutionError",
    "PolicyError",
    # Configuration
    "Settings",
    "AISettings",
    "StrategyProfile",
    "get_settings",
    "get_strategy",
    "is_valid_strategy",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "configure_logging_from_settings",
    "get_logger",
    "bind_context",
    "clear_context",
    "turn_logging_context",
]
