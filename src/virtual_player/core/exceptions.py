"""Custom exception hierarchy for the virtual player engine.

All exceptions inherit from VirtualPlayerError, so the turn executor can
contain every failure at an action boundary while still telling the
failure kinds apart. Each exception carries a ``phase`` that ends up in
the ``ai_error`` audit log entry.

Example:
    >>> from virtual_player.core.exceptions import DispatchError
    >>> raise DispatchError("Move rejected", command="move_player")
"""

from __future__ import annotations

from typing import Any


class VirtualPlayerError(Exception):
    """Base exception for all virtual player errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary containing additional error context.
        phase: Turn phase the error is attributed to in audit logs.
    """

    phase: str = "unknown"

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional details.

        Returns:
            Formatted error message including any provided details.
        """
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} [{detail_str}]"
        return self.message

    def __repr__(self) -> str:
        """Return a detailed string representation of the exception."""
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigurationError(VirtualPlayerError):
    """Raised when engine configuration is invalid."""

    phase = "configuration"

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error with config key context.

        Args:
            message: Human-readable error description.
            config_key: The configuration key that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if config_key:
            combined_details["config_key"] = config_key
        super().__init__(message, details=combined_details)


# =============================================================================
# Game State Exceptions
# =============================================================================


class GameStateError(VirtualPlayerError):
    """Base exception for problems reading the external game state."""

    phase = "state_fetch"


class StateFetchError(GameStateError):
    """Raised when a query against the game port fails."""

    def __init__(
        self,
        message: str,
        *,
        query: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize state fetch error with query context.

        Args:
            message: Human-readable error description.
            query: Name of the port query that failed.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if query:
            combined_details["query"] = query
        super().__init__(message, details=combined_details)


class NoCurrentTurnError(GameStateError):
    """Raised when the game has no current turn."""

    phase = "current_turn"


class NotMyTurnError(GameStateError):
    """Signals that the current turn belongs to another player.

    This is a guard, not a failure: the executor turns it into an
    ``ai_check_failed`` entry and issues no commands.
    """

    phase = "current_turn"


# =============================================================================
# Command Exceptions
# =============================================================================


class DispatchError(VirtualPlayerError):
    """Raised when a command sent through the game port is rejected."""

    phase = "dispatch"

    def __init__(
        self,
        message: str,
        *,
        command: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize dispatch error with command context.

        Args:
            message: Human-readable error description.
            command: Name of the rejected command.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if command:
            combined_details["command"] = command
        super().__init__(message, details=combined_details)


class BattleResolutionError(VirtualPlayerError):
    """Raised when a battle outcome cannot be finalized."""

    phase = "battle"

    def __init__(
        self,
        message: str,
        *,
        battle_id: str | None = None,
        result: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize battle resolution error with battle context.

        Args:
            message: Human-readable error description.
            battle_id: Identifier of the battle being finalized.
            result: Reported battle result.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if battle_id:
            combined_details["battle_id"] = battle_id
        if result:
            combined_details["result"] = result
        super().__init__(message, details=combined_details)


class PolicyError(VirtualPlayerError):
    """Raised when the decision policy cannot evaluate a snapshot."""

    phase = "policy"


__all__ = [
    "VirtualPlayerError",
    "ConfigurationError",
    "GameStateError",
    "StateFetchError",
    "NoCurrentTurnError",
    "NotMyTurnError",
    "DispatchError",
    "BattleResolutionError",
    "PolicyError",
]
