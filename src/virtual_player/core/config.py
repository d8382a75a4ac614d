"""Configuration management for the virtual player engine.

This module provides centralized configuration using pydantic-settings,
supporting environment variables, .env files, and runtime overrides.

Example:
    >>> from virtual_player.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.ai.max_actions_per_turn
    4

Environment Variables:
    VIRTUAL_PLAYER_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    VIRTUAL_PLAYER_AI_STRATEGY: Strategy preset name
    VIRTUAL_PLAYER_AI_FEATURE_LEVEL: minimal, heuristic or full
    VIRTUAL_PLAYER_AI_ACTION_DELAY_MS: Pause between actions
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from virtual_player.core.constants import (
    DEFAULT_ACTION_DELAY_MS,
    DEFAULT_MAX_DECISION_ATTEMPTS,
    DEFAULT_STRATEGY,
    MAX_ACTIONS_PER_TURN,
    STRATEGY_PRESETS,
)
from virtual_player.core.exceptions import ConfigurationError
from virtual_player.models.enums import FeatureLevel


StrategyName = Literal["aggressive", "defensive", "treasure_hunter", "balanced", "speedrun"]


class StrategyProfile(BaseModel):
    """A named strategy preset.

    Attributes:
        name: Preset name.
        healing_threshold: HP at or below which healing takes priority.
        description: Human-readable summary of the play style.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    healing_threshold: int = Field(ge=0)
    description: str = ""


def get_strategy(name: str) -> StrategyProfile:
    """Get a strategy preset by name.

    Unknown names fall back to the default strategy.

    Args:
        name: Strategy preset name.

    Returns:
        The matching StrategyProfile.
    """
    if name not in STRATEGY_PRESETS:
        name = DEFAULT_STRATEGY
    return StrategyProfile(name=name, **STRATEGY_PRESETS[name])


def is_valid_strategy(name: str) -> bool:
    """Check whether a strategy preset exists."""
    return name in STRATEGY_PRESETS


class AISettings(BaseSettings):
    """Configuration for the turn decision engine.

    Attributes:
        strategy: Strategy preset used when none is given explicitly.
        feature_level: How much of the priority chain is enabled.
        max_actions_per_turn: Action budget per turn.
        action_delay_ms: Pause between actions.
        healing_threshold: Override for the strategy's healing threshold.
        max_decision_attempts: Bound on policy evaluations per turn.
        fetch_retry_attempts: Attempts for each state query.
        fetch_retry_wait_seconds: Base wait between query attempts.
        exploration_jitter: Scale of the random tie-breaking term.
        random_seed: Seed for the exploration jitter.
    """

    model_config = SettingsConfigDict(
        env_prefix="VIRTUAL_PLAYER_AI_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    strategy: StrategyName = Field(
        default=DEFAULT_STRATEGY,
        description="Default strategy preset",
    )
    feature_level: FeatureLevel = Field(
        default=FeatureLevel.FULL,
        description="Enabled portion of the decision policy",
    )
    max_actions_per_turn: int = Field(
        default=MAX_ACTIONS_PER_TURN,
        ge=1,
        le=MAX_ACTIONS_PER_TURN,
        description="Maximum actions per turn",
    )
    action_delay_ms: int = Field(
        default=DEFAULT_ACTION_DELAY_MS,
        ge=0,
        le=5000,
        description="Pause between actions in milliseconds",
    )
    healing_threshold: int | None = Field(
        default=None,
        ge=0,
        description="Override for the strategy healing threshold",
    )
    max_decision_attempts: int = Field(
        default=DEFAULT_MAX_DECISION_ATTEMPTS,
        ge=1,
        le=100,
        description="Maximum policy evaluations per turn",
    )
    fetch_retry_attempts: int = Field(
        default=2,
        ge=1,
        le=10,
        description="Attempts for each state query",
    )
    fetch_retry_wait_seconds: float = Field(
        default=0.05,
        ge=0,
        le=5,
        description="Base wait between state query attempts",
    )
    exploration_jitter: float = Field(
        default=1.0,
        ge=0,
        le=1.0,
        description="Scale of the exploration tie-breaking jitter",
    )
    random_seed: int | None = Field(
        default=None,
        description="Seed for the exploration jitter",
    )

    @model_validator(mode="after")
    def validate_decision_attempts(self) -> "AISettings":
        """Ensure the attempt bound leaves room for the full action budget.

        Returns:
            Self if validation passes.

        Raises:
            ConfigurationError: If max_decision_attempts < max_actions_per_turn.
        """
        if self.max_decision_attempts < self.max_actions_per_turn:
            raise ConfigurationError(
                f"max_decision_attempts ({self.max_decision_attempts}) must be at least "
                f"max_actions_per_turn ({self.max_actions_per_turn})",
                config_key="max_decision_attempts",
            )
        return self

    def strategy_profile(self, name: str | None = None) -> StrategyProfile:
        """Resolve a strategy preset, defaulting to the configured one."""
        return get_strategy(name or self.strategy)

    def effective_healing_threshold(self, strategy: str | None = None) -> int:
        """Healing threshold after applying the override, if any."""
        if self.healing_threshold is not None:
            return self.healing_threshold
        return self.strategy_profile(strategy).healing_threshold


class Settings(BaseSettings):
    """Main settings aggregating all configuration domains.

    Attributes:
        app_name: Application name.
        app_version: Application version string.
        debug: Enable debug mode.
        log_level: Application logging level.
        json_logs: Render logs as JSON.
        log_file: Optional path for a persistent log file.
        ai: Decision engine settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="VIRTUAL_PLAYER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    app_name: str = Field(
        default="Dungeon Virtual Player",
        description="Application name",
    )
    app_version: str = Field(
        default="0.1.0",
        description="Application version",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    json_logs: bool = Field(
        default=False,
        description="Render logs as JSON",
    )
    log_file: str | None = Field(
        default=None,
        description="Optional log file path",
    )

    ai: AISettings = Field(default_factory=AISettings)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        The application Settings instance.

    Raises:
        ConfigurationError: If configuration is missing or invalid.
    """
    try:
        return Settings()
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load application settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access."""
    get_settings.cache_clear()


__all__ = [
    "StrategyName",
    "StrategyProfile",
    "get_strategy",
    "is_valid_strategy",
    "AISettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
