"""Registry and turn driver for AI players.

The manager remembers which players of which games are AI-controlled and
with which strategy, and runs their turns when the game hands them the
move. The registry is its only long-lived state; everything belonging to
a single turn lives in that turn's context.
"""

from __future__ import annotations

import random
import threading
from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID

from virtual_player.core.config import AISettings, get_strategy, is_valid_strategy
from virtual_player.core.exceptions import ConfigurationError
from virtual_player.core.logging import get_logger
from virtual_player.engine.context import TurnReport
from virtual_player.engine.executor import TurnExecutor
from virtual_player.engine.pacing import WaitPolicy, wait_policy_from_settings
from virtual_player.engine.policy import DecisionPolicy
from virtual_player.engine.port import GamePort
from virtual_player.engine.scoring import PositionScorer


logger = get_logger(__name__)


@dataclass
class AIPlayerRecord:
    """Registry entry of an AI-controlled player.

    Attributes:
        game_id: Game the player takes part in.
        player_id: The AI player.
        strategy: Strategy preset name.
        active: Whether the manager plays this player's turns.
        turn_count: Turns completed successfully.
        last_action_at: When the last successful turn ended.
    """

    game_id: UUID
    player_id: UUID
    strategy: str
    active: bool = True
    turn_count: int = 0
    last_action_at: datetime | None = None


@dataclass
class GameRunSummary:
    """Outcome of :meth:`AIPlayerManager.run_game_with_ai`."""

    turns_executed: int = 0
    ai_turns: int = 0
    errors: list[str] = field(default_factory=list)
    game_ended: bool = False


class AIPlayerManager:
    """Manage AI players and execute their turns.

    Args:
        port: Game engine port.
        settings: Engine settings; defaults are used when omitted.
        wait: Pause between actions and between game loop iterations.

    Example:
        >>> manager = AIPlayerManager(port)
        >>> manager.register_ai_player(game_id, player_id, "defensive")
        >>> report = manager.execute_ai_turn_if_needed(game_id)
    """

    def __init__(
        self,
        port: GamePort,
        settings: AISettings | None = None,
        wait: WaitPolicy | None = None,
    ) -> None:
        self._port = port
        self.settings = settings or AISettings()
        self._wait = wait or wait_policy_from_settings(self.settings)
        self._default_strategy = self.settings.strategy
        self._players: dict[tuple[UUID, UUID], AIPlayerRecord] = {}
        self._lock = threading.RLock()
        self._rng = random.Random(self.settings.random_seed)
        logger.info("AIPlayerManager initialized", default_strategy=self._default_strategy)

    @property
    def default_strategy(self) -> str:
        return self._default_strategy

    def set_default_strategy(self, strategy: str) -> None:
        """Set the strategy given to players registered without one.

        Raises:
            ConfigurationError: If the strategy preset does not exist.
        """
        if not is_valid_strategy(strategy):
            raise ConfigurationError(f"Unknown strategy: {strategy}", config_key="strategy")
        self._default_strategy = strategy
        logger.info("AI default strategy set", strategy=strategy)

    # -------------------------------------------------------------------------
    # Registry
    # -------------------------------------------------------------------------

    def register_ai_player(
        self,
        game_id: UUID,
        player_id: UUID,
        strategy: str | None = None,
    ) -> AIPlayerRecord:
        """Register a player as AI-controlled.

        Unknown strategy names fall back to the default preset.
        """
        profile = get_strategy(strategy or self._default_strategy)
        record = AIPlayerRecord(game_id=game_id, player_id=player_id, strategy=profile.name)
        with self._lock:
            self._players[(game_id, player_id)] = record
        logger.info(
            "AI player registered",
            game_id=str(game_id),
            player_id=str(player_id),
            strategy=profile.name,
        )
        return record

    def update_strategy(self, game_id: UUID, player_id: UUID, strategy: str) -> None:
        """Switch a registered player's strategy; unknown players are ignored."""
        with self._lock:
            record = self._players.get((game_id, player_id))
            if record is None:
                return
            record.strategy = get_strategy(strategy).name
        logger.info(
            "AI strategy updated",
            game_id=str(game_id),
            player_id=str(player_id),
            strategy=record.strategy,
        )

    def deactivate_ai_player(self, game_id: UUID, player_id: UUID) -> None:
        with self._lock:
            record = self._players.get((game_id, player_id))
            if record is None:
                return
            record.active = False
        logger.info("AI player deactivated", game_id=str(game_id), player_id=str(player_id))

    def get_ai_player_stats(self, game_id: UUID, player_id: UUID) -> AIPlayerRecord | None:
        with self._lock:
            return self._players.get((game_id, player_id))

    def get_active_ai_players(self, game_id: UUID) -> list[AIPlayerRecord]:
        with self._lock:
            return [r for r in self._players.values() if r.game_id == game_id and r.active]

    def clear_game_ai_players(self, game_id: UUID) -> None:
        with self._lock:
            for key in [key for key in self._players if key[0] == game_id]:
                del self._players[key]
        logger.info("All AI players cleared for game", game_id=str(game_id))

    # -------------------------------------------------------------------------
    # Turns
    # -------------------------------------------------------------------------

    def build_executor(self, strategy: str) -> TurnExecutor:
        """Create a turn executor configured for a strategy preset."""
        policy = DecisionPolicy(
            PositionScorer(
                random.Random(self._rng.getrandbits(64)),
                jitter=self.settings.exploration_jitter,
            ),
            healing_threshold=self.settings.effective_healing_threshold(strategy),
            feature_level=self.settings.feature_level,
            max_actions=self.settings.max_actions_per_turn,
        )
        return TurnExecutor(self._port, policy, settings=self.settings, wait=self._wait)

    def execute_ai_turn_if_needed(self, game_id: UUID) -> TurnReport | None:
        """Play the current turn if it belongs to an active AI player.

        Returns:
            The turn report, or ``None`` when no AI turn was played.
        """
        try:
            turn = self._port.get_current_turn(game_id)
        except Exception:
            logger.exception("Failed to look up the current turn", game_id=str(game_id))
            return None
        if turn is None:
            return None

        record = self.get_ai_player_stats(game_id, turn.player_id)
        if record is None or not record.active:
            return None

        logger.info(
            "Executing AI turn",
            game_id=str(game_id),
            player_id=str(turn.player_id),
            turn_id=str(turn.turn_id),
            strategy=record.strategy,
        )
        try:
            report = self.build_executor(record.strategy).execute_turn(game_id, turn.player_id)
        except Exception:
            logger.exception("Failed to execute AI turn", game_id=str(game_id))
            return None

        if report.success:
            with self._lock:
                record.turn_count += 1
                record.last_action_at = datetime.now(UTC)
        return report

    def run_game_with_ai(self, game_id: UUID, max_turns: int = 100) -> GameRunSummary:
        """Keep playing AI turns until the game ends or ``max_turns`` is reached."""
        summary = GameRunSummary()
        for _ in range(max_turns):
            try:
                game = self._port.get_game(game_id)
            except Exception as exc:
                logger.exception("Failed to fetch game", game_id=str(game_id))
                summary.errors.append(str(exc))
                break
            if game.is_finished:
                summary.game_ended = True
                break

            report = self.execute_ai_turn_if_needed(game_id)
            if report is not None:
                summary.turns_executed += 1
                if report.success:
                    summary.ai_turns += 1
                else:
                    summary.errors.append(f"AI turn failed after {report.actions_taken} actions")
            self._wait()

        logger.info(
            "AI game run finished",
            game_id=str(game_id),
            ai_turns=summary.ai_turns,
            game_ended=summary.game_ended,
        )
        return summary


__all__ = [
    "AIPlayerRecord",
    "GameRunSummary",
    "AIPlayerManager",
]
