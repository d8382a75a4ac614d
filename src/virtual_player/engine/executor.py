"""Turn executor for AI-controlled players.

The executor drives a single turn:

1. Guard: the current turn must belong to the AI player.
2. A stunned player only ends its turn.
3. Loop within the action budget: refresh the snapshot, ask the policy
   for the next action, apply it through the game port, record it.
4. End the turn exactly once, whatever happened before.

Every failure is contained at the action where it occurred and shows up
as an ``ai_error`` audit entry. Nothing escapes :meth:`execute_turn`.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar
from uuid import UUID

from tenacity import Retrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from virtual_player.core.config import AISettings
from virtual_player.core.exceptions import (
    BattleResolutionError,
    DispatchError,
    NoCurrentTurnError,
    NotMyTurnError,
    PolicyError,
    StateFetchError,
    VirtualPlayerError,
)
from virtual_player.core.logging import get_logger, turn_logging_context
from virtual_player.engine.actions import Action, HealAction, PickupAction, PlaceTileAction
from virtual_player.engine.battle import BattleOutcomeHandler
from virtual_player.engine.context import ActionRecord, TurnContext, TurnReport
from virtual_player.engine.inventory import InventoryReplacementPolicy
from virtual_player.engine.pacing import WaitPolicy, wait_policy_from_settings
from virtual_player.engine.policy import DecisionPolicy
from virtual_player.engine.port import CommandResult, GamePort, PickItemResult
from virtual_player.models.enums import LogEntryType
from virtual_player.models.game_state import BattleOutcome, CurrentTurn, GameSnapshot


logger = get_logger(__name__)

T = TypeVar("T")


class TurnExecutor:
    """Execute complete turns for an AI player.

    The executor holds configuration and collaborators only. All state of
    a turn lives in the :class:`TurnContext` created by each call, so one
    executor may serve several games at once.

    Args:
        port: Game engine port.
        policy: Decision policy choosing each action.
        settings: Engine settings; defaults are used when omitted.
        wait: Pause between actions; derived from settings when omitted.
        battle_handler: Battle outcome handler.
        inventory_policy: Inventory-full resolution.

    Example:
        >>> executor = TurnExecutor(port, DecisionPolicy())
        >>> report = executor.execute_turn(game_id, player_id)
        >>> report.success
        True
    """

    def __init__(
        self,
        port: GamePort,
        policy: DecisionPolicy,
        *,
        settings: AISettings | None = None,
        wait: WaitPolicy | None = None,
        battle_handler: BattleOutcomeHandler | None = None,
        inventory_policy: InventoryReplacementPolicy | None = None,
    ) -> None:
        self._port = port
        self.policy = policy
        self.settings = settings or AISettings()
        self._wait = wait or wait_policy_from_settings(self.settings)
        self._battles = battle_handler or BattleOutcomeHandler(port)
        self._inventory = inventory_policy or InventoryReplacementPolicy()

    @property
    def max_actions(self) -> int:
        return min(self.settings.max_actions_per_turn, self.policy.max_actions)

    # -------------------------------------------------------------------------
    # Turn
    # -------------------------------------------------------------------------

    def execute_turn(self, game_id: UUID, player_id: UUID) -> TurnReport:
        """Play one full turn for ``player_id``.

        Args:
            game_id: Game being played.
            player_id: AI player whose turn it should be.

        Returns:
            TurnReport whose ``success`` tells whether EndTurn was accepted.
            The action history and audit log are always included.
        """
        context = TurnContext(game_id=game_id, player_id=player_id, max_actions=self.max_actions)
        with turn_logging_context(game_id, player_id):
            success = self._run(context)
        logger.info(
            "AI turn finished",
            game_id=str(game_id),
            player_id=str(player_id),
            success=success,
            actions_taken=context.actions_taken,
        )
        return context.report(success=success)

    def _run(self, context: TurnContext) -> bool:
        try:
            turn = self._current_turn(context)
        except Exception as exc:
            logger.exception("Could not fetch the current turn")
            self._log_error(context, exc, phase="current_turn")
            return self._best_effort_end_turn(context)

        if turn is None:
            context.log(LogEntryType.AI_CHECK_FAILED, reason="no_current_turn")
            return False
        if turn.player_id != context.player_id:
            context.log(
                LogEntryType.AI_CHECK_FAILED,
                reason="not_my_turn",
                current_player=str(turn.player_id),
            )
            return False
        context.turn_id = turn.turn_id

        try:
            snapshot = self._refresh(context)
        except Exception as exc:
            logger.exception("Could not fetch the game state")
            self._log_error(context, exc)
            return self._end_turn(context)

        if snapshot.player.is_defeated:
            context.log(LogEntryType.AI_STUNNED, hp=snapshot.player.hp)
            return self._end_turn(context)

        context.log(
            LogEntryType.AI_START,
            max_actions=context.max_actions,
            feature_level=self.policy.feature_level.value,
        )
        self._action_loop(context)
        return self._end_turn(context)

    def _action_loop(self, context: TurnContext) -> None:
        while (
            context.actions_taken < context.max_actions
            and context.attempts < self.settings.max_decision_attempts
        ):
            context.attempts += 1

            try:
                snapshot = self._refresh(context)
            except NotMyTurnError as exc:
                context.log(LogEntryType.AI_CHECK_FAILED, reason="turn_changed", error=exc.message)
                break
            except Exception as exc:
                logger.warning("State refresh failed, ending turn", error=str(exc))
                self._log_error(context, exc)
                break

            try:
                action = self.policy.next(snapshot, context)
            except Exception as exc:
                logger.exception("Decision policy failed")
                self._log_error(context, PolicyError(f"Decision policy failed: {exc}"))
                break

            if action is None:
                logger.debug("No beneficial action left", actions_taken=context.actions_taken)
                break

            context.log(
                LogEntryType.AI_DECISION,
                action=action.kind.value,
                target=action.target.key,
                action_number=context.actions_taken + 1,
            )

            try:
                record = self._apply(context, action)
            except Exception as exc:
                logger.warning(
                    "Action produced no effect",
                    action=action.kind.value,
                    target=action.target.key,
                    error=str(exc),
                )
                self._log_error(context, exc, action=action.kind.value)
                context.block(action.block_key)
                continue

            if record is None:
                continue

            context.record(record)
            if record.ends_now:
                break
            self._wait()

    # -------------------------------------------------------------------------
    # Actions
    # -------------------------------------------------------------------------

    def _apply(self, context: TurnContext, action: Action) -> ActionRecord | None:
        if action.kind.is_movement:
            return self._move(context, action)
        if isinstance(action, PlaceTileAction):
            return self._place_tile(context, action)
        return self._pickup(context, action)

    def _place_tile(self, context: TurnContext, action: PlaceTileAction) -> ActionRecord:
        result = self._command(
            "place_tile_sequence",
            self._port.place_tile_sequence,
            context.game_id,
            context.player_id,
            context.turn_id,
            action.target,
            action.required_open_sides,
            action.from_position,
        )
        context.block(action.block_key)
        context.log(
            LogEntryType.TILE_PLACED,
            position=action.target.key,
            steps=[{"step": step.step, "success": step.success} for step in result.steps],
        )
        return self._after_battle(context, action, result.battle)

    def _move(self, context: TurnContext, action: Action) -> ActionRecord:
        result = self._command(
            "move_player",
            self._port.move_player,
            context.game_id,
            context.player_id,
            context.turn_id,
            action.from_position,
            action.target,
            False,
        )
        if isinstance(action, HealAction):
            context.log(
                LogEntryType.AI_HEALING,
                target=action.target.key,
                direct=action.direct,
                hp=context.snapshot.player.hp if context.snapshot else None,
            )
        return self._after_battle(context, action, result.battle)

    def _after_battle(
        self,
        context: TurnContext,
        action: Action,
        battle: BattleOutcome | None,
    ) -> ActionRecord:
        if battle is None:
            return ActionRecord(
                kind=action.kind, success=True, ends_now=action.ends_now, target=action.target
            )
        try:
            self._battles.resolve(context, battle)
        except BattleResolutionError as exc:
            logger.warning("Battle could not be finalized", error=str(exc))
            self._log_error(context, exc, action=action.kind.value)
            return ActionRecord(
                kind=action.kind, success=False, ends_now=True, target=action.target, battle=battle
            )
        return ActionRecord(
            kind=action.kind, success=True, ends_now=True, target=action.target, battle=battle
        )

    def _pickup(self, context: TurnContext, action: PickupAction) -> ActionRecord | None:
        try:
            result: PickItemResult = self._port.pick_item(
                context.game_id, context.player_id, context.turn_id, action.position
            )
        except Exception as exc:
            raise DispatchError(f"pick_item failed: {exc}", command="pick_item") from exc

        context.block(action.block_key)
        if not result.success:
            context.log(
                LogEntryType.PICK_ITEM_FAILED,
                position=action.position.key,
                error=result.error,
            )
            return None

        context.log(
            LogEntryType.ITEM_PICKED,
            position=action.position.key,
            item=result.item.type if result.item else None,
            inventory_full=result.inventory_full,
        )
        if result.inventory_full:
            self._resolve_inventory_full(context, result)
        return ActionRecord(kind=action.kind, success=True, ends_now=False, target=action.position)

    def _resolve_inventory_full(self, context: TurnContext, result: PickItemResult) -> None:
        if result.item is None:
            context.log(LogEntryType.INVENTORY_ITEM_LEFT, reason="unknown_item")
            return

        removed = self._inventory.choose_replacement(result.item, result.current_inventory)
        if removed is None:
            context.log(LogEntryType.INVENTORY_ITEM_LEFT, item=result.item.type)
            return

        try:
            self._command(
                "inventory_replace",
                self._port.inventory_replace,
                context.game_id,
                context.player_id,
                context.turn_id,
                result.item.item_id,
                removed.item_id,
            )
        except DispatchError as exc:
            self._log_error(context, exc, action="inventory_replace")
            return
        context.log(
            LogEntryType.INVENTORY_REPLACED,
            added=result.item.type,
            removed=removed.type,
        )

    # -------------------------------------------------------------------------
    # Port access
    # -------------------------------------------------------------------------

    def _query(self, name: str, call: Callable[..., T], *args: Any) -> T:
        """Run a state query, retrying transient failures."""
        retrying = Retrying(
            stop=stop_after_attempt(self.settings.fetch_retry_attempts),
            wait=wait_exponential(multiplier=self.settings.fetch_retry_wait_seconds, max=2),
            retry=retry_if_exception_type(StateFetchError),
            reraise=True,
        )
        for attempt in retrying:
            with attempt:
                try:
                    value = call(*args)
                except VirtualPlayerError:
                    raise
                except Exception as exc:
                    raise StateFetchError(f"{name} failed: {exc}", query=name) from exc
        return value

    @staticmethod
    def _command(name: str, call: Callable[..., CommandResult], *args: Any) -> Any:
        """Send a command once; rejection and exceptions become DispatchError."""
        try:
            result = call(*args)
        except Exception as exc:
            raise DispatchError(f"{name} failed: {exc}", command=name) from exc
        if not result.success:
            raise DispatchError(result.error or f"{name} was rejected", command=name)
        return result

    def _current_turn(self, context: TurnContext) -> CurrentTurn | None:
        return self._query("get_current_turn", self._port.get_current_turn, context.game_id)

    def _refresh(self, context: TurnContext) -> GameSnapshot:
        """Fetch a fresh snapshot and store it on the context.

        Raises:
            NoCurrentTurnError: If the game no longer has a current turn.
            NotMyTurnError: If the turn moved on to another player.
            StateFetchError: If a query keeps failing.
        """
        game_id, player_id = context.game_id, context.player_id
        turn = self._current_turn(context)
        if turn is None:
            raise NoCurrentTurnError("Game has no current turn")
        if turn.player_id != player_id or turn.turn_id != context.turn_id:
            raise NotMyTurnError(
                "Turn has moved on", details={"current_player": str(turn.player_id)}
            )

        snapshot = GameSnapshot(
            game=self._query("get_game", self._port.get_game, game_id),
            turn=turn,
            player=self._query("get_player", self._port.get_player, game_id, player_id),
            field=self._query("get_field", self._port.get_field, game_id),
            position=self._query(
                "get_player_position", self._port.get_player_position, game_id, player_id
            ),
            available=self._query(
                "get_available_places", self._port.get_available_places, game_id, player_id
            ),
        )
        context.snapshot = snapshot
        return snapshot

    # -------------------------------------------------------------------------
    # Ending the turn
    # -------------------------------------------------------------------------

    def _end_turn(self, context: TurnContext) -> bool:
        try:
            self._command(
                "end_turn",
                self._port.end_turn,
                context.game_id,
                context.player_id,
                context.turn_id,
            )
        except DispatchError as exc:
            logger.error("EndTurn failed", error=str(exc))
            context.log(
                LogEntryType.TURN_ENDED, success=False, phase="end_turn", error=exc.message
            )
            return False
        context.log(
            LogEntryType.TURN_ENDED,
            success=True,
            actions_taken=context.actions_taken,
        )
        return True

    def _best_effort_end_turn(self, context: TurnContext) -> bool:
        """End the turn after the turn guard itself failed.

        The turn is only ended when a second lookup shows it belongs to the
        AI player. The result is always ``False``.
        """
        try:
            turn = self._port.get_current_turn(context.game_id)
        except Exception as exc:
            logger.warning("Best-effort turn lookup failed", error=str(exc))
            return False
        if turn is not None and turn.player_id == context.player_id:
            context.turn_id = turn.turn_id
            self._end_turn(context)
        return False

    @staticmethod
    def _log_error(
        context: TurnContext,
        exc: BaseException,
        *,
        phase: str | None = None,
        **details: Any,
    ) -> None:
        if phase is None:
            phase = exc.phase if isinstance(exc, VirtualPlayerError) else "unknown"
        message = exc.message if isinstance(exc, VirtualPlayerError) else str(exc)
        context.log(LogEntryType.AI_ERROR, phase=phase, error=message, **details)


__all__ = ["TurnExecutor"]
