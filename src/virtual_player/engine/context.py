"""Per-turn working state and the turn report.

A :class:`TurnContext` is created at the start of every turn, mutated only
by the turn executor and discarded when the turn ends. Nothing in it is
shared between turns, so turns of different games can run concurrently.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any
from uuid import UUID

from virtual_player.core.constants import MAX_ACTIONS_PER_TURN
from virtual_player.models.enums import ActionKind, LogEntryType
from virtual_player.models.field import Position
from virtual_player.models.game_state import BattleOutcome, GameSnapshot


@dataclass(frozen=True)
class ActionRecord:
    """An action the AI carried out.

    Attributes:
        kind: What kind of action it was.
        success: Whether it fully succeeded, battle resolution included.
        ends_now: The turn stops after this action.
        target: Cell the action was aimed at.
        battle: Battle triggered by the action, if any.
    """

    kind: ActionKind
    success: bool
    ends_now: bool
    target: Position | None = None
    battle: BattleOutcome | None = None


@dataclass(frozen=True)
class LogEntry:
    """One audit log entry of a turn."""

    type: LogEntryType
    details: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))


@dataclass(frozen=True)
class TurnReport:
    """Result of executing one turn.

    Attributes:
        success: Whether the final EndTurn was accepted.
        actions: Actions carried out, in order.
        log: Audit log entries, in order.
        actions_taken: Number of counted actions.
    """

    success: bool
    actions: tuple[ActionRecord, ...] = ()
    log: tuple[LogEntry, ...] = ()
    actions_taken: int = 0

    @property
    def entry_types(self) -> list[LogEntryType]:
        """Log entry types in order, handy for auditing."""
        return [entry.type for entry in self.log]

    def entries_of(self, entry_type: LogEntryType) -> list[LogEntry]:
        return [entry for entry in self.log if entry.type == entry_type]


@dataclass
class TurnContext:
    """Mutable state of the turn being played.

    Attributes:
        game_id: Game being played.
        player_id: AI player taking the turn.
        turn_id: Current turn, known once the turn guard has passed.
        max_actions: Action budget of this turn.
        actions_taken: Counted actions so far.
        attempts: Policy evaluations so far, successful or not.
        history: Actions carried out so far.
        entries: Audit log so far.
        snapshot: Latest state fetched from the game.
        blocked: Keys of actions that produced no effect this turn.
    """

    game_id: UUID
    player_id: UUID
    turn_id: UUID | None = None
    max_actions: int = MAX_ACTIONS_PER_TURN
    actions_taken: int = 0
    attempts: int = 0
    history: list[ActionRecord] = field(default_factory=list)
    entries: list[LogEntry] = field(default_factory=list)
    snapshot: GameSnapshot | None = None
    blocked: set[str] = field(default_factory=set)

    def log(self, entry_type: LogEntryType, **details: Any) -> LogEntry:
        """Append an audit log entry."""
        entry = LogEntry(type=entry_type, details=details)
        self.entries.append(entry)
        return entry

    def record(self, record: ActionRecord) -> None:
        """Append a carried-out action and count it against the budget."""
        self.history.append(record)
        self.actions_taken += 1

    def block(self, key: str) -> None:
        self.blocked.add(key)

    def is_blocked(self, key: str) -> bool:
        return key in self.blocked

    def report(self, *, success: bool) -> TurnReport:
        """Freeze the context into a TurnReport."""
        return TurnReport(
            success=success,
            actions=tuple(self.history),
            log=tuple(self.entries),
            actions_taken=self.actions_taken,
        )


__all__ = [
    "ActionRecord",
    "LogEntry",
    "TurnReport",
    "TurnContext",
]
