"""Pytest configuration and shared fixtures.

This module provides common fixtures for the virtual player test suite,
most notably :class:`FakeGamePort`, a scripted in-memory game engine that
records every command it receives.
"""

from __future__ import annotations

import random
from typing import TYPE_CHECKING, Any
from uuid import UUID, uuid4

import pytest

from virtual_player.core.config import AISettings
from virtual_player.engine.executor import TurnExecutor
from virtual_player.engine.pacing import NoWait
from virtual_player.engine.policy import DecisionPolicy
from virtual_player.engine.port import (
    CommandResult,
    MoveResult,
    PickItemResult,
    PlaceTileSequenceResult,
    SequenceStep,
)
from virtual_player.engine.scoring import PositionScorer
from virtual_player.models import (
    AvailablePlaces,
    CurrentTurn,
    FieldBounds,
    FieldState,
    GameInfo,
    PlacedTile,
    PlayerState,
    Position,
)


if TYPE_CHECKING:
    from collections.abc import Callable, Generator


# =============================================================================
# Fake Game Port
# =============================================================================


class FakeGamePort:
    """In-memory game engine driven by test scripts.

    State attributes (``turn``, ``player``, ``field``, ``position``,
    ``available``) are returned by the queries and may be replaced freely.
    Command outcomes are scripted per target; unscripted moves and tile
    placements succeed, unscripted pickups find nothing.
    """

    def __init__(self, game_id: UUID, player_id: UUID, turn_id: UUID) -> None:
        self.game = GameInfo(game_id=game_id, status="started")
        self.turn: CurrentTurn | None = CurrentTurn(turn_id=turn_id, player_id=player_id)
        self.player = PlayerState(player_id=player_id, hp=3, max_hp=3)
        self.field = FieldState(
            tiles=(PlacedTile(position=Position(x=0, y=0)),),
            bounds=FieldBounds(),
        )
        self.position = Position(x=0, y=0)
        self.available = AvailablePlaces()

        self.place_results: list[PlaceTileSequenceResult] = []
        self.move_results: dict[Position, MoveResult] = {}
        self.pick_results: dict[Position, PickItemResult] = {}
        self.finalize_result = CommandResult(success=True)
        self.replace_result = CommandResult(success=True)
        self.end_turn_results: list[CommandResult] = []

        self.query_failures: dict[str, int] = {}
        self.command_errors: dict[str, Exception] = {}
        self.end_turn_passes_turn = True

        self.queries: list[str] = []
        self.calls: list[tuple[str, dict[str, Any]]] = []

    # -- helpers --------------------------------------------------------------

    @property
    def commands(self) -> list[str]:
        return [name for name, _ in self.calls]

    def calls_to(self, name: str) -> list[dict[str, Any]]:
        return [kwargs for command, kwargs in self.calls if command == name]

    def _query(self, name: str, value: Any) -> Any:
        self.queries.append(name)
        remaining = self.query_failures.get(name, 0)
        if remaining:
            self.query_failures[name] = remaining - 1
            raise ConnectionError(f"{name} unavailable")
        return value

    def _command(self, name: str, **kwargs: Any) -> None:
        self.calls.append((name, kwargs))
        if name in self.command_errors:
            raise self.command_errors[name]

    # -- queries --------------------------------------------------------------

    def get_game(self, game_id: UUID) -> GameInfo:
        return self._query("get_game", self.game)

    def get_current_turn(self, game_id: UUID) -> CurrentTurn | None:
        return self._query("get_current_turn", self.turn)

    def get_field(self, game_id: UUID) -> FieldState:
        return self._query("get_field", self.field)

    def get_player(self, game_id: UUID, player_id: UUID) -> PlayerState:
        return self._query("get_player", self.player)

    def get_player_position(self, game_id: UUID, player_id: UUID) -> Position:
        return self._query("get_player_position", self.position)

    def get_available_places(self, game_id: UUID, player_id: UUID) -> AvailablePlaces:
        return self._query("get_available_places", self.available)

    # -- commands -------------------------------------------------------------

    def place_tile_sequence(
        self,
        game_id: UUID,
        player_id: UUID,
        turn_id: UUID,
        target: Position,
        required_open_sides: int,
        from_position: Position,
    ) -> PlaceTileSequenceResult:
        self._command(
            "place_tile_sequence",
            target=target,
            required_open_sides=required_open_sides,
            from_position=from_position,
        )
        if self.place_results:
            result = self.place_results.pop(0)
        else:
            result = PlaceTileSequenceResult(
                success=True,
                steps=(
                    SequenceStep(step="pick_tile"),
                    SequenceStep(step="place_tile"),
                    SequenceStep(step="move_player"),
                ),
            )
        if result.success:
            self.field = self.field.model_copy(
                update={"tiles": (*self.field.tiles, PlacedTile(position=target))}
            )
            self.position = target
            self.available = AvailablePlaces(move_to=self.available.move_to)
        return result

    def move_player(
        self,
        game_id: UUID,
        player_id: UUID,
        turn_id: UUID,
        from_position: Position,
        to_position: Position,
        ignore_monster: bool = False,
    ) -> MoveResult:
        self._command("move_player", from_position=from_position, to_position=to_position)
        result = self.move_results.get(to_position, MoveResult(success=True))
        if result.success:
            self.position = to_position
            self.available = AvailablePlaces(
                place_tile=self.available.place_tile,
                move_to=tuple(p for p in self.available.move_to if p != to_position),
            )
        return result

    def pick_item(
        self,
        game_id: UUID,
        player_id: UUID,
        turn_id: UUID,
        position: Position,
    ) -> PickItemResult:
        self._command("pick_item", position=position)
        return self.pick_results.get(
            position, PickItemResult(success=False, error="No item at position")
        )

    def finalize_battle(
        self,
        game_id: UUID,
        player_id: UUID,
        turn_id: UUID,
        battle_id: UUID,
        consumable_ids: list[UUID],
        attempt_pickup: bool,
    ) -> CommandResult:
        self._command(
            "finalize_battle",
            battle_id=battle_id,
            consumable_ids=consumable_ids,
            attempt_pickup=attempt_pickup,
        )
        return self.finalize_result

    def inventory_replace(
        self,
        game_id: UUID,
        player_id: UUID,
        turn_id: UUID,
        new_item_id: UUID,
        removed_item_id: UUID,
    ) -> CommandResult:
        self._command("inventory_replace", new_item_id=new_item_id, removed_item_id=removed_item_id)
        return self.replace_result

    def end_turn(self, game_id: UUID, player_id: UUID, turn_id: UUID) -> CommandResult:
        self._command("end_turn", turn_id=turn_id)
        result = self.end_turn_results.pop(0) if self.end_turn_results else CommandResult(success=True)
        if result.success and self.end_turn_passes_turn:
            self.turn = None
        return result


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    from virtual_player.core.config import clear_settings_cache

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def ai_settings() -> AISettings:
    """Settings without pauses and with a fixed random seed."""
    return AISettings(
        action_delay_ms=0,
        fetch_retry_wait_seconds=0,
        random_seed=7,
    )


# =============================================================================
# Identity Fixtures
# =============================================================================


@pytest.fixture
def game_id() -> UUID:
    return uuid4()


@pytest.fixture
def player_id() -> UUID:
    return uuid4()


@pytest.fixture
def turn_id() -> UUID:
    return uuid4()


# =============================================================================
# Engine Fixtures
# =============================================================================


@pytest.fixture
def port(game_id: UUID, player_id: UUID, turn_id: UUID) -> FakeGamePort:
    """A game where it is the AI player's turn, healthy, at the origin."""
    return FakeGamePort(game_id, player_id, turn_id)


@pytest.fixture
def make_executor(
    port: FakeGamePort,
    ai_settings: AISettings,
) -> Callable[..., TurnExecutor]:
    """Factory building a TurnExecutor over the fake port.

    Keyword arguments are passed to DecisionPolicy.
    """

    def _make(**policy_kwargs: Any) -> TurnExecutor:
        policy_kwargs.setdefault("healing_threshold", 1)
        policy = DecisionPolicy(PositionScorer(random.Random(7)), **policy_kwargs)
        return TurnExecutor(port, policy, settings=ai_settings, wait=NoWait())

    return _make


@pytest.fixture
def executor(make_executor: Callable[..., TurnExecutor]) -> TurnExecutor:
    return make_executor()
