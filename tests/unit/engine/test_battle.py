"""Tests for battle outcome handling."""

from __future__ import annotations

from uuid import UUID, uuid4

import pytest

from virtual_player.core.exceptions import BattleResolutionError
from virtual_player.engine.battle import (
    BattleOutcomeHandler,
    consumable_damage,
    monster_difficulty,
    select_consumables,
)
from virtual_player.engine.context import TurnContext
from virtual_player.engine.port import CommandResult
from virtual_player.models import BattleOutcome, Consumable, Item, LogEntryType, Position


def _fireball() -> Consumable:
    return Consumable(item_id=uuid4(), type="fireball", name="Fireball")


def _outcome(result: str, **kwargs: object) -> BattleOutcome:
    return BattleOutcome(battle_id=uuid4(), result=result, position=Position(x=1, y=0), **kwargs)


@pytest.fixture
def context(game_id: UUID, player_id: UUID, turn_id: UUID) -> TurnContext:
    return TurnContext(game_id=game_id, player_id=player_id, turn_id=turn_id)


class TestLookups:
    """Tests for the damage and difficulty tables."""

    def test_consumable_damage(self) -> None:
        assert consumable_damage("fireball") == 9
        assert consumable_damage("potion") == 0

    def test_monster_difficulty(self) -> None:
        assert monster_difficulty("dragon") == 5
        assert monster_difficulty("skeleton") == 1
        assert monster_difficulty("mimic") == 1


class TestSelectConsumables:
    """Tests for greedy consumable selection."""

    def test_fireball_turns_the_fight(self) -> None:
        """Test 2 + 9 = 11 beats a monster with 10 HP."""
        fireball = _fireball()

        assert select_consumables([fireball], total_damage=2, monster_hp=10) == [fireball]

    def test_fireball_not_enough(self) -> None:
        """Test 2 + 9 = 11 does not beat a monster with 12 HP."""
        assert select_consumables([_fireball()], total_damage=2, monster_hp=12) == []

    def test_exact_hp_is_not_enough(self) -> None:
        assert select_consumables([_fireball()], total_damage=1, monster_hp=10) == []

    def test_at_most_one_selected(self) -> None:
        first, second = _fireball(), _fireball()

        assert select_consumables([first, second], total_damage=5, monster_hp=8) == [first]

    def test_skips_useless_consumables(self) -> None:
        dud = Consumable(item_id=uuid4(), type="smoke")
        fireball = _fireball()

        assert select_consumables([dud, fireball], total_damage=3, monster_hp=10) == [fireball]

    def test_empty(self) -> None:
        assert select_consumables([], total_damage=20, monster_hp=1) == []


class TestBattleOutcomeHandler:
    """Tests for battle finalization."""

    def test_win_is_not_finalized(self, port, context: TurnContext) -> None:
        """Test a win defers the reward to the next pickup."""
        handler = BattleOutcomeHandler(port)
        outcome = _outcome("win", reward=Item(item_id=uuid4(), type="sword"))

        resolution = handler.resolve(context, outcome)

        assert resolution.finalize is False
        assert port.commands == []
        assert [e.type for e in context.entries] == [LogEntryType.BATTLE_DETECTED]

    def test_draw_spends_consumable_and_picks_up(self, port, context: TurnContext) -> None:
        fireball = _fireball()
        handler = BattleOutcomeHandler(port)
        outcome = _outcome("draw", total_damage=2, monster_hp=10, available_consumables=(fireball,))

        handler.resolve(context, outcome)

        call = port.calls_to("finalize_battle")[0]
        assert call["battle_id"] == outcome.battle_id
        assert call["consumable_ids"] == [fireball.item_id]
        assert call["attempt_pickup"] is True
        assert context.entries[-1].type == LogEntryType.BATTLE_FINALIZED

    def test_draw_without_useful_consumable_still_picks_up(self, port, context: TurnContext) -> None:
        handler = BattleOutcomeHandler(port)

        handler.resolve(context, _outcome("draw", total_damage=2, monster_hp=12))

        call = port.calls_to("finalize_battle")[0]
        assert call["consumable_ids"] == []
        assert call["attempt_pickup"] is True

    def test_loss_with_consumable(self, port, context: TurnContext) -> None:
        fireball = _fireball()
        handler = BattleOutcomeHandler(port)
        outcome = _outcome("loose", total_damage=4, monster_hp=12, available_consumables=(fireball,))

        handler.resolve(context, outcome)

        call = port.calls_to("finalize_battle")[0]
        assert call["consumable_ids"] == [fireball.item_id]
        assert call["attempt_pickup"] is True

    def test_loss_accepts_defeat(self, port, context: TurnContext) -> None:
        """Test a hopeless loss finalizes without consumables or pickup."""
        handler = BattleOutcomeHandler(port)
        outcome = _outcome(
            "loose", total_damage=1, monster_hp=12, available_consumables=(_fireball(),)
        )

        handler.resolve(context, outcome)

        call = port.calls_to("finalize_battle")[0]
        assert call["consumable_ids"] == []
        assert call["attempt_pickup"] is False

    def test_detected_entry_details(self, port, context: TurnContext) -> None:
        handler = BattleOutcomeHandler(port)

        handler.resolve(context, _outcome("win", monster_type="dragon"))

        details = context.entries[0].details
        assert details["monster"] == "dragon"
        assert details["difficulty"] == 5
        assert details["position"] == "1,0"

    def test_rejected_finalize_raises(self, port, context: TurnContext) -> None:
        port.finalize_result = CommandResult(success=False, error="Battle already closed")
        handler = BattleOutcomeHandler(port)

        with pytest.raises(BattleResolutionError) as exc_info:
            handler.resolve(context, _outcome("draw"))

        assert exc_info.value.details["result"] == "draw"

    def test_failing_finalize_raises(self, port, context: TurnContext) -> None:
        port.command_errors["finalize_battle"] = TimeoutError("engine timeout")
        handler = BattleOutcomeHandler(port)

        with pytest.raises(BattleResolutionError):
            handler.resolve(context, _outcome("loose"))
