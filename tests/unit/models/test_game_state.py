"""Tests for game state models."""

from __future__ import annotations

from uuid import uuid4

import pytest
from pydantic import ValidationError

from virtual_player.models.enums import ActionKind, BattleResult
from virtual_player.models.field import Position
from virtual_player.models.game_state import AvailablePlaces, BattleOutcome, GameInfo


class TestGameInfo:
    """Tests for GameInfo."""

    @pytest.mark.parametrize(
        ("status", "finished"),
        [("started", False), ("ended", True), ("finished", True)],
    )
    def test_is_finished(self, status: str, finished: bool) -> None:
        assert GameInfo(game_id=uuid4(), status=status).is_finished is finished


class TestAvailablePlaces:
    """Tests for AvailablePlaces."""

    def test_positions_parse_from_strings(self) -> None:
        """Test the engine's 'x,y' strings become positions, order kept."""
        places = AvailablePlaces.model_validate({"place_tile": ["1,0", "0,1"], "move_to": ["-1,0"]})

        assert places.place_tile == (Position(x=1, y=0), Position(x=0, y=1))
        assert places.can_move_to(Position(x=-1, y=0))
        assert not places.can_move_to(Position(x=1, y=0))


class TestBattleOutcome:
    """Tests for BattleOutcome parsing."""

    def test_engine_payload(self) -> None:
        outcome = BattleOutcome.model_validate(
            {
                "battle_id": str(uuid4()),
                "result": "loose",
                "monster_type": "skeleton_king",
                "total_damage": 4,
                "monster_hp": 10,
                "position": "2,-1",
                "available_consumables": [{"item_id": str(uuid4()), "type": "fireball"}],
            }
        )

        assert outcome.result == BattleResult.LOSS
        assert outcome.position == Position(x=2, y=-1)
        assert outcome.available_consumables[0].type == "fireball"
        assert outcome.reward is None

    @pytest.mark.parametrize("value", ["lose", "loss", "LOST"])
    def test_loss_spellings(self, value: str) -> None:
        assert BattleResult(value) == BattleResult.LOSS

    def test_unknown_result_rejected(self) -> None:
        with pytest.raises(ValidationError):
            BattleOutcome(battle_id=uuid4(), result="fled")


class TestActionKind:
    """Tests for ActionKind helpers."""

    def test_movement_kinds(self) -> None:
        assert ActionKind.EXPLORE.is_movement
        assert ActionKind.HEAL.is_movement
        assert not ActionKind.PLACE_TILE.is_movement
        assert not ActionKind.PICK_ITEM.is_movement
