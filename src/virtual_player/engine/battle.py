"""Battle outcome handling.

When a move lands the player on a guarded tile the game engine resolves
the fight and reports a :class:`BattleOutcome`. The AI then decides how
to finalize it:

- **Win**: nothing to finalize; the reward is picked up by the next
  decision cycle.
- **Draw**: spend at most one consumable and ask for the reward.
- **Loss**: spend a consumable if one turns the fight, otherwise accept
  defeat without a pickup.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from uuid import UUID

from virtual_player.core.constants import CONSUMABLE_DAMAGE, MONSTER_DIFFICULTY
from virtual_player.core.exceptions import BattleResolutionError
from virtual_player.core.logging import get_logger
from virtual_player.engine.context import TurnContext
from virtual_player.engine.port import GamePort
from virtual_player.models.enums import BattleResult, LogEntryType
from virtual_player.models.game_state import BattleOutcome
from virtual_player.models.player import Consumable


logger = get_logger(__name__)


def consumable_damage(consumable_type: str) -> int:
    """Extra damage a consumable adds; unknown types add nothing."""
    return CONSUMABLE_DAMAGE.get(consumable_type, 0)


def monster_difficulty(monster_type: str) -> int:
    """Difficulty rating of a monster; unknown monsters rate 1."""
    return MONSTER_DIFFICULTY.get(monster_type, 1)


def select_consumables(
    consumables: Sequence[Consumable],
    total_damage: int,
    monster_hp: int,
) -> list[Consumable]:
    """Pick the first consumable that pushes damage past the monster's HP.

    At most one consumable is ever selected.

    Args:
        consumables: Consumables available, in the order offered.
        total_damage: Damage dealt without consumables.
        monster_hp: Monster hit points to beat.

    Returns:
        A list holding the chosen consumable, or an empty list.

    Example:
        >>> select_consumables([fireball], total_damage=2, monster_hp=10)
        [fireball]
    """
    for consumable in consumables:
        if total_damage + consumable_damage(consumable.type) > monster_hp:
            return [consumable]
    return []


@dataclass(frozen=True)
class BattleResolution:
    """How a battle is to be finalized.

    Attributes:
        result: Reported battle result.
        consumable_ids: Consumables to spend.
        attempt_pickup: Ask the engine to pick up the reward.
        finalize: Whether a FinalizeBattle command is needed at all.
    """

    result: BattleResult
    consumable_ids: tuple[UUID, ...] = ()
    attempt_pickup: bool = False
    finalize: bool = True


class BattleOutcomeHandler:
    """Turn a battle outcome into the follow-up commands."""

    def __init__(self, port: GamePort) -> None:
        self._port = port

    def plan(self, outcome: BattleOutcome) -> BattleResolution:
        """Decide how to finalize a battle without issuing any command.

        Raises:
            BattleResolutionError: If the result is not one the AI understands.
        """
        match outcome.result:
            case BattleResult.WIN:
                return BattleResolution(result=outcome.result, finalize=False)
            case BattleResult.DRAW:
                selected = select_consumables(
                    outcome.available_consumables, outcome.total_damage, outcome.monster_hp
                )
                return BattleResolution(
                    result=outcome.result,
                    consumable_ids=tuple(c.item_id for c in selected),
                    attempt_pickup=True,
                )
            case BattleResult.LOSS:
                selected = select_consumables(
                    outcome.available_consumables, outcome.total_damage, outcome.monster_hp
                )
                return BattleResolution(
                    result=outcome.result,
                    consumable_ids=tuple(c.item_id for c in selected),
                    attempt_pickup=bool(selected),
                )
            case _:
                raise BattleResolutionError(
                    "Unknown battle result",
                    battle_id=str(outcome.battle_id),
                    result=str(outcome.result),
                )

    def resolve(self, context: TurnContext, outcome: BattleOutcome) -> BattleResolution:
        """Log the battle and finalize it through the port.

        Args:
            context: The turn being played.
            outcome: Battle reported by the game engine.

        Returns:
            The resolution that was applied.

        Raises:
            BattleResolutionError: If the battle could not be finalized.
        """
        context.log(
            LogEntryType.BATTLE_DETECTED,
            result=outcome.result.value,
            monster=outcome.monster_type,
            difficulty=monster_difficulty(outcome.monster_type),
            total_damage=outcome.total_damage,
            monster_hp=outcome.monster_hp,
            position=outcome.position.key if outcome.position else None,
        )
        resolution = self.plan(outcome)

        logger.info(
            "Handling battle",
            result=outcome.result.value,
            monster=outcome.monster_type,
            consumables=len(resolution.consumable_ids),
        )

        if not resolution.finalize:
            if outcome.reward is not None and not outcome.reward_already_collected:
                logger.debug("Battle reward left for the next pickup", reward=outcome.reward.name)
            return resolution

        try:
            result = self._port.finalize_battle(
                context.game_id,
                context.player_id,
                context.turn_id,
                outcome.battle_id,
                list(resolution.consumable_ids),
                resolution.attempt_pickup,
            )
        except Exception as exc:
            raise BattleResolutionError(
                f"Finalizing battle failed: {exc}",
                battle_id=str(outcome.battle_id),
                result=outcome.result.value,
            ) from exc

        if not result.success:
            raise BattleResolutionError(
                result.error or "Finalizing battle was rejected",
                battle_id=str(outcome.battle_id),
                result=outcome.result.value,
            )

        context.log(
            LogEntryType.BATTLE_FINALIZED,
            result=outcome.result.value,
            consumables=[str(item_id) for item_id in resolution.consumable_ids],
            attempt_pickup=resolution.attempt_pickup,
        )
        return resolution


__all__ = [
    "consumable_damage",
    "monster_difficulty",
    "select_consumables",
    "BattleResolution",
    "BattleOutcomeHandler",
]
