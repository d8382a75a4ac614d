"""Priority-ordered decision policy.

Each call to :meth:`DecisionPolicy.next` walks a fixed priority chain over
the latest snapshot and returns the first action that applies:

1. Healing detour when HP is low and a fountain exists.
2. Tile placement, as the first action of the turn.
3. Pickup of whatever lies at the current position.
4. Beneficial movement onto a teleport gate, a fountain or an item.
5. Exploration, while at least one more action slot remains.

The feature level decides which links of the chain are active. Actions
whose key the executor has blocked for this turn are never proposed
again.
"""

from __future__ import annotations

from virtual_player.core.constants import (
    DEFAULT_HEALING_THRESHOLD,
    DEFAULT_REQUIRED_OPEN_SIDES,
    MAX_ACTIONS_PER_TURN,
)
from virtual_player.core.logging import get_logger
from virtual_player.engine.actions import (
    PLACE_TILE_BLOCK_KEY,
    Action,
    HealAction,
    MoveAction,
    PickupAction,
    PlaceTileAction,
    move_block_key,
    pickup_block_key,
)
from virtual_player.engine.context import TurnContext
from virtual_player.engine.scoring import PositionScorer, nearest_position
from virtual_player.models.enums import ActionKind, FeatureLevel
from virtual_player.models.field import Position
from virtual_player.models.game_state import GameSnapshot


logger = get_logger(__name__)


class DecisionPolicy:
    """Choose the next action of a turn.

    Args:
        scorer: Position scorer used to rank candidates.
        healing_threshold: HP at or below which healing takes priority.
        feature_level: Which parts of the priority chain are enabled.
        max_actions: Action budget of a turn.
        required_open_sides: Open sides requested for placed tiles.
    """

    def __init__(
        self,
        scorer: PositionScorer | None = None,
        *,
        healing_threshold: int = DEFAULT_HEALING_THRESHOLD,
        feature_level: FeatureLevel = FeatureLevel.FULL,
        max_actions: int = MAX_ACTIONS_PER_TURN,
        required_open_sides: int = DEFAULT_REQUIRED_OPEN_SIDES,
    ) -> None:
        self.scorer = scorer or PositionScorer()
        self.healing_threshold = healing_threshold
        self.feature_level = feature_level
        self.max_actions = max_actions
        self.required_open_sides = required_open_sides

    def next(self, snapshot: GameSnapshot, context: TurnContext) -> Action | None:
        """Return the next action, or ``None`` when the turn should end."""
        if self.feature_level == FeatureLevel.MINIMAL:
            return None

        full = self.feature_level == FeatureLevel.FULL
        chain = [
            self._healing if full else None,
            self._tile_placement,
            self._pickup,
            self._beneficial_move,
            self._exploration if full else self._movement_only,
        ]
        for step in chain:
            if step is None:
                continue
            action = step(snapshot, context)
            if action is not None:
                logger.debug(
                    "Action chosen",
                    kind=action.kind.value,
                    target=action.target.key,
                    actions_taken=context.actions_taken,
                )
                return action
        return None

    def needs_healing(self, snapshot: GameSnapshot) -> bool:
        return snapshot.player.needs_healing(self.healing_threshold)

    def budget(self, context: TurnContext) -> int:
        """Actions allowed this turn: the tighter of the policy and turn limits."""
        return min(self.max_actions, context.max_actions)

    # -------------------------------------------------------------------------
    # Priority chain
    # -------------------------------------------------------------------------

    def _healing(self, snapshot: GameSnapshot, context: TurnContext) -> HealAction | None:
        fountains = snapshot.field.healing_fountain_positions
        if not fountains or not self.needs_healing(snapshot):
            return None

        moves = self._open_moves(snapshot, context)
        if not moves:
            return None

        for fountain in fountains:
            if snapshot.available.can_move_to(fountain) and not context.is_blocked(
                move_block_key(fountain)
            ):
                return HealAction(target=fountain, from_position=snapshot.position, direct=True)

        target = nearest_position(snapshot.position, fountains)
        step = nearest_position(target, moves)
        if step is not None and step.distance_to(target) < snapshot.position.distance_to(target):
            return HealAction(target=step, from_position=snapshot.position, direct=False)

        logger.debug("Healing needed but no fountain is in reach", hp=snapshot.player.hp)
        return None

    def _tile_placement(self, snapshot: GameSnapshot, context: TurnContext) -> PlaceTileAction | None:
        if context.actions_taken != 0 or context.is_blocked(PLACE_TILE_BLOCK_KEY):
            return None
        target = self.scorer.best_tile_placement(
            snapshot.available.place_tile, snapshot.field, context.player_id
        )
        if target is None:
            return None
        return PlaceTileAction(
            target=target,
            from_position=snapshot.position,
            required_open_sides=self.required_open_sides,
        )

    def _pickup(self, snapshot: GameSnapshot, context: TurnContext) -> PickupAction | None:
        if context.is_blocked(pickup_block_key(snapshot.position)):
            return None
        return PickupAction(position=snapshot.position)

    def _beneficial_move(self, snapshot: GameSnapshot, context: TurnContext) -> MoveAction | None:
        field = snapshot.field
        needs_healing = self.needs_healing(snapshot)
        for position in self._open_moves(snapshot, context):
            if field.is_teleportation_gate(position):
                return self._move(ActionKind.MOVE_TELEPORT, position, snapshot, ends_now=False)
            if needs_healing and field.is_healing_fountain(position):
                return self._move(ActionKind.MOVE_HEALING, position, snapshot, ends_now=True)
            if field.has_claimable_item(position):
                return self._move(ActionKind.MOVE_COLLECT, position, snapshot, ends_now=True)
        return None

    def _exploration(self, snapshot: GameSnapshot, context: TurnContext) -> MoveAction | None:
        # Exploration never takes the last slot of the turn.
        if context.actions_taken >= self.budget(context) - 1:
            return None
        target = self.scorer.best_exploration_move(
            self._open_moves(snapshot, context), snapshot.field
        )
        if target is None:
            return None
        return self._move(ActionKind.EXPLORE, target, snapshot, ends_now=False)

    def _movement_only(self, snapshot: GameSnapshot, context: TurnContext) -> MoveAction | None:
        # Without exploration, a turn that could not place a tile still moves once.
        if context.actions_taken != 0 or snapshot.available.place_tile:
            return None
        target = self.scorer.best_move(
            self._open_moves(snapshot, context), snapshot.field, snapshot.player
        )
        if target is None:
            return None
        return self._move(ActionKind.EXPLORE, target, snapshot, ends_now=True)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def _open_moves(snapshot: GameSnapshot, context: TurnContext) -> list[Position]:
        return [
            position
            for position in snapshot.available.move_to
            if not context.is_blocked(move_block_key(position))
        ]

    @staticmethod
    def _move(
        kind: ActionKind,
        target: Position,
        snapshot: GameSnapshot,
        *,
        ends_now: bool,
    ) -> MoveAction:
        return MoveAction(kind=kind, target=target, from_position=snapshot.position, ends_now=ends_now)


__all__ = ["DecisionPolicy"]
