"""Position scoring heuristics.

Scores rank candidate cells for tile placement, plain movement and
exploration. All scoring is pure apart from the exploration jitter,
whose random source is injected so that tests can seed it.

Selection always keeps the first candidate among equal scores, in the
order the game engine enumerated them.
"""

from __future__ import annotations

import random
from collections.abc import Callable, Iterable, Sequence
from uuid import UUID

from virtual_player.core.constants import (
    EXPANSION_SCORE,
    EXPLORE_EXPANSION_SCORE,
    EXPLORE_NEARBY_ITEM_SCORE,
    EXPLORE_TELEPORT_SCORE,
    EXPLORE_UNEXPLORED_MIN_SIDES,
    EXPLORE_UNEXPLORED_SCORE,
    ITEM_PROXIMITY_WEIGHT,
    MOVE_HEALING_WEIGHT,
    MOVE_ITEM_SCORE,
    MOVE_TELEPORT_SCORE,
)
from virtual_player.core.logging import get_logger
from virtual_player.models.field import FieldBounds, FieldState, Position
from virtual_player.models.player import PlayerState


logger = get_logger(__name__)


def nearest_position(origin: Position, candidates: Iterable[Position]) -> Position | None:
    """The candidate closest to ``origin``; the first one wins ties."""
    nearest: Position | None = None
    best_distance = 0
    for candidate in candidates:
        candidate_distance = origin.distance_to(candidate)
        if nearest is None or candidate_distance < best_distance:
            nearest = candidate
            best_distance = candidate_distance
    return nearest


class PositionScorer:
    """Score candidate positions for placement, movement and exploration.

    Args:
        rng: Random source for the exploration jitter.
        jitter: Upper bound of the jitter added to exploration scores.

    Example:
        >>> scorer = PositionScorer(rng=random.Random(7))
        >>> scorer.expansion_score(Position(x=3, y=0), FieldBounds(max_x=2))
        5.0
    """

    def __init__(self, rng: random.Random | None = None, *, jitter: float = 1.0) -> None:
        self._rng = rng or random.Random()
        self.jitter = jitter

    # -------------------------------------------------------------------------
    # Tile placement
    # -------------------------------------------------------------------------

    def expansion_score(self, position: Position, bounds: FieldBounds) -> float:
        """Reward positions that grow the field."""
        return 0.0 if bounds.contains(position) else EXPANSION_SCORE

    def item_proximity_score(self, position: Position, field: FieldState) -> float:
        """Sum of inverse distances to items whose guard has been beaten."""
        score = 0.0
        for key, item in field.items.items():
            if not item.guard_defeated:
                continue
            score += ITEM_PROXIMITY_WEIGHT / max(1, position.distance_to(Position.parse(key)))
        return score

    def strategic_score(self, position: Position, field: FieldState, player_id: UUID) -> float:
        """Hook for board-control heuristics; neutral by default."""
        return 0.0

    def tile_placement_score(self, position: Position, field: FieldState, player_id: UUID) -> float:
        return (
            self.expansion_score(position, field.bounds)
            + self.item_proximity_score(position, field)
            + self.strategic_score(position, field, player_id)
        )

    def best_tile_placement(
        self,
        candidates: Sequence[Position],
        field: FieldState,
        player_id: UUID,
    ) -> Position | None:
        """Highest-scoring placement; the first candidate wins ties."""
        return self._best(candidates, lambda p: self.tile_placement_score(p, field, player_id))

    # -------------------------------------------------------------------------
    # Movement
    # -------------------------------------------------------------------------

    def move_score(self, position: Position, field: FieldState, player: PlayerState) -> float:
        """Value of standing on a position: items, healing and teleports."""
        score = 0.0
        if field.has_claimable_item(position):
            score += MOVE_ITEM_SCORE
        if field.is_healing_fountain(position) and player.is_wounded:
            score += MOVE_HEALING_WEIGHT * (1 - player.hp / player.max_hp)
        if field.is_teleportation_gate(position):
            score += MOVE_TELEPORT_SCORE
        return score

    def best_move(
        self,
        candidates: Sequence[Position],
        field: FieldState,
        player: PlayerState,
    ) -> Position | None:
        """Highest-scoring move; the first candidate wins ties."""
        return self._best(candidates, lambda p: self.move_score(p, field, player))

    # -------------------------------------------------------------------------
    # Exploration
    # -------------------------------------------------------------------------

    def is_unexplored(self, position: Position, field: FieldState) -> bool:
        """At least two side neighbours have no tile yet."""
        open_sides = sum(1 for neighbor in position.neighbors() if not field.has_tile(neighbor))
        return open_sides >= EXPLORE_UNEXPLORED_MIN_SIDES

    def has_adjacent_item(self, position: Position, field: FieldState) -> bool:
        return any(field.item_at(neighbor) is not None for neighbor in position.neighbors())

    def exploration_score(self, position: Position, field: FieldState) -> float:
        """Structural exploration value plus a small random tie-breaker."""
        score = 0.0
        if self.is_unexplored(position, field):
            score += EXPLORE_UNEXPLORED_SCORE
        if self.has_adjacent_item(position, field):
            score += EXPLORE_NEARBY_ITEM_SCORE
        if field.is_teleportation_gate(position):
            score += EXPLORE_TELEPORT_SCORE
        if not field.bounds.contains(position):
            score += EXPLORE_EXPANSION_SCORE
        return score + self._rng.random() * self.jitter

    def best_exploration_move(
        self,
        candidates: Sequence[Position],
        field: FieldState,
    ) -> Position | None:
        return self._best(candidates, lambda p: self.exploration_score(p, field))

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def _best(
        candidates: Sequence[Position],
        score_fn: Callable[[Position], float],
    ) -> Position | None:
        best: Position | None = None
        best_score = 0.0
        for candidate in candidates:
            score = score_fn(candidate)
            if best is None or score > best_score:
                best = candidate
                best_score = score
        if best is not None:
            logger.debug("Best position selected", position=best.key, score=round(best_score, 3))
        return best


__all__ = [
    "nearest_position",
    "PositionScorer",
]
