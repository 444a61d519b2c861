"""Static evaluation of Oust positions.

The score combines two signals, always seen from ``player``'s side:

* connectivity: every stone counts ``piece + group`` for its owner, and every
  pair of touching groups of opposite colours contributes a latent capture
  (own group larger) or a latent exposure (own group smaller);
* mobility: an optional, low-weighted difference in legal placements.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from oust.core import GameState, PlayerColor, enumerate_legal_moves, label_groups

# Terminal scores live above this bound; heuristic values never reach it.
HEURISTIC_LIMIT = 100_000_000


@dataclass(frozen=True)
class HeuristicWeights:
    piece: int = 10
    group: int = 20
    capture: int = 100
    threat: int = -150
    mobility: int = 0

    def __post_init__(self) -> None:
        if self.threat > 0:
            raise ValueError("threat weight must not be positive")
        if self.capture < 0:
            raise ValueError("capture weight must not be negative")


DEFAULT_WEIGHTS = HeuristicWeights()


def evaluate(state: GameState, player: PlayerColor, weights: Optional[HeuristicWeights] = None) -> int:
    weights = weights or DEFAULT_WEIGHTS
    groups = label_groups(state)

    score = 0
    for label, size in enumerate(groups.sizes):
        stones = size * (weights.piece + weights.group)
        score += stones if groups.owners[label] == player else -stones

    for own in groups.groups_of(player):
        own_size = groups.sizes[own]
        for enemy in groups.adjacent[own]:
            enemy_size = groups.sizes[enemy]
            if own_size > enemy_size:
                score += weights.capture * enemy_size
            elif own_size < enemy_size:
                score += weights.threat * own_size

    if weights.mobility:
        mobility = len(enumerate_legal_moves(state, player)) - len(enumerate_legal_moves(state, player.opponent))
        score += weights.mobility * mobility

    return max(-HEURISTIC_LIMIT, min(HEURISTIC_LIMIT, score))


class HeuristicEvaluator:
    """Callable wrapper binding a set of weights to :func:`evaluate`."""

    def __init__(self, weights: Optional[HeuristicWeights] = None) -> None:
        self.weights = weights or DEFAULT_WEIGHTS

    def __call__(self, state: GameState, player: PlayerColor) -> int:
        return evaluate(state, player, self.weights)
