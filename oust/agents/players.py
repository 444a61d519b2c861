from __future__ import annotations

import logging
import threading
from typing import List, Optional

import numpy as np

from oust.core import Cell, GameState, apply_move, enumerate_legal_moves
from oust.search import (
    AlphaBetaSearch,
    HeuristicEvaluator,
    HeuristicWeights,
    SearchConfig,
    SearchResult,
    Turn,
    continues_turn,
)

logger = logging.getLogger(__name__)


class Player:
    """Player interface producing one complete turn for the side to move."""

    name = "player"

    def choose_turn(self, state: GameState) -> Turn:
        raise NotImplementedError

    def timeout(self) -> None:
        """Ask a running ``choose_turn`` to return as soon as possible."""

    def spawn(self, seed: Optional[int] = None) -> "Player":
        """Return a copy of this player for another game."""
        return self


class RandomPlayer(Player):
    name = "random"

    def __init__(self, rng: Optional[np.random.Generator] = None) -> None:
        self.rng = rng or np.random.default_rng()

    def choose_turn(self, state: GameState) -> Turn:
        mover = state.current_player
        cells: List[Cell] = []
        current = state
        while True:
            moves = enumerate_legal_moves(current)
            if not moves:
                break
            cell = moves[int(self.rng.integers(len(moves)))]
            cells.append(cell)
            current = apply_move(current, cell)
            if not continues_turn(current, mover):
                break
        return Turn(tuple(cells))

    def spawn(self, seed: Optional[int] = None) -> "RandomPlayer":
        return RandomPlayer(np.random.default_rng(seed))


class AlphaBetaPlayer(Player):
    name = "alphabeta"

    def __init__(
        self,
        config: Optional[SearchConfig] = None,
        weights: Optional[HeuristicWeights] = None,
    ) -> None:
        self.config = config or SearchConfig()
        self.weights = weights or HeuristicWeights()
        self.search = AlphaBetaSearch(HeuristicEvaluator(self.weights), self.config)
        self.last_result: Optional[SearchResult] = None
        self._cancel_event: Optional[threading.Event] = None

    def choose_turn(self, state: GameState) -> Turn:
        cancel_event = threading.Event()
        self._cancel_event = cancel_event
        timer: Optional[threading.Timer] = None
        if self.config.time_limit is not None:
            timer = threading.Timer(self.config.time_limit, self.timeout)
            timer.daemon = True
            timer.start()
        try:
            result = self.search.choose_turn(state, cancel_event=cancel_event)
        finally:
            if timer is not None:
                timer.cancel()
            self._cancel_event = None

        self.last_result = result
        logger.info(
            "%s played %s (depth=%d nodes=%d score=%s %.2fs%s)",
            state.current_player.name,
            list(result.turn),
            result.depth,
            result.nodes_visited,
            result.score,
            result.elapsed,
            ", timed out" if result.cancelled else "",
        )
        return result.turn

    def timeout(self) -> None:
        event = self._cancel_event
        if event is not None:
            event.set()

    def spawn(self, seed: Optional[int] = None) -> "AlphaBetaPlayer":
        return AlphaBetaPlayer(self.config, self.weights)
