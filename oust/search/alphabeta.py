from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional, Set, Tuple

from oust.core import GameState, PlayerColor, apply_move, enumerate_legal_moves, pass_turn

from .heuristic import evaluate
from .turn import Turn, continues_turn, iter_turns

logger = logging.getLogger(__name__)

WIN_SCORE = 1_000_000_000
INF = 2 * WIN_SCORE

EvaluationFn = Callable[[GameState, PlayerColor], int]


def terminal_score(state: GameState, depth: int, player: PlayerColor) -> int:
    """Score a finished game for ``player``: faster wins and slower losses score higher."""
    winner = state.winner
    if winner is None:
        return 0
    if winner == player:
        return WIN_SCORE - depth
    return -WIN_SCORE + depth


@dataclass
class SearchConfig:
    depth: int = 4
    alpha_beta: bool = True
    # seconds; enforced by the caller's turn timer, not by the search itself
    time_limit: Optional[float] = None

    def __post_init__(self) -> None:
        if self.depth < 1:
            raise ValueError("search depth must be at least 1")
        if self.time_limit is not None and self.time_limit <= 0:
            raise ValueError("time_limit must be positive")


@dataclass
class SearchResult:
    turn: Turn
    nodes_visited: int
    depth: int
    score: Optional[int] = None
    elapsed: float = 0.0
    cancelled: bool = False


class SearchSession:
    """State owned by a single ``choose_turn`` call."""

    __slots__ = ("player", "depth_limit", "nodes", "interrupted", "external")

    def __init__(
        self,
        player: PlayerColor,
        depth_limit: int,
        external: Optional[threading.Event] = None,
    ) -> None:
        self.player = player
        self.depth_limit = depth_limit
        self.nodes = 0
        self.interrupted = threading.Event()
        self.external = external

    @property
    def cancelled(self) -> bool:
        if self.interrupted.is_set():
            return True
        return self.external is not None and self.external.is_set()


class AlphaBetaSearch:
    """Depth-limited minimax with alpha-beta pruning over complete Oust turns.

    A ply is one complete turn: chain continuations after a capture are
    expanded while the turn is built and do not consume depth. Choosing
    between continuations uses the same minimax values as choosing between
    first placements.
    """

    def __init__(
        self,
        evaluator: Optional[EvaluationFn] = None,
        config: Optional[SearchConfig] = None,
    ) -> None:
        self.evaluator = evaluator or evaluate
        self.config = config or SearchConfig()
        self._sessions: Set[SearchSession] = set()
        self._lock = threading.Lock()

    def cancel(self) -> None:
        """Interrupt every search currently running on this engine."""
        with self._lock:
            sessions = list(self._sessions)
        for session in sessions:
            session.interrupted.set()

    def choose_turn(
        self,
        state: GameState,
        depth_limit: Optional[int] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> SearchResult:
        depth_limit = self.config.depth if depth_limit is None else depth_limit
        if depth_limit < 1:
            raise ValueError("depth_limit must be at least 1")

        start = time.perf_counter()
        session = SearchSession(state.current_player, depth_limit, cancel_event)
        with self._lock:
            self._sessions.add(session)
        try:
            turn, score = self._search_root(state.copy(), session)
        finally:
            with self._lock:
                self._sessions.discard(session)

        result = SearchResult(
            turn=turn,
            nodes_visited=session.nodes,
            depth=depth_limit,
            score=score,
            elapsed=time.perf_counter() - start,
            cancelled=session.cancelled,
        )
        logger.debug(
            "search player=%s depth=%d nodes=%d score=%s elapsed=%.3fs cancelled=%s turn=%s",
            session.player.name,
            result.depth,
            result.nodes_visited,
            result.score,
            result.elapsed,
            result.cancelled,
            list(result.turn),
        )
        return result

    # ------------------------------------------------------------------
    def _search_root(self, state: GameState, session: SearchSession) -> Tuple[Turn, Optional[int]]:
        moves = enumerate_legal_moves(state)
        if not moves:
            return Turn(), None

        if len(moves) == 1:
            after = apply_move(state, moves[0])
            if not continues_turn(after, state.current_player):
                return Turn((moves[0],)), None

        alpha, beta = -INF, INF
        best_turn: Optional[Turn] = None
        best_value = -INF

        for turn, after in iter_turns(state, moves):
            if session.cancelled and best_turn is not None:
                break
            value = self._minimax(after, 1, alpha, beta, session)
            if session.cancelled and best_turn is not None:
                # the interrupted sibling's value is incomplete
                break
            if best_turn is None or value > best_value:
                best_value = value
                best_turn = turn
            if self.config.alpha_beta:
                alpha = max(alpha, best_value)
                if best_value >= beta:
                    break

        return best_turn, best_value

    def _minimax(
        self,
        state: GameState,
        depth: int,
        alpha: int,
        beta: int,
        session: SearchSession,
    ) -> int:
        session.nodes += 1

        if state.is_terminal:
            return terminal_score(state, depth, session.player)

        if session.cancelled or depth >= session.depth_limit:
            return self.evaluator(state, session.player)

        moves = enumerate_legal_moves(state)
        if not moves:
            return self._minimax(pass_turn(state), depth + 1, alpha, beta, session)

        maximizing = state.current_player == session.player
        value = -INF if maximizing else INF
        searched = 0

        for _, after in iter_turns(state, moves):
            if session.cancelled and searched:
                break
            score = self._minimax(after, depth + 1, alpha, beta, session)
            searched += 1
            if maximizing:
                value = max(value, score)
                if self.config.alpha_beta:
                    if value >= beta:
                        return value
                    alpha = max(alpha, value)
            else:
                value = min(value, score)
                if self.config.alpha_beta:
                    if value <= alpha:
                        return value
                    beta = min(beta, value)

        return value
