"""Alpha-beta turn search and static evaluation."""

from .alphabeta import (
    INF,
    WIN_SCORE,
    AlphaBetaSearch,
    EvaluationFn,
    SearchConfig,
    SearchResult,
    SearchSession,
    terminal_score,
)
from .heuristic import DEFAULT_WEIGHTS, HEURISTIC_LIMIT, HeuristicEvaluator, HeuristicWeights, evaluate
from .turn import Turn, continues_turn, iter_turns

__all__ = [
    "INF",
    "WIN_SCORE",
    "AlphaBetaSearch",
    "EvaluationFn",
    "SearchConfig",
    "SearchResult",
    "SearchSession",
    "terminal_score",
    "DEFAULT_WEIGHTS",
    "HEURISTIC_LIMIT",
    "HeuristicEvaluator",
    "HeuristicWeights",
    "evaluate",
    "Turn",
    "continues_turn",
    "iter_turns",
]
