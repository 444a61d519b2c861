"""Oust AI core package."""

from . import agents, core, env, evaluation, features, search, validation
from .agents import AlphaBetaPlayer, Player, RandomPlayer
from .config import Config, MatchConfig, load_config
from .env import OustEnv
from .evaluation import EvaluationResult, MatchResult, evaluate_players, play_match
from .search import (
    AlphaBetaSearch,
    HeuristicEvaluator,
    HeuristicWeights,
    SearchConfig,
    SearchResult,
    Turn,
    evaluate,
)
from .validation import TurnValidationError, validate_turn

__all__ = [
    "agents",
    "core",
    "env",
    "evaluation",
    "features",
    "search",
    "validation",
    "AlphaBetaPlayer",
    "Player",
    "RandomPlayer",
    "Config",
    "MatchConfig",
    "load_config",
    "OustEnv",
    "EvaluationResult",
    "MatchResult",
    "evaluate_players",
    "play_match",
    "AlphaBetaSearch",
    "HeuristicEvaluator",
    "HeuristicWeights",
    "SearchConfig",
    "SearchResult",
    "Turn",
    "evaluate",
    "TurnValidationError",
    "validate_turn",
]
