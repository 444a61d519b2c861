"""Match helpers for comparing Oust players."""

from .match import EvaluationResult, MatchResult, evaluate_players, play_match

__all__ = ["EvaluationResult", "MatchResult", "evaluate_players", "play_match"]
