"""Checks applied to turns returned by players."""

from .turn_checks import TurnValidationError, validate_turn

__all__ = ["TurnValidationError", "validate_turn"]
