"""Core game logic for Oust."""

from .state import Cell, GameResult, GameState, MoveRecord, PlayerColor
from .rules import (
    DEFAULT_MAX_PLY,
    DEFAULT_SIDE,
    DIRECTIONS,
    GroupMap,
    HexGrid,
    IllegalMoveError,
    Placement,
    apply_move,
    classify_placement,
    decode_cell,
    encode_cell,
    enumerate_legal_moves,
    hex_grid,
    initialize_game_state,
    label_groups,
    pass_turn,
)

__all__ = [
    "Cell",
    "GameState",
    "GameResult",
    "MoveRecord",
    "PlayerColor",
    "DEFAULT_MAX_PLY",
    "DEFAULT_SIDE",
    "DIRECTIONS",
    "GroupMap",
    "HexGrid",
    "IllegalMoveError",
    "Placement",
    "apply_move",
    "classify_placement",
    "decode_cell",
    "encode_cell",
    "enumerate_legal_moves",
    "hex_grid",
    "initialize_game_state",
    "label_groups",
    "pass_turn",
]
