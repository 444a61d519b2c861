from __future__ import annotations

from oust.core import GameState, IllegalMoveError, apply_move, enumerate_legal_moves
from oust.search import Turn, continues_turn


class TurnValidationError(ValueError):
    pass


def validate_turn(state: GameState, turn: Turn) -> GameState:
    """Replay ``turn`` on a copy of ``state`` and return the resulting position.

    Raises :class:`TurnValidationError` when the turn is not a complete,
    legal turn for the side to move.
    """
    mover = state.current_player
    if turn.is_pass:
        if enumerate_legal_moves(state):
            raise TurnValidationError(f"{mover.name} passed although legal moves exist")
        return state.copy()

    current = state
    for index, cell in enumerate(turn):
        if index > 0 and not continues_turn(current, mover):
            raise TurnValidationError(f"placement {index} at {cell} is played after the turn ended")
        try:
            current = apply_move(current, cell)
        except IllegalMoveError as exc:
            raise TurnValidationError(f"placement {index} at {cell} is illegal: {exc}") from exc

    if continues_turn(current, mover):
        raise TurnValidationError(f"turn ends while {mover.name} still has to place after a capture")
    return current
