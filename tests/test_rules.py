import numpy as np
import pytest

from oust.core import (
    GameResult,
    GameState,
    IllegalMoveError,
    Placement,
    PlayerColor,
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


def fresh_state(side: int = 3) -> GameState:
    return initialize_game_state(side=side)


def test_grid_has_hexagonal_cell_count() -> None:
    assert len(hex_grid(7).cells) == 127
    assert len(hex_grid(3).cells) == 19
    assert hex_grid(3).size == 5
    assert not hex_grid(3).contains((0, 4))
    assert len(hex_grid(3).neighbours[(2, 2)]) == 6


def test_empty_board_every_cell_is_legal() -> None:
    state = initialize_game_state()
    assert len(enumerate_legal_moves(state)) == 127
    assert len(enumerate_legal_moves(fresh_state())) == 19


def test_quiet_placement_passes_turn() -> None:
    state = fresh_state()
    next_state = apply_move(state, (2, 2))

    assert next_state.board[2, 2] == PlayerColor.BLACK
    assert next_state.current_player == PlayerColor.WHITE
    assert next_state.ply_count == 1
    assert not next_state.last_move.captured
    # the input state is untouched
    assert state.board[2, 2] == 0


def test_placement_next_to_own_stone_without_capture_is_illegal() -> None:
    state = fresh_state()
    state.board[2, 2] = PlayerColor.BLACK

    assert classify_placement(state, (2, 3), PlayerColor.BLACK) is Placement.ILLEGAL
    assert (2, 3) not in enumerate_legal_moves(state)
    assert (0, 0) in enumerate_legal_moves(state)
    with pytest.raises(IllegalMoveError):
        apply_move(state, (2, 3))


def test_capture_removes_smaller_group_and_keeps_turn() -> None:
    state = fresh_state()
    state.board[2, 1] = PlayerColor.BLACK
    state.board[2, 2] = PlayerColor.BLACK
    state.board[3, 3] = PlayerColor.WHITE
    state.board[0, 2] = PlayerColor.WHITE

    assert classify_placement(state, (2, 3), PlayerColor.BLACK) is Placement.CAPTURE
    next_state = apply_move(state, (2, 3))

    assert next_state.board[3, 3] == 0
    assert next_state.board[0, 2] == PlayerColor.WHITE
    assert next_state.current_player == PlayerColor.BLACK
    assert next_state.result == GameResult.ONGOING
    assert next_state.last_move.captured
    assert next_state.last_move.captured_cells == ((3, 3),)


def test_capturing_last_enemy_stones_wins() -> None:
    state = fresh_state()
    state.board[2, 1] = PlayerColor.BLACK
    state.board[2, 2] = PlayerColor.BLACK
    state.board[3, 3] = PlayerColor.WHITE

    next_state = apply_move(state, (2, 3))

    assert next_state.result == GameResult.BLACK_WIN
    assert next_state.winner == PlayerColor.BLACK
    assert next_state.is_terminal
    assert enumerate_legal_moves(next_state) == []


def test_capture_requires_strictly_larger_group() -> None:
    state = fresh_state()
    state.board[2, 2] = PlayerColor.BLACK
    state.board[3, 3] = PlayerColor.WHITE
    state.board[4, 4] = PlayerColor.WHITE

    # black would form a group of two against a white group of two
    assert classify_placement(state, (2, 3), PlayerColor.BLACK) is Placement.ILLEGAL
    with pytest.raises(IllegalMoveError):
        apply_move(state, (2, 3))


def test_turn_returns_to_mover_when_opponent_cannot_place() -> None:
    state = fresh_state(side=2)
    state.board[0, 0] = PlayerColor.BLACK
    state.board[0, 1] = PlayerColor.BLACK
    state.board[1, 1] = PlayerColor.WHITE

    assert enumerate_legal_moves(state, PlayerColor.WHITE) == []
    next_state = apply_move(state, (2, 1))

    assert next_state.result == GameResult.ONGOING
    assert next_state.current_player == PlayerColor.BLACK


def test_max_ply_results_in_draw() -> None:
    state = fresh_state()
    state.max_ply = 1

    next_state = apply_move(state, (2, 2))

    assert next_state.result == GameResult.DRAW
    assert next_state.winner is None


def test_invalid_placements_raise() -> None:
    state = fresh_state()
    state.board[2, 2] = PlayerColor.WHITE

    with pytest.raises(IllegalMoveError):
        apply_move(state, (2, 2))
    with pytest.raises(IllegalMoveError):
        apply_move(state, (0, 4))

    state.result = GameResult.WHITE_WIN
    with pytest.raises(IllegalMoveError):
        apply_move(state, (0, 0))


def test_pass_turn_keeps_board() -> None:
    state = fresh_state()
    state.board[1, 1] = PlayerColor.BLACK

    passed = pass_turn(state)

    assert passed.current_player == PlayerColor.WHITE
    assert np.array_equal(passed.board, state.board)
    assert passed.board is not state.board


def test_label_groups_records_sizes_and_contacts() -> None:
    state = fresh_state()
    state.board[2, 1] = PlayerColor.BLACK
    state.board[2, 2] = PlayerColor.BLACK
    state.board[3, 3] = PlayerColor.WHITE
    state.board[0, 0] = PlayerColor.WHITE

    groups = label_groups(state)
    black = groups.labels[2, 1]
    white_near = groups.labels[3, 3]
    white_far = groups.labels[0, 0]

    assert groups.labels[2, 2] == black
    assert groups.sizes[black] == 2
    assert groups.adjacent[black] == {white_near}
    assert groups.adjacent[white_far] == set()
    assert groups.labels[1, 0] == -1


def test_cell_encoding() -> None:
    index = encode_cell((3, 4), side=3)
    assert index == 19
    assert decode_cell(index, side=3) == (3, 4)
    with pytest.raises(ValueError):
        decode_cell(4, side=3)
