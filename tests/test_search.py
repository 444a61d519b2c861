import threading

from oust.agents import AlphaBetaPlayer
from oust.core import (
    GameResult,
    GameState,
    Placement,
    PlayerColor,
    classify_placement,
    enumerate_legal_moves,
    initialize_game_state,
)
from oust.search import (
    WIN_SCORE,
    AlphaBetaSearch,
    SearchConfig,
    Turn,
    evaluate,
    iter_turns,
    terminal_score,
)
from oust.validation import validate_turn


def mid_game_state() -> GameState:
    state = initialize_game_state(side=3)
    state.board[2, 2] = PlayerColor.BLACK
    state.board[1, 1] = PlayerColor.WHITE
    state.board[3, 3] = PlayerColor.WHITE
    state.board[4, 2] = PlayerColor.BLACK
    return state


def quiet_state() -> GameState:
    state = initialize_game_state(side=3)
    state.board[1, 2] = PlayerColor.BLACK
    state.board[3, 1] = PlayerColor.WHITE
    return state


def chain_state() -> GameState:
    """Black can only win by capturing the single white stone and then the block of four."""
    state = initialize_game_state(side=4)
    for cell in [(3, 2), (3, 3), (3, 4)]:
        state.board[cell] = PlayerColor.BLACK
    for cell in [(4, 4), (0, 0), (0, 1), (1, 0), (1, 1)]:
        state.board[cell] = PlayerColor.WHITE
    return state


def test_no_legal_moves_returns_pass() -> None:
    state = initialize_game_state(side=2)
    state.board[0, 0] = PlayerColor.BLACK
    state.board[0, 1] = PlayerColor.BLACK
    state.board[1, 1] = PlayerColor.WHITE
    state.current_player = PlayerColor.WHITE

    result = AlphaBetaSearch().choose_turn(state, depth_limit=3)

    assert result.turn == Turn()
    assert result.turn.is_pass
    assert result.nodes_visited == 0


def test_single_legal_move_skips_search() -> None:
    state = initialize_game_state(side=2)
    state.board[0, 0] = PlayerColor.BLACK
    state.board[1, 2] = PlayerColor.BLACK
    assert enumerate_legal_moves(state) == [(2, 1)]

    result = AlphaBetaSearch().choose_turn(state, depth_limit=4)

    assert list(result.turn) == [(2, 1)]
    assert result.nodes_visited == 0
    assert result.depth == 4


def test_empty_board_depth_one_visits_every_first_move() -> None:
    state = initialize_game_state(side=7)
    legal = enumerate_legal_moves(state)

    result = AlphaBetaSearch().choose_turn(state, depth_limit=1)

    assert len(result.turn) == 1
    assert result.turn.first in legal
    assert result.depth == 1
    assert result.nodes_visited >= len(legal)


def test_search_is_deterministic() -> None:
    engine = AlphaBetaSearch(config=SearchConfig(depth=2))
    first = engine.choose_turn(mid_game_state())
    second = engine.choose_turn(mid_game_state())

    assert first.turn == second.turn
    assert first.nodes_visited == second.nodes_visited
    assert first.score == second.score


def test_pruning_does_not_change_the_result() -> None:
    positions = [mid_game_state(), quiet_state(), initialize_game_state(side=2)]
    for state, depth in zip(positions, [2, 2, 3]):
        pruned = AlphaBetaSearch(config=SearchConfig(depth=depth, alpha_beta=True)).choose_turn(state)
        full = AlphaBetaSearch(config=SearchConfig(depth=depth, alpha_beta=False)).choose_turn(state)

        assert pruned.turn == full.turn
        assert pruned.score == full.score
        assert pruned.nodes_visited <= full.nodes_visited


def test_terminal_scores_prefer_fast_wins_and_slow_losses() -> None:
    won = initialize_game_state(side=3)
    won.result = GameResult.BLACK_WIN
    drawn = initialize_game_state(side=3)
    drawn.result = GameResult.DRAW

    assert terminal_score(won, 1, PlayerColor.BLACK) > terminal_score(won, 3, PlayerColor.BLACK)
    assert terminal_score(won, 3, PlayerColor.WHITE) > terminal_score(won, 1, PlayerColor.WHITE)
    assert terminal_score(won, 9, PlayerColor.WHITE) < terminal_score(drawn, 1, PlayerColor.BLACK)
    assert terminal_score(drawn, 1, PlayerColor.BLACK) < terminal_score(won, 9, PlayerColor.BLACK)
    assert terminal_score(drawn, 4, PlayerColor.WHITE) == 0


def test_capture_is_preferred_over_quiet_placement() -> None:
    state = initialize_game_state(side=4)
    for cell in [(3, 2), (3, 3), (3, 4)]:
        state.board[cell] = PlayerColor.BLACK
    state.board[4, 4] = PlayerColor.WHITE
    assert evaluate(state, PlayerColor.BLACK) > 0

    result = AlphaBetaSearch().choose_turn(state, depth_limit=2)

    assert classify_placement(state, result.turn.first, PlayerColor.BLACK) is Placement.CAPTURE
    final = validate_turn(state, result.turn)
    assert final.board[4, 4] == 0
    assert final.winner == PlayerColor.BLACK
    assert result.score == WIN_SCORE - 1


def test_chain_capture_turn_is_played_to_the_end() -> None:
    state = chain_state()

    result = AlphaBetaSearch().choose_turn(state, depth_limit=2)

    assert len(result.turn) >= 2
    final = validate_turn(state, result.turn)
    assert final.result == GameResult.BLACK_WIN
    assert result.score == WIN_SCORE - 1


def test_iter_turns_expands_every_continuation() -> None:
    state = mid_game_state()
    turns = list(iter_turns(state))

    assert all(len(turn) >= 1 for turn, _ in turns)
    assert any(len(turn) >= 2 for turn, _ in turns)
    for turn, after in turns:
        assert validate_turn(state, turn).board.tolist() == after.board.tolist()


def test_preset_cancellation_still_returns_a_legal_turn() -> None:
    state = mid_game_state()
    cancel_event = threading.Event()
    cancel_event.set()

    result = AlphaBetaSearch(config=SearchConfig(depth=3)).choose_turn(state, cancel_event=cancel_event)

    assert result.cancelled
    assert not result.turn.is_pass
    validate_turn(state, result.turn)
    assert result.nodes_visited == 1


def test_cancellation_mid_search_keeps_completed_siblings() -> None:
    state = mid_game_state()
    cancel_event = threading.Event()
    calls = {"count": 0}

    def counting_evaluator(position, player):
        calls["count"] += 1
        if calls["count"] == 40:
            cancel_event.set()
        return evaluate(position, player)

    engine = AlphaBetaSearch(counting_evaluator, SearchConfig(depth=3))
    result = engine.choose_turn(state, cancel_event=cancel_event)

    assert result.cancelled
    validate_turn(state, result.turn)
    assert result.nodes_visited > 0


def test_engine_cancel_from_timer() -> None:
    state = initialize_game_state(side=7)
    state.board[6, 6] = PlayerColor.BLACK
    state.current_player = PlayerColor.WHITE
    engine = AlphaBetaSearch(config=SearchConfig(depth=4))

    timer = threading.Timer(0.2, engine.cancel)
    timer.start()
    try:
        result = engine.choose_turn(state)
    finally:
        timer.cancel()

    assert result.cancelled
    validate_turn(state, result.turn)


def test_player_time_limit_interrupts_search() -> None:
    state = initialize_game_state(side=7)
    player = AlphaBetaPlayer(SearchConfig(depth=4, time_limit=0.2))

    turn = player.choose_turn(state)

    assert player.last_result is not None
    assert player.last_result.cancelled
    assert player.last_result.turn == turn
    validate_turn(state, turn)


def test_cancel_reaches_search_that_outlives_another_call() -> None:
    started = threading.Event()

    def signalling_evaluator(position, player):
        started.set()
        return evaluate(position, player)

    engine = AlphaBetaSearch(signalling_evaluator, SearchConfig(depth=4))
    results = []
    long_search = threading.Thread(
        target=lambda: results.append(engine.choose_turn(initialize_game_state(side=7))),
        daemon=True,
    )
    long_search.start()
    assert started.wait(10)

    short = engine.choose_turn(mid_game_state(), depth_limit=1)
    assert not short.cancelled

    engine.cancel()
    long_search.join(10)

    assert not long_search.is_alive()
    assert results[0].cancelled
    validate_turn(initialize_game_state(side=7), results[0].turn)
