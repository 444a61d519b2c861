from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

from oust.agents import Player
from oust.core import DEFAULT_MAX_PLY, DEFAULT_SIDE, GameResult, PlayerColor, encode_cell
from oust.env import OustEnv
from oust.search import Turn
from oust.validation import validate_turn

logger = logging.getLogger(__name__)


@dataclass
class MatchResult:
    result: GameResult
    turns: int
    placements: int
    history: List[Tuple[PlayerColor, Turn]] = field(default_factory=list)

    @property
    def winner(self) -> Optional[PlayerColor]:
        if self.result == GameResult.BLACK_WIN:
            return PlayerColor.BLACK
        if self.result == GameResult.WHITE_WIN:
            return PlayerColor.WHITE
        return None


@dataclass
class EvaluationResult:
    games_played: int
    player_a_wins: int
    player_b_wins: int
    draws: int
    average_length: float

    def winrate_player_a(self) -> float:
        return self.player_a_wins / max(1, self.games_played)

    def winrate_player_b(self) -> float:
        return self.player_b_wins / max(1, self.games_played)


def play_match(
    black: Player,
    white: Player,
    *,
    side: int = DEFAULT_SIDE,
    max_ply: int = DEFAULT_MAX_PLY,
    env_factory: Optional[Callable[[], OustEnv]] = None,
) -> MatchResult:
    env = env_factory() if env_factory else OustEnv(side=side, max_ply=max_ply)
    env.reset()
    players = {PlayerColor.BLACK: black, PlayerColor.WHITE: white}
    history: List[Tuple[PlayerColor, Turn]] = []
    placements = 0
    terminated = False

    while not terminated:
        mover = env.state.current_player
        turn = players[mover].choose_turn(env.state.copy())
        validate_turn(env.state, turn)
        if turn.is_pass:
            raise RuntimeError(f"{mover.name} has no legal placement in an ongoing game")
        history.append((mover, turn))
        for cell in turn:
            _, _, terminated, truncated, _ = env.step(encode_cell(cell, env.state.side))
            placements += 1
            terminated = terminated or truncated

    result = env.state.result
    logger.info("match finished: %s after %d turns (%d placements)", result.value, len(history), placements)
    return MatchResult(result=result, turns=len(history), placements=placements, history=history)


def evaluate_players(
    player_a: Player,
    player_b: Player,
    *,
    episodes: int,
    side: int = DEFAULT_SIDE,
    max_ply: int = DEFAULT_MAX_PLY,
    seed: Optional[int] = None,
) -> EvaluationResult:
    """Play ``episodes`` games, swapping colours every game (player A starts as BLACK).

    Each game is played by fresh copies from :meth:`Player.spawn`; with ``seed``
    set, game ``i`` seeds its players with ``seed + 2 * i`` and ``seed + 2 * i + 1``.
    """
    player_a_wins = 0
    player_b_wins = 0
    draws = 0
    total_turns = 0

    for episode in range(episodes):
        a_is_black = episode % 2 == 0
        game_seed = None if seed is None else seed + 2 * episode
        game_a = player_a.spawn(game_seed)
        game_b = player_b.spawn(None if game_seed is None else game_seed + 1)
        black, white = (game_a, game_b) if a_is_black else (game_b, game_a)
        match = play_match(black, white, side=side, max_ply=max_ply)
        total_turns += match.turns

        if match.winner is None:
            draws += 1
        elif (match.winner == PlayerColor.BLACK) == a_is_black:
            player_a_wins += 1
        else:
            player_b_wins += 1

    return EvaluationResult(
        games_played=episodes,
        player_a_wins=player_a_wins,
        player_b_wins=player_b_wins,
        draws=draws,
        average_length=total_turns / max(1, episodes),
    )
