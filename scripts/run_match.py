#!/usr/bin/env python3
"""Play the alpha-beta engine against a baseline and print a JSON summary."""

import argparse
import json
from dataclasses import replace

from oust.agents import AlphaBetaPlayer, Player, RandomPlayer
from oust.config import Config, load_config
from oust.evaluation import evaluate_players
from oust.logging_setup import setup_logging


def build_opponent(config: Config) -> Player:
    if config.match.opponent == "alphabeta":
        return AlphaBetaPlayer(config.search, config.heuristic)
    return RandomPlayer()


def apply_overrides(config: Config, args: argparse.Namespace) -> Config:
    """Return ``config`` with the command-line values applied and re-validated."""
    match_overrides = {
        name: getattr(args, name)
        for name in ("episodes", "side", "opponent", "seed")
        if getattr(args, name) is not None
    }
    search_overrides = {}
    if args.depth is not None:
        search_overrides["depth"] = args.depth
    if args.time_limit is not None:
        search_overrides["time_limit"] = args.time_limit
    return replace(
        config,
        match=replace(config.match, **match_overrides),
        search=replace(config.search, **search_overrides),
    )


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--config", type=str, default="configs/match.yaml")
    parser.add_argument("--episodes", type=int)
    parser.add_argument("--depth", type=int)
    parser.add_argument("--time-limit", type=float)
    parser.add_argument("--side", type=int)
    parser.add_argument("--opponent", choices=["random", "alphabeta"])
    parser.add_argument("--seed", type=int)
    parser.add_argument("--log-level")
    args = parser.parse_args()

    config = apply_overrides(load_config(args.config), args)

    setup_logging(args.log_level or config.log_level, config.log_file)

    engine = AlphaBetaPlayer(config.search, config.heuristic)
    opponent = build_opponent(config)
    result = evaluate_players(
        engine,
        opponent,
        episodes=config.match.episodes,
        side=config.match.side,
        max_ply=config.match.max_ply,
        seed=config.match.seed,
    )

    output = {
        "episodes": result.games_played,
        "engine_wins": result.player_a_wins,
        "opponent_wins": result.player_b_wins,
        "draws": result.draws,
        "engine_winrate": result.winrate_player_a(),
        "average_turns": result.average_length,
        "depth": config.search.depth,
        "time_limit": config.search.time_limit,
        "opponent": config.match.opponent,
    }
    print(json.dumps(output, indent=2))


if __name__ == "__main__":
    main()
