#!/usr/bin/env python3
"""Play Oust against the alpha-beta engine in the console, with optional logging & replay."""

import argparse
import json
import sys
from pathlib import Path
from typing import Dict, List

from oust import AlphaBetaPlayer, OustEnv
from oust.config import load_config
from oust.core import Cell, GameResult, PlayerColor, decode_cell, encode_cell, enumerate_legal_moves
from oust.env import render_board
from oust.logging_setup import setup_logging
from oust.search import SearchConfig


def format_board(env: OustEnv) -> str:
    return render_board(env.state)


def prompt_human_move(env: OustEnv) -> Cell:
    legal = set(enumerate_legal_moves(env.state))
    print("Legal placements: " + " ".join(f"{r},{c}" for r, c in sorted(legal)))
    while True:
        raw = input("Placement as row,col (q to quit): ").strip()
        if raw.lower() in {"q", "quit", "exit"}:
            print("Quitting.")
            sys.exit(0)
        parts = raw.replace(" ", "").split(",")
        if len(parts) != 2 or not all(part.isdigit() for part in parts):
            print("Enter two numbers separated by a comma.")
            continue
        cell = (int(parts[0]), int(parts[1]))
        if cell in legal:
            return cell
        print("That placement is not legal, try again.")


def save_log(log: Dict, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(log, ensure_ascii=False, indent=2))
    print(f"Saved log to {path}.")


def replay_logged_game(log_path: Path, *, verbose: bool = True) -> Dict[str, object]:
    data = json.loads(log_path.read_text())
    metadata = data.get("metadata", {})
    moves = data.get("moves", [])
    env = OustEnv(side=metadata.get("side", 7))
    env.reset()
    if verbose:
        print("Replaying logged game.")
        print(format_board(env))
    for entry in moves:
        idx = entry["action_index"]
        cell = decode_cell(idx, env.state.side)
        player = env.state.current_player
        env.step(idx)
        if verbose:
            print(f"{entry.get('actor', 'unknown')} ({player.name}) placed at {cell}")
            print(format_board(env))
    result = env.state.result
    summary = {
        "result": result.value,
        "moves": len(moves),
        "board": env.state.board.tolist(),
    }
    if verbose:
        print("Replay finished.")
        print(f"Result: {summary['result']}")
    return summary


def play_interactive(args: argparse.Namespace) -> None:
    config = load_config(args.config)
    search_config = SearchConfig(
        depth=args.depth if args.depth is not None else config.search.depth,
        alpha_beta=config.search.alpha_beta,
        time_limit=args.time_limit if args.time_limit is not None else config.search.time_limit,
    )
    ai = AlphaBetaPlayer(search_config, config.heuristic)
    human_color = PlayerColor.BLACK if args.human == "black" else PlayerColor.WHITE

    env = OustEnv(side=args.side, max_ply=args.max_ply)
    env.reset()
    log_records: List[Dict] = []
    terminated = False

    def place(cell: Cell, actor: str) -> bool:
        player = env.state.current_player
        action_index = encode_cell(cell, env.state.side)
        log_records.append(
            {
                "move_index": len(log_records),
                "actor": actor,
                "player": player.name,
                "action_index": action_index,
                "cell": list(cell),
            }
        )
        _, _, done, truncated, _ = env.step(action_index)
        return done or truncated

    while not terminated:
        mover = env.state.current_player
        print("\nCurrent board:")
        print(format_board(env))
        print(f"To move: {mover.name}")

        if mover == human_color:
            terminated = place(prompt_human_move(env), "human")
            continue

        turn = ai.choose_turn(env.state.copy())
        stats = ai.last_result
        print(f"AI ({mover.name}) plays {list(turn)} [nodes={stats.nodes_visited}, score={stats.score}]")
        for cell in turn:
            terminated = place(cell, "ai")

    print("\nFinal board:")
    print(format_board(env))
    result = env.state.result
    if result == GameResult.DRAW:
        print("Draw.")
    else:
        print(f"{env.state.winner.name} wins!")

    if args.log_file:
        metadata = {
            "human": args.human,
            "side": args.side,
            "depth": search_config.depth,
            "time_limit": search_config.time_limit,
            "result": result.value,
        }
        save_log({"metadata": metadata, "moves": log_records}, Path(args.log_file))


def main() -> None:
    parser = argparse.ArgumentParser(description="Play Oust in the console against the engine.")
    parser.add_argument("--config", type=str, default="configs/match.yaml")
    parser.add_argument("--human", choices=["black", "white"], default="black")
    parser.add_argument("--side", type=int, default=7)
    parser.add_argument("--depth", type=int)
    parser.add_argument("--time-limit", type=float)
    parser.add_argument("--max-ply", type=int, default=1000)
    parser.add_argument("--log-file", type=str)
    parser.add_argument("--replay-log", type=str, help="Replay a logged game and exit")
    parser.add_argument("--replay-quiet", action="store_true")
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args()

    setup_logging(args.log_level)

    if args.replay_log:
        replay_logged_game(Path(args.replay_log), verbose=not args.replay_quiet)
        return

    play_interactive(args)


if __name__ == "__main__":
    main()
