#!/usr/bin/env python3
"""Play Abalone at the console (two humans), or replay a list of moves."""

import argparse
import sys
from typing import Dict, List, Optional, Sequence

import numpy as np

from abalone import AbaloneEnv, GameConfig, load_game_config
from abalone.core import NotationError, action_to_string, compute_returns, string_to_action
from abalone.env import render_ascii


def format_board(env: AbaloneEnv) -> str:
    state = env.state
    first, second = state.marble_counts()
    return f"{render_ascii(state)}\nmarbles: 1={first} 2={second}"


def list_moves(legal_mask: np.ndarray) -> List[str]:
    return [action_to_string(int(idx)) for idx in np.flatnonzero(legal_mask)]


def parse_input(raw: str) -> int:
    if raw.isdigit():
        return int(raw)
    return string_to_action(raw)


def prompt_move(env: AbaloneEnv, legal_mask: np.ndarray) -> int:
    while True:
        raw = input("move (e.g. c5c6, ? lists moves, q quits): ").strip()
        if raw.lower() in {"q", "quit", "exit"}:
            print("Bye.")
            sys.exit(0)
        if raw == "?":
            print(" ".join(list_moves(legal_mask)))
            continue
        try:
            action_index = parse_input(raw)
        except NotationError as exc:
            print(f"Cannot read move: {exc}")
            continue
        if 0 <= action_index < len(legal_mask) and legal_mask[action_index]:
            return action_index
        print("Illegal move, try again.")


def describe_outcome(outcome: Optional[int]) -> str:
    if outcome is None:
        return "move limit reached"
    return f"player {outcome + 1} wins"


def replay_moves(
    moves: Sequence[str],
    *,
    config: Optional[GameConfig] = None,
    verbose: bool = True,
) -> Dict[str, object]:
    env = AbaloneEnv(config=config)
    env.reset()
    if verbose:
        print(format_board(env))
    played = 0
    for text in moves:
        if env.state.is_terminal:
            break
        mover = env.state.current_player
        env.step(string_to_action(text))
        played += 1
        if verbose:
            print(f"player {mover + 1}: {text}")
            print(format_board(env))
    summary = {
        "moves": played,
        "outcome": env.state.outcome,
        "terminal": env.state.is_terminal,
        "returns": list(compute_returns(env.state)),
        "board": env.state.board.cells.tolist(),
    }
    return summary


def play_interactive(config: GameConfig) -> None:
    env = AbaloneEnv(config=config)
    obs, info = env.reset()
    terminated = truncated = False
    while not (terminated or truncated):
        print()
        print(format_board(env))
        print(f"player {env.state.current_player + 1} to move")
        action_index = prompt_move(env, info["legal_action_mask"])
        obs, reward, terminated, truncated, info = env.step(action_index)

    print()
    print(format_board(env))
    print(f"Game over: {describe_outcome(env.state.outcome)} (returns {info['returns']})")


def main() -> None:
    parser = argparse.ArgumentParser(description="Play Abalone at the console.")
    parser.add_argument("--config", type=str, default="configs/classic.yaml")
    parser.add_argument("--layout", choices=["classic", "belgian_daisy"])
    parser.add_argument("--marbles-to-win", type=int)
    parser.add_argument("--max-moves", type=int)
    parser.add_argument("--moves", nargs="+", help="Replay these moves and exit")
    parser.add_argument("--quiet", action="store_true")
    args = parser.parse_args()

    config = load_game_config(args.config).replace(
        layout=args.layout,
        marbles_to_win=args.marbles_to_win,
        max_moves=args.max_moves,
    )

    if args.moves:
        summary = replay_moves(args.moves, config=config, verbose=not args.quiet)
        message = f"Replayed {summary['moves']} moves."
        if summary["terminal"]:
            message += f" Game over: {describe_outcome(summary['outcome'])}"
        print(message)
        return

    play_interactive(config)


if __name__ == "__main__":
    main()
