#!/usr/bin/env python3
"""
Ask the synthetic opponent for a move.

Usage:
    python tools/suggest_move.py --fen "r1bqkbnr/pppp1ppp/2n5/1B2p3/4P3/5N2/PPPP1PPP/RNBQK2R b KQkq - 3 3"

    python tools/suggest_move.py --difficulty intermediate --seed 7
"""

import argparse
import asyncio
import logging
import random
import sys
import time
from pathlib import Path

import chess

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from chess_coach.board import parse_fen
from chess_coach.evaluation import material_balance
from chess_coach.exceptions import InvalidPosition
from chess_coach.search import PROFILES, get_profile, select_opponent_move


def setup_logging(verbose: bool = False):
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Pick the opponent's move for a position",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--fen",
        type=str,
        default=chess.STARTING_FEN,
        help="Position with the opponent to move",
    )
    parser.add_argument(
        "--difficulty",
        choices=list(PROFILES),
        default="beginner",
        help="Opponent strength",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for the beginner's random moves",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args()
    setup_logging(args.verbose)

    profile = get_profile(args.difficulty)
    rng = random.Random(args.seed)

    try:
        board = parse_fen(args.fen)
        start_time = time.time()
        move = asyncio.run(select_opponent_move(args.fen, profile, rng=rng))
        elapsed = time.time() - start_time
    except InvalidPosition as e:
        print(f"Error: {e}")
        sys.exit(1)

    if move is None:
        print("No legal move: the game is over")
        return

    balance = material_balance(board)
    print(f"Difficulty: {profile.name} (depth {profile.search_depth})")
    print(f"Material: White {balance.white} / Black {balance.black}")
    print(f"Move: {board.san(move)} ({move.uci()}) in {elapsed:.2f}s")


if __name__ == "__main__":
    main()
