#!/usr/bin/env python3
"""
CLI tool for grading the moves of a finished game.

Usage:
    python tools/analyze_game.py --pgn games/my_game.pgn --color white

    python tools/analyze_game.py \\
        --moves e2e4 e7e5 g1f3 b8c6 \\
        --color black \\
        --depth 3
"""

import argparse
import logging
import sys
from pathlib import Path

import chess
from tqdm import tqdm

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from chess_coach.analysis import (
    AnalysisConfig,
    GameAnalyzer,
    load_pgn_game,
    played_moves_from_game,
    played_moves_from_uci,
)
from chess_coach.evaluation import captured_pieces
from chess_coach.exceptions import ChessCoachError


def setup_logging(verbose: bool = False):
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def print_report(moves, analysis, color: chess.Color):
    """Print per-move grades and the summary."""
    side = "White" if color == chess.WHITE else "Black"

    print("=" * 70)
    print(f"GAME ANALYSIS - {side}")
    print("=" * 70)
    print(f"{'Ply':<5} {'Move':<8} {'Grade':<12} {'Loss':>6} {'Eval':>7}  Best")
    print("-" * 70)

    for ply, (played, evaluation) in enumerate(zip(moves, analysis.evaluations), start=1):
        if evaluation is None:
            continue
        best = "" if evaluation.played_best else evaluation.best_move_san
        print(
            f"{ply:<5} {played.san:<8} {evaluation.classification.value:<12} "
            f"{evaluation.centipawn_loss:>6} {evaluation.centipawns_after:>7}  {best}"
        )

    summary = analysis.summary
    captured = captured_pieces(moves)
    taken = captured.white if color == chess.WHITE else captured.black

    print("\n" + "=" * 70)
    print("SUMMARY")
    print("=" * 70)
    print(f"Accuracy: {summary.accuracy:.1f}% over {summary.player_moves} moves")
    print(
        f"Brilliant: {summary.brilliant}  Great: {summary.great}  Good: {summary.good}  "
        f"Inaccuracy: {summary.inaccuracy}  Mistake: {summary.mistake}  Blunder: {summary.blunder}"
    )
    print(f"Captured: {' '.join(chess.piece_symbol(pt) for pt in taken) or '-'}")
    print(f"Analyzed at: {analysis.analyzed_at.isoformat()}")


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Grade every move one side played in a game",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--pgn",
        type=str,
        help="PGN file holding the game",
    )
    source.add_argument(
        "--moves",
        nargs="+",
        help="Moves in UCI notation (space-separated)",
    )

    parser.add_argument(
        "--game-index",
        type=int,
        default=0,
        help="Zero-based index of the game in the PGN file",
    )
    parser.add_argument(
        "--start-fen",
        type=str,
        default=chess.STARTING_FEN,
        help="Start position for --moves",
    )
    parser.add_argument(
        "--color",
        choices=["white", "black"],
        default="white",
        help="Side to analyze",
    )
    parser.add_argument(
        "--depth",
        type=int,
        default=AnalysisConfig.depth,
        help="Search depth",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args()
    setup_logging(args.verbose)

    color = chess.WHITE if args.color == "white" else chess.BLACK

    try:
        if args.pgn:
            game = load_pgn_game(Path(args.pgn), args.game_index)
            moves = played_moves_from_game(game)
        else:
            moves = played_moves_from_uci(args.moves, args.start_fen)

        analyzer = GameAnalyzer(config=AnalysisConfig(depth=args.depth))

        with tqdm(total=len(moves), desc="Analyzing", unit="ply") as progress:
            def on_progress(current: int, total: int):
                progress.update(current - progress.n)

            analysis = analyzer.analyze(moves, color, on_progress=on_progress)

    except (ChessCoachError, FileNotFoundError, ValueError) as e:
        print(f"Error: {e}")
        sys.exit(1)

    print_report(moves, analysis, color)


if __name__ == "__main__":
    main()
