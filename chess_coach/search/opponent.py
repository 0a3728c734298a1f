"""
Opponent Move Selection

Picks the moves of the synthetic sparring partner at a fixed strength.

Difficulty Profiles:
    - beginner: depth 2, 500ms think time, 40% random moves
    - intermediate: depth 8, 800ms think time
    - advanced: depth 15, 1000ms think time

The random moves of the beginner profile are deliberate: one uniform draw
is taken before searching, and below random_move_probability a uniformly
random legal move is played instead of the searched one.

Think Time:
    select_opponent_move() never answers faster than the profile's
    min_think_time_ms, measured on the monotonic clock. The wait happens
    after the search, with asyncio.sleep, so it doesn't hold the event
    loop. The search itself runs in a worker thread on its own board and
    never looks at the clock.
"""

import asyncio
import logging
import random
import time
from dataclasses import dataclass
from typing import Dict, Optional

import chess

from chess_coach.board.rules import legal_moves, parse_fen
from chess_coach.evaluation.base import Evaluator
from chess_coach.evaluation.classical import PAWN_KNIGHT_TABLES, ClassicalEvaluator
from chess_coach.search.minimax import find_best_move

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DifficultyProfile:
    """Strength settings of the synthetic opponent."""

    name: str
    """Profile identifier"""

    search_depth: int
    """Plies searched by find_best_move"""

    min_think_time_ms: int
    """Minimum wall-clock time before a move is returned"""

    random_move_probability: float = 0.0
    """Chance of playing a uniformly random legal move instead of searching"""

    def __post_init__(self):
        """Validate profile values."""
        if self.search_depth < 1:
            raise ValueError(f"search_depth must be at least 1, got {self.search_depth}")

        if self.min_think_time_ms < 0:
            raise ValueError(
                f"min_think_time_ms must be non-negative, got {self.min_think_time_ms}"
            )

        if not 0.0 <= self.random_move_probability <= 1.0:
            raise ValueError(
                f"random_move_probability must be in [0, 1], got {self.random_move_probability}"
            )


BEGINNER = DifficultyProfile("beginner", search_depth=2, min_think_time_ms=500, random_move_probability=0.4)
INTERMEDIATE = DifficultyProfile("intermediate", search_depth=8, min_think_time_ms=800)
ADVANCED = DifficultyProfile("advanced", search_depth=15, min_think_time_ms=1000)

PROFILES: Dict[str, DifficultyProfile] = {
    profile.name: profile for profile in (BEGINNER, INTERMEDIATE, ADVANCED)
}


def get_profile(name: str) -> DifficultyProfile:
    """
    Look up a difficulty profile by name.

    Raises:
        ValueError: If name is not one of PROFILES
    """
    try:
        return PROFILES[name.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown difficulty {name!r}, expected one of {', '.join(PROFILES)}"
        ) from None


def opponent_evaluator() -> ClassicalEvaluator:
    """Evaluator the opponent plays with: pawn and knight tables only."""
    return ClassicalEvaluator(piece_tables=PAWN_KNIGHT_TABLES)


def choose_opponent_move(
    board: chess.Board,
    profile: DifficultyProfile,
    rng: Optional[random.Random] = None,
    evaluator: Optional[Evaluator] = None,
) -> Optional[chess.Move]:
    """
    Choose the opponent's move without any think-time delay.

    Args:
        board: Position with the opponent to move (not modified)
        profile: Difficulty profile
        rng: Random source for weakness injection (default: fresh random.Random)
        evaluator: Position evaluator (default: opponent_evaluator())

    Returns:
        chess.Move, or None if the side to move has no legal move
    """
    moves = legal_moves(board)
    if not moves:
        return None

    rng = rng if rng else random.Random()

    if profile.random_move_probability > 0 and rng.random() < profile.random_move_probability:
        move = moves[rng.randrange(len(moves))]
        logger.debug(f"[{profile.name}] random move {move.uci()}")
        return move

    evaluator = evaluator if evaluator else opponent_evaluator()
    move, score, nodes = find_best_move(board, profile.search_depth, evaluator)
    logger.debug(f"[{profile.name}] searched move {move.uci()} score {score} ({nodes} nodes)")
    return move


async def select_opponent_move(
    fen: str,
    profile: DifficultyProfile,
    rng: Optional[random.Random] = None,
    evaluator: Optional[Evaluator] = None,
) -> Optional[chess.Move]:
    """
    Choose the opponent's move for a FEN, honouring the think-time floor.

    Args:
        fen: Position with the opponent to move
        profile: Difficulty profile
        rng: Random source for weakness injection
        evaluator: Position evaluator (default: opponent_evaluator())

    Returns:
        chess.Move, or None if the game is already over

    Raises:
        InvalidPosition: If the FEN cannot be parsed
    """
    board = parse_fen(fen)
    start_time = time.monotonic()

    move = await asyncio.to_thread(choose_opponent_move, board, profile, rng, evaluator)
    if move is None:
        return None

    elapsed_ms = (time.monotonic() - start_time) * 1000
    if elapsed_ms < profile.min_think_time_ms:
        await asyncio.sleep((profile.min_think_time_ms - elapsed_ms) / 1000)

    return move
