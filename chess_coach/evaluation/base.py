"""
Abstract Evaluator Interface

This module defines the abstract base class for all position evaluators.
By defining a common interface, the search and the game analysis can use
any evaluator without modification.

Key Principles:
    1. Evaluators are stateless: evaluating the same board twice gives the
       same integer
    2. evaluate() always returns centipawns from White's perspective
    3. Positive = White advantage, Negative = Black advantage
    4. Checkmate returns the mate sentinel against the side to move,
       stalemate and other draws return 0

Mate Sentinels:
    MATE_SCORE is large enough to dominate any material sum, so a mate is
    always preferred over winning material. It is never stored or
    subtracted as-is: saturate() clamps scores to ±EVAL_CAP before they go
    into a result, and is_mate_score() tells the analysis when a
    difference involves a mate.
"""

from abc import ABC, abstractmethod
from typing import Optional

import chess

from chess_coach.board.rules import GameState, game_state


# Evaluation constants
MATE_SCORE = 100000  # White mates: +MATE_SCORE, Black mates: -MATE_SCORE
EVAL_CAP = 9999  # Saturation bound for stored scores and cp differences


def is_mate_score(score: float) -> bool:
    """True if score is (or exceeds) a mate sentinel."""
    return abs(score) >= MATE_SCORE


def saturate(score: float, cap: int = EVAL_CAP) -> int:
    """Clamp a score to [-cap, cap] and return it as an int."""
    return int(max(-cap, min(cap, score)))


class Evaluator(ABC):
    """
    Abstract base class for position evaluation.

    All evaluator implementations must inherit from this class and implement
    the evaluate() method.

    Methods:
        evaluate(board): Returns position evaluation in centipawns
        evaluate_terminal(board): Score of a finished game, or None
    """

    @abstractmethod
    def evaluate(self, board: chess.Board) -> int:
        """
        Evaluate a chess position from White's perspective.

        Args:
            board: python-chess Board object to evaluate

        Returns:
            int: Evaluation in centipawns
        """
        pass

    def evaluate_terminal(self, board: chess.Board) -> Optional[int]:
        """
        Evaluate terminal positions (checkmate, stalemate, draw).

        Args:
            board: python-chess Board object

        Returns:
            int: Evaluation if terminal position
            None: If position is not terminal
        """
        state = game_state(board)

        if state is GameState.CHECKMATE:
            # Mate is bad for the side to move
            if board.turn == chess.WHITE:
                return -MATE_SCORE
            return MATE_SCORE

        if state is not GameState.ONGOING:
            return 0

        return None

    def __repr__(self) -> str:
        """String representation of evaluator."""
        return f"{self.__class__.__name__}()"
