"""
Evaluation Module

This module provides position evaluation functions for the coaching engine.
Evaluators are SWAPPABLE: the search and the game analysis work with any
evaluator that implements the base interface.

Key Components:
    - Evaluator (ABC): Abstract base class defining the evaluation interface
    - ClassicalEvaluator: Material + piece-square table evaluation
    - material_balance / captured_pieces: Display helpers sharing the piece values

Data Flow:
    chess.Board → evaluator.evaluate() → int (centipawns)
                                          Positive = White advantage
                                          Negative = Black advantage
"""

from chess_coach.evaluation.base import (
    EVAL_CAP,
    MATE_SCORE,
    Evaluator,
    is_mate_score,
    saturate,
)
from chess_coach.evaluation.classical import (
    FULL_PIECE_TABLES,
    PAWN_KNIGHT_TABLES,
    PIECE_VALUES,
    ClassicalEvaluator,
)
from chess_coach.evaluation.material import (
    CapturedPieces,
    MaterialBalance,
    captured_pieces,
    material_balance,
)

__all__ = [
    'EVAL_CAP',
    'MATE_SCORE',
    'Evaluator',
    'is_mate_score',
    'saturate',
    'FULL_PIECE_TABLES',
    'PAWN_KNIGHT_TABLES',
    'PIECE_VALUES',
    'ClassicalEvaluator',
    'CapturedPieces',
    'MaterialBalance',
    'captured_pieces',
    'material_balance',
]
