"""
Classical Piece-Square Table Evaluation

This module implements the static evaluation used by both the opponent
and the game analysis:
    1. Material counting (piece values)
    2. Piece-Square Tables (positional bonuses/penalties)

Evaluation Components:
    - Material: P=100, N=320, B=330, R=500, Q=900, K=20000
      (the king value only keeps the sum well-defined, both kings cancel)
    - Position: PST bonuses for each piece type

The analysis thresholds assume positional terms stay small next to
material, so the tables never exceed half a pawn in either direction.

Reference:
    Simplified Evaluation Function
    https://www.chessprogramming.org/Simplified_Evaluation_Function
"""

from typing import Dict, Optional

import chess
import numpy as np

from chess_coach.evaluation.base import Evaluator

#fmt: off
# ============================================================================
# Material Values (centipawns)
# ============================================================================

PIECE_VALUES = {
    chess.PAWN: 100,
    chess.KNIGHT: 320,
    chess.BISHOP: 330,
    chess.ROOK: 500,
    chess.QUEEN: 900,
    chess.KING: 20000,
}


# ============================================================================
# Piece-Square Tables (PSTs)
# ============================================================================
# Values are from White's perspective (row 0 = rank 8, row 7 = rank 1).
# A White piece on (rank, file) reads row 7 - rank; a Black piece reads the
# vertically mirrored row, which is simply its rank.
# ============================================================================

# Pawn PST: Encourage central pawns, reward advanced pawns
PAWN_TABLE = np.array([
    [  0,   0,   0,   0,   0,   0,   0,   0],  # Rank 8 (promotion)
    [ 50,  50,  50,  50,  50,  50,  50,  50],  # Rank 7
    [ 10,  10,  20,  30,  30,  20,  10,  10],  # Rank 6
    [  5,   5,  10,  25,  25,  10,   5,   5],  # Rank 5
    [  0,   0,   0,  20,  20,   0,   0,   0],  # Rank 4
    [  5,  -5, -10,   0,   0, -10,  -5,   5],  # Rank 3
    [  5,  10,  10, -20, -20,  10,  10,   5],  # Rank 2
    [  0,   0,   0,   0,   0,   0,   0,   0],  # Rank 1
], dtype=np.int32)

# Knight PST: "Knights on the rim are dim"
KNIGHT_TABLE = np.array([
    [-50, -40, -30, -30, -30, -30, -40, -50],
    [-40, -20,   0,   0,   0,   0, -20, -40],
    [-30,   0,  10,  15,  15,  10,   0, -30],
    [-30,   5,  15,  20,  20,  15,   5, -30],
    [-30,   0,  15,  20,  20,  15,   0, -30],
    [-30,   5,  10,  15,  15,  10,   5, -30],
    [-40, -20,   0,   5,   5,   0, -20, -40],
    [-50, -40, -30, -30, -30, -30, -40, -50],
], dtype=np.int32)

# Bishop PST: Prefer long diagonals, avoid corners
BISHOP_TABLE = np.array([
    [-20, -10, -10, -10, -10, -10, -10, -20],
    [-10,   0,   0,   0,   0,   0,   0, -10],
    [-10,   0,   5,  10,  10,   5,   0, -10],
    [-10,   5,   5,  10,  10,   5,   5, -10],
    [-10,   0,  10,  10,  10,  10,   0, -10],
    [-10,  10,  10,  10,  10,  10,  10, -10],
    [-10,   5,   0,   0,   0,   0,   5, -10],
    [-20, -10, -10, -10, -10, -10, -10, -20],
], dtype=np.int32)

# Rook PST: Prefer 7th rank and central files
ROOK_TABLE = np.array([
    [  0,   0,   0,   0,   0,   0,   0,   0],
    [  5,  10,  10,  10,  10,  10,  10,   5],
    [ -5,   0,   0,   0,   0,   0,   0,  -5],
    [ -5,   0,   0,   0,   0,   0,   0,  -5],
    [ -5,   0,   0,   0,   0,   0,   0,  -5],
    [ -5,   0,   0,   0,   0,   0,   0,  -5],
    [ -5,   0,   0,   0,   0,   0,   0,  -5],
    [  0,   0,   0,   5,   5,   0,   0,   0],
], dtype=np.int32)

# Queen PST: Avoid early development, prefer central control
QUEEN_TABLE = np.array([
    [-20, -10, -10,  -5,  -5, -10, -10, -20],
    [-10,   0,   0,   0,   0,   0,   0, -10],
    [-10,   0,   5,   5,   5,   5,   0, -10],
    [ -5,   0,   5,   5,   5,   5,   0,  -5],
    [  0,   0,   5,   5,   5,   5,   0,  -5],
    [-10,   5,   5,   5,   5,   5,   0, -10],
    [-10,   0,   5,   0,   0,   0,   0, -10],
    [-20, -10, -10,  -5,  -5, -10, -10, -20],
], dtype=np.int32)

# King PST (Middlegame): Stay behind the pawn shield
KING_TABLE = np.array([
    [-30, -40, -40, -50, -50, -40, -40, -30],
    [-30, -40, -40, -50, -50, -40, -40, -30],
    [-30, -40, -40, -50, -50, -40, -40, -30],
    [-30, -40, -40, -50, -50, -40, -40, -30],
    [-20, -30, -30, -40, -40, -30, -30, -20],
    [-10, -20, -20, -20, -20, -20, -20, -10],
    [ 20,  20,   0,   0,   0,   0,  20,  20],
    [ 20,  30,  10,   0,   0,  10,  30,  20],
], dtype=np.int32)
#fmt: on

# Full tables, used for game analysis
FULL_PIECE_TABLES = {
    chess.PAWN: PAWN_TABLE,
    chess.KNIGHT: KNIGHT_TABLE,
    chess.BISHOP: BISHOP_TABLE,
    chess.ROOK: ROOK_TABLE,
    chess.QUEEN: QUEEN_TABLE,
    chess.KING: KING_TABLE,
}

# Pawn and knight only, flat for everything else. The synthetic opponent
# plays with these.
PAWN_KNIGHT_TABLES = {
    chess.PAWN: PAWN_TABLE,
    chess.KNIGHT: KNIGHT_TABLE,
}


class ClassicalEvaluator(Evaluator):
    """
    Classical evaluation using material and piece-square tables.

    Piece types without a table get a flat (all-zero) positional term.

    Attributes:
        piece_tables: Dictionary mapping piece types to 8x8 PST arrays
    """

    def __init__(self, piece_tables: Optional[Dict[chess.PieceType, np.ndarray]] = None):
        """
        Initialize the classical evaluator.

        Args:
            piece_tables: PSTs by piece type (default: FULL_PIECE_TABLES)
        """
        self.piece_tables = dict(FULL_PIECE_TABLES if piece_tables is None else piece_tables)

        for piece_type, table in self.piece_tables.items():
            if np.shape(table) != (8, 8):
                raise ValueError(
                    f"Piece-square table for {chess.piece_name(piece_type)} "
                    f"must be 8x8, got {np.shape(table)}"
                )

        # Flatten once so square indices (rank * 8 + file) address the table
        # directly: White reads the table flipped upside down, Black as is.
        self._white_squares = {
            piece_type: np.flipud(table).astype(int).ravel().tolist()
            for piece_type, table in self.piece_tables.items()
        }
        self._black_squares = {
            piece_type: np.asarray(table).astype(int).ravel().tolist()
            for piece_type, table in self.piece_tables.items()
        }

    def square_value(self, piece: chess.Piece, square: chess.Square) -> int:
        """Positional bonus of a piece on a square, from its owner's view."""
        if piece.color == chess.WHITE:
            table = self._white_squares.get(piece.piece_type)
        else:
            table = self._black_squares.get(piece.piece_type)

        if table is None:
            return 0
        return table[square]

    def evaluate(self, board: chess.Board) -> int:
        """
        Evaluate position using material + PST.

        Args:
            board: Chess board to evaluate

        Returns:
            int: Evaluation in centipawns (White's perspective)
        """
        terminal_score = self.evaluate_terminal(board)
        if terminal_score is not None:
            return terminal_score

        score = 0
        for square, piece in board.piece_map().items():
            total_value = PIECE_VALUES[piece.piece_type] + self.square_value(piece, square)

            if piece.color == chess.WHITE:
                score += total_value
            else:
                score -= total_value

        return score

    def __repr__(self) -> str:
        names = ", ".join(chess.piece_name(pt) for pt in sorted(self.piece_tables))
        return f"{self.__class__.__name__}(tables=[{names}])"
