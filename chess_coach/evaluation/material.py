"""
Material helpers for display.

Both helpers share the piece values of the classical evaluator, which is
the only reason they live here and not in the UI layer.
"""

from dataclasses import dataclass, field
from typing import Iterable, List

import chess

from chess_coach.evaluation.classical import PIECE_VALUES


@dataclass(frozen=True)
class MaterialBalance:
    """Non-king material per side, in centipawns."""
    white: int
    black: int

    @property
    def difference(self) -> int:
        """White minus Black."""
        return self.white - self.black


@dataclass
class CapturedPieces:
    """
    Piece types captured BY each side, highest value first.

    Attributes:
        white: Black pieces taken by White
        black: White pieces taken by Black
    """
    white: List[chess.PieceType] = field(default_factory=list)
    black: List[chess.PieceType] = field(default_factory=list)


def material_balance(board: chess.Board) -> MaterialBalance:
    """
    Sum the non-king piece values for each side.

    Args:
        board: Position to count

    Returns:
        MaterialBalance (starting position: 4000 each)
    """
    white = 0
    black = 0

    for piece in board.piece_map().values():
        if piece.piece_type == chess.KING:
            continue
        if piece.color == chess.WHITE:
            white += PIECE_VALUES[piece.piece_type]
        else:
            black += PIECE_VALUES[piece.piece_type]

    return MaterialBalance(white=white, black=black)


def captured_pieces(moves: Iterable) -> CapturedPieces:
    """
    Collect captured piece types from a move history.

    Args:
        moves: Records with a ``color`` (chess.Color of the mover) and a
            ``captured`` piece type (None for quiet moves), such as
            chess_coach.analysis.PlayedMove

    Returns:
        CapturedPieces, each list sorted by value (highest first)
    """
    result = CapturedPieces()

    for move in moves:
        if move.captured is None:
            continue
        if move.color == chess.WHITE:
            result.white.append(move.captured)
        else:
            result.black.append(move.captured)

    result.white.sort(key=PIECE_VALUES.get, reverse=True)
    result.black.sort(key=PIECE_VALUES.get, reverse=True)

    return result
