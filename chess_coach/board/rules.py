"""
Rules Engine Adapter

Everything the engine needs to know about the laws of chess comes from
python-chess. This module is the only place that decides what counts as a
legal move, a finished game, or a usable position, so the search and the
analysis never talk to chess.Board directly for those questions.

Key Components:
    - parse_fen: FEN string → chess.Board (raises InvalidPosition)
    - legal_moves: legal moves in python-chess generation order
    - game_state: ONGOING / CHECKMATE / STALEMATE / DRAW
    - moved_piece, captured_piece: piece types involved in a move

Move Order:
    legal_moves() keeps the generation order of python-chess. The search
    breaks ties between equally scored moves by this order, so it must not
    be shuffled or sorted anywhere.
"""

from enum import Enum
from typing import List, Optional

import chess

from chess_coach.exceptions import InvalidPosition


class GameState(Enum):
    """
    Outcome of a position from the rules' point of view.

        - ONGOING: side to move has at least one legal move, no draw rule applies
        - CHECKMATE: side to move is mated (it is the loser)
        - STALEMATE: side to move has no legal move and is not in check
        - DRAW: insufficient material, fifty-move rule or threefold repetition
    """
    ONGOING = 0
    CHECKMATE = 1
    STALEMATE = 2
    DRAW = 3


def parse_fen(fen: str) -> chess.Board:
    """
    Parse a FEN string into a fresh board.

    Args:
        fen: Position in Forsyth-Edwards Notation

    Returns:
        chess.Board owned by the caller

    Raises:
        InvalidPosition: If the FEN is malformed or the position is illegal
            (missing kings, pawns on the back rank, opponent in check, ...)
    """
    if not isinstance(fen, str) or not fen.strip():
        raise InvalidPosition(str(fen), "empty FEN")

    try:
        board = chess.Board(fen.strip())
    except ValueError as e:
        raise InvalidPosition(fen, str(e)) from e

    if not board.is_valid():
        raise InvalidPosition(fen, str(board.status()))

    return board


def legal_moves(board: chess.Board) -> List[chess.Move]:
    """Legal moves in generation order (the search tie-break order)."""
    return list(board.legal_moves)


def side_to_move(board: chess.Board) -> chess.Color:
    return board.turn


def game_state(board: chess.Board) -> GameState:
    """
    Classify the position as ongoing or finished.

    Checkmate is tested first because a mated side also has no legal moves.
    Repetition only sees the board's own move stack, so a board built from a
    bare FEN starts without history.
    """
    if board.is_checkmate():
        return GameState.CHECKMATE
    if board.is_stalemate():
        return GameState.STALEMATE
    if (
        board.is_insufficient_material()
        or board.is_fifty_moves()
        or board.is_repetition(3)
    ):
        return GameState.DRAW
    return GameState.ONGOING


def is_game_over(board: chess.Board) -> bool:
    return game_state(board) is not GameState.ONGOING


def moved_piece(board: chess.Board, move: chess.Move) -> Optional[chess.PieceType]:
    """Type of the piece standing on the move's origin square."""
    return board.piece_type_at(move.from_square)


def captured_piece(board: chess.Board, move: chess.Move) -> Optional[chess.PieceType]:
    """
    Type of the piece captured by a move, or None for quiet moves.

    En passant captures land on an empty square but still take a pawn.
    """
    if board.is_en_passant(move):
        return chess.PAWN
    if not board.is_capture(move):
        return None
    return board.piece_type_at(move.to_square)
