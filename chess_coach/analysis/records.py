"""
Move records for game analysis.

A finished game reaches the analysis as a list of PlayedMove records: the
move itself plus the FEN before and after it, the mover and the pieces
involved. The helpers below build that list from a python-chess board, a
PGN game or a list of UCI strings.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional

import chess
import chess.pgn

from chess_coach.board.rules import captured_piece, moved_piece, parse_fen
from chess_coach.exceptions import IllegalMoveError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlayedMove:
    """A move as it was played in a game."""

    move: chess.Move
    san: str
    color: chess.Color
    piece: chess.PieceType
    captured: Optional[chess.PieceType]
    fen_before: str
    fen_after: str

    @classmethod
    def from_board(cls, board: chess.Board, move: chess.Move) -> "PlayedMove":
        """
        Record a move played from a board position.

        The board is left as it was.

        Raises:
            IllegalMoveError: If the move is not legal on the board
        """
        if not board.is_legal(move):
            raise IllegalMoveError(f"Illegal move {move.uci()} in {board.fen()}")

        san = board.san(move)
        piece = moved_piece(board, move)
        captured = captured_piece(board, move)
        fen_before = board.fen()

        board.push(move)
        fen_after = board.fen()
        board.pop()

        return cls(
            move=move,
            san=san,
            color=board.turn,
            piece=piece,
            captured=captured,
            fen_before=fen_before,
            fen_after=fen_after,
        )

    @property
    def uci(self) -> str:
        return self.move.uci()


def played_moves_from_uci(
    ucis: Iterable[str],
    start_fen: str = chess.STARTING_FEN,
) -> List[PlayedMove]:
    """
    Replay UCI moves from a start position.

    Args:
        ucis: Moves in UCI notation ("e2e4", "e7e8q", ...)
        start_fen: Position the first move is played from

    Returns:
        One PlayedMove per ply

    Raises:
        InvalidPosition: If start_fen cannot be parsed
        IllegalMoveError: If a move is malformed or illegal
    """
    board = parse_fen(start_fen)
    played = []

    for ply, uci in enumerate(ucis, start=1):
        try:
            move = chess.Move.from_uci(uci)
        except ValueError as e:
            raise IllegalMoveError(f"Malformed move {uci!r} at ply {ply}") from e

        played.append(PlayedMove.from_board(board, move))
        board.push(move)

    return played


def played_moves_from_game(game: chess.pgn.Game) -> List[PlayedMove]:
    """
    Replay the mainline of a PGN game.

    Args:
        game: Parsed PGN game (its own FEN header is honoured)

    Returns:
        One PlayedMove per mainline ply
    """
    board = game.board()
    played = []

    for move in game.mainline_moves():
        played.append(PlayedMove.from_board(board, move))
        board.push(move)

    return played


def load_pgn_game(pgn_path: Path, index: int = 0) -> chess.pgn.Game:
    """
    Read one game from a PGN file.

    Args:
        pgn_path: Path to PGN file
        index: Zero-based position of the game in the file

    Returns:
        chess.pgn.Game

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file holds fewer than index + 1 games
    """
    if not pgn_path.exists():
        raise FileNotFoundError(f"PGN file not found: {pgn_path}")

    with open(pgn_path, "r", encoding="utf-8", errors="ignore") as pgn_file:
        for current in range(index + 1):
            game = chess.pgn.read_game(pgn_file)
            if game is None:
                raise ValueError(f"{pgn_path} holds only {current} game(s), wanted #{index + 1}")

    if game.errors:
        logger.warning(f"PGN game #{index + 1} in {pgn_path} parsed with errors: {game.errors}")

    return game
