"""
Board Module

This module wraps python-chess, the Rules Engine the coaching engine relies
on for move generation, move application and game-over detection.

Key Components:
    - parse_fen: Validated FEN parsing (raises InvalidPosition)
    - legal_moves: Enumeration order used for search tie-breaks
    - game_state / GameState: Checkmate, stalemate and draw detection
    - moved_piece / captured_piece: Facts about a single move

Data Flow:
    FEN string → parse_fen() → chess.Board → search / evaluation
"""

from chess_coach.board.rules import (
    GameState,
    captured_piece,
    game_state,
    is_game_over,
    legal_moves,
    moved_piece,
    parse_fen,
    side_to_move,
)

__all__ = [
    'GameState',
    'captured_piece',
    'game_state',
    'is_game_over',
    'legal_moves',
    'moved_piece',
    'parse_fen',
    'side_to_move',
]
