"""
Search Module

This module implements the fixed-depth search of the coaching engine and
the synthetic opponent built on top of it.

Key Components:
    - minimax: Core search algorithm with alpha-beta pruning
    - find_best_move: Root-level search returning (move, score, nodes)
    - evaluate_position: Search value of a position from its side to move
    - DifficultyProfile / PROFILES: Opponent strength settings
    - choose_opponent_move / select_opponent_move: Opponent move selection
"""

from chess_coach.search.minimax import (
    ANALYSIS_DEPTH,
    evaluate_position,
    find_best_move,
    minimax,
)
from chess_coach.search.opponent import (
    ADVANCED,
    BEGINNER,
    INTERMEDIATE,
    PROFILES,
    DifficultyProfile,
    choose_opponent_move,
    get_profile,
    opponent_evaluator,
    select_opponent_move,
)

__all__ = [
    'ANALYSIS_DEPTH',
    'evaluate_position',
    'find_best_move',
    'minimax',
    'ADVANCED',
    'BEGINNER',
    'INTERMEDIATE',
    'PROFILES',
    'DifficultyProfile',
    'choose_opponent_move',
    'get_profile',
    'opponent_evaluator',
    'select_opponent_move',
]
