"""
Analysis Module

This module grades finished games move by move.

Key Components:
    - classify / Classification: Decision-table move quality classifier
    - PlayedMove: Move record with FEN before/after (built from boards, PGN or UCI)
    - GameAnalyzer / analyze_game: Per-move grading and accuracy summary
    - AnalysisConfig: Analysis depth and accuracy scale

Data Flow:
    PGN / UCI moves → PlayedMove list → analyze_game() → GameAnalysis
                                                          (evaluations + summary)
"""

from chess_coach.analysis.classifier import (
    CLASSIFICATION_RULES,
    Classification,
    MoveFacts,
    classify,
    is_sacrifice,
)
from chess_coach.analysis.config import AnalysisConfig
from chess_coach.analysis.engine import (
    GameAnalyzer,
    analyze_game,
    centipawn_difference,
    compute_accuracy,
)
from chess_coach.analysis.records import (
    PlayedMove,
    load_pgn_game,
    played_moves_from_game,
    played_moves_from_uci,
)
from chess_coach.analysis.results import GameAnalysis, GameAnalysisSummary, MoveEvaluation

__all__ = [
    'CLASSIFICATION_RULES',
    'Classification',
    'MoveFacts',
    'classify',
    'is_sacrifice',
    'AnalysisConfig',
    'GameAnalyzer',
    'analyze_game',
    'centipawn_difference',
    'compute_accuracy',
    'PlayedMove',
    'load_pgn_game',
    'played_moves_from_game',
    'played_moves_from_uci',
    'GameAnalysis',
    'GameAnalysisSummary',
    'MoveEvaluation',
]
