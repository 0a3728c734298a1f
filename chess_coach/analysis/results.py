"""
Result types produced by the game analysis.
"""

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import chess

from chess_coach.analysis.classifier import Classification


@dataclass(frozen=True)
class MoveEvaluation:
    """
    Grade of one move of the analyzed side.

    Attributes:
        centipawns_after: Search value after the move (White's perspective,
            saturated to ±9999)
        best_move: Engine's best alternative in the position before the move
        best_move_san: best_move in SAN, for display
        classification: Quality label
        centipawn_loss: Loss against best_move, from the mover's perspective
        played_best: True if the played move is best_move
    """
    centipawns_after: int
    best_move: chess.Move
    best_move_san: str
    classification: Classification
    centipawn_loss: int
    played_best: bool = False


@dataclass
class GameAnalysisSummary:
    """Classification counters and accuracy of the analyzed side."""

    accuracy: float = 100.0
    brilliant: int = 0
    great: int = 0
    good: int = 0
    inaccuracy: int = 0
    mistake: int = 0
    blunder: int = 0
    player_moves: int = 0

    def record(self, classification: Classification):
        """Count a classification (forced and book moves are ignored)."""
        if not classification.counts_toward_summary:
            return
        name = classification.value
        setattr(self, name, getattr(self, name) + 1)

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class GameAnalysis:
    """
    Full result of analyzing one game.

    evaluations has one entry per ply; plies of the other side (and plies
    that could not be graded) hold None.
    """
    evaluations: List[Optional[MoveEvaluation]]
    summary: GameAnalysisSummary
    analyzed_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
