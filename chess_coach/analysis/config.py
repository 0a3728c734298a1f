"""
Configuration for game analysis.
"""

from dataclasses import dataclass

from chess_coach.evaluation.base import EVAL_CAP
from chess_coach.search.minimax import ANALYSIS_DEPTH


@dataclass
class AnalysisConfig:
    """Settings of the game analysis engine.

    The defaults are the values the classification thresholds were tuned
    against. Changing depth changes what "best move" means.
    """

    depth: int = ANALYSIS_DEPTH
    """Search depth for the best alternative and the position after the move"""

    accuracy_cp_scale: int = 50
    """Average centipawn loss per move that brings accuracy down to 0"""

    cp_cap: int = EVAL_CAP
    """Saturation bound for centipawn loss and gain involving a mate"""

    def __post_init__(self):
        """Validate configuration after initialization."""
        if self.depth < 1:
            raise ValueError(f"depth must be at least 1, got {self.depth}")

        if self.accuracy_cp_scale <= 0:
            raise ValueError(f"accuracy_cp_scale must be positive, got {self.accuracy_cp_scale}")

        if self.cp_cap <= 0:
            raise ValueError(f"cp_cap must be positive, got {self.cp_cap}")
