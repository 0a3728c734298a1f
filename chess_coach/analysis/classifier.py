"""
Move Quality Classifier

Turns the numbers measured for one move into a coaching label. The rules
live in CLASSIFICATION_RULES, an ordered list of (predicate, label) pairs
where the first matching predicate wins. Tuning a threshold means editing
a constant or a row, never the control flow.

Priority Order:
    1. only legal move                                   → forced
    2. sacrifice, gain >= 50, loss <= 10                 → brilliant
    3. loss <= 10                                        → great
    4. loss <= 30                                        → good
    5. loss <= 80                                        → inaccuracy
    6. loss <= 200                                       → mistake
    7. anything else                                     → blunder

"book" is part of the enumeration so that consumers can switch over every
label, but nothing in this engine assigns it.

Sacrifices:
    Only captures are recognised as sacrifices (a piece taking something
    worth more than a pawn less than itself). Quiet sacrifices, such as
    leaving a piece en prise, are not detected.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Tuple

import chess

from chess_coach.evaluation.classical import PIECE_VALUES

# Thresholds (centipawns)
GREAT_MAX_LOSS = 10
GOOD_MAX_LOSS = 30
INACCURACY_MAX_LOSS = 80
MISTAKE_MAX_LOSS = 200
BRILLIANT_MIN_GAIN = 50
SACRIFICE_MARGIN = 100


class Classification(Enum):
    """Quality label of an analyzed move."""
    BRILLIANT = "brilliant"
    GREAT = "great"
    GOOD = "good"
    INACCURACY = "inaccuracy"
    MISTAKE = "mistake"
    BLUNDER = "blunder"
    BOOK = "book"  # reserved, never assigned
    FORCED = "forced"

    @property
    def counts_toward_summary(self) -> bool:
        """Forced and book moves are left out of the summary counters."""
        return self not in (Classification.FORCED, Classification.BOOK)


@dataclass(frozen=True)
class MoveFacts:
    """Inputs of the classifier for one move."""
    cp_loss: int
    is_only_legal_move: bool
    is_sacrifice: bool
    cp_gain: int


Rule = Tuple[Callable[[MoveFacts], bool], Classification]

CLASSIFICATION_RULES: List[Rule] = [
    (lambda f: f.is_only_legal_move, Classification.FORCED),
    (
        lambda f: f.is_sacrifice and f.cp_gain >= BRILLIANT_MIN_GAIN and f.cp_loss <= GREAT_MAX_LOSS,
        Classification.BRILLIANT,
    ),
    (lambda f: f.cp_loss <= GREAT_MAX_LOSS, Classification.GREAT),
    (lambda f: f.cp_loss <= GOOD_MAX_LOSS, Classification.GOOD),
    (lambda f: f.cp_loss <= INACCURACY_MAX_LOSS, Classification.INACCURACY),
    (lambda f: f.cp_loss <= MISTAKE_MAX_LOSS, Classification.MISTAKE),
    (lambda f: True, Classification.BLUNDER),
]


def classify(
    cp_loss: int,
    is_only_legal_move: bool,
    is_sacrifice: bool,
    cp_gain: int,
    rules: Optional[List[Rule]] = None,
) -> Classification:
    """
    Classify a move.

    Args:
        cp_loss: Centipawns lost against the engine's best move (>= 0)
        is_only_legal_move: True if the mover had no alternative
        is_sacrifice: True if the move was a capturing sacrifice
        cp_gain: Centipawns gained against the position before the move (>= 0)
        rules: Decision table to use (default: CLASSIFICATION_RULES)

    Returns:
        Classification of the first matching rule

    Raises:
        ValueError: If cp_loss or cp_gain is negative, or no rule matches
    """
    if cp_loss < 0:
        raise ValueError(f"cp_loss must be non-negative, got {cp_loss}")
    if cp_gain < 0:
        raise ValueError(f"cp_gain must be non-negative, got {cp_gain}")

    facts = MoveFacts(
        cp_loss=cp_loss,
        is_only_legal_move=is_only_legal_move,
        is_sacrifice=is_sacrifice,
        cp_gain=cp_gain,
    )

    for predicate, label in rules if rules is not None else CLASSIFICATION_RULES:
        if predicate(facts):
            return label

    raise ValueError(f"No classification rule matched {facts}")


def is_sacrifice(
    moved_piece: Optional[chess.PieceType],
    captured_piece: Optional[chess.PieceType],
) -> bool:
    """
    True for captures that trade down by more than SACRIFICE_MARGIN.

    Non-capturing moves are never sacrifices here.
    """
    if moved_piece is None or captured_piece is None:
        return False
    return PIECE_VALUES[moved_piece] > PIECE_VALUES[captured_piece] + SACRIFICE_MARGIN
