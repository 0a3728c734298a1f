"""
Exceptions raised by the coaching engine.

Kept in one module so the board adapter, the search and the analysis
layer can raise and catch each other's errors without circular imports.
"""


class ChessCoachError(Exception):
    """Base class for all engine errors."""
    pass


class InvalidPosition(ChessCoachError, ValueError):
    """A FEN string could not be parsed or describes an illegal position."""

    def __init__(self, fen: str, reason: str = ""):
        self.fen = fen
        self.reason = reason
        message = f"Invalid position: {fen!r}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class IllegalMoveError(ChessCoachError, ValueError):
    """A move in a game record is not legal in the position it was played from."""
    pass


class AnalysisCancelled(ChessCoachError):
    """Game analysis was stopped through its cancel event."""

    def __init__(self, completed_plies: int, total_plies: int):
        self.completed_plies = completed_plies
        self.total_plies = total_plies
        super().__init__(
            f"Analysis cancelled after {completed_plies}/{total_plies} plies"
        )
