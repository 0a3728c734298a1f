"""
Game Analysis Engine

Grades every move one side played in a finished game by comparing it with
the engine's own best alternative, then sums the grades into an accuracy
score.

Per graded ply:
    1. best alternative: find_best_move(position before, depth 4)
    2. eval after: search value of the position after the move (depth 4)
    3. eval before: search value of the position before (depth 4). Usually
       equal to the best value, but a position already drawn by rule scores
       its static 0 while the best-move search still looks past the draw
    4. centipawn loss = best value - eval after        (from the mover's view)
    5. centipawn gain = eval after - eval before       (from the mover's view)
    6. classify with the decision table

Accuracy:
    100 * (1 - total_cp_loss / (player_moves * 50)), clamped to [0, 100]
    and rounded to one decimal. 100 when the analyzed side made no move.
    Every ply of the analyzed side counts in player_moves, including one
    that could not be graded (no legal move before it), which adds no loss.

Mate scores never enter a stored value as-is: differences that involve a
mate sentinel are clamped to [0, cp_cap] and the stored evaluation is
saturated to ±9999.

The work is synchronous and CPU-bound. on_progress is a one-way
notification; stopping early goes through a separate threading.Event.
"""

import logging
import threading
from typing import Callable, List, Optional, Sequence

import chess

from chess_coach.analysis.classifier import classify, is_sacrifice
from chess_coach.analysis.config import AnalysisConfig
from chess_coach.analysis.records import PlayedMove
from chess_coach.analysis.results import GameAnalysis, GameAnalysisSummary, MoveEvaluation
from chess_coach.board.rules import legal_moves, parse_fen
from chess_coach.evaluation.base import Evaluator, is_mate_score, saturate
from chess_coach.evaluation.classical import ClassicalEvaluator
from chess_coach.exceptions import AnalysisCancelled
from chess_coach.search.minimax import evaluate_position, find_best_move

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]


def centipawn_difference(better: int, worse: int, cap: int) -> int:
    """
    Non-negative gap between two White-perspective scores.

    If either score is a mate sentinel the gap is clamped to cap.
    """
    gap = max(0, better - worse)
    if is_mate_score(better) or is_mate_score(worse):
        gap = min(gap, cap)
    return int(gap)


def compute_accuracy(total_cp_loss: int, player_moves: int, cp_scale: int = 50) -> float:
    """Accuracy percentage in [0, 100] with one decimal."""
    if player_moves == 0:
        return 100.0

    accuracy = 100 * (1 - total_cp_loss / (player_moves * cp_scale))
    accuracy = max(0.0, min(100.0, accuracy))
    return round(accuracy, 1)


class GameAnalyzer:
    """
    Move-by-move grader for finished games.

    Attributes:
        config: AnalysisConfig (search depth, accuracy scale, saturation bound)
        evaluator: Position evaluator shared by every search
    """

    def __init__(
        self,
        config: Optional[AnalysisConfig] = None,
        evaluator: Optional[Evaluator] = None,
    ):
        self.config = config or AnalysisConfig()
        self.evaluator = evaluator if evaluator else ClassicalEvaluator()

    def evaluate_move(self, played: PlayedMove, analyzed_color: chess.Color) -> Optional[MoveEvaluation]:
        """
        Grade a single move.

        Args:
            played: The move with its FEN before and after
            analyzed_color: Side whose perspective loss and gain are measured from

        Returns:
            MoveEvaluation, or None if the position before has no legal move

        Raises:
            InvalidPosition: If either FEN cannot be parsed
        """
        board_before = parse_fen(played.fen_before)
        moves = legal_moves(board_before)
        if not moves:
            logger.warning(f"No legal move before {played.san} ({played.fen_before}), ply skipped")
            return None

        best_move, best_value, nodes = find_best_move(board_before, self.config.depth, self.evaluator)
        eval_before = evaluate_position(board_before, self.config.depth, self.evaluator)
        eval_after = evaluate_position(played.fen_after, self.config.depth, self.evaluator)

        cap = self.config.cp_cap
        if analyzed_color == chess.WHITE:
            cp_loss = centipawn_difference(best_value, eval_after, cap)
            cp_gain = centipawn_difference(eval_after, eval_before, cap)
        else:
            cp_loss = centipawn_difference(eval_after, best_value, cap)
            cp_gain = centipawn_difference(eval_before, eval_after, cap)

        classification = classify(
            cp_loss=cp_loss,
            is_only_legal_move=len(moves) == 1,
            is_sacrifice=is_sacrifice(played.piece, played.captured),
            cp_gain=cp_gain,
        )

        logger.debug(
            f"{played.san}: best {best_move.uci()} ({best_value}), after {eval_after}, "
            f"loss {cp_loss}, gain {cp_gain} → {classification.value} [{nodes} nodes]"
        )

        return MoveEvaluation(
            centipawns_after=saturate(eval_after),
            best_move=best_move,
            best_move_san=board_before.san(best_move),
            classification=classification,
            centipawn_loss=cp_loss,
            played_best=played.move == best_move,
        )

    def analyze(
        self,
        moves: Sequence[PlayedMove],
        analyzed_color: chess.Color,
        on_progress: Optional[ProgressCallback] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> GameAnalysis:
        """
        Analyze every move of a game for one side.

        Args:
            moves: Plies of the game, in order
            analyzed_color: chess.WHITE or chess.BLACK
            on_progress: Called as on_progress(ply, total) after each ply
            cancel_event: Checked before each ply; analysis stops once set

        Returns:
            GameAnalysis with one (optional) MoveEvaluation per ply

        Raises:
            AnalysisCancelled: If cancel_event was set
            InvalidPosition: If a move record holds an unparseable FEN
        """
        total = len(moves)
        evaluations: List[Optional[MoveEvaluation]] = []
        summary = GameAnalysisSummary()
        total_cp_loss = 0

        side = "White" if analyzed_color == chess.WHITE else "Black"
        logger.info(f"Analyzing {total} plies for {side} at depth {self.config.depth}")

        for ply, played in enumerate(moves):
            if cancel_event is not None and cancel_event.is_set():
                logger.info(f"Analysis cancelled at ply {ply}/{total}")
                raise AnalysisCancelled(ply, total)

            evaluation = None
            if played.color == analyzed_color:
                # Ungradable plies still count, with zero loss
                summary.player_moves += 1
                evaluation = self.evaluate_move(played, analyzed_color)

            if evaluation is not None:
                summary.record(evaluation.classification)
                total_cp_loss += evaluation.centipawn_loss

            evaluations.append(evaluation)

            if on_progress is not None:
                on_progress(ply + 1, total)

        summary.accuracy = compute_accuracy(
            total_cp_loss, summary.player_moves, self.config.accuracy_cp_scale
        )

        logger.info(
            f"{side} accuracy {summary.accuracy}% over {summary.player_moves} moves "
            f"(total loss {total_cp_loss} cp)"
        )

        return GameAnalysis(evaluations=evaluations, summary=summary)


def analyze_game(
    moves: Sequence[PlayedMove],
    analyzed_color: chess.Color,
    on_progress: Optional[ProgressCallback] = None,
    config: Optional[AnalysisConfig] = None,
    evaluator: Optional[Evaluator] = None,
    cancel_event: Optional[threading.Event] = None,
) -> GameAnalysis:
    """
    Analyze a finished game for one side.

    Shortcut for GameAnalyzer(config, evaluator).analyze(...).
    """
    analyzer = GameAnalyzer(config=config, evaluator=evaluator)
    return analyzer.analyze(moves, analyzed_color, on_progress=on_progress, cancel_event=cancel_event)
