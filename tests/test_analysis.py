"""
Unit Tests for Game Analysis

Tests for move records and the game analysis engine, focusing on:
    - Building move records from UCI strings and PGN
    - Grading only the analyzed side
    - Accuracy formula and mate saturation
    - Forced moves, ungradable plies and cancellation
"""

import io
import threading
from datetime import timezone

import chess
import chess.pgn
import pytest

from chess_coach.analysis import (
    AnalysisConfig,
    Classification,
    GameAnalysisSummary,
    GameAnalyzer,
    PlayedMove,
    analyze_game,
    centipawn_difference,
    compute_accuracy,
    load_pgn_game,
    played_moves_from_game,
    played_moves_from_uci,
)
from chess_coach.evaluation import EVAL_CAP, MATE_SCORE, ClassicalEvaluator
from chess_coach.exceptions import AnalysisCancelled, IllegalMoveError, InvalidPosition

BACK_RANK = "6k1/5ppp/8/8/8/8/8/R6K w - - 0 1"
CHECKMATED = "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3"

PGN_TEXT = """[Event "Casual"]
[White "Alice"]
[Black "Bob"]
[Result "*"]

1. e4 e5 2. Nf3 Nc6 *

[Event "Casual"]
[White "Bob"]
[Black "Alice"]
[Result "*"]

1. d4 d5 *
"""


@pytest.fixture
def shallow_config():
    """Analysis settings that keep the tests fast."""
    return AnalysisConfig(depth=2)


class TestPlayedMoves:
    """Tests for move records."""

    def test_from_uci(self):
        moves = played_moves_from_uci(["e2e4", "d7d5", "e4d5", "d8d5"])

        assert [m.uci for m in moves] == ["e2e4", "d7d5", "e4d5", "d8d5"]
        assert [m.san for m in moves] == ["e4", "d5", "exd5", "Qxd5"]
        assert moves[0].fen_before == chess.STARTING_FEN
        assert moves[1].fen_before == moves[0].fen_after

    def test_move_facts(self):
        moves = played_moves_from_uci(["e2e4", "d7d5", "e4d5", "d8d5"])
        recapture = moves[3]

        assert recapture.color == chess.BLACK
        assert recapture.piece == chess.QUEEN
        assert recapture.captured == chess.PAWN
        assert moves[0].captured is None

    def test_custom_start_position(self):
        moves = played_moves_from_uci(["a1a8"], start_fen=BACK_RANK)

        assert moves[0].san == "Ra8#"
        assert chess.Board(moves[0].fen_after).is_checkmate()

    def test_illegal_move(self):
        with pytest.raises(IllegalMoveError):
            played_moves_from_uci(["e2e4", "e7e4"])

    def test_malformed_move(self):
        with pytest.raises(IllegalMoveError):
            played_moves_from_uci(["e2e4", "zz"])

    def test_illegal_move_is_a_value_error(self):
        with pytest.raises(ValueError):
            played_moves_from_uci(["e2e5"])

    def test_from_board_leaves_board_unchanged(self):
        board = chess.Board()

        played = PlayedMove.from_board(board, chess.Move.from_uci("g1f3"))

        assert board.fen() == chess.STARTING_FEN
        assert played.piece == chess.KNIGHT

    def test_from_pgn_game(self):
        game = chess.pgn.read_game(io.StringIO(PGN_TEXT))

        moves = played_moves_from_game(game)

        assert [m.san for m in moves] == ["e4", "e5", "Nf3", "Nc6"]

    def test_load_pgn_game_by_index(self, tmp_path):
        pgn_path = tmp_path / "games.pgn"
        pgn_path.write_text(PGN_TEXT)

        game = load_pgn_game(pgn_path, index=1)

        assert game.headers["White"] == "Bob"
        assert [m.san for m in played_moves_from_game(game)] == ["d4", "d5"]

    def test_load_pgn_game_index_out_of_range(self, tmp_path):
        pgn_path = tmp_path / "games.pgn"
        pgn_path.write_text(PGN_TEXT)

        with pytest.raises(ValueError):
            load_pgn_game(pgn_path, index=5)

    def test_load_pgn_game_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_pgn_game(tmp_path / "missing.pgn")


class TestAccuracyHelpers:
    """Tests for the accuracy formula and mate-aware differences."""

    @pytest.mark.parametrize(
        "total_loss,moves,expected",
        [
            (0, 0, 100.0),
            (0, 5, 100.0),
            (25, 1, 50.0),
            (100, 1, 0.0),
            (5000, 3, 0.0),
            (10, 3, 93.3),
        ],
    )
    def test_compute_accuracy(self, total_loss, moves, expected):
        assert compute_accuracy(total_loss, moves) == expected

    def test_centipawn_difference(self):
        assert centipawn_difference(100, 40, EVAL_CAP) == 60
        assert centipawn_difference(40, 100, EVAL_CAP) == 0

    def test_centipawn_difference_with_mate(self):
        assert centipawn_difference(MATE_SCORE, 0, EVAL_CAP) == EVAL_CAP
        assert centipawn_difference(0, -MATE_SCORE, EVAL_CAP) == EVAL_CAP
        assert centipawn_difference(MATE_SCORE, MATE_SCORE, EVAL_CAP) == 0

    def test_config_validation(self):
        with pytest.raises(ValueError):
            AnalysisConfig(depth=0)

        with pytest.raises(ValueError):
            AnalysisConfig(accuracy_cp_scale=0)


class TestGameAnalysis:
    """Tests for analyze_game and GameAnalyzer."""

    def test_good_opening_move(self):
        """1. e4 loses at most a few centipawns at the default depth."""

        moves = played_moves_from_uci(["e2e4"])

        result = analyze_game(moves, chess.WHITE)

        evaluation = result.evaluations[0]
        assert evaluation is not None
        assert evaluation.classification in (Classification.GREAT, Classification.GOOD)
        assert evaluation.centipawn_loss <= 30
        assert result.summary.player_moves == 1

    def test_only_analyzed_side_is_graded(self, shallow_config):
        moves = played_moves_from_uci(["e2e4", "e7e5", "g1f3", "b8c6"])

        white = analyze_game(moves, chess.WHITE, config=shallow_config)
        black = analyze_game(moves, chess.BLACK, config=shallow_config)

        assert len(white.evaluations) == 4
        assert [e is not None for e in white.evaluations] == [True, False, True, False]
        assert [e is not None for e in black.evaluations] == [False, True, False, True]
        assert white.summary.player_moves == 2
        assert black.summary.player_moves == 2

    def test_progress_reported_every_ply(self, shallow_config):
        moves = played_moves_from_uci(["e2e4", "e7e5", "g1f3"])
        calls = []

        analyze_game(
            moves,
            chess.BLACK,
            on_progress=lambda done, total: calls.append((done, total)),
            config=shallow_config,
        )

        assert calls == [(1, 3), (2, 3), (3, 3)]

    def test_hanging_queen_is_a_blunder(self, shallow_config):
        moves = played_moves_from_uci(["e2e4", "d7d5", "d1g4"])

        result = analyze_game(moves, chess.WHITE, config=shallow_config)

        queen_move = result.evaluations[2]
        assert queen_move.classification is Classification.BLUNDER
        assert queen_move.centipawn_loss > 200
        assert not queen_move.played_best
        assert result.summary.blunder >= 1
        assert result.summary.accuracy < 50

    def test_mating_move(self, shallow_config):
        moves = played_moves_from_uci(["a1a8"], start_fen=BACK_RANK)

        result = analyze_game(moves, chess.WHITE, config=shallow_config)

        evaluation = result.evaluations[0]
        assert evaluation.centipawns_after == EVAL_CAP
        assert evaluation.centipawn_loss == 0
        assert evaluation.best_move == chess.Move.from_uci("a1a8")
        assert evaluation.best_move_san == "Ra8#"
        assert evaluation.played_best
        assert evaluation.classification is Classification.GREAT
        assert result.summary.accuracy == 100.0

    def test_all_best_moves_give_full_accuracy(self, shallow_config):
        """With flat tables and no captures in reach every move scores 0."""

        evaluator = ClassicalEvaluator(piece_tables={})
        moves = played_moves_from_uci(["e2e4"])

        result = analyze_game(moves, chess.WHITE, config=shallow_config, evaluator=evaluator)

        assert result.evaluations[0].centipawn_loss == 0
        assert result.summary.accuracy == 100.0

    def test_forced_move(self, shallow_config):
        moves = played_moves_from_uci(["a1b2"], start_fen="k7/8/8/8/8/8/1q6/K7 w - - 0 1")

        result = analyze_game(moves, chess.WHITE, config=shallow_config)

        assert result.evaluations[0].classification is Classification.FORCED
        summary = result.summary
        assert summary.player_moves == 1
        assert summary.great == summary.good == summary.blunder == 0
        assert summary.accuracy == 100.0

    def test_ply_without_legal_moves_counts_without_loss(self, shallow_config):
        played = PlayedMove(
            move=chess.Move.from_uci("e1f2"),
            san="Kf2",
            color=chess.WHITE,
            piece=chess.KING,
            captured=None,
            fen_before=CHECKMATED,
            fen_after=CHECKMATED,
        )

        result = analyze_game([played], chess.WHITE, config=shallow_config)

        assert result.evaluations == [None]
        assert result.summary.player_moves == 1
        assert result.summary.accuracy == 100.0

    def test_ungradable_ply_stays_in_accuracy_denominator(self, shallow_config):
        stuck = PlayedMove(
            move=chess.Move.from_uci("e1f2"),
            san="Kf2",
            color=chess.WHITE,
            piece=chess.KING,
            captured=None,
            fen_before=CHECKMATED,
            fen_after=CHECKMATED,
        )
        moves = played_moves_from_uci(["e2e4", "e7e5"]) + [stuck]

        result = analyze_game(moves, chess.WHITE, config=shallow_config)

        graded = result.evaluations[0]
        assert graded is not None
        assert result.evaluations[2] is None
        assert result.summary.player_moves == 2
        assert result.summary.accuracy == compute_accuracy(graded.centipawn_loss, 2)

    def test_gain_measured_from_drawn_position(self, shallow_config):
        """Under the fifty-move rule the position before scores 0, so winning a knight is a gain."""

        evaluator = ClassicalEvaluator(piece_tables={})
        moves = played_moves_from_uci(["b1d1"], start_fen="k7/8/8/8/8/8/8/KR1n4 w - - 100 80")

        result = analyze_game(moves, chess.WHITE, config=shallow_config, evaluator=evaluator)

        evaluation = result.evaluations[0]
        assert evaluation.centipawn_loss == 0
        assert evaluation.centipawns_after == 500
        assert evaluation.classification is Classification.BRILLIANT
        assert result.summary.brilliant == 1

    def test_invalid_fen_propagates(self, shallow_config):
        played = PlayedMove(
            move=chess.Move.from_uci("e2e4"),
            san="e4",
            color=chess.WHITE,
            piece=chess.PAWN,
            captured=None,
            fen_before="not a fen",
            fen_after="not a fen",
        )

        with pytest.raises(InvalidPosition):
            analyze_game([played], chess.WHITE, config=shallow_config)

    def test_empty_game(self):
        result = analyze_game([], chess.WHITE)

        assert result.evaluations == []
        assert result.summary.accuracy == 100.0
        assert result.summary.player_moves == 0

    def test_analyzed_at_is_utc(self):
        result = analyze_game([], chess.BLACK)

        assert result.analyzed_at.tzinfo is timezone.utc

    def test_analyzer_reuses_config(self, shallow_config):
        analyzer = GameAnalyzer(config=shallow_config)
        moves = played_moves_from_uci(["e2e4", "e7e5"])

        first = analyzer.analyze(moves, chess.WHITE)
        second = analyzer.analyze(moves, chess.WHITE)

        assert first.evaluations == second.evaluations


class TestCancellation:
    """Tests for stopping an analysis early."""

    def test_cancel_before_start(self, shallow_config):
        moves = played_moves_from_uci(["e2e4", "e7e5"])
        cancel = threading.Event()
        cancel.set()

        with pytest.raises(AnalysisCancelled) as exc_info:
            analyze_game(moves, chess.WHITE, config=shallow_config, cancel_event=cancel)

        assert exc_info.value.completed_plies == 0
        assert exc_info.value.total_plies == 2

    def test_cancel_from_progress_callback(self, shallow_config):
        moves = played_moves_from_uci(["e2e4", "e7e5", "g1f3"])
        cancel = threading.Event()

        def on_progress(done, total):
            cancel.set()

        with pytest.raises(AnalysisCancelled) as exc_info:
            analyze_game(
                moves,
                chess.WHITE,
                on_progress=on_progress,
                config=shallow_config,
                cancel_event=cancel,
            )

        assert exc_info.value.completed_plies == 1


class TestSummary:
    """Tests for the summary counters."""

    def test_record(self):
        summary = GameAnalysisSummary()

        summary.record(Classification.BLUNDER)
        summary.record(Classification.BLUNDER)
        summary.record(Classification.GREAT)
        summary.record(Classification.FORCED)

        assert summary.blunder == 2
        assert summary.great == 1
        assert summary.as_dict() == {
            "accuracy": 100.0,
            "brilliant": 0,
            "great": 1,
            "good": 0,
            "inaccuracy": 0,
            "mistake": 0,
            "blunder": 2,
            "player_moves": 0,
        }
