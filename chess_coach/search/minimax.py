"""
Minimax Search with Alpha-Beta Pruning

This module implements the core search algorithm of the coaching engine.
Minimax explores the game tree to a fixed depth, and alpha-beta pruning
skips the branches that cannot change the result.

Key Concepts:
    - Minimax: Recursive algorithm that assumes optimal play by both sides
    - Alpha-Beta: Optimization that prunes branches that can't affect result
    - Fixed depth: No iterative deepening, no clock inside the recursion
    - Move order: python-chess generation order, first-seen move wins ties

Ownership:
    The recursion makes and unmakes moves on one board. Every public entry
    point copies the caller's board first, so concurrent searches never
    share a mutable board and the caller's board is left untouched.

Algorithm Complexity:
    - Minimax: O(b^d) where b=branching factor (~35), d=depth
    - Alpha-Beta: O(b^(d/2)) with perfect move ordering

References:
    - Minimax: https://www.chessprogramming.org/Minimax
    - Alpha-Beta: https://www.chessprogramming.org/Alpha-Beta
"""

import logging
from typing import List, Optional, Tuple, Union

import chess

from chess_coach.board.rules import is_game_over, legal_moves, parse_fen
from chess_coach.evaluation.base import Evaluator
from chess_coach.evaluation.classical import ClassicalEvaluator

logger = logging.getLogger(__name__)

ANALYSIS_DEPTH = 4  # Fixed depth for game analysis and position evaluation


def minimax(
    board: chess.Board,
    depth: int,
    alpha: float,
    beta: float,
    maximizing_player: bool,
    evaluator: Evaluator,
    nodes_searched: Optional[List[int]] = None,
) -> int:
    """
    Minimax search with alpha-beta pruning.

    Recursively explores the game tree, assuming both players play
    optimally, and returns the evaluation of the best line found.

    Args:
        board: Current chess position (mutated during the call, restored on return)
        depth: Remaining search depth (decrements each recursive call)
        alpha: Alpha value for pruning (best score for maximizer)
        beta: Beta value for pruning (best score for minimizer)
        maximizing_player: True if current player wants to maximize score
        evaluator: Position evaluation function
        nodes_searched: Optional mutable list [count] to track positions visited

    Returns:
        int: Evaluation of the position in centipawns (White's perspective)

    Algorithm:
        1. Depth 0 or game over → evaluate position
        2. For each legal move in generation order:
            a. Make move on board
            b. Recursively search (depth - 1)
            c. Undo move
            d. Update alpha/beta
            e. Prune if beta <= alpha
        3. Return best score found
    """
    if nodes_searched is not None:
        nodes_searched[0] += 1

    if depth == 0 or is_game_over(board):
        return evaluator.evaluate(board)

    moves = legal_moves(board)

    if maximizing_player:
        max_eval = -float("inf")
        for move in moves:
            board.push(move)
            eval_score = minimax(
                board,
                depth - 1,
                alpha,
                beta,
                False,
                evaluator,
                nodes_searched,
            )
            board.pop()

            max_eval = max(max_eval, eval_score)
            alpha = max(alpha, eval_score)

            # Beta cutoff: Minimizing player won't allow this branch
            if beta <= alpha:
                break

        return max_eval

    else:
        min_eval = float("inf")
        for move in moves:
            board.push(move)
            eval_score = minimax(
                board,
                depth - 1,
                alpha,
                beta,
                True,
                evaluator,
                nodes_searched,
            )
            board.pop()

            min_eval = min(min_eval, eval_score)
            beta = min(beta, eval_score)

            # Alpha cutoff: Maximizing player won't allow this branch
            if beta <= alpha:
                break

        return min_eval


def find_best_move(
    board: chess.Board,
    depth: int,
    evaluator: Evaluator,
    nodes_searched: Optional[List[int]] = None,
) -> Tuple[chess.Move, int, int]:
    """
    Find the best move in the current position.

    Every root move is searched with a full window, so its backed-up value
    is exact. Among equally scored moves the first one in generation order
    is kept.

    Args:
        board: Current chess position (not modified)
        depth: Search depth in plies, at least 1
        evaluator: Position evaluation function
        nodes_searched: Optional mutable list [count] shared with the caller

    Returns:
        Tuple of (best_move, score, nodes)
            - best_move: The best move found
            - score: Backed-up value of the best move (White's perspective)
            - nodes: Number of positions visited by this call

    Raises:
        ValueError: If depth < 1 or no legal moves are available (game over)
    """
    if depth < 1:
        raise ValueError(f"Search depth must be at least 1, got {depth}")

    search_board = board.copy()
    moves = legal_moves(search_board)
    if not moves:
        raise ValueError("No legal moves available")

    maximizing = search_board.turn == chess.WHITE

    best_move = None
    best_score = None
    nodes = [0]

    for move in moves:
        search_board.push(move)
        score = minimax(
            search_board,
            depth - 1,
            -float("inf"),
            float("inf"),
            not maximizing,
            evaluator,
            nodes,
        )
        search_board.pop()

        if best_move is None:
            improved = True
        elif maximizing:
            improved = score > best_score
        else:
            improved = score < best_score

        if improved:
            best_move = move
            best_score = score

    if nodes_searched is not None:
        nodes_searched[0] += nodes[0]

    logger.debug(
        f"Best move {best_move.uci()} score {best_score} "
        f"(depth {depth}, {len(moves)} root moves, {nodes[0]} nodes)"
    )

    return best_move, best_score, nodes[0]


def evaluate_position(
    position: Union[chess.Board, str],
    depth: int = ANALYSIS_DEPTH,
    evaluator: Optional[Evaluator] = None,
) -> int:
    """
    Search value of a position from its side to move.

    Args:
        position: Board or FEN string
        depth: Search depth (default: ANALYSIS_DEPTH)
        evaluator: Position evaluator (default: ClassicalEvaluator)

    Returns:
        int: Centipawns from White's perspective; the static evaluation
        if the game is already over

    Raises:
        InvalidPosition: If position is a FEN that cannot be parsed
    """
    if isinstance(position, str):
        board = parse_fen(position)
    else:
        board = position.copy()

    evaluator = evaluator if evaluator else ClassicalEvaluator()

    if is_game_over(board):
        return evaluator.evaluate(board)

    return minimax(
        board,
        depth,
        -float("inf"),
        float("inf"),
        board.turn == chess.WHITE,
        evaluator,
    )
