"""
Chess Coach Engine

The move-search and game-analysis core of a chess coaching tool: a
fixed-depth minimax search with alpha-beta pruning over a classical
evaluation, used both to play against the student at a chosen strength
and to grade the moves of a finished game.

## Architecture

1. **board**: Rules Engine adapter over python-chess
   - Validated FEN parsing, legal moves, game-over detection

2. **evaluation**: Position evaluation functions
   - Abstract Evaluator interface (swappable design)
   - ClassicalEvaluator: Material + Piece-Square Tables
   - Material balance and captured pieces for display

3. **search**: Search algorithms
   - Minimax with alpha-beta pruning
   - Opponent move selection with difficulty profiles

4. **analysis**: Game grading
   - Decision-table move classifier
   - Per-move centipawn loss and accuracy summary

## Quick Start

```python
import chess
from chess_coach.analysis import analyze_game, played_moves_from_uci

moves = played_moves_from_uci(["e2e4", "e7e5", "g1f3"])
analysis = analyze_game(moves, chess.WHITE)
print(analysis.summary.accuracy)
```

```python
import asyncio
import chess
from chess_coach.search import BEGINNER, select_opponent_move

move = asyncio.run(select_opponent_move(chess.STARTING_FEN, BEGINNER))
```

## Version

0.1.0
"""

__version__ = "0.1.0"
__license__ = "MIT"

from chess_coach.analysis import analyze_game
from chess_coach.evaluation import ClassicalEvaluator, Evaluator, material_balance
from chess_coach.exceptions import ChessCoachError, InvalidPosition
from chess_coach.search import PROFILES, find_best_move, select_opponent_move

__all__ = [
    'analyze_game',
    'ClassicalEvaluator',
    'Evaluator',
    'material_balance',
    'ChessCoachError',
    'InvalidPosition',
    'PROFILES',
    'find_best_move',
    'select_opponent_move',
]
