"""Game module for Block Blast.

Exports the grid engine and supporting classes:
- GameGrid: Board representation, placement and line clearing
- Piece: Immutable piece template (shape kind plus color)
- PieceKind / PieceColor: Enums of available shapes and colors
- ScoringRules: Score and level policy
- BlockBlastGame: Game state machine driven by placement requests
"""

from .grid import GameGrid, format_grid, print_grid
from .pieces import Piece, PieceColor, PieceKind, generate_piece
from .rules import ScoringRules
from .core import BlockBlastGame, GameConfig, MoveResult

__all__ = [
    "GameGrid",
    "format_grid",
    "print_grid",
    "Piece",
    "PieceColor",
    "PieceKind",
    "generate_piece",
    "ScoringRules",
    "BlockBlastGame",
    "GameConfig",
    "MoveResult",
]
