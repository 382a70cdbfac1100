"""
Shared test fixtures for block_blast tests.
"""

from typing import Callable, Optional

import pytest

from block_blast.game import BlockBlastGame, GameConfig, GameGrid, Piece, PieceColor, PieceKind


# =============================================================================
# Piece Fixtures
# =============================================================================

@pytest.fixture
def i_piece() -> Piece:
    return Piece(PieceKind.I, PieceColor.RED)


@pytest.fixture
def o_piece() -> Piece:
    return Piece(PieceKind.O, PieceColor.TEAL)


@pytest.fixture
def s_piece() -> Piece:
    return Piece(PieceKind.S, PieceColor.YELLOW)


# =============================================================================
# Board / Game Fixtures
# =============================================================================

@pytest.fixture
def grid() -> GameGrid:
    """Empty 8x8 grid."""
    return GameGrid(8)


@pytest.fixture
def game() -> BlockBlastGame:
    """Seeded game on an empty board."""
    return BlockBlastGame(GameConfig(random_seed=1234))


@pytest.fixture
def force_pieces() -> Callable[..., None]:
    """Overwrite the current (and optionally next) piece of a game."""
    def _force(game: BlockBlastGame, current: Piece, nxt: Optional[Piece] = None) -> None:
        game._current_piece = current
        if nxt is not None:
            game._next_piece = nxt
    return _force
