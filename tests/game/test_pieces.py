"""
Tests for block_blast.game.pieces
"""

import dataclasses
import random

import numpy as np
import pytest

from block_blast.game import Piece, PieceColor, PieceKind, generate_piece
from block_blast.game.pieces import BASE_SHAPES


class TestShapes:
    """Shape table tests."""

    def test_seven_kinds_and_colors(self):
        assert len(PieceKind) == 7
        assert len(PieceColor) == 7
        assert set(BASE_SHAPES) == set(PieceKind)

    @pytest.mark.parametrize("kind,rows", [
        (PieceKind.I, [[1, 1, 1, 1]]),
        (PieceKind.O, [[1, 1], [1, 1]]),
        (PieceKind.Z, [[1, 1, 0], [0, 1, 1]]),
        (PieceKind.S, [[0, 1, 1], [1, 1, 0]]),
        (PieceKind.J, [[1, 1, 1], [0, 0, 1]]),
        (PieceKind.L, [[1, 1, 1], [1, 0, 0]]),
        (PieceKind.T, [[1, 1, 1], [1, 1, 0]]),
    ])
    def test_shape_matrix(self, kind, rows):
        np.testing.assert_array_equal(BASE_SHAPES[kind], np.array(rows))

    def test_color_hex(self):
        assert PieceColor.RED.hex == "#FF6B6B"
        assert PieceColor.BLUE.hex == "#54A0FF"


class TestPiece:
    """Immutability and geometry helpers."""

    def test_frozen(self, i_piece: Piece):
        with pytest.raises(dataclasses.FrozenInstanceError):
            i_piece.color = PieceColor.BLUE  # type: ignore[misc]

    def test_shape_read_only(self, o_piece: Piece):
        with pytest.raises(ValueError):
            o_piece.shape[0, 0] = 0

    def test_offsets(self, s_piece: Piece):
        assert s_piece.offsets() == [(0, 1), (0, 2), (1, 0), (1, 1)]


class TestGeneratePiece:
    """Random generation tests."""

    def test_seeded_is_deterministic(self):
        rng_a, rng_b = random.Random(7), random.Random(7)
        a = [generate_piece(rng_a) for _ in range(20)]
        b = [generate_piece(rng_b) for _ in range(20)]
        assert a == b

    def test_covers_all_kinds_and_colors(self):
        rng = random.Random(0)
        pieces = [generate_piece(rng) for _ in range(500)]
        assert {p.kind for p in pieces} == set(PieceKind)
        assert {p.color for p in pieces} == set(PieceColor)
