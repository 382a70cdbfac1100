from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional

import numpy as np

from .grid import EMPTY, Coordinate, GameGrid, print_grid
from .pieces import Piece, generate_piece
from .rules import ScoringRules


logger = logging.getLogger(__name__)


@dataclass
class GameConfig:
    grid_size: int = 8
    random_seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.grid_size < 1:
            raise ValueError("grid_size must be at least 1")


@dataclass(frozen=True)
class MoveResult:
    """Outcome of one placement request."""

    success: bool
    lines_cleared: int = 0
    score_gained: int = 0
    game_over: bool = False

    def __bool__(self) -> bool:
        return self.success


GameOverListener = Callable[["BlockBlastGame"], None]


class BlockBlastGame:
    """Grid engine: board, current/next piece, score, level and game over.

    Each instance is one game. `reset()` hands back a new instance instead of
    clearing this one, so callers hold the game explicitly and swap it out.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        rng: Optional[random.Random] = None,
        listeners: Optional[Iterable[GameOverListener]] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.rng = rng if rng is not None else random.Random(self.config.random_seed)
        self.grid = GameGrid(self.config.grid_size)
        self._score = 0
        self._level = self.rules.start_level
        self._game_over = False
        self.moves = 0
        self.lines_cleared_total = 0
        self._listeners: List[GameOverListener] = list(listeners or [])
        self._current_piece = self.generate_piece()
        self._next_piece = self.generate_piece()

    # Read access for renderers

    @property
    def board(self) -> np.ndarray:
        return self.grid.view()

    @property
    def current_piece(self) -> Piece:
        return self._current_piece

    @property
    def next_piece(self) -> Piece:
        return self._next_piece

    @property
    def score(self) -> int:
        return self._score

    @property
    def level(self) -> int:
        return self._level

    @property
    def game_over(self) -> bool:
        return self._game_over

    def add_game_over_listener(self, callback: GameOverListener) -> None:
        self._listeners.append(callback)

    # Engine operations

    def generate_piece(self) -> Piece:
        return generate_piece(self.rng)

    def can_place(self, piece: Piece, row: int, col: int) -> bool:
        return self.grid.can_place(piece.shape, row, col)

    def place_piece(self, piece: Piece, row: int, col: int) -> bool:
        return self.grid.place(piece.shape, row, col, int(piece.color))

    def clear_lines(self) -> int:
        return self.grid.clear_lines()

    def is_game_over(self) -> bool:
        """Check the piece to be placed against the board at offset (0, 0) only.

        Every cell of the piece's bounding box counts, empty shape cells
        included, so a filled board cell anywhere in that box ends the game.
        Other offsets are not searched; see `has_moves` for that.
        """
        piece_h, piece_w = self._current_piece.shape.shape
        for pr in range(piece_h):
            for pc in range(piece_w):
                if self.grid.is_inside(pr, pc) and self.grid.grid[pr, pc] != EMPTY:
                    return True
        return False

    @property
    def has_moves(self) -> bool:
        """True while the game is live and the current piece fits somewhere."""
        return not self._game_over and bool(self.valid_placements())

    def valid_placements(self, piece: Optional[Piece] = None) -> List[Coordinate]:
        piece = piece or self._current_piece
        return self.grid.valid_placements(piece.shape)

    def play(self, row: int, col: int) -> MoveResult:
        """Place the current piece at (row, col) and resolve the placement event."""
        if self._game_over:
            logger.debug("move at (%d, %d) ignored: game is over", row, col)
            return MoveResult(success=False, game_over=True)

        piece = self._current_piece
        if not self.place_piece(piece, row, col):
            logger.debug("cannot place %s at (%d, %d)", piece.kind.name, row, col)
            return MoveResult(success=False)

        lines = self.clear_lines()
        gained = self.rules.score_for_lines(lines, self._level)
        self._score += gained
        self._level = self.rules.next_level(self._level, lines)
        self.moves += 1
        self.lines_cleared_total += lines
        if lines:
            logger.debug("cleared %d line(s) for %d points, level %d", lines, gained, self._level)

        self._current_piece = self._next_piece
        self._next_piece = self.generate_piece()

        if self.is_game_over():
            self._game_over = True
            logger.info("game over: score=%d level=%d moves=%d", self._score, self._level, self.moves)
            for listener in list(self._listeners):
                listener(self)

        return MoveResult(success=True, lines_cleared=lines, score_gained=gained, game_over=self._game_over)

    def reset(self, seed: Optional[int] = None) -> "BlockBlastGame":
        """Return a fresh game sharing config, rules, listeners and random source."""
        rng = random.Random(seed) if seed is not None else self.rng
        logger.info("new game (previous score=%d)", self._score)
        return BlockBlastGame(self.config, self.rules, rng=rng, listeners=self._listeners)

    def get_state(self) -> dict:
        return {
            "grid": self.grid.clone_state(),
            "current_piece": (int(self._current_piece.kind), int(self._current_piece.color)),
            "next_piece": (int(self._next_piece.kind), int(self._next_piece.color)),
            "score": self._score,
            "level": self._level,
            "game_over": self._game_over,
            "has_moves": self.has_moves,
            "moves": self.moves,
            "lines_cleared_total": self.lines_cleared_total,
        }


def run_game_demo(seed: Optional[int] = None) -> None:  # pragma: no cover
    game = BlockBlastGame(GameConfig(random_seed=seed))
    print("=== Block Blast Demo ===")
    while not game.game_over:
        spots = game.valid_placements()
        if not spots:
            print(f"No room for {game.current_piece.kind.name}")
            break
        row, col = game.rng.choice(spots)
        result = game.play(row, col)
        if result.lines_cleared:
            print(f"Move {game.moves}: cleared {result.lines_cleared}, +{result.score_gained}")
    print_grid(game.board)
    print(f"Final score: {game.score}  level: {game.level}  moves: {game.moves}")


if __name__ == "__main__":  # pragma: no cover
    run_game_demo()
