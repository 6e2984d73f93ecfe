"""Board grid, positions and moves."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, NamedTuple, Optional, Sequence, Tuple

from .pieces import BOARD_SIZE, Color, Piece, Tier, TIER_LETTERS

FILES = "abcdefgh"


class Position(NamedTuple):
    row: int
    col: int

    @property
    def square(self) -> str:
        """Square name, files a-h left to right and rank 1 on the bottom row."""
        return f"{FILES[self.col]}{BOARD_SIZE - self.row}"

    @classmethod
    def from_square(cls, name: str) -> "Position":
        if len(name) != 2 or name[0] not in FILES or not name[1].isdigit():
            raise ValueError(f"Invalid square: {name!r}")
        rank = int(name[1])
        if not 1 <= rank <= BOARD_SIZE:
            raise ValueError(f"Invalid square: {name!r}")
        return cls(BOARD_SIZE - rank, FILES.index(name[0]))


class MoveKind(Enum):
    SIMPLE = "simple"
    CAPTURE = "capture"
    MERGE = "merge"


@dataclass(frozen=True)
class Move:
    from_pos: Position
    to_pos: Position
    kind: MoveKind
    piece: Piece
    merged_into: Optional[Tier] = None

    @property
    def is_capture(self) -> bool:
        return self.kind is MoveKind.CAPTURE

    @property
    def is_merge(self) -> bool:
        return self.kind is MoveKind.MERGE

    def uci(self) -> str:
        return self.from_pos.square + self.to_pos.square

    def notation(self) -> str:
        """History text, e.g. ``Te2-e3``, ``Sd4xd5`` or ``Te2+e3=S``."""
        sep = "x" if self.is_capture else "+" if self.is_merge else "-"
        text = f"{TIER_LETTERS[self.piece.tier]}{self.from_pos.square}{sep}{self.to_pos.square}"
        if self.merged_into is not None:
            text += f"={TIER_LETTERS[self.merged_into]}"
        return text

    def __str__(self) -> str:
        return self.notation()


Grid = List[List[Optional[Piece]]]


class Board:
    def __init__(self, grid: Optional[Grid] = None, size: int = BOARD_SIZE):
        """Build a board from a square grid of optional pieces, or an empty one."""
        if grid is None:
            grid = [[None] * size for _ in range(size)]
        if len(grid) != size or any(len(row) != size for row in grid):
            raise ValueError(f"Board grid must be {size}x{size}")
        self.size = size
        self.grid: Grid = [list(row) for row in grid]

    @classmethod
    def standard(cls) -> "Board":
        """Opening setup: two rows of triangles per side, one octagon each."""
        board = cls()
        for col in range(board.size):
            for row in (0, 1):
                board.grid[row][col] = Piece(Color.BLACK, Tier.TRIANGLE)
            for row in (board.size - 2, board.size - 1):
                board.grid[row][col] = Piece(Color.RED, Tier.TRIANGLE)
        board.grid[0][4] = Piece(Color.BLACK, Tier.OCTAGON)
        board.grid[board.size - 1][3] = Piece(Color.RED, Tier.OCTAGON)
        return board

    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> "Board":
        """Parse a text layout, one string per row, ``.`` for an empty cell."""
        grid = [
            [None if ch == "." else Piece.from_symbol(ch) for ch in row.strip()]
            for row in rows
        ]
        return cls(grid)

    def to_rows(self) -> List[str]:
        return ["".join(p.symbol() if p else "." for p in row) for row in self.grid]

    def copy(self) -> "Board":
        return Board(self.grid, size=self.size)

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def piece_at(self, pos: Tuple[int, int]) -> Optional[Piece]:
        assert self.in_bounds(*pos), f"position out of range: {pos}"
        return self.grid[pos[0]][pos[1]]

    def set_piece(self, pos: Tuple[int, int], piece: Optional[Piece]):
        assert self.in_bounds(*pos), f"position out of range: {pos}"
        self.grid[pos[0]][pos[1]] = piece

    def pieces(self, color: Optional[Color] = None) -> Iterator[Tuple[Position, Piece]]:
        """Yield (position, piece) in row-major order, optionally for one color."""
        for r, row in enumerate(self.grid):
            for c, piece in enumerate(row):
                if piece is not None and (color is None or piece.color is color):
                    yield Position(r, c), piece

    def count(self, color: Color, tier: Tier) -> int:
        return sum(1 for _, p in self.pieces(color) if p.tier is tier)

    def apply(self, move: Move):
        """Play a generated move in place."""
        mover = self.piece_at(move.from_pos)
        assert mover is not None, f"no piece on {move.from_pos.square}"
        if move.kind is MoveKind.MERGE:
            self.set_piece(move.to_pos, Piece(mover.color, move.merged_into))
        else:
            self.set_piece(move.to_pos, mover)
        self.set_piece(move.from_pos, None)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.grid == other.grid

    def __str__(self) -> str:
        lines = []
        for r, row in enumerate(self.to_rows()):
            lines.append(f"{self.size - r} " + " ".join(row))
        lines.append("  " + " ".join(FILES[: self.size]))
        return "\n".join(lines)
