"""Piece model: colors, tiers, compass directions and the per-tier tables.

Tier behaviour is looked up in plain tables keyed by ``Tier`` (and ``Color``
where the behaviour is side dependent) instead of being spread across piece
subclasses, so every rule for a tier can be read in one place.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple

BOARD_SIZE = 8


class Color(Enum):
    RED = "red"
    BLACK = "black"

    @property
    def opponent(self) -> "Color":
        return Color.BLACK if self is Color.RED else Color.RED


class Tier(Enum):
    TRIANGLE = "triangle"
    SQUARE = "square"
    HEXAGON = "hexagon"
    OCTAGON = "octagon"


class Direction(Enum):
    """Compass directions as (row, col) steps. Row 0 is the top of the board."""

    N = (-1, 0)
    S = (1, 0)
    E = (0, 1)
    W = (0, -1)
    NE = (-1, 1)
    NW = (-1, -1)
    SE = (1, 1)
    SW = (1, -1)

    @property
    def dr(self) -> int:
        return self.value[0]

    @property
    def dc(self) -> int:
        return self.value[1]

    @classmethod
    def between(cls, frm: Tuple[int, int], to: Tuple[int, int]) -> "Direction":
        """Unit direction pointing from ``frm`` towards ``to``."""
        dr = (to[0] > frm[0]) - (to[0] < frm[0])
        dc = (to[1] > frm[1]) - (to[1] < frm[1])
        assert (dr, dc) != (0, 0), "no direction between identical cells"
        return cls((dr, dc))


ALL_DIRECTIONS = tuple(Direction)
ORTHOGONALS = (Direction.N, Direction.S, Direction.E, Direction.W)
DIAGONALS = (Direction.NE, Direction.NW, Direction.SE, Direction.SW)

STEP_LIMITS: Dict[Tier, int] = {
    Tier.TRIANGLE: 3,
    Tier.SQUARE: 4,
    Tier.HEXAGON: 6,
    Tier.OCTAGON: 8,
}

CORNER_COUNTS: Dict[Tier, int] = {
    Tier.TRIANGLE: 3,
    Tier.SQUARE: 4,
    Tier.HEXAGON: 6,
    Tier.OCTAGON: 8,
}

_HEXAGON_DIRECTIONS = (Direction.N, Direction.NE, Direction.NW,
                       Direction.S, Direction.SE, Direction.SW)

MOVE_DIRECTIONS: Dict[Tuple[Tier, Color], Tuple[Direction, ...]] = {
    (Tier.TRIANGLE, Color.RED): (Direction.N, Direction.SW, Direction.SE),
    (Tier.TRIANGLE, Color.BLACK): (Direction.S, Direction.NW, Direction.NE),
    (Tier.SQUARE, Color.RED): ORTHOGONALS,
    (Tier.SQUARE, Color.BLACK): ORTHOGONALS,
    (Tier.HEXAGON, Color.RED): _HEXAGON_DIRECTIONS,
    (Tier.HEXAGON, Color.BLACK): _HEXAGON_DIRECTIONS,
    (Tier.OCTAGON, Color.RED): ALL_DIRECTIONS,
    (Tier.OCTAGON, Color.BLACK): ALL_DIRECTIONS,
}

FRONT_DIRECTIONS: Dict[Tuple[Tier, Color], Tuple[Direction, ...]] = {
    (Tier.TRIANGLE, Color.RED): (Direction.N,),
    (Tier.TRIANGLE, Color.BLACK): (Direction.S,),
    (Tier.SQUARE, Color.RED): ORTHOGONALS,
    (Tier.SQUARE, Color.BLACK): ORTHOGONALS,
    (Tier.HEXAGON, Color.RED): (Direction.N, Direction.NE, Direction.NW),
    (Tier.HEXAGON, Color.BLACK): (Direction.S, Direction.SE, Direction.SW),
    (Tier.OCTAGON, Color.RED): ALL_DIRECTIONS,
    (Tier.OCTAGON, Color.BLACK): ALL_DIRECTIONS,
}

# Layout letters; uppercase is Red, lowercase is Black.
TIER_LETTERS: Dict[Tier, str] = {
    Tier.TRIANGLE: "T",
    Tier.SQUARE: "S",
    Tier.HEXAGON: "H",
    Tier.OCTAGON: "O",
}
LETTER_TIERS: Dict[str, Tier] = {v: k for k, v in TIER_LETTERS.items()}


@dataclass(frozen=True)
class Piece:
    color: Color
    tier: Tier

    @property
    def step_limit(self) -> int:
        return STEP_LIMITS[self.tier]

    @property
    def corner_count(self) -> int:
        return CORNER_COUNTS[self.tier]

    @property
    def directions(self) -> Tuple[Direction, ...]:
        return MOVE_DIRECTIONS[(self.tier, self.color)]

    @property
    def front_directions(self) -> Tuple[Direction, ...]:
        return FRONT_DIRECTIONS[(self.tier, self.color)]

    def symbol(self) -> str:
        letter = TIER_LETTERS[self.tier]
        return letter if self.color is Color.RED else letter.lower()

    @classmethod
    def from_symbol(cls, symbol: str) -> "Piece":
        tier = LETTER_TIERS.get(symbol.upper())
        if tier is None:
            raise ValueError(f"Unknown piece symbol: {symbol!r}")
        color = Color.RED if symbol.isupper() else Color.BLACK
        return cls(color, tier)

    def __str__(self) -> str:
        return f"{self.color.value} {self.tier.value}"
