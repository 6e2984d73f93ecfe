"""Movement, merge and combat rules.

Combat is decided by an explicit table of allowed attack directions for the
attacker/defender pairings that have their own rule. Everything else falls
back to the facing rule: a flank or rear attack always wins, a front attack
wins only when the attacker has no more corners than the defender.
"""

from __future__ import annotations

from typing import Dict, FrozenSet, List, Optional, Tuple

from .board import Board, Move, MoveKind, Position
from .pieces import Color, Direction, Piece, Tier, DIAGONALS

D = Direction

# (attacker tier, attacker color, defender tier) -> allowed attack directions
CAPTURE_TABLE: Dict[Tuple[Tier, Color, Tier], FrozenSet[Direction]] = {
    (Tier.SQUARE, Color.RED, Tier.TRIANGLE): frozenset({D.S, D.W, D.E, D.SW, D.SE}),
    (Tier.SQUARE, Color.BLACK, Tier.TRIANGLE): frozenset({D.N, D.W, D.E, D.NW, D.NE}),
    (Tier.HEXAGON, Color.RED, Tier.TRIANGLE): frozenset({D.S, D.SW, D.SE}),
    (Tier.HEXAGON, Color.BLACK, Tier.TRIANGLE): frozenset({D.N, D.NW, D.NE}),
    (Tier.OCTAGON, Color.RED, Tier.TRIANGLE): frozenset({D.S, D.W, D.E, D.NW, D.NE}),
    (Tier.OCTAGON, Color.BLACK, Tier.TRIANGLE): frozenset({D.N, D.W, D.E, D.SW, D.SE}),
    (Tier.OCTAGON, Color.RED, Tier.SQUARE): frozenset(DIAGONALS),
    (Tier.OCTAGON, Color.BLACK, Tier.SQUARE): frozenset(DIAGONALS),
    (Tier.OCTAGON, Color.RED, Tier.HEXAGON): frozenset({D.W, D.E}),
    (Tier.OCTAGON, Color.BLACK, Tier.HEXAGON): frozenset({D.W, D.E}),
}

MERGE_RESULTS: Dict[Tier, Tier] = {
    Tier.TRIANGLE: Tier.SQUARE,
    Tier.SQUARE: Tier.HEXAGON,
    Tier.HEXAGON: Tier.OCTAGON,
    Tier.OCTAGON: Tier.OCTAGON,
}


def merge_with(a: Piece, b: Piece) -> Optional[Piece]:
    """Piece produced by merging ``a`` into ``b``, or None if they cannot merge."""
    if a.color is not b.color or a.tier is not b.tier:
        return None
    return Piece(a.color, MERGE_RESULTS[a.tier])


def can_capture(attacker: Piece, attacker_pos: Tuple[int, int],
                defender: Piece, defender_pos: Tuple[int, int]) -> bool:
    if attacker.color is defender.color:
        return False
    direction = Direction.between(attacker_pos, defender_pos)

    allowed = CAPTURE_TABLE.get((attacker.tier, attacker.color, defender.tier))
    if allowed is not None:
        return direction in allowed

    if direction not in defender.front_directions:
        return True
    return attacker.corner_count <= defender.corner_count


def legal_moves(piece: Piece, position: Tuple[int, int], board: Board) -> List[Move]:
    """Every slide, capture and merge available to ``piece`` standing on ``position``."""
    origin = Position(*position)
    assert board.in_bounds(*origin), f"position out of range: {position}"
    moves: List[Move] = []

    for direction in piece.directions:
        for step in range(1, piece.step_limit + 1):
            row = origin.row + direction.dr * step
            col = origin.col + direction.dc * step
            if not board.in_bounds(row, col):
                break
            target_pos = Position(row, col)
            target = board.grid[row][col]

            if target is None:
                moves.append(Move(origin, target_pos, MoveKind.SIMPLE, piece))
                continue

            if target.color is piece.color:
                merged = merge_with(piece, target)
                if merged is not None:
                    moves.append(Move(origin, target_pos, MoveKind.MERGE, piece, merged.tier))
            elif can_capture(piece, origin, target, target_pos):
                moves.append(Move(origin, target_pos, MoveKind.CAPTURE, piece))
            # sliders never jump
            break

    return moves
