"""Static evaluator: material, mobility and merge potential."""

from typing import Optional

from cornerclash.config import CONFIG, EvalConfig
from .board import Board
from .movegen import all_legal_moves
from .pieces import Color, Tier


def is_game_over(board: Board) -> bool:
    """A side without an Octagon has lost."""
    return (board.count(Color.RED, Tier.OCTAGON) == 0
            or board.count(Color.BLACK, Tier.OCTAGON) == 0)


def loser(board: Board) -> Optional[Color]:
    """The side with no Octagon left, if any (Red is checked first)."""
    for color in (Color.RED, Color.BLACK):
        if board.count(color, Tier.OCTAGON) == 0:
            return color
    return None


class Evaluator:
    def __init__(self, cfg: Optional[EvalConfig] = None):
        self.cfg = cfg or CONFIG.eval

    def evaluate(self, board: Board, color: Color) -> int:
        """Return the score in points, positive favors ``color``."""
        opp = color.opponent
        score = self.material(board, color) - self.material(board, opp)
        score += self.mobility(board, color) - self.mobility(board, opp)
        score += self.merge_potential(board, color) - self.merge_potential(board, opp)
        return score

    def material(self, board: Board, color: Color) -> int:
        values = self.cfg.piece_values
        return sum(values[p.tier.name] for _, p in board.pieces(color))

    def mobility(self, board: Board, color: Color) -> int:
        return self.cfg.mobility_weight * len(all_legal_moves(board, color))

    def merge_potential(self, board: Board, color: Color) -> int:
        # Each orthogonally adjacent same-tier pair counted once (right and down neighbours).
        pairs = 0
        for pos, piece in board.pieces(color):
            for dr, dc in ((0, 1), (1, 0)):
                r, c = pos.row + dr, pos.col + dc
                if board.in_bounds(r, c):
                    other = board.grid[r][c]
                    if other is not None and other == piece:
                        pairs += 1
        return self.cfg.merge_weight * pairs
