"""Game session: board plus turn, move history and undo/redo."""

from typing import List, Optional, Sequence

from .board import Board, Move, Position
from .evaluator import loser
from .movegen import all_legal_moves, legal_destinations
from .pieces import Color, Tier


class Game:
    def __init__(self, board: Optional[Board] = None, to_move: Color = Color.RED):
        """Start from the given board or the standard setup. Red moves first."""
        self._start(board.copy() if board else Board.standard(), to_move)

    def _start(self, board: Board, to_move: Color):
        self.board = board
        self.to_move = to_move
        self.move_history: List[Move] = []
        self._snapshots: List[Board] = []
        self._redo: List[Move] = []

    def reset(self):
        """Back to the opening setup."""
        self._start(Board.standard(), Color.RED)

    def set_layout(self, rows: Sequence[str], to_move: Color = Color.RED):
        """Replace the position with a text layout and clear the history."""
        self._start(Board.from_rows(rows), to_move)

    def layout(self) -> List[str]:
        return self.board.to_rows()

    def legal_moves(self) -> List[Move]:
        """Moves for the side to move."""
        return all_legal_moves(self.board, self.to_move)

    def legal_destinations(self, square: str) -> List[Move]:
        """Moves of the selected piece, if it belongs to the side to move."""
        pos = Position.from_square(square)
        piece = self.board.piece_at(pos)
        if piece is None or piece.color is not self.to_move:
            return []
        return legal_destinations(self.board, pos)

    def parse_move(self, text: str) -> Optional[Move]:
        """Find the legal move written as from/to squares, e.g. 'e2e3'."""
        text = text.strip().lower()
        if len(text) != 4:
            return None
        try:
            frm = Position.from_square(text[:2])
            to = Position.from_square(text[2:])
        except ValueError:
            return None
        for move in self.legal_moves():
            if move.from_pos == frm and move.to_pos == to:
                return move
        return None

    def _play(self, move: Move):
        self._snapshots.append(self.board.copy())
        self.board.apply(move)
        self.move_history.append(move)
        self.to_move = self.to_move.opponent

    def push(self, move: Move):
        """Play a generated move for the side to move. Drops the redo line."""
        self._play(move)
        self._redo.clear()

    def make_move(self, move_str: str) -> bool:
        """Play a move like 'e2e3'. Returns True if legal."""
        move = self.parse_move(move_str)
        if move is None:
            return False
        self.push(move)
        return True

    def undo_move(self):
        """Take back the last move."""
        if self.move_history:
            self.board = self._snapshots.pop()
            self._redo.append(self.move_history.pop())
            self.to_move = self.to_move.opponent

    def redo_move(self):
        """Replay the last undone move."""
        if self._redo:
            self._play(self._redo.pop())

    def notation_history(self) -> List[str]:
        return [m.notation() for m in self.move_history]

    def winner(self) -> Optional[Color]:
        """
        A side left without an Octagon loses. A side that merges two of its
        own Octagons down to exactly one remaining Octagon wins.
        """
        lost = loser(self.board)
        if lost is not None:
            return lost.opponent
        if self.move_history:
            last = self.move_history[-1]
            if (last.is_merge and last.piece.tier is Tier.OCTAGON
                    and self.board.count(last.piece.color, Tier.OCTAGON) == 1):
                return last.piece.color
        return None

    def is_game_over(self) -> bool:
        return self.winner() is not None

    def print_board(self):
        print(self.board)
