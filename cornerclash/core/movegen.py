"""Move generation for a whole side."""

from typing import List, Tuple

from .board import Board, Move
from .pieces import Color
from .rules import legal_moves


def all_legal_moves(board: Board, color: Color) -> List[Move]:
    """Flattened legal moves of every ``color`` piece, origins in row-major order."""
    moves: List[Move] = []
    for pos, piece in board.pieces(color):
        moves.extend(legal_moves(piece, pos, board))
    return moves


def has_legal_moves(board: Board, color: Color) -> bool:
    for pos, piece in board.pieces(color):
        if legal_moves(piece, pos, board):
            return True
    return False


def legal_destinations(board: Board, position: Tuple[int, int]) -> List[Move]:
    """Moves of the piece on ``position``; empty when the cell is empty."""
    piece = board.piece_at(position)
    if piece is None:
        return []
    return legal_moves(piece, position, board)
