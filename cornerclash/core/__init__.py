"""Core engine components: pieces, board, rules, move generation, evaluator and search."""

from .pieces import Color, Direction, Piece, Tier
from .board import Board, Move, MoveKind, Position
from .rules import can_capture, legal_moves, merge_with
from .movegen import all_legal_moves
from .evaluator import Evaluator, is_game_over
from .search import SearchEngine
from .game import Game
