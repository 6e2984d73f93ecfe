from typing import Optional, Tuple

from cornerclash.core.game import Game
from cornerclash.core.search import SearchEngine
from cornerclash.core.evaluator import Evaluator


class Engine:
    def __init__(self, depth: Optional[int] = None, **search_options):
        self.game = Game()
        self.search = SearchEngine(Evaluator(), depth=depth, **search_options)

    def get_best_move(self) -> Tuple[Optional[str], int]:
        move, value = self.search.search_best_move(self.game.board, self.game.to_move)
        return (move.uci() if move else None), value

    def play_engine_move(self) -> Optional[str]:
        """Search for the side to move and play the result."""
        if self.game.is_game_over():
            return None
        move = self.search.get_ai_move(self.game.board, self.game.to_move)
        if move is None:
            return None
        self.game.push(move)
        return move.uci()

    def make_move(self, move_str: str) -> bool:
        return self.game.make_move(move_str)

    def print_board(self):
        self.game.print_board()
