import random
import time
from typing import List, Optional, Tuple

from cornerclash.config import CONFIG
from cornerclash.core.board import Board, Move, MoveKind
from cornerclash.core.evaluator import Evaluator, is_game_over
from cornerclash.core.movegen import all_legal_moves
from cornerclash.core.pieces import Color
from cornerclash.core.utils import print_info

INF = 1000000

# Lower sorts first: captures, then merges, then plain slides.
KIND_ORDER = {MoveKind.CAPTURE: 0, MoveKind.MERGE: 1, MoveKind.SIMPLE: 2}


class SearchEngine:
    def __init__(self, evaluator: Optional[Evaluator] = None, depth: Optional[int] = None,
                 rng: Optional[random.Random] = None, randomize: Optional[bool] = None,
                 alpha_beta: Optional[bool] = None):
        """
        depth = search depth in plies, fixed for every search.
        rng = source of the move-order shuffle; seed it (or pass randomize=False)
        for reproducible play.
        alpha_beta=False searches the full tree (plain minimax).
        """
        cfg = CONFIG.search
        self.evaluator = evaluator or Evaluator()
        self.max_depth = depth if depth is not None else cfg.depth
        self.rng = rng or random.Random(cfg.seed)
        self.randomize = cfg.randomize if randomize is None else randomize
        self.alpha_beta = cfg.alpha_beta if alpha_beta is None else alpha_beta
        self.nodes = 0

    # Public API
    def get_ai_move(self, board: Board, ai_color: Color) -> Optional[Move]:
        """Best move for ai_color, searched quietly. None when there is none."""
        self.nodes = 0
        _, move = self.minimax(board.copy(), self.max_depth, -INF, INF, True, ai_color)
        return move

    def search_best_move(self, board: Board, ai_color: Color) -> Tuple[Optional[Move], int]:
        """
        Returns (best_move, score) for ai_color. best_move is None when ai_color
        has no legal move or the game is already decided.
        """
        self.nodes = 0
        start_time = time.time()

        score, best_move = self.minimax(board.copy(), self.max_depth, -INF, INF, True, ai_color)

        elapsed = time.time() - start_time
        print_info(self.max_depth, score, self.nodes, elapsed, best_move)
        return best_move, score

    # -------------------------
    # Core minimax (alpha-beta)
    # -------------------------
    def minimax(self, board: Board, depth: int, alpha: int, beta: int,
                maximizing: bool, ai_color: Color) -> Tuple[int, Optional[Move]]:
        self.nodes += 1
        if depth <= 0 or is_game_over(board):
            return self.evaluator.evaluate(board, ai_color), None

        side = ai_color if maximizing else ai_color.opponent
        moves = all_legal_moves(board, side)
        if not moves:
            # a stalled side is scored like any other leaf
            return self.evaluator.evaluate(board, ai_color), None
        moves = self._order_moves(moves)

        best_move = None
        if maximizing:
            best_score = -INF
            for move in moves:
                child = board.copy()
                child.apply(move)
                score, _ = self.minimax(child, depth - 1, alpha, beta, False, ai_color)
                if score > best_score:
                    best_score = score
                    best_move = move
                alpha = max(alpha, best_score)
                if self.alpha_beta and beta <= alpha:
                    break
        else:
            best_score = INF
            for move in moves:
                child = board.copy()
                child.apply(move)
                score, _ = self.minimax(child, depth - 1, alpha, beta, True, ai_color)
                if score < best_score:
                    best_score = score
                    best_move = move
                beta = min(beta, best_score)
                if self.alpha_beta and beta <= alpha:
                    break

        return best_score, best_move

    # -------------------------
    # Move ordering helpers
    # -------------------------
    def _order_moves(self, moves: List[Move]) -> List[Move]:
        """
        Shuffle (tie-break among equal moves), then put captures and merges
        first. The sort is stable so the shuffle survives within each kind.
        """
        moves = list(moves)
        if self.randomize:
            self.rng.shuffle(moves)
        moves.sort(key=lambda m: KIND_ORDER[m.kind])
        return moves
