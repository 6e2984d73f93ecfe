"""
Integration test suite for the CornerClash engine.

Tests components working together end-to-end:
- Full game simulations (engine vs engine)
- Game session (turns, history, undo/redo, winners)
- Engine wrapper
- Terminal interface
- FastAPI REST API integration
"""

import random

import pytest

from cornerclash.config import CONFIG
from cornerclash.core.board import Board, MoveKind
from cornerclash.core.evaluator import Evaluator
from cornerclash.core.game import Game
from cornerclash.core.movegen import all_legal_moves
from cornerclash.core.pieces import Color, Piece, Tier
from cornerclash.core.search import SearchEngine
from cornerclash.main import Engine

RED, BLACK = Color.RED, Color.BLACK

MERGE_DOWN_LAYOUT = [
    "o.......",
    "........",
    "........",
    "........",
    "....OO..",
    "........",
    "........",
    "........",
]

NO_RED_OCTAGON_LAYOUT = [
    "....o...",
    "........",
    "........",
    "........",
    "........",
    "........",
    "TT......",
    "........",
]


# ════════════════════════════════════════════════════════════════════════════
#  ENGINE VS ENGINE - FULL GAME SIMULATIONS
# ════════════════════════════════════════════════════════════════════════════


class TestFullGame:
    """Tests that the engine can play games without crashing."""

    def test_engine_vs_engine_plays_legal_moves(self):
        engine = SearchEngine(Evaluator(), depth=1, rng=random.Random(2024))
        game = Game()
        move_count = 0
        max_moves = 40  # safety limit

        while not game.is_game_over() and move_count < max_moves:
            move = engine.get_ai_move(game.board, game.to_move)
            if move is None:
                break  # side to move is stalled
            assert move in game.legal_moves(), f"Illegal move {move} at move {move_count}"
            game.push(move)
            move_count += 1

        assert move_count > 0
        assert len(game.move_history) == move_count
        if game.is_game_over():
            beaten = game.winner().opponent
            assert game.board.count(beaten, Tier.OCTAGON) == 0
            assert game.move_history[-1].is_capture

    def test_front_capture_of_octagon_ends_game_early(self):
        """A triangle may take an octagon head-on: 3 corners do not exceed 8."""
        game = Game()
        for text in ("d2d5", "d7d5", "d1d4", "d5d4"):
            assert game.make_move(text), text
        assert game.notation_history() == ["Td2-d5", "Td7xd5", "Od1-d4", "Td5xd4"]
        assert game.is_game_over()
        assert game.winner() is BLACK

    def test_engine_alternating_colors(self):
        game = Game()
        engine = SearchEngine(depth=2, rng=random.Random(9))
        for _ in range(4):
            color = game.to_move
            move = engine.get_ai_move(game.board, color)
            assert move is not None
            assert move.piece.color is color
            game.push(move)
        assert game.to_move is RED

    def test_piece_totals_only_shrink(self):
        """Captures and merges remove pieces; nothing is ever created from nothing."""
        game = Game()
        engine = SearchEngine(depth=1, rng=random.Random(5))
        total = sum(1 for _ in game.board.pieces())
        for _ in range(20):
            move = engine.get_ai_move(game.board, game.to_move)
            if move is None or game.is_game_over():
                break
            game.push(move)
            now = sum(1 for _ in game.board.pieces())
            expected = total if move.kind is MoveKind.SIMPLE else total - 1
            assert now == expected
            total = now


# ════════════════════════════════════════════════════════════════════════════
#  GAME SESSION
# ════════════════════════════════════════════════════════════════════════════


class TestGameSession:
    def test_initial_state(self):
        game = Game()
        assert game.to_move is RED
        assert game.board == Board.standard()
        assert game.move_history == []
        assert not game.is_game_over()

    def test_make_legal_move(self):
        game = Game()
        assert game.make_move("a2a3") is True
        assert game.to_move is BLACK
        assert game.board.piece_at((5, 0)) == Piece(RED, Tier.TRIANGLE)
        assert game.notation_history() == ["Ta2-a3"]

    def test_make_merge_move(self):
        game = Game()
        assert game.make_move("a1a2") is True
        assert game.board.piece_at((6, 0)) == Piece(RED, Tier.SQUARE)
        assert game.board.piece_at((7, 0)) is None
        assert game.notation_history() == ["Ta1+a2=S"]

    def test_make_illegal_move(self):
        game = Game()
        assert game.make_move("a2a6") is False  # beyond a triangle's reach
        assert game.make_move("a7a6") is False  # black piece on red's turn
        assert game.to_move is RED

    def test_make_garbage_input(self):
        game = Game()
        assert game.make_move("zzzz") is False
        assert game.make_move("") is False
        assert game.make_move("a2a3a4") is False
        assert game.board == Board.standard()

    def test_legal_destinations(self):
        game = Game()
        moves = game.legal_destinations("a2")
        assert {m.to_pos.square for m in moves} == {"a3", "a4", "a5", "b1"}
        assert [m.kind for m in moves if m.to_pos.square == "b1"] == [MoveKind.MERGE]
        assert game.legal_destinations("a7") == []  # not red's piece
        assert game.legal_destinations("d4") == []  # empty

    def test_undo_redo(self):
        game = Game()
        game.make_move("a2a3")
        game.make_move("a7a6")
        game.undo_move()
        assert game.to_move is BLACK
        assert len(game.move_history) == 1
        game.undo_move()
        assert game.board == Board.standard()
        assert game.to_move is RED
        game.redo_move()
        assert game.notation_history() == ["Ta2-a3"]
        assert game.to_move is BLACK

    def test_new_move_clears_redo(self):
        game = Game()
        game.make_move("a2a3")
        game.undo_move()
        game.make_move("h2h3")
        game.redo_move()  # nothing to redo
        assert game.notation_history() == ["Th2-h3"]

    def test_undo_empty(self):
        game = Game()
        game.undo_move()  # should not crash
        game.redo_move()
        assert game.board == Board.standard()

    def test_reset(self):
        game = Game()
        game.make_move("a2a3")
        game.reset()
        assert game.board == Board.standard()
        assert game.move_history == []
        assert game.to_move is RED

    def test_set_layout(self):
        game = Game()
        game.set_layout(MERGE_DOWN_LAYOUT, BLACK)
        assert game.layout() == MERGE_DOWN_LAYOUT
        assert game.to_move is BLACK
        assert all(m.piece.color is BLACK for m in game.legal_moves())

    def test_zero_octagons_loses(self):
        game = Game()
        game.set_layout(NO_RED_OCTAGON_LAYOUT)
        assert game.winner() is BLACK
        assert game.is_game_over()

    def test_merging_down_to_one_octagon_wins(self):
        game = Game()
        game.set_layout(MERGE_DOWN_LAYOUT)
        assert game.winner() is None
        assert game.make_move("e4f4") is True
        assert game.board.count(RED, Tier.OCTAGON) == 1
        assert game.winner() is RED

    def test_hexagon_merge_is_not_a_win(self):
        game = Game()
        game.set_layout([
            "o.......",
            "........",
            "....H...",
            "........",
            "....H...",
            "........",
            "........",
            ".......O",
        ])
        assert game.make_move("e4e6") is True
        assert game.board.count(RED, Tier.OCTAGON) == 2
        assert game.winner() is None

    def test_print_board(self, capsys):
        Game().print_board()
        out = capsys.readouterr().out
        assert "ttttottt" in out.replace(" ", "")
        assert "abcdefgh" in out.replace(" ", "")


# ════════════════════════════════════════════════════════════════════════════
#  ENGINE WRAPPER
# ════════════════════════════════════════════════════════════════════════════


class TestEngineWrapper:
    def test_reply_after_human_move(self):
        engine = Engine(depth=1, randomize=False)
        assert engine.make_move("a2a3")
        played = engine.play_engine_move()
        assert played is not None and len(played) == 4
        assert engine.game.to_move is RED
        assert len(engine.game.move_history) == 2

    def test_get_best_move_leaves_game_alone(self):
        engine = Engine(depth=1, randomize=False)
        move, score = engine.get_best_move()
        assert move in [m.uci() for m in engine.game.legal_moves()]
        assert isinstance(score, int)
        assert engine.game.move_history == []

    def test_wrapper_handles_invalid_move(self):
        engine = Engine(depth=1)
        assert engine.make_move("zzzz") is False

    def test_no_move_when_game_over(self):
        engine = Engine(depth=1)
        engine.game.set_layout(NO_RED_OCTAGON_LAYOUT)
        assert engine.play_engine_move() is None


# ════════════════════════════════════════════════════════════════════════════
#  TERMINAL INTERFACE
# ════════════════════════════════════════════════════════════════════════════


class TestCLI:
    def _run(self, inputs):
        from interface.cli import main

        feed = iter(inputs)
        main(input_fn=lambda prompt="": next(feed))

    def test_quit(self, capsys):
        self._run(["quit"])
        assert "Game abandoned." in capsys.readouterr().out

    def test_banner_names_engine_and_author(self, capsys, monkeypatch):
        monkeypatch.setattr(CONFIG.ui, "engine_author", "Test Author")
        self._run(["quit"])
        assert "CornerClash by Test Author" in capsys.readouterr().out

    def test_illegal_move_reprompts(self, capsys):
        self._run(["a2a9", "quit"])
        assert "Illegal move, try again." in capsys.readouterr().out

    def test_engine_replies(self, capsys, monkeypatch):
        monkeypatch.setattr(CONFIG.search, "depth", 1)
        monkeypatch.setattr(CONFIG.ui, "human_color", "red")
        self._run(["a2a3", "undo", "quit"])
        out = capsys.readouterr().out
        assert "Engine plays:" in out
        assert "Game abandoned." in out


# ════════════════════════════════════════════════════════════════════════════
#  FASTAPI REST API
# ════════════════════════════════════════════════════════════════════════════


class TestAPIIntegration:
    """Tests FastAPI REST API endpoints."""

    @pytest.fixture(autouse=True)
    def setup_client(self):
        from fastapi.testclient import TestClient
        from interface.api import app, game

        self.client = TestClient(app)
        # Reset state before each test
        game.reset()

    def test_get_board_initial(self):
        response = self.client.get("/board")
        assert response.status_code == 200
        data = response.json()
        assert data["rows"] == Board.standard().to_rows()
        assert data["turn"] == "red"
        assert data["is_game_over"] is False
        assert data["winner"] is None
        assert len(data["legal_moves"]) == len(all_legal_moves(Board.standard(), RED))

    def test_post_move_valid(self):
        response = self.client.post("/move", json={"move": "a2a3"})
        assert response.status_code == 200
        data = response.json()
        assert data["move"] == "a2a3"
        assert data["notation"] == "Ta2-a3"
        assert data["rows"][5] == "T......."
        assert self.client.get("/board").json()["turn"] == "black"

    def test_post_move_illegal(self):
        response = self.client.post("/move", json={"move": "a2a6"})
        assert response.status_code == 400

    def test_post_move_invalid_format(self):
        response = self.client.post("/move", json={"move": "zzzz"})
        assert response.status_code == 400

    def test_set_position_valid(self):
        response = self.client.post("/position", json={"rows": MERGE_DOWN_LAYOUT, "to_move": "black"})
        assert response.status_code == 200
        assert response.json()["rows"] == MERGE_DOWN_LAYOUT
        assert response.json()["turn"] == "black"

    def test_set_position_invalid(self):
        bad_char = ["........"] * 7 + ["...x...."]
        assert self.client.post("/position", json={"rows": bad_char}).status_code == 400
        assert self.client.post("/position", json={"rows": ["...."] * 8}).status_code == 400
        assert self.client.post("/position", json={"rows": ["........."] * 9}).status_code == 400
        assert self.client.get("/board").status_code == 200
        response = self.client.post("/position", json={"rows": MERGE_DOWN_LAYOUT, "to_move": "green"})
        assert response.status_code == 400

    def test_legal_destinations(self):
        response = self.client.get("/legal/a2")
        assert response.status_code == 200
        moves = response.json()["moves"]
        assert {m["to"] for m in moves} == {"a3", "a4", "a5", "b1"}
        assert {"to": "b1", "kind": "merge"} in moves

    def test_legal_destinations_bad_square(self):
        assert self.client.get("/legal/z9").status_code == 400

    def test_search_returns_move(self):
        legal = self.client.get("/board").json()["legal_moves"]
        response = self.client.post("/search", json={"depth": 1})
        assert response.status_code == 200
        data = response.json()
        assert data["best_move"] in legal
        assert isinstance(data["score"], int)

    def test_search_rejects_non_positive_depth(self):
        for depth in (0, -1):
            response = self.client.post("/search", json={"depth": depth})
            assert response.status_code == 422
        assert self.client.post("/search", json={"depth": 1}).status_code == 200

    def test_search_does_not_change_session(self):
        before = self.client.get("/board").json()
        self.client.post("/search", json={"depth": 2})
        assert self.client.get("/board").json() == before

    def test_search_game_over_returns_400(self):
        self.client.post("/position", json={"rows": NO_RED_OCTAGON_LAYOUT})
        assert self.client.get("/board").json()["winner"] == "black"
        response = self.client.post("/search", json={"depth": 1})
        assert response.status_code == 400

    def test_undo(self):
        self.client.post("/move", json={"move": "a2a3"})
        response = self.client.post("/undo")
        assert response.status_code == 200
        assert response.json()["rows"] == Board.standard().to_rows()
        assert response.json()["turn"] == "red"

    def test_reset_board(self):
        self.client.post("/move", json={"move": "a2a3"})
        response = self.client.post("/reset")
        assert response.status_code == 200
        assert response.json()["rows"] == Board.standard().to_rows()

    def test_full_api_game_flow(self):
        r = self.client.get("/board")
        assert r.json()["turn"] == "red"

        self.client.post("/move", json={"move": "a2a3"})
        r = self.client.get("/board")
        assert r.json()["turn"] == "black"
        assert r.json()["history"] == ["Ta2-a3"]

        r = self.client.post("/search", json={"depth": 1})
        best = r.json()["best_move"]
        assert self.client.post("/move", json={"move": best}).status_code == 200
        assert self.client.get("/board").json()["turn"] == "red"

        self.client.post("/reset")
        r = self.client.get("/board")
        assert r.json()["rows"] == Board.standard().to_rows()
