"""FastAPI REST interface for the engine."""

import threading

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field
from typing import List, Optional

from cornerclash.core.game import Game
from cornerclash.core.pieces import Color
from cornerclash.core.search import SearchEngine
from cornerclash.core.evaluator import Evaluator
from cornerclash.config import CONFIG

app = FastAPI(title=CONFIG.ui.engine_name, version="1.0.0")

# Shared session for the board UI. Each search builds its own engine.
game = Game()
_game_lock = threading.Lock()


class PositionRequest(BaseModel):
    rows: List[str]  # one string per row, '.' empty, T/S/H/O red, t/s/h/o black
    to_move: str = "red"


class MoveRequest(BaseModel):
    move: str  # from/to squares e.g. "a2a3"


class SearchRequest(BaseModel):
    depth: Optional[int] = Field(None, ge=1)  # plies, defaults to the configured depth


def _winner_name() -> Optional[str]:
    winner = game.winner()
    return winner.value if winner else None


@app.get("/board")
def get_board():
    with _game_lock:
        return {
            "rows": game.layout(),
            "turn": game.to_move.value,
            "legal_moves": [m.uci() for m in game.legal_moves()],
            "history": game.notation_history(),
            "is_game_over": game.is_game_over(),
            "winner": _winner_name(),
        }


@app.post("/position")
def set_position(req: PositionRequest):
    with _game_lock:
        try:
            to_move = Color(req.to_move)
            game.set_layout(req.rows, to_move)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=f"Invalid position: {e}")
        return {"rows": game.layout(), "turn": game.to_move.value}


@app.post("/move")
def make_move(req: MoveRequest):
    with _game_lock:
        move = game.parse_move(req.move)
        if move is None:
            raise HTTPException(status_code=400, detail=f"Illegal move: {req.move}")
        game.push(move)
        return {"rows": game.layout(), "move": move.uci(), "notation": move.notation()}


@app.get("/legal/{square}")
def legal_destinations(square: str):
    with _game_lock:
        try:
            moves = game.legal_destinations(square)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return {
            "square": square,
            "moves": [{"to": m.to_pos.square, "kind": m.kind.value} for m in moves],
        }


@app.post("/search")
def search_move(req: SearchRequest = SearchRequest()):
    with _game_lock:
        if game.is_game_over():
            raise HTTPException(status_code=400, detail="Game is already over")
        engine = SearchEngine(Evaluator(), depth=req.depth or CONFIG.search.depth)
        search_board = game.board.copy()
        color = game.to_move

    best, score = engine.search_best_move(search_board, color)
    return {
        "best_move": best.uci() if best else None,
        "notation": best.notation() if best else None,
        "score": score,
        "rows": search_board.to_rows(),
    }


@app.post("/undo")
def undo_move():
    with _game_lock:
        game.undo_move()
        return {"rows": game.layout(), "turn": game.to_move.value}


@app.post("/reset")
def reset_board():
    with _game_lock:
        game.reset()
        return {"rows": game.layout(), "turn": game.to_move.value}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="127.0.0.1", port=CONFIG.ui.api_port)
