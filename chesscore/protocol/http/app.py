from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, Field
from starlette.exceptions import HTTPException as StarletteHTTPException

from .error import (
    chess_exception_handler,
    exception_handler,
    http_exception_handler,
    request_validation_exception_handler,
)
from .logging_middleware import RequestIDLoggingMiddleware
from .session import InMemorySessionStore
from ...config import Settings
from ...engine.board import Board
from ...engine.errors import ChessError
from ...engine.game import CHECKMATE, ONGOING, STALEMATE, Game
from ...engine.move import parse_uci, square_to_str, str_to_square
from ...engine.perft import perft as perft_nodes
from ...search.service import SearchService


logger = logging.getLogger(__name__)


class CreateGameResponse(BaseModel):
    game_id: str
    fen: str


class SetPositionRequest(BaseModel):
    fen: str = Field(..., description="FEN string")


class MoveRequest(BaseModel):
    move: str = Field(..., description="UCI move string, e.g., e2e4")


class SearchRequest(BaseModel):
    depth: Optional[int] = Field(default=None, ge=1, le=16)
    movetime_ms: Optional[int] = Field(default=None, ge=1)
    max_nodes: Optional[int] = Field(default=None, ge=1)


class PerftRequest(BaseModel):
    fen: str
    depth: int = Field(default=1, ge=0, le=5)


class GameState(BaseModel):
    game_id: str
    fen: str
    board: Dict[str, str]
    side_to_move: str
    legal_moves: List[str]
    in_check: bool
    outcome: str
    winner: Optional[str]
    checkmate: bool
    stalemate: bool
    draw: bool
    last_move: Optional[str]
    move_history: List[str]
    move_history_san: List[str]


class MovesResponse(BaseModel):
    square: Optional[str]
    moves: List[str]
    destinations: List[str]


class SuggestResponse(BaseModel):
    move: Optional[str]


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    app = FastAPI(title="chesscore API", version="0.1.0")
    app.state.settings = settings

    logging.basicConfig(level=getattr(logging, settings.log_level, logging.INFO))

    app.add_middleware(RequestIDLoggingMiddleware)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(ChessError, chess_exception_handler)
    app.add_exception_handler(Exception, exception_handler)

    store = InMemorySessionStore()
    app.state.store = store

    def capped_depth(requested: Optional[int], default: int) -> int:
        depth = requested or default
        if depth > settings.max_depth:
            raise HTTPException(
                status_code=400, detail=f"depth must be at most {settings.max_depth}"
            )
        return depth

    @app.get("/healthz")
    async def healthz() -> Dict[str, str]:
        return {"status": "ok"}

    @app.post("/api/games", response_model=CreateGameResponse)
    async def create_game() -> CreateGameResponse:
        session = store.create()
        logger.info("game created", extra={"game_id": session.game_id})
        return CreateGameResponse(game_id=session.game_id, fen=session.game.to_fen())

    @app.get("/api/games/{game_id}/state", response_model=GameState)
    async def get_state(game_id: str) -> GameState:
        return _game_state(game_id, _require_game(store, game_id))

    @app.get("/api/games/{game_id}/moves", response_model=MovesResponse)
    async def get_moves(game_id: str, square: Optional[str] = None) -> MovesResponse:
        game = _require_game(store, game_id)
        origin: Optional[int] = None
        if square is not None:
            try:
                origin = str_to_square(square)
            except ValueError as e:
                raise HTTPException(status_code=400, detail=str(e))
        moves = game.legal_moves(origin)
        destinations = sorted({square_to_str(m.to_sq) for m in moves})
        return MovesResponse(
            square=square, moves=[m.to_uci() for m in moves], destinations=destinations
        )

    @app.post("/api/games/{game_id}/position", response_model=GameState)
    async def set_position(game_id: str, req: SetPositionRequest) -> GameState:
        _require_game(store, game_id)
        # Parse before replacing so a malformed FEN leaves the session as it was
        game = Game.from_fen(req.fen)
        store.replace(game_id, game)
        return _game_state(game_id, game)

    @app.post("/api/games/{game_id}/move", response_model=GameState)
    async def make_move(game_id: str, req: MoveRequest) -> GameState:
        game = _require_game(store, game_id)
        game.apply_move(parse_uci(req.move))
        state = _game_state(game_id, game)
        if state.outcome != ONGOING:
            logger.info("game over", extra={"game_id": game_id, "outcome": state.outcome})
        return state

    @app.post("/api/games/{game_id}/undo", response_model=GameState)
    async def undo(game_id: str) -> GameState:
        game = _require_game(store, game_id)
        try:
            game.undo_move()
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return _game_state(game_id, game)

    @app.post("/api/games/{game_id}/reset", response_model=GameState)
    async def reset(game_id: str) -> GameState:
        _require_game(store, game_id)
        game = Game.new()
        store.replace(game_id, game)
        return _game_state(game_id, game)

    @app.delete("/api/games/{game_id}")
    async def delete_game(game_id: str) -> Dict[str, bool]:
        session = store.delete(game_id)
        if session is None:
            raise HTTPException(status_code=404, detail="game not found")
        logger.info(
            "game deleted",
            extra={"game_id": game_id, "age_s": round(session.age_seconds(), 1)},
        )
        return {"deleted": True}

    @app.post("/api/games/{game_id}/search")
    async def search(game_id: str, req: SearchRequest) -> Dict[str, Any]:
        game = _require_game(store, game_id)
        depth = capped_depth(req.depth, settings.search_depth)
        res = SearchService().search(
            game,
            depth=depth,
            movetime_ms=req.movetime_ms or settings.movetime_ms,
            max_nodes=req.max_nodes,
        )
        score: Dict[str, Any] = (
            {"mate": res.mate_in} if res.mate_in is not None else {"cp": res.score}
        )
        return {
            "best_move": res.best_move.to_uci() if res.best_move else None,
            "score": score,
            "outcome": res.outcome.kind,
            "nodes": res.nodes,
            "depth": res.depth,
            "time_ms": res.time_ms,
            "completed": res.completed,
        }

    @app.post("/api/games/{game_id}/bot", response_model=GameState)
    async def bot(game_id: str, req: Optional[SearchRequest] = None) -> GameState:
        game = _require_game(store, game_id)
        req = req or SearchRequest()
        # Raises EmptySearch (409) once the game is over
        move = game.bot_move(
            depth=capped_depth(req.depth, settings.bot_depth),
            movetime_ms=req.movetime_ms or settings.movetime_ms,
            max_nodes=req.max_nodes,
        )
        logger.info("bot played", extra={"game_id": game_id, "move": move.to_uci()})
        return _game_state(game_id, game)

    @app.get("/api/games/{game_id}/suggest", response_model=SuggestResponse)
    async def suggest(game_id: str) -> SuggestResponse:
        move = _require_game(store, game_id).suggest_move()
        return SuggestResponse(move=move.to_uci() if move else None)

    @app.post("/api/perft")
    async def perft(req: PerftRequest) -> Dict[str, Any]:
        board = Board.from_fen(req.fen)
        return {"nodes": perft_nodes(board, req.depth)}

    return app


def _require_game(store: InMemorySessionStore, game_id: str) -> Game:
    session = store.get(game_id)
    if session is None:
        raise HTTPException(status_code=404, detail="game not found")
    return session.game


def _game_state(game_id: str, game: Game) -> GameState:
    result = game.outcome()
    history = game.move_history_uci()
    return GameState(
        game_id=game_id,
        fen=game.to_fen(),
        board={
            square_to_str(sq): piece.color + piece.kind.upper()
            for sq, piece in game.board.piece_map().items()
        },
        side_to_move=game.board.side_to_move,
        legal_moves=[m.to_uci() for m in game.legal_moves()],
        in_check=game.in_check(),
        outcome=result.kind,
        winner=result.winner,
        checkmate=result.kind == CHECKMATE,
        stalemate=result.kind == STALEMATE,
        draw=result.is_draw,
        last_move=history[-1] if history else None,
        move_history=history,
        move_history_san=game.move_history_san(),
    )
