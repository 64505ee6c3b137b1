from __future__ import annotations

from chesscore.engine.board import Board, STARTPOS_FEN
from chesscore.engine.game import Game
from chesscore.search.service import SearchService, best_move


def test_node_budget_still_returns_legal_move() -> None:
    b = Board.from_fen(STARTPOS_FEN)
    legal = b.generate_legal_moves()
    res = SearchService().search(b, depth=3, max_nodes=1)
    assert res.best_move in legal
    assert not res.completed
    assert b.to_fen() == STARTPOS_FEN
    assert b == Board.startpos()


def test_time_budget_still_returns_legal_move() -> None:
    b = Board.from_fen(STARTPOS_FEN)
    legal = b.generate_legal_moves()
    move = best_move(b, depth=6, movetime_ms=1)
    assert move in legal
    assert b.to_fen() == STARTPOS_FEN


def test_budget_large_enough_completes() -> None:
    b = Board.startpos()
    res = SearchService().search(b, depth=1, max_nodes=1000)
    assert res.completed
    assert res.nodes == 20


def test_bot_move_with_budget() -> None:
    g = Game.new()
    move = g.bot_move(depth=4, max_nodes=50)
    assert g.move_history_uci() == [move.to_uci()]
