from __future__ import annotations

import random

import pytest

from chesscore.engine.board import Board, STARTPOS_FEN
from chesscore.engine.errors import EmptySearch, IllegalMove
from chesscore.engine.game import Game
from chesscore.engine.move import parse_uci


def test_apply_and_undo_restore_previous_board() -> None:
    g = Game.new()
    start = g.board
    after = g.apply_move(parse_uci("e2e4"))
    assert g.board is after
    assert g.move_history_uci() == ["e2e4"]
    restored = g.undo_move()
    assert restored == start
    assert restored.to_fen() == STARTPOS_FEN
    assert g.move_history_uci() == []
    assert g.repetition == {start.zobrist_hash: 1}


def test_illegal_move_leaves_game_unchanged() -> None:
    g = Game.new()
    g.apply_move(parse_uci("e2e4"))
    fen = g.to_fen()
    for uci in ("e2e4", "e7e4", "a1a3", "e8e7"):
        with pytest.raises(IllegalMove):
            g.apply_move(parse_uci(uci))
    assert g.to_fen() == fen
    assert g.move_history_uci() == ["e2e4"]


def test_move_into_check_is_illegal() -> None:
    g = Game.from_fen("4r1k1/8/8/8/8/8/4R3/4K3 w - - 0 1")
    with pytest.raises(IllegalMove):
        g.apply_move(parse_uci("e2d2"))


def test_undo_with_no_moves_raises() -> None:
    g = Game.new()
    with pytest.raises(ValueError):
        g.undo_move()


def test_san_history() -> None:
    g = Game.new()
    for uci in ("e2e4", "e7e5", "g1f3", "b8c6", "f1b5", "a7a6", "e1g1"):
        g.apply_move(parse_uci(uci))
    assert g.move_history_san() == ["e4", "e5", "Nf3", "Nc6", "Bb5", "a6", "O-O"]


def test_suggest_move_is_legal_and_seedable() -> None:
    g = Game.new()
    first = g.suggest_move(random.Random(7))
    second = g.suggest_move(random.Random(7))
    assert first == second
    assert first in g.legal_moves()


def test_suggest_move_none_when_no_moves() -> None:
    g = Game.from_fen("k7/1R6/2K5/8/8/8/8/8 b - - 0 1")
    assert g.suggest_move() is None


def test_bot_move_plays_a_legal_move() -> None:
    g = Game.new()
    legal = g.legal_moves()
    move = g.bot_move(depth=1)
    assert move in legal
    assert g.move_history_uci() == [move.to_uci()]
    assert g.board.side_to_move == "b"


def test_bot_move_when_game_over_raises() -> None:
    g = Game.from_fen("7k/6Q1/6K1/8/8/8/8/8 b - - 0 1")
    with pytest.raises(EmptySearch):
        g.bot_move(depth=2)
    assert g.move_history_uci() == []


def test_bot_move_refuses_drawn_game() -> None:
    g = Game.from_fen("7k/8/8/8/8/8/8/K7 w - - 0 1")
    assert g.legal_moves()
    with pytest.raises(EmptySearch):
        g.bot_move(depth=1)
    assert g.move_history_uci() == []
    assert g.to_fen() == "7k/8/8/8/8/8/8/K7 w - - 0 1"


def test_state_flags() -> None:
    g = Game.from_fen("7k/6Q1/6K1/8/8/8/8/8 b - - 0 1")
    assert g.in_check() and g.checkmate() and not g.stalemate()
    g = Game.from_fen("k7/1R6/2K5/8/8/8/8/8 b - - 0 1")
    assert g.stalemate() and not g.checkmate() and g.is_draw()


def test_game_from_board_position() -> None:
    b = Board.from_fen("4k3/8/8/8/8/8/8/R3K3 w - - 0 1")
    g = Game(board=b)
    assert g.legal_moves(0)
    assert all(m.from_sq == 0 for m in g.legal_moves(0))
