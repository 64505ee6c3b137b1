from __future__ import annotations

from chesscore.engine.board import Board
from chesscore.engine.move import parse_uci
from chesscore.engine.zobrist import compute_hash_from_scratch


def play(b: Board, *ucis: str) -> Board:
    for uci in ucis:
        b = b.apply(parse_uci(uci))
    return b


def test_hash_matches_from_scratch_after_moves() -> None:
    b = Board.from_fen("r3k2r/8/8/3pP3/8/8/8/R3K2R w KQkq d6 0 1")
    for uci in ("e5d6", "e8g8", "e1c1", "a8a1"):
        b = b.apply(parse_uci(uci))
        assert b.zobrist_hash == compute_hash_from_scratch(b), uci


def test_transpositions_share_a_key() -> None:
    a = play(Board.startpos(), "g1f3", "b8c6", "b1c3")
    b = play(Board.startpos(), "b1c3", "b8c6", "g1f3")
    assert a == b
    assert a.zobrist_hash == b.zobrist_hash


def test_key_depends_on_side_castling_and_ep() -> None:
    base = Board.from_fen("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
    other_side = Board.from_fen("r3k2r/8/8/8/8/8/8/R3K2R b KQkq - 0 1")
    fewer_rights = Board.from_fen("r3k2r/8/8/8/8/8/8/R3K2R w Kkq - 0 1")
    assert len({base.zobrist_hash, other_side.zobrist_hash, fewer_rights.zobrist_hash}) == 3

    with_ep = Board.from_fen("4k3/8/8/3pP3/8/8/8/4K3 w - d6 0 1")
    without_ep = Board.from_fen("4k3/8/8/3pP3/8/8/8/4K3 w - - 0 1")
    assert with_ep.zobrist_hash != without_ep.zobrist_hash


def test_counters_do_not_change_key() -> None:
    a = Board.from_fen("4k3/8/8/8/8/8/8/R3K3 w - - 0 1")
    b = Board.from_fen("4k3/8/8/8/8/8/8/R3K3 w - - 37 60")
    assert a.zobrist_hash == b.zobrist_hash
