from __future__ import annotations

from chesscore.engine.board import Board
from chesscore.engine.move import parse_uci


def play(b: Board, *ucis: str) -> Board:
    for uci in ucis:
        b = b.apply(parse_uci(uci))
    return b


def test_castling_rights_update_on_rook_king_moves_and_captures() -> None:
    b = Board.from_fen("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
    b = play(b, "h1h2")
    assert b.castling == "Qkq"
    # Black rook takes a1: white loses Q, black loses q
    b = play(b, "a8a1")
    assert b.castling == "k"
    b = play(b, "e1e2")
    assert b.castling == "k"


def test_king_move_revokes_both_rights() -> None:
    b = Board.from_fen("r3k2r/8/8/8/8/8/8/R3K2R b KQkq - 0 1")
    b = play(b, "e8d8")
    assert b.castling == "KQ"


def test_halfmove_and_fullmove_counters() -> None:
    b = Board.startpos()
    b = play(b, "g1f3")
    assert (b.halfmove_clock, b.fullmove_number) == (1, 1)
    b = play(b, "g8f6")
    assert (b.halfmove_clock, b.fullmove_number) == (2, 2)
    b = play(b, "e2e4")
    assert (b.halfmove_clock, b.fullmove_number) == (0, 2)
    b = play(b, "f6e4")
    # Capture resets the clock
    assert (b.halfmove_clock, b.fullmove_number) == (0, 3)
    assert b.side_to_move == "w"


def test_side_to_move_alternates() -> None:
    b = Board.startpos()
    assert b.side_to_move == "w"
    b = play(b, "e2e4")
    assert b.side_to_move == "b"
    b = play(b, "e7e5")
    assert b.side_to_move == "w"
