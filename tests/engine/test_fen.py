from __future__ import annotations

import pytest

from chesscore.engine.board import Board, STARTPOS_FEN
from chesscore.engine.errors import ChessError, MalformedNotation
from chesscore.engine.move import parse_uci


KIWIPETE = "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1"


@pytest.mark.parametrize(
    "fen",
    [
        STARTPOS_FEN,
        KIWIPETE,
        "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1",
        "r1bqkbnr/pppp1ppp/2n5/4p3/3P4/5N2/PPP1PPPP/RNBQKB1R b KQ - 2 3",
        "r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1",
        "8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8 w - - 0 1",
    ],
)
def test_fen_roundtrip(fen: str) -> None:
    b = Board.from_fen(fen)
    assert b.to_fen() == fen


def test_startpos_fields() -> None:
    b = Board.startpos()
    assert b.side_to_move == "w"
    assert b.castling == "KQkq"
    assert b.ep_square is None
    assert b.halfmove_clock == 0
    assert b.fullmove_number == 1
    assert len(b.piece_map()) == 32


def test_castling_rights_are_normalized() -> None:
    b = Board.from_fen("r3k2r/8/8/8/8/8/8/R3K2R w qkQK - 0 1")
    assert b.castling == "KQkq"
    assert b.to_fen().split()[2] == "KQkq"


def test_roundtrip_after_moves() -> None:
    b = Board.startpos()
    for uci in ("e2e4", "c7c5", "g1f3", "d7d6", "e1e2"):
        b = b.apply(parse_uci(uci))
    again = Board.from_fen(b.to_fen())
    assert again == b
    assert again.zobrist_hash == b.zobrist_hash
    assert b.to_fen() == "rnbqkbnr/pp2pppp/3p4/2p5/4P3/5N2/PPPPKPPP/RNBQ1B1R b kq - 1 3"


@pytest.mark.parametrize(
    "fen",
    [
        "",
        "   ",
        "8/8/8/8/8/8/8 w - - 0 1",
        "4k3/8/8/8/8/8/8/4K3 w - - 0",
        "4k3/8/8/8/8/8/8/4K3 w - - 0 1 extra",
        "4k3/8/8/8/8/8/8/4K3 x - - 0 1",
        "4k3/8/8/8/8/8/8/4K3 w A - 0 1",
        "4k3/8/8/8/8/8/8/4K3 w KK - 0 1",
        "4k3/8/8/8/8/8/8/4K3 w - z9 0 1",
        "4k3/8/8/8/8/8/8/4K3 w - e3 0 1",
        "4k3/8/8/8/8/8/8/4K3 b - e6 0 1",
        "4k3/8/8/3P4/8/8/8/4K3 w - e6 0 1",
        "4k3/8/8/3PP3/8/8/8/4K3 w - e6 0 1",
        "4k3/8/4n3/3Pp3/8/8/8/4K3 w - e6 0 1",
        "4k3/4n3/8/3Pp3/8/8/8/4K3 w - e6 0 1",
        "4k3/8/8/8/8/8/8/4K3 b - e3 0 1",
        "4k3/8/8/8/8/8/8/4K3 w - - -1 1",
        "4k3/8/8/8/8/8/8/4K3 w - - x 1",
        "4k3/8/8/8/8/8/8/4K3 w - - 0 0",
        "9/8/8/8/8/8/8/8 w - - 0 1",
        "4k3/8/8/8/8/8/8/4K4 w - - 0 1",
        "4k3/8/8/8/8/8/8/4K2 w - - 0 1",
        "4k3/8/8/8/8/8/8/4X3 w - - 0 1",
        "8/8/8/8/8/8/8/8 w - - 0 1",
        "4k3/8/8/8/8/8/8/3KK3 w - - 0 1",
        "P3k3/8/8/8/8/8/8/4K3 w - - 0 1",
        "4k3/8/8/8/8/8/8/4K2r b - - 0 1",
    ],
)
def test_invalid_fen_raises(fen: str) -> None:
    with pytest.raises(MalformedNotation):
        Board.from_fen(fen)


def test_malformed_notation_is_value_error() -> None:
    with pytest.raises(ValueError):
        Board.from_fen("not a fen")
    assert issubclass(MalformedNotation, ChessError)
