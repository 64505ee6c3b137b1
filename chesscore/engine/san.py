from __future__ import annotations

from .board import Board, KING, KINDS, PAWN
from .move import Move, square_to_str


def move_to_san(board: Board, move: Move) -> str:
    """Render a legal ``move`` in Standard Algebraic Notation.

    ``board`` is the position before the move and is left unchanged.
    Examples: ``"e4"``, ``"Nbd7"``, ``"exd6"``, ``"e8=Q+"``, ``"O-O-O#"``.
    """
    piece = board.piece_at(move.from_sq)
    if piece is None:
        raise ValueError(f"no piece on {square_to_str(move.from_sq)}")
    kind_idx = KINDS.index(piece.kind)

    if kind_idx == KING and board.is_castling(move):
        san = "O-O" if move.to_sq > move.from_sq else "O-O-O"
    else:
        dest = square_to_str(move.to_sq)
        capture = board.is_capture(move)
        if kind_idx == PAWN:
            san = (square_to_str(move.from_sq)[0] + "x" if capture else "") + dest
            if move.promotion:
                san += "=" + move.promotion.upper()
        else:
            san = piece.kind.upper() + _disambiguation(board, move) + ("x" if capture else "") + dest

    after = board.copy()
    after.make_move(move)
    if after.in_check():
        san += "#" if not after.has_legal_moves() else "+"
    return san


def _disambiguation(board: Board, move: Move) -> str:
    """Return the file, rank or square needed to tell same-kind movers apart."""
    piece = board.piece_at(move.from_sq)
    rivals = [
        m.from_sq
        for m in board.generate_legal_moves()
        if m.to_sq == move.to_sq
        and m.from_sq != move.from_sq
        and board.piece_at(m.from_sq) == piece
    ]
    if not rivals:
        return ""
    origin = square_to_str(move.from_sq)
    if all(sq % 8 != move.from_sq % 8 for sq in rivals):
        return origin[0]
    if all(sq // 8 != move.from_sq // 8 for sq in rivals):
        return origin[1]
    return origin
