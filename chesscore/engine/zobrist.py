from __future__ import annotations

from typing import Iterator, Optional, Tuple, TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from .board import Board


MASK64 = 0xFFFFFFFFFFFFFFFF


def _splitmix64(seed: int) -> Iterator[int]:
    state = seed & MASK64
    while True:
        state = (state + 0x9E3779B97F4A7C15) & MASK64
        z = state
        z = ((z ^ (z >> 30)) * 0xBF58476D1CE4E5B9) & MASK64
        z = ((z ^ (z >> 27)) * 0x94D049BB133111EB) & MASK64
        yield z ^ (z >> 31)


class ZobristKeys:
    """Fixed random keys whose XOR identifies a position.

    Two positions get the same key when they match for the threefold rule:
    same placement, side to move, castling rights and en-passant target.
    The move counters are not part of the key.

    ``piece_square`` is indexed [piece][square] in board piece order
    (WP..BK); ``black_to_move`` is folded in when Black is on move.
    """

    piece_square: Tuple[Tuple[int, ...], ...]
    black_to_move: int

    def __init__(self, seed: int = 0x5EED_C4E5_5C0DE) -> None:
        stream = _splitmix64(seed)
        self.piece_square = tuple(tuple(next(stream) for _ in range(64)) for _ in range(12))
        self.black_to_move = next(stream)
        self._castling = {right: next(stream) for right in "KQkq"}
        self._ep_file = tuple(next(stream) for _ in range(8))

    def castling_key(self, rights: str) -> int:
        key = 0
        for right in rights:
            key ^= self._castling[right]
        return key

    def ep_key(self, ep_square: Optional[int]) -> int:
        return 0 if ep_square is None else self._ep_file[ep_square % 8]

    def position_key(self, board: "Board") -> int:
        key = 0
        for square_keys, squares in zip(self.piece_square, board.bb):
            while squares:
                lsb = squares & -squares
                key ^= square_keys[lsb.bit_length() - 1]
                squares ^= lsb
        if board.side_to_move == "b":
            key ^= self.black_to_move
        return key ^ self.castling_key(board.castling) ^ self.ep_key(board.ep_square)


ZOBRIST = ZobristKeys()


def compute_hash_from_scratch(board: "Board") -> int:
    """Key of ``board`` computed from its fields, ignoring any cached value."""
    return ZOBRIST.position_key(board)
