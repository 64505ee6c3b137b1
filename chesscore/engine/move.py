from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from .errors import MalformedNotation


FILES = "abcdefgh"
RANKS = "12345678"
# a1, b1, ..., h8 in square-index order
SQUARE_NAMES: Tuple[str, ...] = tuple(f + r for r in RANKS for f in FILES)
_SQUARE_INDEX: Dict[str, int] = {name: i for i, name in enumerate(SQUARE_NAMES)}

PROMOTION_PIECES = ("q", "r", "b", "n")


def square_to_str(idx: int) -> str:
    """Name of square ``idx`` (0 = a1 .. 63 = h8).

    Raises:
        ValueError: If ``idx`` is outside 0..63.
    """
    if not 0 <= idx < 64:
        raise ValueError(f"invalid square index: {idx}")
    return SQUARE_NAMES[idx]


def str_to_square(name: str) -> int:
    """Index of the square called ``name``, e.g. ``"e4"`` -> 28.

    Raises:
        ValueError: If ``name`` is not a square.
    """
    idx = _SQUARE_INDEX.get(name) if isinstance(name, str) else None
    if idx is None:
        raise ValueError(f"invalid square: {name!r}")
    return idx


@dataclass(frozen=True)
class Move:
    """Origin, destination and optional promotion piece.

    Whether a move captures, castles or takes en passant is not stored;
    the board works that out from the position the move is played in.
    """

    from_sq: int
    to_sq: int
    promotion: Optional[str] = None  # lowercase "q", "r", "b" or "n"

    def to_uci(self) -> str:
        return SQUARE_NAMES[self.from_sq] + SQUARE_NAMES[self.to_sq] + (self.promotion or "")

    def __str__(self) -> str:
        return self.to_uci()


def parse_uci(text: str) -> Move:
    """Parse long algebraic notation such as ``"e2e4"`` or ``"e7e8q"``.

    Only the syntax is checked; whether the move is legal is up to the
    board it is played on.

    Raises:
        MalformedNotation: If ``text`` does not name two squares followed by
            an optional promotion letter.
    """
    uci = text.strip().lower() if isinstance(text, str) else ""
    if len(uci) not in (4, 5):
        raise MalformedNotation(f"invalid UCI move: {text!r}")
    from_sq = _SQUARE_INDEX.get(uci[:2])
    to_sq = _SQUARE_INDEX.get(uci[2:4])
    promotion = uci[4:] or None
    if from_sq is None or to_sq is None:
        raise MalformedNotation(f"invalid squares in UCI move: {text!r}")
    if promotion is not None and promotion not in PROMOTION_PIECES:
        raise MalformedNotation(f"invalid promotion piece: {promotion!r}")
    return Move(from_sq, to_sq, promotion)
