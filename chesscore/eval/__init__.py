"""Static evaluation.

Pure, deterministic, and side-effect free. Scores are in centipawns from
White's perspective: positive favours White, negative favours Black.
"""

from __future__ import annotations

from typing import Final

from chesscore.engine.board import BLACK, Board, WHITE


# Material values in centipawns
P_VAL: Final = 100
N_VAL: Final = 320
B_VAL: Final = 330
R_VAL: Final = 500
Q_VAL: Final = 900

# Indexed like the board's per-color piece order (P N B R Q K); the king is
# never counted as material.
PIECE_VALUES: Final = (P_VAL, N_VAL, B_VAL, R_VAL, Q_VAL, 0)

# Sentinel for a checkmated king, used only by search to score terminal
# losses; far outside any reachable material total.
MATE_SCORE: Final = 1_000_000


def material(board: Board, side: str) -> int:
    """Return the material total of ``side`` in centipawns."""
    base = 0 if side == WHITE else 6
    return sum(
        board.bb[base + i].bit_count() * value for i, value in enumerate(PIECE_VALUES)
    )


def evaluate(board: Board) -> int:
    """Return the material balance of ``board`` from White's perspective."""
    return material(board, WHITE) - material(board, BLACK)
