from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .board import BB, BK, BLACK, BN, BP, BQ, BR, Board, WB, WHITE, WK, WN, WP, WQ, WR
from .errors import EmptySearch
from .move import Move
from .san import move_to_san


logger = logging.getLogger(__name__)


ONGOING = "ongoing"
CHECKMATE = "checkmate"
STALEMATE = "stalemate"
DRAW_REPETITION = "draw_repetition"
DRAW_INSUFFICIENT_MATERIAL = "draw_insufficient_material"
DRAW_FIFTY_MOVE = "draw_fifty_move"


@dataclass(frozen=True)
class Outcome:
    """Classification of a position; ``winner`` is set only for checkmate."""

    kind: str
    winner: Optional[str] = None

    @property
    def is_over(self) -> bool:
        return self.kind != ONGOING

    @property
    def is_draw(self) -> bool:
        return self.kind not in (ONGOING, CHECKMATE)


def insufficient_material(board: Board) -> bool:
    """True when only kings remain, or kings with at most one minor piece each."""
    bb = board.bb
    if bb[WP] | bb[BP] | bb[WR] | bb[BR] | bb[WQ] | bb[BQ]:
        return False
    white_minors = (bb[WN] | bb[WB]).bit_count()
    black_minors = (bb[BN] | bb[BB]).bit_count()
    return white_minors <= 1 and black_minors <= 1


def outcome(board: Board, repetition: Optional[Dict[int, int]] = None) -> Outcome:
    """Classify ``board`` given how often each position key has occurred.

    Checkmate and stalemate come first. When several draw conditions hold
    at once, insufficient material wins over threefold repetition, which
    wins over the fifty-move rule.
    """
    if not board.has_legal_moves():
        if board.in_check():
            return Outcome(CHECKMATE, winner=BLACK if board.side_to_move == WHITE else WHITE)
        return Outcome(STALEMATE)
    if insufficient_material(board):
        return Outcome(DRAW_INSUFFICIENT_MATERIAL)
    if repetition and repetition.get(board.zobrist_hash, 0) >= 3:
        return Outcome(DRAW_REPETITION)
    if board.halfmove_clock >= 100:
        return Outcome(DRAW_FIFTY_MOVE)
    return Outcome(ONGOING)


@dataclass
class Game:
    """Session object owning the authoritative board and its history.

    Each applied move replaces ``board`` with a new value; the previous
    boards are kept on ``history`` so undo restores them exactly.
    """

    board: Board
    history: List[Board] = field(default_factory=list)
    move_stack: List[Move] = field(default_factory=list)
    san_stack: List[str] = field(default_factory=list)
    repetition: Dict[int, int] = field(default_factory=dict)

    @classmethod
    def new(cls) -> "Game":
        return cls(board=Board.startpos())

    @classmethod
    def from_fen(cls, fen: str) -> "Game":
        return cls(board=Board.from_fen(fen))

    def to_fen(self) -> str:
        return self.board.to_fen()

    def __post_init__(self) -> None:
        # Seed repetition with current position
        h = self.board.zobrist_hash
        self.repetition[h] = self.repetition.get(h, 0) + 1

    def legal_moves(self, origin: Optional[int] = None) -> List[Move]:
        return self.board.generate_legal_moves(origin)

    def apply_move(self, move: Move) -> Board:
        """Play ``move`` and return the new current board.

        Raises:
            IllegalMove: If ``move`` is not legal here; the game is unchanged.
        """
        new_board = self.board.apply(move)
        san = move_to_san(self.board, move)
        self.history.append(self.board)
        self.move_stack.append(move)
        self.san_stack.append(san)
        self.board = new_board
        h = new_board.zobrist_hash
        self.repetition[h] = self.repetition.get(h, 0) + 1
        logger.debug("applied %s (%s)", move.to_uci(), san)
        return new_board

    def undo_move(self) -> Board:
        """Restore the board from before the last move and return it.

        Raises:
            ValueError: If no moves have been played.
        """
        if not self.move_stack:
            raise ValueError("no moves to undo")
        curr = self.board.zobrist_hash
        self.repetition[curr] -= 1
        if self.repetition[curr] <= 0:
            del self.repetition[curr]
        self.move_stack.pop()
        self.san_stack.pop()
        self.board = self.history.pop()
        return self.board

    # --- State flags for protocol ---
    def outcome(self) -> Outcome:
        return outcome(self.board, self.repetition)

    def in_check(self) -> bool:
        return self.board.in_check()

    def checkmate(self) -> bool:
        return (not self.board.has_legal_moves()) and self.board.in_check()

    def stalemate(self) -> bool:
        return (not self.board.has_legal_moves()) and (not self.board.in_check())

    def is_draw(self) -> bool:
        return self.outcome().is_draw

    def move_history_uci(self) -> List[str]:
        return [m.to_uci() for m in self.move_stack]

    def move_history_san(self) -> List[str]:
        return list(self.san_stack)

    def suggest_move(self, rng: Optional[random.Random] = None) -> Optional[Move]:
        """Return a legal move chosen uniformly at random, or None if there is none."""
        legal = self.legal_moves()
        if not legal:
            return None
        return (rng or random).choice(legal)

    def bot_move(
        self,
        depth: int,
        movetime_ms: Optional[int] = None,
        max_nodes: Optional[int] = None,
    ) -> Move:
        """Search the current position and play the chosen move.

        Raises:
            EmptySearch: If the game is already over.
        """
        from ..search.service import SearchService

        current = self.outcome()
        if current.is_over:
            raise EmptySearch(f"no move to play: {current.kind}")
        result = SearchService().search(
            self, depth=depth, movetime_ms=movetime_ms, max_nodes=max_nodes
        )
        if result.best_move is None:
            raise EmptySearch(f"no move to play: {result.outcome.kind}")
        self.apply_move(result.best_move)
        return result.best_move
