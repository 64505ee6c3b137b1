from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from .errors import IllegalMove, MalformedNotation
from .move import PROMOTION_PIECES, Move, square_to_str, str_to_square
from .zobrist import MASK64, ZOBRIST, compute_hash_from_scratch


STARTPOS_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

WHITE = "w"
BLACK = "b"

# Piece indices for bitboards; black indices are the white ones + 6
WP, WN, WB, WR, WQ, WK, BP, BN, BB, BR, BQ, BK = range(12)
KINDS = "pnbrqk"
PAWN, KNIGHT, BISHOP, ROOK, QUEEN, KING = range(6)

PIECE_TO_CHAR = {i: (k.upper() if i < 6 else k) for i, k in enumerate(KINDS * 2)}
CHAR_TO_PIECE = {v: k for k, v in PIECE_TO_CHAR.items()}

KNIGHT_STEPS = ((-1, 2), (1, 2), (-2, 1), (2, 1), (-2, -1), (2, -1), (-1, -2), (1, -2))
KING_STEPS = ((-1, -1), (0, -1), (1, -1), (-1, 0), (1, 0), (-1, 1), (0, 1), (1, 1))
DIAGONALS = ((-1, -1), (1, -1), (-1, 1), (1, 1))
ORTHOGONALS = ((-1, 0), (1, 0), (0, -1), (0, 1))


def _step_table(steps: Iterable[Tuple[int, int]]) -> List[int]:
    steps = tuple(steps)
    table = []
    for sq in range(64):
        f, r = sq % 8, sq // 8
        mask = 0
        for df, dr in steps:
            tf, tr = f + df, r + dr
            if 0 <= tf < 8 and 0 <= tr < 8:
                mask |= 1 << (tr * 8 + tf)
        table.append(mask)
    return table


def _ray_table(df: int, dr: int) -> List[Tuple[int, ...]]:
    """Squares reached from each square walking (df, dr), nearest first."""
    table = []
    for sq in range(64):
        tf, tr = sq % 8, sq // 8
        ray = []
        while True:
            tf += df
            tr += dr
            if not (0 <= tf < 8 and 0 <= tr < 8):
                break
            ray.append(tr * 8 + tf)
        table.append(tuple(ray))
    return table


KNIGHT_ATTACKS = _step_table(KNIGHT_STEPS)
KING_ATTACKS = _step_table(KING_STEPS)
# Squares attacked by a pawn of the given color standing on a square
PAWN_ATTACKS = {
    WHITE: _step_table(((-1, 1), (1, 1))),
    BLACK: _step_table(((-1, -1), (1, -1))),
}
DIAGONAL_RAYS = [_ray_table(df, dr) for df, dr in DIAGONALS]
ORTHOGONAL_RAYS = [_ray_table(df, dr) for df, dr in ORTHOGONALS]
QUEEN_RAYS = DIAGONAL_RAYS + ORTHOGONAL_RAYS

# (right, rook square, squares that must be empty, squares the king crosses, king target)
CASTLING_PATHS = {
    WHITE: (("K", 7, (5, 6), (5, 6), 6), ("Q", 0, (1, 2, 3), (3, 2), 2)),
    BLACK: (("k", 63, (61, 62), (61, 62), 62), ("q", 56, (57, 58, 59), (59, 58), 58)),
}
# King target square -> (rook from, rook to)
CASTLING_ROOK_MOVES = {6: (7, 5), 2: (0, 3), 62: (63, 61), 58: (56, 59)}
# Moving from or capturing on one of these squares revokes the listed rights
RIGHTS_LOST_AT = {0: "Q", 7: "K", 56: "q", 63: "k", 4: "KQ", 60: "kq"}


def _iter_bits(bb: int) -> Iterable[int]:
    while bb:
        lsb = bb & -bb
        yield lsb.bit_length() - 1
        bb ^= lsb


def _opponent(color: str) -> str:
    return BLACK if color == WHITE else WHITE


def piece_index(color: str, kind: str) -> int:
    return KINDS.index(kind) + (0 if color == WHITE else 6)


@dataclass(frozen=True)
class Piece:
    """A colored piece: color is ``"w"``/``"b"``, kind one of ``"pnbrqk"``."""

    color: str
    kind: str

    @classmethod
    def from_index(cls, idx: int) -> "Piece":
        return cls(WHITE if idx < 6 else BLACK, KINDS[idx % 6])

    @property
    def index(self) -> int:
        return piece_index(self.color, self.kind)

    def symbol(self) -> str:
        return PIECE_TO_CHAR[self.index]


@dataclass
class Board:
    """Position with bitboards, FEN I/O, legal move generation and make/unmake.

    Notes:
    - Squares are 0..63 (a1=0 .. h8=63), rank-major from white's perspective.
    - ``make_move``/``unmake_move`` mutate in place and are used by search;
      ``apply`` validates and returns a new board, leaving this one untouched.
    - Equality compares placement, side to move, castling, en passant and
      both move counters.
    """

    # 12 piece bitboards, indexed by constants above
    bb: List[int]
    side_to_move: str  # 'w' or 'b'
    castling: str  # subset of 'KQkq' in that order, or ''
    ep_square: Optional[int]
    halfmove_clock: int
    fullmove_number: int
    _history: List[Tuple] = field(default_factory=list, repr=False, compare=False)
    zobrist_hash: int = field(default=0, compare=False)

    @classmethod
    def startpos(cls) -> "Board":
        """Return a board set up in the standard starting position."""
        return cls.from_fen(STARTPOS_FEN)

    @classmethod
    def from_fen(cls, fen: str) -> "Board":
        """Create a board from a Forsyth-Edwards Notation (FEN) string.

        Args:
            fen (str): FEN string describing the position to load.

        Returns:
            Board: A new board; nothing else is modified.

        Raises:
            MalformedNotation: If ``fen`` is empty, has the wrong number of
                fields, or contains invalid piece placement, castling rights,
                en passant square or move counters, or does not describe a
                position with one king per side and the side not to move out
                of check.
        """
        if not fen or not isinstance(fen, str):
            raise MalformedNotation("FEN must be a non-empty string")
        parts = fen.strip().split()
        if len(parts) != 6:
            raise MalformedNotation("FEN must have 6 fields")
        placement, stm, castling, ep, halfmove, fullmove = parts

        ranks = placement.split("/")
        if len(ranks) != 8:
            raise MalformedNotation("FEN board must have 8 ranks")
        bb = [0] * 12
        for rank_idx, rank in enumerate(ranks[::-1]):  # rank 1 first
            file_idx = 0
            for ch in rank:
                if ch.isdecimal():
                    n = int(ch)
                    if n < 1 or n > 8:
                        raise MalformedNotation("invalid empty count in FEN rank")
                    file_idx += n
                else:
                    if ch not in CHAR_TO_PIECE:
                        raise MalformedNotation(f"invalid piece in FEN: {ch!r}")
                    if file_idx >= 8:
                        raise MalformedNotation("too many squares in FEN rank")
                    bb[CHAR_TO_PIECE[ch]] |= 1 << (rank_idx * 8 + file_idx)
                    file_idx += 1
            if file_idx != 8:
                raise MalformedNotation("rank does not sum to 8 squares in FEN")

        if stm not in (WHITE, BLACK):
            raise MalformedNotation("side to move must be 'w' or 'b'")

        if castling == "-":
            castling = ""
        else:
            if any(ch not in "KQkq" for ch in castling) or len(set(castling)) != len(castling):
                raise MalformedNotation("invalid castling rights")
            castling = "".join(c for c in "KQkq" if c in castling)

        ep_square: Optional[int] = None
        if ep != "-":
            try:
                ep_square = str_to_square(ep)
            except ValueError as e:
                raise MalformedNotation("invalid en passant square") from e
            # White to move captures onto rank 6, black onto rank 3
            if ep_square // 8 != (5 if stm == WHITE else 2):
                raise MalformedNotation("invalid en passant square rank")

        if not (halfmove.isdecimal() and fullmove.isdecimal()):
            raise MalformedNotation("invalid move counters in FEN")
        halfmove_clock = int(halfmove)
        fullmove_number = int(fullmove)
        if fullmove_number <= 0:
            raise MalformedNotation("fullmove number must be positive")

        if bb[WK].bit_count() != 1 or bb[BK].bit_count() != 1:
            raise MalformedNotation("FEN must contain exactly one king per side")
        back_ranks = 0xFF | (0xFF << 56)
        if (bb[WP] | bb[BP]) & back_ranks:
            raise MalformedNotation("pawns cannot stand on the first or last rank")

        if ep_square is not None:
            # The pawn that just double-pushed sits in front of the target and
            # the squares it crossed are empty
            behind = 8 if stm == BLACK else -8
            pushed = bb[WP if stm == BLACK else BP]
            occ = 0
            for b in bb:
                occ |= b
            if (
                not (pushed >> (ep_square + behind)) & 1
                or (occ >> ep_square) & 1
                or (occ >> (ep_square - behind)) & 1
            ):
                raise MalformedNotation("en passant square does not follow a double pawn push")

        board = cls(
            bb=bb,
            side_to_move=stm,
            castling=castling,
            ep_square=ep_square,
            halfmove_clock=halfmove_clock,
            fullmove_number=fullmove_number,
        )
        if board.in_check(_opponent(stm)):
            raise MalformedNotation("side not to move is in check")
        board.zobrist_hash = compute_hash_from_scratch(board)
        return board

    def to_fen(self) -> str:
        """Serialize the current position into a normalized FEN string."""
        ranks_str: List[str] = []
        for rank_idx in range(7, -1, -1):
            run = 0
            row = []
            for file_idx in range(8):
                idx = self._piece_index_at(rank_idx * 8 + file_idx)
                if idx is None:
                    run += 1
                    continue
                if run:
                    row.append(str(run))
                    run = 0
                row.append(PIECE_TO_CHAR[idx])
            if run:
                row.append(str(run))
            ranks_str.append("".join(row))

        castling = self.castling or "-"
        ep = square_to_str(self.ep_square) if self.ep_square is not None else "-"
        return (
            f"{'/'.join(ranks_str)} {self.side_to_move} {castling} {ep} "
            f"{self.halfmove_clock} {self.fullmove_number}"
        )

    def copy(self) -> "Board":
        """Return an independent board with an empty undo stack."""
        return Board(
            bb=list(self.bb),
            side_to_move=self.side_to_move,
            castling=self.castling,
            ep_square=self.ep_square,
            halfmove_clock=self.halfmove_clock,
            fullmove_number=self.fullmove_number,
            zobrist_hash=self.zobrist_hash,
        )

    # --- Square queries ---
    def _piece_index_at(self, sq: int) -> Optional[int]:
        for idx in range(12):
            if (self.bb[idx] >> sq) & 1:
                return idx
        return None

    def piece_at(self, sq: int) -> Optional[Piece]:
        idx = self._piece_index_at(sq)
        return None if idx is None else Piece.from_index(idx)

    def piece_map(self) -> Dict[int, Piece]:
        """Return the occupied squares mapped to their pieces."""
        return {sq: Piece.from_index(idx) for idx in range(12) for sq in _iter_bits(self.bb[idx])}

    def occupancy(self, color: Optional[str] = None) -> int:
        if color is None:
            indices: Iterable[int] = range(12)
        else:
            indices = range(0, 6) if color == WHITE else range(6, 12)
        occ = 0
        for idx in indices:
            occ |= self.bb[idx]
        return occ

    def king_square(self, color: str) -> Optional[int]:
        kbb = self.bb[WK if color == WHITE else BK]
        if kbb == 0:
            return None
        return (kbb & -kbb).bit_length() - 1

    # --- Move generation ---
    def generate_legal_moves(self, origin: Optional[int] = None) -> List[Move]:
        """Return all legal moves for the side to move.

        Args:
            origin (Optional[int]): When given, only moves of the piece on
                this square are returned (empty if it is not one of ours).

        Returns:
            List[Move]: Legal moves in a deterministic but unspecified order.
        """
        us = self.side_to_move
        base = 0 if us == WHITE else 6
        own = self.occupancy(us)
        opp = self.occupancy(_opponent(us))
        occ = own | opp
        if origin is not None and not 0 <= origin < 64:
            return []
        only = ~0 if origin is None else 1 << origin
        if not (own & only):
            return []

        pseudo: List[Move] = []
        self._pawn_moves(self.bb[base + PAWN] & only, occ, opp, pseudo)
        for from_sq in _iter_bits(self.bb[base + KNIGHT] & only):
            for to_sq in _iter_bits(KNIGHT_ATTACKS[from_sq] & ~own):
                pseudo.append(Move(from_sq, to_sq))
        for from_sq in _iter_bits(self.bb[base + BISHOP] & only):
            self._slider_moves(from_sq, DIAGONAL_RAYS, own, occ, pseudo)
        for from_sq in _iter_bits(self.bb[base + ROOK] & only):
            self._slider_moves(from_sq, ORTHOGONAL_RAYS, own, occ, pseudo)
        for from_sq in _iter_bits(self.bb[base + QUEEN] & only):
            self._slider_moves(from_sq, QUEEN_RAYS, own, occ, pseudo)
        for from_sq in _iter_bits(self.bb[base + KING] & only):
            for to_sq in _iter_bits(KING_ATTACKS[from_sq] & ~own):
                pseudo.append(Move(from_sq, to_sq))
            self._castling_moves(from_sq, occ, pseudo)

        # Filter out moves that leave own king in check
        by_white = us == BLACK
        legal: List[Move] = []
        for mv in pseudo:
            new_bb = self._simulate(mv)
            king_bb = new_bb[base + KING]
            king_sq = (king_bb & -king_bb).bit_length() - 1
            if not self.is_attacked(king_sq, by_white=by_white, bb=new_bb):
                legal.append(mv)
        return legal

    def _pawn_moves(self, pawns: int, occ: int, opp: int, moves: List[Move]) -> None:
        white = self.side_to_move == WHITE
        push = 8 if white else -8
        start_rank = 1 if white else 6
        attacks = PAWN_ATTACKS[self.side_to_move]
        for from_sq in _iter_bits(pawns):
            to_sq = from_sq + push
            if not (occ >> to_sq) & 1:
                _add_pawn_move(moves, from_sq, to_sq)
                double = to_sq + push
                if from_sq // 8 == start_rank and not (occ >> double) & 1:
                    moves.append(Move(from_sq, double))
            for cap in _iter_bits(attacks[from_sq] & opp):
                _add_pawn_move(moves, from_sq, cap)
            if self.ep_square is not None and (attacks[from_sq] >> self.ep_square) & 1:
                moves.append(Move(from_sq, self.ep_square))

    def _slider_moves(
        self, from_sq: int, ray_tables: List[List[Tuple[int, ...]]], own: int, occ: int,
        moves: List[Move],
    ) -> None:
        for rays in ray_tables:
            for to_sq in rays[from_sq]:
                if (own >> to_sq) & 1:
                    break
                moves.append(Move(from_sq, to_sq))
                if (occ >> to_sq) & 1:
                    break

    def _castling_moves(self, king_sq: int, occ: int, moves: List[Move]) -> None:
        us = self.side_to_move
        if king_sq != (4 if us == WHITE else 60) or not self.castling:
            return
        by_white = us == BLACK
        if self.is_attacked(king_sq, by_white=by_white):
            return
        rook = self.bb[WR if us == WHITE else BR]
        for right, rook_sq, empty, crossed, target in CASTLING_PATHS[us]:
            if right not in self.castling or not (rook >> rook_sq) & 1:
                continue
            if any((occ >> s) & 1 for s in empty):
                continue
            if any(self.is_attacked(s, by_white=by_white) for s in crossed):
                continue
            moves.append(Move(king_sq, target))

    # --- Attack detection ---
    def is_attacked(self, sq: int, *, by_white: bool, bb: Optional[List[int]] = None) -> bool:
        """Return True if ``sq`` is attacked by the given side.

        ``bb`` lets callers test a simulated set of bitboards.
        """
        bb = self.bb if bb is None else bb
        base = 0 if by_white else 6
        # A pawn attacks sq from where a defending pawn on sq would attack
        if PAWN_ATTACKS[BLACK if by_white else WHITE][sq] & bb[base + PAWN]:
            return True
        if KNIGHT_ATTACKS[sq] & bb[base + KNIGHT]:
            return True
        if KING_ATTACKS[sq] & bb[base + KING]:
            return True
        occ = 0
        for b in bb:
            occ |= b
        diag = bb[base + BISHOP] | bb[base + QUEEN]
        orth = bb[base + ROOK] | bb[base + QUEEN]
        for ray_tables, attackers in ((DIAGONAL_RAYS, diag), (ORTHOGONAL_RAYS, orth)):
            if not attackers:
                continue
            for rays in ray_tables:
                for s in rays[sq]:
                    if (occ >> s) & 1:
                        if (attackers >> s) & 1:
                            return True
                        break
        return False

    def in_check(self, side: Optional[str] = None) -> bool:
        """Return True if ``side`` (default: side to move) is in check."""
        s = self.side_to_move if side is None else side
        if s not in (WHITE, BLACK):
            raise ValueError("side must be 'w' or 'b'")
        ksq = self.king_square(s)
        if ksq is None:
            return False
        return self.is_attacked(ksq, by_white=(s == BLACK))

    def has_legal_moves(self) -> bool:
        """Return True if the side to move has at least one legal move.

        Stops at the first piece that can move, which keeps terminal checks
        at search leaves cheap.
        """
        king_sq = self.king_square(self.side_to_move)
        if king_sq is not None and self.generate_legal_moves(origin=king_sq):
            return True
        for sq in _iter_bits(self.occupancy(self.side_to_move)):
            if sq != king_sq and self.generate_legal_moves(origin=sq):
                return True
        return False

    # --- Move classification ---
    def is_capture(self, move: Move) -> bool:
        return bool((self.occupancy(_opponent(self.side_to_move)) >> move.to_sq) & 1) or (
            self.is_en_passant(move)
        )

    def is_en_passant(self, move: Move) -> bool:
        pawns = self.bb[WP if self.side_to_move == WHITE else BP]
        return (
            self.ep_square is not None
            and move.to_sq == self.ep_square
            and bool((pawns >> move.from_sq) & 1)
            and move.from_sq % 8 != move.to_sq % 8
        )

    def is_castling(self, move: Move) -> bool:
        king = self.bb[WK if self.side_to_move == WHITE else BK]
        return bool((king >> move.from_sq) & 1) and abs(move.to_sq - move.from_sq) == 2

    # --- Move application ---
    def _decode(self, move: Move) -> Tuple[int, int, Optional[int], int, Optional[Tuple[int, int]]]:
        """Work out the side effects of ``move``.

        Returns:
            (moved, placed, captured, capture_sq, rook_move): piece indices
            for the moving piece and the piece that lands on ``to_sq``, the
            captured piece index and its square, and the castling rook
            relocation if any.
        """
        us = self.side_to_move
        own = range(0, 6) if us == WHITE else range(6, 12)
        moved = next((p for p in own if (self.bb[p] >> move.from_sq) & 1), None)
        if moved is None:
            raise IllegalMove(f"no piece of the side to move on {square_to_str(move.from_sq)}")
        placed = piece_index(us, move.promotion) if move.promotion else moved

        captured: Optional[int] = None
        capture_sq = move.to_sq
        if self.is_en_passant(move):
            capture_sq = move.to_sq - 8 if us == WHITE else move.to_sq + 8
            captured = BP if us == WHITE else WP
        else:
            opp = range(6, 12) if us == WHITE else range(0, 6)
            captured = next((p for p in opp if (self.bb[p] >> move.to_sq) & 1), None)

        rook_move = None
        if moved % 6 == KING and abs(move.to_sq - move.from_sq) == 2:
            rook_move = CASTLING_ROOK_MOVES[move.to_sq]
        return moved, placed, captured, capture_sq, rook_move

    def _simulate(self, move: Move) -> List[int]:
        """Return a copy of the bitboards with ``move`` played."""
        moved, placed, captured, capture_sq, rook_move = self._decode(move)
        bb = list(self.bb)
        bb[moved] &= ~(1 << move.from_sq)
        if captured is not None:
            bb[captured] &= ~(1 << capture_sq)
        bb[placed] |= 1 << move.to_sq
        if rook_move is not None:
            rook = moved - KING + ROOK
            bb[rook] = (bb[rook] & ~(1 << rook_move[0])) | (1 << rook_move[1])
        return bb

    def apply(self, move: Move) -> "Board":
        """Return a new board with ``move`` applied.

        Raises:
            IllegalMove: If ``move`` is not in ``generate_legal_moves()``.
                This board is left unchanged either way.
        """
        if not (0 <= move.from_sq < 64 and 0 <= move.to_sq < 64):
            raise IllegalMove(f"square out of range: {move.from_sq}->{move.to_sq}")
        if move not in self.generate_legal_moves(origin=move.from_sq):
            raise IllegalMove(f"illegal move: {move.to_uci()}")
        new_board = self.copy()
        new_board.make_move(move)
        new_board.check_invariants()
        return new_board

    def make_move(self, move: Move) -> None:
        """Apply a generated ``move`` in place, recording how to undo it."""
        moved, placed, captured, capture_sq, rook_move = self._decode(move)
        from_sq, to_sq = move.from_sq, move.to_sq
        is_white = self.side_to_move == WHITE

        self._history.append(
            (
                move,
                moved,
                placed,
                captured,
                capture_sq,
                rook_move,
                self.ep_square,
                self.castling,
                self.halfmove_clock,
                self.fullmove_number,
                self.zobrist_hash,
            )
        )

        h = self.zobrist_hash
        h ^= ZOBRIST.ep_key(self.ep_square) ^ ZOBRIST.castling_key(self.castling)

        self.bb[moved] &= ~(1 << from_sq)
        h ^= ZOBRIST.piece_square[moved][from_sq]
        if captured is not None:
            self.bb[captured] &= ~(1 << capture_sq)
            h ^= ZOBRIST.piece_square[captured][capture_sq]
        self.bb[placed] |= 1 << to_sq
        h ^= ZOBRIST.piece_square[placed][to_sq]
        if rook_move is not None:
            rook = moved - KING + ROOK
            rook_from, rook_to = rook_move
            self.bb[rook] = (self.bb[rook] & ~(1 << rook_from)) | (1 << rook_to)
            h ^= ZOBRIST.piece_square[rook][rook_from] ^ ZOBRIST.piece_square[rook][rook_to]

        # Rights go when a king or rook leaves home or a rook is taken there
        lost = RIGHTS_LOST_AT.get(from_sq, "") + RIGHTS_LOST_AT.get(to_sq, "")
        if lost:
            self.castling = "".join(c for c in self.castling if c not in lost)

        is_pawn = moved % 6 == PAWN
        self.ep_square = None
        if is_pawn and abs(to_sq - from_sq) == 16:
            self.ep_square = (from_sq + to_sq) // 2

        if is_pawn or captured is not None:
            self.halfmove_clock = 0
        else:
            self.halfmove_clock += 1
        if not is_white:
            self.fullmove_number += 1
        self.side_to_move = BLACK if is_white else WHITE

        h ^= ZOBRIST.ep_key(self.ep_square) ^ ZOBRIST.castling_key(self.castling)
        h ^= ZOBRIST.black_to_move
        self.zobrist_hash = h & MASK64

    def unmake_move(self) -> Move:
        """Undo the last ``make_move`` and return the move that was undone.

        Raises:
            ValueError: If there is no move to undo.
        """
        if not self._history:
            raise ValueError("no move to unmake")
        (
            move,
            moved,
            placed,
            captured,
            capture_sq,
            rook_move,
            self.ep_square,
            self.castling,
            self.halfmove_clock,
            self.fullmove_number,
            self.zobrist_hash,
        ) = self._history.pop()
        self.side_to_move = _opponent(self.side_to_move)

        self.bb[placed] &= ~(1 << move.to_sq)
        self.bb[moved] |= 1 << move.from_sq
        if captured is not None:
            self.bb[captured] |= 1 << capture_sq
        if rook_move is not None:
            rook = moved - KING + ROOK
            rook_from, rook_to = rook_move
            self.bb[rook] = (self.bb[rook] & ~(1 << rook_to)) | (1 << rook_from)
        return move

    def check_invariants(self) -> None:
        """Assert the structural invariants of a reachable position."""
        assert self.bb[WK].bit_count() == 1, "white must have exactly one king"
        assert self.bb[BK].bit_count() == 1, "black must have exactly one king"
        assert not self.in_check(_opponent(self.side_to_move)), "side not to move is in check"
        occ = 0
        for b in self.bb:
            assert occ & b == 0, "two pieces on one square"
            occ |= b


def _add_pawn_move(moves: List[Move], from_sq: int, to_sq: int) -> None:
    if to_sq // 8 in (0, 7):
        for promo in PROMOTION_PIECES:
            moves.append(Move(from_sq, to_sq, promotion=promo))
    else:
        moves.append(Move(from_sq, to_sq))
