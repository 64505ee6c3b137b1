from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Dict, List, Optional, Union

from chesscore.engine.board import Board, KINDS, WHITE
from chesscore.engine.game import CHECKMATE, Game, Outcome, insufficient_material, outcome
from chesscore.engine.move import Move
from chesscore.eval import MATE_SCORE, PIECE_VALUES, evaluate


logger = logging.getLogger(__name__)

INF = 10_000_000
# Scores this close to MATE_SCORE are forced mates
MATE_WINDOW = 512


@dataclass
class SearchResult:
    best_move: Optional[Move]
    score: int  # centipawns from White's perspective
    mate_in: Optional[int]  # moves; positive when the side to move mates
    nodes: int
    depth: int
    time_ms: int
    completed: bool
    outcome: Outcome


class _BudgetExhausted(Exception):
    pass


def order_moves(board: Board, moves: List[Move]) -> List[Move]:
    """Return ``moves`` with captures and promotions first.

    Captures are ranked most valuable victim, least valuable attacker. The
    sort is stable, so quiet moves keep generation order.
    """

    def move_score(mv: Move) -> int:
        score = 0
        if mv.promotion:
            score += PIECE_VALUES[KINDS.index(mv.promotion)]
        if board.is_capture(mv):
            victim = board.piece_at(mv.to_sq)
            victim_val = PIECE_VALUES[0] if victim is None else PIECE_VALUES[victim.index % 6]
            attacker = board.piece_at(mv.from_sq)
            attacker_idx = attacker.index % 6 if attacker is not None else 0
            score += 10 * victim_val - attacker_idx
        return score

    return sorted(moves, key=lambda m: -move_score(m))


def terminal_score(result: Outcome, ply: int) -> int:
    """Score a finished position; quicker mates score further from zero."""
    if result.kind != CHECKMATE:
        return 0
    return MATE_SCORE - ply if result.winner == WHITE else -(MATE_SCORE - ply)


class SearchService:
    """Depth-limited minimax with alpha-beta pruning over material evaluation.

    White maximizes and Black minimizes; scores are always from White's
    perspective. The board handed in is restored exactly before returning.
    """

    def search(
        self,
        target: Union[Game, Board],
        depth: int = 1,
        movetime_ms: Optional[int] = None,
        max_nodes: Optional[int] = None,
        *,
        enable_alphabeta: bool = True,
    ) -> SearchResult:
        """Pick the best move for the side to move.

        Args:
            target: A ``Game`` (its repetition counts are honoured; the search
                runs on a copy of its board) or a bare ``Board`` (searched in
                place with balanced make/unmake).
            depth: Plies to look ahead, at least 1.
            movetime_ms: Optional wall-clock budget.
            max_nodes: Optional node budget.
            enable_alphabeta: When False, run plain minimax (same score, more
                nodes).

        Returns:
            SearchResult: ``best_move`` is None only when the side to move has no
            legal move; ``outcome`` reports how the root stands either way.
        """
        if depth < 1:
            raise ValueError("depth must be >= 1")
        if isinstance(target, Game):
            board = target.board.copy()
            rep_counts: Dict[int, int] = dict(target.repetition)
        else:
            board = target
            rep_counts = {board.zobrist_hash: 1}

        start = time.perf_counter()
        nodes = 0

        def elapsed_ms() -> int:
            return int((time.perf_counter() - start) * 1000)

        def check_budget() -> None:
            if max_nodes is not None and nodes > max_nodes:
                raise _BudgetExhausted()
            if movetime_ms is not None and elapsed_ms() >= movetime_ms:
                raise _BudgetExhausted()

        def push(mv: Move) -> None:
            board.make_move(mv)
            h = board.zobrist_hash
            rep_counts[h] = rep_counts.get(h, 0) + 1

        def pop() -> None:
            h = board.zobrist_hash
            rep_counts[h] -= 1
            if rep_counts[h] <= 0:
                del rep_counts[h]
            board.unmake_move()

        def minimax(d: int, alpha: int, beta: int, maximizing: bool, ply: int) -> int:
            nonlocal nodes
            nodes += 1
            check_budget()

            # Leaves only need to know whether any move exists
            legal = board.generate_legal_moves() if d > 0 else []
            if not (legal or (d == 0 and board.has_legal_moves())):
                if board.in_check():
                    return -(MATE_SCORE - ply) if maximizing else MATE_SCORE - ply
                return 0
            if (
                insufficient_material(board)
                or rep_counts.get(board.zobrist_hash, 0) >= 3
                or board.halfmove_clock >= 100
            ):
                return 0
            if d == 0:
                return evaluate(board)

            if maximizing:
                best = -INF
                for mv in order_moves(board, legal):
                    push(mv)
                    try:
                        score = minimax(d - 1, alpha, beta, False, ply + 1)
                    finally:
                        pop()
                    if score > best:
                        best = score
                    if enable_alphabeta:
                        alpha = max(alpha, best)
                        if beta <= alpha:
                            break
                return best

            best = INF
            for mv in order_moves(board, legal):
                push(mv)
                try:
                    score = minimax(d - 1, alpha, beta, True, ply + 1)
                finally:
                    pop()
                if score < best:
                    best = score
                if enable_alphabeta:
                    beta = min(beta, best)
                    if beta <= alpha:
                        break
            return best

        root_outcome = outcome(board, rep_counts)
        root_moves = order_moves(board, board.generate_legal_moves())
        if not root_moves:
            score = terminal_score(root_outcome, 0)
            return SearchResult(
                best_move=None,
                score=score,
                mate_in=self._mate_in(score, board.side_to_move),
                nodes=1,
                depth=0,
                time_ms=elapsed_ms(),
                completed=True,
                outcome=root_outcome,
            )

        maximizing = board.side_to_move == WHITE
        alpha, beta = -INF, INF
        best_move: Optional[Move] = None
        best_score: Optional[int] = None
        completed = True
        for mv in root_moves:
            try:
                push(mv)
                try:
                    score = minimax(depth - 1, alpha, beta, not maximizing, 1)
                finally:
                    pop()
            except _BudgetExhausted:
                completed = False
                break
            # Strict improvement: ties keep the first move searched
            if best_score is None or (score > best_score if maximizing else score < best_score):
                best_move, best_score = mv, score
            if enable_alphabeta:
                if maximizing:
                    alpha = max(alpha, best_score)
                else:
                    beta = min(beta, best_score)

        if best_move is None:
            # Budget ran out before any root move finished
            best_move = root_moves[0]
            best_score = evaluate(board)
        assert best_score is not None

        result = SearchResult(
            best_move=best_move,
            score=best_score,
            mate_in=self._mate_in(best_score, board.side_to_move),
            nodes=nodes,
            depth=depth,
            time_ms=elapsed_ms(),
            completed=completed,
            outcome=root_outcome,
        )
        logger.debug(
            "search depth=%d best=%s score=%d nodes=%d time_ms=%d completed=%s",
            depth,
            best_move.to_uci(),
            best_score,
            nodes,
            result.time_ms,
            completed,
        )
        return result

    @staticmethod
    def _mate_in(score: int, side_to_move: str) -> Optional[int]:
        if abs(score) < MATE_SCORE - MATE_WINDOW:
            return None
        moves = (MATE_SCORE - abs(score) + 1) // 2
        stm_wins = (score > 0) == (side_to_move == WHITE)
        return moves if stm_wins else -moves


def best_move(
    board: Board,
    depth: int,
    movetime_ms: Optional[int] = None,
    max_nodes: Optional[int] = None,
) -> Optional[Move]:
    """Return the engine's move for ``board``, or None when it has no legal move."""
    return SearchService().search(
        board, depth=depth, movetime_ms=movetime_ms, max_nodes=max_nodes
    ).best_move
