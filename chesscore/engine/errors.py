from __future__ import annotations


class ChessError(Exception):
    """Base class for recoverable engine errors.

    The position the caller holds is never modified when one of these is
    raised, so it can retry with corrected input.
    """


class MalformedNotation(ChessError, ValueError):
    """Raised when FEN or UCI text is structurally invalid."""


class IllegalMove(ChessError, ValueError):
    """Raised when a move is not a member of the current legal move list."""


class EmptySearch(ChessError):
    """Raised when an engine move is requested for a finished game."""
