"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass, replace

from chessmate.core.enums import Color, PieceKind

_LETTERS: dict[PieceKind, str] = {
    PieceKind.PAWN: "p",
    PieceKind.KNIGHT: "n",
    PieceKind.BISHOP: "b",
    PieceKind.ROOK: "r",
    PieceKind.QUEEN: "q",
    PieceKind.KING: "k",
}
_KINDS_BY_LETTER: dict[str, PieceKind] = {v: k for k, v in _LETTERS.items()}

# Indexed by [color][kind - 1].
_GLYPHS: tuple[tuple[str, ...], tuple[str, ...]] = (
    ("♙", "♘", "♗", "♖", "♕", "♔"),
    ("♟", "♞", "♝", "♜", "♛", "♚"),
)

# Kinds whose ``has_moved`` flag gates castling.
CASTLING_KINDS = frozenset((PieceKind.ROOK, PieceKind.KING))


@dataclass(frozen=True, slots=True)
class Piece:
    """Immutable description of a chess piece.

    The piece never knows where it stands; the board cell holding it is the
    only source of its coordinates.  ``has_moved`` is only tracked for rooks
    and kings and is raised by replacing the piece with :meth:`moved`.
    """

    color: Color
    kind: PieceKind
    has_moved: bool = False

    def moved(self) -> Piece:
        """Same piece with the castling flag raised."""
        if self.has_moved or self.kind not in CASTLING_KINDS:
            return self
        return replace(self, has_moved=True)

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        """Letter (uppercase = white, lowercase = black)."""
        letter = _LETTERS[self.kind]
        return letter.upper() if self.color == Color.WHITE else letter

    @classmethod
    def from_char(cls, char: str, *, has_moved: bool = False) -> Piece:
        """Create piece from a letter, e.g. 'N' → white knight."""
        kind = _KINDS_BY_LETTER.get(char.lower())
        if kind is None:
            raise ValueError(f"Invalid piece character: {char!r}")
        color = Color.WHITE if char.isupper() else Color.BLACK
        return cls(color, kind, has_moved)

    @property
    def symbol(self) -> str:
        """Unicode chess symbol, e.g. ♞."""
        return _GLYPHS[int(self.color)][int(self.kind) - 1]
