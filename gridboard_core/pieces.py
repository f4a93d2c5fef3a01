from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple, Optional

EMPTY_KIND = 'empty'
GUARD_KIND = 'guard'
BLACK_KIND = 'black'
WHITE_KIND = 'white'

_MARKER_KINDS = (EMPTY_KIND, GUARD_KIND)


class Color(NamedTuple):
    """ARGB color carried by colorable pieces."""
    a: int
    r: int
    g: int
    b: int

    @property
    def hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"


@dataclass(frozen=True)
class Piece:
    """An immutable cell marker identified by its kind.

    Empty and Guard are plain markers without a color. Every other kind is a
    colorable piece and must carry one.
    """
    kind: str
    color: Optional[Color] = None

    def __post_init__(self) -> None:
        if not self.kind:
            raise ValueError('Piece kind must be a non-empty string')
        if self.kind in _MARKER_KINDS and self.color is not None:
            raise ValueError(f"'{self.kind}' pieces do not carry a color")
        if self.kind not in _MARKER_KINDS and self.color is None:
            raise ValueError(f"Colorable piece '{self.kind}' requires a color")

    @property
    def has_color(self) -> bool:
        return self.color is not None

    @property
    def is_empty(self) -> bool:
        return self.kind == EMPTY_KIND

    @property
    def is_guard(self) -> bool:
        return self.kind == GUARD_KIND

    def same_kind(self, other: 'Piece') -> bool:
        return self.kind == other.kind

    def __str__(self) -> str:
        return self.kind


def colored(kind: str, color: Color) -> Piece:
    """Builds a colorable piece variant, e.g. colored('red', Color(255, 255, 0, 0))."""
    return Piece(kind=kind, color=color)


class Pieces:
    """Shared markers for the common piece kinds."""
    EMPTY = Piece(EMPTY_KIND)
    GUARD = Piece(GUARD_KIND)
    BLACK = colored(BLACK_KIND, Color(255, 128, 128, 128))
    WHITE = colored(WHITE_KIND, Color(255, 255, 255, 255))

    @classmethod
    def by_kind(cls, kind: str) -> Piece:
        """Looks up one of the shared markers by kind (case-insensitive)."""
        table = {p.kind: p for p in (cls.EMPTY, cls.GUARD, cls.BLACK, cls.WHITE)}
        try:
            return table[kind.strip().lower()]
        except KeyError:
            raise ValueError(f"Unknown piece kind: {kind!r}") from None
