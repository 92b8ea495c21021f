"""
Move values and move notation.

A ``Move`` is one step from an origin square to a destination square.  Capture
chains are singly linked: each capture step may carry a ``next`` step that
starts on its landing square.  Moves are immutable once built.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Tuple

from .errors import InvalidSquareError, MalformedMoveError
from .topology import check_square, delta, midpoint, square_index_of, square_name
from .types import SquareIndex

_MOVE_RE = re.compile(r"^[a-e][1-5](-[a-e][1-5])+$")


@dataclass(frozen=True)
class Move:
    """A simple step, a capture step, or the head of a capture chain."""

    origin: SquareIndex
    dest: SquareIndex
    next: Optional["Move"] = None

    def __post_init__(self) -> None:
        check_square(self.origin)
        check_square(self.dest)
        if self.next is not None:
            if not self.is_jump or not self.next.is_jump:
                raise MalformedMoveError(f"only captures can be chained: {self}")
            if self.next.origin != self.dest:
                raise MalformedMoveError(f"chain is not contiguous: {self}")

    # Construction helpers

    @classmethod
    def vestigial(cls, k: SquareIndex) -> "Move":
        """The zero-length placeholder move at K; never a real move."""
        return cls(k, k)

    @classmethod
    def from_squares(cls, squares: Sequence[SquareIndex]) -> "Move":
        """Build a step or chain visiting SQUARES in order."""
        if len(squares) < 2:
            raise MalformedMoveError(f"a move needs at least two squares: {list(squares)}")
        chain: Optional[Move] = None
        for a, b in zip(squares, squares[1:]):
            if a == b:
                raise MalformedMoveError(f"zero-length step in {list(squares)}")
        for a, b in reversed(list(zip(squares, squares[1:]))):
            chain = cls(a, b, chain)
        return chain  # type: ignore[return-value]

    def extend(self, tail: "Move") -> "Move":
        """Return this move with TAIL appended after its last step.

        Extending a vestigial move yields TAIL itself.
        """
        if self.is_vestigial:
            return tail
        return Move.from_squares(self.squares() + tail.squares()[1:])

    # Classification

    @property
    def is_vestigial(self) -> bool:
        return self.origin == self.dest

    @property
    def is_jump(self) -> bool:
        return midpoint(self.origin, self.dest) is not None

    @property
    def is_step(self) -> bool:
        """True for a one-square (king-adjacent) non-capturing step."""
        dr, dc = delta(self.origin, self.dest)
        return max(abs(dr), abs(dc)) == 1

    @property
    def is_lateral(self) -> bool:
        dr, dc = delta(self.origin, self.dest)
        return dr == 0 and abs(dc) == 1

    @property
    def is_diagonal(self) -> bool:
        dr, dc = delta(self.origin, self.dest)
        return dr != 0 and dc != 0

    @property
    def jumped_index(self) -> Optional[SquareIndex]:
        """The square captured by this step, or None for a non-capture."""
        return midpoint(self.origin, self.dest)

    # Chain traversal

    def steps(self) -> Iterator["Move"]:
        """Yield this step and each continuation, each as a one-link Move."""
        mov: Optional[Move] = self
        while mov is not None:
            yield Move(mov.origin, mov.dest)
            mov = mov.next

    @property
    def final_destination(self) -> SquareIndex:
        mov = self
        while mov.next is not None:
            mov = mov.next
        return mov.dest

    def squares(self) -> Tuple[SquareIndex, ...]:
        """Every square the moving piece occupies, origin first."""
        return (self.origin,) + tuple(step.dest for step in self.steps())

    def captured_squares(self) -> Tuple[SquareIndex, ...]:
        return tuple(step.jumped_index for step in self.steps() if step.is_jump)  # type: ignore[misc]

    def is_prefix_of(self, other: "Move") -> bool:
        """True iff OTHER starts with exactly the steps of this move."""
        mine, theirs = self.squares(), other.squares()
        return len(mine) <= len(theirs) and theirs[:len(mine)] == mine

    def __len__(self) -> int:
        return len(self.squares()) - 1

    def __str__(self) -> str:
        if self.is_vestigial:
            return square_name(self.origin) + "-"
        return "-".join(square_name(k) for k in self.squares())


def parse_move(text: str) -> Move:
    """Parse ``c2-c3`` or a chained capture such as ``a1-c3-e5``."""
    s = text.strip().lower().replace(" ", "")
    if not _MOVE_RE.match(s):
        raise MalformedMoveError(f"bad move notation: {text!r}")
    try:
        squares: List[SquareIndex] = [square_index_of(p) for p in s.split("-")]
    except InvalidSquareError as e:
        raise MalformedMoveError(str(e)) from e
    return Move.from_squares(squares)
