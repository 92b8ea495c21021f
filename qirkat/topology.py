"""
Board geometry: square indexing, naming and neighbourhoods.

Squares are numbered 1..25 in row-major order starting from the bottom-left
corner (a1).  Odd-numbered squares lie on the diagonal lines of the board and
have eight neighbours; even-numbered squares have only the four orthogonal
ones.
"""
from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from .errors import InvalidSquareError
from .types import MAX_SQUARE_INDEX, MIN_SQUARE_INDEX, SIDE, Position, SquareIndex

COLUMNS = "abcde"
ROWS = "12345"

# (drow, dcol) unit vectors; "up" is towards row 5
UP, DOWN, LEFT, RIGHT = (1, 0), (-1, 0), (0, -1), (0, 1)
NORTH_EAST, NORTH_WEST, SOUTH_EAST, SOUTH_WEST = (1, 1), (1, -1), (-1, 1), (-1, -1)
ORTHOGONAL: Tuple[Position, ...] = (UP, DOWN, LEFT, RIGHT)
DIAGONAL: Tuple[Position, ...] = (NORTH_EAST, NORTH_WEST, SOUTH_WEST, SOUTH_EAST)

# -----------------------------
# Board indexing and utilities
# -----------------------------
_rc_of: List[Optional[Position]] = [None] * (MAX_SQUARE_INDEX + 1)
idx_map: Dict[Position, SquareIndex] = {}


def _build_mappings() -> None:
    i: int = 1
    for r in range(SIDE):
        for c in range(SIDE):
            _rc_of[i] = (r, c)
            idx_map[(r, c)] = i
            i += 1


_build_mappings()


def valid_square(k: object) -> bool:
    return isinstance(k, int) and MIN_SQUARE_INDEX <= k <= MAX_SQUARE_INDEX


def valid_coordinate(r: int, c: int) -> bool:
    return 0 <= r < SIDE and 0 <= c < SIDE


def check_square(k: SquareIndex) -> SquareIndex:
    """Return K unchanged, or raise InvalidSquareError if it is off the board."""
    if not valid_square(k):
        raise InvalidSquareError(f"square index out of range: {k!r}")
    return k


def rc(k: SquareIndex) -> Position:
    """Convert a square index to zero-based (row, col)."""
    return _rc_of[check_square(k)]  # type: ignore[return-value]


def index(r: int, c: int) -> SquareIndex:
    """Convert zero-based (row, col) to a square index."""
    if not valid_coordinate(r, c):
        raise InvalidSquareError(f"coordinate out of range: ({r}, {c})")
    return r * SIDE + c + 1


def square_index_of(name: str) -> SquareIndex:
    """Convert a square name such as ``c3`` to its index."""
    s = name.strip().lower()
    if len(s) != 2 or s[0] not in COLUMNS or s[1] not in ROWS:
        raise InvalidSquareError(f"bad square name: {name!r}")
    return index(ROWS.index(s[1]), COLUMNS.index(s[0]))


def square_name(k: SquareIndex) -> str:
    r, c = rc(k)
    return COLUMNS[c] + ROWS[r]


def is_odd_square(k: SquareIndex) -> bool:
    """True iff square K has diagonal connections."""
    return check_square(k) % 2 == 1


def neighbor(k: SquareIndex, dr: int, dc: int) -> Optional[SquareIndex]:
    """The square (DR, DC) away from K, or None when that falls off the board."""
    r, c = rc(k)
    nr, nc = r + dr, c + dc
    if valid_coordinate(nr, nc):
        return idx_map[(nr, nc)]
    return None


def directions_from(k: SquareIndex) -> Tuple[Position, ...]:
    """Every line direction available from K: four, plus diagonals on odd squares."""
    return ORTHOGONAL + DIAGONAL if is_odd_square(k) else ORTHOGONAL


def delta(a: SquareIndex, b: SquareIndex) -> Position:
    """Row and column displacement from square A to square B."""
    ra, ca = rc(a)
    rb, cb = rc(b)
    return rb - ra, cb - ca


def midpoint(a: SquareIndex, b: SquareIndex) -> Optional[SquareIndex]:
    """The square jumped over when moving in a straight line from A to B."""
    dr, dc = delta(a, b)
    if (dr, dc) == (0, 0) or abs(dr) not in (0, 2) or abs(dc) not in (0, 2):
        return None
    return neighbor(a, dr // 2, dc // 2)


def row_of(k: SquareIndex) -> int:
    """Zero-based row of square K."""
    return rc(k)[0]
