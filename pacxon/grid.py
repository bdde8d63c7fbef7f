"""
Territory grid, player trail and the enemy-seeded flood fill.

The grid tracks which cells are claimed ("walls"). The bottom row is
reserved for the progress bar and never takes part in wall logic.
"""

import math
from collections import deque
from typing import Iterable, Iterator, List, NamedTuple, Set, Tuple

Coord = Tuple[int, int]


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties towards positive infinity."""
    return math.floor(value + 0.5)


# ============================================================================
# GRID MANAGEMENT
# ============================================================================

class Grid:
    """
    Boolean occupancy matrix of claimed territory.

    Cells are addressed as (x, y). Rows 0 and height-2 and columns 0 and
    width-1 form the border; row height-1 is the progress bar line.
    """

    __slots__ = ['width', 'height', 'cells']

    def __init__(self, width: int, height: int, bordered: bool = True):
        """
        Initialize grid, optionally with the border pre-filled.

        Args:
            width: Grid width in cells
            height: Grid height in cells, including the progress bar row
            bordered: Whether to claim the border cells
        """
        self.width = width
        self.height = height
        self.cells = [[False] * width for _ in range(height)]
        if bordered:
            self._initialize_borders()

    def _initialize_borders(self):
        """Claim the top row, the row above the progress bar and both sides."""
        bottom = self.height - 2
        for x in range(self.width):
            self.cells[0][x] = True
            self.cells[bottom][x] = True

        for y in range(self.height - 1):
            self.cells[y][0] = True
            self.cells[y][self.width - 1] = True

    def copy(self) -> 'Grid':
        """Return an independent copy of this grid."""
        clone = Grid(self.width, self.height, bordered=False)
        clone.cells = [row[:] for row in self.cells]
        return clone

    def in_bounds(self, x: int, y: int) -> bool:
        """Check if a cell is inside the gameplay area (progress bar excluded)."""
        return 0 <= x < self.width and 0 <= y < self.height - 1

    def is_wall(self, x: int, y: int) -> bool:
        """
        Get claim state at coordinates.

        Returns False outside the matrix so that probing past the edge
        never counts as a wall hit.
        """
        if 0 <= x < self.width and 0 <= y < self.height:
            return self.cells[y][x]
        return False

    def claim(self, x: int, y: int):
        """Mark a gameplay cell as claimed."""
        if self.in_bounds(x, y):
            self.cells[y][x] = True

    def key(self, x: int, y: int) -> int:
        """Pack a coordinate into a single integer."""
        return y * self.width + x

    def claimed_cells(self) -> Iterator[Coord]:
        """Yield every claimed cell."""
        for y, row in enumerate(self.cells):
            for x, claimed in enumerate(row):
                if claimed:
                    yield x, y

    def border_cells(self) -> Iterator[Coord]:
        """Yield the cells that must stay claimed for the whole game."""
        bottom = self.height - 2
        for x in range(self.width):
            yield x, 0
            yield x, bottom
        for y in range(1, bottom):
            yield 0, y
            yield self.width - 1, y

    def count_playable_claimed(self) -> int:
        """Count claimed cells inside the border, progress bar row excluded."""
        return sum(
            1
            for y in range(1, self.height - 2)
            for x in range(1, self.width - 1)
            if self.cells[y][x]
        )

    def playable_cell_count(self) -> int:
        return (self.width - 2) * (self.height - 3)

    def fill_fraction(self) -> float:
        """Fraction between 0.0 and 1.0 of the playable area that is claimed."""
        total = self.playable_cell_count()
        return self.count_playable_claimed() / total if total > 0 else 0.0

    def fill_percentage(self) -> int:
        """Claimed share of the playable area as a whole percentage."""
        return round_half_up(self.fill_fraction() * 100)

    def flood_keep(self, seeds: Iterable[Coord]) -> Set[int]:
        """
        Find every open cell reachable from the given seeds.

        Multi-source breadth-first search over 4-connected neighbours.
        Seeds that are out of bounds or on a wall are skipped.

        Args:
            seeds: Starting (x, y) cells

        Returns:
            Set of packed keys of all reached cells
        """
        seen = set()
        queue = deque()

        for x, y in seeds:
            if not self.in_bounds(x, y) or self.cells[y][x]:
                continue
            k = self.key(x, y)
            if k not in seen:
                seen.add(k)
                queue.append((x, y))

        while queue:
            x, y = queue.popleft()

            for dx, dy in ((1, 0), (-1, 0), (0, 1), (0, -1)):
                nx, ny = x + dx, y + dy

                if not self.in_bounds(nx, ny):
                    continue
                if self.cells[ny][nx]:
                    continue
                k = self.key(nx, ny)
                if k in seen:
                    continue

                seen.add(k)
                queue.append((nx, ny))

        return seen


# ============================================================================
# TRAIL
# ============================================================================

class Trail:
    """Cells walked since the player left claimed territory."""

    __slots__ = ['width', '_keys']

    def __init__(self, width: int, cells: Iterable[Coord] = ()):
        self.width = width
        self._keys: Set[int] = set()
        for x, y in cells:
            self.add(x, y)

    def add(self, x: int, y: int):
        self._keys.add(y * self.width + x)

    def clear(self):
        self._keys.clear()

    def __contains__(self, cell: Coord) -> bool:
        x, y = cell
        return y * self.width + x in self._keys

    def __len__(self) -> int:
        return len(self._keys)

    def __iter__(self) -> Iterator[Coord]:
        for k in self._keys:
            y, x = divmod(k, self.width)
            yield x, y

    def __eq__(self, other) -> bool:
        if isinstance(other, Trail):
            return self._keys == other._keys
        if isinstance(other, (set, frozenset)):
            return set(self) == other
        return NotImplemented

    def __repr__(self) -> str:
        return f"Trail({sorted(self)!r})"


# ============================================================================
# FLOOD-FILL RESOLVER
# ============================================================================

class FillResult(NamedTuple):
    """Outcome of committing a trail."""
    walls: Grid
    claimed: List[Coord]

    @property
    def gained(self) -> int:
        """Score earned: one point per newly claimed cell."""
        return len(self.claimed)


def resolve_claimed_region(walls: Grid, trail: Iterable[Coord], enemies) -> FillResult:
    """
    Convert every area no enemy can reach into claimed territory.

    The trail is treated as wall before the search so loops drawn away from
    existing walls still enclose space. The input grid is left untouched.

    Args:
        walls: Current claimed territory
        trail: Player trail cells
        enemies: Objects exposing ``cell`` as rounded (x, y)

    Returns:
        FillResult with the new grid and the cells that were claimed
    """
    temp = walls.copy()
    for x, y in trail:
        temp.claim(x, y)

    keep = temp.flood_keep(enemy.cell for enemy in enemies)

    claimed = []
    for y in range(1, temp.height - 1):
        row = temp.cells[y]
        for x in range(1, temp.width - 1):
            if not row[x] and temp.key(x, y) not in keep:
                row[x] = True
                claimed.append((x, y))

    return FillResult(temp, claimed)
