"""
percolation.py — Percolation with union-find
=============================================
An n × n grid of blocked sites.  Sites are opened one at a time; the
system percolates once an open path joins the top row to the bottom row.

Connectivity is tracked by a weighted union-find with path compression
and two virtual sites (one above the top row, one below the bottom row),
so percolates() is a single find.  Fullness (connected to the top) is
answered by a second union-find without the bottom virtual site, so a
site never looks full just because it touches the bottom row.

`percolation(...)` is the registry entry: it opens random closed sites
(seeded) until the grid percolates, one step per opened site.

Cell values in the flattened `array`:
    0 = blocked, 1 = open, 2 = full          (SORTED = full,
                                              SELECTED = just opened)
"""

import logging
import random
from typing import Generator, List, Optional, Sequence

from algorithms.step import ArrayElement, Step, StepBuilder
from algorithms.validation import ensure_finite
from config import Limits

log = logging.getLogger(__name__)

BLOCKED, OPEN, FULL = 0, 1, 2

PSEUDOCODE: List[str] = [
    "grid = n × n blocked sites",                            # 0
    "while not percolates():",                               # 1
    "    (r, c) = random blocked site",                      # 2
    "    open(r, c)",                                        # 3
    "    union (r, c) with each open neighbour",             # 4
    "    if r == 0: union with TOP",                         # 5
    "    if r == n - 1: union with BOTTOM",                  # 6
    "return open sites / n²",                                # 7
]

DEFAULT_N = 20


# ---------------------------------------------------------------------------
# Union-find
# ---------------------------------------------------------------------------
class UnionFind:
    def __init__(self, size: int):
        self.parent: List[int] = list(range(size))
        self.rank:   List[int] = [0] * size

    def find(self, x: int) -> int:
        root = x
        while self.parent[root] != root:
            root = self.parent[root]
        while self.parent[x] != root:
            self.parent[x], x = root, self.parent[x]
        return root

    def union(self, x: int, y: int) -> None:
        rx, ry = self.find(x), self.find(y)
        if rx == ry:
            return
        if self.rank[rx] < self.rank[ry]:
            rx, ry = ry, rx
        self.parent[ry] = rx
        if self.rank[rx] == self.rank[ry]:
            self.rank[rx] += 1

    def connected(self, x: int, y: int) -> bool:
        return self.find(x) == self.find(y)


# ---------------------------------------------------------------------------
# Percolation system
# ---------------------------------------------------------------------------
class Percolation:
    def __init__(self, n: int):
        if not 1 <= n <= Limits.percolation_max_n:
            raise ValueError(f"Percolation grid size must be between 1 and {Limits.percolation_max_n}")
        self.n = n
        self.grid: List[List[bool]] = [[False] * n for _ in range(n)]
        self.open_count = 0
        self.top    = n * n
        self.bottom = n * n + 1
        self._uf   = UnionFind(n * n + 2)
        self._full = UnionFind(n * n + 1)

    def _index(self, row: int, col: int) -> int:
        return row * self.n + col

    def _valid(self, row: int, col: int) -> bool:
        return 0 <= row < self.n and 0 <= col < self.n

    def open(self, row: int, col: int) -> None:
        if not self._valid(row, col):
            raise ValueError(f"Site ({row}, {col}) is outside the {self.n}x{self.n} grid")
        if self.grid[row][col]:
            return
        self.grid[row][col] = True
        self.open_count += 1
        site = self._index(row, col)

        for dr, dc in ((-1, 0), (1, 0), (0, -1), (0, 1)):
            nr, nc = row + dr, col + dc
            if self._valid(nr, nc) and self.grid[nr][nc]:
                self._uf.union(site, self._index(nr, nc))
                self._full.union(site, self._index(nr, nc))

        if row == 0:
            self._uf.union(site, self.top)
            self._full.union(site, self.top)
        if row == self.n - 1:
            self._uf.union(site, self.bottom)

    def is_open(self, row: int, col: int) -> bool:
        return self._valid(row, col) and self.grid[row][col]

    def is_full(self, row: int, col: int) -> bool:
        return self.is_open(row, col) and self._full.connected(self._index(row, col), self.top)

    def percolates(self) -> bool:
        return self._uf.connected(self.top, self.bottom)

    def cells(self) -> List[List[int]]:
        return [
            [FULL if self.is_full(r, c) else OPEN if self.grid[r][c] else BLOCKED for c in range(self.n)]
            for r in range(self.n)
        ]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def percolation(values: Sequence[float] = (), seed: Optional[int] = None) -> Generator[Step, None, None]:
    ensure_finite(values, "Grid size")
    n = int(values[0]) if values else DEFAULT_N
    system = Percolation(n)
    rng = random.Random(seed)
    sb = StepBuilder()

    def frame(just_opened: int = -1) -> List[ArrayElement]:
        return [
            ArrayElement(value=v, is_sorted=v == FULL, is_selected=k == just_opened)
            for k, v in enumerate(cell for row in system.cells() for cell in row)
        ]

    yield sb.build(frame(), f"Start with a {n}x{n} grid of blocked sites", 0,
                   is_grid=True, width=n, height=n, open_sites=0, percolates=False)

    blocked = [(r, c) for r in range(n) for c in range(n)]
    rng.shuffle(blocked)

    while not system.percolates():
        row, col = blocked.pop()
        system.open(row, col)
        sb.swapped()
        full = " It is full (connected to the top)." if system.is_full(row, col) else ""
        yield sb.build(
            frame(row * n + col), f"Open site ({row}, {col}).{full}", 3, i=row, j=col,
            is_grid=True, width=n, height=n, open_sites=system.open_count, percolates=system.percolates(),
        )

    fraction = system.open_count / (n * n)
    log.debug("percolation: n=%d percolated after %d sites", n, system.open_count)
    yield sb.build(
        frame(), f"The system percolates with {system.open_count} open sites ({fraction:.1%} of the grid).",
        7, is_final=True,
        is_grid=True, width=n, height=n, open_sites=system.open_count, percolates=True, fraction=fraction,
    )
