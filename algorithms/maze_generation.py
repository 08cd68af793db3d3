"""
maze_generation.py — Perfect maze by randomized DFS
====================================================
Recursive-backtracker carving on an odd × odd grid, with an explicit
stack instead of recursion:

  start at (1, 1); look at the unvisited cells two steps away; carve a
  random one and the wall between, push it; pop when there is none.

The result is a perfect maze (one path between any two open cells).
Afterwards one entrance is opened on the top edge and one exit on the
bottom edge.

Only ONE step is produced, the finished map; the carving itself is not
animated.

Cell values in the flattened `array`:
    0 = path, 1 = wall, 2 = entrance, 3 = exit   (SORTED = walkable)
"""

import logging
import random
from collections import deque
from typing import Generator, List, Optional, Sequence, Tuple

from algorithms.step import ArrayElement, Step, StepBuilder
from algorithms.validation import ensure_finite
from config import Limits

log = logging.getLogger(__name__)

PATH, WALL, ENTRANCE, EXIT = 0, 1, 2, 3

PSEUDOCODE: List[str] = [
    "Create grid filled with walls",                         # 0
    "Carve a perfect maze with randomized DFS",              # 1
    "Open entrance and exit on the boundary",                # 2
    "Output the final maze map",                             # 3
]

DEFAULT_SIZE = 15

_STEPS = [(0, -2), (2, 0), (0, 2), (-2, 0)]


def _odd(n: int) -> int:
    return n + 1 if n % 2 == 0 else n


def carve_maze(width: int, height: int, rng: Optional[random.Random] = None) -> List[List[int]]:
    """Grid[y][x] of PATH / WALL / ENTRANCE / EXIT.  Even sizes are bumped to odd."""
    w, h = _odd(width), _odd(height)
    lo, hi = Limits.maze_min_size, Limits.maze_max_size
    if not (lo <= w <= hi and lo <= h <= hi):
        raise ValueError(f"Maze size must be between {lo}x{lo} and {hi}x{hi}")
    rng = rng or random.Random()

    grid = [[WALL] * w for _ in range(h)]
    grid[1][1] = PATH
    stack: List[Tuple[int, int]] = [(1, 1)]

    while stack:
        x, y = stack[-1]
        options = []
        for dx, dy in _STEPS:
            nx, ny = x + dx, y + dy
            if 0 < nx < w - 1 and 0 < ny < h - 1 and grid[ny][nx] == WALL:
                options.append((nx, ny, x + dx // 2, y + dy // 2))

        if options:
            nx, ny, wx, wy = rng.choice(options)
            grid[wy][wx] = PATH
            grid[ny][nx] = PATH
            stack.append((nx, ny))
        else:
            stack.pop()

    grid[0][1] = ENTRANCE
    grid[h - 1][w - 2] = EXIT
    return grid


def reachable(grid: Sequence[Sequence[int]], start: Tuple[int, int]) -> set:
    """Flood fill over walkable cells from `start` = (x, y)."""
    h, w = len(grid), len(grid[0])
    seen = {start}
    queue = deque([start])
    while queue:
        x, y = queue.popleft()
        for dx, dy in ((1, 0), (-1, 0), (0, 1), (0, -1)):
            nx, ny = x + dx, y + dy
            if 0 <= nx < w and 0 <= ny < h and grid[ny][nx] != WALL and (nx, ny) not in seen:
                seen.add((nx, ny))
                queue.append((nx, ny))
    return seen


def maze_generation(values: Sequence[float] = (), seed: Optional[int] = None) -> Generator[Step, None, None]:
    """[width, height] → one step holding the finished maze."""
    ensure_finite(values, "Maze size")
    width  = int(values[0]) if len(values) > 0 else DEFAULT_SIZE
    height = int(values[1]) if len(values) > 1 else DEFAULT_SIZE
    grid = carve_maze(width, height, random.Random(seed))
    h, w = len(grid), len(grid[0])

    flat = [ArrayElement(value=cell, is_sorted=cell != WALL) for row in grid for cell in row]
    log.debug("maze: carved %dx%d", w, h)
    yield StepBuilder().build(
        flat, "Final maze map with entrance and exit", 3, is_final=True,
        width=w, height=h, is_maze=True, entrance=[1, 0], exit=[w - 2, h - 1],
    )
