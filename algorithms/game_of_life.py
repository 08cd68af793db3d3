"""
game_of_life.py — Conway's Game of Life
========================================
Two pieces:

  next_generation(grid)  – pure function, one B3/S23 update of a bounded
                           grid (cells off the edge count as dead)
  LifeSimulation         – holds ONLY the current generation as a single
                           Step; advance() replaces it with the next one

This is a simulation rather than a recorded trace: nothing but the
latest generation is kept.

Grid steps flatten the grid row by row into `array` (value 1 = alive,
SORTED marks a live cell) and carry is_grid, width, height, generation,
live_cells, births, deaths and survivals in additional_info.
"""

import logging
import random
from dataclasses import dataclass
from typing import Generator, List, Optional, Sequence

from algorithms.step import ArrayElement, Step, StepBuilder
from algorithms.validation import ensure_finite
from config import Limits

log = logging.getLogger(__name__)

Grid = List[List[int]]


PSEUDOCODE: List[str] = [
    "# Conway's Game of Life",                                          # 0
    "for each generation:",                                             # 1
    "    for each cell:",                                               # 2
    "        n = live neighbours among the 8 around the cell",          # 3
    "        if alive and (n < 2 or n > 3): dies",                      # 4
    "        if alive and n in (2, 3): survives",                       # 5
    "        if dead and n == 3: becomes alive",                        # 6
    "    apply all changes at once",                                    # 7
]

DEFAULT_WIDTH   = 25
DEFAULT_HEIGHT  = 25
DEFAULT_DENSITY = 0.30

_NEIGHBOURS = [(-1, -1), (-1, 0), (-1, 1), (0, -1), (0, 1), (1, -1), (1, 0), (1, 1)]


@dataclass
class GenerationResult:
    next:      Grid
    births:    int
    deaths:    int
    survivals: int


# ---------------------------------------------------------------------------
# Core rules
# ---------------------------------------------------------------------------
def next_generation(grid: Sequence[Sequence[int]]) -> GenerationResult:
    """Apply the rules to every cell at once.  The input grid is not touched."""
    if not grid or not grid[0]:
        raise ValueError("Grid must have at least one row and one column")
    h, w = len(grid), len(grid[0])
    if any(len(row) != w for row in grid):
        raise ValueError("Grid rows must all have the same length")

    nxt: Grid = [[0] * w for _ in range(h)]
    births = deaths = survivals = 0

    for r in range(h):
        for c in range(w):
            live = 0
            for dr, dc in _NEIGHBOURS:
                nr, nc = r + dr, c + dc
                if 0 <= nr < h and 0 <= nc < w and grid[nr][nc]:
                    live += 1

            if grid[r][c]:
                if live in (2, 3):
                    nxt[r][c] = 1
                    survivals += 1
                else:
                    deaths += 1
            elif live == 3:
                nxt[r][c] = 1
                births += 1

    return GenerationResult(nxt, births, deaths, survivals)


def check_dimensions(width: int, height: int) -> None:
    lo, hi = Limits.life_min_size, Limits.life_max_size
    if not (lo <= width <= hi and lo <= height <= hi):
        raise ValueError(f"Grid size must be between {lo}x{lo} and {hi}x{hi} (got {width}x{height})")


def random_grid(
    width: int,
    height: int,
    density: float = DEFAULT_DENSITY,
    rng: Optional[random.Random] = None,
) -> Grid:
    """Each cell alive independently with probability `density`."""
    check_dimensions(width, height)
    rng = rng or random.Random()
    density = max(0.0, min(1.0, density))
    return [[1 if rng.random() < density else 0 for _ in range(width)] for _ in range(height)]


def grid_step(
    grid: Sequence[Sequence[int]],
    description: str,
    generation: int = 0,
    result: Optional[GenerationResult] = None,
) -> Step:
    flat = [ArrayElement(value=cell, is_sorted=bool(cell)) for row in grid for cell in row]
    return StepBuilder().build(
        flat, description, 7 if generation else 0,
        is_grid=True,
        width=len(grid[0]),
        height=len(grid),
        generation=generation,
        live_cells=sum(cell for row in grid for cell in row),
        births=result.births if result else 0,
        deaths=result.deaths if result else 0,
        survivals=result.survivals if result else 0,
    )


# ---------------------------------------------------------------------------
# Simulation
# ---------------------------------------------------------------------------
class LifeSimulation:
    """
    Timer-driven stepping is the caller's job: each tick calls advance().

        sim = LifeSimulation(30, 20, density=0.25, seed=7)
        sim.advance()
        sim.current.additional_info["generation"]   # 1

    Pass `grid` to start from a fixed pattern instead of a random one.
    """

    def __init__(
        self,
        width:   int   = DEFAULT_WIDTH,
        height:  int   = DEFAULT_HEIGHT,
        density: float = DEFAULT_DENSITY,
        seed:    Optional[int] = None,
        grid:    Optional[Sequence[Sequence[int]]] = None,
    ):
        if grid is not None:
            if not grid or not grid[0]:
                raise ValueError("Grid must have at least one row and one column")
            width, height = len(grid[0]), len(grid)
        check_dimensions(width, height)

        self.width:   int   = width
        self.height:  int   = height
        self.density: float = density
        self._rng = random.Random(seed)
        self.reset([list(row) for row in grid] if grid is not None else None)

    def reset(self, grid: Optional[Grid] = None) -> Step:
        self.grid: Grid = grid or random_grid(self.width, self.height, self.density, self._rng)
        self.generation: int = 0
        self.current: Step = grid_step(self.grid, "Initial configuration" if grid else "Initial random configuration")
        log.info("life: new %dx%d grid, %d live cells",
                 self.width, self.height, self.current.additional_info["live_cells"])
        return self.current

    def advance(self) -> Step:
        result = next_generation(self.grid)
        self.generation += 1
        if result.next == self.grid:
            note = " The pattern is stable."
        else:
            note = ""
        self.grid = result.next
        self.current = grid_step(
            self.grid,
            f"Generation {self.generation}: {result.births} births, {result.deaths} deaths, "
            f"{result.survivals} survivals.{note}",
            self.generation,
            result,
        )
        return self.current

    @property
    def live_cells(self) -> int:
        return self.current.additional_info["live_cells"]


# ---------------------------------------------------------------------------
# Registry entry
# ---------------------------------------------------------------------------
def game_of_life(values: Sequence[float] = (), seed: Optional[int] = None) -> Generator[Step, None, None]:
    """[width, height, density %] → the single initial step."""
    ensure_finite(values, "Game of Life settings")
    width   = int(values[0]) if len(values) > 0 and values[0] else DEFAULT_WIDTH
    height  = int(values[1]) if len(values) > 1 and values[1] else DEFAULT_HEIGHT
    density = values[2] / 100 if len(values) > 2 else DEFAULT_DENSITY
    yield LifeSimulation(width, height, density, seed).current
