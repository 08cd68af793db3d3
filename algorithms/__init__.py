"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every step generator the visualizer knows about.

    from algorithms import REGISTRY, get_algorithm, generate_steps

REGISTRY is a dict:
    {
        "bubble_sort": AlgoInfo(key, label, fn, pseudocode, category, …),
        …
    }

AlgoInfo is a lightweight dataclass.  The engine and the API both consume
it, so adding a new algorithm is: write the generator, add one entry here.

Every `fn` is a generator function taking the algorithm's input as its
first argument (a list of numbers for most, a matrix, a graph or a pair
of strings for the rest) plus optional keyword options such as `source`
or `seed`.
"""

import inspect
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from algorithms.step import Step
from algorithms.validation import ensure_length

# ---------------------------------------------------------------------------
# Import all algorithm modules
# ---------------------------------------------------------------------------
from algorithms.bubble_sort         import bubble_sort         as _bubble,    PSEUDOCODE as _bubble_pc
from algorithms.selection_sort      import selection_sort      as _selection, PSEUDOCODE as _selection_pc
from algorithms.merge_sort          import merge_sort          as _merge,     PSEUDOCODE as _merge_pc
from algorithms.counting_sort       import counting_sort       as _counting,  PSEUDOCODE as _counting_pc
from algorithms.radix_sort          import radix_sort          as _radix,     PSEUDOCODE as _radix_pc
from algorithms.linear_search       import linear_search       as _linear,    PSEUDOCODE as _linear_pc
from algorithms.binary_search       import binary_search       as _binary,    PSEUDOCODE as _binary_pc
from algorithms.lis                 import lis                 as _lis,       PSEUDOCODE as _lis_pc
from algorithms.gcd                 import gcd                 as _gcd,       PSEUDOCODE as _gcd_pc
from algorithms.modular_arithmetic  import modular_arithmetic  as _modular,   PSEUDOCODE as _modular_pc
from algorithms.prime_factorization import prime_factorization as _factor,    PSEUDOCODE as _factor_pc
from algorithms.fibonacci           import fibonacci           as _fib,       PSEUDOCODE as _fib_pc
from algorithms.sieve               import sieve               as _sieve,     PSEUDOCODE as _sieve_pc
from algorithms.dijkstra            import dijkstra            as _dijkstra,  PSEUDOCODE as _dij_pc, DEFAULT_GRAPH
from algorithms.tarjan_scc          import tarjan_scc          as _tarjan,    PSEUDOCODE as _tarjan_pc
from algorithms.kmp                 import kmp                 as _kmp,       PSEUDOCODE as _kmp_pc
from algorithms.game_of_life        import game_of_life        as _life,      PSEUDOCODE as _life_pc
from algorithms.maze_generation     import maze_generation     as _maze,      PSEUDOCODE as _maze_pc
from algorithms.percolation         import percolation         as _perc,      PSEUDOCODE as _perc_pc

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# AlgoInfo — metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:              str                    # registry key, e.g. "bubble_sort"
    label:            str                    # human label, e.g. "Bubble Sort"
    fn:               Callable               # the generator function
    pseudocode:       List[str]              # lines for the side-panel
    category:         str                    # "Sorting", "Math", "Graphs", …
    input_kind:       str       = "array"    # array | numbers | matrix | graph | text | grid
    tags:             List[str] = field(default_factory=list)   # e.g. ["stable", "comparison"]
    time_best:        str       = ""         # e.g. "O(n)"
    time_average:     str       = ""
    time_worst:       str       = ""
    space:            str       = ""         # e.g. "O(1)"
    description:      str       = ""         # one-liner for the UI card
    default_input:    Any       = None       # what the UI pre-fills

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key":           self.key,
            "label":         self.label,
            "category":      self.category,
            "input_kind":    self.input_kind,
            "tags":          list(self.tags),
            "complexity": {
                "best":    self.time_best,
                "average": self.time_average,
                "worst":   self.time_worst,
                "space":   self.space,
            },
            "description":   self.description,
            "default_input": self.default_input,
            "pseudocode":    list(self.pseudocode),
        }


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {

    "bubble_sort": AlgoInfo(
        key="bubble_sort", label="Bubble Sort", fn=_bubble, pseudocode=_bubble_pc,
        category="Sorting", tags=["comparison", "stable", "in-place"],
        time_best="O(n)", time_average="O(n²)", time_worst="O(n²)", space="O(1)",
        description="Repeatedly swaps adjacent out-of-order pairs; the largest value bubbles to the end.",
        default_input=[64, 34, 25, 12, 22, 11, 90],
    ),

    "selection_sort": AlgoInfo(
        key="selection_sort", label="Selection Sort", fn=_selection, pseudocode=_selection_pc,
        category="Sorting", tags=["comparison", "stable", "in-place"],
        time_best="O(n²)", time_average="O(n²)", time_worst="O(n²)", space="O(1)",
        description="Finds the minimum of the unsorted part and moves it to the front.",
        default_input=[64, 25, 12, 22, 11],
    ),

    "merge_sort": AlgoInfo(
        key="merge_sort", label="Merge Sort", fn=_merge, pseudocode=_merge_pc,
        category="Sorting", tags=["comparison", "stable", "divide-and-conquer"],
        time_best="O(n log n)", time_average="O(n log n)", time_worst="O(n log n)", space="O(n)",
        description="Splits the array in halves, sorts each and merges them back.",
        default_input=[38, 27, 43, 3, 9, 82, 10],
    ),

    "counting_sort": AlgoInfo(
        key="counting_sort", label="Counting Sort", fn=_counting, pseudocode=_counting_pc,
        category="Sorting", tags=["non-comparison", "stable"],
        time_best="O(n + k)", time_average="O(n + k)", time_worst="O(n + k)", space="O(n + k)",
        description="Counts occurrences of each key, prefix-sums them and places elements stably.",
        default_input=[4, 2, 2, 8, 3, 3, 1],
    ),

    "radix_sort": AlgoInfo(
        key="radix_sort", label="Radix Sort (LSD)", fn=_radix, pseudocode=_radix_pc,
        category="Sorting", tags=["non-comparison", "stable"],
        time_best="O(d · (n + 10))", time_average="O(d · (n + 10))", time_worst="O(d · (n + 10))",
        space="O(n + 10)",
        description="Sorts digit by digit, least significant first, with ten stable buckets.",
        default_input=[170, 45, 75, 90, 802, 24, 2, 66],
    ),

    "linear_search": AlgoInfo(
        key="linear_search", label="Linear Search", fn=_linear, pseudocode=_linear_pc,
        category="Searching", input_kind="numbers", tags=["search"],
        time_best="O(1)", time_average="O(n)", time_worst="O(n)", space="O(1)",
        description="Checks each element in turn. Input: the target followed by the array.",
        default_input=[22, 64, 34, 25, 12, 22, 11, 90],
    ),

    "binary_search": AlgoInfo(
        key="binary_search", label="Binary Search", fn=_binary, pseudocode=_binary_pc,
        category="Searching", input_kind="numbers", tags=["search", "divide-and-conquer"],
        time_best="O(1)", time_average="O(log n)", time_worst="O(log n)", space="O(1)",
        description="Halves a sorted window around the middle element. Input: the target followed by the array.",
        default_input=[64, 11, 12, 22, 25, 34, 64, 90],
    ),

    "lis": AlgoInfo(
        key="lis", label="Longest Increasing Subsequence", fn=_lis, pseudocode=_lis_pc,
        category="Dynamic Programming", input_kind="array", tags=["dynamic-programming", "subsequence"],
        time_best="O(n²)", time_average="O(n²)", time_worst="O(n²)", space="O(n)",
        description="Longest strictly increasing subsequence by the O(n²) DP table or by patience sorting "
                    "(option method=\"patience\", O(n log n)).",
        default_input=[10, 9, 2, 5, 3, 7, 101, 18],
    ),

    "gcd": AlgoInfo(
        key="gcd", label="GCD", fn=_gcd, pseudocode=_gcd_pc,
        category="Math", input_kind="numbers", tags=["number-theory"],
        time_best="O(log min(a, b))", time_average="O(log min(a, b))", time_worst="O(log min(a, b))",
        space="O(1)",
        description="Greatest common divisor of two integers by the Euclidean algorithm.",
        default_input=[48, 18],
    ),

    "modular_arithmetic": AlgoInfo(
        key="modular_arithmetic", label="Modular Arithmetic", fn=_modular, pseudocode=_modular_pc,
        category="Math", input_kind="numbers", tags=["number-theory"],
        time_best="O(log e)", time_average="O(log e)", time_worst="O(log e)", space="O(1)",
        description="a mod m, or a^e mod m by square-and-multiply.",
        default_input=[5, 3, 13],
    ),

    "prime_factorization": AlgoInfo(
        key="prime_factorization", label="Prime Factorization", fn=_factor, pseudocode=_factor_pc,
        category="Math", input_kind="numbers", tags=["number-theory"],
        time_best="O(√n)", time_average="O(√n)", time_worst="O(√n)", space="O(log n)",
        description="Prime factors of a positive integer by trial division.",
        default_input=[84],
    ),

    "fibonacci": AlgoInfo(
        key="fibonacci", label="Fibonacci", fn=_fib, pseudocode=_fib_pc,
        category="Math", input_kind="numbers", tags=["sequence"],
        time_best="O(n)", time_average="O(n)", time_worst="O(n)", space="O(n)",
        description="The first n Fibonacci numbers.",
        default_input=[8],
    ),

    "sieve": AlgoInfo(
        key="sieve", label="Sieve of Eratosthenes", fn=_sieve, pseudocode=_sieve_pc,
        category="Math", input_kind="numbers", tags=["number-theory", "primes"],
        time_best="O(n log log n)", time_average="O(n log log n)", time_worst="O(n log log n)",
        space="O(n)",
        description="All primes up to n by crossing out multiples.",
        default_input=[30],
    ),

    "dijkstra": AlgoInfo(
        key="dijkstra", label="Dijkstra's Algorithm", fn=_dijkstra, pseudocode=_dij_pc,
        category="Graphs", input_kind="matrix", tags=["weighted", "shortest-path"],
        time_best="O(V²)", time_average="O(V²)", time_worst="O(V²)", space="O(V)",
        description="Single-source shortest paths with non-negative weights, linear-scan minimum.",
        default_input=DEFAULT_GRAPH,
    ),

    "tarjan_scc": AlgoInfo(
        key="tarjan_scc", label="Tarjan's Strongly Connected Components", fn=_tarjan, pseudocode=_tarjan_pc,
        category="Graphs", input_kind="graph", tags=["directed", "dfs"],
        time_best="O(V + E)", time_average="O(V + E)", time_worst="O(V + E)", space="O(V)",
        description="Finds strongly connected components with discovery times and low-link values.",
        default_input="complex",
    ),

    "kmp": AlgoInfo(
        key="kmp", label="KMP Pattern Matching", fn=_kmp, pseudocode=_kmp_pc,
        category="Strings", input_kind="text", tags=["string-matching"],
        time_best="O(n + m)", time_average="O(n + m)", time_worst="O(n + m)", space="O(m)",
        description="Builds the LPS table, then scans the text without ever moving backwards.",
        default_input={"text": "AABAACAADAABAABA", "pattern": "AABA"},
    ),

    "game_of_life": AlgoInfo(
        key="game_of_life", label="Conway's Game of Life", fn=_life, pseudocode=_life_pc,
        category="Simulation", input_kind="grid", tags=["cellular-automaton", "random"],
        time_best="O(wh) per generation", time_average="O(wh) per generation",
        time_worst="O(wh) per generation", space="O(wh)",
        description="Zero-player cellular automaton. Input: width, height, density %.",
        default_input=[25, 25, 30],
    ),

    "maze_generation": AlgoInfo(
        key="maze_generation", label="Maze Generator", fn=_maze, pseudocode=_maze_pc,
        category="Simulation", input_kind="grid", tags=["random", "dfs"],
        time_best="O(wh)", time_average="O(wh)", time_worst="O(wh)", space="O(wh)",
        description="Perfect maze by randomized DFS, with entrance and exit. Input: width, height.",
        default_input=[15, 15],
    ),

    "percolation": AlgoInfo(
        key="percolation", label="Percolation", fn=_perc, pseudocode=_perc_pc,
        category="Simulation", input_kind="grid", tags=["union-find", "random"],
        time_best="O(n² log n)", time_average="O(n² log n)", time_worst="O(n² log n)", space="O(n²)",
        description="Opens random sites until the top row connects to the bottom row. Input: n.",
        default_input=[20],
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: str) -> Optional[AlgoInfo]:
    """Return AlgoInfo by key, or None."""
    return REGISTRY.get(key)


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in insertion order."""
    return list(REGISTRY.values())


def algorithms_by_category(category: str) -> List[AlgoInfo]:
    """Filter registry by category."""
    return [a for a in REGISTRY.values() if a.category == category]


def algorithms_by_tag(tag: str) -> List[AlgoInfo]:
    """Filter registry by tag."""
    return [a for a in REGISTRY.values() if tag in a.tags]


def generate_steps(key: str, data: Any = None, **options: Any) -> List[Step]:
    """
    Run the generator for `key` to completion.

    Raises KeyError for an unknown key and ValueError for a domain
    violation.  `data=None` runs the algorithm's default input.
    """
    info = REGISTRY.get(key)
    if info is None:
        raise KeyError(key)
    if data is None:
        data = info.default_input
    if info.input_kind in ("array", "numbers"):
        ensure_length(data)

    # the first parameter is the input itself
    accepted = list(inspect.signature(info.fn).parameters)[1:]
    unknown = sorted(set(options) - set(accepted))
    if unknown:
        raise ValueError(f"{info.label} does not take option(s): {', '.join(unknown)}")

    steps = list(info.fn(data, **options))
    log.debug("%s: generated %d steps", key, len(steps))
    return steps


__all__ = [
    "AlgoInfo",
    "REGISTRY",
    "get_algorithm",
    "list_algorithms",
    "algorithms_by_category",
    "algorithms_by_tag",
    "generate_steps",
]
