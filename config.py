"""
config.py — Runtime Configuration
==================================
Plain class-attribute config, read directly by the modules that need it:

    from config import Limits, ServerConfig

`Limits` caps input sizes so every visualization stays readable.
`ServerConfig` drives the Flask app; each value can be overridden with a
VISUALIZER_* environment variable.
"""

import os
import secrets
from typing import Dict


# ---------------------------------------------------------------------------
# Input limits
# ---------------------------------------------------------------------------
class Limits:
    max_array_length:      int = 800
    bfs_max_nodes:         int = 15
    maze_min_size:         int = 5
    maze_max_size:         int = 31
    life_min_size:         int = 5
    life_max_size:         int = 100
    percolation_max_n:     int = 40
    btree_min_degree:      int = 2
    max_text_length:       int = 200
    max_factor_input:      int = 10 ** 9
    max_fibonacci_n:       int = 90
    scc_max_nodes:         int = 26
    counting_sort_max_key: int = 1000
    stack_capacity:        int = 10
    queue_capacity:        int = 10
    rbtree_max_nodes:      int = 63

    # seconds per step for timer-driven playback
    speed_presets: Dict[str, float] = {
        "slow":   1.0,
        "medium": 0.4,
        "fast":   0.15,
        "turbo":  0.05,
    }


# ---------------------------------------------------------------------------
# Server
# ---------------------------------------------------------------------------
def _env(name: str, default: str) -> str:
    return os.environ.get(f"VISUALIZER_{name}", default)


class ServerConfig:
    host:       str  = _env("HOST", "127.0.0.1")
    port:       int  = int(_env("PORT", "5000"))
    debug:      bool = _env("DEBUG", "0").lower() in ("1", "true", "yes")
    secret_key: str  = _env("SECRET_KEY", "") or secrets.token_hex(32)
    log_level:  str  = _env("LOG_LEVEL", "INFO").upper()
