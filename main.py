"""
main.py — Algorithm Stepper Flask App
======================================
JSON API in front of the step-generation engine.

Routes:
  GET  /api/algorithms                  – registry cards (?category= / ?tag=)
  GET  /api/algorithms/<key>            – one card, with pseudocode
  POST /api/run                         – generate a run, returns run_id + step 0
  GET  /api/runs/<run_id>               – current playback state
  POST /api/runs/<run_id>/next          – advance one step
  POST /api/runs/<run_id>/prev          – rewind one step
  POST /api/runs/<run_id>/goto          – jump to step N
  POST /api/runs/<run_id>/play          – toggle play/pause
  POST /api/runs/<run_id>/speed         – set playback speed preset
  GET  /api/runs/<run_id>/export        – every step, serialised
  POST /api/compare                     – run two algorithms on one input

  Interactive structures (one of each per browser session):
  GET  /api/bfs                         – explorer state
  POST /api/bfs/<action>                – step | undo | reset | run
  POST /api/bfs/start                   – choose start node
  POST /api/bfs/nodes                   – add node
  POST /api/bfs/nodes/<id>/delete       – remove node
  POST /api/bfs/nodes/<id>/move         – reposition node
  POST /api/bfs/edges                   – toggle edge
  GET  /api/btree, POST /api/btree/<action>   – new | insert | delete | search | random | reset
  GET  /api/heap,  POST /api/heap/<action>    – new | insert | extract | clear
  GET  /api/trie,  POST /api/trie/<action>    – insert | search | clear
  GET  /api/rbtree, POST /api/rbtree/<action> – insert | search | random | reset
  GET  /api/stack,  POST /api/stack/<action>  – push | pop | peek | clear
  GET  /api/queue,  POST /api/queue/<action>  – enqueue | dequeue | peek | clear
  POST /api/life/new, POST /api/life/advance  – Game of Life simulation

State management:
  Runs live in an in-memory dict keyed by run id (oldest evicted first).
  Interactive structures live in an in-memory dict keyed by a random id
  kept in the Flask session cookie, least recently used evicted past
  MAX_SESSIONS.  Single process only; a shared store
  would be needed behind several workers.

Errors:
  ValueError (bad input, domain violations) → 400 {"error": ...}
  unknown algorithm / run id                → 404 {"error": ...}
"""

import logging
import secrets
from collections import OrderedDict
from dataclasses import asdict
from typing import Any, Dict, Optional

from flask import Flask, jsonify, request, session

from algorithms import algorithms_by_category, algorithms_by_tag, get_algorithm, list_algorithms
from algorithms.game_of_life import LifeSimulation
from algorithms.step import step_to_dict
from config import ServerConfig
from engine import BfsExplorer, Recorder, compare
from trees import BinaryHeap, BTree, Queue, RedBlackTree, Stack, Trie

log = logging.getLogger(__name__)

MAX_RUNS     = 64
MAX_SESSIONS = 256


app = Flask(__name__)
app.secret_key = ServerConfig.secret_key

_RUNS:     "OrderedDict[str, Recorder]"       = OrderedDict()
_SESSIONS: "OrderedDict[str, Dict[str, Any]]" = OrderedDict()


class NotFound(Exception):
    pass


# ---------------------------------------------------------------------------
# Error handlers
# ---------------------------------------------------------------------------
@app.errorhandler(ValueError)
def handle_value_error(exc):
    log.warning("bad request on %s: %s", request.path, exc)
    return jsonify({"error": str(exc)}), 400


@app.errorhandler(NotFound)
def handle_not_found(exc):
    return jsonify({"error": str(exc)}), 404


# ---------------------------------------------------------------------------
# Session State Helpers
# ---------------------------------------------------------------------------
def body() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def session_state() -> Dict[str, Any]:
    """Per-browser interactive structures, created on first use."""
    sid = session.get("sid")
    if sid is None or sid not in _SESSIONS:
        sid = secrets.token_hex(8)
        session["sid"] = sid
        _SESSIONS[sid] = {}
        while len(_SESSIONS) > MAX_SESSIONS:
            _SESSIONS.popitem(last=False)
    else:
        _SESSIONS.move_to_end(sid)
    return _SESSIONS[sid]


def get_structure(name: str, factory):
    state = session_state()
    if name not in state:
        state[name] = factory()
    return state[name]


def get_run(run_id: str) -> Recorder:
    rec = _RUNS.get(run_id)
    if rec is None:
        raise NotFound(f"Unknown run {run_id}")
    return rec


def store_run(rec: Recorder) -> str:
    run_id = secrets.token_hex(8)
    _RUNS[run_id] = rec
    while len(_RUNS) > MAX_RUNS:
        _RUNS.popitem(last=False)
    return run_id


def run_state(run_id: str, rec: Recorder) -> Dict[str, Any]:
    stepper = rec.stepper
    step = stepper.current_step
    return {
        "run_id":       run_id,
        "algo_key":     rec.algo_info.key if rec.algo_info else "",
        "current_step": stepper.current_idx,
        "total_steps":  stepper.total_steps,
        "state":        stepper.state.value,
        "speed":        stepper.speed,
        "step":         step_to_dict(step) if step else None,
    }


def int_field(data: Dict[str, Any], name: str, default: Optional[int] = None) -> int:
    if name not in data:
        if default is not None:
            return default
        raise ValueError(f"Missing field '{name}'")
    try:
        return int(data[name])
    except (TypeError, ValueError, OverflowError):
        raise ValueError(f"Field '{name}' must be an integer")


# ---------------------------------------------------------------------------
# API: Registry
# ---------------------------------------------------------------------------
@app.route("/api/algorithms")
def api_algorithms():
    category = request.args.get("category")
    tag      = request.args.get("tag")
    if category:
        algos = algorithms_by_category(category)
    elif tag:
        algos = algorithms_by_tag(tag)
    else:
        algos = list_algorithms()
    return jsonify([a.to_dict() for a in algos])


@app.route("/api/algorithms/<key>")
def api_algorithm(key):
    info = get_algorithm(key)
    if info is None:
        raise NotFound(f"Unknown algorithm {key}")
    return jsonify(info.to_dict())


# ---------------------------------------------------------------------------
# API: Run Algorithm
# ---------------------------------------------------------------------------
@app.route("/api/run", methods=["POST"])
def api_run():
    data = body()
    algo_key = data.get("algo_key", "")
    options  = data.get("options") or {}
    if not isinstance(options, dict):
        raise ValueError("'options' must be an object")

    rec = Recorder()
    try:
        rec.start(algo_key, data.get("input"), **options)
    except KeyError:
        raise NotFound(f"Unknown algorithm {algo_key}")
    rec.run_to_completion()
    rec.stepper.set_speed(data.get("speed", "medium"))

    run_id = store_run(rec)
    payload = run_state(run_id, rec)
    payload["metrics"] = asdict(rec.metrics)
    return jsonify(payload)


@app.route("/api/runs/<run_id>")
def api_run_state(run_id):
    return jsonify(run_state(run_id, get_run(run_id)))


# ---------------------------------------------------------------------------
# API: Step Navigation
# ---------------------------------------------------------------------------
@app.route("/api/runs/<run_id>/next", methods=["POST"])
def api_step_next(run_id):
    rec = get_run(run_id)
    if not rec.stepper.next_step():
        return jsonify({"error": "Already at last step"}), 400
    return jsonify(run_state(run_id, rec))


@app.route("/api/runs/<run_id>/prev", methods=["POST"])
def api_step_prev(run_id):
    rec = get_run(run_id)
    if not rec.stepper.prev_step():
        return jsonify({"error": "Already at first step"}), 400
    return jsonify(run_state(run_id, rec))


@app.route("/api/runs/<run_id>/goto", methods=["POST"])
def api_step_goto(run_id):
    rec = get_run(run_id)
    idx = int_field(body(), "index")
    if not rec.stepper.goto_step(idx):
        return jsonify({"error": "Invalid step index"}), 400
    return jsonify(run_state(run_id, rec))


@app.route("/api/runs/<run_id>/play", methods=["POST"])
def api_step_play(run_id):
    rec = get_run(run_id)
    rec.stepper.toggle_play()
    return jsonify(run_state(run_id, rec))


@app.route("/api/runs/<run_id>/speed", methods=["POST"])
def api_step_speed(run_id):
    rec = get_run(run_id)
    rec.stepper.set_speed(body().get("speed", "medium"))
    return jsonify({"speed": rec.stepper.speed})


@app.route("/api/runs/<run_id>/export")
def api_run_export(run_id):
    return jsonify(get_run(run_id).export())


# ---------------------------------------------------------------------------
# API: Comparison Mode
# ---------------------------------------------------------------------------
@app.route("/api/compare", methods=["POST"])
def api_compare():
    data = body()
    recorders = []
    for side in ("left", "right"):
        key = data.get(side, "")
        rec = Recorder()
        try:
            rec.start(key, data.get("input"))
        except KeyError:
            raise NotFound(f"Unknown algorithm {key}")
        rec.run_to_completion()
        recorders.append(rec)
    return jsonify(asdict(compare(*recorders)))


# ---------------------------------------------------------------------------
# API: Interactive BFS
# ---------------------------------------------------------------------------
def bfs_reply(explorer: BfsExplorer, notice):
    status = 200 if notice.ok else 400
    return jsonify({"notice": notice.to_dict(), "bfs": explorer.to_dict()}), status


@app.route("/api/bfs")
def api_bfs_state():
    return jsonify(get_structure("bfs", BfsExplorer).to_dict())


@app.route("/api/bfs/<action>", methods=["POST"])
def api_bfs_action(action):
    explorer = get_structure("bfs", BfsExplorer)
    actions = {
        "step":  explorer.step,
        "undo":  explorer.undo,
        "reset": explorer.reset,
        "run":   explorer.run_to_completion,
    }
    if action == "start":
        return bfs_reply(explorer, explorer.set_start(int_field(body(), "node")))
    if action not in actions:
        raise NotFound(f"Unknown BFS action {action}")
    return bfs_reply(explorer, actions[action]())


@app.route("/api/bfs/nodes", methods=["POST"])
def api_bfs_add_node():
    data = body()
    explorer = get_structure("bfs", BfsExplorer)
    return bfs_reply(explorer, explorer.add_node(float(data.get("x", 50.0)), float(data.get("y", 50.0))))


@app.route("/api/bfs/nodes/<int:node_id>/delete", methods=["POST"])
def api_bfs_remove_node(node_id):
    explorer = get_structure("bfs", BfsExplorer)
    return bfs_reply(explorer, explorer.remove_node(node_id))


@app.route("/api/bfs/nodes/<int:node_id>/move", methods=["POST"])
def api_bfs_move_node(node_id):
    data = body()
    explorer = get_structure("bfs", BfsExplorer)
    return bfs_reply(explorer, explorer.move_node(node_id, float(data.get("x", 50.0)), float(data.get("y", 50.0))))


@app.route("/api/bfs/edges", methods=["POST"])
def api_bfs_toggle_edge():
    data = body()
    explorer = get_structure("bfs", BfsExplorer)
    return bfs_reply(explorer, explorer.toggle_edge(int_field(data, "a"), int_field(data, "b")))


# ---------------------------------------------------------------------------
# API: Trees
# ---------------------------------------------------------------------------
def tree_reply(name: str, structure, result):
    status = 200 if result.ok else 400
    payload = result.to_dict()
    payload[name] = structure.to_dict()
    return jsonify(payload), status


@app.route("/api/btree")
def api_btree_state():
    tree = get_structure("btree", BTree)
    return jsonify({"btree": tree.to_dict(), "stats": asdict(tree.stats())})


@app.route("/api/btree/<action>", methods=["POST"])
def api_btree_action(action):
    data = body()
    if action == "new":
        tree = BTree(int_field(data, "min_degree", 2))
        session_state()["btree"] = tree
        return jsonify({"btree": tree.to_dict(), "stats": asdict(tree.stats())})

    tree = get_structure("btree", BTree)
    if action == "insert":
        result = tree.insert(int_field(data, "key"))
    elif action == "delete":
        result = tree.delete(int_field(data, "key"))
    elif action == "search":
        result = tree.search(int_field(data, "key"))
    elif action == "random":
        result = tree.insert_random()
    elif action == "reset":
        notice = tree.reset()
        return jsonify({"notice": notice.to_dict(), "btree": tree.to_dict()})
    else:
        raise NotFound(f"Unknown B-Tree action {action}")
    return tree_reply("btree", tree, result)


@app.route("/api/heap")
def api_heap_state():
    return jsonify(get_structure("heap", BinaryHeap).to_dict())


@app.route("/api/heap/<action>", methods=["POST"])
def api_heap_action(action):
    data = body()
    if action == "new":
        heap = BinaryHeap(data.get("kind", "max"))
        session_state()["heap"] = heap
        return jsonify(heap.to_dict())

    heap = get_structure("heap", BinaryHeap)
    if action == "insert":
        result = heap.insert(data.get("value"))
    elif action == "extract":
        result = heap.extract_root()
    elif action == "clear":
        return jsonify({"notice": heap.clear().to_dict(), "heap": heap.to_dict()})
    else:
        raise NotFound(f"Unknown heap action {action}")
    return tree_reply("heap", heap, result)


@app.route("/api/trie")
def api_trie_state():
    trie = get_structure("trie", Trie)
    prefix = request.args.get("prefix")
    if prefix is not None:
        return jsonify({"prefix": prefix, "words": trie.words_with_prefix(prefix)})
    return jsonify(trie.to_dict())


@app.route("/api/trie/<action>", methods=["POST"])
def api_trie_action(action):
    trie = get_structure("trie", Trie)
    word = str(body().get("word", ""))
    if action == "insert":
        result = trie.insert(word)
    elif action == "search":
        result = trie.search(word)
    elif action == "clear":
        return jsonify({"notice": trie.clear().to_dict(), "trie": trie.to_dict()})
    else:
        raise NotFound(f"Unknown trie action {action}")
    return tree_reply("trie", trie, result)


@app.route("/api/rbtree")
def api_rbtree_state():
    return jsonify(get_structure("rbtree", RedBlackTree).to_dict())


@app.route("/api/rbtree/<action>", methods=["POST"])
def api_rbtree_action(action):
    tree = get_structure("rbtree", RedBlackTree)
    data = body()
    if action == "insert":
        result = tree.insert(int_field(data, "value"))
    elif action == "search":
        result = tree.search(int_field(data, "value"))
    elif action == "random":
        result = tree.insert_random()
    elif action == "reset":
        return jsonify({"notice": tree.reset().to_dict(), "rbtree": tree.to_dict()})
    else:
        raise NotFound(f"Unknown red-black tree action {action}")
    return tree_reply("rbtree", tree, result)


def linear_reply(name: str, structure, notice):
    status = 200 if notice.ok else 400
    return jsonify({"notice": notice.to_dict(), name: structure.to_dict()}), status


@app.route("/api/stack")
def api_stack_state():
    return jsonify(get_structure("stack", Stack).to_dict())


@app.route("/api/stack/<action>", methods=["POST"])
def api_stack_action(action):
    stack = get_structure("stack", Stack)
    if action == "push":
        result = stack.push(body().get("value"))
    elif action == "pop":
        result = stack.pop()
    elif action == "peek":
        result = stack.peek()
    elif action == "clear":
        return linear_reply("stack", stack, stack.clear())
    else:
        raise NotFound(f"Unknown stack action {action}")
    return tree_reply("stack", stack, result)


@app.route("/api/queue")
def api_queue_state():
    return jsonify(get_structure("queue", Queue).to_dict())


@app.route("/api/queue/<action>", methods=["POST"])
def api_queue_action(action):
    queue = get_structure("queue", Queue)
    if action == "enqueue":
        result = queue.enqueue(body().get("value"))
    elif action == "dequeue":
        result = queue.dequeue()
    elif action == "peek":
        result = queue.peek()
    elif action == "clear":
        return linear_reply("queue", queue, queue.clear())
    else:
        raise NotFound(f"Unknown queue action {action}")
    return tree_reply("queue", queue, result)


# ---------------------------------------------------------------------------
# API: Game of Life
# ---------------------------------------------------------------------------
@app.route("/api/life/new", methods=["POST"])
def api_life_new():
    data = body()
    sim = LifeSimulation(
        width=int_field(data, "width", 30),
        height=int_field(data, "height", 20),
        density=float(data.get("density", 0.3)),
        seed=data.get("seed"),
        grid=data.get("grid"),
    )
    session_state()["life"] = sim
    return jsonify(step_to_dict(sim.current))


@app.route("/api/life/advance", methods=["POST"])
def api_life_advance():
    sim = session_state().get("life")
    if sim is None:
        raise NotFound("No simulation running")
    return jsonify(step_to_dict(sim.advance()))


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
def configure_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, ServerConfig.log_level, logging.INFO),
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    )


if __name__ == "__main__":
    configure_logging()
    log.info("Algorithm Stepper listening on http://%s:%d", ServerConfig.host, ServerConfig.port)
    app.run(debug=ServerConfig.debug, host=ServerConfig.host, port=ServerConfig.port)
