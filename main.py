"""
main.py — Dijkstra Trace Visualizer Flask API
==============================================
The web server that hosts the core for an external renderer.

Routes:
  POST /api/graph              – parse node/edge text, generate the trace
  POST /api/graph/random       – random graph, then the same pipeline
  POST /api/step/next          – advance one step
  POST /api/step/prev          – rewind one step
  POST /api/step/goto          – jump to step N
  POST /api/play               – start auto-play
  POST /api/pause              – stop auto-play
  POST /api/reset              – back to "not started"
  POST /api/config/speed       – set delay (ms) or a named preset
  GET  /api/state              – current playback state (poll this)
  GET  /api/trace              – full trace export

State management:
  Each browser session gets a Workspace (graph, start node, trace,
  playback controller) kept in process memory, keyed by an id stored
  in the Flask session.  At most MAX_WORKSPACES are kept; the least
  recently used one is dropped when a new session pushes past the cap.
  Auto-play advances when the client polls /api/state, which ticks the
  controller.
"""

import logging
import os
import random
import secrets
import threading
import time
import uuid
from collections import OrderedDict
from typing import Optional, Tuple

from flask import Flask, current_app, jsonify, request, session

from graph import Graph, GraphValidationError, generate_random_graph, parse_graph
from algorithms import Trace, generate_trace
from engine import PlaybackController, SPEED_PRESETS

logger = logging.getLogger(__name__)

MAX_WORKSPACES = 256


# ---------------------------------------------------------------------------
# Workspace — everything one user is looking at
# ---------------------------------------------------------------------------
class Workspace:
    """
    Attributes:
        graph       : The installed Graph (None until a valid submission).
        node_text   : Node field text that produced `graph`.
        edge_text   : Edge field text that produced `graph`.
        trace       : Trace for (graph, start node).
        controller  : PlaybackController driving `trace`.
    """

    def __init__(self, clock=time.monotonic):
        self.graph:      Optional[Graph] = None
        self.node_text:  str             = ""
        self.edge_text:  str             = ""
        self.trace:      Optional[Trace] = None
        self.controller: PlaybackController = PlaybackController(clock=clock)

    def install(self, node_text: str, edge_text: str, start: Optional[str] = None) -> Trace:
        """
        Parse → generate as one synchronous pipeline on LOCAL values.
        Raises GraphValidationError before anything is replaced.
        """
        graph = parse_graph(node_text, edge_text)
        start_node = start if isinstance(start, str) and start in graph else graph.nodes[0]
        trace = generate_trace(graph, start_node)

        self.graph, self.node_text, self.edge_text = graph, node_text, edge_text
        self.trace = trace
        self.controller.load(trace)
        return trace

    def to_dict(self) -> dict:
        return {
            "graph":      self.graph.to_dict() if self.graph else None,
            "node_text":  self.node_text,
            "edge_text":  self.edge_text,
            "start_node": self.trace.start_node if self.trace else None,
            "playback":   self.controller.state.to_dict(),
        }


# ---------------------------------------------------------------------------
# Session Workspace Helpers
# ---------------------------------------------------------------------------
def get_workspace() -> Workspace:
    """Workspace for the current session, created on first use (LRU-capped)."""
    store: "OrderedDict[str, Workspace]" = current_app.extensions["workspaces"]
    if "workspace_id" not in session:
        session["workspace_id"] = uuid.uuid4().hex
    wid = session["workspace_id"]

    if wid in store:
        store.move_to_end(wid)
        return store[wid]

    ws = store[wid] = Workspace(clock=current_app.config["PLAYBACK_CLOCK"])
    while len(store) > current_app.config["MAX_WORKSPACES"]:
        evicted, _ = store.popitem(last=False)
        logger.info("dropped least recently used workspace %s", evicted)
    return ws


def _lock() -> threading.Lock:
    return current_app.extensions["workspace_lock"]


def _payload() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _bad_request(message: str) -> Tuple[object, int]:
    return jsonify({"error": message}), 400


def _no_trace() -> Tuple[object, int]:
    return _bad_request("Load a graph first")


def _step_response(ws: Workspace):
    state = ws.controller.state
    return jsonify({
        "current_step": state.current_index,
        "total_steps":  state.total_steps,
        "is_auto_playing": state.is_auto_playing,
        "step": state.current_step.to_dict() if state.current_step else None,
    })


def create_app(config: Optional[dict] = None) -> Flask:
    app = Flask(__name__)
    app.config.from_mapping(
        SECRET_KEY=os.environ.get("DIJKSTRA_SECRET_KEY") or secrets.token_hex(32),
        PLAYBACK_CLOCK=time.monotonic,
        MAX_WORKSPACES=MAX_WORKSPACES,
    )
    if config:
        app.config.update(config)

    app.extensions["workspaces"] = OrderedDict()
    app.extensions["workspace_lock"] = threading.Lock()

    # -----------------------------------------------------------------------
    # API: Graph input
    # -----------------------------------------------------------------------
    @app.route("/api/graph", methods=["POST"])
    def api_graph():
        data = _payload()
        node_text = data.get("nodes", "")
        edge_text = data.get("edges")
        if edge_text is None:
            edge_text = ""
        if not isinstance(node_text, str) or not isinstance(edge_text, str):
            logger.warning("rejected graph input: nodes/edges are not text")
            return _bad_request("nodes and edges must be text fields")
        return _install(node_text, edge_text, data.get("start"))

    @app.route("/api/graph/random", methods=["POST"])
    def api_graph_random():
        data = _payload()
        seed = data.get("seed")
        if seed is not None and not isinstance(seed, (int, str)):
            return _bad_request("seed must be an integer or a string")
        rng = random.Random(seed) if seed is not None else None
        node_text, edge_text = generate_random_graph(rng)
        return _install(node_text, edge_text, data.get("start"))

    def _install(node_text: str, edge_text: str, start: Optional[str]):
        with _lock():
            ws = get_workspace()
            try:
                trace = ws.install(node_text, edge_text, start)
            except GraphValidationError as err:
                logger.warning("rejected graph input (%s): %s", err.kind, err)
                return jsonify(err.to_dict()), 400

            logger.info(
                "installed graph with %d nodes / %d edges; trace from %s has %d steps",
                ws.graph.node_count(), ws.graph.edge_count(), trace.start_node, len(trace),
            )
            return jsonify(ws.to_dict())

    # -----------------------------------------------------------------------
    # API: Step navigation
    # -----------------------------------------------------------------------
    @app.route("/api/step/next", methods=["POST"])
    def api_step_next():
        with _lock():
            ws = get_workspace()
            if ws.trace is None:
                return _no_trace()
            ws.controller.step_forward()
            return _step_response(ws)

    @app.route("/api/step/prev", methods=["POST"])
    def api_step_prev():
        with _lock():
            ws = get_workspace()
            if ws.trace is None:
                return _no_trace()
            ws.controller.step_backward()
            return _step_response(ws)

    @app.route("/api/step/goto", methods=["POST"])
    def api_step_goto():
        with _lock():
            ws = get_workspace()
            if ws.trace is None:
                return _no_trace()
            idx = _payload().get("index", 0)
            if not isinstance(idx, int) or not (-1 <= idx < len(ws.trace)):
                return _bad_request("Invalid step index")
            ws.controller.goto(idx)
            return _step_response(ws)

    # -----------------------------------------------------------------------
    # API: Auto-play
    # -----------------------------------------------------------------------
    @app.route("/api/play", methods=["POST"])
    def api_play():
        with _lock():
            ws = get_workspace()
            if ws.trace is None:
                return _no_trace()
            ws.controller.start_auto_play()
            return _step_response(ws)

    @app.route("/api/pause", methods=["POST"])
    def api_pause():
        with _lock():
            ws = get_workspace()
            ws.controller.stop_auto_play()
            return _step_response(ws)

    @app.route("/api/reset", methods=["POST"])
    def api_reset():
        with _lock():
            ws = get_workspace()
            ws.controller.reset()
            return _step_response(ws)

    # -----------------------------------------------------------------------
    # API: Config
    # -----------------------------------------------------------------------
    @app.route("/api/config/speed", methods=["POST"])
    def api_config_speed():
        data = _payload()
        with _lock():
            ws = get_workspace()
            if "preset" in data:
                preset = data["preset"]
                if not isinstance(preset, str) or preset not in SPEED_PRESETS:
                    return _bad_request(f"Unknown speed preset: {preset}")
                delay = ws.controller.set_speed(preset)
            else:
                try:
                    delay = ws.controller.set_delay(int(data.get("delay_ms", 0)))
                except (TypeError, ValueError):
                    return _bad_request("delay_ms must be an integer")
            return jsonify({"delay_ms": delay})

    # -----------------------------------------------------------------------
    # API: Read state
    # -----------------------------------------------------------------------
    @app.route("/api/state", methods=["GET"])
    def api_state():
        with _lock():
            ws = get_workspace()
            ws.controller.tick()
            return jsonify(ws.to_dict())

    @app.route("/api/trace", methods=["GET"])
    def api_trace():
        with _lock():
            ws = get_workspace()
            if ws.trace is None:
                return _no_trace()
            return jsonify(ws.trace.to_dict())

    return app


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    print("=" * 60)
    print("  Dijkstra Trace Visualizer")
    print("  Starting Flask server...")
    print("  API on http://localhost:5000/api/state")
    print("=" * 60)
    create_app().run(debug=True, port=5000)
