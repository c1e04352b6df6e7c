"""
main.py — BST Visualizer Flask App
===================================
The web server that exposes the animation core to a front end.

Routes:
  GET  /api/state              – snapshot + log + playback settings
  GET  /api/animations         – registry: keys, labels, pseudocode
  POST /api/insert             – start insert animation     {value}
  POST /api/search             – start search animation     {value}
  POST /api/traverse           – start traversal animation  {order}
  POST /api/clear_highlights   – reset every node's flags
  POST /api/clear_tree         – discard tree and log
  POST /api/sample             – load the sample tree
  POST /api/step/next          – apply one step, returns the frame
  POST /api/step/finish        – run the current animation to the end
  POST /api/viewport           – relayout for a viewport width {width}
  POST /api/config/speed       – choose the pacing preset {speed}

State management:
  A running animation is a live generator over a live tree, so it
  cannot round-trip through the Flask session.  Each app instance owns
  one Sequencer in `app.extensions["bstviz"]`; requests touching it are
  serialised by a lock.  The browser paces playback by calling
  /api/step/next every `delay` seconds.

Configuration:
  DEFAULTS below, then BSTVIZ_* environment variables
  (e.g. BSTVIZ_LOG_SIZE=7), then the mapping passed to create_app().
"""

from flask import Blueprint, Flask, current_app, jsonify, request
from dataclasses import dataclass, field
from threading import Lock
import argparse
import logging
import secrets
import sys
import os
import time

# add project root to path so imports work
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from animations import list_animations
from engine import CommandResult, Sequencer, SequencerConfig, SPEED_PRESETS, Stepper


DEFAULTS = {
    "SPEED":          "medium",
    "LOG_SIZE":       5,
    "VIEWPORT_WIDTH": 1200,
    "SEED_SAMPLE":    True,
}


@dataclass
class Visualizer:
    sequencer: Sequencer
    speed:     str  = "medium"
    lock:      Lock = field(default_factory=Lock)


api = Blueprint("api", __name__, url_prefix="/api")


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------
def create_app(config=None) -> Flask:
    app = Flask(__name__)
    app.secret_key = secrets.token_hex(32)
    app.config.from_mapping(DEFAULTS)
    app.config.from_prefixed_env("BSTVIZ")
    if config:
        app.config.update(config)

    speed = app.config["SPEED"]
    if not isinstance(speed, str) or speed not in SPEED_PRESETS:
        app.logger.warning("unknown speed preset %r, using medium", speed)
        speed = "medium"

    sequencer = Sequencer(SequencerConfig(
        log_size=int(app.config["LOG_SIZE"]),
        viewport_width=float(app.config["VIEWPORT_WIDTH"]),
    ))
    if app.config["SEED_SAMPLE"]:
        sequencer.load_sample()

    app.extensions["bstviz"] = Visualizer(sequencer=sequencer, speed=speed)
    app.register_blueprint(api)
    return app


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def get_visualizer() -> Visualizer:
    return current_app.extensions["bstviz"]


def get_state(viz: Visualizer) -> dict:
    """Return current app state as a dict."""
    return {
        "snapshot": viz.sequencer.snapshot(),
        "busy":     viz.sequencer.busy,
        "speed":    viz.speed,
        "delay":    SPEED_PRESETS[viz.speed],
    }


def json_body():
    """The request's JSON object, or None if it has none."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else None


def command_response(viz: Visualizer, command: str, result: CommandResult):
    current_app.logger.debug("%s → %s", command, result.value)
    return jsonify({"result": result.value, **get_state(viz)})


# ---------------------------------------------------------------------------
# API: State
# ---------------------------------------------------------------------------
@api.route("/state", methods=["GET"])
def api_state():
    viz = get_visualizer()
    with viz.lock:
        return jsonify(get_state(viz))


@api.route("/animations", methods=["GET"])
def api_animations():
    return jsonify({"animations": [a.to_dict() for a in list_animations()]})


# ---------------------------------------------------------------------------
# API: Commands
# ---------------------------------------------------------------------------
@api.route("/insert", methods=["POST"])
def api_insert():
    data = json_body()
    if data is None:
        return jsonify({"error": "Expected a JSON body with 'value'"}), 400
    viz = get_visualizer()
    with viz.lock:
        result = viz.sequencer.insert(data.get("value"), data.get("clear_first"))
        return command_response(viz, "insert", result)


@api.route("/search", methods=["POST"])
def api_search():
    data = json_body()
    if data is None:
        return jsonify({"error": "Expected a JSON body with 'value'"}), 400
    viz = get_visualizer()
    with viz.lock:
        result = viz.sequencer.search(data.get("value"), data.get("clear_first"))
        return command_response(viz, "search", result)


@api.route("/traverse", methods=["POST"])
def api_traverse():
    data = json_body()
    if data is None:
        return jsonify({"error": "Expected a JSON body with 'order'"}), 400
    viz = get_visualizer()
    with viz.lock:
        result = viz.sequencer.traverse(data.get("order"), data.get("clear_first"))
        return command_response(viz, "traverse", result)


@api.route("/clear_highlights", methods=["POST"])
def api_clear_highlights():
    viz = get_visualizer()
    with viz.lock:
        return command_response(viz, "clear_highlights", viz.sequencer.clear_highlights())


@api.route("/clear_tree", methods=["POST"])
def api_clear_tree():
    viz = get_visualizer()
    with viz.lock:
        return command_response(viz, "clear_tree", viz.sequencer.clear_tree())


@api.route("/sample", methods=["POST"])
def api_sample():
    viz = get_visualizer()
    with viz.lock:
        return command_response(viz, "sample", viz.sequencer.load_sample())


# ---------------------------------------------------------------------------
# API: Step Navigation
# ---------------------------------------------------------------------------
@api.route("/step/next", methods=["POST"])
def api_step_next():
    viz = get_visualizer()
    with viz.lock:
        frame = viz.sequencer.advance()
        if frame is None:
            return jsonify({"error": "No animation is running"}), 400
        return jsonify({"frame": frame.to_dict(), **get_state(viz)})


@api.route("/step/finish", methods=["POST"])
def api_step_finish():
    viz = get_visualizer()
    with viz.lock:
        frames = viz.sequencer.drain()
        return jsonify({"frames": [f.to_dict() for f in frames], **get_state(viz)})


# ---------------------------------------------------------------------------
# API: Config Changes
# ---------------------------------------------------------------------------
@api.route("/viewport", methods=["POST"])
def api_viewport():
    data = json_body()
    if data is None:
        return jsonify({"error": "Expected a JSON body with 'width'"}), 400
    viz = get_visualizer()
    with viz.lock:
        return command_response(viz, "viewport", viz.sequencer.set_viewport(data.get("width")))


@api.route("/config/speed", methods=["POST"])
def api_config_speed():
    data = json_body() or {}
    speed = data.get("speed", "medium")
    if not isinstance(speed, str) or speed not in SPEED_PRESETS:
        return jsonify({"error": f"Unknown speed: {speed}"}), 400
    viz = get_visualizer()
    with viz.lock:
        viz.speed = speed
    return jsonify({"speed": speed, "delay": SPEED_PRESETS[speed]})


app = create_app()


# ---------------------------------------------------------------------------
# Terminal demo — paced by the Stepper instead of a browser
# ---------------------------------------------------------------------------
def run_demo(values, speed="fast", out=print, sleep=time.sleep):
    """Animate inserting `values` into the sample tree, then an inorder walk."""
    sequencer = Sequencer()
    sequencer.load_sample()

    def show(frame):
        if frame.step.message:
            out(frame.step.message)

    stepper = Stepper(sequencer, on_frame=show, speed=speed)

    frames = []
    for value in values:
        if sequencer.insert(value) is CommandResult.ACCEPTED:
            frames.extend(stepper.run(sleep=sleep))
    sequencer.traverse("inorder")
    frames.extend(stepper.run(sleep=sleep))
    return frames


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")

    parser = argparse.ArgumentParser(description="BST Visualizer")
    parser.add_argument("--demo", nargs="*", metavar="VALUE", help="Animate inserts in the terminal instead of serving")
    parser.add_argument("--speed", default="fast", choices=sorted(SPEED_PRESETS))
    args = parser.parse_args()

    if args.demo is not None:
        run_demo(args.demo or [65, 35], speed=args.speed)
    else:
        app.logger.info("BST Visualizer API on http://localhost:5000/api/state")
        app.run(debug=True, port=5000)
