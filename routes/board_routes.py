# routes/board_routes.py - starts a game and reveals clues
from flask import Blueprint, abort, current_app, flash, jsonify, redirect, request, url_for

from services.game_controller import GameBusy, GameController, GameState

board_bp = Blueprint("board", __name__)

LOAD_FAILED_MESSAGE = "Unable to load the board. Please try again."


def get_controller() -> GameController:
    return current_app.extensions["board_controller"]


def _wants_json() -> bool:
    return request.accept_mimetypes.best_match(["text/html", "application/json"]) == "application/json"


def _board_payload(controller: GameController) -> dict:
    payload = controller.view.snapshot()
    payload["state"] = controller.state.value
    return payload


@board_bp.route("/start", methods=["POST"])
def start():
    """
    Start (or restart) a game: fetch a fresh set of categories and render a new grid.
    HTML clients are redirected back to the board; JSON clients get the board itself.
    """
    controller = get_controller()
    try:
        loaded = controller.start()
    except GameBusy:
        if _wants_json():
            return jsonify({"ok": False, "error": "A board is already loading."}), 409
        return redirect(url_for("main.index"))

    if _wants_json():
        if not loaded:
            return jsonify({"ok": False, "error": LOAD_FAILED_MESSAGE}), 503
        return jsonify(_board_payload(controller))

    if not loaded:
        flash(LOAD_FAILED_MESSAGE, "error")
    return redirect(url_for("main.index"))


@board_bp.route("/clue/<int:row>/<int:col>", methods=["POST"])
def reveal(row, col):
    """Reveal the next stage of one clue and return that cell's new text."""
    controller = get_controller()
    if controller.state is not GameState.READY:
        return jsonify({"ok": False, "error": "No board is ready."}), 409
    if not controller.view.has_cell(row, col):
        abort(404)

    cell = controller.view.click(row, col)
    clue = controller.model.clue_at(row, col)
    return jsonify({"row": cell.row, "col": cell.col, "text": cell.text, "state": clue.reveal_state.value})


@board_bp.route("/board", methods=["GET"])
def board():
    return jsonify(_board_payload(get_controller()))
