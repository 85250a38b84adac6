# routes/main_routes.py - the board page
from flask import Blueprint, render_template

from routes.board_routes import get_controller

main_bp = Blueprint("main", __name__)


@main_bp.route("/", methods=["GET"])
def index():
    """Home page: start/restart control, loading indicator and the grid"""
    controller = get_controller()
    return render_template("index.html", view=controller.view, state=controller.state.value)
