# app.py - application factory for the trivia board
import logging
import os

from flask import Flask, flash, redirect, render_template, request, url_for
from flask_wtf import CSRFProtect
from flask_wtf.csrf import CSRFError, generate_csrf

from config import Config
from models import BoardModel
from services.board_view import BoardView
from services.clue_source import ClueSource
from services.game_controller import GameController

# Import blueprints
from routes.board_routes import board_bp
from routes.main_routes import main_bp


def create_app(test_config: dict | None = None):
    app = Flask(__name__, static_folder="static", template_folder="templates")
    app.config.from_object(Config)

    # Allow overriding config for testing
    if test_config:
        app.config.update(test_config)
        # Disable CSRF in tests to simplify posting
        if app.config.get("TESTING"):
            app.config["WTF_CSRF_ENABLED"] = False

    CSRFProtect(app)

    # One board per process: a single viewer drives it
    source = ClueSource(
        app.config["TRIVIA_API_URL"],
        pool_size=app.config["CATEGORY_POOL_SIZE"],
        clues_per_category=app.config["CLUES_PER_CATEGORY"],
        timeout=app.config["TRIVIA_TIMEOUT_SECONDS"],
    )
    model = BoardModel(app.config["NUM_CATEGORIES"], app.config["CLUES_PER_CATEGORY"])
    view = BoardView(placeholder=app.config["CLUE_PLACEHOLDER"])
    app.extensions["board_controller"] = GameController(
        source, model, view, max_workers=app.config["FETCH_WORKERS"] or None
    )

    # Register blueprints
    app.register_blueprint(main_bp)
    app.register_blueprint(board_bp)

    # Inject csrf_token() helper for templates without FlaskForm
    @app.context_processor
    def inject_csrf_token():
        return dict(csrf_token=generate_csrf)

    # Provide a cache-busting static_url helper that appends mtime as version
    @app.context_processor
    def inject_static_url_helper():
        def static_url(path: str):
            full = os.path.join(app.static_folder, path)
            v = int(os.path.getmtime(full)) if os.path.exists(full) else 0
            return url_for("static", filename=path, v=v)

        return dict(static_url=static_url)

    # Error handlers
    @app.errorhandler(404)
    def not_found(e):
        return render_template("404.html"), 404

    @app.errorhandler(500)
    def internal_error(e):
        app.logger.exception("Unhandled server error")
        return render_template("500.html"), 500

    @app.errorhandler(CSRFError)
    def handle_csrf_error(e):
        app.logger.info("csrf rejected path=%s reason=%s", request.path, e.description)
        flash("Your session expired or the form is invalid. Please try again.", "error")
        return redirect(request.referrer or url_for("main.index"))

    # Health check endpoint for uptime monitoring
    @app.route("/healthz", methods=["GET"])
    def healthz():
        controller = app.extensions["board_controller"]
        return {"status": "ok", "state": controller.state.value}, 200

    # Basic security headers
    @app.after_request
    def set_security_headers(resp):
        resp.headers.setdefault("X-Frame-Options", "DENY")
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")
        resp.headers.setdefault("Referrer-Policy", "strict-origin-when-cross-origin")
        resp.headers.setdefault("Content-Security-Policy", "default-src 'self'")
        return resp

    # Respect X-Forwarded-Proto behind a proxy
    @app.before_request
    def _detect_proxy_scheme():
        xf_proto = request.headers.get("X-Forwarded-Proto")
        if xf_proto:
            request.environ["wsgi.url_scheme"] = xf_proto

    # Basic logging configuration with LOG_LEVEL override
    log_level_name = os.getenv("LOG_LEVEL", "INFO").upper()
    level = getattr(logging, log_level_name, logging.INFO)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s %(message)s")
    app.logger.info(
        "startup log_level=%s api=%s board=%sx%s",
        log_level_name,
        app.config["TRIVIA_API_URL"],
        app.config["NUM_CATEGORIES"],
        app.config["CLUES_PER_CATEGORY"],
    )

    return app
