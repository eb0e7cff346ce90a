import logging
import uuid

from flask import Flask, g, render_template, request
from dotenv import load_dotenv
from werkzeug.exceptions import BadRequest, NotFound

from app.lunchly.config import load_config
from app.lunchly.db import init_db, teardown_db_session
from app.lunchly import models  # noqa: F401  (registers all tables on Base.metadata)
from app.lunchly.routes import bp as routes_bp
from app.lunchly.modules.customers.views import bp as customers_bp


def create_app() -> Flask:
    load_dotenv()
    app = Flask(__name__, template_folder="templates", static_folder="static")
    app.config.from_mapping(load_config())
    app.logger.setLevel(getattr(logging, app.config["LOG_LEVEL"], logging.INFO))

    from app.lunchly.security import ensure_csrf_token, validate_csrf

    @app.context_processor
    def _inject_csrf() -> dict:
        return {"csrf_token": ensure_csrf_token()}

    @app.before_request
    def _assign_request_id():
        g.request_id = uuid.uuid4().hex

    @app.before_request
    def _csrf_guard():
        if request.path.startswith(("/static/", "/health", "/healthz")):
            return None
        ensure_csrf_token()
        if request.method in ("POST", "PUT", "PATCH", "DELETE"):
            if not validate_csrf(request):
                app.logger.warning("CSRF rejected: path=%s request_id=%s", request.path, g.request_id)
                return render_template("errors/400.html", messages=["CSRF token missing or invalid."]), 400
        return None

    # Production guardrails (fail fast with clear logs)
    env = (app.config.get("ENV") or "").strip().lower()
    if env in ("prod", "production"):
        if not app.config.get("DATABASE_URL") or str(app.config["DATABASE_URL"]).strip() == "":
            raise RuntimeError("DATABASE_URL is required in production.")
        if str(app.config["DATABASE_URL"]).startswith("sqlite"):
            raise RuntimeError("DATABASE_URL must be Postgres in production (not sqlite).")
        if not app.config.get("SECRET_KEY") or str(app.config["SECRET_KEY"]) in ("", "change-me"):
            raise RuntimeError("SECRET_KEY must be set to a strong value in production (not default).")

    init_db(app)

    app.register_blueprint(routes_bp)
    app.register_blueprint(customers_bp)

    app.teardown_appcontext(teardown_db_session)

    @app.errorhandler(400)
    def _err_400(e: BadRequest):
        messages = [f"{fe.field}: {fe.message}" for fe in getattr(e, "errors", [])] or [e.description]
        app.logger.info("Bad request: path=%s messages=%s", request.path, messages)
        return render_template("errors/400.html", messages=messages), 400

    @app.errorhandler(404)
    def _err_404(e: NotFound):
        app.logger.info("Not found: path=%s message=%s", request.path, e.description)
        return render_template("errors/404.html", message=e.description), 404

    @app.errorhandler(500)
    def _err_500(e):
        # Stack trace goes to the log; the page stays generic.
        app.logger.exception("Unhandled 500 (request_id=%s)", getattr(g, "request_id", None))
        return render_template("errors/500.html"), 500

    logging.getLogger(__name__).info("create_app() complete; app ready to serve")

    return app
