import sys
import logging
from flask import Flask
from dotenv import load_dotenv


def create_app():
    load_dotenv()
    app = Flask(__name__)

    # =========================================================
    # Logging: reuse gunicorn's handlers, plus stdout
    # =========================================================
    gunicorn_error = logging.getLogger("gunicorn.error")
    app.logger.handlers = list(gunicorn_error.handlers)
    app.logger.setLevel(logging.INFO)

    sh = logging.StreamHandler(sys.stdout)
    sh.setLevel(logging.INFO)
    sh.setFormatter(logging.Formatter("[%(asctime)s][%(levelname)s] %(message)s", "%H:%M:%S"))
    app.logger.addHandler(sh)

    # =========================================================
    # Blueprints
    # =========================================================
    from .routes.sync_dog import bp as sync_dog_bp
    from .routes.check_env import bp as check_env_bp

    app.register_blueprint(sync_dog_bp, url_prefix="/api")
    app.register_blueprint(check_env_bp, url_prefix="/api")

    # =========================================================
    # JSON error bodies for routing errors
    # =========================================================
    @app.errorhandler(405)
    def method_not_allowed(e):
        app.logger.warning("Method not allowed: %s", e)
        return {"error": "Method not allowed"}, 405

    @app.errorhandler(404)
    def not_found(e):
        return {"error": "Not found"}, 404

    @app.errorhandler(500)
    def internal_error(e):
        app.logger.error("Unhandled error: %s", getattr(e, "original_exception", e))
        return {"error": "Internal server error"}, 500

    # =========================================================
    # Health check
    # =========================================================
    @app.get("/health")
    def health():
        app.logger.info("Health check endpoint called")
        return {"ok": True}, 200

    return app
