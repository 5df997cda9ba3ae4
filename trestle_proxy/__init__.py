import logging
from typing import Optional
from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import HTTPException
from .config import ProxyConfig, init_logging, warn_if_missing_secrets
from .routes import bp as routes_bp

def create_app(config: Optional[ProxyConfig] = None) -> Flask:
    config = config or ProxyConfig.from_env()
    init_logging(config)
    warn_if_missing_secrets(config)
    app = Flask(__name__)
    app.config["PROXY"] = config
    CORS(app, resources={r"/api/*": {"origins": config.cors_origins}})
    app.register_blueprint(routes_bp)

    @app.errorhandler(Exception)
    def _unhandled(e):
        if isinstance(e, HTTPException):
            return e
        logging.exception("Unhandled error: %s", e)
        return jsonify(error="Internal server error"), 500

    return app
