"""Flask entrypoint for the YouTube SEO analyzer."""

from __future__ import annotations

from flask import Flask
from werkzeug.middleware.proxy_fix import ProxyFix

from tools.formatting import format_number, format_relative_date
from tools.youtube_analyze_videos import score_class
from web.config import AppConfig
from web.routes.api import api_bp
from web.routes.pages import pages_bp


def create_app() -> Flask:
    app = Flask(__name__, template_folder="templates", static_folder="static")

    config = AppConfig.from_env()
    app.config.update(config.to_flask_config())
    app.logger.setLevel(app.config["LOG_LEVEL"])

    app.register_blueprint(pages_bp)
    app.register_blueprint(api_bp)

    @app.context_processor
    def inject_globals():
        return {
            "app_name": "YouTube SEO Analyzer",
            "env_name": app.config.get("APP_ENV", "development"),
            "lookback_months": app.config.get("LOOKBACK_MONTHS", 3),
        }

    @app.template_filter("compact_number")
    def compact_number(value) -> str:
        return format_number(value)

    @app.template_filter("relative_date")
    def relative_date(value: str) -> str:
        return format_relative_date(value)

    @app.template_filter("score_class")
    def score_class_filter(value) -> str:
        return score_class(int(value or 0))

    app.wsgi_app = ProxyFix(app.wsgi_app, x_proto=1, x_host=1)
    return app


app = create_app()


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=8080, debug=app.config.get("APP_ENV") != "production")
