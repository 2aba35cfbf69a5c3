from flask import Flask, jsonify

from .errors import register_error_handlers
from .extensions import rq, store


def create_app(test_config=None):
    """App factory: JSON API over the recruitment snapshot store.

    ``test_config`` is a mapping overlaid on ``config.Config``.
    """
    app = Flask(__name__)
    app.config.from_object('config.Config')
    if test_config:
        app.config.from_mapping(test_config)
    app.logger.setLevel(app.config.get('LOG_LEVEL', 'INFO'))
    app.json.sort_keys = False

    store.init_app(app)
    rq.init_app(app)
    register_error_handlers(app)

    from .blueprints.candidates import bp as candidates_bp
    from .blueprints.dashboard import bp as dashboard_bp
    from .blueprints.interviews import bp as interviews_bp
    from .blueprints.verifications import bp as verifications_bp
    app.register_blueprint(candidates_bp, url_prefix="/api/candidates")
    app.register_blueprint(interviews_bp, url_prefix="/api/interviews")
    app.register_blueprint(verifications_bp, url_prefix="/api/verifications")
    app.register_blueprint(dashboard_bp, url_prefix="/api/dashboard")

    @app.get('/health')
    def health():
        return jsonify({"status": "ok", "collections": store.counts()})

    return app
