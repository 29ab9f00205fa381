"""Flask application factory."""
from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException
from vyaapar.database import init_db
import os


def create_app(config_object='config.Config'):
    """Create and configure the Flask application."""
    app = Flask(__name__)
    app.config.from_object(config_object)

    # Error tracking in production
    if app.config.get('SENTRY_DSN') and app.config.get('ENV') == 'production':
        import sentry_sdk
        from sentry_sdk.integrations.flask import FlaskIntegration

        sentry_sdk.init(
            dsn=app.config['SENTRY_DSN'],
            integrations=[FlaskIntegration()],
            traces_sample_rate=0.1,
            environment=app.config.get('ENV'),
            release=os.getenv('GIT_COMMIT', 'unknown')
        )

    # Prometheus metrics instrumentation
    from vyaapar.blueprints.metrics import setup_metrics_instrumentation
    setup_metrics_instrumentation(app)

    # Production: trust X-Forwarded-* from the reverse proxy
    if app.config.get('ENV') == 'production':
        from werkzeug.middleware.proxy_fix import ProxyFix
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_port=1, x_prefix=0)

    # Initialize database
    init_db(app)

    from vyaapar.middleware import load_current_user

    @app.before_request
    def before_request_handler():
        """Load the bearer-token user for each request."""
        load_current_user()

    # Error Handlers
    from vyaapar.exceptions import VyaaparError

    @app.errorhandler(VyaaparError)
    def handle_vyaapar_error(error):
        """Handle custom application exceptions."""
        if error.status_code >= 500:
            app.logger.error(f"VyaaparError [{error.status_code}]: {error.message}")
        else:
            app.logger.info(f"VyaaparError [{error.status_code}] {request.method} {request.path}: {error.message}")
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(404)
    def not_found_error(error):
        return jsonify({'status': 'error', 'message': 'Not Found'}), 404

    @app.errorhandler(HTTPException)
    def http_error(error):
        return jsonify({'status': 'error', 'message': error.description}), error.code

    @app.errorhandler(500)
    @app.errorhandler(Exception)
    def internal_error(error):
        import traceback
        app.logger.error(f"Unhandled Exception: {error}")
        app.logger.error(f"Traceback: {traceback.format_exc()}")
        return jsonify({'status': 'error', 'message': 'Internal Server Error'}), 500

    # Register blueprints
    from vyaapar.blueprints.main import main_bp
    from vyaapar.blueprints.auth import auth_bp
    from vyaapar.blueprints.catalog import catalog_bp
    from vyaapar.blueprints.cart import cart_bp
    from vyaapar.blueprints.retailer import retailer_bp
    from vyaapar.blueprints.orders import orders_bp
    from vyaapar.blueprints.admin import admin_bp
    from vyaapar.blueprints.attendance import attendance_bp
    from vyaapar.blueprints.dashboard import dashboard_bp
    from vyaapar.blueprints.metrics import metrics_bp

    app.register_blueprint(main_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(catalog_bp)
    app.register_blueprint(cart_bp)
    app.register_blueprint(retailer_bp)
    app.register_blueprint(orders_bp)
    app.register_blueprint(admin_bp)
    app.register_blueprint(attendance_bp)
    app.register_blueprint(dashboard_bp)
    app.register_blueprint(metrics_bp)

    # CLI commands
    from vyaapar.cli_commands import init_cli_commands
    init_cli_commands(app)

    return app
