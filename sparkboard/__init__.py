import logging
import os
from flask import Flask
from flask_login import LoginManager
from config import config
import sentry_sdk
from sentry_sdk.integrations.flask import FlaskIntegration
from sparkboard.services.workspace import WorkspaceRegistry

# Initialize extensions
login_manager = LoginManager()
workspaces = WorkspaceRegistry()


def init_sentry(app):
    """Initialize Sentry error tracking"""
    sentry_dsn = app.config.get('SENTRY_DSN')

    if sentry_dsn:
        sentry_sdk.init(
            dsn=sentry_dsn,
            integrations=[
                FlaskIntegration(),
            ],
            # Release tracking for better debugging
            release=os.environ.get('SPARKBOARD_RELEASE', 'unknown'),

            # Environment tracking
            environment=app.config.get('FLASK_ENV', 'development'),

            # Don't send personally identifiable information (contacts carry e-mails and phones)
            send_default_pii=False,

            sample_rate=1.0,
        )
        app.logger.info("Sentry initialized for %s environment", app.config.get('FLASK_ENV', 'development'))
    else:
        app.logger.info("Sentry DSN not configured - error tracking disabled")


def init_logging(app):
    """Route the sparkboard package loggers through the configured level"""
    level = app.config.get('LOG_LEVEL', 'INFO')
    package_logger = logging.getLogger('sparkboard')
    package_logger.setLevel(level)
    if not package_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter('%(asctime)s %(levelname)s [%(name)s] %(message)s'))
        package_logger.addHandler(handler)


def create_app(config_name='default'):
    """Application factory pattern"""
    app = Flask(__name__)
    app.config.from_object(config[config_name])

    init_logging(app)

    # Initialize Sentry error tracking (do this early to catch initialization errors)
    init_sentry(app)

    # Initialize extensions
    login_manager.init_app(app)
    workspaces.init_app(app)

    @login_manager.user_loader
    def load_user(user_id):
        """Users only exist while their workspace session is open"""
        return workspaces.user_for(user_id)

    return app
