"""
Ops Board - shared kitchen status board
Application factory and startup
"""
import warnings
import os
import sys
import logging

if __name__ == '__main__' and os.environ.get('SOCKETIO_ASYNC_MODE', 'eventlet') == 'eventlet':
    # Must run before anything imports socket or threading
    import eventlet
    eventlet.monkey_patch()

# Suppress Eventlet and Flask-Limiter warnings
warnings.filterwarnings("ignore", category=DeprecationWarning, module="eventlet")
warnings.filterwarnings("ignore", category=UserWarning, module="flask_limiter")

import flask.cli
flask.cli.show_server_banner = lambda *args: None

from flask import Flask
import structlog

from constants import BUILD_VERSION, CONFIG_DIR
from settings import load_settings, build_flask_config
from db import db, migrate, init_db
from auth import login_manager, auth_blueprint
from extensions import socketio, limiter
from exceptions import register_exception_handlers
from rest_api import init_rest_api
from metrics import init_metrics
from socket_helper import BoardBroadcaster, register_socket_handlers
from services.board_service import BoardService
from jobs.scheduler import JobScheduler
from utils import ColoredFormatter, FilterRemoveDateFromWerkzeugLogs, get_or_create_secret_key

from routes.board import board_bp
from routes.items import items_bp
from routes.settings import settings_bp

# Logging configuration
formatter = ColoredFormatter(
    '[%(asctime)s.%(msecs)03d] %(levelname)s (%(module)s) %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S',
)
handler = logging.StreamHandler(sys.stdout)
handler.setFormatter(formatter)

logging.basicConfig(
    level=logging.INFO,
    handlers=[handler]
)

structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer() if os.environ.get('LOG_FORMAT') == 'json' else structlog.dev.ConsoleRenderer()
    ],
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    wrapper_class=structlog.stdlib.BoundLogger,
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger('main')

# Apply filter to hide date from http access logs
logging.getLogger('werkzeug').addFilter(FilterRemoveDateFromWerkzeugLogs())
logging.getLogger('alembic.runtime.migration').setLevel(logging.WARNING)
logging.getLogger('apscheduler').setLevel(logging.WARNING)


def create_app(config=None):
    """Application factory

    `config` is applied on top of the merged defaults/YAML/environment
    settings, which is how tests point the app at a throwaway database.
    """
    app = Flask(__name__)
    app.config.update(build_flask_config(load_settings()))
    if config:
        app.config.update(config)
    if not app.config.get('SECRET_KEY'):
        app.config['SECRET_KEY'] = get_or_create_secret_key(CONFIG_DIR)

    # Initialize components
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    limiter.init_app(app)

    # Register exception handlers
    register_exception_handlers(app)

    # Register blueprints
    app.register_blueprint(auth_blueprint)
    app.register_blueprint(board_bp)
    app.register_blueprint(items_bp)
    app.register_blueprint(settings_bp)

    # Initialize REST API docs and system namespace
    init_rest_api(app)

    # Initialize metrics
    init_metrics(app)

    # Initialize SocketIO
    socketio.init_app(app,
        cors_allowed_origins="*",
        async_mode=app.config.get('SOCKETIO_ASYNC_MODE'),
        message_queue=app.config.get('SOCKETIO_MESSAGE_QUEUE'),
        engineio_logger=False,
        logger=False
    )

    # Global initialization
    with app.app_context():
        init_db(app)

    broadcaster = BoardBroadcaster(socketio)
    app.extensions['opsboard'] = BoardService(broadcaster)
    register_socket_handlers(socketio, broadcaster)

    sweep_seconds = app.config.get('NOTE_EXPIRY_SWEEP_SECONDS') or 0
    if sweep_seconds > 0:
        JobScheduler().init_app(app, sweep_seconds)

    return app


if __name__ == '__main__':
    app = create_app()
    port = app.config['PORT']
    logger.info(f'Build Version: {BUILD_VERSION}')
    logger.info(f'Starting server on port {port}...')
    socketio.run(app, debug=False, use_reloader=False, host="0.0.0.0", port=port, allow_unsafe_werkzeug=True)
    logger.info('Shutting down server...')
