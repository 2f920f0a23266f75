import logging
from urllib.parse import urlparse, parse_qs, urlencode, urlunparse

from flask import Flask, jsonify
from flask_cors import CORS
from flask_sock import Sock
from flask_socketio import SocketIO
from pymongo import MongoClient
from werkzeug.exceptions import HTTPException

from config import Config

logger = logging.getLogger(__name__)

# Initialize MongoDB connection lazily
# The client is created on first use, not at import time
_mongodb_client = None
_db_instance = None
_mongodb_settings = {
    'uri': Config.MONGODB_URI,
    'db': Config.MONGODB_DB,
}

# socket.io broadcast channel (new_alert events)
socketio = SocketIO()

# Plain WebSocket routes (the alert feed)
sock = Sock()

def _clean_mongodb_uri(uri):
    """Strip ssl/tls query parameters from mongodb+srv:// URIs

    PyMongo enables TLS automatically for SRV connections; explicit
    ssl= or tls= parameters only produce warnings.
    """
    if not uri.startswith('mongodb+srv://'):
        return uri

    parsed = urlparse(uri)
    query_params = parse_qs(parsed.query, keep_blank_values=True)
    cleaned_params = {
        key: value_list for key, value_list in query_params.items()
        if key.lower() not in ['ssl', 'tls']
    }
    cleaned_query = urlencode(cleaned_params, doseq=True) if cleaned_params else ''
    return urlunparse((
        parsed.scheme,
        parsed.netloc,
        parsed.path,
        parsed.params,
        cleaned_query,
        parsed.fragment
    ))

def _get_mongodb_client():
    """Get or create MongoDB client"""
    global _mongodb_client

    if _mongodb_client is not None:
        return _mongodb_client

    uri = _mongodb_settings['uri']
    if not uri:
        raise ValueError("MONGODB_URI environment variable is required but not set.")

    try:
        cleaned_uri = _clean_mongodb_uri(uri)
        client_options = {
            'serverSelectionTimeoutMS': 30000,
            'connectTimeoutMS': 30000,
            'retryWrites': True,
            'retryReads': True,
        }
        logger.info(f"Creating MongoDB client with URI: {cleaned_uri[:20]}...")
        _mongodb_client = MongoClient(cleaned_uri, **client_options)
        return _mongodb_client
    except Exception as e:
        logger.error(f"Error creating MongoDB client: {e}")
        raise

def get_db():
    """Get the MongoDB database used by every collection"""
    global _db_instance

    if _db_instance is not None:
        return _db_instance

    client = _get_mongodb_client()
    _db_instance = client[_mongodb_settings['db']]
    return _db_instance

class LazyDB:
    """Lazy proxy for database that connects on first access"""
    def __getattr__(self, name):
        return getattr(get_db(), name)

    def __getitem__(self, key):
        """Support dictionary-style access like db['users']"""
        return get_db()[key]

db = LazyDB()

def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)

    _mongodb_settings['uri'] = app.config.get('MONGODB_URI')
    _mongodb_settings['db'] = app.config.get('MONGODB_DB')

    from .utils.serializers import MongoJSONProvider
    app.json = MongoJSONProvider(app)

    CORS(app, resources={r"/*": {"origins": app.config.get('CORS_ORIGINS', '*')}})
    socketio.init_app(
        app,
        cors_allowed_origins='*',
        ping_timeout=60,
        ping_interval=25
    )
    sock.init_app(app)

    # Initialize database on first request (indexes + seeded super admin)
    def initialize_database_once():
        if not getattr(app, '_db_initialized', False):
            # Set flag immediately so a failing init is not retried on every request
            app._db_initialized = True
            from .models import init_db, create_default_admin
            get_db()
            init_db()
            create_default_admin(app.config)

    app.before_request(initialize_database_once)

    # Register blueprints
    from .routes.auth_routes import auth_bp
    from .routes.resource_routes import create_resource_blueprint
    from .routes.farmhouse_routes import farmhouse_bp
    from .routes.farmhouse_users_routes import farmhouse_users_bp
    from .routes.alert_routes import alerts_bp
    from .routes.dashboard_routes import dashboard_bp
    from .routes.top_level_routes import top_level_bp
    from .alert_feed import alert_feed_bp
    from .models import RESOURCES

    app.register_blueprint(auth_bp)
    for resource in RESOURCES:
        app.register_blueprint(create_resource_blueprint(resource))
    app.register_blueprint(farmhouse_bp)
    app.register_blueprint(farmhouse_users_bp)
    app.register_blueprint(alerts_bp)
    app.register_blueprint(dashboard_bp)
    app.register_blueprint(top_level_bp)
    app.register_blueprint(alert_feed_bp)

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        """Render framework errors (404, 405, 413...) as JSON"""
        return jsonify({'error': e.description}), e.code

    return app
