import os
from dotenv import load_dotenv

load_dotenv()

# Get MongoDB URI at module level to avoid issues during class definition
def _get_mongodb_uri():
    """Get MongoDB URI, falling back to a local server for development"""
    _mongodb_uri = os.environ.get('MONGODB_URI')
    if not _mongodb_uri:
        _mongodb_uri = 'mongodb://localhost:27017/'
    return _mongodb_uri

class Config:
    # Flask settings
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production'

    # MongoDB settings
    MONGODB_URI = _get_mongodb_uri()
    MONGODB_DB = os.environ.get('MONGODB_DB') or 'farmhome'

    # JWT settings
    JWT_SECRET = os.environ.get('JWT_SECRET') or 'jwt-secret-change-in-production'
    JWT_ALGORITHM = 'HS256'
    JWT_EXPIRATION_HOURS = int(os.environ.get('JWT_EXPIRATION_HOURS', 24))

    # Front-end and CORS
    FRONT_END_URL = os.environ.get('FRONT_END_URL')
    CORS_ORIGINS = os.environ.get('CORS_ORIGINS') or '*'

    # Pagination
    DEFAULT_PAGE_LIMIT = 10

    # Alert feed: how long a change stream waits before re-checking the client socket
    ALERT_FEED_POLL_MS = int(os.environ.get('ALERT_FEED_POLL_MS', 1000))

    # Seeded super admin (skipped unless both email and password are set)
    SUPER_ADMIN_EMAIL = os.environ.get('SUPER_ADMIN_EMAIL')
    SUPER_ADMIN_PASSWORD = os.environ.get('SUPER_ADMIN_PASSWORD')
    SUPER_ADMIN_NAME = os.environ.get('SUPER_ADMIN_NAME') or 'Super Admin'

    # Server settings
    HOST = os.environ.get('HOST') or '0.0.0.0'
    PORT = int(os.environ.get('PORT', 5000))

    # Application settings
    MAX_CONTENT_LENGTH = 16 * 1024 * 1024  # 16MB max upload size
