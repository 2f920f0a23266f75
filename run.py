"""
Farm Home Backend server

Serves the REST API, the socket.io broadcast channel and the
/alerts/{role}/{userId} WebSocket feed from a single process.

Usage:
    python run.py
"""
import logging
import sys

from config import Config
from farmhome import create_app, socketio

# Configure logging to explicitly output to console
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout)
    ],
    force=True
)
logger = logging.getLogger(__name__)

app = create_app()

if __name__ == '__main__':
    logger.info(f"Server & WebSocket running on port {Config.PORT}")
    socketio.run(app, host=Config.HOST, port=Config.PORT, allow_unsafe_werkzeug=True)
