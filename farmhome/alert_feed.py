"""Live alert feed over a plain WebSocket

Clients connect to /alerts/{role}/{userId}. Each connection gets the full
list of alerts visible to that user on connect, then the full recomputed
list after every change on the alerts collection. Each connection owns its
own change stream, closed when the client goes away.
"""
import json
import logging
import re

from flask import Blueprint, current_app, request
from simple_websocket import ConnectionClosed

from farmhome import sock
from farmhome.models.alert import Alert, WATCHED_OPERATIONS
from farmhome.utils.serializers import json_default

logger = logging.getLogger(__name__)

alert_feed_bp = Blueprint('alert_feed', __name__)

FEED_PATH = re.compile(r'^/alerts/(admin|manager|assistant)/(\w+)$', re.ASCII)


def parse_feed_path(path):
    """Return (role, user_id) for a feed path, or None if it is malformed"""
    match = FEED_PATH.match(path)
    if not match:
        return None
    return match.group(1), match.group(2)


class AlertFeed:
    """Pushes one user's visible alerts to one WebSocket connection"""

    def __init__(self, ws, role, user_id, poll_ms=1000, watch=None):
        self.ws = ws
        self.role = role
        self.user_id = user_id
        self.poll_ms = poll_ms
        self._watch = watch or Alert.watch

    def push(self):
        alerts = Alert.visible_to(self.role, self.user_id)
        self.ws.send(json.dumps(alerts, default=json_default))

    def run(self):
        """Push on connect and after every alert change until the client disconnects"""
        # The stream is opened before the first push so no change falls in between
        with self._watch(max_await_time_ms=self.poll_ms) as stream:
            try:
                self.push()
                while self.ws.connected and stream.alive:
                    change = stream.try_next()
                    if change is None:
                        continue
                    if change.get('operationType') in WATCHED_OPERATIONS:
                        self.push()
            except ConnectionClosed:
                logger.debug(f"Alert feed send after close: {self.role} {self.user_id}")


@sock.route('/alerts/<path:feed_path>', bp=alert_feed_bp)
def alert_feed(ws, feed_path):
    parsed = parse_feed_path(request.path)
    if parsed is None:
        logger.info(f"Rejected alert feed connection on {request.path}")
        ws.close()
        return

    role, user_id = parsed
    logger.info(f"Alert feed connected: {role} {user_id}")
    try:
        AlertFeed(ws, role, user_id, poll_ms=current_app.config.get('ALERT_FEED_POLL_MS', 1000)).run()
    finally:
        logger.info(f"Alert feed closed: {role} {user_id}")
