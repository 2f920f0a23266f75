import json

import pytest
from simple_websocket import ConnectionClosed

from farmhome.alert_feed import AlertFeed, alert_feed, parse_feed_path
from farmhome.models.alert import Alert
from farmhome.models.farmhouse import Farmhouse


class FakeWebSocket:
    def __init__(self):
        self.connected = True
        self.sent = []
        self.closed = False

    def send(self, data):
        self.sent.append(json.loads(data))

    def close(self):
        self.closed = True
        self.connected = False


class FakeChangeStream:
    """Replays scripted change events, then reports the client as gone"""

    def __init__(self, ws, changes):
        self.ws = ws
        self.changes = list(changes)
        self.alive = True
        self.closed = False
        self.max_await_time_ms = None

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.closed = True
        return False

    def try_next(self):
        if not self.changes:
            self.ws.connected = False
            return None
        change = self.changes.pop(0)
        if callable(change):
            return change()
        return change


def _feed(ws, stream, role='admin', user_id='a1'):
    def watch(max_await_time_ms=None):
        stream.max_await_time_ms = max_await_time_ms
        return stream
    return AlertFeed(ws, role, user_id, poll_ms=50, watch=watch)


@pytest.mark.parametrize('path, expected', [
    ('/alerts/admin/a1', ('admin', 'a1')),
    ('/alerts/manager/64b7f0c2e4b0a1a2b3c4d5e6', ('manager', '64b7f0c2e4b0a1a2b3c4d5e6')),
    ('/alerts/assistant/user_9', ('assistant', 'user_9')),
    ('/alerts/super_admin/a1', None),
    ('/alerts/admin/', None),
    ('/alerts/admin/a1/extra', None),
    ('/alerts/admin/a-1', None),
    ('/alerts/admin/café', None),
])
def test_parse_feed_path(path, expected):
    assert parse_feed_path(path) == expected


def test_feed_pushes_on_connect_and_after_each_watched_change(mongo_db):
    Farmhouse.create_farmhouse('North', admin='a1', location='Lahore')
    Alert.create_alert({'title': 'Heat', 'category': 'weather', 'location': 'Lahore'})
    ws = FakeWebSocket()

    def insert_flood():
        Alert.create_alert({'title': 'Flood', 'category': 'weather', 'location': 'Lahore'})
        return {'operationType': 'insert'}

    stream = FakeChangeStream(ws, [
        None,
        insert_flood,
        {'operationType': 'invalidate'},
        {'operationType': 'delete'},
    ])

    _feed(ws, stream).run()

    assert [[alert['title'] for alert in push] for push in ws.sent] == [
        ['Heat'],
        ['Heat', 'Flood'],
        ['Heat', 'Flood'],
    ]
    assert stream.closed
    assert stream.max_await_time_ms == 50


def test_feed_sends_empty_list_for_user_without_farmhouses(mongo_db):
    Alert.create_alert({'title': 'Heat', 'category': 'weather', 'location': 'Lahore'})
    ws = FakeWebSocket()

    _feed(ws, FakeChangeStream(ws, []), role='assistant', user_id='nobody').run()

    assert ws.sent == [[]]


def test_feed_stops_when_the_stream_dies(mongo_db):
    ws = FakeWebSocket()
    stream = FakeChangeStream(ws, [{'operationType': 'update'}] * 5)

    def kill_stream():
        stream.alive = False
        return {'operationType': 'update'}

    stream.changes.insert(1, kill_stream)

    _feed(ws, stream).run()

    # connect push plus the two changes seen before the stream died
    assert len(ws.sent) == 3
    assert ws.connected
    assert stream.closed


def test_feed_ends_quietly_when_send_hits_a_closed_socket(mongo_db):
    class ClosedAfterFirstSend(FakeWebSocket):
        def send(self, data):
            if self.sent:
                raise ConnectionClosed()
            super().send(data)

    ws = ClosedAfterFirstSend()
    stream = FakeChangeStream(ws, [{'operationType': 'insert'}, {'operationType': 'insert'}])

    _feed(ws, stream).run()

    assert len(ws.sent) == 1
    assert len(stream.changes) == 1
    assert stream.closed


@pytest.mark.parametrize('path', ['/alerts/superuser/x', '/alerts/admin/a1/extra', '/alerts/admin/a-1'])
def test_route_closes_connection_on_bad_path_without_sending(app, monkeypatch, path):
    started = []
    monkeypatch.setattr(AlertFeed, 'run', lambda self: started.append(self))
    ws = FakeWebSocket()

    with app.test_request_context(path):
        alert_feed.__wrapped__(ws, path[len('/alerts/'):])

    assert ws.closed
    assert ws.sent == []
    assert started == []


def test_route_runs_feed_for_valid_path(app, monkeypatch):
    started = []
    monkeypatch.setattr(AlertFeed, 'run', lambda self: started.append((self.role, self.user_id, self.poll_ms)))
    app.config['ALERT_FEED_POLL_MS'] = 250
    ws = FakeWebSocket()

    with app.test_request_context('/alerts/manager/m1'):
        alert_feed.__wrapped__(ws, 'manager/m1')

    assert started == [('manager', 'm1', 250)]
    assert not ws.closed
