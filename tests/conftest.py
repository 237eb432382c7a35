import threading
from pathlib import Path

import pytest

from main import create_server
from models.feature_store import FeatureStore
from models.geo import Feature, Point
from models.note_board import NoteBoard
from rpc_handler import TransportError

SNAPSHOT_PATH = Path(__file__).resolve().parents[1] / "testdata" / "route_guide_db.json"


class FakeStream:
    """In-memory stand-in for a call stream: scripted inbound, recorded outbound."""

    def __init__(self, inbound=(), fail_after=None, error_at=None):
        self.inbound = list(inbound)
        self.sent = []
        self.received = 0
        self.fail_after = fail_after
        self.error_at = error_at

    def send(self, message):
        if self.fail_after is not None and len(self.sent) >= self.fail_after:
            raise TransportError("send failed")
        self.sent.append(message)

    def receive(self):
        if self.error_at is not None and self.received == self.error_at:
            raise TransportError("receive failed")
        if not self.inbound:
            return None
        self.received += 1
        return self.inbound.pop(0)

    def __iter__(self):
        while True:
            message = self.receive()
            if message is None:
                return
            yield message


class FakeClock:
    def __init__(self, *readings):
        self.readings = list(readings)

    def __call__(self):
        return self.readings.pop(0)


@pytest.fixture
def make_stream():
    return FakeStream

@pytest.fixture
def make_clock():
    return FakeClock

@pytest.fixture
def small_store():
    return FeatureStore([
        Feature(name="Alpha", location=Point(latitude=10, longitude=10)),
        Feature(name="", location=Point(latitude=20, longitude=20)),
        Feature(name="Gamma", location=Point(latitude=30, longitude=-30)),
        Feature(name="Delta", location=Point(latitude=-40, longitude=40)),
    ])

@pytest.fixture(scope="session")
def snapshot_store():
    return FeatureStore.load(SNAPSHOT_PATH)

@pytest.fixture
def board():
    return NoteBoard()

@pytest.fixture
def server(snapshot_store, board):
    srv = create_server("127.0.0.1", 0, snapshot_store, board)
    t = threading.Thread(target=srv.serve_forever, daemon=True)
    t.start()
    yield srv
    srv.shutdown()
    srv.server_close()
    t.join(timeout=5)
