import pytest

from models.geo import Point, Rectangle, RouteNote
from rpc_handler import TransportError
from tools.get_feature import tool_get_feature
from tools.list_features import tool_list_features
from tools.route_chat import tool_route_chat

def test_get_feature(small_store):
    assert tool_get_feature(small_store, Point(latitude=30, longitude=-30)).name == "Gamma"
    missing = tool_get_feature(small_store, Point(latitude=1, longitude=2))
    assert missing.name == "" and missing.location == Point(latitude=1, longitude=2)

def test_list_features_streams_subset(small_store, make_stream):
    rect = Rectangle(lo=Point(latitude=40, longitude=-40), hi=Point(latitude=-40, longitude=10))
    stream = make_stream()
    assert tool_list_features(small_store, rect, stream) == 2
    assert [f.name for f in stream.sent] == ["Alpha", "Gamma"]

def test_list_features_corner_order_and_repeat(small_store, make_stream):
    a, b = Point(latitude=0, longitude=0), Point(latitude=30, longitude=40)
    results = []
    for rect in [Rectangle(lo=a, hi=b), Rectangle(lo=b, hi=a), Rectangle(lo=a, hi=b)]:
        stream = make_stream()
        tool_list_features(small_store, rect, stream)
        results.append(stream.sent)
    assert results[0] == results[1] == results[2]

def test_list_features_aborts_on_send_failure(small_store, make_stream):
    rect = Rectangle(lo=Point(latitude=-90, longitude=-90), hi=Point(latitude=90, longitude=90))
    stream = make_stream(fail_after=2)
    with pytest.raises(TransportError):
        tool_list_features(small_store, rect, stream)
    assert len(stream.sent) == 2

def test_route_chat_replays_history(board, make_stream):
    script = [
        RouteNote(location=Point(latitude=0, longitude=1), message="First"),
        RouteNote(location=Point(latitude=0, longitude=2), message="Second"),
        RouteNote(location=Point(latitude=0, longitude=1), message="Third"),
    ]
    stream = make_stream(script)
    tool_route_chat(board, stream)
    assert [n.message for n in stream.sent] == ["First", "Second", "First", "Third"]

def test_route_chat_history_spans_calls(board, make_stream):
    spot = Point(latitude=5, longitude=5)
    tool_route_chat(board, make_stream([RouteNote(location=spot, message="one")]))
    second = make_stream([RouteNote(location=spot, message="two")])
    tool_route_chat(board, second)
    assert [n.message for n in second.sent] == ["one", "two"]

def test_route_chat_propagates_transport_error(board, make_stream):
    stream = make_stream([RouteNote(message="x")] * 3, error_at=1)
    with pytest.raises(TransportError):
        tool_route_chat(board, stream)
    assert len(board.history(Point())) == 1
