# client/route_client.py
# RouteGuide JSON-RPC client over TCP. Opens one connection per call.
import itertools, socket
from typing import Iterable, Iterator, Optional, Tuple, Type

from pydantic import BaseModel

from rpc_handler import JSONRPC_VERSION, FrameStream, RpcError, TransportError
from models.geo import Feature, Point, Rectangle, RouteNote, RouteSummary

def parse_address(address: str) -> Tuple[str, int]:
    """'host:port' -> (host, port)"""
    host, sep, port = address.rpartition(":")
    if not sep or not host:
        raise ValueError(f"Expected host:port, got {address!r}")
    return host, int(port)


class ClientCall:
    """Client-side view of one call: typed send/receive, half-close to end the outbound stream."""

    def __init__(self, frames: FrameStream, call_id: int, response_type: Type[BaseModel]):
        self.frames = frames
        self.call_id = call_id
        self.response_type = response_type

    def send(self, message: BaseModel):
        self.frames.write_frame({"jsonrpc": JSONRPC_VERSION, "id": self.call_id, "params": message.model_dump()})

    def close_send(self):
        self.frames.close_write()

    def receive(self) -> Optional[BaseModel]:
        frame = self.frames.read_frame()
        if frame is None:
            return None
        if "error" in frame:
            error = frame.get("error") or {}
            raise RpcError(error.get("code", 0), error.get("message", "unknown error"))
        return self.response_type.model_validate(frame.get("result") or {})

    def __iter__(self) -> Iterator[BaseModel]:
        while True:
            message = self.receive()
            if message is None:
                return
            yield message

    def abort(self):
        """Tear the call down from any thread; a blocked receive() then returns None."""
        self.frames.abort()

    def close(self):
        self.frames.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


class RouteGuideClient:
    def __init__(self, address: str = "127.0.0.1:10101", timeout_sec: float = 15.0):
        self.host, self.port = parse_address(address)
        self.timeout = timeout_sec
        self._ids = itertools.count(1)

    def _call(self, method: str, response_type: Type[BaseModel], request: Optional[BaseModel] = None) -> ClientCall:
        try:
            sock = socket.create_connection((self.host, self.port), timeout=self.timeout)
        except OSError as e:
            raise TransportError(f"Cannot connect to {self.host}:{self.port}: {e}") from e
        call_id = next(self._ids)
        req = {"jsonrpc": JSONRPC_VERSION, "id": call_id, "method": method}
        if request is not None:
            req["params"] = request.model_dump()
        frames = FrameStream(sock)
        try:
            frames.write_frame(req)
        except TransportError:
            frames.close()
            raise
        return ClientCall(frames, call_id, response_type)

    @staticmethod
    def _single_reply(call: ClientCall) -> BaseModel:
        reply = call.receive()
        if reply is None:
            raise TransportError("Server closed the call without a reply")
        return reply

    def get_feature(self, point: Point) -> Feature:
        with self._call("GetFeature", Feature, point) as call:
            return self._single_reply(call)

    def list_features(self, rect: Rectangle) -> Iterator[Feature]:
        with self._call("ListFeatures", Feature, rect) as call:
            yield from call

    def record_route(self, points: Iterable[Point]) -> RouteSummary:
        with self._call("RecordRoute", RouteSummary) as call:
            for point in points:
                call.send(point)
            call.close_send()
            return self._single_reply(call)

    def route_chat(self) -> ClientCall:
        """Open a RouteChat call. The caller owns it and must close() it."""
        return self._call("RouteChat", RouteNote)
