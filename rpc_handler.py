# JSON-RPC 2.0 over TCP with Content-Length framing (LSP/MCP style).
# One connection carries one call. Streams are sequences of frames:
#   client -> server  {"jsonrpc","id","method"[,"params"]} then {"jsonrpc","id","params"}*
#   server -> client  {"jsonrpc","id","result"}* or one {"jsonrpc","id","error"}
# A half-close (shutdown SHUT_WR) ends the client's stream; closing the
# connection ends the server's.
import json, socket, socketserver, threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, Optional, Type

from pydantic import BaseModel, ValidationError

JSONRPC_VERSION = "2.0"

# Call shapes
UNARY = "unary"
SERVER_STREAM = "server_stream"
CLIENT_STREAM = "client_stream"
BIDI_STREAM = "bidi_stream"

INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603


class TransportError(Exception):
    """Send or receive failed. Terminal for the current call, never retried."""


class RpcError(TransportError):
    """Error frame sent by the remote side."""

    def __init__(self, code: int, message: str):
        super().__init__(f"{message} (code={code})")
        self.code = code
        self.message = message


def _ok(_id, result: dict):
    return {"jsonrpc": JSONRPC_VERSION, "id": _id, "result": result}

def _err(_id, code: int, message: str):
    return {"jsonrpc": JSONRPC_VERSION, "id": _id, "error": {"code": code, "message": message}}


class FrameStream:
    """Content-Length framed JSON objects over one connected socket."""

    def __init__(self, sock: socket.socket):
        self.sock = sock
        self._rfile = sock.makefile("rb")
        self._write_lock = threading.Lock()

    def read_frame(self) -> Optional[dict]:
        """
        Read a single message using Content-Length framing.
        Fallback to single-line raw JSON if header not present.
        Returns None on a clean end of stream.
        """
        headers = {}
        try:
            while True:
                line = self._rfile.readline()
                if not line:
                    if headers:
                        raise TransportError("Connection closed inside frame headers")
                    return None  # EOF
                s = line.decode("utf-8", "replace").strip()
                if s == "":
                    if headers:
                        break
                    continue
                if s.startswith("{"):
                    # raw JSON single line
                    return self._decode(s)
                if ":" not in s:
                    raise TransportError(f"Malformed frame header: {s!r}")
                k, v = s.split(":", 1)
                headers[k.strip().lower()] = v.strip()

            try:
                n = int(headers.get("content-length", ""))
            except ValueError:
                raise TransportError("Missing or invalid Content-Length")
            if n < 0:
                raise TransportError(f"Negative Content-Length: {n}")
            body = self._rfile.read(n)
        except OSError as e:
            raise TransportError(f"Receive failed: {e}") from e
        if len(body) < n:
            raise TransportError("Connection closed inside frame body")
        return self._decode(body)

    @staticmethod
    def _decode(raw) -> dict:
        try:
            obj = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise TransportError(f"Malformed frame body: {e}") from e
        if not isinstance(obj, dict):
            raise TransportError("Frame body must be a JSON object")
        return obj

    def write_frame(self, payload: dict):
        try:
            data = json.dumps(payload, ensure_ascii=False).encode("utf-8")
        except UnicodeEncodeError as e:
            raise TransportError(f"Frame is not encodable as UTF-8: {e}") from e
        frame = f"Content-Length: {len(data)}\r\n\r\n".encode("ascii") + data
        try:
            with self._write_lock:
                self.sock.sendall(frame)
        except OSError as e:
            raise TransportError(f"Send failed: {e}") from e

    def close_write(self):
        try:
            self.sock.shutdown(socket.SHUT_WR)
        except OSError as e:
            raise TransportError(f"Half-close failed: {e}") from e

    def abort(self):
        """Shut both directions so a thread blocked in read_frame sees EOF."""
        try:
            self.sock.shutdown(socket.SHUT_RDWR)
        except OSError:
            pass  # peer already gone, socket already down

    def close(self):
        self._rfile.close()
        self.sock.close()


class CallStream:
    """Server-side view of one call: typed send/receive over a FrameStream."""

    def __init__(self, frames: FrameStream, call_id, request_type: Type[BaseModel],
                 response_type: Type[BaseModel]):
        self.frames = frames
        self.call_id = call_id
        self.request_type = request_type
        self.response_type = response_type

    def decode(self, params) -> BaseModel:
        return self.request_type.model_validate(params or {})

    def send(self, message: BaseModel):
        if not isinstance(message, self.response_type):
            raise TypeError(f"Expected {self.response_type.__name__}, got {type(message).__name__}")
        self.frames.write_frame(_ok(self.call_id, message.model_dump()))

    def receive(self) -> Optional[BaseModel]:
        frame = self.frames.read_frame()
        if frame is None:
            return None
        return self.decode(frame.get("params"))

    def __iter__(self) -> Iterator[BaseModel]:
        while True:
            message = self.receive()
            if message is None:
                return
            yield message


@dataclass(frozen=True)
class RpcMethod:
    shape: str
    handler: Callable[..., Any]
    request_type: Type[BaseModel]
    response_type: Type[BaseModel]


class _CallHandler(socketserver.BaseRequestHandler):
    def handle(self):
        self.server.dispatch(FrameStream(self.request), self.client_address)


class TcpJsonRpcServer(socketserver.ThreadingTCPServer):
    """One thread per connection, one call per connection."""

    daemon_threads = True
    allow_reuse_address = True

    def __init__(self, address, methods: Dict[str, RpcMethod], logger=None):
        self.methods = methods
        self.log = logger
        super().__init__(address, _CallHandler)

    @property
    def address(self) -> str:
        host, port = self.server_address[:2]
        return f"{host}:{port}"

    def _reply_error(self, frames: FrameStream, _id, code: int, message: str):
        try:
            frames.write_frame(_err(_id, code, message))
        except TransportError as e:
            if self.log:
                self.log.warning(f"Could not deliver error {code} to caller: {e}")

    def _run(self, rpc: RpcMethod, stream: CallStream, params):
        if rpc.shape == UNARY:
            stream.send(rpc.handler(stream.decode(params)))
        elif rpc.shape == SERVER_STREAM:
            rpc.handler(stream.decode(params), stream)
        elif rpc.shape == CLIENT_STREAM:
            stream.send(rpc.handler(stream))
        elif rpc.shape == BIDI_STREAM:
            rpc.handler(stream)
        else:
            raise ValueError(f"Unknown call shape: {rpc.shape}")

    def dispatch(self, frames: FrameStream, peer=None):
        try:
            try:
                req = frames.read_frame()
            except TransportError as e:
                if self.log:
                    self.log.warning(f"Dropped connection from {peer}: {e}")
                return
            if req is None:
                return  # connected and left without a call

            _id = req.get("id")
            method = req.get("method")

            if req.get("jsonrpc") != JSONRPC_VERSION:
                self._reply_error(frames, _id, INVALID_REQUEST, "Invalid Request: jsonrpc must be '2.0'")
                return
            if not method:
                self._reply_error(frames, _id, INVALID_REQUEST, "Invalid Request: missing method")
                return
            if method not in self.methods:
                self._reply_error(frames, _id, METHOD_NOT_FOUND, f"Method not found: {method}")
                return

            rpc = self.methods[method]
            if self.log:
                self.log.info(f">>> {method} from {peer}")

            try:
                self._run(rpc, CallStream(frames, _id, rpc.request_type, rpc.response_type), req.get("params"))
                if self.log:
                    self.log.info(f"<<< {method} OK")
            except TransportError as e:
                if self.log:
                    self.log.warning(f"<<< {method} aborted: {e}")
            except ValidationError as e:
                if self.log:
                    self.log.warning(f"<<< {method} invalid params: {e}")
                self._reply_error(frames, _id, INVALID_PARAMS, f"Invalid params: {e}")
            except Exception:
                if self.log:
                    self.log.exception(f"Exception in method {method}")
                self._reply_error(frames, _id, INTERNAL_ERROR, "Internal error")
        finally:
            frames.close()
