import pathlib
import socket
import ssl
import threading

import pytest

from rawget.models import Measurement
from rawget.transport import Connector


def build_response(body: bytes, status: int = 200, reason: str = "OK") -> bytes:
    headers = [
        f"HTTP/1.1 {status} {reason}",
        "Content-Type: text/plain; charset=utf-8",
        f"Content-Length: {len(body)}",
        "Connection: close",
    ]
    headers.extend(["", ""])  # end of headers
    return "\r\n".join(headers).encode("utf-8") + body


class CannedServer:
    """Loopback server that answers every connection with the same bytes.

    With an ssl_context each accepted connection is wrapped server side first.
    """

    def __init__(self, payload: bytes, ssl_context: ssl.SSLContext | None = None):
        self.payload = payload
        self.ssl_context = ssl_context
        self.requests: list[bytes] = []
        self._stop = threading.Event()
        self._sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self._sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        self._sock.bind(("127.0.0.1", 0))
        self._sock.listen(16)
        self._sock.settimeout(0.1)
        self.port = self._sock.getsockname()[1]
        self._thread = threading.Thread(target=self._serve, daemon=True)
        self._thread.start()

    @property
    def host(self) -> str:
        return f"127.0.0.1:{self.port}"

    def _serve(self):
        while not self._stop.is_set():
            try:
                conn, _ = self._sock.accept()
            except socket.timeout:
                continue
            except OSError:
                return
            try:
                self._handle(conn)
            except OSError:
                pass
            finally:
                conn.close()

    def _handle(self, conn):
        conn.settimeout(5)
        if self.ssl_context is not None:
            with self.ssl_context.wrap_socket(conn, server_side=True) as tls:
                self._exchange(tls)
        else:
            self._exchange(conn)

    def _exchange(self, conn):
        data = b""
        while b"\r\n\r\n" not in data:
            chunk = conn.recv(2048)
            if not chunk:
                break
            data += chunk
        self.requests.append(data)
        conn.sendall(self.payload)

    def close(self):
        self._stop.set()
        self._thread.join(timeout=2)
        self._sock.close()


@pytest.fixture
def canned_server():
    servers = []

    def start(payload: bytes, ssl_context: ssl.SSLContext | None = None) -> CannedServer:
        srv = CannedServer(payload, ssl_context)
        servers.append(srv)
        return srv

    yield start
    for srv in servers:
        srv.close()


CERTS = pathlib.Path(__file__).parent / "certs"


@pytest.fixture
def server_tls_context() -> ssl.SSLContext:
    """Serves certs/server.pem (127.0.0.1, localhost), issued by certs/ca.pem."""
    ctx = ssl.create_default_context(ssl.Purpose.CLIENT_AUTH)
    ctx.load_cert_chain(CERTS / "server.pem", CERTS / "server.key")
    return ctx


@pytest.fixture
def closed_port() -> int:
    """A loopback port with nothing listening on it."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]


class FakeSocket:
    """Hands out pre-split chunks from recv and records what was sent."""

    def __init__(self, chunks: list[bytes], fail_after: bool = False):
        self.chunks = list(chunks)
        self.fail_after = fail_after
        self.sent = b""
        self.closed = False

    def sendall(self, data: bytes):
        self.sent += data

    def recv(self, n: int) -> bytes:
        if self.chunks:
            return self.chunks.pop(0)
        if self.fail_after:
            raise ConnectionResetError("reset by peer")
        return b""

    def close(self):
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


class FakeSocketConnector(Connector):
    """Connector whose 'connection' is a FakeSocket."""

    def __init__(self, sock: FakeSocket, scheme: str = "http"):
        self.sock = sock
        self.scheme = scheme
        self.opened = []

    def open_connection(self, target, addr=None):
        self.opened.append(target)
        return self.sock


class ScriptedConnector(Connector):
    """Returns canned measurements in order, without any network."""

    scheme = "https"

    def __init__(self, measurements: list[Measurement]):
        self.measurements = list(measurements)
        self.calls = []

    def fetch(self, host, path, echo=False, out=print):
        self.calls.append((host, path, echo))
        return self.measurements.pop(0)


def measurement(ms: int, size: int = 100, code: str = "200") -> Measurement:
    # half a millisecond over so truncation lands on ms
    return Measurement(elapsed=(ms + 0.5) / 1000, byte_count=size, status_code=code)
