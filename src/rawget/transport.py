"""
Plain and TLS connectors that perform one raw GET exchange.

Both variants write the same hand-built request, read the reply line by
line and return a Measurement; they only differ in how the socket is
opened.
"""

import logging
import socket
import ssl
import time
from typing import Callable

from .config import DEFAULT_ROOT_PEM
from .errors import CertificatePoolError, ConnectError, ResponseReadError
from .models import Measurement, Target
from .reader import LineReader, parse_status_line

logger = logging.getLogger(__name__)


def build_request(host: str, path: str) -> bytes:
    req = (
        f"GET {path} HTTP/1.1\r\n"
        f"Host: {host}\r\n"
        f"Connection: close\r\n"
        f"\r\n"
    )
    return req.encode("iso-8859-1")


def build_ssl_context(root_pem: str) -> ssl.SSLContext:
    """System trust store plus one extra PEM root certificate."""
    ctx = ssl.create_default_context()
    try:
        ctx.load_verify_locations(cafile=root_pem)
    except (OSError, ValueError) as e:
        raise CertificatePoolError(root_pem, e) from e
    return ctx


class Connector:
    scheme = "http"

    def prepare(self) -> None:
        """Per-connector setup done outside the timed section."""

    def resolve(self, target: Target):
        """Name resolution done before the timer starts; None to defer it to the dial."""
        return None

    def open_connection(self, target: Target, addr=None) -> socket.socket:
        raise NotImplementedError

    def fetch(self, host: str, path: str, echo: bool = False,
              out: Callable[[str], None] = print) -> Measurement:
        target = Target(scheme=self.scheme, host=host, path=path)
        self.prepare()

        # bad hostnames fail in the idna codec with UnicodeError
        try:
            addr = self.resolve(target)
        except (OSError, UnicodeError) as e:
            raise ConnectError(host, e) from e

        start = time.perf_counter()
        logger.debug("connecting to %s:%d", target.hostname, target.port)
        try:
            sock = self.open_connection(target, addr)
        except (OSError, UnicodeError) as e:
            raise ConnectError(host, e) from e

        with sock:
            try:
                sock.sendall(build_request(host, path))
            except OSError as e:
                raise ConnectError(host, e) from e

            reader = LineReader(sock)
            try:
                status_line = reader.read_line()
            except (EOFError, OSError) as e:
                raise ResponseReadError(e) from e
            total_bytes = reader.buffered
            if echo:
                out(status_line)

            # the server closes after the response, so any read error
            # from here on is just the end of the stream
            while True:
                try:
                    line = reader.read_line()
                except (EOFError, OSError):
                    break
                total_bytes += reader.buffered
                if echo:
                    out(line)

        elapsed = time.perf_counter() - start
        status = parse_status_line(status_line)
        m = Measurement(elapsed=elapsed, byte_count=total_bytes, status_code=status.code)
        logger.debug("%s -> %s in %d ms, ~%d bytes", target.url, m.status_code, m.elapsed_ms, m.byte_count)
        return m


class PlainConnector(Connector):
    scheme = "http"

    def resolve(self, target: Target):
        # IPv4 only, first address wins
        infos = socket.getaddrinfo(target.hostname, target.port, socket.AF_INET, socket.SOCK_STREAM)
        return infos[0]

    def open_connection(self, target: Target, addr=None) -> socket.socket:
        if addr is None:
            addr = self.resolve(target)
        family, socktype, proto, _, sockaddr = addr
        sock = socket.socket(family, socktype, proto)
        try:
            sock.connect(sockaddr)
        except OSError:
            sock.close()
            raise
        return sock


class SecureConnector(Connector):
    scheme = "https"

    def __init__(self, root_pem: str = DEFAULT_ROOT_PEM):
        self.root_pem = root_pem
        self._context: ssl.SSLContext | None = None

    def prepare(self) -> None:
        if self._context is None:
            self._context = build_ssl_context(self.root_pem)

    @property
    def context(self) -> ssl.SSLContext:
        self.prepare()
        return self._context

    def open_connection(self, target: Target, addr=None) -> socket.socket:
        # resolved inside the timed dial, like the TLS handshake
        sock = socket.create_connection((target.hostname, target.port))
        try:
            return self.context.wrap_socket(sock, server_hostname=target.hostname)
        except OSError:
            sock.close()
            raise
