"""
Line-oriented reading of a raw HTTP response.

LineReader pulls bytes off a socket into its own buffer and hands them back
one CRLF-terminated line at a time. After each line, ``buffered`` tells how
many bytes are still sitting in the buffer; the transport adds that up as an
approximate response size.
"""

import re
from typing import NamedTuple

from .errors import MalformedStatusLine

RECV_SIZE = 4096

STATUS_LINE_RE = re.compile(r"^HTTP/(\d+(?:\.\d+)?) (\d{3})(?: (.*))?$")


class StatusLine(NamedTuple):
    version: str
    code: str
    reason: str


def parse_status_line(line: str) -> StatusLine:
    """Split ``HTTP/<version> <code> <reason>`` into its parts."""
    m = STATUS_LINE_RE.match(line)
    if m is None:
        raise MalformedStatusLine(line)
    version, code, reason = m.groups()
    return StatusLine(version, code, reason or "")


class LineReader:
    def __init__(self, sock, recv_size: int = RECV_SIZE):
        self._sock = sock
        self._recv_size = recv_size
        self._buf = bytearray()
        self._eof = False

    @property
    def buffered(self) -> int:
        return len(self._buf)

    def _fill(self) -> bool:
        if self._eof:
            return False
        chunk = self._sock.recv(self._recv_size)
        if not chunk:
            self._eof = True
            return False
        self._buf.extend(chunk)
        return True

    def read_line(self) -> str:
        """Return the next line without its terminator.

        Raises EOFError once the peer has closed and the buffer is drained.
        Socket errors propagate as OSError.
        """
        start = 0
        while True:
            i = self._buf.find(b"\n", start)
            if i != -1:
                line = bytes(self._buf[:i])
                del self._buf[: i + 1]
                if line.endswith(b"\r"):
                    line = line[:-1]
                return line.decode("utf-8", errors="replace")
            start = len(self._buf)
            if not self._fill():
                break
        if not self._buf:
            raise EOFError("end of stream")
        # unterminated tail before close
        line = bytes(self._buf)
        self._buf.clear()
        return line.decode("utf-8", errors="replace")
