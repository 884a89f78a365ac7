"""
Profiling mode: hit a fixed HTTPS endpoint n times, one request after
another, and summarise latency, size and error rate.
"""

import logging
from typing import Callable

from .config import DEFAULT_ROOT_PEM
from .models import Measurement, Target
from .transport import Connector, SecureConnector

logger = logging.getLogger(__name__)

PROFILE_HOST = "my-worker.ejchen.workers.dev"
PROFILE_PATH = "/links"
RULE = "-" * 52


class ProfileResult:
    """Running aggregates over the measurements of one profiling run."""

    def __init__(self, target: Target, count: int):
        if count <= 0:
            raise ValueError("count must be positive")
        self.target = target
        self.count = count
        self.measurements: list[Measurement] = []
        self.total_ms = 0
        self.fastest_ms: int | None = None
        self.slowest_ms: int | None = None
        self.smallest_bytes: int | None = None
        self.largest_bytes: int | None = None
        self.fail_count = 0
        # dict as an ordered set of distinct non-2xx codes
        self.error_codes: dict[str, None] = {}

    def record(self, m: Measurement) -> None:
        ms = m.elapsed_ms
        self.measurements.append(m)
        self.total_ms += ms
        if self.fastest_ms is None or ms < self.fastest_ms:
            self.fastest_ms = ms
        if self.slowest_ms is None or ms > self.slowest_ms:
            self.slowest_ms = ms
        if self.smallest_bytes is None or m.byte_count < self.smallest_bytes:
            self.smallest_bytes = m.byte_count
        if self.largest_bytes is None or m.byte_count > self.largest_bytes:
            self.largest_bytes = m.byte_count
        if not m.succeeded:
            self.fail_count += 1
            self.error_codes.setdefault(m.status_code, None)

    @property
    def times_ms(self) -> list[int]:
        return [m.elapsed_ms for m in self.measurements]

    @property
    def mean_ms(self) -> int:
        return self.total_ms // len(self.measurements)

    @property
    def median_ms(self) -> int:
        return median_ms(self.times_ms)

    @property
    def success_percentage(self) -> float:
        n = len(self.measurements)
        return (n - self.fail_count) / n * 100


def median_ms(times: list[int]) -> int:
    """Median of whole-millisecond times; even counts average down."""
    if not times:
        raise ValueError("median of empty sequence")
    ordered = sorted(times)
    mid = len(ordered) // 2
    if len(ordered) % 2 == 0:
        return (ordered[mid - 1] + ordered[mid]) // 2
    return ordered[mid]


def format_summary(result: ProfileResult) -> list[str]:
    return [
        RULE,
        f"Website: {result.target.url}",
        f"Number of requests: {result.count}",
        f"Fastest response time: {result.fastest_ms} ms",
        f"Slowest response time: {result.slowest_ms} ms",
        f"Mean response time: {result.mean_ms} ms",
        f"Median response time: {result.median_ms} ms",
        f"Percentage of requests that succeeded: {result.success_percentage:.2f}%",
        f"Error codes: {' '.join(result.error_codes)}",
        f"Smallest response (bytes): {result.smallest_bytes}",
        f"Largest response (bytes): {result.largest_bytes}",
        RULE,
    ]


def profile(n: int | None, connector: Connector | None = None,
            root_pem: str = DEFAULT_ROOT_PEM,
            out: Callable[[str], None] = print) -> ProfileResult | None:
    if not n or n <= 0:
        return None

    if connector is None:
        connector = SecureConnector(root_pem)
    target = Target(scheme="https", host=PROFILE_HOST, path=PROFILE_PATH)
    result = ProfileResult(target, n)

    logger.info("profiling %s with %d requests", target.url, n)
    for i in range(n):
        m = connector.fetch(PROFILE_HOST, PROFILE_PATH, echo=False)
        result.record(m)
        logger.debug("request %d/%d: %s %d ms %d bytes", i + 1, n, m.status_code, m.elapsed_ms, m.byte_count)
    logger.info("profiling done: %d failures", result.fail_count)

    for line in format_summary(result):
        out(line)
    return result
