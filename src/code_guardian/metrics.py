from __future__ import annotations

import resource
import sys
import time

from code_guardian.models import ScanStats


def peak_rss_bytes() -> int:
    peak = resource.getrusage(resource.RUSAGE_SELF).ru_maxrss
    # Linux reports kilobytes, macOS bytes.
    return peak if sys.platform == "darwin" else peak * 1024


class RunMetrics:
    """Wall-clock time and peak-RSS growth for one scan run."""

    def __init__(self) -> None:
        self._started_at: float | None = None
        self._rss_at_start = 0

    def start(self) -> None:
        self._rss_at_start = peak_rss_bytes()
        self._started_at = time.perf_counter()

    def stop(self, files_scanned: int) -> ScanStats:
        if self._started_at is None:
            raise RuntimeError("metrics were stopped before being started")

        elapsed = time.perf_counter() - self._started_at
        self._started_at = None

        return ScanStats(
            files_scanned=files_scanned,
            elapsed_seconds=elapsed,
            memory_delta_bytes=peak_rss_bytes() - self._rss_at_start,
        )


class NullMetrics:
    def start(self) -> None:
        return None

    def stop(self, files_scanned: int) -> ScanStats:
        return ScanStats(files_scanned=files_scanned, elapsed_seconds=0.0, memory_delta_bytes=0)
