import logging
import threading
from collections.abc import Callable

from .models import ReportCallback, ThroughputReport
from .utils import wall_clock, millis

logger = logging.getLogger(__name__)

REPORT_WINDOW_MS = 1000


def print_report(report: ThroughputReport) -> None:
    print(report, flush=True)


class ThroughputTracker:
    """
    Shared responses-per-second counter.

    Every non-fatal completion goes through record_completion(). Once more
    than REPORT_WINDOW_MS have passed since the window started, the rate is
    emitted and the window restarts, all under the same lock.
    """

    def __init__(
        self,
        emit: ReportCallback | None = None,
        clock: Callable[[], float] = wall_clock,
    ) -> None:
        self._emit = emit or print_report
        self._clock = clock
        self._lock = threading.Lock()
        self.responses = 0
        self.window_start = clock()
        self.total = 0

    def record_completion(self) -> ThroughputReport | None:
        with self._lock:
            elapsed = millis(self._clock() - self.window_start)
            self.responses += 1
            self.total += 1

            if elapsed <= REPORT_WINDOW_MS:
                return None

            report = ThroughputReport(
                rate=(self.responses * 1000) // elapsed,
                responses=self.responses,
                elapsed_ms=elapsed,
            )
            self._emit(report)
            logger.debug(
                f"Window closed: {report.responses} responses in {elapsed}ms"
            )
            self.responses = 0
            self.window_start = self._clock()
            return report
