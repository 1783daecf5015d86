from dataclasses import dataclass
from typing import Any, Protocol
from collections.abc import Callable


@dataclass(frozen=True)
class RunConfig:
    base_url: str
    count: int
    backoff_s: float = 0.1
    timeout_s: float | None = None
    verify_tls: bool = False


@dataclass
class RunSummary:
    targets: int
    attempts: int
    completions: int
    tolerated: int
    failures: int
    elapsed_s: float


@dataclass(frozen=True)
class ThroughputReport:
    rate: int
    responses: int
    elapsed_ms: int

    def __str__(self) -> str:
        return f"{self.rate} responses per second"


class HttpGetter(Protocol):
    async def get(self, url: str) -> Any: ...


# Report sink: callable receiving each throughput report
ReportCallback = Callable[[ThroughputReport], None]

# Progress hook: called once per consumed attempt
AdvanceCallback = Callable[[], None]
