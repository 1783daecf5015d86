__all__ = ["StressRunner", "ThroughputTracker", "HttpClient", "RunConfig", "RunSummary", "ConfigError"]


from .core import StressRunner
from .throughput import ThroughputTracker
from .client import HttpClient
from .models import RunConfig, RunSummary
from .errors import ConfigError
