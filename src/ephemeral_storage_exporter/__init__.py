"""Ephemeral storage exporter package."""

from .api_components import FetchError, execute_sampling_loop, fetch_stats_summary
from .config import Config, ConfigError
from .core import NodeStatsSnapshot, PodUsage, parse_stats_summary
from .metrics import EphemeralStorageGauge

__all__ = [
    "Config",
    "ConfigError",
    "EphemeralStorageGauge",
    "FetchError",
    "NodeStatsSnapshot",
    "PodUsage",
    "execute_sampling_loop",
    "fetch_stats_summary",
    "parse_stats_summary",
]
