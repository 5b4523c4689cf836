"""
Cache statistics for the Characters Service.
"""

from .aggregator import StatsAggregator, StatsSnapshot, format_uptime

__all__ = ["StatsAggregator", "StatsSnapshot", "format_uptime"]
