"""Protocol interfaces for the analytics engine."""
from .data_source import AnalyticsSource

__all__ = ["AnalyticsSource"]
