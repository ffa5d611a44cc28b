"""Analytics data sources."""
from __future__ import annotations

from typing import Any

from ..config import SourceConfig
from ..interfaces.data_source import AnalyticsSource
from .file import FileAnalyticsSource
from .http import HttpAnalyticsSource

# Registry of source factories keyed by provider name.
_SOURCE_FACTORIES: dict[str, Any] = {
    "http": lambda cfg: HttpAnalyticsSource(cfg.http),
    "file": lambda cfg: FileAnalyticsSource(cfg.file),
}


def build_source(config: SourceConfig) -> AnalyticsSource:
    """Instantiate the source configured under ``source.provider``."""
    factory = _SOURCE_FACTORIES.get(config.provider)
    if factory is None:
        raise ValueError(f"Unknown source provider '{config.provider}'")
    return factory(config)


__all__ = ["FileAnalyticsSource", "HttpAnalyticsSource", "build_source"]
