"""Configuration loader — reads config.yaml, interpolates env vars, validates."""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from .models import CATEGORY_ALL, Category

logger = logging.getLogger(__name__)

SOURCE_PROVIDERS = ("http", "file")

# ---------------------------------------------------------------------------
# Frozen config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DashboardConfig:
    refresh_interval_seconds: float = 30.0
    auto_refresh: bool = True
    arbitrage_limit: int = 5
    default_category: str = CATEGORY_ALL


@dataclass(frozen=True)
class WalletConfig:
    label: str = ""
    address: str = ""


@dataclass(frozen=True)
class HttpSourceConfig:
    base_url: str = ""
    timeout: int = 30


@dataclass(frozen=True)
class FileSourceConfig:
    path: str = ""


@dataclass(frozen=True)
class SourceConfig:
    provider: str = "http"
    http: HttpSourceConfig = field(default_factory=HttpSourceConfig)
    file: FileSourceConfig = field(default_factory=FileSourceConfig)


@dataclass(frozen=True)
class AppConfig:
    dashboard: DashboardConfig = field(default_factory=DashboardConfig)
    wallet: WalletConfig = field(default_factory=WalletConfig)
    source: SourceConfig = field(default_factory=SourceConfig)


# ---------------------------------------------------------------------------
# Env interpolation
# ---------------------------------------------------------------------------

_ENV_VAR_RE = re.compile(r"\$\{([^}]+)}")


def _interpolate_env(value: Any) -> Any:
    """Recursively replace ${VAR} references with environment variable values."""
    if isinstance(value, str):
        return _ENV_VAR_RE.sub(lambda m: os.environ.get(m.group(1), ""), value)
    if isinstance(value, dict):
        return {k: _interpolate_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_interpolate_env(item) for item in value]
    return value


_TRUE_STRINGS = {"true", "yes", "on", "1"}
_FALSE_STRINGS = {"false", "no", "off", "0"}


def _parse_bool(value: Any, name: str) -> bool:
    """Coerce a YAML bool or an env-interpolated string like "false" to bool."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE_STRINGS:
            return True
        if text in _FALSE_STRINGS:
            return False
    raise ValueError(f"{name} must be a boolean, got {value!r}")


# ---------------------------------------------------------------------------
# YAML → dataclass builders
# ---------------------------------------------------------------------------


def _build_dashboard(raw: dict[str, Any]) -> DashboardConfig:
    return DashboardConfig(
        refresh_interval_seconds=float(raw.get("refresh_interval_seconds", 30.0)),
        auto_refresh=_parse_bool(raw.get("auto_refresh", True), "auto_refresh"),
        arbitrage_limit=int(raw.get("arbitrage_limit", 5)),
        default_category=str(raw.get("default_category", CATEGORY_ALL)),
    )


def _build_wallet(raw: dict[str, Any]) -> WalletConfig:
    return WalletConfig(
        label=raw.get("label", ""),
        address=raw.get("address", ""),
    )


def _build_source(raw: dict[str, Any], base_dir: Path) -> SourceConfig:
    http_raw = raw.get("http", {})
    file_raw = raw.get("file", {})

    path = file_raw.get("path", "")
    if path and not Path(path).is_absolute():
        path = str(base_dir / path)

    return SourceConfig(
        provider=raw.get("provider", "http"),
        http=HttpSourceConfig(
            base_url=http_raw.get("base_url", "").rstrip("/"),
            timeout=int(http_raw.get("timeout", 30)),
        ),
        file=FileSourceConfig(path=path),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(config_path: str | Path | None = None) -> AppConfig:
    """Load and validate application configuration from YAML + .env.

    Args:
        config_path: Path to config.yaml. Defaults to ``config.yaml`` in the
            project root (two levels up from this file).
    """
    load_dotenv()

    if config_path is None:
        config_path = Path(__file__).resolve().parent.parent / "config.yaml"
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    raw = _interpolate_env(raw)

    cfg = AppConfig(
        dashboard=_build_dashboard(raw.get("dashboard", {})),
        wallet=_build_wallet(raw.get("wallet", {})),
        source=_build_source(raw.get("source", {}), config_path.resolve().parent),
    )

    _validate(cfg)
    logger.info("Configuration loaded from %s", config_path)
    return cfg


def _validate(cfg: AppConfig) -> None:
    """Raise on invalid configuration."""
    if not cfg.wallet.address:
        raise ValueError(f"Wallet '{cfg.wallet.label}' has no address")

    dashboard = cfg.dashboard
    if dashboard.refresh_interval_seconds <= 0:
        raise ValueError("refresh_interval_seconds must be positive")
    if dashboard.arbitrage_limit < 1:
        raise ValueError("arbitrage_limit must be at least 1")

    valid_categories = {CATEGORY_ALL, *(c.value for c in Category)}
    if dashboard.default_category not in valid_categories:
        raise ValueError(
            f"Unknown default_category '{dashboard.default_category}'"
        )

    source = cfg.source
    if source.provider not in SOURCE_PROVIDERS:
        raise ValueError(f"Unknown source provider '{source.provider}'")
    if source.provider == "http" and not source.http.base_url:
        raise ValueError("HTTP source requires a base_url")
    if source.provider == "file" and not source.file.path:
        raise ValueError("File source requires a path")
