"""Runtime settings for wiring a resolver (structured view)."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class AppConfig:
    cache_dir: Path
    baseline_path: Path | None
    remote_url: str
    remote_token: str
    remote_timeout: float
    config_type: str
    debug: bool
    log_level: str
