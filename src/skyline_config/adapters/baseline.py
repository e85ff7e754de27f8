"""Bundled baseline configuration loader."""

from __future__ import annotations

import logging
from importlib import resources
from pathlib import Path

from ..core.errors import DecodeError
from ..core.schema import BoardingPassConfig, decode_configuration

logger = logging.getLogger(__name__)

BASELINE_RESOURCE = "boarding_pass_config.json"


class BundledBaselineLoader:
    """Reads the baseline shipped inside the package, or an explicit file."""

    def __init__(self, path: Path | None = None, resource: str = BASELINE_RESOURCE):
        self._path = path
        self._resource = resource

    def _read_bytes(self) -> bytes:
        if self._path is not None:
            return self._path.read_bytes()
        return (resources.files("skyline_config") / "resources" / self._resource).read_bytes()

    def load(self) -> BoardingPassConfig | None:
        try:
            data = self._read_bytes()
        except OSError as exc:
            logger.warning("Baseline configuration not readable: %s", exc)
            return None

        try:
            config = decode_configuration(data)
        except DecodeError as exc:
            logger.warning("Baseline configuration rejected: %s", exc)
            return None

        logger.info("Loaded baseline configuration")
        return config
