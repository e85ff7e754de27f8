"""Environment configuration for skyline-config."""
import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


class Config:
    """Settings read from .env and the process environment"""

    # Local cache directory for the last applied configuration
    CACHE_DIR = Path(os.getenv("SKYLINE_CACHE_DIR", str(Path.home() / ".cache" / "skyline")))

    # Optional replacement for the bundled baseline file
    BASELINE_PATH = os.getenv("SKYLINE_BASELINE_PATH", "")

    # Remote record service (empty URL = offline, cache + baseline only)
    REMOTE_URL = os.getenv("SKYLINE_REMOTE_URL", "")
    REMOTE_TOKEN = os.getenv("SKYLINE_REMOTE_TOKEN", "")
    REMOTE_TIMEOUT = float(os.getenv("SKYLINE_REMOTE_TIMEOUT", "10"))

    CONFIG_TYPE = os.getenv("SKYLINE_CONFIG_TYPE", "BoardingPassConfig")

    DEBUG = os.getenv("DEBUG", "false").lower() == "true"
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


config = Config()
