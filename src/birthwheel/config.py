"""Environment-backed settings and logging setup.

Entry points call ``dotenv.load_dotenv()`` first; everything here reads
``os.environ`` only.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

_ROOT = Path(__file__).parent.parent.parent

OPEN_METEO_SEARCH_URL = "https://geocoding-api.open-meteo.com/v1/search"


@dataclass(frozen=True)
class Settings:
    """Runtime configuration. Built from BIRTHWHEEL_* environment variables."""

    data_dir: Path  # skyfield Loader directory (kernels, constellation data)
    ephemeris: str  # JPL kernel file name
    geocoder_url: str
    geocoder_timeout: float  # seconds
    default_timezone: str  # used when the birth coordinates have no timezone
    log_level: str


def load_settings() -> Settings:
    """Read settings from the environment, falling back to defaults."""
    return Settings(
        data_dir=Path(os.environ.get("BIRTHWHEEL_DATA_DIR", _ROOT / "resources")),
        ephemeris=os.environ.get("BIRTHWHEEL_EPHEMERIS", "de421.bsp"),
        geocoder_url=os.environ.get("BIRTHWHEEL_GEOCODER_URL", OPEN_METEO_SEARCH_URL),
        geocoder_timeout=float(os.environ.get("BIRTHWHEEL_GEOCODER_TIMEOUT", "10")),
        default_timezone=os.environ.get("BIRTHWHEEL_DEFAULT_TIMEZONE", "UTC"),
        log_level=os.environ.get("BIRTHWHEEL_LOG_LEVEL", "INFO").upper(),
    )


def configure_logging(level: str | None = None) -> None:
    """Install a root handler once. Later calls only adjust the level."""
    level = (level or load_settings().log_level).upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("birthwheel").setLevel(level)
