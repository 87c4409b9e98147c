# ffeval/config.py
"""Environment-based configuration and logging setup.

Settings are read from the process environment, optionally seeded from a
``.env`` file via python-dotenv.
"""


from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Tuple

from dotenv import load_dotenv

DEFAULT_CORS_ORIGINS = ("http://localhost:3000", "http://localhost:5173")
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the HTTP service and CLI."""
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    log_level: str = "INFO"
    cors_origins: Tuple[str, ...] = DEFAULT_CORS_ORIGINS


def _int_env(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


def load_settings() -> Settings:
    """Build :class:`Settings` from ``FFEVAL_*``, ``DEBUG`` and ``LOG_LEVEL``.

    Returns:
        Settings: Values from the environment, defaults elsewhere.
    """
    load_dotenv()

    raw_origins = os.getenv("FFEVAL_CORS_ORIGINS")
    if raw_origins:
        origins = tuple(o.strip() for o in raw_origins.split(",") if o.strip())
    else:
        origins = DEFAULT_CORS_ORIGINS

    return Settings(
        host=os.getenv("FFEVAL_HOST", "0.0.0.0"),
        port=_int_env("FFEVAL_PORT", 8000),
        debug=os.getenv("DEBUG", "false").lower() == "true",
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        cors_origins=origins,
    )


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once for the process.

    Unknown level names fall back to ``INFO``.
    """
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        numeric = logging.INFO
    logging.basicConfig(level=numeric, format=LOG_FORMAT)
    logging.getLogger().setLevel(numeric)
