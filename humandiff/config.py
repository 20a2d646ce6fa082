"""Runtime configuration read from environment variables."""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from humandiff.text.diff import LOOKAHEAD_WINDOW

ENV_PREFIX = "HUMANDIFF_"


def _read_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(ENV_PREFIX + name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}")


def _read_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(ENV_PREFIX + name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{ENV_PREFIX}{name} must be a number, got {raw!r}")


@dataclass
class Settings:
    """Settings for the provider client, history store, diff engine and logging.

    Attributes:
        api_url: Root URL of the text-transformation backend
        api_key: Optional bearer token for the backend
        timeout: Backend request timeout in seconds
        history_path: Location of the history parquet file
        lookahead_window: Lookahead distance used by the alignment engine
        log_level: Name of the root logging level
    """

    api_url: str = "http://localhost:5000"
    api_key: Optional[str] = None
    timeout: float = 30.0
    history_path: str = "datasets/history.parquet"
    lookahead_window: int = LOOKAHEAD_WINDOW
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from HUMANDIFF_* environment variables.

        Args:
            env: Mapping to read from (defaults to os.environ)

        Returns:
            Settings with defaults for every unset variable

        Raises:
            ValueError: If a numeric variable cannot be parsed or is out of range
        """
        env = os.environ if env is None else env
        settings = cls(
            api_url=env.get(ENV_PREFIX + "API_URL") or cls.api_url,
            api_key=env.get(ENV_PREFIX + "API_KEY") or None,
            timeout=_read_float(env, "TIMEOUT", cls.timeout),
            history_path=env.get(ENV_PREFIX + "HISTORY_PATH") or cls.history_path,
            lookahead_window=_read_int(env, "LOOKAHEAD_WINDOW", cls.lookahead_window),
            log_level=(env.get(ENV_PREFIX + "LOG_LEVEL") or cls.log_level).upper(),
        )
        if settings.timeout <= 0:
            raise ValueError(f"{ENV_PREFIX}TIMEOUT must be positive, got {settings.timeout}")
        if settings.lookahead_window < 0:
            raise ValueError(
                f"{ENV_PREFIX}LOOKAHEAD_WINDOW must be non-negative, got {settings.lookahead_window}"
            )
        return settings


def configure_logging(level: str = "INFO") -> None:
    """Set up root logging the same way for the CLI, web app and scripts."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(levelname)s: %(message)s",
    )
