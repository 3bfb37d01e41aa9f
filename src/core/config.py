"""
Application settings.

Only a handful of knobs, read once from the environment. Board geometry is not configurable
and lives next to the types that use it (see src/chess3d/cell.py).
"""

import logging
import os
from dataclasses import dataclass

LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"


def _env_flag(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    log_level: str = "INFO"
    log_format: str = LOG_FORMAT
    # NOTE: off by default. The rules only generate pseudo-legal moves; turning this on changes the game.
    filter_self_check: bool = False


def get_settings() -> Settings:
    """Build the settings from environment variables (falling back to the defaults)."""
    return Settings(
        log_level=os.environ.get("CHESS3D_LOG_LEVEL", "INFO").upper(),
        filter_self_check=_env_flag("CHESS3D_FILTER_SELF_CHECK", False),
    )


def configure_logging(settings: Settings) -> None:
    """Basic logging setup for applications embedding the engine. Libraries should not call this."""
    logging.basicConfig(level=settings.log_level, format=settings.log_format)
