"""Config module - settings and constants."""

from observatorio.config.settings import Settings, get_settings, configure_logging
from observatorio.config.constants import (
    TARGET_DEPUTY,
    TARGET_VARIANTS,
    PERIODOS,
    FEATURED_IDS,
)

__all__ = [
    "Settings",
    "get_settings",
    "configure_logging",
    "TARGET_DEPUTY",
    "TARGET_VARIANTS",
    "PERIODOS",
    "FEATURED_IDS",
]
