"""Constants package for the i18n router."""

from .persistence import COOKIE_MAX_AGE, COOKIE_NAME, COOKIE_PATH, STORAGE_KEY

__all__ = [
    "COOKIE_NAME",
    "COOKIE_MAX_AGE",
    "COOKIE_PATH",
    "STORAGE_KEY",
]
