"""Load, query and persist .env configuration."""

from envie.config import Settings, get_settings
from envie.exceptions import (
    ConversionError,
    EnvFileIOError,
    EnvFileNotFoundError,
    EnvieError,
    EnvironmentWriteError,
    InvalidKeyError,
    InvalidValueError,
    KeyNotFoundError,
    ParseError,
)
from envie.models import Entry, EntrySource
from envie.store import ConfigStore, load

__all__ = [
    "ConfigStore",
    "ConversionError",
    "Entry",
    "EntrySource",
    "EnvFileIOError",
    "EnvFileNotFoundError",
    "EnvieError",
    "EnvironmentWriteError",
    "InvalidKeyError",
    "InvalidValueError",
    "KeyNotFoundError",
    "ParseError",
    "Settings",
    "get_settings",
    "load",
]
