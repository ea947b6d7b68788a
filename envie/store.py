"""Load, query and persist .env configuration."""

import logging
import re
from collections.abc import Iterator
from pathlib import Path

from envie.config import Settings, get_settings
from envie.exceptions import ConversionError, KeyNotFoundError
from envie.models import Entry, EntrySource
from envie.services import process_env
from envie.services.env_file import (
    check_entry,
    read_env,
    validate_key,
    validate_value,
    write_env_atomic,
)

logger = logging.getLogger(__name__)

_TRUE_TOKENS = {"true", "1"}
_FALSE_TOKENS = {"false", "0"}
_INT_PATTERN = re.compile(r"^[+-]?[0-9]+$")


def _merge(file_values: dict[str, str], environ: dict[str, str]) -> dict[str, Entry]:
    """File entries first; the environment only fills keys the file lacks."""
    entries = {
        key: Entry(key, value, EntrySource.FILE) for key, value in file_values.items()
    }
    for key, value in environ.items():
        if key not in entries:
            entries[key] = Entry(key, value, EntrySource.ENVIRONMENT)
    return entries


class ConfigStore:
    """Configuration loaded from a .env file merged with the process environment.

    Not thread-safe. Every mutation rewrites the backing file before
    returning; if that write fails the in-memory view may be ahead of the
    file and callers should ``reload()``.

    Only entries read from the file or written with ``set`` are persisted.
    Values filled in from the process environment stay in memory unless
    ``Settings.persist_environment`` is enabled, in which case the whole
    mapping is written.
    """

    def __init__(self, source_path: Path, entries: dict[str, Entry], settings: Settings):
        self.source_path = source_path
        self.settings = settings
        self._entries = entries

    @classmethod
    def load(cls, path: Path | str | None = None, settings: Settings | None = None) -> "ConfigStore":
        """Read the .env file in the working directory (or ``path``)."""
        if settings is None:
            settings = get_settings()
        source_path = Path(path if path is not None else settings.env_filename).resolve()
        entries = cls._read(source_path, settings)
        logger.info(
            "Loaded %d entries from %s (%d total with environment)",
            sum(1 for e in entries.values() if e.from_file),
            source_path,
            len(entries),
        )
        return cls(source_path, entries, settings)

    @staticmethod
    def _read(source_path: Path, settings: Settings) -> dict[str, Entry]:
        file_values = read_env(
            source_path,
            encoding=settings.encoding,
            strict=settings.strict_parsing,
        )
        return _merge(file_values, process_env.snapshot_environment())

    def reload(self) -> None:
        """Re-read the backing file and the current process environment."""
        self._entries = self._read(self.source_path, self.settings)
        logger.debug("Reloaded %s", self.source_path)

    # --- Accessors ---

    def get(self, key: str) -> str | None:
        entry = self._entries.get(key)
        return entry.value if entry is not None else None

    def entry(self, key: str) -> Entry | None:
        return self._entries.get(key)

    def _require(self, key: str) -> str:
        value = self.get(key)
        if value is None:
            raise KeyNotFoundError(key)
        return value

    def get_bool(self, key: str) -> bool:
        """Coerce ``true``/``1`` and ``false``/``0`` (any case) to a bool."""
        value = self._require(key)
        token = value.strip().lower()
        if token in _TRUE_TOKENS:
            return True
        if token in _FALSE_TOKENS:
            return False
        raise ConversionError(key, value, "boolean")

    def get_int(self, key: str) -> int:
        """Parse the value as a base-10 signed integer."""
        value = self._require(key)
        token = value.strip()
        # int() alone would also accept underscores and non-ASCII digits
        if not _INT_PATTERN.match(token):
            raise ConversionError(key, value, "integer")
        return int(token)

    def get_all(self) -> list[tuple[str, str]]:
        """Snapshot of every entry, in insertion order."""
        return [entry.as_pair() for entry in self._entries.values()]

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    # --- Mutation ---

    def set(self, key: str, value: str) -> None:
        """Insert or update key and rewrite the backing file."""
        check_entry(key, value)
        # Reassigning an existing key keeps its position
        self._entries[key] = Entry(key, value, EntrySource.FILE)
        logger.debug("Set %s in %s", key, self.source_path)
        self._persist()

    def remove(self, key: str) -> None:
        """Drop key and rewrite the backing file. Absent keys are a no-op."""
        if key not in self._entries:
            logger.debug("Remove of absent key %s ignored", key)
            return
        del self._entries[key]
        logger.debug("Removed %s from %s", key, self.source_path)
        self._persist()

    def _persisted_values(self) -> dict[str, str]:
        values = {}
        for key, entry in self._entries.items():
            if entry.from_file:
                values[key] = entry.value
            elif self.settings.persist_environment:
                if validate_key(key) or validate_value(entry.value):
                    logger.warning(
                        "Not persisting environment variable %s: not representable in a .env line",
                        key,
                    )
                    continue
                values[key] = entry.value
        return values

    def _persist(self) -> None:
        write_env_atomic(
            self.source_path,
            self._persisted_values(),
            encoding=self.settings.encoding,
            mode=self.settings.file_mode,
        )

    # --- Process environment ---

    def set_system_environment(self, key: str, value: str) -> None:
        """Set key in the live process environment.

        Mutates process-wide state shared with all other code in this
        process; callers must synchronize it with concurrent environment
        reads. The store's entries and the backing file are left untouched;
        call ``set`` as well to update them.
        """
        process_env.set_system_environment(key, value)


def load(path: Path | str | None = None, settings: Settings | None = None) -> ConfigStore:
    return ConfigStore.load(path, settings)
