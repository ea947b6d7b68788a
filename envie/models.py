"""Data models for configuration entries."""

from dataclasses import dataclass
from enum import Enum


class EntrySource(str, Enum):
    FILE = "file"
    ENVIRONMENT = "environment"


@dataclass(frozen=True)
class Entry:
    """One key/value pair and where it came from. Immutable; ConfigStore.set replaces it."""

    key: str
    value: str
    source: EntrySource = EntrySource.FILE

    @property
    def from_file(self) -> bool:
        return self.source is EntrySource.FILE

    def as_pair(self) -> tuple[str, str]:
        return (self.key, self.value)
