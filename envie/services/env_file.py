"""Read and write the persistent .env configuration file."""

import logging
import os
import tempfile
from pathlib import Path

from envie.exceptions import (
    EnvFileIOError,
    EnvFileNotFoundError,
    InvalidKeyError,
    InvalidValueError,
    ParseError,
)

logger = logging.getLogger(__name__)

_QUOTES = ('"', "'")
_LINE_BREAKS = ("\n", "\r")


def validate_key(key: str) -> str | None:
    """Return an error message if key cannot be stored, else None."""
    if not key:
        return "Key must not be empty."
    if "=" in key:
        return f"Key {key!r} must not contain '='."
    if any(ch in key for ch in _LINE_BREAKS):
        return f"Key {key!r} must not contain line breaks."
    if key != key.strip():
        return f"Key {key!r} must not have surrounding whitespace."
    if key.startswith("#"):
        return f"Key {key!r} must not start with '#'."
    return None


def validate_value(value: str) -> str | None:
    """Return an error message if value cannot be stored, else None."""
    if any(ch in value for ch in _LINE_BREAKS):
        return "Value must not contain line breaks."
    return None


def check_entry(key: str, value: str | None = None) -> None:
    """Raise InvalidKeyError / InvalidValueError for an unstorable pair."""
    error = validate_key(key)
    if error:
        raise InvalidKeyError(error)
    if value is not None:
        error = validate_value(value)
        if error:
            raise InvalidValueError(error)


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in _QUOTES:
        return value[1:-1]
    return value


def parse_env(text: str, strict: bool = False) -> dict[str, str]:
    """Parse .env text into an ordered dict.

    Blank lines and ``#`` comments are ignored. Each remaining line is split
    on its first ``=``; key and value are trimmed and one pair of matching
    quotes around the value is removed. Later duplicates win.

    Malformed lines (no ``=`` or an empty key) are logged and skipped, or
    raise ParseError when ``strict`` is set.
    """
    result: dict[str, str] = {}
    for lineno, raw in enumerate(text.split("\n"), start=1):
        raw = raw.removesuffix("\r")
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        key, sep, value = line.partition("=")
        key = key.strip()
        if not sep or not key:
            if strict:
                raise ParseError(lineno, raw)
            logger.warning("Skipping malformed line %d", lineno)
            continue
        result[key] = _unquote(value.strip())
    return result


def _needs_quotes(value: str) -> bool:
    if value != value.strip():
        return True
    # A bare value already wrapped in matching quotes would lose them on parse
    return _unquote(value) != value


def serialize_env(values: dict[str, str]) -> str:
    """Render a mapping as .env text that parse_env reads back unchanged."""
    lines = []
    for key, value in values.items():
        check_entry(key, value)
        if _needs_quotes(value):
            value = f'"{value}"'
        lines.append(f"{key}={value}")
    return "\n".join(lines) + "\n" if lines else ""


def read_env(path: Path, encoding: str = "utf-8", strict: bool = False) -> dict[str, str]:
    """Read and parse a .env file."""
    try:
        text = path.read_text(encoding=encoding)
    except FileNotFoundError as e:
        raise EnvFileNotFoundError(
            f"Failed to read {path}. Make sure it exists."
        ) from e
    except (OSError, UnicodeDecodeError) as e:
        raise EnvFileIOError(f"Failed to read {path}: {e}") from e
    return parse_env(text, strict=strict)


def write_env_atomic(
    path: Path,
    values: dict[str, str],
    encoding: str = "utf-8",
    mode: int = 0o600,
) -> None:
    """Replace path with the serialized mapping.

    The content goes to a temporary file in the same directory first and is
    then renamed over the target, so an interrupted write never leaves a
    truncated file behind.
    """
    content = serialize_env(values)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    except OSError as e:
        raise EnvFileIOError(f"Failed to write {path}: {e}") from e
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding=encoding, newline="\n") as fh:
            fh.write(content)
            fh.flush()
            os.fsync(fh.fileno())
        tmp_path.chmod(mode)
        os.replace(tmp_path, path)
    except (OSError, UnicodeError) as e:
        tmp_path.unlink(missing_ok=True)
        raise EnvFileIOError(f"Failed to write {path}: {e}") from e
    logger.info("Wrote %d entries to %s", len(values), path)
