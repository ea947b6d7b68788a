"""Errors raised by envie."""


class EnvieError(Exception):
    """Base class for every error raised by this package."""


class EnvFileNotFoundError(EnvieError, FileNotFoundError):
    """The backing .env file does not exist."""


class EnvFileIOError(EnvieError, OSError):
    """Reading or writing at the filesystem boundary failed."""


class EnvironmentWriteError(EnvFileIOError):
    """The operating system refused a process environment update."""


class ParseError(EnvieError, ValueError):
    def __init__(self, lineno: int, line: str):
        self.lineno = lineno
        self.line = line
        super().__init__(f"Malformed line {lineno}: {line!r}")


class ConversionError(EnvieError, ValueError):
    def __init__(self, key: str, value: str, target: str):
        self.key = key
        self.value = value
        self.target = target
        super().__init__(f"Invalid {target} value for key '{key}'")


class KeyNotFoundError(EnvieError, KeyError):
    def __init__(self, key: str):
        self.key = key
        super().__init__(key)

    def __str__(self) -> str:
        return f"Key '{self.key}' not found"


class InvalidKeyError(EnvieError, ValueError):
    """A key that cannot be stored in a .env file."""


class InvalidValueError(EnvieError, ValueError):
    """A value that cannot be stored on a single .env line."""
