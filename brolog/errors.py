"""Exception hierarchy.

ConfigError  -> fatal at startup, nothing is parsed.
HeaderError  -> fatal for one file, the run continues with the next file.
FieldError   -> one line is dropped, the file continues.
"""


class BroLogError(Exception):
    """Base class for every error raised by brolog."""


class ConfigError(BroLogError):
    """Invalid configuration or input location."""


class HeaderError(BroLogError):
    """A log file's header block cannot be trusted."""


class FieldError(BroLogError):
    """A single field of a data line failed to convert."""

    def __init__(self, field: str, value: str, reason: str):
        super().__init__(f"field '{field}': {reason} (value {value!r})")
        self.field = field
        self.value = value
        self.reason = reason
