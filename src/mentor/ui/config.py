"""UI configuration constants.

Centralizes magic numbers and configuration values for the UI module.
"""


class LogLevel:
    """Log level constants with numeric values for comparison.

    Values match the standard ``logging`` levels so records can be
    filtered without translation.
    """

    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40

    _names = {
        DEBUG: "DEBUG",
        INFO: "INFO",
        WARNING: "WARNING",
        ERROR: "ERROR",
    }

    _from_string = {
        "debug": DEBUG,
        "info": INFO,
        "warning": WARNING,
        "error": ERROR,
    }

    @classmethod
    def name(cls, level: int) -> str:
        """Get the name for a log level."""
        if level >= cls.ERROR:
            return "ERROR"
        return cls._names.get(level, "UNKNOWN")

    @classmethod
    def from_string(cls, level_str: str) -> int:
        """Convert string to log level. Returns DEBUG if invalid."""
        return cls._from_string.get(level_str.lower(), cls.DEBUG)


# Input history configuration
INPUT_HISTORY_MAX_SIZE = 100  # Maximum entries in input history

# Pinned panel configuration
PIN_PREVIEW_LENGTH = 160  # Characters shown per pinned message

# Log panel configuration
LOG_TIMESTAMP_FORMAT = "%H:%M:%S"
LOG_MAX_MESSAGE_LENGTH = 500  # Characters before truncating log messages

# Themes
DEFAULT_THEME = "Dark"

# Notices
IMPORT_WARNING = (
    "Importing replaces ALL saved chats with the contents of the backup. "
    "This cannot be undone. Continue?"
)
CLEAR_WARNING = "Delete every saved chat? This cannot be undone."
