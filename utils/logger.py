import logging
import sys
from typing import ClassVar

from config.settings import settings

# Log categories
DEBUG = "DEBUG"
INFO = "INFO"
SUCCESS = "SUCCESS"
WARNING = "WARNING"
ERROR = "ERROR"

# Custom SUCCESS level between INFO (20) and WARNING (30)
SUCCESS_LEVEL_NUM = 25
logging.addLevelName(SUCCESS_LEVEL_NUM, SUCCESS)


def success(self, message: str, *args, **kws) -> None:
    """Log a completed operation at the SUCCESS level.

    Args:
        self: Logger instance.
        message: Success message.
        *args: Variable arguments.
        **kws: Keyword arguments.
    """
    if self.isEnabledFor(SUCCESS_LEVEL_NUM):
        # Logger._log takes positional args as a tuple.
        self._log(SUCCESS_LEVEL_NUM, message, args, **kws)


logging.Logger.success = success


class Colors:
    """ANSI color codes per log category."""

    DEBUG = "\033[0;36m"  # Cyan
    INFO = "\033[0;34m"  # Blue
    SUCCESS = "\033[0;32m"  # Green
    WARNING = "\033[0;33m"  # Yellow
    ERROR = "\033[0;31m"  # Red
    RESET = "\033[0m"


def _category_formatter(color: str, category: str) -> logging.Formatter:
    return logging.Formatter(f"{color}[{category}]{Colors.RESET} | %(name)s | %(message)s")


class CustomFormatter(logging.Formatter):
    """Color-coded categorical formatting.

    Format: [CATEGORY] | logger name | message. Multi-line messages are
    prefixed line by line.
    """

    LEVEL_FORMATTERS: ClassVar[dict[int, logging.Formatter]] = {
        logging.DEBUG: _category_formatter(Colors.DEBUG, DEBUG),
        logging.INFO: _category_formatter(Colors.INFO, INFO),
        SUCCESS_LEVEL_NUM: _category_formatter(Colors.SUCCESS, SUCCESS),
        logging.WARNING: _category_formatter(Colors.WARNING, WARNING),
        logging.ERROR: _category_formatter(Colors.ERROR, ERROR),
    }
    FALLBACK_FORMATTER: ClassVar[logging.Formatter] = logging.Formatter(
        "[%(levelname)s] | %(name)s | %(message)s"
    )

    def format(self, record: logging.LogRecord) -> str:
        """Format the record with its category color, one prefix per message line.

        Args:
            record: The logging record to format.

        Returns:
            The formatted log string.
        """
        formatter = self.LEVEL_FORMATTERS.get(record.levelno, self.FALLBACK_FORMATTER)

        message = record.getMessage()
        if "\n" not in message:
            return formatter.format(record)

        formatted_lines = []
        for line in message.split("\n"):
            line_record = logging.makeLogRecord(record.__dict__)
            line_record.msg = line
            line_record.args = None
            formatted_lines.append(formatter.format(line_record))
        return "\n".join(formatted_lines)


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger with the categorical stdout handler attached once."""
    logger = logging.getLogger(name or settings.LOGGER_NAME)

    if not logger.handlers:
        logger.setLevel(settings.LOG_LEVEL)

        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(CustomFormatter())
        logger.addHandler(handler)

    return logger
