import logging
import sys
import time

LOGGER_NAME = "hovercat"


class ConsoleFormatter(logging.Formatter):
    """Compact one-line format for terminal display"""

    COLORS = {
        "DEBUG": "\033[90m",
        "INFO": "\033[36m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[1;31m",
    }
    RESET = "\033[0m"

    def __init__(self, use_color: bool = True):
        super().__init__()
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        ts = time.strftime("%H:%M:%S", time.localtime(record.created))
        name = record.name.replace(f"{LOGGER_NAME}.", "")
        line = f"{ts} [{record.levelname[0]}] {name}: {record.getMessage()}"
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        if not self.use_color:
            return line
        return f"{self.COLORS.get(record.levelname, '')}{line}{self.RESET}"


def setup_logging(level: str = "info") -> logging.Logger:
    root = logging.getLogger(LOGGER_NAME)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(ConsoleFormatter(use_color=sys.stderr.isatty()))
    root.addHandler(handler)
    root.propagate = False
    return root
