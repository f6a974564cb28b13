import logging
import sys

_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"


class Log:
    """Run-scoped logger handed to every component that reports progress."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger if logger is not None else logging.getLogger("pinsweep")

    @classmethod
    def configure(cls, log_level: str, log_file: str | None = None) -> "Log":
        """Build the run logger with a stdout handler and an optional file handler."""
        logger = logging.getLogger("pinsweep")
        logger.setLevel(log_level.upper())
        if not logger.handlers:
            formatter = logging.Formatter(_FORMAT)
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(formatter)
            logger.addHandler(handler)
            if log_file:
                file_handler = logging.FileHandler(log_file, encoding="utf-8")
                file_handler.setFormatter(formatter)
                logger.addHandler(file_handler)
        return cls(logger)

    def info(self, message: str, **kwargs: object) -> None:
        """Log an info message."""
        self._logger.info(message, extra=kwargs)

    def success(self, message: str, **kwargs: object) -> None:
        """Log a success line (passcode found)."""
        self._logger.info(f"SUCCESS: {message}", extra=kwargs)

    def skip(self, message: str, **kwargs: object) -> None:
        """Log a skipped file."""
        self._logger.info(f"SKIP: {message}", extra=kwargs)

    def error(self, message: str, **kwargs: object) -> None:
        """Log an error message."""
        self._logger.error(message, extra=kwargs)

    def warning(self, message: str, **kwargs: object) -> None:
        """Log a warning message."""
        self._logger.warning(message, extra=kwargs)

    def debug(self, message: str, **kwargs: object) -> None:
        """Log a debug message."""
        self._logger.debug(message, extra=kwargs)
