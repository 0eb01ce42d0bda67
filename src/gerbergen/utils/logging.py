"""
Logging for gerbergen runs.

A run that writes a Gerber file can keep a log next to it: setup_logger()
opens logs/gerbergen_{output_name}_{timestamp}.log in the output directory
and prunes that directory down to the newest KEEP_LOG_COUNT gerbergen logs.

GerberLogger is class-level state. Until setup_logger() is called every
logging call is a no-op, so importing the library never configures logging.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

LOGGER_NAME = "gerbergen"
LOG_PREFIX = "gerbergen_"
KEEP_LOG_COUNT = 5

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class GerberLogger:
    """Class-level logger for Gerber generation runs."""

    _logger: Optional[logging.Logger] = None
    _current_log_file: Optional[Path] = None

    @staticmethod
    def log_path_for(output_path: Path) -> Path:
        """Log file for a Gerber output: <dir>/logs/gerbergen_<stem>_<timestamp>.log"""
        # Seconds plus the first microsecond digit
        stamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")[:17]
        return output_path.parent / "logs" / f"{LOG_PREFIX}{output_path.stem}_{stamp}.log"

    @classmethod
    def _prune_logs(cls, logs_dir: Path, keep: int = KEEP_LOG_COUNT) -> None:
        newest_first = sorted(
            logs_dir.glob(f"{LOG_PREFIX}*.log"),
            key=lambda p: p.stat().st_mtime,
            reverse=True,
        )
        for stale in newest_first[keep:]:
            try:
                stale.unlink()
            except OSError as e:
                cls.debug(f"Could not remove old log {stale}: {e}")

    @classmethod
    def _close_handlers(cls) -> None:
        if cls._logger is None:
            return
        for handler in list(cls._logger.handlers):
            cls._logger.removeHandler(handler)
            handler.close()

    @classmethod
    def setup_logger(cls, file_path: str, log_level: int = logging.INFO) -> logging.Logger:
        """
        Start logging for one output file.

        Args:
            file_path: Gerber file the run writes
            log_level: Level of the log file; the console only gets WARNING and up

        Returns:
            The configured 'gerbergen' logger
        """
        log_path = cls.log_path_for(Path(file_path))
        log_path.parent.mkdir(parents=True, exist_ok=True)

        cls._close_handlers()
        logger = logging.getLogger(LOGGER_NAME)
        logger.setLevel(log_level)

        formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
        for handler, level in (
            (logging.FileHandler(log_path, mode="w", encoding="utf-8"), log_level),
            (logging.StreamHandler(), logging.WARNING),
        ):
            handler.setLevel(level)
            handler.setFormatter(formatter)
            logger.addHandler(handler)

        cls._logger = logger
        cls._current_log_file = log_path
        logger.info(f"gerbergen logging started for file: {file_path}")
        logger.info(f"Log file: {log_path}")

        # The new file already exists here and counts towards the kept logs
        cls._prune_logs(log_path.parent)
        return logger

    @classmethod
    def get_logger(cls) -> Optional[logging.Logger]:
        return cls._logger

    @classmethod
    def get_log_file_path(cls) -> Optional[Path]:
        return cls._current_log_file

    @classmethod
    def _log(cls, level: int, message: str) -> None:
        if cls._logger is not None:
            cls._logger.log(level, message)

    @classmethod
    def debug(cls, message: str) -> None:
        cls._log(logging.DEBUG, message)

    @classmethod
    def info(cls, message: str) -> None:
        cls._log(logging.INFO, message)

    @classmethod
    def warning(cls, message: str) -> None:
        cls._log(logging.WARNING, message)

    @classmethod
    def error(cls, message: str) -> None:
        cls._log(logging.ERROR, message)

    @classmethod
    def success(cls, message: str) -> None:
        """Info-level message marked 'OK: '"""
        cls._log(logging.INFO, f"OK: {message}")

    @classmethod
    def cleanup(cls) -> None:
        """Close the log file and go back to silent no-op logging."""
        cls._close_handlers()
        cls._logger = None
        cls._current_log_file = None
