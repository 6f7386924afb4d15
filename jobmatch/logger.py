"""
Structured logging system for jobmatch.

Provides centralized logging with console and file outputs, log levels,
and counters for monitoring ingestion runs.
"""

import logging
import sys
from pathlib import Path
from typing import Optional
from datetime import datetime
import json


def _empty_metrics() -> dict:
    return {
        "rows_seen": 0,
        "inserted": 0,
        "deduplicated_exact": 0,
        "deduplicated_fuzzy": 0,
        "validation_errors": 0,
        "errors_by_type": {},
    }


class StructuredLogger:
    """
    Centralized logger with support for console and file outputs.
    Tracks ingestion metrics for the import pipeline.
    """

    def __init__(
        self,
        name: str = "jobmatch",
        level: str = "INFO",
        log_dir: Optional[Path] = None,
        enable_file: bool = True,
        enable_console: bool = True,
    ):
        """
        Initialize the structured logger.

        Args:
            name: Logger name
            level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_dir: Directory for log files (default: logs/)
            enable_file: Write logs to file
            enable_console: Output logs to console
        """
        self.logger = logging.getLogger(name)
        self.metrics = _empty_metrics()
        self.configure(level, log_dir, enable_file, enable_console)

    def configure(
        self,
        level: str = "INFO",
        log_dir: Optional[Path] = None,
        enable_file: bool = True,
        enable_console: bool = True,
    ) -> None:
        """Replace the handlers in place so module-level references stay valid."""
        self.logger.setLevel(getattr(logging, level.upper()))
        for handler in list(self.logger.handlers):
            handler.close()
        self.logger.handlers.clear()

        if enable_console:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(getattr(logging, level.upper()))
            console_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            console_handler.setFormatter(console_formatter)
            self.logger.addHandler(console_handler)

        if enable_file:
            if log_dir is None:
                log_dir = Path("logs")
            log_dir.mkdir(parents=True, exist_ok=True)

            log_file = log_dir / f"jobmatch_{datetime.now().strftime('%Y%m%d')}.log"
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setLevel(logging.DEBUG)  # Always log everything to file
            file_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            file_handler.setFormatter(file_formatter)
            self.logger.addHandler(file_handler)

    def debug(self, message: str, **kwargs):
        """Log debug message with optional context."""
        self._log(logging.DEBUG, message, kwargs)

    def info(self, message: str, **kwargs):
        """Log info message with optional context."""
        self._log(logging.INFO, message, kwargs)

    def warning(self, message: str, **kwargs):
        """Log warning message with optional context."""
        self._log(logging.WARNING, message, kwargs)

    def error(self, message: str, **kwargs):
        """Log error message with optional context."""
        self._log(logging.ERROR, message, kwargs)

    def critical(self, message: str, **kwargs):
        """Log critical message with optional context."""
        self._log(logging.CRITICAL, message, kwargs)

    def _log(self, level: int, message: str, context: dict):
        if not self.logger.isEnabledFor(level):
            return
        if context:
            message = f"{message} | Context: {json.dumps(context, default=str)}"
        self.logger.log(level, message)

    # Metric tracking methods

    def record_row(self):
        """Count an import row as seen."""
        self.metrics["rows_seen"] += 1

    def record_insert(self):
        self.metrics["inserted"] += 1

    def record_duplicate(self, fuzzy: bool = False):
        """Record a skipped duplicate, split by how it was detected."""
        key = "deduplicated_fuzzy" if fuzzy else "deduplicated_exact"
        self.metrics[key] += 1

    def record_failure(self, error_type: str):
        """Record a row that could not be imported."""
        if error_type == "ValidationError":
            self.metrics["validation_errors"] += 1
        if error_type not in self.metrics["errors_by_type"]:
            self.metrics["errors_by_type"][error_type] = 0
        self.metrics["errors_by_type"][error_type] += 1

    def get_metrics(self) -> dict:
        """Return current metrics with derived totals."""
        metrics_copy = dict(self.metrics)
        metrics_copy["errors_by_type"] = dict(self.metrics["errors_by_type"])
        metrics_copy["deduplicated"] = (
            self.metrics["deduplicated_exact"] + self.metrics["deduplicated_fuzzy"]
        )
        if metrics_copy["rows_seen"] > 0:
            metrics_copy["duplicate_rate"] = round(
                metrics_copy["deduplicated"] / metrics_copy["rows_seen"], 3
            )
        return metrics_copy

    def reset_metrics(self):
        self.metrics = _empty_metrics()

    def log_metrics_summary(self):
        """Log a summary of current metrics."""
        metrics = self.get_metrics()

        self.info("=== Import Session Metrics ===")
        self.info(f"Rows: {metrics['rows_seen']}")
        self.info(f"Inserted: {metrics['inserted']}")
        self.info(
            f"Deduplicated: {metrics['deduplicated']} "
            f"(exact {metrics['deduplicated_exact']}, fuzzy {metrics['deduplicated_fuzzy']})"
        )

        if metrics["errors_by_type"]:
            self.info("Error Types:")
            for error_type, count in metrics["errors_by_type"].items():
                self.info(f"  {error_type}: {count}")


# Global logger instance
_global_logger: Optional[StructuredLogger] = None


def get_logger(
    name: str = "jobmatch",
    level: str = "INFO",
    log_dir: Optional[Path] = None,
    **kwargs
) -> StructuredLogger:
    """
    Get or create the global logger instance.

    File logging is only switched on when a log_dir is given.

    Args:
        name: Logger name
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_dir: Directory for log files
        **kwargs: Additional arguments passed to StructuredLogger

    Returns:
        StructuredLogger instance
    """
    global _global_logger

    if _global_logger is None:
        kwargs.setdefault("enable_file", log_dir is not None)
        _global_logger = StructuredLogger(name=name, level=level, log_dir=log_dir, **kwargs)

    return _global_logger


def configure_logger(level: str = "INFO", log_dir: Optional[Path] = None) -> StructuredLogger:
    """Reconfigure the global logger's level and outputs (used by the CLI)."""
    logger = get_logger()
    logger.configure(level=level, log_dir=log_dir, enable_file=log_dir is not None)
    return logger


def reset_logger():
    """Reset the global logger (useful for testing)."""
    global _global_logger
    _global_logger = None
