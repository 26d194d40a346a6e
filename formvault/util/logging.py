"""
Structured logging for store, form and statistics operations.
"""

import logging
from typing import Any, Dict

from ..core.config import debug_enabled


class StructuredLogger:
    """Structured logger for formvault operations."""

    def __init__(self, name: str = "formvault"):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(logging.DEBUG if debug_enabled() else logging.INFO)

        # Create handler if not already set
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)

    def log_operation(self, operation: str, status: str, details: Dict[str, Any] = None,
                      level: int = logging.INFO):
        """Log a structured operation."""
        message = f"Operation: {operation}, Status: {status}"
        if details:
            message += f", Details: {details}"

        self.logger.log(level, message)

    def log_store_operation(self, operation: str, scope: str, record_id: str = None,
                            value: str = None, status: str = "success"):
        """Log a scoped key/value operation."""
        details = {"scope": scope}
        if record_id is not None:
            details["id"] = record_id
        if value is not None:
            details["value"] = preview(value)

        self.log_operation(f"store.{operation}", status, details, level=logging.DEBUG)

    def log_form_operation(self, operation: str, scope: str, fields: int, inputs: int,
                           status: str = "success"):
        """Log a collect/export pass over form inputs."""
        details = {"scope": scope, "fields": fields, "inputs": inputs}
        self.log_operation(f"form.{operation}", status, details, level=logging.DEBUG)

    def log_formula_error(self, formula: str, reason: str, sample_size: int):
        """Log a statistics call rejected for an invalid sample."""
        details = {"reason": reason, "sample_size": sample_size}
        self.log_operation(f"formula.{formula}", "rejected", details, level=logging.WARNING)

    # Standard logging methods for compatibility
    def info(self, message: str) -> None:
        """Log an info message."""
        self.logger.info(message)

    def warning(self, message: str) -> None:
        """Log a warning message."""
        self.logger.warning(message)

    def error(self, message: str) -> None:
        """Log an error message."""
        self.logger.error(message)

    def debug(self, message: str) -> None:
        """Log a debug message."""
        self.logger.debug(message)


def preview(value: Any, limit: int = 50) -> str:
    """Shorten a value for log output."""
    text = str(value)
    return text[:limit] + "..." if len(text) > limit else text


# Global logger instance
logger = StructuredLogger()
