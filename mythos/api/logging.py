"""Structured logging infrastructure for the API layer.

Provides JSON-formatted logging for production and human-readable
logging for development, plus a StudioLogger helper for generation events.
"""

import json
import logging
import sys
from datetime import datetime, timezone

# Extra fields copied from log records into the JSON payload
EXTRA_FIELDS = (
    "job_id",
    "stage",
    "duration",
    "error_type",
    "generation_type",
    "succeeded",
    "failed",
)


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for name in EXTRA_FIELDS:
            if hasattr(record, name):
                log_data[name] = getattr(record, name)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data)


def configure_logging(json_format: bool = True, level: int = logging.INFO) -> None:
    """Configure structured logging for the application."""
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)

    if json_format:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )

    root_logger.addHandler(handler)


class StudioLogger:
    """Logger for studio generation events with structured fields."""

    def __init__(self):
        self.logger = logging.getLogger("studio")

    def generation_started(self, job_id: str, generation_type: str) -> None:
        self.logger.info(
            f"{generation_type} generation started",
            extra={"job_id": job_id, "stage": "started", "generation_type": generation_type},
        )

    def stage_completed(self, job_id: str, stage: str, duration: float = None) -> None:
        extra = {"job_id": job_id, "stage": stage}
        if duration:
            extra["duration"] = round(duration, 2)
        self.logger.info(f"Stage completed: {stage}", extra=extra)

    def generation_completed(self, job_id: str, duration: float) -> None:
        self.logger.info(
            "Generation completed",
            extra={"job_id": job_id, "stage": "completed", "duration": round(duration, 2)},
        )

    def generation_failed(self, job_id: str, error: Exception, stage: str = None) -> None:
        extra = {"job_id": job_id, "stage": stage or "failed", "error_type": type(error).__name__}
        self.logger.error(f"Generation failed: {error}", extra=extra, exc_info=error)

    def batch_partial_failure(self, job_id: str, succeeded: int, failed: int) -> None:
        self.logger.warning(
            f"{failed} of {succeeded + failed} tasks failed",
            extra={"job_id": job_id, "succeeded": succeeded, "failed": failed},
        )


# Global studio logger instance
studio_logger = StudioLogger()
