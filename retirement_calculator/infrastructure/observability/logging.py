"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger

from retirement_calculator.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_calculation(
    request_id: str,
    lifestyle_type: str,
    outcome: str,
    duration_ms: float,
    future_value: str | None = None,
) -> None:
    """Log structured calculation outcome for analysis"""
    logging.info(
        "Calculation completed",
        extra={
            "request_id": request_id,
            "lifestyle_type": lifestyle_type,
            "step": "calculation_complete",
            "outcome": outcome,
            "future_value": future_value,
            "duration_ms": duration_ms,
        },
    )


def log_cache_operation(operation: str, key: str | None, ok: bool, message: str) -> None:
    """Log the outcome of a cache maintenance operation"""
    logging.log(
        logging.INFO if ok else logging.WARNING,
        "Cache maintenance",
        extra={
            "step": "cache_maintenance",
            "operation": operation,
            "key": key,
            "outcome": "success" if ok else "error",
            "detail": message,
        },
    )
