"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger
from finlar_gateway.config import settings


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


def log_enrichment(
    request_id: str,
    record_count: int,
    projection_count: int,
    deferred_count: int,
    duration_ms: float,
    house_id: str | None = None,
) -> None:
    """Log structured enrichment outcome"""
    logging.info(
        "Enrichment completed",
        extra={
            "request_id": request_id,
            "house_id": house_id,
            "step": "enrichment_complete",
            "record_count": record_count,
            "projection_count": projection_count,
            "deferred_count": deferred_count,
            "duration_ms": duration_ms,
        },
    )
