"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime
from typing import Any, Dict
from pythonjsonlogger import jsonlogger
from woundcare_revenue.domain.models import Progression


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def __init__(self, *args: Any, service: str = "woundcare-revenue", **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.service = service

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.utcnow().isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = self.service


def setup_logging(level: str = "INFO", service: str = "woundcare-revenue") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s",
        service=service,
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_progression(
    request_id: str,
    requested_by: str | None,
    progression: Progression,
    duration_ms: float,
) -> None:
    """Log structured progression outcome for analysis"""
    logging.info(
        "Progression computed",
        extra={
            "request_id": request_id,
            "requested_by": requested_by,
            "step": "progression_complete",
            "billing_code": progression.product.billing_code,
            "treatment_count": progression.treatment_count,
            "closure_rate_percent": str(progression.closure_rate_percent),
            "total_billable": str(progression.totals.total_billable),
            "net_profit": str(progression.totals.net_profit),
            "duration_ms": duration_ms,
        },
    )
