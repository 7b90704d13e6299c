"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger

from bizbook_api.config import settings


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

    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_payment_marked_paid(
    request_id: str,
    user_id: str,
    account_type: str,
    amount: float,
    duration_ms: float,
) -> None:
    """Log a completed mark-as-paid transaction"""
    logging.info(
        "Payment marked as paid",
        extra={
            "request_id": request_id,
            "user_id": user_id,
            "step": "mark_paid_complete",
            "account_type": account_type,
            "amount": amount,
            "duration_ms": duration_ms,
        },
    )


def log_snapshot_created(request_id: str, user_id: str, net_worth: float, month_over_month_change) -> None:
    logging.info(
        "Net worth snapshot created",
        extra={
            "request_id": request_id,
            "user_id": user_id,
            "step": "snapshot_created",
            "net_worth": net_worth,
            "month_over_month_change": month_over_month_change,
        },
    )
