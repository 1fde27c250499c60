"""Request logging for the relay."""

import logging
import sqlite3
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path

from core.config import REQUEST_LOG_DB_PATH, REQUEST_LOG_ENABLED

logger = logging.getLogger(__name__)


@dataclass
class RequestLog:
    """Captured request/response data for one relayed call."""

    request_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )
    endpoint: str = ""
    method: str = ""
    client_ip: str | None = None
    target_host: str | None = None
    status_code: int = 0
    error_message: str | None = None
    processing_time_ms: int = 0
    response_size_bytes: int | None = None


def log_request(
    log: RequestLog,
    enabled: bool = REQUEST_LOG_ENABLED,
    db_path: Path = REQUEST_LOG_DB_PATH,
) -> None:
    """Emit the request to the application log and, if enabled, to SQLite."""
    logger.info(
        f"{log.method} {log.target_host or '-'} -> {log.status_code} "
        f"({log.processing_time_ms} ms)"
    )
    if not enabled:
        return

    conn = sqlite3.connect(db_path)
    try:
        conn.execute(
            """
            INSERT INTO relay_requests (
                request_id, timestamp, endpoint, method, client_ip,
                target_host, status_code, error_message, processing_time_ms,
                response_size_bytes
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        """,
            (
                log.request_id,
                log.timestamp,
                log.endpoint,
                log.method,
                log.client_ip,
                log.target_host,
                log.status_code,
                log.error_message,
                log.processing_time_ms,
                log.response_size_bytes,
            ),
        )
        conn.commit()
    finally:
        conn.close()
