#!/usr/bin/env python3
"""Create the relay request-log SQLite3 database."""

import sqlite3
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import REQUEST_LOG_DB_PATH


def create_database(db_path: Path = REQUEST_LOG_DB_PATH):
    """Create the database and tables if they don't exist."""
    # Ensure directory exists
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(db_path)
    cursor = conn.cursor()

    cursor.execute("""
        CREATE TABLE IF NOT EXISTS relay_requests (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            request_id TEXT UNIQUE NOT NULL,
            timestamp TEXT NOT NULL,
            endpoint TEXT NOT NULL,
            method TEXT NOT NULL,
            client_ip TEXT,
            target_host TEXT,
            status_code INTEGER NOT NULL,
            error_message TEXT,
            processing_time_ms INTEGER NOT NULL,
            response_size_bytes INTEGER
        )
    """)

    cursor.execute(
        "CREATE INDEX IF NOT EXISTS idx_relay_requests_timestamp ON relay_requests(timestamp)"
    )
    cursor.execute(
        "CREATE INDEX IF NOT EXISTS idx_relay_requests_status ON relay_requests(status_code)"
    )

    conn.commit()
    conn.close()
    print(f"Database created successfully at: {db_path}")


if __name__ == "__main__":
    create_database()
