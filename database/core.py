# database/core.py
import sqlite3
import config

DB_FILE = config.DATABASE_PATH


def get_db_connection():
    """Create a database connection."""
    # Wait for locks instead of failing immediately
    conn = sqlite3.connect(DB_FILE, check_same_thread=False, timeout=30.0)

    # WAL mode so request threads can read while the fixture loader writes
    conn.execute("PRAGMA journal_mode = WAL")
    conn.execute("PRAGMA synchronous = NORMAL")

    # Enable row factory for dict-like access
    conn.row_factory = sqlite3.Row
    return conn


def initialize_database(recreate: bool = False):
    """Create the database and tables if they don't exist."""
    with get_db_connection() as conn:
        cur = conn.cursor()

        if recreate:
            cur.execute("DROP TABLE IF EXISTS users")

        cur.execute("""
        CREATE TABLE IF NOT EXISTS users (
            id INTEGER PRIMARY KEY,
            name TEXT NOT NULL DEFAULT '',
            state TEXT NOT NULL UNIQUE,
            whitelisted BOOLEAN NOT NULL DEFAULT 0
        )
        """)
        conn.commit()
