import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterable, List, Sequence, Tuple

from fastapi import Depends

from config import AppConfig, get_app_config
from utils.settings import DEFAULT_SETTINGS, serialize_settings
from .schema import SCHEMA_SQL, INDEXES_SQL, SCHEMA_VERSION, TABLE_COLUMNS

logger = logging.getLogger(__name__)

SAMPLE_VIDEO = ("Sample Tutorial", "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
                "A sample video to test the interactive overlay functionality", "TRUE")

# (timestamp, title, content, type, next action, correct, incorrect 1-3, explanation, correct fb, incorrect fb)
SAMPLE_OVERLAYS = [
    (5, "Key Point #1", "This is an important concept explained at this timestamp.",
     "info", "continue", "", "", "", "", "", "", ""),
    (10, "Interactive Quiz", "Based on what you've seen so far, which option is correct?",
     "quiz", "continue", "This response is correct", "Incorrect option #1", "Incorrect option #2",
     "Incorrect option #3", "The correct answer demonstrates understanding of the concept.",
     "Well done! You've understood the concept.", "Not quite. Review the video again for clarification."),
    (15, "True or False", "The statement presented in the video at 0:12 is accurate.",
     "true_false", "next_question", "TRUE", "FALSE", "", "", "", "", ""),
    (20, "Branching Question", "Do you want to learn more about this topic?",
     "quiz", "if_correct:25", "Yes, tell me more", "No, continue with the video", "", "", "", "", ""),
    (30, "Final Question", "What was the main takeaway from this video?",
     "quiz", "end", "The correct main takeaway", "An incorrect interpretation", "Another incorrect option", "",
     "The main takeaway helps synthesize the key concepts presented throughout the video.", "", ""),
]


def init_db(db_path: Path):
    """Initialize the database by creating tables and indexes if they don't exist."""
    db_path.parent.mkdir(parents=True, exist_ok=True)
    with get_conn(db_path) as conn:
        conn.executescript(SCHEMA_SQL)
        conn.executescript(INDEXES_SQL)
        ensure_default_settings(conn)
        ensure_schema_version(conn)
        conn.commit()


def ensure_default_settings(conn: sqlite3.Connection) -> None:
    """Seed the settings table with the default set when it is empty."""
    cursor = conn.cursor()
    cursor.execute("SELECT COUNT(*) FROM settings")
    if (cursor.fetchone()[0] or 0) > 0:
        return
    cursor.executemany(
        "INSERT INTO settings (setting, value, description) VALUES (?, ?, ?)",
        serialize_settings({name: value for name, (value, _) in DEFAULT_SETTINGS.items()}),
    )


def get_schema_version(conn: sqlite3.Connection) -> int:
    """Read the SQLite schema version from PRAGMA user_version."""
    cursor = conn.cursor()
    cursor.execute("PRAGMA user_version")
    row = cursor.fetchone()
    return int(row[0]) if row else 0


def set_schema_version(conn: sqlite3.Connection, version: int) -> None:
    """Set the SQLite schema version via PRAGMA user_version."""
    conn.execute(f"PRAGMA user_version = {int(version)}")


def ensure_schema_version(conn: sqlite3.Connection) -> None:
    """Ensure the current schema version is written to the database."""
    current = get_schema_version(conn)
    if current != SCHEMA_VERSION:
        set_schema_version(conn, SCHEMA_VERSION)


def _columns(table: str) -> Tuple[str, ...]:
    if table not in TABLE_COLUMNS:
        raise ValueError(f"Unknown table: {table}")
    return TABLE_COLUMNS[table]


def _pad(values: Sequence[Any], width: int) -> List[Any]:
    padded = list(values)[:width]
    return padded + [None] * (width - len(padded))


def fetch_rows(conn: sqlite3.Connection, table: str) -> List[Tuple[int, List[Any]]]:
    """Return every row of a table as (row id, ordered values), in insertion order."""
    columns = _columns(table)
    cursor = conn.cursor()
    cursor.execute(f"SELECT id, {', '.join(columns)} FROM {table} ORDER BY id ASC")
    rows = [tuple(row) for row in cursor.fetchall()]
    return [(row[0], list(row[1:])) for row in rows]


def append_row(conn: sqlite3.Connection, table: str, values: Sequence[Any]) -> int:
    """Append one row (values in column order) and commit; returns the new row id."""
    columns = _columns(table)
    placeholders = ", ".join("?" for _ in columns)
    cursor = conn.cursor()
    cursor.execute(
        f"INSERT INTO {table} ({', '.join(columns)}) VALUES ({placeholders})",
        _pad(values, len(columns)),
    )
    conn.commit()
    return cursor.lastrowid


def replace_rows(conn: sqlite3.Connection, table: str, rows: Iterable[Sequence[Any]]) -> None:
    """Delete all rows of a table and append the new ones in a single transaction."""
    columns = _columns(table)
    placeholders = ", ".join("?" for _ in columns)
    padded = [_pad(values, len(columns)) for values in rows]
    try:
        conn.execute(f"DELETE FROM {table}")
        conn.executemany(
            f"INSERT INTO {table} ({', '.join(columns)}) VALUES ({placeholders})",
            padded,
        )
        conn.commit()
    except sqlite3.Error:
        conn.rollback()
        raise


def seed_sample_data(db_path: Path) -> None:
    """Add the sample video and its overlays unless the sample video already exists."""
    with get_conn(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT 1 FROM videos WHERE title = ?", (SAMPLE_VIDEO[0],))
        if cursor.fetchone():
            return
        append_row(conn, "videos", SAMPLE_VIDEO)
        for timestamp, title, content, kind, action, correct, wrong_1, wrong_2, wrong_3, explanation, ok_fb, bad_fb in SAMPLE_OVERLAYS:
            append_row(
                conn,
                "overlays",
                (SAMPLE_VIDEO[0], timestamp, title, content, kind, action, correct,
                 wrong_1, wrong_2, wrong_3, "", explanation, ok_fb, bad_fb),
            )
        logger.info("Seeded sample video %r with %d overlays", SAMPLE_VIDEO[0], len(SAMPLE_OVERLAYS))


@contextmanager
def get_conn(db_path: Path):
    """Context manager for SQLite connection, using row_factory for dict-like rows."""
    conn = sqlite3.connect(db_path, check_same_thread=False)
    conn.row_factory = sqlite3.Row
    try:
        yield conn
    finally:
        conn.close()


def get_db(config: AppConfig = Depends(get_app_config)):
    """FastAPI dependency that yields a DB connection and closes it afterwards."""
    with get_conn(config.db_path) as conn:
        yield conn
