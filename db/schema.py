# SQL schema for the VidOverlay tabular store.
# Each table mirrors one sheet of the overlay workbook; value columns are
# loosely typed so readers see raw cell values.

SCHEMA_VERSION = 1

# Data columns per table, in sheet order (the `id` row key is excluded)
TABLE_COLUMNS = {
    "videos": ("title", "url", "description", "active"),
    "overlays": (
        "video_title",
        "timestamp",
        "title",
        "content",
        "interaction_type",
        "next_action",
        "correct_answer",
        "incorrect_answer_1",
        "incorrect_answer_2",
        "incorrect_answer_3",
        "group_name",
        "explanation",
        "correct_feedback",
        "incorrect_feedback",
        "image_url",
        "image_width",
        "image_height",
    ),
    "quiz_analytics": (
        "ts",
        "user_id",
        "video_title",
        "overlay_id",
        "quiz_type",
        "was_correct",
        "selected_option",
        "time_to_answer",
        "session_id",
    ),
    "user_data": (
        "ts",
        "session_id",
        "user_id",
        "video_title",
        "event_type",
        "event_data",
        "browser",
        "device",
    ),
    "settings": ("setting", "value", "description"),
    "user_notes": (
        "ts",
        "user_id",
        "video_title",
        "video_time",
        "note_content",
        "session_id",
    ),
}

SCHEMA_SQL = """
-- Videos
CREATE TABLE IF NOT EXISTS videos (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    title TEXT,
    url TEXT,
    description TEXT,
    active
);

-- Overlays (one row per timed interaction point)
CREATE TABLE IF NOT EXISTS overlays (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    video_title TEXT,
    timestamp,
    title TEXT,
    content TEXT,
    interaction_type TEXT,
    next_action TEXT,
    correct_answer,
    incorrect_answer_1,
    incorrect_answer_2,
    incorrect_answer_3,
    group_name TEXT,
    explanation TEXT,
    correct_feedback TEXT,
    incorrect_feedback TEXT,
    image_url TEXT,
    image_width,
    image_height
);

-- Quiz attempt log
CREATE TABLE IF NOT EXISTS quiz_analytics (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    ts TEXT NOT NULL,
    user_id TEXT NOT NULL DEFAULT 'anonymous',
    video_title TEXT NOT NULL DEFAULT '',
    overlay_id TEXT NOT NULL DEFAULT '',
    quiz_type TEXT NOT NULL DEFAULT 'quiz',
    was_correct TEXT NOT NULL DEFAULT 'FALSE',
    selected_option TEXT NOT NULL DEFAULT '',
    time_to_answer REAL NOT NULL DEFAULT 0,
    session_id TEXT NOT NULL DEFAULT ''
);

-- Viewing events
CREATE TABLE IF NOT EXISTS user_data (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    ts TEXT NOT NULL,
    session_id TEXT NOT NULL DEFAULT '',
    user_id TEXT NOT NULL DEFAULT 'anonymous',
    video_title TEXT NOT NULL DEFAULT '',
    event_type TEXT NOT NULL DEFAULT '',
    event_data TEXT NOT NULL DEFAULT '',
    browser TEXT NOT NULL DEFAULT '',
    device TEXT NOT NULL DEFAULT ''
);

-- App settings (name, serialized value, description)
CREATE TABLE IF NOT EXISTS settings (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    setting TEXT NOT NULL,
    value TEXT NOT NULL DEFAULT '',
    description TEXT NOT NULL DEFAULT ''
);

-- Viewer notes
CREATE TABLE IF NOT EXISTS user_notes (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    ts TEXT NOT NULL,
    user_id TEXT NOT NULL DEFAULT 'anonymous',
    video_title TEXT NOT NULL DEFAULT '',
    video_time REAL NOT NULL DEFAULT 0,
    note_content TEXT NOT NULL DEFAULT '',
    session_id TEXT NOT NULL DEFAULT ''
);
"""

# Indexes for performance
INDEXES_SQL = """
CREATE INDEX IF NOT EXISTS idx_overlays_video ON overlays (video_title);
CREATE INDEX IF NOT EXISTS idx_quiz_analytics_session ON quiz_analytics (session_id, video_title);
CREATE INDEX IF NOT EXISTS idx_quiz_analytics_video ON quiz_analytics (video_title);
CREATE INDEX IF NOT EXISTS idx_user_data_session ON user_data (session_id, video_title);
CREATE INDEX IF NOT EXISTS idx_user_notes_video_user ON user_notes (video_title, user_id);
CREATE INDEX IF NOT EXISTS idx_user_notes_session ON user_notes (session_id, video_title);
"""
