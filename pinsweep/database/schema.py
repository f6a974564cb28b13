from pinsweep.database.connection import get_connection

_SCHEMA_LOCK_KEY = 7_246_733

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS file_tasks (
    id SERIAL PRIMARY KEY,
    file_path TEXT NOT NULL UNIQUE,
    fingerprint TEXT NOT NULL,
    status TEXT NOT NULL DEFAULT 'pending'
        CHECK (status IN ('pending', 'in_progress', 'completed', 'failed')),
    passcode_required BOOLEAN DEFAULT NULL,
    found_passcode TEXT DEFAULT NULL,
    error_message TEXT DEFAULT NULL,
    started_at TIMESTAMPTZ DEFAULT NULL,
    completed_at TIMESTAMPTZ DEFAULT NULL,
    duration_minutes DOUBLE PRECISION DEFAULT NULL,
    owner TEXT DEFAULT NULL
);

CREATE INDEX IF NOT EXISTS file_tasks_fingerprint_idx ON file_tasks (fingerprint);

CREATE TABLE IF NOT EXISTS trial_batches (
    id SERIAL PRIMARY KEY,
    file_id INTEGER NOT NULL REFERENCES file_tasks (id) ON DELETE CASCADE,
    batch_index INTEGER NOT NULL,
    range_from TEXT NOT NULL,
    range_to TEXT NOT NULL,
    status TEXT NOT NULL DEFAULT 'pending'
        CHECK (status IN ('pending', 'checked_out', 'completed')),
    checked_out_at TIMESTAMPTZ DEFAULT NULL,
    completed_at TIMESTAMPTZ DEFAULT NULL,
    owner TEXT DEFAULT NULL,
    UNIQUE (file_id, batch_index)
);

CREATE INDEX IF NOT EXISTS trial_batches_status_idx ON trial_batches (status, file_id);
"""


def ensure_schema() -> None:
    """Create the file_tasks and trial_batches tables if they do not exist."""
    with get_connection() as conn:
        # Serializes concurrent bootstraps from several workers.
        conn.execute("SELECT pg_advisory_xact_lock(%s)", (_SCHEMA_LOCK_KEY,))
        conn.execute(SCHEMA_SQL)
        conn.commit()
