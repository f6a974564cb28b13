from typing import Any

from psycopg.rows import dict_row

from pinsweep.database.connection import get_connection
from pinsweep.database.models import UNREADABLE, FileStatus, FileTask
from pinsweep.database.repositories.base import BaseFileQueue

_FILE_COLUMNS = (
    "id, file_path, fingerprint, status, passcode_required, found_passcode, "
    "error_message, started_at, completed_at, duration_minutes, owner"
)


def _row_to_file_task(row: dict[str, Any]) -> FileTask:
    return FileTask(
        id=row["id"],
        file_path=row["file_path"],
        fingerprint=row["fingerprint"],
        status=FileStatus(row["status"]),
        passcode_required=row["passcode_required"],
        found_passcode=row["found_passcode"],
        error_message=row["error_message"],
        started_at=row["started_at"],
        completed_at=row["completed_at"],
        duration_minutes=row["duration_minutes"],
        owner=row["owner"],
    )


class FileRepository(BaseFileQueue):
    """Database operations for the file_tasks table."""

    def add_if_new(self, file_path: str, fingerprint: str) -> bool:
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    INSERT INTO file_tasks (file_path, fingerprint, status)
                    VALUES (%s, %s, 'pending')
                    ON CONFLICT (file_path) DO NOTHING
                    """,
                    (file_path, fingerprint),
                )
                inserted = cur.rowcount == 1
            conn.commit()
        return inserted

    def next_to_process(self) -> FileTask | None:
        """Prefer untouched files; fall back to resuming in-progress ones.

        An in-progress file is only offered while it still has a pending
        batch, so stale leases must be reclaimed before this is called.
        """
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    SELECT {_FILE_COLUMNS}
                    FROM file_tasks
                    WHERE status = 'pending'
                    ORDER BY id
                    LIMIT 1
                    """
                )
                row = cur.fetchone()
                if row is None:
                    cur.execute(
                        f"""
                        SELECT {_FILE_COLUMNS}
                        FROM file_tasks f
                        WHERE f.status = 'in_progress'
                          AND EXISTS (
                              SELECT 1 FROM trial_batches b
                              WHERE b.file_id = f.id AND b.status = 'pending'
                          )
                        ORDER BY f.id
                        LIMIT 1
                        """
                    )
                    row = cur.fetchone()

        if row is None:
            return None
        return _row_to_file_task(row)

    def mark_in_progress(self, file_id: int, worker_id: str) -> None:
        with get_connection() as conn:
            conn.execute(
                """
                UPDATE file_tasks
                SET status = 'in_progress',
                    started_at = COALESCE(started_at, NOW()),
                    owner = %s
                WHERE id = %s AND status IN ('pending', 'in_progress')
                """,
                (worker_id, file_id),
            )
            conn.commit()

    def record_result(
        self, file_id: int, outcome: str, duration_minutes: float
    ) -> bool:
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    UPDATE file_tasks
                    SET status = 'completed',
                        found_passcode = %s,
                        completed_at = NOW(),
                        duration_minutes = %s
                    WHERE id = %s AND status NOT IN ('completed', 'failed')
                    """,
                    (outcome, duration_minutes, file_id),
                )
                transitioned = cur.rowcount == 1
            conn.commit()
        return transitioned

    def mark_failed(self, file_id: int, reason: str, duration_minutes: float) -> bool:
        """Close an unreadable file; it is never offered to a worker again."""
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    UPDATE file_tasks
                    SET status = 'failed',
                        found_passcode = %s,
                        error_message = %s,
                        completed_at = NOW(),
                        duration_minutes = %s
                    WHERE id = %s AND status NOT IN ('completed', 'failed')
                    """,
                    (UNREADABLE, reason, duration_minutes, file_id),
                )
                transitioned = cur.rowcount == 1
            conn.commit()
        return transitioned

    def set_passcode_required(self, file_id: int, required: bool) -> None:
        with get_connection() as conn:
            conn.execute(
                "UPDATE file_tasks SET passcode_required = %s WHERE id = %s",
                (required, file_id),
            )
            conn.commit()

    def get_by_fingerprint(self, fingerprint: str) -> list[FileTask]:
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    SELECT {_FILE_COLUMNS}
                    FROM file_tasks
                    WHERE fingerprint = %s
                    ORDER BY id
                    """,
                    (fingerprint,),
                )
                rows = cur.fetchall()
        return [_row_to_file_task(row) for row in rows]

    def find_by_id(self, file_id: int) -> FileTask | None:
        """Find a file task by ID."""
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"SELECT {_FILE_COLUMNS} FROM file_tasks WHERE id = %s",
                    (file_id,),
                )
                row = cur.fetchone()

        if row is None:
            return None
        return _row_to_file_task(row)
