from datetime import timedelta
from typing import Any

from psycopg.rows import dict_row

from pinsweep.database.connection import get_connection
from pinsweep.database.models import Batch, BatchStatus
from pinsweep.database.repositories.base import BaseBatchQueue
from pinsweep.search.partitioner import partition_space

_BATCH_COLUMNS = (
    "id, file_id, batch_index, range_from, range_to, status, "
    "checked_out_at, completed_at, owner"
)


def _row_to_batch(row: dict[str, Any]) -> Batch:
    return Batch(
        id=row["id"],
        file_id=row["file_id"],
        batch_index=row["batch_index"],
        range_from=row["range_from"],
        range_to=row["range_to"],
        status=BatchStatus(row["status"]),
        checked_out_at=row["checked_out_at"],
        completed_at=row["completed_at"],
        owner=row["owner"],
    )


class BatchRepository(BaseBatchQueue):
    """Database operations for the trial_batches table."""

    def __init__(self, passcode_length: int, batch_count: int) -> None:
        self._passcode_length = passcode_length
        self._batch_count = batch_count

    def create_batches(self, file_id: int) -> None:
        """Insert one pending batch per partition; existing rows are left untouched."""
        ranges = partition_space(
            10**self._passcode_length, self._batch_count, self._passcode_length
        )
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.executemany(
                    """
                    INSERT INTO trial_batches
                        (file_id, batch_index, range_from, range_to, status)
                    VALUES (%s, %s, %s, %s, 'pending')
                    ON CONFLICT (file_id, batch_index) DO NOTHING
                    """,
                    [(file_id, r.index, r.range_from, r.range_to) for r in ranges],
                )
            conn.commit()

    def checkout_next(self, file_id: int, worker_id: str) -> Batch | None:
        """Claim the lowest-index pending batch in a single UPDATE ... RETURNING.

        The SKIP LOCKED sub-select keeps two workers from ever receiving the
        same batch; a worker that loses the race gets None.
        """
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    UPDATE trial_batches
                    SET status = 'checked_out', checked_out_at = NOW(), owner = %s
                    WHERE id = (
                        SELECT id FROM trial_batches
                        WHERE file_id = %s AND status = 'pending'
                        ORDER BY batch_index
                        LIMIT 1
                        FOR UPDATE SKIP LOCKED
                    )
                    RETURNING {_BATCH_COLUMNS}
                    """,
                    (worker_id, file_id),
                )
                row = cur.fetchone()
            conn.commit()

        if row is None:
            return None
        return _row_to_batch(row)

    def complete(self, batch_id: int, status: BatchStatus = BatchStatus.COMPLETED) -> None:
        with get_connection() as conn:
            conn.execute(
                """
                UPDATE trial_batches
                SET status = %s, completed_at = NOW()
                WHERE id = %s AND status <> 'completed'
                """,
                (status.value, batch_id),
            )
            conn.commit()

    def all_complete(self, file_id: int) -> bool:
        """True when the file has batches and none of them is unfinished."""
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    SELECT COUNT(*),
                           COUNT(*) FILTER (WHERE status <> 'completed')
                    FROM trial_batches
                    WHERE file_id = %s
                    """,
                    (file_id,),
                )
                row = cur.fetchone()

        if row is None:
            return False
        total, remaining = row
        return total > 0 and remaining == 0

    def reclaim_stale(self, threshold: timedelta) -> int:
        """Reset checked-out batches whose lease is at least `threshold` old."""
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    UPDATE trial_batches
                    SET status = 'pending', checked_out_at = NULL, owner = NULL
                    WHERE status = 'checked_out'
                      AND checked_out_at <= NOW() - %s
                    """,
                    (threshold,),
                )
                reclaimed = cur.rowcount
            conn.commit()
        return reclaimed

    def find_by_file(self, file_id: int) -> list[Batch]:
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    SELECT {_BATCH_COLUMNS}
                    FROM trial_batches
                    WHERE file_id = %s
                    ORDER BY batch_index
                    """,
                    (file_id,),
                )
                rows = cur.fetchall()
        return [_row_to_batch(row) for row in rows]
