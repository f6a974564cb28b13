from datetime import timedelta

from pinsweep.database.exceptions import FileTaskNotFoundError
from pinsweep.database.models import Batch, BatchStatus, FileTask
from pinsweep.database.repositories.base import BaseBatchQueue, BaseFileQueue
from pinsweep.logging.logger import Log


class BatchCoordinator:
    """Composes the file and batch queues into the worker-facing protocol."""

    def __init__(
        self,
        file_queue: BaseFileQueue,
        batch_queue: BaseBatchQueue,
        stale_after: timedelta,
        log: Log,
    ) -> None:
        self._file_queue = file_queue
        self._batch_queue = batch_queue
        self._stale_after = stale_after
        self._log = log

    def get_next_file(self) -> FileTask | None:
        """Reclaim expired leases, then pick the next file to work on.

        The reclaim has to come first: a file whose batches are all held by
        dead workers is only visible to selection once a batch is pending again.
        """
        reclaimed = self._batch_queue.reclaim_stale(self._stale_after)
        if reclaimed:
            self._log.warning(f"Reclaimed {reclaimed} stale batches")
        return self._file_queue.next_to_process()

    def prepare_batches(self, file_id: int, worker_id: str) -> None:
        self._file_queue.mark_in_progress(file_id, worker_id)
        self._batch_queue.create_batches(file_id)

    def record_protection(self, file_id: int, required: bool) -> None:
        self._file_queue.set_passcode_required(file_id, required)

    def checkout_next_batch(self, file_id: int, worker_id: str) -> Batch | None:
        return self._batch_queue.checkout_next(file_id, worker_id)

    def complete_batch(self, batch_id: int) -> None:
        self._batch_queue.complete(batch_id, BatchStatus.COMPLETED)

    def is_file_complete(self, file_id: int) -> bool:
        return self._batch_queue.all_complete(file_id)

    def is_file_open(self, file_id: int) -> bool:
        """False once any worker has completed or failed the file.

        Raises:
            FileTaskNotFoundError: if the file task no longer exists.
        """
        task = self._file_queue.find_by_id(file_id)
        if task is None:
            raise FileTaskNotFoundError(f"File task {file_id} not found")
        return not task.is_terminal

    def complete_file(self, file_id: int, outcome: str, duration_minutes: float) -> bool:
        return self._file_queue.record_result(file_id, outcome, duration_minutes)

    def fail_file(self, file_id: int, reason: str, duration_minutes: float) -> bool:
        return self._file_queue.mark_failed(file_id, reason, duration_minutes)
