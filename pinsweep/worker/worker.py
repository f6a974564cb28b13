import time
import uuid
from collections.abc import Callable
from enum import Enum

from pinsweep.database.models import EXHAUSTED, NO_PASSWORD, UNREADABLE, Batch, FileStatus, FileTask
from pinsweep.logging.logger import Log
from pinsweep.pdf.base import BaseDocumentLock
from pinsweep.pdf.exceptions import DocumentUnreadableError
from pinsweep.pdf.models import ProtectionStatus
from pinsweep.results.found_log import FoundLog
from pinsweep.search.models import PasscodeRange
from pinsweep.search.scanner import RangeScanner
from pinsweep.worker.coordinator import BatchCoordinator


class WorkerState(str, Enum):
    SELECTING_FILE = "selecting_file"
    PREPARING_BATCHES = "preparing_batches"
    SELECTING_BATCH = "selecting_batch"
    SCANNING = "scanning"
    DONE = "done"


class Worker:
    """State machine driven by run(): select file -> lease batch -> scan -> report.

    Store errors are not caught here; a worker that cannot reach the store
    stops, and its leases expire on their own.
    """

    def __init__(
        self,
        coordinator: BatchCoordinator,
        scanner: RangeScanner,
        document_lock: BaseDocumentLock,
        found_log: FoundLog,
        log: Log,
        worker_id: str | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._coordinator = coordinator
        self._scanner = scanner
        self._document_lock = document_lock
        self._found_log = found_log
        self._log = log
        self._clock = clock
        self.worker_id = worker_id if worker_id is not None else str(uuid.uuid4())
        self.state = WorkerState.SELECTING_FILE
        self.files_done = 0
        self._file: FileTask | None = None
        self._batch: Batch | None = None
        self._file_started_at = 0.0
        self._handlers: dict[WorkerState, Callable[[], WorkerState]] = {
            WorkerState.SELECTING_FILE: self._select_file,
            WorkerState.PREPARING_BATCHES: self._prepare_batches,
            WorkerState.SELECTING_BATCH: self._select_batch,
            WorkerState.SCANNING: self._scan,
        }

    def run(self, max_files: int | None = None) -> None:
        """Step until no work is left.

        If max_files is set, stop after leaving that many files (for testing).
        """
        self._log.info(f"Worker {self.worker_id} started")
        try:
            while self.state is not WorkerState.DONE:
                if max_files is not None and self.files_done >= max_files:
                    break
                self.step()
        except KeyboardInterrupt:
            self._log.info("Worker shutting down gracefully")
            return
        self._log.info(f"Worker {self.worker_id} finished after {self.files_done} files")

    def step(self) -> WorkerState:
        """Run the handler for the current state and move to the next one."""
        if self.state is WorkerState.DONE:
            return self.state
        self.state = self._handlers[self.state]()
        return self.state

    def _select_file(self) -> WorkerState:
        file_task = self._coordinator.get_next_file()
        if file_task is None:
            self._log.info("No more pending files available. Worker shutting down.")
            return WorkerState.DONE

        self._file = file_task
        self._file_started_at = self._clock()
        self._log.info(f"--- Assigned file [ID: {file_task.id}]: {file_task.file_path} ---")
        if file_task.status == FileStatus.IN_PROGRESS:
            self._log.info(f"Resuming file {file_task.id}")
            return WorkerState.SELECTING_BATCH
        return WorkerState.PREPARING_BATCHES

    def _prepare_batches(self) -> WorkerState:
        file_task = self._current_file()
        check = self._document_lock.requires_passcode(file_task.file_path)

        if check.status is ProtectionStatus.NOT_PROTECTED:
            self._log.skip(f"File {file_task.file_path} is not password protected")
            self._coordinator.record_protection(file_task.id, False)
            if self._coordinator.complete_file(file_task.id, NO_PASSWORD, 0.0):
                self._found_log.record(file_task.file_path, NO_PASSWORD, 0.0)
            return self._leave_file()

        if check.status is ProtectionStatus.UNREADABLE:
            return self._fail_file(check.reason)

        self._log.info("File is password protected. Preparing batches.")
        self._coordinator.record_protection(file_task.id, True)
        self._coordinator.prepare_batches(file_task.id, self.worker_id)
        return WorkerState.SELECTING_BATCH

    def _select_batch(self) -> WorkerState:
        file_task = self._current_file()
        if not self._coordinator.is_file_open(file_task.id):
            self._log.info(f"File {file_task.id} was closed by another worker")
            return self._leave_file()

        batch = self._coordinator.checkout_next_batch(file_task.id, self.worker_id)
        if batch is None:
            if self._coordinator.is_file_complete(file_task.id):
                duration = self._elapsed_minutes()
                if self._coordinator.complete_file(file_task.id, EXHAUSTED, duration):
                    self._log.warning(
                        f"Passcode not found for {file_task.file_path}: range exhausted"
                    )
                    self._found_log.record(file_task.file_path, EXHAUSTED, duration)
            else:
                self._log.info(
                    f"No more available batches for file {file_task.id}. Moving to next file."
                )
            return self._leave_file()

        self._batch = batch
        return WorkerState.SCANNING

    def _scan(self) -> WorkerState:
        file_task = self._current_file()
        batch = self._batch
        if batch is None:
            raise RuntimeError("Scanning entered without a checked-out batch")
        self._batch = None

        self._log.info(
            f"Processing batch {batch.batch_index} ({batch.range_from} - {batch.range_to}) "
            f"for file {file_task.id}"
        )
        passcode_range = PasscodeRange(batch.batch_index, batch.range_from, batch.range_to)
        try:
            passcode = self._scanner.scan(file_task.file_path, passcode_range)
        except DocumentUnreadableError as exc:
            self._coordinator.complete_batch(batch.id)
            return self._fail_file(str(exc))

        self._coordinator.complete_batch(batch.id)
        if passcode is None:
            self._log.info(f"Passcode not in batch {batch.batch_index}")
            return WorkerState.SELECTING_BATCH

        duration = self._elapsed_minutes()
        self._log.success(f"Password FOUND for {file_task.file_path}: {passcode}")
        if self._coordinator.complete_file(file_task.id, passcode, duration):
            self._found_log.record(file_task.file_path, passcode, duration)
        return self._leave_file()

    def _fail_file(self, reason: str) -> WorkerState:
        file_task = self._current_file()
        duration = self._elapsed_minutes()
        self._log.error(f"File {file_task.file_path} is unreadable: {reason}")
        if self._coordinator.fail_file(file_task.id, reason, duration):
            self._found_log.record(file_task.file_path, UNREADABLE, duration)
        return self._leave_file()

    def _leave_file(self) -> WorkerState:
        self._file = None
        self.files_done += 1
        return WorkerState.SELECTING_FILE

    def _current_file(self) -> FileTask:
        if self._file is None:
            raise RuntimeError(f"State {self.state.value} requires a selected file")
        return self._file

    def _elapsed_minutes(self) -> float:
        return (self._clock() - self._file_started_at) / 60
