from abc import ABC, abstractmethod
from datetime import timedelta

from pinsweep.database.models import Batch, BatchStatus, FileTask


class BaseFileQueue(ABC):
    """Per-file processing state shared by every worker."""

    @abstractmethod
    def add_if_new(self, file_path: str, fingerprint: str) -> bool:
        """Insert a pending file task unless the path is already queued.

        Returns True if a row was inserted.
        """

    @abstractmethod
    def next_to_process(self) -> FileTask | None:
        """Lowest-id pending file, else lowest-id in-progress file with a pending batch."""

    @abstractmethod
    def mark_in_progress(self, file_id: int, worker_id: str) -> None:
        """Move a pending file to in_progress. Safe to repeat."""

    @abstractmethod
    def record_result(
        self, file_id: int, outcome: str, duration_minutes: float
    ) -> bool:
        """Complete a file with a passcode or sentinel.

        Returns True only for the call that performed the transition.
        """

    @abstractmethod
    def mark_failed(self, file_id: int, reason: str, duration_minutes: float) -> bool:
        """Move a file to the terminal failed state. Returns True on transition."""

    @abstractmethod
    def set_passcode_required(self, file_id: int, required: bool) -> None:
        """Record the outcome of the protection pre-check."""

    @abstractmethod
    def get_by_fingerprint(self, fingerprint: str) -> list[FileTask]:
        """Return every file task sharing a content fingerprint."""

    @abstractmethod
    def find_by_id(self, file_id: int) -> FileTask | None:
        """Find a file task by ID."""


class BaseBatchQueue(ABC):
    """Per-file passcode sub-ranges handed out under a lease."""

    @abstractmethod
    def create_batches(self, file_id: int) -> None:
        """Materialize the full partition as pending batches. Safe to repeat."""

    @abstractmethod
    def checkout_next(self, file_id: int, worker_id: str) -> Batch | None:
        """Atomically claim the lowest-index pending batch of a file."""

    @abstractmethod
    def complete(self, batch_id: int, status: BatchStatus = BatchStatus.COMPLETED) -> None:
        """Move a batch to a terminal status. No-op if already completed."""

    @abstractmethod
    def all_complete(self, file_id: int) -> bool:
        """Return True if every batch of the file is completed."""

    @abstractmethod
    def reclaim_stale(self, threshold: timedelta) -> int:
        """Return checked-out batches older than threshold to pending.

        Returns the number of batches reclaimed.
        """

    @abstractmethod
    def find_by_file(self, file_id: int) -> list[Batch]:
        """Return all batches of a file ordered by index."""
