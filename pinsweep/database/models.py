from dataclasses import dataclass
from datetime import datetime
from enum import Enum

NO_PASSWORD = "NO_PASSWORD"
EXHAUSTED = "FAILED"
UNREADABLE = "UNREADABLE"


class FileStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"


class BatchStatus(str, Enum):
    PENDING = "pending"
    CHECKED_OUT = "checked_out"
    COMPLETED = "completed"


@dataclass
class FileTask:
    """Represents a row from the file_tasks table."""

    id: int
    file_path: str
    fingerprint: str
    status: FileStatus
    passcode_required: bool | None = None
    found_passcode: str | None = None
    error_message: str | None = None
    started_at: datetime | None = None
    completed_at: datetime | None = None
    duration_minutes: float | None = None
    owner: str | None = None

    @property
    def is_terminal(self) -> bool:
        return self.status in (FileStatus.COMPLETED, FileStatus.FAILED)


@dataclass
class Batch:
    """Represents a row from the trial_batches table."""

    id: int
    file_id: int
    batch_index: int
    range_from: str
    range_to: str
    status: BatchStatus
    checked_out_at: datetime | None = None
    completed_at: datetime | None = None
    owner: str | None = None
