from pathlib import Path

from pinsweep.database.models import FileStatus
from pinsweep.database.repositories.base import BaseFileQueue
from pinsweep.discovery.fingerprint import compute_fingerprint
from pinsweep.logging.logger import Log
from pinsweep.results.found_log import FoundLog


def find_pdf_files(path: Path | str) -> list[Path]:
    """Return a single PDF file, or every PDF below a directory (sorted)."""
    root = Path(path)
    if root.is_file():
        return [root] if root.suffix.lower() == ".pdf" else []
    if root.is_dir():
        return sorted(p for p in root.rglob("*") if p.is_file() and p.suffix.lower() == ".pdf")
    return []


class FileScanner:
    """Queues newly discovered PDFs, short-circuiting already solved duplicates."""

    def __init__(self, file_queue: BaseFileQueue, found_log: FoundLog, log: Log) -> None:
        self._file_queue = file_queue
        self._found_log = found_log
        self._log = log

    def scan_and_add(self, path: Path | str) -> int:
        """Fingerprint every PDF under path and queue the new ones.

        Returns the number of file tasks inserted.
        """
        self._log.info(f"Scanning for PDF files in: {path}")
        files = find_pdf_files(path)
        self._log.info(f"Found {len(files)} PDF files. Calculating fingerprints...")

        added = 0
        for file_path in files:
            resolved = str(file_path.resolve())
            fingerprint = compute_fingerprint(file_path)
            if self._report_duplicate(resolved, fingerprint):
                continue
            if self._file_queue.add_if_new(resolved, fingerprint):
                added += 1

        self._log.info(f"Finished scanning: {added} new files queued")
        return added

    def _report_duplicate(self, file_path: str, fingerprint: str) -> bool:
        solved = next(
            (
                task
                for task in self._file_queue.get_by_fingerprint(fingerprint)
                if task.status == FileStatus.COMPLETED
            ),
            None,
        )
        if solved is None or solved.file_path == file_path:
            return False
        self._log.info(
            f"DUPLICATE: {file_path} already processed as {solved.file_path}, "
            f"password: {solved.found_passcode}"
        )
        self._found_log.record(file_path, solved.found_passcode, 0.0)
        return True
