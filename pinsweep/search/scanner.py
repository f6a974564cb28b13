from pinsweep.logging.logger import Log
from pinsweep.pdf.base import BaseDocumentLock
from pinsweep.search.models import PasscodeRange


class RangeScanner:
    """Tries every candidate of a range in ascending order, stopping at the first hit."""

    def __init__(
        self,
        document_lock: BaseDocumentLock,
        log: Log,
        progress_interval: int = 1000,
    ) -> None:
        self._document_lock = document_lock
        self._log = log
        self._progress_interval = progress_interval

    def scan(self, path: str, passcode_range: PasscodeRange) -> str | None:
        """Return the first candidate that unlocks the document, or None.

        Raises:
            DocumentUnreadableError: propagated from the document lock.
        """
        width = len(passcode_range.range_from)
        start = int(passcode_range.range_from)
        end = int(passcode_range.range_to)

        for value in range(start, end + 1):
            candidate = str(value).zfill(width)
            if value % self._progress_interval == 0:
                self._log.info(
                    f"Testing range {passcode_range.range_from}-{passcode_range.range_to}, "
                    f"current: {candidate}"
                )
            if self._document_lock.test_passcode(path, candidate):
                return candidate
        return None
