from pathlib import Path

HEADER = "File_Path\tPassword\tTime_Minutes\n"


class FoundLog:
    """Append-only, tab-separated record of every finished file."""

    def __init__(self, log_path: Path | str = "Found.txt") -> None:
        self._log_path = Path(log_path)
        self._ensure_header()

    @property
    def path(self) -> Path:
        return self._log_path

    def record(self, file_path: str, passcode: str | None, duration_minutes: float) -> None:
        """Append one result line; a missing passcode is written as N/A."""
        line = f"{file_path}\t{passcode or 'N/A'}\t{duration_minutes:.2f}\n"
        with self._log_path.open("a", encoding="utf-8") as fh:
            fh.write(line)

    def _ensure_header(self) -> None:
        # Exclusive create: only the process that creates the file writes the header.
        try:
            with self._log_path.open("x", encoding="utf-8") as fh:
                fh.write(HEADER)
        except FileExistsError:
            pass
