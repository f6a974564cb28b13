from pathlib import Path
from unittest.mock import MagicMock

from pinsweep.database.models import FileStatus, FileTask
from pinsweep.discovery.file_scanner import FileScanner, find_pdf_files
from pinsweep.discovery.fingerprint import compute_fingerprint


def _make_scanner() -> tuple[FileScanner, MagicMock, MagicMock]:
    mock_queue = MagicMock()
    mock_queue.get_by_fingerprint.return_value = []
    mock_queue.add_if_new.return_value = True
    mock_found = MagicMock()
    return FileScanner(mock_queue, mock_found, MagicMock()), mock_queue, mock_found


class TestFindPdfFiles:
    def test_single_pdf_file(self, tmp_path: Path) -> None:
        pdf = tmp_path / "a.PDF"
        pdf.write_bytes(b"%PDF")
        assert find_pdf_files(pdf) == [pdf]

    def test_single_non_pdf_file(self, tmp_path: Path) -> None:
        txt = tmp_path / "a.txt"
        txt.write_text("x")
        assert find_pdf_files(txt) == []

    def test_directory_is_searched_recursively(self, tmp_path: Path) -> None:
        (tmp_path / "nested").mkdir()
        first = tmp_path / "b.pdf"
        second = tmp_path / "nested" / "a.pdf"
        first.write_bytes(b"%PDF")
        second.write_bytes(b"%PDF")
        (tmp_path / "notes.txt").write_text("x")

        assert find_pdf_files(tmp_path) == sorted([first, second])

    def test_missing_path(self, tmp_path: Path) -> None:
        assert find_pdf_files(tmp_path / "missing") == []


class TestFingerprint:
    def test_sha256_hex_digest(self, tmp_path: Path) -> None:
        path = tmp_path / "a.pdf"
        path.write_bytes(b"abc")
        assert compute_fingerprint(path) == (
            "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
        )


class TestScanAndAdd:
    def test_queues_new_files(self, plain_pdf: Path) -> None:
        scanner, mock_queue, mock_found = _make_scanner()

        added = scanner.scan_and_add(plain_pdf)

        assert added == 1
        mock_queue.add_if_new.assert_called_once_with(
            str(plain_pdf.resolve()), compute_fingerprint(plain_pdf)
        )
        mock_found.record.assert_not_called()

    def test_completed_duplicate_is_short_circuited(self, plain_pdf: Path) -> None:
        scanner, mock_queue, mock_found = _make_scanner()
        mock_queue.get_by_fingerprint.return_value = [
            FileTask(
                id=1,
                file_path="/archive/original.pdf",
                fingerprint=compute_fingerprint(plain_pdf),
                status=FileStatus.COMPLETED,
                found_passcode="031337",
            )
        ]

        added = scanner.scan_and_add(plain_pdf)

        assert added == 0
        mock_queue.add_if_new.assert_not_called()
        mock_found.record.assert_called_once_with(str(plain_pdf.resolve()), "031337", 0.0)

    def test_unfinished_duplicate_is_still_queued(self, plain_pdf: Path) -> None:
        scanner, mock_queue, mock_found = _make_scanner()
        mock_queue.get_by_fingerprint.return_value = [
            FileTask(
                id=1,
                file_path="/archive/original.pdf",
                fingerprint="f" * 64,
                status=FileStatus.IN_PROGRESS,
            )
        ]

        scanner.scan_and_add(plain_pdf)

        mock_queue.add_if_new.assert_called_once()
        mock_found.record.assert_not_called()

    def test_known_path_is_not_counted(self, plain_pdf: Path) -> None:
        scanner, mock_queue, _found = _make_scanner()
        mock_queue.add_if_new.return_value = False

        assert scanner.scan_and_add(plain_pdf) == 0
