from pathlib import Path

from pinsweep.results.found_log import FoundLog


class TestFoundLogHeader:
    def test_writes_header_on_creation(self, tmp_path: Path) -> None:
        path = tmp_path / "Found.txt"

        FoundLog(path)

        assert path.read_text() == "File_Path\tPassword\tTime_Minutes\n"

    def test_does_not_repeat_header_for_existing_file(self, tmp_path: Path) -> None:
        path = tmp_path / "Found.txt"
        FoundLog(path).record("/data/a.pdf", "031337", 1.0)

        FoundLog(path)

        assert path.read_text().count("File_Path") == 1


class TestFoundLogRecord:
    def test_appends_tab_separated_line(self, tmp_path: Path) -> None:
        found_log = FoundLog(tmp_path / "Found.txt")

        found_log.record("/data/a.pdf", "031337", 12.3456)

        lines = found_log.path.read_text().splitlines()
        assert lines[1] == "/data/a.pdf\t031337\t12.35"

    def test_missing_passcode_written_as_na(self, tmp_path: Path) -> None:
        found_log = FoundLog(tmp_path / "Found.txt")

        found_log.record("/data/a.pdf", None, 0.0)

        assert found_log.path.read_text().splitlines()[1] == "/data/a.pdf\tN/A\t0.00"
