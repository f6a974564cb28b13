import argparse
import sys
from datetime import timedelta
from pathlib import Path

from pinsweep.config.settings import Settings
from pinsweep.database.connection import close_pool, init_pool
from pinsweep.database.repositories.batch_repository import BatchRepository
from pinsweep.database.repositories.file_repository import FileRepository
from pinsweep.database.schema import ensure_schema
from pinsweep.discovery.file_scanner import FileScanner
from pinsweep.logging.logger import Log
from pinsweep.pdf.factory import DocumentLockFactory
from pinsweep.results.found_log import FoundLog
from pinsweep.search.scanner import RangeScanner
from pinsweep.worker.coordinator import BatchCoordinator
from pinsweep.worker.worker import Worker


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pinsweep",
        description="Cooperatively brute-force numeric PDF passcodes through a shared database.",
    )
    parser.add_argument(
        "path", nargs="?", help="PDF file or directory to scan recursively for PDFs"
    )
    return parser


def resolve_path(argv: list[str] | None) -> Path | None:
    """Return the target path, or None after printing a usage error."""
    parser = build_parser()
    args, extra = parser.parse_known_args(argv)
    if extra:
        parser.print_usage(sys.stderr)
        print(f"Error: Invalid number of arguments: {' '.join(extra)}", file=sys.stderr)
        return None
    if args.path is None:
        parser.print_usage(sys.stderr)
        print("Error: a file or directory path is required.", file=sys.stderr)
        return None
    path = Path(args.path)
    if not path.exists():
        print(f"Error: The specified path does not exist: {path}", file=sys.stderr)
        return None
    return path


def build_worker(settings: Settings, log: Log, found_log: FoundLog) -> Worker:
    """Build a Worker with all required collaborators."""
    document_lock = DocumentLockFactory.create(settings)
    coordinator = BatchCoordinator(
        file_queue=FileRepository(),
        batch_queue=BatchRepository(settings.passcode_length, settings.batch_count),
        stale_after=timedelta(minutes=settings.stale_batch_minutes),
        log=log,
    )
    scanner = RangeScanner(document_lock, log, settings.progress_interval)
    return Worker(coordinator, scanner, document_lock, found_log, log)


def main(argv: list[str] | None = None) -> int:
    """Entry point: validate path -> init pool -> queue files -> run worker loop."""
    path = resolve_path(argv)
    if path is None:
        return 1

    settings = Settings()
    log = Log.configure(settings.log_level, settings.log_file)
    init_pool(settings)

    try:
        ensure_schema()
        found_log = FoundLog(settings.found_log_path)
        FileScanner(FileRepository(), found_log, log).scan_and_add(path)
        worker = build_worker(settings, log, found_log)
        log.info("Checking for available work...")
        worker.run()
    finally:
        close_pool()

    log.info("Application completed.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
