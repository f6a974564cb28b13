import hashlib
from pathlib import Path

_CHUNK_SIZE = 1024 * 1024


def compute_fingerprint(path: Path | str) -> str:
    """Return the lowercase SHA-256 hex digest of a file's content."""
    digest = hashlib.sha256()
    with Path(path).open("rb") as fh:
        for chunk in iter(lambda: fh.read(_CHUNK_SIZE), b""):
            digest.update(chunk)
    return digest.hexdigest()
