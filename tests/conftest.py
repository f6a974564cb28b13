from collections.abc import Callable
from pathlib import Path

import pytest
from reportlab.lib.pagesizes import letter
from reportlab.lib.pdfencrypt import StandardEncryption
from reportlab.pdfgen import canvas

from pinsweep.logging.logger import Log

SAMPLE_PASSCODE = "031337"


def write_pdf(path: Path, text: str, user_password: str | None = None) -> Path:
    """Write a one-page PDF, optionally protected by a user password."""
    encrypt = (
        StandardEncryption(user_password, ownerPassword="owner-secret")
        if user_password is not None
        else None
    )
    c = canvas.Canvas(str(path), pagesize=letter, encrypt=encrypt)
    c.drawString(72, 720, text)
    c.save()
    return path


@pytest.fixture()
def plain_pdf(tmp_path: Path) -> Path:
    """A PDF that opens without a passcode."""
    return write_pdf(tmp_path / "plain.pdf", "Hello PDF World")


@pytest.fixture()
def protected_pdf(tmp_path: Path) -> Path:
    """A PDF locked with SAMPLE_PASSCODE."""
    return write_pdf(tmp_path / "protected.pdf", "Secret content", SAMPLE_PASSCODE)


@pytest.fixture()
def corrupt_pdf(tmp_path: Path) -> Path:
    """A file with a .pdf suffix that is not a PDF."""
    path = tmp_path / "corrupt.pdf"
    path.write_bytes(b"not a pdf")
    return path


@pytest.fixture()
def log() -> Log:
    return Log()


@pytest.fixture()
def make_pdf(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing PDFs under tmp_path, optionally passcode-protected."""

    def _make(name: str, user_password: str | None = None) -> Path:
        return write_pdf(tmp_path / name, f"Content of {name}", user_password)

    return _make
