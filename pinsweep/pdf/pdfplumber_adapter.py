import pdfplumber
from pdfminer.pdfdocument import PDFPasswordIncorrect

from pinsweep.pdf.base import BaseDocumentLock
from pinsweep.pdf.exceptions import DocumentUnreadableError
from pinsweep.pdf.models import ProtectionCheck


def _is_password_error(exc: BaseException) -> bool:
    """pdfplumber may wrap pdfminer errors, so walk the chain and the args."""
    current: BaseException | None = exc
    while current is not None:
        if isinstance(current, PDFPasswordIncorrect):
            return True
        if any(isinstance(arg, PDFPasswordIncorrect) for arg in current.args):
            return True
        current = current.__cause__ or current.__context__
    return False


class PdfPlumberLock(BaseDocumentLock):
    """Tests PDF passcodes using pdfplumber (pdfminer.six)."""

    def requires_passcode(self, path: str) -> ProtectionCheck:
        try:
            with pdfplumber.open(path):
                return ProtectionCheck.not_protected()
        except Exception as exc:
            if _is_password_error(exc):
                return ProtectionCheck.protected()
            return ProtectionCheck.unreadable(f"pdfplumber could not open {path}: {exc}")

    def test_passcode(self, path: str, candidate: str) -> bool:
        try:
            with pdfplumber.open(path, password=candidate):
                return True
        except Exception as exc:
            if _is_password_error(exc):
                return False
            raise DocumentUnreadableError(
                f"pdfplumber could not open {path}: {exc}"
            ) from exc
