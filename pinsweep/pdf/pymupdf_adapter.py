import pymupdf

from pinsweep.pdf.base import BaseDocumentLock
from pinsweep.pdf.exceptions import DocumentUnreadableError
from pinsweep.pdf.models import ProtectionCheck


class PyMuPdfLock(BaseDocumentLock):
    """Tests PDF passcodes using PyMuPDF."""

    def requires_passcode(self, path: str) -> ProtectionCheck:
        try:
            with pymupdf.open(path, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                if doc.needs_pass:
                    return ProtectionCheck.protected()
                return ProtectionCheck.not_protected()
        except Exception as exc:
            return ProtectionCheck.unreadable(f"pymupdf could not open {path}: {exc}")

    def test_passcode(self, path: str, candidate: str) -> bool:
        try:
            doc = pymupdf.open(path, filetype="pdf")  # type: ignore[no-untyped-call]
        except Exception as exc:
            raise DocumentUnreadableError(f"pymupdf could not open {path}: {exc}") from exc
        with doc:
            if not doc.needs_pass:
                return True
            return bool(doc.authenticate(candidate))
