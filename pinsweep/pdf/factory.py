from pinsweep.config.settings import Settings
from pinsweep.pdf.base import BaseDocumentLock
from pinsweep.pdf.pdfplumber_adapter import PdfPlumberLock
from pinsweep.pdf.pymupdf_adapter import PyMuPdfLock


class DocumentLockFactory:
    """Creates the correct document lock adapter based on settings."""

    ADAPTERS: dict[str, type[BaseDocumentLock]] = {
        "pdfplumber": PdfPlumberLock,
        "pymupdf": PyMuPdfLock,
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseDocumentLock:
        engine = settings.pdf_engine.lower()
        adapter_cls = cls.ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {list(cls.ADAPTERS)}"
            )
        return adapter_cls()
