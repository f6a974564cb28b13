class PdfLockError(Exception):
    """Base exception for document lock testing errors."""


class DocumentUnreadableError(PdfLockError):
    """Raised when a document cannot be opened for reasons other than a wrong passcode."""
