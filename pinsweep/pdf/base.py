from abc import ABC, abstractmethod

from pinsweep.pdf.models import ProtectionCheck


class BaseDocumentLock(ABC):
    """Contract for adapters that test passcodes against a PDF on disk."""

    @abstractmethod
    def requires_passcode(self, path: str) -> ProtectionCheck:
        """Report whether the document needs a passcode to open.

        Never raises for a broken document; an unreadable file is reported
        as ProtectionStatus.UNREADABLE with the reason attached.
        """

    @abstractmethod
    def test_passcode(self, path: str, candidate: str) -> bool:
        """Return True if the candidate unlocks the document.

        Raises:
            DocumentUnreadableError: if the document cannot be opened at all.
        """
