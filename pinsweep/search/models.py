from dataclasses import dataclass


@dataclass(frozen=True)
class PasscodeRange:
    """Inclusive range of fixed-width decimal candidates."""

    index: int
    range_from: str
    range_to: str

    @property
    def size(self) -> int:
        return int(self.range_to) - int(self.range_from) + 1
