"""Exceptions raised by tfscan."""


class TFScanError(Exception):
    """Base class for all tfscan errors."""


class InvalidSymbolError(TFScanError, ValueError):
    """A sequence contains a character outside the DNA/IUPAC alphabet."""

    def __init__(self, position: int, symbol: str):
        self.position = position
        self.symbol = symbol
        super().__init__(f"Invalid nucleotide {symbol!r} at position {position}")


class DegenerateMotifError(TFScanError, ValueError):
    """A PWM row cannot produce a finite best-case score."""

    def __init__(self, row: int, reason: str = "no scorable base"):
        self.row = row
        super().__init__(f"Degenerate PWM row {row}: {reason}")


class ScanCancelledError(TFScanError):
    """A scan was cancelled through its cancellation event."""

    def __init__(self, position: int):
        self.position = position
        super().__init__(f"Scan cancelled at position {position}")
