"""
Label Print Service Exceptions
==============================

Errors raised by the sequence generator and the command encoders.
"""


class LabelPrintError(ValueError):
    """Base class for label print service errors."""


class InvalidPatternError(LabelPrintError):
    """Base pattern has no trailing digit run."""

    def __init__(self, pattern: str):
        self.pattern = pattern
        super().__init__(
            f'Invalid base name format: {pattern!r}. '
            f'Must end with numbers (e.g., PA00001)'
        )


class UnsupportedSymbologyError(LabelPrintError):
    """Symbology outside barcode/qrcode/datamatrix."""

    def __init__(self, symbology):
        self.symbology = symbology
        super().__init__(f'Unsupported symbology: {symbology!r}')


class UnsupportedDialectError(LabelPrintError):
    """No encoder registered for the requested dialect."""

    def __init__(self, dialect):
        self.dialect = dialect
        super().__init__(f'Unsupported dialect: {dialect!r}')
