"""
Model Enumerations
==================

String-valued enums shared by the models, encoders and API.
"""

from enum import Enum

from ..exceptions import UnsupportedDialectError, UnsupportedSymbologyError


class Symbology(str, Enum):
    """Visual encoding of a code on the label."""

    BARCODE = 'barcode'  # Code 128
    QRCODE = 'qrcode'
    DATAMATRIX = 'datamatrix'


class Dialect(str, Enum):
    """Printer command language."""

    TSPL = 'tspl'
    ZPL = 'zpl'


class ConnectionType(str, Enum):
    """How a batch reached the printer."""

    BLUETOOTH = 'bluetooth'
    SERIAL = 'serial'
    USB = 'usb'
    NETWORK = 'network'
    DOWNLOAD = 'download'


class PrintStatus(str, Enum):
    SUCCESS = 'success'
    FAILED = 'failed'
    PARTIAL = 'partial'


class LabelStatus(str, Enum):
    GENERATED = 'generated'
    PRINTED = 'printed'
    ERROR = 'error'


def parse_symbology(value) -> Symbology:
    """Resolve a symbology name (case-insensitive) or enum member."""
    if isinstance(value, Symbology):
        return value
    try:
        return Symbology(str(value).strip().lower())
    except ValueError:
        raise UnsupportedSymbologyError(value) from None


def parse_dialect(value) -> Dialect:
    """Resolve a dialect name (case-insensitive) or enum member."""
    if isinstance(value, Dialect):
        return value
    try:
        return Dialect(str(value).strip().lower())
    except ValueError:
        raise UnsupportedDialectError(value) from None
