"""
Label Print Service Models
"""

from .enums import (
    Symbology, Dialect, ConnectionType, PrintStatus, LabelStatus,
    parse_symbology, parse_dialect,
)
from .document import CommandDocument
from .label_config import LabelConfig
from .generated_label import GeneratedLabel
from .print_history import PrintHistory

__all__ = [
    'Symbology', 'Dialect', 'ConnectionType', 'PrintStatus', 'LabelStatus',
    'parse_symbology', 'parse_dialect',
    'CommandDocument', 'LabelConfig', 'GeneratedLabel', 'PrintHistory',
]
