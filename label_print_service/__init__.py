"""
Label Print Service
===================

Sequential label generation and printer command service.

Turns a base pattern such as PA00001 and a quantity into an ordered list of
codes, and renders each code as a printer command document:
- TSPL/TSPL2 (TSC, Gainsha/Gprinter)
- ZPL II (Zebra, CAB, printers with ZPL emulation)

Symbologies: Code 128 barcode, QR code, DataMatrix.

Usage:
    python -m label_print_service

    from label_print_service import generate, encode
    for code in generate('PA00001', 10):
        print(encode(code, 'qrcode', 'zpl'))

API Endpoints:
    POST /api/encode                  - Generate and encode a sequence
    GET  /api/labels                  - List label configurations
    POST /api/labels                  - Create configuration
    POST /api/labels/{id}/generate    - Generate codes
    GET  /api/labels/{id}/commands    - Download command file
    GET  /api/print-history           - Print history & statistics
    GET  /api/config/search/{code}    - Look up a generated code
"""

__version__ = '1.0.0'
__author__ = 'Label Print Service Contributors'

from .exceptions import (
    LabelPrintError, InvalidPatternError, UnsupportedSymbologyError, UnsupportedDialectError,
)
from .sequence import BasePattern, generate, parse_pattern
from .encoders import encode, encode_batch, get_encoder

__all__ = [
    'LabelPrintError', 'InvalidPatternError', 'UnsupportedSymbologyError',
    'UnsupportedDialectError', 'BasePattern', 'generate', 'parse_pattern',
    'encode', 'encode_batch', 'get_encoder',
]
