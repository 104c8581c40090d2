"""
Label Print Service Encoders
============================

Command-language encoders for label printers.

Usage:
    from label_print_service import generate
    from label_print_service.encoders import encode, encode_batch

    tspl = encode('PA00001', 'barcode', 'tspl')
    stream = encode_batch(generate('PA00001', 10), 'qrcode', 'zpl')
"""

from typing import Iterable, List

from .base import BaseEncoder
from .tspl import TSPLEncoder
from .zpl import ZPLEncoder
from ..models import CommandDocument, Dialect, parse_dialect

__all__ = [
    'BaseEncoder', 'TSPLEncoder', 'ZPLEncoder',
    'ENCODERS', 'get_encoder', 'encode', 'encode_batch', 'render_batch',
]

# Encoder registry
ENCODERS = {
    Dialect.TSPL: TSPLEncoder,
    Dialect.ZPL: ZPLEncoder,
}


def get_encoder(dialect) -> type:
    """
    Get encoder class by dialect.

    Raises:
        UnsupportedDialectError: if no encoder is registered
    """
    return ENCODERS[parse_dialect(dialect)]


def encode(code: str, symbology, dialect=Dialect.TSPL) -> str:
    """Encode one code as a complete command document."""
    return get_encoder(dialect)().encode(code, symbology)


def render_batch(codes: Iterable[str], symbology, dialect=Dialect.TSPL,
                 border: bool = True) -> List[CommandDocument]:
    """Render one document per code, preserving order."""
    return get_encoder(dialect)(border=border).render_batch(codes, symbology)


def encode_batch(codes: Iterable[str], symbology, dialect=Dialect.TSPL,
                 border: bool = True) -> str:
    """Encode codes into a single stream ready for a printer or file."""
    return get_encoder(dialect)(border=border).encode_batch(codes, symbology)
