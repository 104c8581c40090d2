"""
ZPL Encoder
===========

Encoder for ZPL (Zebra Programming Language) printers.
Works with Zebra, CAB (in ZPL emulation mode) and TSC printers with ZPL
emulation enabled.

All coordinates are in dots at an assumed 203 dpi (8 dots/mm).
"""

from typing import Any, Dict, List

from .base import BaseEncoder
from ..models import Dialect, Symbology


class ZPLEncoder(BaseEncoder):
    """Encoder for ZPL-compatible printers."""

    dialect = Dialect.ZPL
    line_terminator = '\n'
    file_extension = 'zpl'

    # 50 x 50 mm label
    PRINT_WIDTH = 400
    LABEL_LENGTH = 400

    # Border: 2 mm inset, 3 dot stroke (x, y, width, height, thickness)
    BORDER = (16, 16, 368, 368, 3)

    # Scalable font 0, 28 dots high
    FONT = '0N,28,28'

    LAYOUTS = {
        # ^BY narrow,ratio ^BC rotation,height,interpretation line
        # The interpretation line prints the text, so no separate text field
        Symbology.BARCODE: {
            'x': 48, 'y': 110, 'height': 120, 'readable': 'Y', 'rotation': 'N',
            'narrow': 2, 'wide': 3,
            'text': None,
        },
        # ^BQ rotation,model,magnification; ^FD <ecc><mode>,data
        Symbology.QRCODE: {
            'x': 112, 'y': 60, 'ecc': 'M', 'cell': 7, 'mode': 'A', 'rotation': 'N',
            'text': (120, 270),
        },
        # ^BX rotation,module height,quality
        Symbology.DATAMATRIX: {
            'x': 136, 'y': 96, 'rotation': 'N', 'module': 8, 'quality': 200,
            'text': (120, 260),
        },
    }

    def setup_commands(self) -> List[str]:
        return [
            '^XA',
            '^CI28',
            f'^PW{self.PRINT_WIDTH}',
            f'^LL{self.LABEL_LENGTH}',
            '^LH0,0',
            '^PON',
            '^MNY',
            '^MMT',
            '^PQ1,0,1,Y',
        ]

    def clear_command(self) -> str:
        # Map clear: start each format from an empty bitmap
        return '^MCY'

    def border_command(self) -> str:
        x, y, width, height, thickness = self.BORDER
        return f'^FO{x},{y}^GB{width},{height},{thickness}^FS'

    def barcode_command(self, code: str, layout: Dict[str, Any]) -> str:
        return (
            f'^FO{layout["x"]},{layout["y"]}'
            f'^BY{layout["narrow"]},{layout["wide"]}'
            f'^BC{layout["rotation"]},{layout["height"]},{layout["readable"]},N,N'
            f'^FD{code}^FS'
        )

    def qrcode_command(self, code: str, layout: Dict[str, Any]) -> str:
        return (
            f'^FO{layout["x"]},{layout["y"]}'
            f'^BQ{layout["rotation"]},2,{layout["cell"]}'
            f'^FD{layout["ecc"]}{layout["mode"]},{code}^FS'
        )

    def datamatrix_command(self, code: str, layout: Dict[str, Any]) -> str:
        return (
            f'^FO{layout["x"]},{layout["y"]}'
            f'^BX{layout["rotation"]},{layout["module"]},{layout["quality"]}'
            f'^FD{code}^FS'
        )

    def text_command(self, code: str, x: int, y: int) -> str:
        return f'^FO{x},{y}^A{self.FONT}^FD{code}^FS'

    def print_command(self) -> str:
        return '^XZ'
