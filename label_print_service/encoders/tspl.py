"""
TSPL Encoder
============

Encoder for TSPL/TSPL2 printers (TSC Alpha-40L, Gainsha/Gprinter, TSC desktop).

Protocol Reference:
- TSPL/TSPL2 Programming Manual: https://www.tscprinters.com/cms/upload/download_en/TSPL_TSPL2_Programming.pdf

Key Commands:
- SIZE w,h          - Label size in mm
- GAP g,o           - Gap between labels in mm
- SPEED n           - Print speed (1-15)
- DENSITY n         - Print darkness (0-15)
- DIRECTION n,m     - Print direction
- REFERENCE x,y     - Origin of the coordinate system in dots
- SET PEEL/CUTTER/TEAR - Media handling
- CLS               - Clear image buffer
- BOX x1,y1,x2,y2,t - Rectangle
- BARCODE x,y,...   - 1-D barcode
- QRCODE x,y,...    - QR code
- DMATRIX x,y,...   - DataMatrix
- TEXT x,y,...      - Text
- PRINT m,n         - Print labels

SIZE and GAP are in millimetres, every other coordinate is in dots
(203 dpi, 8 dots/mm, so a 50 mm label is 400 dots wide).
"""

from typing import Any, Dict, List

from .base import BaseEncoder
from ..models import Dialect, Symbology


class TSPLEncoder(BaseEncoder):
    """Encoder for TSPL/TSPL2 printers."""

    dialect = Dialect.TSPL
    line_terminator = '\r\n'
    file_extension = 'tspl'

    # Label settings
    LABEL_WIDTH_MM = 50
    LABEL_HEIGHT_MM = 50
    GAP_MM = 2
    SPEED = 4
    DENSITY = 8

    # Border: 2 mm inset, 3 dot stroke
    BORDER = (16, 16, 384, 384, 3)

    # Internal font 3 (16x24 dots)
    FONT = '3'

    LAYOUTS = {
        # BARCODE x,y,"128",height,readable,rotation,narrow,wide,"data"
        Symbology.BARCODE: {
            'x': 48, 'y': 110, 'height': 120, 'readable': 0, 'rotation': 0,
            'narrow': 2, 'wide': 4, 'type': '128',
            'text': (120, 250),
        },
        # QRCODE x,y,ECC level,cell width,mode,rotation,"data"
        Symbology.QRCODE: {
            'x': 112, 'y': 60, 'ecc': 'M', 'cell': 7, 'mode': 'A', 'rotation': 0,
            'text': (120, 270),
        },
        # DMATRIX x,y,width,height,xM,rows,cols,"data"
        Symbology.DATAMATRIX: {
            'x': 136, 'y': 96, 'width': 128, 'height': 128,
            'module': 8, 'rows': 16, 'cols': 16,
            'text': (120, 260),
        },
    }

    def setup_commands(self) -> List[str]:
        return [
            f'SIZE {self.LABEL_WIDTH_MM} mm,{self.LABEL_HEIGHT_MM} mm',
            f'GAP {self.GAP_MM} mm,0 mm',
            f'SPEED {self.SPEED}',
            f'DENSITY {self.DENSITY}',
            'DIRECTION 1,0',
            'REFERENCE 0,0',
            'SET PEEL OFF',
            'SET CUTTER OFF',
            'SET TEAR ON',
        ]

    def clear_command(self) -> str:
        return 'CLS'

    def border_command(self) -> str:
        x1, y1, x2, y2, thickness = self.BORDER
        return f'BOX {x1},{y1},{x2},{y2},{thickness}'

    def barcode_command(self, code: str, layout: Dict[str, Any]) -> str:
        return (
            f'BARCODE {layout["x"]},{layout["y"]},"{layout["type"]}",'
            f'{layout["height"]},{layout["readable"]},{layout["rotation"]},'
            f'{layout["narrow"]},{layout["wide"]},"{code}"'
        )

    def qrcode_command(self, code: str, layout: Dict[str, Any]) -> str:
        return (
            f'QRCODE {layout["x"]},{layout["y"]},{layout["ecc"]},{layout["cell"]},'
            f'{layout["mode"]},{layout["rotation"]},"{code}"'
        )

    def datamatrix_command(self, code: str, layout: Dict[str, Any]) -> str:
        return (
            f'DMATRIX {layout["x"]},{layout["y"]},{layout["width"]},{layout["height"]},'
            f'x{layout["module"]},{layout["rows"]},{layout["cols"]},"{code}"'
        )

    def text_command(self, code: str, x: int, y: int) -> str:
        # TEXT x,y,"font",rotation,x_multiplication,y_multiplication,"content"
        return f'TEXT {x},{y},"{self.FONT}",0,1,1,"{code}"'

    def print_command(self) -> str:
        return 'PRINT 1,1'
