"""
Base Encoder
============

Abstract base class for printer command-language encoders.

Every encoder renders one code into one self-contained label document::

    setup block          (label size, gap, direction, media flags)
    clear command        (reset the image buffer)
    border command       (optional)
    symbol command       (barcode, qrcode or datamatrix)
    text command         (optional human-readable line)
    print command        (always the last line)

Coordinates and sizes come from a literal per-symbology LAYOUTS table on
each encoder. Nothing is computed from the label size.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional

from ..models import CommandDocument, Dialect, Symbology, parse_symbology


class BaseEncoder(ABC):
    """Abstract base class for command encoders."""

    dialect: Dialect = None
    line_terminator = '\n'
    file_extension = 'txt'

    # Symbology -> layout row (positions, sizes, rotation, text placement)
    LAYOUTS: Dict[Symbology, Dict[str, Any]] = {}

    def __init__(self, border: bool = True):
        """Initialize encoder; ``border`` toggles the framing rectangle."""
        self.border = border

    # -------------------------------------------------------------------------
    # Dialect commands
    # -------------------------------------------------------------------------

    @abstractmethod
    def setup_commands(self) -> List[str]:
        """Label dimensions, direction, reference and media flags."""
        pass

    @abstractmethod
    def clear_command(self) -> str:
        """Command that resets the drawing buffer."""
        pass

    @abstractmethod
    def border_command(self) -> str:
        """Rectangle inset from the label edges."""
        pass

    @abstractmethod
    def barcode_command(self, code: str, layout: Dict[str, Any]) -> str:
        pass

    @abstractmethod
    def qrcode_command(self, code: str, layout: Dict[str, Any]) -> str:
        pass

    @abstractmethod
    def datamatrix_command(self, code: str, layout: Dict[str, Any]) -> str:
        pass

    @abstractmethod
    def text_command(self, code: str, x: int, y: int) -> str:
        """Human-readable line below the symbol."""
        pass

    @abstractmethod
    def print_command(self) -> str:
        """Print exactly one copy of the composed label."""
        pass

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def layout(self, symbology) -> Dict[str, Any]:
        """
        Get the layout row for a symbology.

        Raises:
            UnsupportedSymbologyError: for anything outside the enum
        """
        return self.LAYOUTS[parse_symbology(symbology)]

    def symbol_command(self, code: str, symbology: Symbology,
                       layout: Dict[str, Any]) -> str:
        builders = {
            Symbology.BARCODE: self.barcode_command,
            Symbology.QRCODE: self.qrcode_command,
            Symbology.DATAMATRIX: self.datamatrix_command,
        }
        return builders[symbology](code, layout)

    def render(self, code: str, symbology) -> CommandDocument:
        """
        Render one code as a complete command document.

        Args:
            code: Literal data to encode (inserted without escaping)
            symbology: barcode, qrcode or datamatrix

        Returns:
            CommandDocument ready to be sent or written to a file
        """
        symbology = parse_symbology(symbology)
        layout = self.layout(symbology)

        lines = list(self.setup_commands())
        lines.append(self.clear_command())
        if self.border:
            lines.append(self.border_command())
        lines.append(self.symbol_command(code, symbology, layout))

        text_position: Optional[tuple] = layout.get('text')
        if text_position:
            lines.append(self.text_command(code, *text_position))

        lines.append(self.print_command())

        return CommandDocument(
            dialect=self.dialect,
            symbology=symbology,
            code=code,
            lines=tuple(lines),
            terminator=self.line_terminator,
        )

    def encode(self, code: str, symbology) -> str:
        """Render one code and return the document text."""
        return self.render(code, symbology).text

    def render_batch(self, codes: Iterable[str], symbology) -> List[CommandDocument]:
        """Render codes in order, one document per code."""
        symbology = parse_symbology(symbology)
        return [self.render(code, symbology) for code in codes]

    def encode_batch(self, codes: Iterable[str], symbology) -> str:
        """
        Render codes into one stream, documents separated by a blank line.

        The order of documents matches the order of ``codes``.
        """
        documents = self.render_batch(codes, symbology)
        return self.line_terminator.join(doc.text for doc in documents)
