"""Tests for the ZPL encoder."""

import pytest

from label_print_service.encoders import ZPLEncoder
from label_print_service.models import Dialect, Symbology

SETUP = [
    '^XA',
    '^CI28',
    '^PW400',
    '^LL400',
    '^LH0,0',
    '^PON',
    '^MNY',
    '^MMT',
    '^PQ1,0,1,Y',
]


@pytest.fixture
def encoder():
    return ZPLEncoder()


class TestZPLDocuments:
    """Full documents per symbology."""

    def test_barcode_document(self, encoder) -> None:
        expected = SETUP + [
            '^MCY',
            '^FO16,16^GB368,368,3^FS',
            '^FO48,110^BY2,3^BCN,120,Y,N,N^FDPA00001^FS',
            '^XZ',
        ]

        assert encoder.encode('PA00001', 'barcode') == '\n'.join(expected) + '\n'

    def test_barcode_has_no_separate_text_line(self, encoder) -> None:
        lines = encoder.render('PA00001', 'barcode').lines

        assert not any('^A0' in line for line in lines)

    def test_qrcode_document(self, encoder) -> None:
        lines = encoder.render('PA00001', Symbology.QRCODE).lines

        assert list(lines[:len(SETUP)]) == SETUP
        assert lines[-3:] == (
            '^FO112,60^BQN,2,7^FDMA,PA00001^FS',
            '^FO120,270^A0N,28,28^FDPA00001^FS',
            '^XZ',
        )

    def test_datamatrix_document(self, encoder) -> None:
        lines = encoder.render('PA00001', Symbology.DATAMATRIX).lines

        assert lines[-3:] == (
            '^FO136,96^BXN,8,200^FDPA00001^FS',
            '^FO120,260^A0N,28,28^FDPA00001^FS',
            '^XZ',
        )


class TestZPLFormatting:
    """Terminators, border and data handling."""

    def test_lines_end_with_lf_only(self, encoder) -> None:
        text = encoder.encode('PA00001', 'datamatrix')

        assert '\r' not in text
        assert text.endswith('^XZ\n')

    def test_format_starts_with_xa(self, encoder) -> None:
        assert encoder.render('PA00001', 'qrcode').lines[0] == '^XA'

    def test_without_border(self) -> None:
        lines = ZPLEncoder(border=False).render('PA00001', 'qrcode').lines

        assert not any('^GB' in line for line in lines)

    def test_document_metadata(self, encoder) -> None:
        document = encoder.render('PA00001', 'barcode')

        assert document.dialect == Dialect.ZPL
        assert document.terminator == '\n'

    def test_datamatrix_layout_differs_from_tspl(self) -> None:
        from label_print_service.encoders import TSPLEncoder

        zpl = ZPLEncoder.LAYOUTS[Symbology.DATAMATRIX]
        tspl = TSPLEncoder.LAYOUTS[Symbology.DATAMATRIX]

        assert set(zpl) == {'x', 'y', 'rotation', 'module', 'quality', 'text'}
        assert set(zpl) != set(tspl)
