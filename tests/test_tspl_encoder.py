"""Tests for the TSPL encoder."""

import pytest

from label_print_service.encoders import TSPLEncoder
from label_print_service.models import Dialect, Symbology

SETUP = [
    'SIZE 50 mm,50 mm',
    'GAP 2 mm,0 mm',
    'SPEED 4',
    'DENSITY 8',
    'DIRECTION 1,0',
    'REFERENCE 0,0',
    'SET PEEL OFF',
    'SET CUTTER OFF',
    'SET TEAR ON',
]


@pytest.fixture
def encoder():
    return TSPLEncoder()


class TestTSPLDocuments:
    """Full documents per symbology."""

    def test_barcode_document(self, encoder) -> None:
        expected = SETUP + [
            'CLS',
            'BOX 16,16,384,384,3',
            'BARCODE 48,110,"128",120,0,0,2,4,"PA00001"',
            'TEXT 120,250,"3",0,1,1,"PA00001"',
            'PRINT 1,1',
        ]

        assert encoder.encode('PA00001', 'barcode') == ''.join(line + '\r\n' for line in expected)

    def test_qrcode_document(self, encoder) -> None:
        lines = encoder.render('PA00001', Symbology.QRCODE).lines

        assert list(lines[:len(SETUP)]) == SETUP
        assert lines[-3:] == (
            'QRCODE 112,60,M,7,A,0,"PA00001"',
            'TEXT 120,270,"3",0,1,1,"PA00001"',
            'PRINT 1,1',
        )

    def test_datamatrix_document(self, encoder) -> None:
        lines = encoder.render('PA00001', Symbology.DATAMATRIX).lines

        assert lines[-3:] == (
            'DMATRIX 136,96,128,128,x8,16,16,"PA00001"',
            'TEXT 120,260,"3",0,1,1,"PA00001"',
            'PRINT 1,1',
        )


class TestTSPLFormatting:
    """Terminators, border and data handling."""

    def test_lines_end_with_crlf(self, encoder) -> None:
        text = encoder.encode('PA00001', 'qrcode')

        assert text.endswith('PRINT 1,1\r\n')
        assert text.count('\r\n') == len(encoder.render('PA00001', 'qrcode').lines)

    def test_without_border(self) -> None:
        lines = TSPLEncoder(border=False).render('PA00001', 'barcode').lines

        assert not any(line.startswith('BOX') for line in lines)
        assert lines[len(SETUP)] == 'CLS'
        assert lines[len(SETUP) + 1].startswith('BARCODE')

    def test_data_is_not_escaped(self, encoder) -> None:
        lines = encoder.render('A"1', 'barcode').lines

        assert 'BARCODE 48,110,"128",120,0,0,2,4,"A"1"' in lines

    def test_document_metadata(self, encoder) -> None:
        document = encoder.render('PA00001', 'datamatrix')

        assert document.dialect == Dialect.TSPL
        assert document.symbology == Symbology.DATAMATRIX
        assert document.code == 'PA00001'
        assert document.to_bytes() == document.text.encode('utf-8')

    def test_datamatrix_layout_columns(self) -> None:
        layout = TSPLEncoder.LAYOUTS[Symbology.DATAMATRIX]

        assert set(layout) == {'x', 'y', 'width', 'height', 'module', 'rows', 'cols', 'text'}
