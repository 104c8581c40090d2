"""Tests for properties shared by every encoder."""

import re

import pytest

from label_print_service import encode, encode_batch, generate
from label_print_service.encoders import ENCODERS, get_encoder, render_batch, TSPLEncoder, ZPLEncoder
from label_print_service.exceptions import UnsupportedDialectError, UnsupportedSymbologyError
from label_print_service.models import Dialect, Symbology

CLEAR = {Dialect.TSPL: 'CLS', Dialect.ZPL: '^MCY'}
COMMIT = {Dialect.TSPL: 'PRINT 1,1', Dialect.ZPL: '^XZ'}
SYMBOL_PREFIX = {
    (Dialect.TSPL, Symbology.BARCODE): 'BARCODE ',
    (Dialect.TSPL, Symbology.QRCODE): 'QRCODE ',
    (Dialect.TSPL, Symbology.DATAMATRIX): 'DMATRIX ',
    (Dialect.ZPL, Symbology.BARCODE): '^BC',
    (Dialect.ZPL, Symbology.QRCODE): '^BQ',
    (Dialect.ZPL, Symbology.DATAMATRIX): '^BX',
}

ALL_COMBINATIONS = [(d, s) for d in Dialect for s in Symbology]


class TestRegistry:
    """Tests for get_encoder()."""

    def test_registry(self) -> None:
        assert ENCODERS == {Dialect.TSPL: TSPLEncoder, Dialect.ZPL: ZPLEncoder}

    def test_get_encoder_by_name(self) -> None:
        assert get_encoder('tspl') is TSPLEncoder
        assert get_encoder('ZPL') is ZPLEncoder
        assert get_encoder(Dialect.ZPL) is ZPLEncoder

    def test_unknown_dialect(self) -> None:
        with pytest.raises(UnsupportedDialectError):
            get_encoder('epl')


class TestDocumentStructure:
    """Ordering and counts across every dialect and symbology."""

    @pytest.mark.parametrize('dialect,symbology', ALL_COMBINATIONS)
    def test_one_clear_and_one_commit(self, dialect, symbology) -> None:
        lines = get_encoder(dialect)().render('PA00001', symbology).lines

        assert lines.count(CLEAR[dialect]) == 1
        assert lines.count(COMMIT[dialect]) == 1
        assert lines[-1] == COMMIT[dialect]

    @pytest.mark.parametrize('dialect,symbology', ALL_COMBINATIONS)
    def test_clear_before_symbol_before_commit(self, dialect, symbology) -> None:
        lines = get_encoder(dialect)().render('PA00001', symbology).lines
        prefix = SYMBOL_PREFIX[(dialect, symbology)]

        symbol_index = next(i for i, line in enumerate(lines) if prefix in line)
        assert lines.index(CLEAR[dialect]) < symbol_index < lines.index(COMMIT[dialect])

    @pytest.mark.parametrize('dialect,symbology', ALL_COMBINATIONS)
    def test_encode_is_pure(self, dialect, symbology) -> None:
        assert encode('PA00001', symbology, dialect) == encode('PA00001', symbology, dialect)

    @pytest.mark.parametrize('dialect,symbology', ALL_COMBINATIONS)
    def test_human_readable_text_present(self, dialect, symbology) -> None:
        # Either a text line or an inline interpretation line carries the code
        text = encode('PA00001', symbology, dialect)

        assert text.count('PA00001') >= 1
        if (dialect, symbology) != (Dialect.ZPL, Symbology.BARCODE):
            assert text.count('PA00001') == 2


class TestUnsupportedSymbology:

    @pytest.mark.parametrize('dialect', list(Dialect))
    @pytest.mark.parametrize('symbology', ['pdf417', 'ean13', '', None])
    def test_rejected(self, dialect, symbology) -> None:
        with pytest.raises(UnsupportedSymbologyError):
            encode('PA00001', symbology, dialect)

    def test_case_insensitive_names(self) -> None:
        assert encode('PA00001', 'QRCode', 'tspl') == encode('PA00001', Symbology.QRCODE, 'tspl')


class TestLayouts:
    """Tests for BaseEncoder.layout()."""

    def test_lookup_by_name(self) -> None:
        encoder = TSPLEncoder()

        assert encoder.layout('QRCode') is TSPLEncoder.LAYOUTS[Symbology.QRCODE]

    def test_lookup_unknown(self) -> None:
        with pytest.raises(UnsupportedSymbologyError):
            ZPLEncoder().layout('aztec')

    def test_render_reads_layout(self) -> None:
        class ShiftedZPLEncoder(ZPLEncoder):
            def layout(self, symbology):
                return dict(super().layout(symbology), x=200)

        lines = ShiftedZPLEncoder().render('A1', 'datamatrix').lines

        assert '^FO200,96^BXN,8,200^FDA1^FS' in lines


class TestBatch:
    """Tests for encode_batch() and render_batch()."""

    @pytest.mark.parametrize('dialect', list(Dialect))
    def test_batch_preserves_order(self, dialect) -> None:
        codes = generate('PA00001', 5)
        stream = encode_batch(codes, 'barcode', dialect)

        payloads = re.findall(r'PA\d{5}', stream)
        # Drop repeats from text lines, keep first-seen order
        seen = list(dict.fromkeys(payloads))
        assert seen == codes

    def test_tspl_documents_separated_by_blank_line(self) -> None:
        stream = encode_batch(['A1', 'A2'], 'qrcode', 'tspl')

        assert 'PRINT 1,1\r\n\r\nSIZE 50 mm,50 mm' in stream
        assert stream.count('CLS\r\n') == 2

    def test_zpl_documents_separated_by_blank_line(self) -> None:
        stream = encode_batch(['A1', 'A2'], 'qrcode', 'zpl')

        assert '^XZ\n\n^XA' in stream
        assert stream.count('^XA') == 2

    def test_batch_equals_joined_documents(self) -> None:
        codes = ['A1', 'A2', 'A3']
        stream = encode_batch(codes, 'datamatrix', 'zpl')

        assert stream == '\n'.join(encode(code, 'datamatrix', 'zpl') for code in codes)

    def test_empty_batch(self) -> None:
        assert encode_batch([], 'barcode', 'tspl') == ''

    def test_render_batch(self) -> None:
        documents = render_batch(['A1', 'A2'], 'barcode', 'zpl', border=False)

        assert [d.code for d in documents] == ['A1', 'A2']
        assert all('^GB' not in line for d in documents for line in d.lines)

    def test_batch_rejects_unknown_symbology_before_output(self) -> None:
        with pytest.raises(UnsupportedSymbologyError):
            encode_batch(['A1'], 'aztec', 'tspl')
