"""Tests for the record models."""

from datetime import datetime

import pytest

from label_print_service.config import MAX_QUANTITY
from label_print_service.exceptions import InvalidPatternError, UnsupportedSymbologyError
from label_print_service.models import GeneratedLabel, LabelConfig, PrintHistory


class TestLabelConfig:
    """Tests for LabelConfig."""

    def test_create(self) -> None:
        config = LabelConfig.create('PA00010', 3)

        assert config.name == 'Config-PA00010'
        assert config.start_number == 10
        assert config.code_type == 'barcode'
        assert config.pattern == {'prefix': 'PA', 'number_length': 5}
        assert config.generate_codes() == ['PA00010', 'PA00011', 'PA00012']

    def test_create_strips_whitespace(self) -> None:
        assert LabelConfig.create('  PA001 ', 1).base_name == 'PA001'

    def test_create_normalizes_code_type(self) -> None:
        assert LabelConfig.create('PA001', 1, code_type='QRCODE').code_type == 'qrcode'

    def test_invalid_base_name(self) -> None:
        with pytest.raises(InvalidPatternError):
            LabelConfig.create('NoDigits', 5)

    def test_invalid_code_type(self) -> None:
        with pytest.raises(UnsupportedSymbologyError):
            LabelConfig.create('PA001', 5, code_type='pdf417')

    @pytest.mark.parametrize('quantity', [0, MAX_QUANTITY + 1, -3, '5', 2.5, True])
    def test_quantity_bounds(self, quantity) -> None:
        with pytest.raises(ValueError):
            LabelConfig.create('PA001', quantity)

    def test_max_quantity_allowed(self) -> None:
        assert len(LabelConfig.create('PA0001', MAX_QUANTITY).generate_codes()) == MAX_QUANTITY

    def test_pattern_none_for_invalid_name(self) -> None:
        assert LabelConfig(base_name='ABC').pattern is None

    def test_dict_round_trip(self) -> None:
        config = LabelConfig.create('PA001', 2, is_template=True)
        data = config.to_dict()

        assert data['pattern'] == {'prefix': 'PA', 'number_length': 3}
        assert isinstance(data['created_at'], str)
        assert LabelConfig.from_dict(data) == config


class TestGeneratedLabel:

    def test_mark_as_printed(self) -> None:
        label = GeneratedLabel(code='PA001')
        label.mark_as_printed('PH-1')
        label.mark_as_printed()

        assert label.is_printed
        assert label.status == 'printed'
        assert label.print_count == 2
        assert label.print_history_id == 'PH-1'
        assert isinstance(label.printed_at, datetime)


class TestPrintHistory:

    def test_success_defaults_printed_count(self) -> None:
        history = PrintHistory(base_name='PA001', quantity=10, status='success')

        assert history.printed_count == 10
        assert history.success_rate == 100

    def test_failed_defaults_to_zero(self) -> None:
        history = PrintHistory(base_name='PA001', quantity=10, status='failed')

        assert history.printed_count == 0
        assert history.success_rate == 0

    def test_partial_success_rate(self) -> None:
        history = PrintHistory(base_name='PA001', quantity=8, status='partial', printed_count=2)

        assert history.success_rate == 25

    def test_zero_quantity_rate(self) -> None:
        assert PrintHistory(base_name='PA001', quantity=0).success_rate == 0

    @pytest.mark.parametrize('field,value', [
        ('connection_type', 'carrier-pigeon'),
        ('status', 'maybe'),
        ('base_name', ''),
        ('quantity', 'ten'),
        ('quantity', -1),
        ('printed_count', '3'),
        ('printed_count', -2),
        ('printed_count', True),
        ('duration', '120'),
        ('duration', 1.5),
        ('generated_codes', 'PA001'),
    ])
    def test_validate_rejects(self, field, value) -> None:
        history = PrintHistory(base_name='PA001', quantity=1)
        setattr(history, field, value)

        with pytest.raises(ValueError):
            history.validate()

    def test_dict_round_trip(self) -> None:
        history = PrintHistory(base_name='PA001', quantity=2, generated_codes=['PA001', 'PA002'])
        data = history.to_dict()

        assert data['success_rate'] == 100
        assert PrintHistory.from_dict(data) == history
