"""
Label Configuration Model
=========================

A named base pattern and quantity from which a sequence of codes is generated.
"""

import uuid
from datetime import datetime
from dataclasses import dataclass, field, asdict
from typing import Optional, Dict, Any, List

from .enums import parse_symbology
from ..config import MIN_QUANTITY, MAX_QUANTITY, DEFAULT_LABEL_WIDTH, DEFAULT_LABEL_HEIGHT
from ..sequence import parse_pattern, is_valid_pattern


@dataclass
class LabelConfig:
    """Label configuration."""

    # Identification
    id: str = field(default_factory=lambda: str(uuid.uuid4())[:8].upper())
    name: str = ""

    # Sequence
    base_name: str = ""  # e.g., "PA00001"
    start_number: int = 0
    quantity: int = 1
    code_type: str = "barcode"  # barcode, qrcode, datamatrix

    # Label size in mm
    label_width: int = DEFAULT_LABEL_WIDTH
    label_height: int = DEFAULT_LABEL_HEIGHT

    # Flags
    is_template: bool = False
    created_by: str = "system"

    # Timestamps
    last_used: datetime = field(default_factory=datetime.now)
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)

    @classmethod
    def create(cls, base_name: str, quantity: int, **kwargs) -> 'LabelConfig':
        """
        Create a validated configuration from a base name.

        The start number is taken from the trailing digits of ``base_name``
        and the name defaults to ``Config-<base_name>``.

        Raises:
            InvalidPatternError: if base_name does not end with digits
            ValueError: if quantity or code_type is invalid
        """
        base_name = (base_name or '').strip()
        pattern = parse_pattern(base_name)
        config = cls(
            name=kwargs.pop('name', None) or f'Config-{base_name}',
            base_name=base_name,
            start_number=pattern.start_number,
            quantity=quantity,
            **kwargs
        )
        config.validate()
        return config

    @property
    def pattern(self) -> Optional[Dict[str, Any]]:
        """Prefix and digit count of the base name, or None if invalid."""
        if not is_valid_pattern(self.base_name):
            return None
        pattern = parse_pattern(self.base_name)
        return {'prefix': pattern.prefix, 'number_length': pattern.width}

    def validate(self):
        """
        Validate configuration fields.

        Raises:
            InvalidPatternError: if base_name does not end with digits
            UnsupportedSymbologyError: if code_type is unknown
            ValueError: if quantity is outside the allowed range
        """
        parse_pattern(self.base_name)
        self.code_type = parse_symbology(self.code_type).value

        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int):
            raise ValueError('quantity must be an integer')
        if not MIN_QUANTITY <= self.quantity <= MAX_QUANTITY:
            raise ValueError(f'quantity must be between {MIN_QUANTITY} and {MAX_QUANTITY}')

    def generate_codes(self) -> List[str]:
        """Generate the configured sequence of codes."""
        return parse_pattern(self.base_name).generate(self.quantity)

    def touch(self):
        """Update last-used timestamp."""
        self.last_used = datetime.now()
        self.updated_at = datetime.now()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data = asdict(self)
        # Convert datetime to ISO format
        for key in ['last_used', 'created_at', 'updated_at']:
            if data.get(key):
                data[key] = data[key].isoformat()
        data['pattern'] = self.pattern
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'LabelConfig':
        """Create from dictionary."""
        data = {k: v for k, v in data.items() if k != 'pattern'}
        # Convert ISO strings back to datetime
        for key in ['last_used', 'created_at', 'updated_at']:
            if data.get(key) and isinstance(data[key], str):
                data[key] = datetime.fromisoformat(data[key])
        return cls(**data)
