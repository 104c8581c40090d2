"""
Print History Model
===================

Record of one batch sent to a printer or downloaded as a command file.
"""

import uuid
from datetime import datetime
from dataclasses import dataclass, field, asdict
from typing import Optional, Dict, Any, List

from .enums import ConnectionType, PrintStatus, parse_symbology


@dataclass
class PrintHistory:
    """Print job record."""

    # Identification
    id: str = field(default_factory=lambda: f"PH-{str(uuid.uuid4())[:8].upper()}")
    config_id: Optional[str] = None

    # Batch details
    base_name: str = ""
    quantity: int = 0
    code_type: str = "barcode"
    generated_codes: List[str] = field(default_factory=list)

    # Destination
    connection_type: str = "download"  # bluetooth, serial, usb, network, download
    printer_name: str = "Unknown"

    # Outcome
    status: str = "success"  # success, failed, partial
    printed_count: Optional[int] = None
    error_message: Optional[str] = None
    duration: int = 0  # milliseconds

    # Source
    device_info: Dict[str, Any] = field(default_factory=dict)
    printed_by: str = "system"

    # Timestamps
    created_at: datetime = field(default_factory=datetime.now)

    def __post_init__(self):
        # Successful batches default to every label printed
        if self.printed_count is None:
            self.printed_count = self.quantity if self.status == PrintStatus.SUCCESS.value else 0

    @property
    def success_rate(self) -> float:
        """Percentage of requested labels that were printed."""
        if not self.quantity:
            return 0
        return self.printed_count / self.quantity * 100

    def validate(self):
        """
        Validate record fields.

        Raises:
            ValueError: on a missing or unknown field value
        """
        if not self.base_name:
            raise ValueError('base_name required')
        for key in ['quantity', 'printed_count', 'duration']:
            value = getattr(self, key)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ValueError(f'{key} must be a non-negative integer')
        if not isinstance(self.generated_codes, list):
            raise ValueError('generated_codes must be a list')
        self.code_type = parse_symbology(self.code_type).value
        self.connection_type = ConnectionType(self.connection_type).value
        self.status = PrintStatus(self.status).value

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data = asdict(self)
        data['created_at'] = self.created_at.isoformat()
        data['success_rate'] = round(self.success_rate, 2)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PrintHistory':
        """Create from dictionary."""
        data = {k: v for k, v in data.items() if k != 'success_rate'}
        if data.get('created_at') and isinstance(data['created_at'], str):
            data['created_at'] = datetime.fromisoformat(data['created_at'])
        return cls(**data)
