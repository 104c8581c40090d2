"""
Generated Label Model
=====================

One generated code, keyed by the code string.
"""

import uuid
from datetime import datetime
from dataclasses import dataclass, field, asdict
from typing import Optional, Dict, Any


@dataclass
class GeneratedLabel:
    """A generated code and its print state."""

    code: str = ""
    code_type: str = "barcode"
    id: str = field(default_factory=lambda: str(uuid.uuid4())[:8].upper())

    # Origin
    config_id: Optional[str] = None
    print_history_id: Optional[str] = None
    base_name: str = ""
    sequence_number: int = 0

    # Print state
    is_printed: bool = False
    printed_at: Optional[datetime] = None
    print_count: int = 0
    status: str = "generated"  # generated, printed, error

    metadata: Dict[str, str] = field(default_factory=dict)

    # Timestamps
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data = asdict(self)
        for key in ['printed_at', 'created_at', 'updated_at']:
            if data.get(key):
                data[key] = data[key].isoformat()
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'GeneratedLabel':
        """Create from dictionary."""
        data = dict(data)
        for key in ['printed_at', 'created_at', 'updated_at']:
            if data.get(key) and isinstance(data[key], str):
                data[key] = datetime.fromisoformat(data[key])
        return cls(**data)

    def mark_as_printed(self, print_history_id: Optional[str] = None):
        """Mark label as printed."""
        self.is_printed = True
        self.printed_at = datetime.now()
        self.print_count += 1
        self.status = "printed"
        if print_history_id:
            self.print_history_id = print_history_id
        self.updated_at = datetime.now()
