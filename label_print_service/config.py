"""
Label Print Service Configuration
"""

import os

# =============================================================================
# Server Configuration
# =============================================================================

PORT = int(os.environ.get('LABEL_PRINT_PORT', 5100))
HOST = os.environ.get('LABEL_PRINT_HOST', '0.0.0.0')
DEBUG = os.environ.get('LABEL_PRINT_DEBUG', 'false').lower() == 'true'
LOG_LEVEL = os.environ.get('LABEL_PRINT_LOG_LEVEL', 'INFO').upper()

# API Key for authentication
API_KEY = os.environ.get('LABEL_PRINT_API_KEY', 'label-print-2026')

# Allowed browser origin for the web front end
CORS_ORIGIN = os.environ.get('LABEL_PRINT_CORS_ORIGIN', 'http://localhost:5173')

# =============================================================================
# Sequence Policy
# =============================================================================

MIN_QUANTITY = 1
MAX_QUANTITY = 1000

# =============================================================================
# Label Defaults
# =============================================================================

DEFAULT_LABEL_WIDTH = 50   # mm
DEFAULT_LABEL_HEIGHT = 50  # mm
DEFAULT_CODE_TYPE = 'barcode'
DEFAULT_DIALECT = 'tspl'

# =============================================================================
# Printer Defaults
# =============================================================================

DEFAULT_TIMEOUT = 30  # seconds

# Raw TCP printing port (TSPL and ZPL)
RAW_PORT = 9100

# Delay between individually sent labels
PRINT_DELAY_MS = 300

PRINTER_SETTINGS = {
    'defaultPrinter': 'TSC Alpha 40L',
    'defaultConnection': 'bluetooth',
    'labelSize': {
        'width': DEFAULT_LABEL_WIDTH,
        'height': DEFAULT_LABEL_HEIGHT,
        'unit': 'mm',
    },
    'defaultCodeType': DEFAULT_CODE_TYPE,
    'defaultDialect': DEFAULT_DIALECT,
    'baudRate': 9600,
    'autoReconnect': True,
    'printDelay': PRINT_DELAY_MS,
}

# =============================================================================
# Supported Dialects
# =============================================================================

DIALECTS = {
    'tspl': {
        'name': 'TSPL/TSPL2',
        'description': 'TSC, Gainsha/Gprinter and compatible label printers',
        'encoder': 'tspl',
        'connection': ['bluetooth', 'serial', 'usb', 'network', 'download'],
    },
    'zpl': {
        'name': 'ZPL II',
        'description': 'Zebra, CAB and printers with ZPL emulation',
        'encoder': 'zpl',
        'connection': ['bluetooth', 'serial', 'usb', 'network', 'download'],
    },
}

# =============================================================================
# Storage Configuration
# =============================================================================

# Where to store configurations, labels and print history (JSON files)
DATA_DIR = os.environ.get('LABEL_PRINT_DATA_DIR', os.path.expanduser('~/.label_print_service'))

# Print history retention (days)
HISTORY_RETENTION_DAYS = 90
