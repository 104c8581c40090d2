"""
Label Print Service - Main Application
======================================

Sequential label generation and printer command service.

Run: python -m label_print_service
"""

import sys
import time
import logging
import platform
import socket as sock
from datetime import datetime
from typing import Optional

from flask import Flask, Response, request, jsonify
from flask_cors import CORS

from . import __version__
from .config import (
    PORT, HOST, DEBUG, API_KEY, CORS_ORIGIN, DATA_DIR, LOG_LEVEL, DIALECTS,
    DEFAULT_CODE_TYPE, DEFAULT_DIALECT, PRINTER_SETTINGS, PRINT_DELAY_MS, HISTORY_RETENTION_DAYS,
)
from .encoders import get_encoder
from .exceptions import LabelPrintError
from .models import LabelConfig, PrintHistory, Symbology, ConnectionType, PrintStatus
from .store import LabelStore
from .transports import ConnectionState, NetworkTransport, send_documents

logger = logging.getLogger(__name__)

# =============================================================================
# Application Setup
# =============================================================================

app = Flask(__name__)
CORS(app, origins=[CORS_ORIGIN], supports_credentials=True)

store = LabelStore(DATA_DIR)

# Editable copy of the printer settings defaults
_printer_settings: dict = dict(PRINTER_SETTINGS)


def _check_api_key():
    """Validate API key from request."""
    data = request.get_json(silent=True) or {}
    auth_header = request.headers.get('Authorization', '')

    # Check body
    if data.get('api_key') == API_KEY:
        return True

    # Check header (Bearer token)
    if auth_header.startswith('Bearer ') and auth_header[7:] == API_KEY:
        return True

    return False


def _unauthorized():
    return jsonify({'success': False, 'error': 'Invalid API key'}), 401


def _not_found(what: str):
    return jsonify({'success': False, 'error': f'{what} not found'}), 404


def _bad_request(error):
    return jsonify({'success': False, 'error': str(error)}), 400


@app.errorhandler(500)
def internal_error(error):
    logger.exception("Unhandled error on %s %s", request.method, request.path)
    return jsonify({'success': False, 'error': 'Internal server error'}), 500


def _parse_date(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO date query parameter (raises ValueError)."""
    if not value:
        return None
    return datetime.fromisoformat(value)


def _parse_bool(value: Optional[str]) -> Optional[bool]:
    if value is None:
        return None
    return value.lower() in ('1', 'true', 'yes')


def _body_bool(value, default: bool) -> bool:
    """Read a JSON boolean flag, also accepting "true"/"false" strings (raises ValueError)."""
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return _parse_bool(value)
    raise ValueError(f'Expected a boolean, got {value!r}')


def _non_negative_int(value, name: str) -> int:
    """Validate an integer body field (raises ValueError)."""
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f'{name} must be a non-negative integer')
    return value


# =============================================================================
# Health & Info Endpoints
# =============================================================================

@app.route('/', methods=['GET'])
@app.route('/api', methods=['GET'])
def api_info():
    """API info (JSON)."""
    return jsonify({
        'service': 'Label Print Service',
        'version': __version__,
        'status': 'running',
        'endpoints': {
            'health': '/health',
            'labels': '/api/labels',
            'encode': '/api/encode',
            'print_history': '/api/print-history',
            'config': '/api/config',
            'dialects': '/api/dialects',
        }
    })


@app.route('/health', methods=['GET'])
def health():
    """Health check with system info."""
    return jsonify({
        'status': 'online',
        'version': __version__,
        'hostname': sock.gethostname(),
        'platform': platform.system(),
        'python': sys.version.split()[0],
        **store.counts(),
        'timestamp': datetime.now().isoformat(),
    })


@app.route('/api/dialects', methods=['GET'])
def list_dialects():
    """List printer command dialects and symbologies."""
    return jsonify({
        'success': True,
        'dialects': DIALECTS,
        'symbologies': [s.value for s in Symbology],
    })


# =============================================================================
# Stateless Encoding
# =============================================================================

@app.route('/api/encode', methods=['POST'])
def encode_sequence():
    """Generate a sequence and encode it without storing anything."""
    data = request.get_json(silent=True)
    if not data:
        return _bad_request('Request body required')
    if not data.get('base_name'):
        return _bad_request('base_name required')

    try:
        config = LabelConfig.create(
            data['base_name'],
            data.get('quantity', 1),
            code_type=data.get('code_type', DEFAULT_CODE_TYPE),
        )
        border = _body_bool(data.get('border'), True)
        encoder = get_encoder(data.get('dialect', DEFAULT_DIALECT))(border=border)
        codes = config.generate_codes()
        commands = encoder.encode_batch(codes, config.code_type)
    except ValueError as e:
        return _bad_request(e)

    return jsonify({
        'success': True,
        'codes': codes,
        'count': len(codes),
        'dialect': encoder.dialect.value,
        'code_type': config.code_type,
        'commands': commands,
    })


# =============================================================================
# Label Configuration API
# =============================================================================

@app.route('/api/labels', methods=['POST'])
def create_config():
    """Create a label configuration."""
    if not _check_api_key():
        return _unauthorized()

    data = request.get_json(silent=True)
    if not data:
        return _bad_request('Request body required')
    if not data.get('base_name'):
        return _bad_request('base_name required')
    if 'quantity' not in data:
        return _bad_request('quantity required')

    try:
        config = LabelConfig.create(
            data['base_name'],
            data['quantity'],
            name=data.get('name'),
            code_type=data.get('code_type', DEFAULT_CODE_TYPE),
            is_template=data.get('is_template', False),
            created_by=data.get('created_by') or 'system',
        )
        store.add_config(config)
    except ValueError as e:
        return _bad_request(e)

    return jsonify({
        'success': True,
        'config': config.to_dict(),
        'message': 'Label configuration created successfully'
    }), 201


@app.route('/api/labels', methods=['GET'])
def list_configs():
    """List label configurations.

    Query params:
        page, limit - Pagination
        is_template=true|false - Filter templates
    """
    try:
        result = store.list_configs(
            is_template=_parse_bool(request.args.get('is_template')),
            page=request.args.get('page', 1, type=int),
            limit=request.args.get('limit', 10, type=int),
        )
    except ValueError as e:
        return _bad_request(e)

    return jsonify({
        'success': True,
        'configs': [c.to_dict() for c in result['items']],
        'total': result['total'],
        'total_pages': result['total_pages'],
        'current_page': result['current_page'],
    })


@app.route('/api/labels/recent/list', methods=['GET'])
def recent_configs():
    """Recently used configurations."""
    limit = request.args.get('limit', 5, type=int)
    return jsonify({
        'success': True,
        'configs': [c.to_dict() for c in store.recent_configs(limit)],
    })


@app.route('/api/labels/<config_id>', methods=['GET'])
def get_config(config_id):
    """Get label configuration."""
    config = store.get_config(config_id)
    if not config:
        return _not_found('Configuration')

    return jsonify({'success': True, 'config': config.to_dict()})


@app.route('/api/labels/<config_id>', methods=['PUT'])
def update_config(config_id):
    """Update name, quantity, code type or template flag."""
    if not _check_api_key():
        return _unauthorized()

    data = request.get_json(silent=True)
    if not data:
        return _bad_request('Request body required')

    try:
        config = store.update_config(config_id, **{
            key: data.get(key) for key in ['name', 'quantity', 'code_type', 'is_template']
        })
    except ValueError as e:
        return _bad_request(e)

    if not config:
        return _not_found('Configuration')

    return jsonify({
        'success': True,
        'config': config.to_dict(),
        'message': 'Configuration updated successfully'
    })


@app.route('/api/labels/<config_id>', methods=['DELETE'])
def delete_config(config_id):
    """Delete label configuration."""
    if not _check_api_key():
        return _unauthorized()

    if not store.delete_config(config_id):
        return _not_found('Configuration')

    return jsonify({'success': True, 'message': 'Configuration deleted successfully'})


@app.route('/api/labels/<config_id>/generate', methods=['POST'])
def generate_codes(config_id):
    """Generate the codes of a configuration, optionally storing them."""
    if not _check_api_key():
        return _unauthorized()

    data = request.get_json(silent=True) or {}
    codes = store.generate(config_id, save=data.get('save_to_db') is True)
    if codes is None:
        return _not_found('Configuration')

    config = store.get_config(config_id)
    return jsonify({
        'success': True,
        'codes': codes,
        'count': len(codes),
        'config': {
            'id': config.id,
            'name': config.name,
            'base_name': config.base_name,
            'code_type': config.code_type,
        }
    })


@app.route('/api/labels/<config_id>/commands', methods=['GET'])
def download_commands(config_id):
    """Download the printer command file for a configuration.

    Query params:
        dialect=tspl|zpl - Command language (default tspl)
        border=true|false - Frame each label
    """
    config = store.get_config(config_id)
    if not config:
        return _not_found('Configuration')

    try:
        encoder_class = get_encoder(request.args.get('dialect', DEFAULT_DIALECT))
    except LabelPrintError as e:
        return _bad_request(e)

    border = _parse_bool(request.args.get('border'))
    encoder = encoder_class(border=True if border is None else border)
    commands = encoder.encode_batch(config.generate_codes(), config.code_type)
    filename = f'labels_{config.base_name}.{encoder.file_extension}'

    return Response(
        commands,
        mimetype='text/plain',
        headers={'Content-Disposition': f'attachment; filename="{filename}"'},
    )


@app.route('/api/labels/<config_id>/print', methods=['POST'])
def print_config(config_id):
    """Send a configuration's labels to a network printer and record the job."""
    if not _check_api_key():
        return _unauthorized()

    config = store.get_config(config_id)
    if not config:
        return _not_found('Configuration')

    data = request.get_json(silent=True) or {}
    if not data.get('host'):
        return _bad_request('host required')

    try:
        border = _body_bool(data.get('border'), True)
        encoder = get_encoder(data.get('dialect', DEFAULT_DIALECT))(border=border)
        delay_ms = _non_negative_int(
            data.get('delay_ms', _printer_settings.get('printDelay', PRINT_DELAY_MS)), 'delay_ms'
        )
        port = _non_negative_int(data['port'], 'port') if data.get('port') is not None else None
    except ValueError as e:
        return _bad_request(e)

    codes = store.generate(config_id)
    transport = NetworkTransport(data['host'], port)
    state = ConnectionState(device_name=data.get('printer_name', data['host']))

    started = time.monotonic()
    state, printed = send_documents(
        transport,
        encoder.render_batch(codes, config.code_type),
        state,
        delay_ms=delay_ms,
    )
    duration = int((time.monotonic() - started) * 1000)

    if printed == len(codes):
        status = PrintStatus.SUCCESS
    elif printed:
        status = PrintStatus.PARTIAL
    else:
        status = PrintStatus.FAILED

    history = store.record_print(PrintHistory(
        config_id=config.id,
        base_name=config.base_name,
        quantity=len(codes),
        code_type=config.code_type,
        generated_codes=codes,
        connection_type=ConnectionType.NETWORK.value,
        printer_name=state.device_name,
        status=status.value,
        printed_count=printed,
        error_message=state.last_error,
        duration=duration,
        printed_by=data.get('printed_by') or 'system',
    ))

    return jsonify({
        'success': status == PrintStatus.SUCCESS,
        'printed_count': printed,
        'connection': state.to_dict(),
        'history': history.to_dict(),
    }), 200 if printed else 502


# =============================================================================
# Print History API
# =============================================================================

@app.route('/api/print-history', methods=['POST'])
def create_history():
    """Record a print job."""
    if not _check_api_key():
        return _unauthorized()

    data = request.get_json(silent=True)
    if not data:
        return _bad_request('Request body required')

    try:
        history = PrintHistory(
            config_id=data.get('config_id'),
            base_name=data.get('base_name', ''),
            quantity=data.get('quantity', 0),
            code_type=data.get('code_type', DEFAULT_CODE_TYPE),
            generated_codes=data.get('generated_codes') or [],
            connection_type=data.get('connection_type', ''),
            printer_name=data.get('printer_name') or 'Unknown',
            status=data.get('status', ''),
            printed_count=data.get('printed_count'),
            error_message=data.get('error_message'),
            duration=data.get('duration') or 0,
            device_info=data.get('device_info') or {},
            printed_by=data.get('printed_by') or 'system',
        )
        store.record_print(history)
    except ValueError as e:
        return _bad_request(e)

    return jsonify({
        'success': True,
        'history': history.to_dict(),
        'message': 'Print history recorded successfully'
    }), 201


@app.route('/api/print-history', methods=['GET'])
def list_history():
    """List print history.

    Query params:
        page, limit - Pagination
        status, connection_type, base_name - Filters
        start_date, end_date - ISO dates
    """
    try:
        result = store.list_history(
            status=request.args.get('status'),
            connection_type=request.args.get('connection_type'),
            base_name=request.args.get('base_name'),
            start=_parse_date(request.args.get('start_date')),
            end=_parse_date(request.args.get('end_date')),
            page=request.args.get('page', 1, type=int),
            limit=request.args.get('limit', 10, type=int),
        )
    except ValueError as e:
        return _bad_request(e)

    return jsonify({
        'success': True,
        'history': [h.to_dict() for h in result['items']],
        'total': result['total'],
        'total_pages': result['total_pages'],
        'current_page': result['current_page'],
    })


@app.route('/api/print-history/<history_id>', methods=['GET'])
def get_history(history_id):
    history = store.get_history(history_id)
    if not history:
        return _not_found('Print history')

    return jsonify({'success': True, 'history': history.to_dict()})


@app.route('/api/print-history/<history_id>', methods=['DELETE'])
def delete_history(history_id):
    if not _check_api_key():
        return _unauthorized()

    if not store.delete_history(history_id):
        return _not_found('Print history')

    return jsonify({'success': True, 'message': 'Print history deleted successfully'})


@app.route('/api/print-history/bulk-delete', methods=['POST'])
def bulk_delete_history():
    """Delete print history by ``ids`` or everything ``older_than`` a date."""
    if not _check_api_key():
        return _unauthorized()

    data = request.get_json(silent=True) or {}
    try:
        deleted = store.bulk_delete_history(
            ids=data.get('ids'),
            older_than=_parse_date(data.get('older_than')),
        )
    except ValueError as e:
        return _bad_request(e)

    return jsonify({
        'success': True,
        'message': f'Deleted {deleted} print history records',
        'deleted_count': deleted,
    })


@app.route('/api/print-history/stats/summary', methods=['GET'])
def history_summary():
    """Print statistics between optional start_date and end_date."""
    try:
        stats = store.statistics(
            start=_parse_date(request.args.get('start_date')),
            end=_parse_date(request.args.get('end_date')),
        )
    except ValueError as e:
        return _bad_request(e)

    return jsonify({'success': True, 'stats': stats})


@app.route('/api/print-history/stats/daily', methods=['GET'])
def history_daily():
    days = request.args.get('days', 7, type=int)
    return jsonify({'success': True, 'stats': store.daily_statistics(days)})


@app.route('/api/print-history/stats/top-labels', methods=['GET'])
def history_top_labels():
    limit = request.args.get('limit', 10, type=int)
    return jsonify({'success': True, 'labels': store.top_labels(limit)})


# =============================================================================
# Label Lookup & Settings API
# =============================================================================

@app.route('/api/config/search/<code>', methods=['GET'])
def search_label(code):
    """Find a generated label with its configuration and print record."""
    label = store.find_label(code)
    if not label:
        return _not_found('Label')

    result = label.to_dict()
    config = store.get_config(label.config_id) if label.config_id else None
    history = store.get_history(label.print_history_id) if label.print_history_id else None

    result['config'] = {
        'id': config.id,
        'name': config.name,
        'base_name': config.base_name,
        'code_type': config.code_type,
    } if config else None
    result['print_history'] = {
        'id': history.id,
        'created_at': history.created_at.isoformat(),
        'status': history.status,
        'printer_name': history.printer_name,
    } if history else None

    return jsonify({'success': True, 'label': result})


@app.route('/api/config/verify/<code>', methods=['GET'])
def verify_code(code):
    exists = store.code_exists(code)
    return jsonify({
        'success': True,
        'code': code,
        'exists': exists,
        'message': 'Code exists in database' if exists else 'Code not found',
    })


@app.route('/api/config/by-basename/<base_name>', methods=['GET'])
def labels_by_base_name(base_name):
    limit = request.args.get('limit', 100, type=int)
    labels = store.labels_by_base_name(base_name, limit)
    return jsonify({
        'success': True,
        'labels': [l.to_dict() for l in labels],
        'count': len(labels),
    })


@app.route('/api/config/printer-settings', methods=['GET'])
def get_printer_settings():
    return jsonify({'success': True, 'settings': _printer_settings})


@app.route('/api/config/printer-settings', methods=['PUT'])
def update_printer_settings():
    if not _check_api_key():
        return _unauthorized()

    data = request.get_json(silent=True)
    if not data:
        return _bad_request('Request body required')

    for key in PRINTER_SETTINGS:
        if key in data:
            _printer_settings[key] = data[key]

    return jsonify({
        'success': True,
        'settings': _printer_settings,
        'message': 'Printer settings updated successfully'
    })


@app.route('/api/config/export/labels', methods=['GET'])
def export_labels():
    try:
        labels = store.export_labels(
            base_name=request.args.get('base_name'),
            start=_parse_date(request.args.get('start_date')),
            end=_parse_date(request.args.get('end_date')),
        )
    except ValueError as e:
        return _bad_request(e)

    return jsonify({'success': True, 'labels': labels, 'count': len(labels)})


@app.route('/api/config/health', methods=['GET'])
def system_health():
    return jsonify({
        'success': True,
        'status': 'healthy',
        **store.counts(),
        'timestamp': datetime.now().isoformat(),
    })


# =============================================================================
# Main
# =============================================================================

def main():
    """Run the service."""
    logging.basicConfig(
        level=LOG_LEVEL,
        format='%(asctime)s %(levelname)s [%(name)s] %(message)s',
    )

    print("=" * 60)
    print("  Label Print Service")
    print("=" * 60)
    print(f"  Version: {__version__}")
    print(f"  Port: {PORT}")
    print(f"  Data: {DATA_DIR}")
    print("=" * 60)
    print("  API Endpoints:")
    print("    GET  /health                          - Health check")
    print("    POST /api/encode                      - Generate + encode")
    print("    GET  /api/labels                      - List configurations")
    print("    POST /api/labels                      - Create configuration")
    print("    POST /api/labels/{id}/generate        - Generate codes")
    print("    GET  /api/labels/{id}/commands        - Download command file")
    print("    POST /api/labels/{id}/print           - Print to network printer")
    print("    GET  /api/print-history               - Print history")
    print("    GET  /api/print-history/stats/*       - Statistics")
    print("    GET  /api/config/search/{code}        - Look up a code")
    print("=" * 60)

    store.load()
    pruned = store.prune_history(HISTORY_RETENTION_DAYS)
    if pruned:
        logger.info("Pruned %d print record(s) older than %d days", pruned, HISTORY_RETENTION_DAYS)

    app.run(host=HOST, port=PORT, debug=DEBUG)


if __name__ == '__main__':
    main()
