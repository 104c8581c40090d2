"""
Label Print Service Client
==========================

Python SDK for interacting with the Label Print Service.

Usage:
    from label_print_service.client import LabelClient

    client = LabelClient('http://localhost:5100', api_key='your-key')

    # Create a configuration and generate its codes
    config = client.create_config('PA00001', 10, code_type='qrcode')
    codes = client.generate_codes(config['config']['id'], save_to_db=True)

    # Download the printer command file
    tspl = client.download_commands(config['config']['id'], dialect='tspl')

    # Record the print job
    client.record_print('PA00001', 10, codes=codes, connection_type='bluetooth')
"""

import requests
from typing import Dict, Any, Optional, List


class LabelClient:
    """Client for the Label Print Service."""

    def __init__(self, base_url: str = 'http://localhost:5100', api_key: str = None):
        """
        Initialize client.

        Args:
            base_url: Base URL of the label service
            api_key: API key for authentication
        """
        self.base_url = base_url.rstrip('/')
        self.api_key = api_key

    def _headers(self) -> Dict[str, str]:
        """Get request headers."""
        headers = {'Content-Type': 'application/json'}
        if self.api_key:
            headers['Authorization'] = f'Bearer {self.api_key}'
        return headers

    def _request(self, method: str, endpoint: str, data: Dict = None,
                 params: Dict = None) -> Dict[str, Any]:
        """Make API request."""
        url = f'{self.base_url}{endpoint}'

        try:
            response = requests.request(
                method, url, json=data, params=params, headers=self._headers(), timeout=30
            )
            return response.json()

        except requests.exceptions.Timeout:
            return {'success': False, 'error': 'Request timeout'}
        except requests.exceptions.ConnectionError:
            return {'success': False, 'error': f'Cannot connect to {self.base_url}'}
        except ValueError:
            return {'success': False, 'error': 'Invalid JSON response'}

    # =========================================================================
    # Health
    # =========================================================================

    def health(self) -> Dict[str, Any]:
        """Check service health."""
        return self._request('GET', '/health')

    def is_online(self) -> bool:
        """Check if service is online."""
        result = self.health()
        return result.get('status') == 'online'

    # =========================================================================
    # Encoding
    # =========================================================================

    def encode(self, base_name: str, quantity: int, code_type: str = 'barcode',
               dialect: str = 'tspl', border: bool = True) -> Dict[str, Any]:
        """Generate and encode a sequence without storing it."""
        return self._request('POST', '/api/encode', {
            'base_name': base_name,
            'quantity': quantity,
            'code_type': code_type,
            'dialect': dialect,
            'border': border,
        })

    # =========================================================================
    # Label Configurations
    # =========================================================================

    def create_config(self, base_name: str, quantity: int, **kwargs) -> Dict[str, Any]:
        """
        Create a label configuration.

        Args:
            base_name: Base pattern ending with digits (e.g. PA00001)
            quantity: Number of labels (1-1000)
            **kwargs: name, code_type, is_template, created_by
        """
        data = {
            'base_name': base_name,
            'quantity': quantity,
            **kwargs
        }
        return self._request('POST', '/api/labels', data)

    def list_configs(self, page: int = 1, limit: int = 10,
                     is_template: Optional[bool] = None) -> List[Dict[str, Any]]:
        """List label configurations."""
        params = {'page': page, 'limit': limit}
        if is_template is not None:
            params['is_template'] = 'true' if is_template else 'false'
        result = self._request('GET', '/api/labels', params=params)
        return result.get('configs', [])

    def recent_configs(self, limit: int = 5) -> List[Dict[str, Any]]:
        result = self._request('GET', '/api/labels/recent/list', params={'limit': limit})
        return result.get('configs', [])

    def get_config(self, config_id: str) -> Optional[Dict[str, Any]]:
        """Get configuration by ID."""
        result = self._request('GET', f'/api/labels/{config_id}')
        return result.get('config') if result.get('success') else None

    def update_config(self, config_id: str, **kwargs) -> Dict[str, Any]:
        """Update configuration (name, quantity, code_type, is_template)."""
        return self._request('PUT', f'/api/labels/{config_id}', kwargs)

    def delete_config(self, config_id: str) -> Dict[str, Any]:
        return self._request('DELETE', f'/api/labels/{config_id}')

    def generate_codes(self, config_id: str, save_to_db: bool = False) -> List[str]:
        """Generate the codes of a configuration."""
        result = self._request('POST', f'/api/labels/{config_id}/generate',
                               {'save_to_db': save_to_db})
        return result.get('codes', [])

    def download_commands(self, config_id: str, dialect: str = 'tspl',
                          border: bool = True) -> Optional[str]:
        """
        Download the printer command file of a configuration.

        Returns:
            Command text, or None on error
        """
        try:
            response = requests.get(
                f'{self.base_url}/api/labels/{config_id}/commands',
                params={'dialect': dialect, 'border': 'true' if border else 'false'},
                headers=self._headers(),
                timeout=30,
            )
        except requests.exceptions.RequestException:
            return None

        if response.status_code != 200:
            return None
        return response.text

    def print_config(self, config_id: str, host: str, port: int = 9100,
                     dialect: str = 'tspl', **kwargs) -> Dict[str, Any]:
        """Send a configuration's labels to a network printer."""
        data = {'host': host, 'port': port, 'dialect': dialect, **kwargs}
        return self._request('POST', f'/api/labels/{config_id}/print', data)

    # =========================================================================
    # Print History
    # =========================================================================

    def record_print(self, base_name: str, quantity: int, codes: List[str] = None,
                     connection_type: str = 'download', status: str = 'success',
                     **kwargs) -> Dict[str, Any]:
        """Record a print job."""
        data = {
            'base_name': base_name,
            'quantity': quantity,
            'generated_codes': codes or [],
            'connection_type': connection_type,
            'status': status,
            **kwargs
        }
        return self._request('POST', '/api/print-history', data)

    def list_history(self, page: int = 1, limit: int = 10, **filters) -> List[Dict[str, Any]]:
        """List print history (filters: status, connection_type, base_name, start_date, end_date)."""
        result = self._request('GET', '/api/print-history',
                               params={'page': page, 'limit': limit, **filters})
        return result.get('history', [])

    def get_statistics(self, start_date: str = None, end_date: str = None) -> Dict[str, Any]:
        params = {}
        if start_date:
            params['start_date'] = start_date
        if end_date:
            params['end_date'] = end_date
        result = self._request('GET', '/api/print-history/stats/summary', params=params)
        return result.get('stats', {})

    def get_daily_statistics(self, days: int = 7) -> List[Dict[str, Any]]:
        result = self._request('GET', '/api/print-history/stats/daily', params={'days': days})
        return result.get('stats', [])

    def delete_history(self, history_id: str) -> Dict[str, Any]:
        return self._request('DELETE', f'/api/print-history/{history_id}')

    # =========================================================================
    # Lookup
    # =========================================================================

    def search_label(self, code: str) -> Optional[Dict[str, Any]]:
        """Look up a generated code."""
        result = self._request('GET', f'/api/config/search/{code}')
        return result.get('label') if result.get('success') else None

    def verify_code(self, code: str) -> bool:
        """Check whether a code has been generated."""
        result = self._request('GET', f'/api/config/verify/{code}')
        return result.get('exists', False)

    def get_printer_settings(self) -> Dict[str, Any]:
        result = self._request('GET', '/api/config/printer-settings')
        return result.get('settings', {})
