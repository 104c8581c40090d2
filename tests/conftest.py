"""Shared fixtures."""

import pytest

from label_print_service import app as app_module
from label_print_service.config import API_KEY
from label_print_service.store import LabelStore


@pytest.fixture
def store(tmp_path):
    """Store persisting into a temporary directory."""
    return LabelStore(str(tmp_path / 'data'))


@pytest.fixture
def client(store, monkeypatch):
    """Flask test client bound to a fresh store."""
    monkeypatch.setattr(app_module, 'store', store)
    monkeypatch.setattr(app_module, '_printer_settings', dict(app_module.PRINTER_SETTINGS))
    app_module.app.config['TESTING'] = True
    with app_module.app.test_client() as test_client:
        yield test_client


@pytest.fixture
def auth():
    return {'Authorization': f'Bearer {API_KEY}'}
