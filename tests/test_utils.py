"""
Tests for shared helpers and the API error envelope
"""
import json
from datetime import datetime, timezone

from flask import Flask
from sqlalchemy.exc import OperationalError

from api_responses import handle_api_errors, success_response
from exceptions import ValidationException, register_exception_handlers
from utils import ensure_utc, isoformat, sanitize_sensitive_data, slugify, get_or_create_secret_key


def _app_with(view):
    app = Flask(__name__)
    register_exception_handlers(app)
    app.add_url_rule('/update', 'update', view, methods=['GET', 'POST'])
    return app


class TestHandleApiErrors:
    """Endpoint failure handling"""

    def test_success_passes_through(self):
        @handle_api_errors('Board update failed')
        def view():
            return success_response(data={'ok': 1})

        with _app_with(view).test_client() as client:
            data = json.loads(client.get('/update').data)
        assert data == {'code': 'SUCCESS', 'success': True, 'data': {'ok': 1}}

    def test_domain_error_keeps_status(self):
        @handle_api_errors('Board update failed')
        def view():
            raise ValidationException('Item required')

        with _app_with(view).test_client() as client:
            response = client.get('/update')
        assert response.status_code == 400
        assert response.get_json() == {'success': False, 'code': 'VALIDATION_ERROR', 'message': 'Item required'}

    def test_storage_error_is_generic(self):
        @handle_api_errors('Board update failed')
        def view():
            raise OperationalError('INSERT INTO stock_items', {}, Exception('disk I/O error'))

        with _app_with(view).test_client() as client:
            response = client.get('/update')
        assert response.status_code == 500
        assert response.get_json()['message'] == 'Board update failed'
        assert 'disk' not in response.get_data(as_text=True)

    def test_unexpected_error_is_generic(self):
        @handle_api_errors('Board update failed')
        def view():
            raise KeyError('boom')

        with _app_with(view).test_client() as client:
            response = client.post('/update', json={'pin': '1234'})
        assert response.status_code == 500
        assert response.get_json()['code'] == 'INTERNAL_ERROR'


class TestHelpers:
    """Time, slug and masking helpers"""

    def test_ensure_utc(self):
        assert ensure_utc('2026-10-17T10:00:00+01:00') == datetime(2026, 10, 17, 9, 0, tzinfo=timezone.utc)
        assert ensure_utc('2026-10-17T09:00:00Z').tzinfo == timezone.utc
        assert ensure_utc(datetime(2026, 10, 17, 9, 0)).tzinfo == timezone.utc
        assert ensure_utc('tomorrow') is None
        assert ensure_utc(1234) is None
        assert ensure_utc(None) is None

    def test_isoformat(self):
        assert isoformat(datetime(2026, 10, 17, 9, 0)) == '2026-10-17T09:00:00+00:00'
        assert isoformat(None) is None

    def test_slugify(self):
        assert slugify('Basil & Grape') == 'basil-grape'
        assert slugify('  ') == 'board'

    def test_sanitize(self):
        payload = {'name': 'Head Chef', 'pin': '1234', 'nested': [{'Authorization': 'Bearer x'}]}
        assert sanitize_sensitive_data(payload) == {
            'name': 'Head Chef',
            'pin': '***',
            'nested': [{'Authorization': '***'}],
        }

    def test_secret_key_persisted(self, tmp_path):
        first = get_or_create_secret_key(str(tmp_path))
        assert len(first) == 64
        assert get_or_create_secret_key(str(tmp_path)) == first
