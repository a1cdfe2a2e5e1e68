from app.errors import APIError, NotFoundError, ConflictError
from app.services.payments.flutterwave import PaymentGatewayError
from app.services.storage import StorageError
from app.services.otp import OtpError
from app.services.vendor.onboarding import OnboardingIncomplete
from app.services.transactions import TransactionNotFound


def test_404_json_envelope(client):
    resp = client.get('/no/such/route')
    assert resp.status_code == 404
    data = resp.get_json()
    assert data['status'] == 'error'
    assert data['code'] == 404
    assert isinstance(data.get('message'), str)


def test_405_json_envelope(client):
    resp = client.get('/v1/api/webhook')
    assert resp.status_code == 405
    assert resp.get_json()['code'] == 405


def test_unexpected_500_json_envelope(client):
    resp = client.get('/__boom')
    assert resp.status_code == 500
    data = resp.get_json()
    assert data['status'] == 'error'
    assert data['code'] == 500
    assert 'RuntimeError' not in data['message']


def test_ok_helper_endpoint(client):
    resp = client.get('/__ok')
    assert resp.status_code == 200
    assert resp.get_json() == {
        'status': 'success',
        'message': 'success',
        'data': {'ping': 'pong'}
    }


def test_error_statuses():
    assert APIError('x').status_code == 400
    assert APIError('x', status_code=418).status_code == 418
    assert NotFoundError('x').status_code == 404
    assert ConflictError('x').status_code == 409
    assert PaymentGatewayError('x').status_code == 502
    assert StorageError('x').status_code == 502
    assert OtpError('x').status_code == 400
    assert OnboardingIncomplete('x').status_code == 400
    missing = TransactionNotFound()
    assert missing.status_code == 404
    assert missing.message == 'Transaction not found'
