import os
import sys
import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
os.environ.setdefault('APP_ENV', 'testing')
os.environ.setdefault('TWILIO_ACCOUNT_SID', 'dummy')
os.environ.setdefault('TWILIO_AUTH_TOKEN', 'dummy')
os.environ.setdefault('TWILIO_FROM_NUMBER', 'dummy')

from models import db
from app.config import TestingConfig
from app.version import API_PREFIX


def make_app(**overrides):
    """Build a separate app on a TestingConfig subclass."""
    from app import create_app
    cfg = type("OverrideConfig", (TestingConfig,), dict(overrides))
    return create_app(cfg)


@pytest.fixture(scope='session')
def app_instance():
    from app import create_app
    app = create_app(TestingConfig)
    app.config.update(
        TESTING=True,
        SQLALCHEMY_DATABASE_URI='sqlite:///:memory:',
        SQLALCHEMY_TRACK_MODIFICATIONS=False
    )
    return app

@pytest.fixture(scope='function')
def app(app_instance):
    with app_instance.app_context():
        db.drop_all()
        db.create_all()
        yield app_instance
        db.session.remove()
        db.drop_all()

@pytest.fixture(scope='function')
def client(app):
    return app.test_client()


def auth_header(token):
    return {'Authorization': f'Bearer {token}'}


def login_stub(client, phone='08000000001', role='VENDOR'):
    r = client.post('/__auth/login_stub', json={'phone': phone, 'role': role})
    return r.get_json()['data']


@pytest.fixture
def vendor_login(client):
    data = login_stub(client, '08011111111', 'VENDOR')
    data['headers'] = auth_header(data['access'])
    return data


@pytest.fixture
def user_login(client):
    data = login_stub(client, '08022222222', 'USER')
    data['headers'] = auth_header(data['access'])
    return data


@pytest.fixture
def seeded_plans(app):
    from app.services.plans import seed_plans
    from models.plan import Plan
    seed_plans()
    db.session.commit()
    return {p.name: p.id for p in Plan.query.all()}




class FakeResponse:
    def __init__(self, body, status_code=200):
        self._body = body
        self.status_code = status_code

    def json(self):
        if isinstance(self._body, Exception):
            raise self._body
        return self._body

    def raise_for_status(self):
        import requests
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)


class FakeSession:
    """Records outgoing calls and answers them from a queue of responses."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def request(self, method, url, **kwargs):
        self.calls.append({'method': method, 'url': url, **kwargs})
        result = self.responses.pop(0) if self.responses else FakeResponse({'status': 'success', 'data': {}})
        if isinstance(result, Exception):
            raise result
        return result


def gateway(app, name):
    return app.extensions['payment_gateways'][name]


__all__ = ['API_PREFIX', 'make_app', 'auth_header', 'login_stub', 'FakeResponse', 'FakeSession', 'gateway']
