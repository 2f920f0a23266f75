import itertools

import mongomock
import pytest

import farmhome
from config import Config
from farmhome import create_app
from farmhome.models.user import User
from farmhome.security import TokenManager


class UnitTestConfig(Config):
    TESTING = True
    JWT_SECRET = 'test-secret'
    MONGODB_DB = 'farmhome_test'
    SUPER_ADMIN_EMAIL = None
    SUPER_ADMIN_PASSWORD = None
    FRONT_END_URL = 'http://frontend.test'


_user_counter = itertools.count(1)


@pytest.fixture
def mongo_db(monkeypatch):
    """Isolated in-memory MongoDB wired in place of the real connection"""
    database = mongomock.MongoClient()['farmhome_test']
    monkeypatch.setattr(farmhome, '_db_instance', database)
    return database


@pytest.fixture
def app(mongo_db):
    return create_app(UnitTestConfig)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(mongo_db):
    def _make_user(role='assistant', **extra):
        number = next(_user_counter)
        return User.create_user(
            name=f'{role} {number}',
            email=f'{role}{number}@example.com',
            password='secret123',
            role=role,
            **extra
        )
    return _make_user


@pytest.fixture
def auth_header(app):
    def _auth_header(user):
        with app.app_context():
            token = TokenManager.generate_token(user)
        return {'Authorization': f'Bearer {token}'}
    return _auth_header


@pytest.fixture
def token_for(make_user, auth_header):
    """Create a user with the given role and return (user, headers)"""
    def _token_for(role='assistant', **extra):
        user = make_user(role, **extra)
        return user, auth_header(user)
    return _token_for
