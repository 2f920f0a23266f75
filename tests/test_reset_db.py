import importlib.util
from pathlib import Path

import pytest

from farmhome.models.animal import Animal
from farmhome.models.user import User
from payloads import VALID_PAYLOADS

SCRIPT = Path(__file__).resolve().parent.parent / 'scripts' / 'reset_db.py'


@pytest.fixture
def reset_db():
    spec = importlib.util.spec_from_file_location('reset_db', SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_reset_keeps_users_without_all_flag(reset_db, mongo_db, capsys):
    User.create_user('Ann', 'ann@example.com', 'pw')
    Animal.create(VALID_PAYLOADS[Animal])

    assert reset_db.main(['-y']) == 0

    assert mongo_db.animals.count_documents({}) == 0
    assert mongo_db.users.count_documents({}) == 1
    assert 'Dropped animals' in capsys.readouterr().out


def test_reset_all_drops_users(reset_db, mongo_db):
    User.create_user('Ann', 'ann@example.com', 'pw')

    assert reset_db.main(['--all', '--yes']) == 0

    assert mongo_db.users.count_documents({}) == 0


def test_reset_aborts_without_confirmation(reset_db, mongo_db, monkeypatch):
    monkeypatch.setattr('builtins.input', lambda prompt: 'no')
    Animal.create(VALID_PAYLOADS[Animal])

    assert reset_db.main([]) == 1
    assert mongo_db.animals.count_documents({}) == 1


def test_reset_on_empty_database_is_a_no_op(reset_db, mongo_db, capsys):
    assert reset_db.main(['-y']) == 0
    assert 'Nothing to clean' in capsys.readouterr().out
