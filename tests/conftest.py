import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from user_directory.dao.user_dao import UserDAO, demo_users
from user_directory.main import create_app


@pytest.fixture
def user_dao():
    return UserDAO(demo_users())


@pytest.fixture
def app(user_dao):
    return create_app(user_dao=user_dao)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client
