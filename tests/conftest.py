import os

# Settings are read at import time
os.environ.setdefault("SECRET_KEY", "x" * 40)
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./defaultdb.db")

import pytest
from fastapi.testclient import TestClient

from schoolhub import create_app
from schoolhub.core.database import TenantConnectionRegistry
from schoolhub.core.model_factory import ModelRegistry
from schoolhub.schemas.enums import UserRole
from schoolhub.schemas.school import SchoolCreateRequest
from schoolhub.services import SchoolService
from tests.helpers import bearer, school_payload


@pytest.fixture
def base_url(tmp_path):
    return f"sqlite+aiosqlite:///{tmp_path}/defaultdb.db"


@pytest.fixture
async def registry(base_url):
    registry = TenantConnectionRegistry(base_url=base_url, engine_options={})
    yield registry
    await registry.close_all()


@pytest.fixture
async def models(registry):
    models = ModelRegistry(registry)
    await registry.init_partition(await registry.get_connection())
    return models


@pytest.fixture
def school_service(models):
    return SchoolService(models)


@pytest.fixture
async def school(school_service):
    return await school_service.provision_school(SchoolCreateRequest(**school_payload()))


@pytest.fixture
def client(base_url):
    app = create_app(database_url=base_url)
    with TestClient(app) as client:
        yield client


@pytest.fixture
def super_admin_headers():
    return bearer(UserRole.SUPER_ADMIN, user_id="root")


@pytest.fixture
def create_school(client, super_admin_headers):
    def _create(email="info@greenfield.ac.ke", name="Greenfield Academy"):
        response = client.post(
            "/api/v1/schools",
            json=school_payload(email=email, name=name),
            headers=super_admin_headers
        )
        assert response.status_code == 201, response.text
        return response.json()["school"]["id"]
    return _create
