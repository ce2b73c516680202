"""Shared fixtures: a fresh app per test on its own SQLite file and upload volume."""

import io
import os

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from PIL import Image

from apps.api.auth.service import AuthService
from apps.api.car.service import CarService
from apps.api.lead.service import LeadService
from apps.api.upload.service import ImageStoreService
from apps.application import build_application
from apps.settings import AppConfig

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "s3cret-pass"


def make_image(fmt: str = "JPEG", size=(64, 64), noise: bool = False) -> bytes:
    """Encode a small image with Pillow. ``noise`` makes JPEGs realistically large."""
    if noise:
        img = Image.frombytes("RGB", size, os.urandom(size[0] * size[1] * 3))
    else:
        img = Image.new("RGB", size, color=(200, 30, 30))
    buffer = io.BytesIO()
    img.save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture()
def settings(tmp_path) -> AppConfig:
    return AppConfig(
        _env_file=None,
        SECRET_KEY="test-secret-key",
        ADMIN_USERNAME=ADMIN_USERNAME,
        ADMIN_PASSWORD=ADMIN_PASSWORD,
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'test.sqlite'}",
        AUTO_CREATE_TABLES=False,
        STORAGE_BACKEND="local",
        STORAGE_VOLUME=str(tmp_path / "uploads"),
        STORAGE_BASE_PATH="cars",
        STORAGE_URL_PREFIX="http://testserver/uploads",
        LOG_LEVEL="DEBUG",
    )


@pytest_asyncio.fixture()
async def app(settings):
    application = build_application(settings)
    # ASGITransport does not run the lifespan, so the tables are created here
    await application.state.database.create_all()
    yield application
    await application.state.database.dispose()


@pytest_asyncio.fixture()
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
        yield ac


@pytest.fixture()
def auth_service(settings) -> AuthService:
    return AuthService(settings=settings)


@pytest.fixture()
def admin_headers(auth_service) -> dict:
    return {"Authorization": f"Bearer {auth_service.create_token()}"}


@pytest_asyncio.fixture()
async def session(app):
    async with app.state.database.session_factory() as db_session:
        yield db_session


@pytest.fixture()
def image_store(app, settings) -> ImageStoreService:
    return ImageStoreService(storage=app.state.storage, settings=settings)


@pytest.fixture()
def car_service(session, image_store) -> CarService:
    return CarService(session=session, image_store=image_store)


@pytest.fixture()
def lead_service(session) -> LeadService:
    return LeadService(session=session)


@pytest.fixture()
def image_factory():
    return make_image
