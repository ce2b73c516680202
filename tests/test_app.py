import importlib

import pytest
from httpx import ASGITransport, AsyncClient

from apps.application import build_application
from core.fastapi.app import discover_routers


@pytest.mark.asyncio
async def test_health_reports_every_table(client):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json() == {
        "status": "ok",
        "tables": {"car_images": True, "cars": True, "leads": True},
    }


@pytest.mark.asyncio
async def test_table_status_before_tables_exist(settings):
    app = build_application(settings)
    try:
        tables = await app.state.database.table_status(["cars"])
    finally:
        await app.state.database.dispose()
    assert tables == {"cars": False}


@pytest.mark.asyncio
async def test_unknown_route_keeps_its_status(client):
    response = await client.get("/nowhere")

    assert response.status_code == 404
    assert response.json()["error"] == "Not Found"


@pytest.mark.asyncio
async def test_api_prefix_is_applied(settings):
    settings.API_PREFIX = "/api"
    app = build_application(settings)
    await app.state.database.create_all()
    try:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
            assert (await ac.get("/api/cars")).status_code == 200
            assert (await ac.get("/cars")).status_code == 404
    finally:
        await app.state.database.dispose()


def test_router_discovery_skips_non_directory_path_entries(tmp_path, monkeypatch):
    router_dir = tmp_path / "fakeapps" / "api" / "ping"
    router_dir.mkdir(parents=True)
    (tmp_path / "fakeapps" / "api" / "__init__.py").write_text("")
    (router_dir / "router.py").write_text(
        "from fastapi import APIRouter\n\nrouter = APIRouter()\n"
    )
    monkeypatch.syspath_prepend(str(tmp_path))

    package = importlib.import_module("fakeapps.api")
    monkeypatch.setattr(package, "__path__", list(package.__path__) + ["__editable__.finder.hook"])

    assert len(discover_routers("fakeapps")) == 1


def test_cors_origins_accept_comma_separated_string(settings):
    settings.CORS_ORIGINS = "http://a.test, http://b.test"
    assert settings.cors_origins == ["http://a.test", "http://b.test"]
