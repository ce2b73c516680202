import pytest
from pydantic import ValidationError
from sqlalchemy import func, select

from apps.api.car.models import CarImage
from apps.api.car.schema import CarCreate, CarUpdate
from core.exceptions import InvalidRequestException, NotFoundException


def camry(**overrides) -> CarCreate:
    data = {"year": 2022, "make": "Toyota", "model": "Camry", "price": 24995, "mileage": 32000}
    data.update(overrides)
    return CarCreate(**data)


@pytest.mark.asyncio
async def test_create_car_applies_defaults_and_gallery_order(car_service):
    car = await car_service.create_car(
        camry(images=["http://img/1.jpg", "http://img/2.jpg", "http://img/3.jpg"])
    )

    assert car.id is not None
    assert car.city == "Gloucester"
    assert car.state == "VA"
    assert car.featured is False
    assert car.gallery == ["http://img/1.jpg", "http://img/2.jpg", "http://img/3.jpg"]
    assert car.display_images == car.gallery


@pytest.mark.asyncio
async def test_display_images_fall_back_to_primary_image(car_service):
    car = await car_service.create_car(camry(image_url="http://img/primary.jpg"))

    assert car.gallery == []
    assert car.display_images == ["http://img/primary.jpg"]


@pytest.mark.asyncio
async def test_list_cars_is_newest_first(car_service):
    first = await car_service.create_car(camry())
    second = await car_service.create_car(camry(make="Honda", model="Civic"))
    third = await car_service.create_car(camry(make="Ford", model="F-150"))

    cars = await car_service.list_cars()

    assert [car.id for car in cars] == [third.id, second.id, first.id]


@pytest.mark.asyncio
async def test_search_is_case_insensitive_substring(car_service):
    await car_service.create_car(camry())
    await car_service.create_car(camry(make="Honda", model="Civic"))

    assert [c.model for c in await car_service.search_cars(make="toy")] == ["Camry"]
    assert [c.make for c in await car_service.search_cars(model="CIV")] == ["Honda"]
    assert len(await car_service.search_cars()) == 2
    assert await car_service.search_cars(make="honda", model="camry") == []


@pytest.mark.asyncio
async def test_get_missing_car_raises_not_found(car_service):
    with pytest.raises(NotFoundException):
        await car_service.get_car(999)


@pytest.mark.asyncio
async def test_update_only_touches_present_fields(car_service):
    car = await car_service.create_car(camry(color="Silver"))
    created_updated_at = car.updated_at

    updated = await car_service.update_car(car.id, CarUpdate(price=19999))

    assert updated.price == 19999
    assert updated.color == "Silver"
    assert updated.mileage == 32000
    assert updated.updated_at >= created_updated_at


@pytest.mark.asyncio
async def test_update_replaces_gallery_in_given_order(car_service):
    car = await car_service.create_car(camry(images=["http://img/a.jpg", "http://img/b.jpg"]))

    updated = await car_service.update_car(
        car.id, CarUpdate(images=["http://img/c.jpg", "http://img/a.jpg"])
    )

    assert updated.gallery == ["http://img/c.jpg", "http://img/a.jpg"]


@pytest.mark.asyncio
async def test_update_without_images_keeps_gallery(car_service):
    car = await car_service.create_car(camry(images=["http://img/a.jpg"]))

    updated = await car_service.update_car(car.id, CarUpdate(color="Red"))

    assert updated.gallery == ["http://img/a.jpg"]


@pytest.mark.asyncio
async def test_update_missing_car_raises_not_found(car_service):
    with pytest.raises(NotFoundException):
        await car_service.update_car(42, CarUpdate(price=1))


@pytest.mark.asyncio
async def test_delete_car_counts_images_and_survives_storage_failures(car_service):
    car = await car_service.create_car(
        camry(
            image_url="http://testserver/uploads/cars/2024-01-01/missing.jpg",
            images=["http://testserver/uploads/cars/2024-01-01/gone.jpg", "https://via.placeholder.com/400x300"],
        )
    )

    counts = await car_service.delete_car(car.id)

    assert counts == {"featured": 1, "gallery": 2}
    with pytest.raises(NotFoundException):
        await car_service.get_car(car.id)


@pytest.mark.asyncio
async def test_delete_car_removes_stored_files(car_service, image_store, image_factory, settings, tmp_path):
    url = await image_store.store(image_factory(), "image/jpeg", "front.jpg")
    car = await car_service.create_car(camry(image_url=url))
    stored = list((tmp_path / "uploads").rglob("*.jpg"))
    assert len(stored) == 1

    await car_service.delete_car(car.id)

    assert not stored[0].exists()


@pytest.mark.asyncio
async def test_add_and_delete_single_gallery_image(car_service):
    car = await car_service.create_car(camry(images=["http://img/a.jpg"]))

    image = await car_service.add_car_image(car.id, "http://img/b.jpg")
    assert image.car_id == car.id

    refreshed = await car_service.get_car(car.id)
    await car_service.session.refresh(refreshed, attribute_names=["images"])
    assert refreshed.gallery == ["http://img/a.jpg", "http://img/b.jpg"]

    await car_service.delete_car_image(image.id)
    await car_service.session.refresh(refreshed, attribute_names=["images"])
    assert refreshed.gallery == ["http://img/a.jpg"]


@pytest.mark.asyncio
async def test_add_image_rejects_blank_url_and_missing_car(car_service):
    car = await car_service.create_car(camry())

    with pytest.raises(InvalidRequestException):
        await car_service.add_car_image(car.id, "   ")
    with pytest.raises(NotFoundException):
        await car_service.add_car_image(999, "http://img/a.jpg")
    with pytest.raises(NotFoundException):
        await car_service.delete_car_image(999)


@pytest.mark.asyncio
async def test_delete_car_never_touches_files_outside_the_volume(car_service, image_store, image_factory, tmp_path):
    await image_store.store(image_factory(), "image/jpeg")
    victim = tmp_path / "victim.txt"
    victim.write_text("keep me")
    car = await car_service.create_car(
        camry(image_url="http://testserver/uploads/cars/../../victim.txt")
    )

    await car_service.delete_car(car.id)

    assert victim.exists()


@pytest.mark.asyncio
async def test_delete_car_removes_every_gallery_row_and_attempts_each_image(car_service, monkeypatch):
    gallery = [f"http://testserver/uploads/cars/2024-01-01/{i}.jpg" for i in range(5)]
    car = await car_service.create_car(
        camry(image_url="http://testserver/uploads/cars/2024-01-01/main.jpg", images=gallery)
    )
    attempted = []

    async def record_delete(url):
        attempted.append(url)
        return True

    monkeypatch.setattr(car_service.image_store, "delete", record_delete)

    await car_service.delete_car(car.id)

    assert len(attempted) == len(gallery) + 1
    remaining = await car_service.session.scalar(
        select(func.count()).select_from(CarImage).where(CarImage.car_id == car.id)
    )
    assert remaining == 0


@pytest.mark.asyncio
async def test_search_treats_wildcards_literally(car_service):
    await car_service.create_car(camry())
    await car_service.create_car(camry(make="Honda", model="Civic"))

    assert await car_service.search_cars(make="%") == []
    assert await car_service.search_cars(model="C_vic") == []
    assert [c.model for c in await car_service.search_cars(model="civ")] == ["Civic"]


def test_blank_make_is_rejected_by_schema():
    with pytest.raises(ValidationError):
        camry(make="   ")
