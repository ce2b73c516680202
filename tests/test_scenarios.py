import pytest


@pytest.mark.asyncio
async def test_create_car_upload_photo_and_attach_it(client, admin_headers, image_factory):
    created = await client.post(
        "/cars",
        json={"year": 2022, "make": "Toyota", "model": "Camry", "price": 24995, "mileage": 32000},
        headers=admin_headers,
    )
    assert created.status_code == 201
    car = created.json()
    assert car["images"] == []
    assert not car["imageUrl"]

    photo = image_factory("JPEG", size=(160, 160), noise=True)
    uploaded = await client.post(
        "/upload", files={"image": ("camry.jpg", photo, "image/jpeg")}, headers=admin_headers
    )
    assert uploaded.status_code == 200
    url = uploaded.json()["imageUrl"]

    updated = await client.put(
        f"/cars/{car['id']}", json={"imageUrl": url}, headers=admin_headers
    )
    assert updated.status_code == 200

    fetched = (await client.get(f"/cars/{car['id']}")).json()
    assert fetched["imageUrl"] == url
    assert fetched["displayImages"] == [url]


@pytest.mark.asyncio
async def test_new_lead_is_worked_by_admin_only(client, admin_headers):
    created = await client.post("/leads", json={"firstName": "Jane", "phone": "8045551234"})
    assert created.status_code == 201
    lead = created.json()
    assert lead["status"] == "new"

    as_admin = await client.patch(
        f"/leads/{lead['id']}", json={"status": "contacted"}, headers=admin_headers
    )
    assert as_admin.status_code == 200
    assert as_admin.json()["status"] == "contacted"

    anonymous = await client.patch(f"/leads/{lead['id']}", json={"status": "contacted"})
    assert anonymous.status_code == 401
