import pytest


@pytest.mark.asyncio
async def test_single_upload_is_served_back(client, admin_headers, image_factory):
    response = await client.post(
        "/upload",
        files={"image": ("front.png", image_factory("PNG"), "image/png")},
        headers=admin_headers,
    )

    assert response.status_code == 200
    url = response.json()["imageUrl"]
    assert url.startswith("http://testserver/uploads/cars/")

    served = await client.get(url)
    assert served.status_code == 200
    assert served.content == image_factory("PNG")


@pytest.mark.asyncio
async def test_multiple_upload(client, admin_headers, image_factory):
    files = [
        ("images", ("a.jpg", image_factory("JPEG"), "image/jpeg")),
        ("images", ("b.webp", image_factory("WEBP"), "image/webp")),
    ]

    response = await client.post("/upload-multiple", files=files, headers=admin_headers)

    assert response.status_code == 200
    urls = response.json()["imageUrls"]
    assert len(urls) == 2
    assert urls[0].endswith(".jpg")
    assert urls[1].endswith(".webp")


@pytest.mark.asyncio
async def test_upload_count_ceiling(client, admin_headers, image_factory, settings):
    settings.MAX_UPLOAD_FILES = 2
    files = [("images", (f"{i}.png", image_factory("PNG"), "image/png")) for i in range(3)]

    response = await client.post("/upload-multiple", files=files, headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["errorCode"] == "TOO_MANY_FILES"


@pytest.mark.asyncio
async def test_disallowed_mime_type(client, admin_headers, tmp_path):
    response = await client.post(
        "/upload",
        files={"image": ("notes.txt", b"hello", "text/plain")},
        headers=admin_headers,
    )

    assert response.status_code == 400
    assert response.json()["errorCode"] == "UNSUPPORTED_IMAGE_TYPE"
    assert not list((tmp_path / "uploads").rglob("*.*"))


@pytest.mark.asyncio
async def test_upload_requires_admin(client, image_factory):
    response = await client.post(
        "/upload", files={"image": ("a.png", image_factory("PNG"), "image/png")}
    )
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_upload_without_file_field(client, admin_headers):
    response = await client.post("/upload", data={"other": "x"}, headers=admin_headers)
    assert response.status_code == 400
