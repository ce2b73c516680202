# apps/api/car/router.py
from typing import List, Optional

from fastapi import APIRouter, Query, status

from apps.api.auth.dependency import AdminDependency
from apps.api.car.schema import (
    CarCreate,
    CarDeleteResponse,
    CarImageCreate,
    CarImageResponse,
    CarResponse,
    CarUpdate,
    DeletedImageCounts,
)
from apps.api.car.service import CarServiceDependency
from core.response.models import MessageResponse

router = APIRouter(tags=["Cars"])


@router.get("/cars", description="List every car with its gallery, newest first")
async def list_cars_endpoint(car_service: CarServiceDependency) -> List[CarResponse]:
    return await car_service.list_cars()


# declared before /cars/{car_id} so "search" is not parsed as an id
@router.get("/cars/search", description="Search cars by make and/or model")
async def search_cars_endpoint(
    car_service: CarServiceDependency,
    make: Optional[str] = Query(None),
    model: Optional[str] = Query(None),
) -> List[CarResponse]:
    return await car_service.search_cars(make=make, model=model)


@router.get("/cars/{car_id}", description="Get a single car with its gallery")
async def get_car_endpoint(
    car_id: int, car_service: CarServiceDependency
) -> CarResponse:
    return await car_service.get_car(car_id)


@router.post(
    "/cars",
    description="Create a car (admin)",
    status_code=status.HTTP_201_CREATED,
)
async def create_car_endpoint(
    car: CarCreate,
    admin: AdminDependency,
    car_service: CarServiceDependency,
) -> CarResponse:
    return await car_service.create_car(car)


@router.put("/cars/{car_id}", description="Update a car (admin)")
async def update_car_endpoint(
    car_id: int,
    car: CarUpdate,
    admin: AdminDependency,
    car_service: CarServiceDependency,
) -> CarResponse:
    return await car_service.update_car(car_id, car)


@router.delete("/cars/{car_id}", description="Delete a car and its images (admin)")
async def delete_car_endpoint(
    car_id: int,
    admin: AdminDependency,
    car_service: CarServiceDependency,
) -> CarDeleteResponse:
    counts = await car_service.delete_car(car_id)
    return CarDeleteResponse(
        message="Car deleted successfully",
        deleted_images=DeletedImageCounts(**counts),
    )


@router.post(
    "/cars/{car_id}/images",
    description="Append an image to a car's gallery (admin)",
    status_code=status.HTTP_201_CREATED,
)
async def add_car_image_endpoint(
    car_id: int,
    image: CarImageCreate,
    admin: AdminDependency,
    car_service: CarServiceDependency,
) -> CarImageResponse:
    return await car_service.add_car_image(car_id, image.image_url)


@router.delete("/images/{image_id}", description="Remove a gallery image (admin)")
async def delete_car_image_endpoint(
    image_id: int,
    admin: AdminDependency,
    car_service: CarServiceDependency,
) -> MessageResponse:
    await car_service.delete_car_image(image_id)
    return MessageResponse(message="Image deleted successfully")
