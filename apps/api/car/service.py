# apps/api/car/service.py
import logging
from typing import Annotated, List, Optional

from sqlalchemy import select

from apps.api.car.models import Car, CarImage
from apps.api.car.schema import CarCreate, CarUpdate
from apps.api.upload.service import ImageStoreServiceDependency
from core.architecture.service import AbstractService
from core.db.core import SessionDep
from core.exceptions import InvalidRequestException, NotFoundException, StorageException

logger = logging.getLogger(__name__)

# columns an admin edit may touch; anything else in a payload is ignored
CAR_UPDATABLE_FIELDS = (
    "year",
    "make",
    "model",
    "price",
    "mileage",
    "transmission",
    "fuel",
    "color",
    "city",
    "state",
    "image_url",
    "description",
    "featured",
)
NON_NULLABLE_FIELDS = ("make", "model", "mileage", "city", "state", "featured")


def _contains(term: str) -> str:
    escaped = term.strip().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class CarService(AbstractService):
    DEPENDENCIES = {"session": SessionDep, "image_store": ImageStoreServiceDependency}

    def __init__(self, session: SessionDep, image_store: ImageStoreServiceDependency, **kwargs):
        super().__init__(session=session, image_store=image_store, **kwargs)
        self.session = session
        self.image_store = image_store

    def _newest_first(self, query):
        return query.order_by(Car.created_at.desc(), Car.id.desc())

    async def list_cars(self) -> List[Car]:
        """
        Get every car with its gallery, newest first.

        Galleries are loaded in the same unit of work, so a failure on any of
        them fails the whole listing.
        """
        result = await self.session.scalars(self._newest_first(select(Car)))
        return list(result.all())

    async def get_car(self, car_id: int) -> Car:
        """
        Get a single car with its gallery.

        Raises:
            NotFoundException: If no car has this id.
        """
        car = await self.session.scalar(select(Car).where(Car.id == car_id))
        if not car:
            raise NotFoundException("Car not found", error_code="CAR_NOT_FOUND")
        return car

    async def search_cars(
        self,
        make: Optional[str] = None,
        model: Optional[str] = None,
    ) -> List[Car]:
        """
        Case-insensitive substring search on make and/or model.
        A missing filter matches everything.
        """
        query = select(Car)
        if make:
            query = query.where(Car.make.ilike(_contains(make), escape="\\"))
        if model:
            query = query.where(Car.model.ilike(_contains(model), escape="\\"))

        result = await self.session.scalars(self._newest_first(query))
        return list(result.all())

    async def create_car(self, car_data: CarCreate) -> Car:
        """
        Create a car and its gallery.

        Args:
            car_data: Validated car fields. ``images`` lists the gallery URLs
                in display order.

        Returns:
            Car: The persisted car including id and gallery.
        """
        fields = car_data.model_dump(exclude={"images"})
        car = Car(**fields)
        car.images = [CarImage(image_url=url) for url in car_data.images]

        self.session.add(car)
        await self.session.commit()
        await self.session.refresh(car)
        logger.info(f"Car {car.id} created ({car.year} {car.make} {car.model})")
        return car

    async def update_car(self, car_id: int, car_data: CarUpdate) -> Car:
        """
        Apply a partial update to a car.

        Only fields present in the payload change. When ``images`` is present
        the whole gallery is replaced by the new list, in order.

        Raises:
            NotFoundException: If no car has this id.
        """
        car = await self.get_car(car_id)

        update_data = car_data.model_dump(exclude_unset=True)
        for field in CAR_UPDATABLE_FIELDS:
            if field not in update_data:
                continue
            value = update_data[field]
            if value is None and field in NON_NULLABLE_FIELDS:
                continue
            setattr(car, field, value)

        gallery = update_data.get("images")
        if gallery is not None:
            car.images = [CarImage(image_url=url) for url in gallery]

        car.touch()
        await self.session.commit()
        await self.session.refresh(car)
        logger.info(f"Car {car.id} updated")
        return car

    async def _cleanup_images(self, urls: List[str]) -> int:
        """Best-effort removal of stored files. Returns how many deletes failed."""
        failed = 0
        for url in urls:
            try:
                await self.image_store.delete(url)
            except StorageException as e:
                failed += 1
                logger.warning(f"Image delete warning for {url}: {e.message}")
        return failed

    async def delete_car(self, car_id: int) -> dict:
        """
        Delete a car, its gallery rows and, best-effort, its stored images.

        Returns:
            dict: How many featured and gallery images were sent for deletion.

        Raises:
            NotFoundException: If no car has this id.
        """
        car = await self.get_car(car_id)

        featured = [car.image_url] if car.image_url else []
        gallery = car.gallery
        failed = await self._cleanup_images(featured + gallery)
        if failed:
            logger.warning(f"{failed} image(s) of car {car_id} could not be removed from storage")

        await self.session.delete(car)
        await self.session.commit()
        logger.info(f"Car {car_id} deleted")
        return {"featured": len(featured), "gallery": len(gallery)}

    async def add_car_image(self, car_id: int, image_url: str) -> CarImage:
        """Append one image to the end of a car's gallery."""
        if not image_url or not image_url.strip():
            raise InvalidRequestException("imageUrl is required")
        car = await self.get_car(car_id)

        image = CarImage(car_id=car.id, image_url=image_url.strip())
        self.session.add(image)
        car.touch()
        await self.session.commit()
        await self.session.refresh(image)
        return image

    async def delete_car_image(self, image_id: int) -> CarImage:
        """Remove one gallery image and, best-effort, its stored file."""
        image = await self.session.get(CarImage, image_id)
        if not image:
            raise NotFoundException("Image not found", error_code="IMAGE_NOT_FOUND")

        await self._cleanup_images([image.image_url])
        await self.session.delete(image)
        await self.session.commit()
        return image


CarServiceDependency = Annotated[CarService, CarService.get_dependency()]
