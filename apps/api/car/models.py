# apps/api/car/models.py

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import relationship

from core.db.base import AbstractSQLModel
from core.db.mixins import TimestampsMixin, utcnow

DEFAULT_CITY = "Gloucester"
DEFAULT_STATE = "VA"


# -------------------------
# 1. Car Model
# -------------------------
class Car(AbstractSQLModel, TimestampsMixin):
    __tablename__ = "cars"
    __table_args__ = (Index("idx_cars_make_model", "make", "model"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    year = Column(Integer, nullable=True)
    make = Column(String(100), nullable=False)
    model = Column(String(100), nullable=False)
    price = Column(Numeric(12, 2, asdecimal=False), nullable=True)
    mileage = Column(Numeric(12, 1, asdecimal=False), nullable=False, default=0)
    transmission = Column(String(50), nullable=True)
    fuel = Column(String(50), nullable=True)
    color = Column(String(50), nullable=True)
    city = Column(String(100), nullable=False, default=DEFAULT_CITY)
    state = Column(String(50), nullable=False, default=DEFAULT_STATE)
    image_url = Column("imageUrl", Text, nullable=True)
    description = Column(Text, nullable=True)
    featured = Column(Boolean, nullable=False, default=False)

    images = relationship(
        "CarImage",
        back_populates="car",
        order_by="CarImage.id",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
    )

    @property
    def gallery(self) -> list[str]:
        return [image.image_url for image in self.images]

    @property
    def display_images(self) -> list[str]:
        """Gallery URLs, or the primary image alone when there is no gallery."""
        if self.images:
            return self.gallery
        return [self.image_url] if self.image_url else []


# -------------------------
# 2. Car Gallery Image Model
# -------------------------
class CarImage(AbstractSQLModel):
    __tablename__ = "car_images"
    __table_args__ = (Index("idx_car_images_car_id", "car_id"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    car_id = Column(
        Integer,
        ForeignKey("cars.id", ondelete="CASCADE"),
        nullable=False,
    )
    image_url = Column("imageUrl", Text, nullable=False)
    created_at = Column("createdAt", DateTime(timezone=True), default=utcnow, nullable=False)

    car = relationship("Car", back_populates="images")
