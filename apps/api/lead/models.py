# apps/api/lead/models.py
from enum import Enum

from sqlalchemy import Column, Index, Integer, String, Text

from core.db.base import AbstractSQLModel
from core.db.mixins import TimestampsMixin


class LeadStatus(Enum):
    NEW = "new"
    CONTACTED = "contacted"
    CONVERTED = "converted"
    LOST = "lost"

    @classmethod
    def values(cls) -> list[str]:
        return [status.value for status in cls]


class Lead(AbstractSQLModel, TimestampsMixin):
    __tablename__ = "leads"
    __table_args__ = (Index("idx_leads_status", "status"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column("firstName", String(100), nullable=False)
    last_name = Column("lastName", String(100), nullable=True)
    email = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=False)
    contact_preference = Column("contactPreference", String(20), nullable=True)
    # free text or a car id; deliberately not a foreign key
    preferred_car = Column("preferredCar", Text, nullable=True)
    notes = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, default=LeadStatus.NEW.value)
