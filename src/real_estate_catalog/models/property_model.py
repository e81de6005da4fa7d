import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Float, Integer, String

from src.real_estate_catalog.core.database import Base


def generate_property_id() -> str:
    return uuid.uuid4().hex


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Property(Base):
    __tablename__ = "properties"

    id = Column(String(32), primary_key=True, index=True, default=generate_property_id)
    title = Column(String, nullable=False)
    description = Column(String, nullable=False)
    price = Column(Float, nullable=False)
    location = Column(String, nullable=False)
    type = Column(String, nullable=False)
    status = Column(String, nullable=False)
    bedrooms = Column(Integer, nullable=False)
    bathrooms = Column(Integer, nullable=False)
    area = Column(Float, nullable=False)
    image_url = Column(String, nullable=True)

    # Set once on insert; no onupdate, the creation date never changes
    created_at = Column(DateTime(timezone=True), nullable=False, index=True, default=utc_now)
