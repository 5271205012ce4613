"""SQLAlchemy ORM models for the car catalog."""

from datetime import datetime, timezone

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CarModel(Base):
    """SQLAlchemy model for cars table."""

    __tablename__ = "cars"

    id = Column(String(24), primary_key=True)
    title = Column(String, nullable=False, index=True)
    brand = Column(String, nullable=False, index=True)  # stored uppercase
    model = Column(String, nullable=False, index=True)
    body_type = Column(String, nullable=False, index=True)
    fuel_type = Column(String, nullable=False, index=True)
    transmission = Column(String, nullable=False, index=True)
    drive_type = Column(String, nullable=False, default="FWD")
    engine = Column(JSON, nullable=False, default=dict)
    power_bhp = Column(Float, nullable=True, index=True)
    torque_nm = Column(Float, nullable=True)
    top_speed = Column(Float, nullable=True)
    zero_to_hundred = Column(Float, nullable=True)
    mileage = Column(Float, nullable=True, index=True)
    range_km = Column(Float, nullable=True)
    price_min = Column(Float, nullable=True, index=True)
    price_max = Column(Float, nullable=True, index=True)
    price_currency = Column(String, nullable=False, default="INR")
    launch_year = Column(Integer, nullable=True, index=True)
    discontinued = Column(Boolean, nullable=False, default=False, index=True)
    safety_rating = Column(Float, nullable=True)
    seating_capacity = Column(Integer, nullable=False, default=5)
    is_featured = Column(Boolean, nullable=False, default=False, index=True)
    image = Column(String, nullable=True)
    images = Column(JSON, nullable=False, default=list)
    key_features = Column(JSON, nullable=False, default=list)
    pros = Column(JSON, nullable=False, default=list)
    cons = Column(JSON, nullable=False, default=list)
    specs = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    tags = relationship(
        "CarTagModel",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="CarTagModel.position",
    )


class CarTagModel(Base):
    """SQLAlchemy model for car_tags table (one row per lowercase tag)."""

    __tablename__ = "car_tags"

    car_id = Column(String(24), ForeignKey("cars.id", ondelete="CASCADE"), primary_key=True)
    position = Column(Integer, primary_key=True)
    tag = Column(String, nullable=False, index=True)
