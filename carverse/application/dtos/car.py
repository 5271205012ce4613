"""Car DTOs."""

from datetime import datetime, timezone
from typing import Optional, Union

from pydantic import ConfigDict, Field, field_validator

from carverse.application.dtos.base import DTO
from carverse.domain.value_objects.price_range import PriceRange
from carverse.domain.value_objects.vehicle_specs import (
    Aspiration,
    BodyType,
    DriveType,
    FuelType,
    Transmission,
)

SpecValue = Union[str, int, float, bool, None]


class Engine(DTO):
    """Engine specification."""

    displacement: Optional[float] = Field(default=None, ge=0)  # cc
    cylinders: Optional[int] = Field(default=None, ge=0, le=16)
    turbo: bool = False
    aspiration: Aspiration = Aspiration.NA


class Price(DTO):
    """Ex-showroom price interval."""

    min: Optional[float] = Field(default=None, ge=0)
    max: Optional[float] = Field(default=None, ge=0)
    currency: str = "INR"

    def to_range(self) -> PriceRange:
        """Convert to PriceRange value object."""
        return PriceRange(minimum=self.min, maximum=self.max, currency=self.currency)


class CarDraft(DTO):
    """Car record without store-assigned identity and timestamps."""

    title: str
    brand: str
    model: str
    body_type: BodyType
    fuel_type: FuelType
    transmission: Transmission
    drive_type: DriveType = DriveType.FWD

    engine: Engine = Field(default_factory=Engine)

    power_bhp: Optional[float] = Field(default=None, ge=0, alias="powerBHP")
    torque_nm: Optional[float] = Field(default=None, ge=0)
    top_speed: Optional[float] = Field(default=None, ge=0)  # km/h
    zero_to_hundred: Optional[float] = Field(default=None, ge=0)  # seconds

    mileage: Optional[float] = Field(default=None, ge=0)  # km/L
    range: Optional[float] = Field(default=None, ge=0)  # km, EVs

    price: Price = Field(default_factory=Price)

    launch_year: Optional[int] = None
    discontinued: bool = False
    safety_rating: Optional[float] = Field(default=None, ge=0, le=5)
    seating_capacity: int = Field(default=5, ge=2, le=9)
    is_featured: bool = False

    image: Optional[str] = None
    images: list[str] = Field(default_factory=list)
    key_features: list[str] = Field(default_factory=list)
    pros: list[str] = Field(default_factory=list)
    cons: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)

    # Legacy free-form specs; never part of the comparison schema
    specs: dict[str, SpecValue] = Field(default_factory=dict)

    @field_validator("title", "brand", "model")
    @classmethod
    def _strip(cls, value: str) -> str:
        return value.strip()

    @field_validator("brand")
    @classmethod
    def _uppercase_brand(cls, value: str) -> str:
        return value.upper()

    @field_validator("tags")
    @classmethod
    def _lowercase_tags(cls, value: list[str]) -> list[str]:
        return [tag.strip().lower() for tag in value if tag.strip()]

    @field_validator("launch_year")
    @classmethod
    def _bounded_launch_year(cls, value: Optional[int]) -> Optional[int]:
        if value is None:
            return value
        latest = datetime.now(timezone.utc).year + 2
        if not 1900 <= value <= latest:
            raise ValueError(f"launchYear must be between 1900 and {latest}")
        return value


class Car(CarDraft):
    """Stored car record."""

    id: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "65a1f0c2e4b0a1b2c3d4e5f6",
                "title": "Tata Nexon EV",
                "brand": "TATA",
                "model": "Nexon EV",
                "bodyType": "SUV",
                "fuelType": "EV",
                "transmission": "Automatic",
                "price": {"min": 1449000, "max": 1949000, "currency": "INR"},
                "tags": ["electric", "compact-suv"],
            }
        }
    )
