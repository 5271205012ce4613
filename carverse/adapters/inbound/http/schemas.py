"""HTTP adapter schemas for catalog responses."""

from pydantic import BaseModel, ConfigDict, Field

from carverse.application.dtos.listing import SeedResult


class BrandsResponse(BaseModel):
    """Distinct brands in the catalog."""

    brands: list[str]

    model_config = ConfigDict(
        json_schema_extra={"example": {"brands": ["HONDA", "HYUNDAI", "TATA"]}}
    )


class SeedResponse(BaseModel):
    """Manual seed outcome."""

    message: str
    result: SeedResult
    total_cars: int = Field(serialization_alias="totalCars")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "message": "Seed completed",
                "result": {"status": "inserted", "inserted": 12, "count": 12},
                "totalCars": 12,
            }
        }
    )
