"""Application settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration settings."""

    debug_mode: bool = False
    environment: str = "production"  # development enables auto-seeding
    allow_dev_seed: bool = False
    catalog_repository: str = "in_memory"  # in_memory or postgres
    database_url: str = ""  # Required when catalog_repository=postgres
    redis_url: str = "redis://localhost:6379/0"
    catalog_cache_enabled: bool = False
    catalog_cache_ttl_seconds: int = 300
    featured_ids: str = ""  # Comma-separated fallback ids for /featured
    seed_dataset_path: str = ""  # Defaults to the bundled carverse/data/seed_cars.json
    seed_ready_max_retries: int = 10
    seed_ready_interval_seconds: float = 0.5

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",
        extra="ignore",
    )

    @property
    def seeding_permitted(self) -> bool:
        """Whether the catalog may be auto-seeded in this environment."""
        return self.environment == "development" or self.allow_dev_seed

    @property
    def featured_id_list(self) -> list[str]:
        """Configured featured ids, trimmed, empty entries dropped."""
        return [car_id.strip() for car_id in self.featured_ids.split(",") if car_id.strip()]


settings = Settings()
