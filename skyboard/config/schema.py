"""Pydantic v2 configuration schema with strict validation."""

from enum import StrEnum

from pydantic import BaseModel, Field, SecretStr

from skyboard.models.common import Units


class Environment(StrEnum):
    DEVELOPMENT = "development"
    PRODUCTION = "production"


class CityConfig(BaseModel):
    model_config = {"extra": "forbid"}

    name: str = Field(min_length=1)
    country: str = ""


class ProviderConfig(BaseModel):
    model_config = {"extra": "forbid"}

    base_url: str = "https://api.weatherapi.com/v1"
    api_key: SecretStr = SecretStr("")
    timeout_seconds: float = Field(default=10.0, gt=0.0)
    max_retries: int = Field(default=2, ge=0)
    retry_base_delay: float = Field(default=1.0, ge=0.0)
    forecast_days: int = Field(default=7, ge=1, le=7)
    hourly_window: int = Field(default=24, ge=1, le=72)

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key.get_secret_value())


class ServerConfig(BaseModel):
    model_config = {"extra": "forbid"}

    host: str = "0.0.0.0"
    port: int = Field(default=5000, ge=1, le=65535)
    environment: Environment = Environment.DEVELOPMENT
    default_units: Units = Units.IMPERIAL
    cors_origins: list[str] = ["http://localhost:5173"]
    static_dir: str = "dist/public"


class ClientConfig(BaseModel):
    model_config = {"extra": "forbid"}

    api_base_url: str = "http://localhost:5000"
    timeout_seconds: float = Field(default=15.0, gt=0.0)
    favorites_key: str = Field(default="favoriteCities", min_length=1)
    cache_freshness_seconds: int = Field(default=300, ge=0)
    default_city: str = "New York"
    state_db: str = "data/skyboard.db"


class AppConfig(BaseModel):
    model_config = {"extra": "forbid"}

    provider: ProviderConfig = ProviderConfig()
    server: ServerConfig = ServerConfig()
    client: ClientConfig = ClientConfig()
    other_cities: list[CityConfig] = []
    known_cities: list[CityConfig] = []

    @property
    def is_production(self) -> bool:
        return self.server.environment == Environment.PRODUCTION

    def all_known_cities(self) -> list[CityConfig]:
        """Other-cities first, then the additional table, for favorite resolution."""
        return [*self.other_cities, *self.known_cities]
