"""Application configuration and settings management."""

from typing import Any, Optional

import json
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="EMP_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Empalombia Delivery API"
    api_prefix: str = "/api"
    log_level: str = Field(default="INFO", description="Root logging level.")

    google_maps_api_key: Optional[str] = Field(
        default=None,
        description="Server-side Google Maps key used by the geocode proxy.",
    )
    google_geocode_url: str = Field(
        default="https://maps.googleapis.com/maps/api/geocode/json",
        description="Google Geocoding JSON endpoint.",
    )
    geocode_region: Optional[str] = Field(
        default=None,
        description="Optional ccTLD region bias passed to Google (e.g. 'ar').",
    )
    geocode_proxy_url: Optional[str] = Field(
        default=None,
        description="Base URL of a deployment exposing /api/geocode. When set, resolvers go through it.",
    )
    geocode_timeout_seconds: float = Field(default=10.0, gt=0.0)
    geocode_batch_delay_seconds: float = Field(
        default=0.2,
        ge=0.0,
        description="Pause between consecutive geocode calls when resolving a batch of orders.",
    )
    geocode_cache_max_entries: Optional[int] = Field(
        default=None,
        ge=1,
        description="Upper bound for the in-memory geocode cache. None keeps every entry for the process lifetime.",
    )

    default_map_center: tuple[float, float] = Field(
        default=(-34.6037, -58.3816),
        description="(lat, lng) used when no order on the map could be geocoded (Buenos Aires).",
    )
    shipping_cost_centro: int = Field(default=5000, ge=0)
    shipping_cost_bordes: int = Field(default=9000, ge=0)
    bordes_neighborhoods: tuple[str, ...] = Field(
        default=(
            "belgrano",
            "nuñez",
            "unez",
            "saavedra",
            "coghlan",
            "urquiza",
            "devoto",
            "villa del parque",
            "villa pueyrredon",
            "agronomia",
            "liniers",
            "mataderos",
            "lugano",
            "villa riachuelo",
            "soldati",
            "parque avellaneda",
            "versalles",
            "monte castro",
            "velez sarsfield",
            "microcentro",
            "san telmo",
            "la boca",
            "barracas",
            "pompeya",
        ),
        description="Neighborhood name fragments priced as 'bordes'. Matched accent-insensitively by substring.",
    )

    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    # Supabase configuration
    supabase_url: Optional[str] = Field(
        default=None,
        description="Supabase project URL (e.g., https://xxx.supabase.co).",
    )
    supabase_key: Optional[str] = Field(
        default=None,
        description="Supabase service role key for backend operations.",
    )

    @field_validator("frontend_allowed_origins", "bordes_neighborhoods", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            # Try JSON first
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            # Try comma-separated
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            # Single value
            if value.strip():
                return (value.strip(),)
        # Return empty tuple if value is None or empty
        return tuple()

    @field_validator("default_map_center", mode="before")
    @classmethod
    def _parse_center_from_env(cls, value: Any) -> tuple[float, float]:
        """Accept "lat,lng" or a JSON array for the map centre."""
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
            except json.JSONDecodeError:
                parsed = [item.strip() for item in value.split(",") if item.strip()]
            if not isinstance(parsed, list) or len(parsed) != 2:
                raise ValueError("default_map_center must be 'lat,lng' or a two-item JSON array")
            return (float(parsed[0]), float(parsed[1]))
        return value

    @model_validator(mode="after")
    def _check_shipping_costs(self) -> "Settings":
        # each tier must be identifiable by its price
        if self.shipping_cost_centro == self.shipping_cost_bordes:
            raise ValueError("shipping_cost_centro and shipping_cost_bordes must differ")
        return self


settings = Settings()
