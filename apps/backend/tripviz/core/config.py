"""
Application configuration loaded from environment variables.

Uses pydantic-settings for type-safe env var parsing with automatic
.env file loading.

Only service-level knobs live here (CORS, rate limit, map defaults).
The normalisation divisors and LOD zoom bands are part of the
visualisation semantics and are not configurable; see
tripviz/services/intensity.py and tripviz/services/lod.py.

See https://docs.pydantic.dev/latest/concepts/pydantic_settings/
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # ─── Core ──────────────────────────────────────────────────────
    environment: str = "development"
    debug: bool = False

    # ─── CORS ──────────────────────────────────────────────────────
    # Comma-separated allowed origins for the browser map client.
    cors_origins_str: str = "http://localhost:3000,http://localhost:5173"

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.cors_origins_str.split(",") if o.strip()]

    # ─── Render plan ───────────────────────────────────────────────
    # Number of hotspot markers returned when the client doesn't ask.
    default_hotspot_limit: int = 10
    # slowapi limit string applied to POST /render-plan.
    render_plan_rate_limit: str = "120/minute"

    # ─── Map defaults (served to the client via /config) ───────────
    # Centre of Manhattan.
    map_center_lat: float = 40.7589
    map_center_lng: float = -73.9851
    map_default_zoom: int = 12
    map_min_zoom: int = 1
    map_max_zoom: int = 18

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Don't fail on unknown env vars
    )


# Module-level singleton: import this instead of instantiating Settings()
settings = Settings()
