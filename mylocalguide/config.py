from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # Database
    database_url: str = "sqlite+aiosqlite:///data/mylocalguide.db"

    # Redis (API response cache)
    redis_url: str = "redis://localhost:6379/0"
    cache_enabled: bool = True

    # API Keys
    yelp_api_key: str = ""
    google_places_api_key: str = ""

    # Rate limits (requests per hour, per process)
    yelp_requests_per_hour: int = 5000
    google_requests_per_hour: int = 1000

    # Ingestion: Yelp free tier allows 5000 calls/day, keep a small reserve
    daily_call_budget: int = 5000
    call_budget_reserve: int = 100

    # City / neighborhood resolution
    city_name: str = "San Francisco"
    city_state: str = "CA"
    default_neighborhood: str = "SoMa"

    # App
    debug: bool = False
    log_level: str = "INFO"
    cors_origins: list[str] = ["*"]

    @property
    def city_location(self) -> str:
        return f"{self.city_name}, {self.city_state}"


settings = Settings()
