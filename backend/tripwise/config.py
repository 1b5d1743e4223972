from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Search fan-out
    search_concurrency: int = 10  # max in-flight provider calls per batch
    search_timeout_seconds: float = 30.0

    # Budget optimizer
    budget_max_results: int = 20

    # Analytics
    analytics_weekend_tip_threshold: float = 20.0

    # Demo inventory
    inventory_seed: str = "tripwise"
    inventory_horizon_days: int = 30

    # Logging
    log_level: str = "INFO"
    log_dir: str = "logs"

    # CORS
    cors_origins: str = "http://localhost:5173"

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",")]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


settings = Settings()
