from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env")

    app_name: str = "TCG Tracker"
    debug: bool = False

    database_url: str = "postgresql+asyncpg://localhost:5432/tcgtracker"

    # Upstream price API. Parameter names are fixed in pricing.client;
    # the endpoint and game id are pinned here.
    justtcg_api_key: str = ""
    justtcg_base_url: str = "https://api.justtcg.com/v1/cards"
    justtcg_game: str = "magic-the-gathering"

    http_timeout: float = 30.0


settings = Settings()


# =============================================================================
# PRICE LOOKUP LIMITS
# =============================================================================

# Upstream result count per card reference (caps matching work)
PRICE_PAGE_SIZE = 10

# Default row cap for cross-user card search
SEARCH_RESULT_LIMIT = 500
