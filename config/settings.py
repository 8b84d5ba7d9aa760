from functools import lru_cache

from pydantic_settings import BaseSettings
from sqlalchemy.engine import make_url


DEFAULT_CATEGORIES = ["Geral", "Hortifruti", "Limpeza", "Higiene", "Carnes", "Bebidas"]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Remote store (both required; either missing -> read-only empty app)
    store_url: str = ""  # e.g. postgresql+psycopg2://postgres@db.example.com:5432/postgres
    store_key: str = ""  # access key, used as the connection password
    store_create_schema: bool = False  # create the products table on startup

    # Local preferences (shopping mode, margin)
    preferences_path: str = ".shopping_preferences.json"
    default_margin_pct: float = 15.0

    # Catalog
    default_category: str = "Geral"
    default_categories: list[str] = DEFAULT_CATEGORIES
    currency_symbol: str = "R$"

    # Remote writes run on this many background threads (0 = inline)
    write_workers: int = 1

    log_level: str = "INFO"

    @property
    def has_store_credentials(self) -> bool:
        """Both the endpoint URL and the access key are set."""
        return bool(self.store_url.strip() and self.store_key.strip())

    @property
    def database_url(self) -> str:
        """Build the SQLAlchemy URL with the access key injected as password."""
        url = make_url(self.store_url.strip())
        # SQLite has no credentials; the key only gates whether the store is used
        if not url.drivername.startswith("sqlite"):
            url = url.set(password=self.store_key.strip())
        return url.render_as_string(hide_password=False)

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance."""
    return Settings()
