from functools import lru_cache

from adapters.db.sqlite_adapter import SQLiteAdapter
from adapters.metrics.prometheus import PrometheusMetrics
from app.services.browser_service import BrowserService
from app.settings import get_settings


@lru_cache()
def get_adapter() -> SQLiteAdapter:
    """
    Process-wide SQLite adapter holding the single shared connection.
    """
    settings = get_settings()
    return SQLiteAdapter(
        settings.database_path,
        timeout=settings.sqlite_timeout,
        metrics=PrometheusMetrics(),
    )


@lru_cache()
def get_browser_service() -> BrowserService:
    """
    Singleton-ish BrowserService for the FastAPI app.

    Uses centralized Settings so configuration is loaded once and injected.
    """
    return BrowserService(settings=get_settings(), db=get_adapter())
