import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI

from webstorage.api.quota import router as quota_router
from webstorage.dependencies import create_size_manager, get_size_manager, set_size_manager_instance
from webstorage.metrics import setup_metrics, track_storage
from webstorage.settings import get_settings
from webstorage.size_manager import WebStorageSizeManager

# Configure logging early: uvicorn imports this module when starting the app
from .logging_config import configure_logging

_settings = get_settings()
configure_logging(level=_settings.log_level, decision_level=_settings.decision_log_level, event_level=_settings.event_log_level)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle: startup and shutdown.

    The size manager snapshots the filesystem once on startup and lives until shutdown.
    """
    logger.info("Starting up application...")
    try:
        manager = create_size_manager(get_settings())
        set_size_manager_instance(manager)
        track_storage(manager.global_limit, lambda: manager.app_cache_max_size)
        logger.info("Size manager initialized successfully")
    except OSError as e:
        logger.error(f"Failed to initialize size manager: {e}")
        raise

    yield

    logger.info("Shutting down application...")
    set_size_manager_instance(None)


app = FastAPI(redoc_url=None, redirect_slashes=False, lifespan=lifespan)

app.include_router(quota_router)

setup_metrics(app)


@app.get("/health")
def health(manager: WebStorageSizeManager = Depends(get_size_manager)):
    return {"status": "ok", "global_limit": manager.global_limit}
