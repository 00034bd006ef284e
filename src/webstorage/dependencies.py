"""
Dependency Injection for the web storage size manager

The manager is created once during application startup and shared across all
requests, so the application cache max size it tracks lives as long as the
process.
"""

import logging

from webstorage.disk_info import AppCacheFileInfo, StatFsDiskInfo
from webstorage.notifications import OutOfSpaceNotifier
from webstorage.settings import WebStorageSettings
from webstorage.size_manager import WebStorageSizeManager

logger = logging.getLogger(__name__)

# Global instance of the size manager (initialized during app startup)
_size_manager_instance: WebStorageSizeManager | None = None


def create_size_manager(settings: WebStorageSettings) -> WebStorageSizeManager:
    """Build a size manager probing the filesystem and cache file named by the settings.

    Raises:
        OSError: If the data path filesystem cannot be queried
    """
    disk_info = None
    if settings.global_limit_override is None:
        disk_info = StatFsDiskInfo(settings.data_path)
    else:
        logger.warning("Using global limit override of %d bytes", settings.global_limit_override)

    return WebStorageSizeManager(
        disk_info,
        AppCacheFileInfo(settings.resolved_app_cache_path),
        notifier=OutOfSpaceNotifier(settings_url=settings.settings_url),
        global_limit_override=settings.global_limit_override,
    )


def get_size_manager() -> WebStorageSizeManager:
    """Dependency injection function for WebStorageSizeManager.

    Used with FastAPI's Depends() in route handlers.

    Raises:
        RuntimeError: If the manager is not initialized
    """
    if _size_manager_instance is None:
        raise RuntimeError("Size manager not initialized. Make sure the application lifespan is properly configured.")
    return _size_manager_instance


def set_size_manager_instance(manager: WebStorageSizeManager | None) -> None:
    """Set the global size manager instance.

    This is called during application startup and shutdown via the lifespan context manager.
    """
    global _size_manager_instance
    _size_manager_instance = manager
    if manager is not None:
        logger.info("Size manager instance set globally")
