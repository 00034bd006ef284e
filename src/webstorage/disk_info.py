"""
Filesystem and application cache probes.

The size manager only talks to the two protocols below; the concrete classes
are the default implementations used by the service. Tests substitute fakes.
"""

import logging
import os
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)

# Keep in sync with the storage engine's application cache file name
APPCACHE_FILE = "ApplicationCache.db"


class DiskInfo(Protocol):
    """Information about the filesystem that holds web storage."""

    def free_space_size_bytes(self) -> int: ...

    def total_size_bytes(self) -> int: ...


class AppCacheInfo(Protocol):
    """Information about the shared application cache file."""

    def app_cache_size_bytes(self) -> int: ...


class StatFsDiskInfo:
    """DiskInfo backed by os.statvfs for the filesystem containing `path`.

    Raises:
        OSError: If the filesystem cannot be queried
    """

    def __init__(self, path: str | os.PathLike[str]):
        self.path = Path(path)
        self._stat = os.statvfs(self.path)

    def free_space_size_bytes(self) -> int:
        return self._stat.f_bavail * self._stat.f_frsize

    def total_size_bytes(self) -> int:
        return self._stat.f_blocks * self._stat.f_frsize


class AppCacheFileInfo:
    def __init__(self, path: str | os.PathLike[str]):
        self.cache_file = Path(path) / APPCACHE_FILE

    def app_cache_size_bytes(self) -> int:
        """Size of the application cache file, 0 if it does not exist yet."""
        try:
            return self.cache_file.stat().st_size
        except FileNotFoundError:
            logger.debug("No application cache file at %s", self.cache_file)
            return 0
