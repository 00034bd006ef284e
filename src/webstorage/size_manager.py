"""
Disk budget management for web storage.

The size manager maintains one global limit for the disk space consumed by
per-origin databases and the shared application cache. The limit is a
function of the size of the partition holding both, and of the free space on
it. It is split initially as 75% for databases and 25% for the application
cache.

When an origin's database usage reaches its quota, the storage engine asks
for an increase through `on_exceeded_database_quota`. A new origin starts
with a quota of 0, so this is also how it gets its first allocation. When the
application cache reaches its maximum size, the engine calls
`on_reached_max_app_cache_size`.

The default quota for an origin is min(ORIGIN_DEFAULT_QUOTA, unused quota).
Increases are done in steps of min(QUOTA_INCREASE_STEP, unused quota). Space
may remain unused when many origins store far less than ORIGIN_DEFAULT_QUOTA,
which is why the default is smaller than what browsers usually recommend.
A very small default would make origins hit their quota, and roll back
transactions, more often.

When all web storage space is used, a notification guides the user to the
storage settings page where the data of an origin can be deleted.
"""

import logging
import math
import threading
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum

from webstorage.disk_info import AppCacheInfo, DiskInfo
from webstorage.notifications import NotificationTrigger, OutOfSpaceNotifier

logger = logging.getLogger(__name__)

MIB = 1024 * 1024
# The default quota value for an origin
ORIGIN_DEFAULT_QUOTA = 3 * MIB
# The default value for quota increases
QUOTA_INCREASE_STEP = 1 * MIB

QuotaDecisionSink = Callable[[int], None]


class QuotaOutcome(StrEnum):
    GRANTED = "granted"
    OUT_OF_SPACE = "out_of_space"


@dataclass(frozen=True)
class QuotaDecision:
    """Quota decided for a request. The caller wakes whoever waits on it."""

    quota: int
    outcome: QuotaOutcome

    @property
    def granted(self) -> bool:
        return self.outcome is QuotaOutcome.GRANTED


def calculate_global_limit(file_system_size_bytes: int, free_space_bytes: int) -> int:
    """Compute the web storage budget for a filesystem.

    Larger filesystems reserve a smaller fraction for web storage, and never
    more than half of the currently free space. The result is rounded up to
    a whole MiB, or 0 when there is less than 1 MiB to give or the figures
    are inconsistent.
    """
    if file_system_size_bytes <= 0 or free_space_bytes <= 0 or free_space_bytes > file_system_size_bytes:
        return 0

    size_mib = file_system_size_bytes // MIB
    if size_mib == 0:
        # Below 1 MiB nothing can be granted whatever the ratio
        return 0

    file_system_size_ratio = 2 << math.floor(math.log10(size_mib))
    max_size_bytes = min(file_system_size_bytes // file_system_size_ratio, free_space_bytes // 2)
    if max_size_bytes < MIB:
        return 0

    rounding_extra = 0 if max_size_bytes % MIB == 0 else 1
    return MIB * (max_size_bytes // MIB + rounding_extra)


class WebStorageSizeManager:
    """Splits the global web storage limit between origin databases and the application cache.

    Both decision methods are serialised by one lock: they compute the unused
    quota from the same snapshot of the application cache size, and the cache
    decision updates it.
    """

    def __init__(
        self,
        disk_info: DiskInfo | None,
        app_cache_info: AppCacheInfo,
        notifier: NotificationTrigger | None = None,
        global_limit_override: int | None = None,
    ):
        if global_limit_override is not None:
            self._global_limit = global_limit_override
        elif disk_info is not None:
            self._global_limit = calculate_global_limit(disk_info.total_size_bytes(), disk_info.free_space_size_bytes())
        else:
            raise ValueError("disk_info is required unless global_limit_override is set")

        self._notifier = notifier if notifier is not None else OutOfSpaceNotifier()
        self._lock = threading.Lock()
        # 25% of the global limit, or the current size of the cache file if bigger
        self._app_cache_max_size = max(self._global_limit // 4, app_cache_info.app_cache_size_bytes())

        logger.info(
            "Web storage global limit is %d bytes, application cache max size %d bytes",
            self._global_limit,
            self._app_cache_max_size,
        )

    @property
    def global_limit(self) -> int:
        return self._global_limit

    @property
    def notifier(self) -> NotificationTrigger:
        return self._notifier

    @property
    def app_cache_max_size(self) -> int:
        with self._lock:
            return self._app_cache_max_size

    def on_exceeded_database_quota(
        self,
        url: str,
        database_identifier: str,
        current_quota: int,
        total_used_quota: int,
        on_complete: QuotaDecisionSink | None = None,
    ) -> QuotaDecision:
        """An origin has exceeded its database quota.

        Args:
            url: The URL that exceeded the quota
            database_identifier: Database on which the overflowing transaction ran
            current_quota: The current quota of the origin, 0 for a new origin
            total_used_quota: Sum of the quotas of all origins
            on_complete: Optional sink, called exactly once with the decided quota

        Returns:
            The decision. A denial carries `current_quota` unchanged.
        """
        logger.debug(
            "Received on_exceeded_database_quota for %s:%s (current quota: %d, total used quota: %d)",
            url,
            database_identifier,
            current_quota,
            total_used_quota,
        )
        with self._lock:
            total_unused_quota = self._global_limit - total_used_quota - self._app_cache_max_size

            if total_unused_quota <= 0:
                self._notifier.fire()
                decision = QuotaDecision(current_quota, QuotaOutcome.OUT_OF_SPACE)
                logger.debug("on_exceeded_database_quota: out of space")
            elif current_quota == 0:
                # New origin, it wants an initial quota
                decision = QuotaDecision(min(ORIGIN_DEFAULT_QUOTA, total_unused_quota), QuotaOutcome.GRANTED)
            else:
                decision = QuotaDecision(
                    current_quota + min(QUOTA_INCREASE_STEP, total_unused_quota),
                    QuotaOutcome.GRANTED,
                )

            if on_complete is not None:
                on_complete(decision.quota)

        if decision.granted:
            logger.debug("on_exceeded_database_quota set new quota to %d", decision.quota)
        return decision

    def on_reached_max_app_cache_size(
        self,
        space_needed: int,
        total_used_quota: int,
        on_complete: QuotaDecisionSink | None = None,
    ) -> QuotaDecision:
        """The application cache has exceeded its max size.

        Args:
            space_needed: Disk space needed for the last cache operation to succeed
            total_used_quota: Sum of the quotas of all origins
            on_complete: Optional sink, called exactly once with the decided size

        Returns:
            The decision: the new max size, or 0 when out of space.
        """
        # The max size never shrinks, a negative need asks for nothing
        space_needed = max(space_needed, 0)
        logger.debug("Received on_reached_max_app_cache_size with space_needed %d bytes", space_needed)
        with self._lock:
            total_unused_quota = self._global_limit - total_used_quota - self._app_cache_max_size

            if total_unused_quota < space_needed:
                self._notifier.fire()
                decision = QuotaDecision(0, QuotaOutcome.OUT_OF_SPACE)
                logger.debug("on_reached_max_app_cache_size: out of space")
            else:
                self._app_cache_max_size += space_needed
                decision = QuotaDecision(self._app_cache_max_size, QuotaOutcome.GRANTED)
                logger.debug("on_reached_max_app_cache_size set new max size to %d", decision.quota)

            if on_complete is not None:
                on_complete(decision.quota)

        return decision
