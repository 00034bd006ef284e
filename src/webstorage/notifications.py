import logging
from datetime import UTC, datetime
from typing import Protocol

from webstorage.logger import logger
from webstorage.metrics import OUT_OF_SPACE_TOTAL, out_of_space_count


class NotificationTrigger(Protocol):
    """Side effect run whenever a quota request is denied for lack of space."""

    def fire(self) -> None: ...


class OutOfSpaceNotifier:
    """Default out-of-space notification.

    Emits a structured `storage_out_of_space` event that points the user at
    the storage settings page, where data of individual origins can be
    deleted. Firings are counted by the `webstorage_out_of_space_total`
    metric, which is process wide.
    """

    def __init__(self, settings_url: str = "/settings/storage"):
        self.settings_url = settings_url
        self._last_fired_at: datetime | None = None

    @property
    def count(self) -> int:
        return out_of_space_count()

    @property
    def last_fired_at(self) -> datetime | None:
        return self._last_fired_at

    def fire(self) -> None:
        OUT_OF_SPACE_TOTAL.inc()
        self._last_fired_at = datetime.now(UTC)
        logger.log_event(
            "storage_out_of_space",
            level=logging.WARNING,
            settings_url=self.settings_url,
            count=self.count,
        )
