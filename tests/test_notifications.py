import json
import logging
from datetime import UTC, datetime

from freezegun.api import FrozenDateTimeFactory

from webstorage.metrics import out_of_space_count
from webstorage.notifications import OutOfSpaceNotifier


class TestOutOfSpaceNotifier:
    def test_initial_state(self):
        notifier = OutOfSpaceNotifier()
        assert notifier.last_fired_at is None

    def test_fire_counts_and_records_time(self, freezer: FrozenDateTimeFactory):
        freezer.move_to(datetime(2026, 1, 1, 12, 0, 0, tzinfo=UTC))
        notifier = OutOfSpaceNotifier()
        before = out_of_space_count()

        notifier.fire()
        freezer.move_to(datetime(2026, 1, 1, 13, 0, 0, tzinfo=UTC))
        notifier.fire()

        assert notifier.count == before + 2
        assert notifier.last_fired_at == datetime(2026, 1, 1, 13, 0, 0, tzinfo=UTC)

    def test_fire_logs_structured_event(self, caplog):
        notifier = OutOfSpaceNotifier(settings_url="/settings/websites")

        with caplog.at_level(logging.WARNING, logger="webstorage.events"):
            notifier.fire()

        records = [r for r in caplog.records if r.name == "webstorage.events"]
        assert len(records) == 1
        assert records[0].levelno == logging.WARNING
        payload = json.loads(records[0].getMessage())
        assert payload["event"] == "storage_out_of_space"
        assert payload["settings_url"] == "/settings/websites"
        assert payload["count"] == out_of_space_count()
