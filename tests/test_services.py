import json
from datetime import datetime, timezone

import pytest

from backoffice.schemas.validators import is_missing, parse_int, sanitize_phone
from backoffice.services.availability_service import AvailabilityService, opening_hours_label
from backoffice.services.realtime_service import RealtimeFeed, channel_for


class FakeRedis:
    def __init__(self, ok=True):
        self.ok = ok
        self.published = []

    async def publish_message(self, channel, message):
        self.published.append((channel, json.loads(message)))
        return self.ok


class FakePubSub:
    def __init__(self, messages):
        self.messages = list(messages)
        self.unsubscribed = []
        self.closed = False

    async def get_message(self, ignore_subscribe_messages=True, timeout=1.0):
        if not self.messages:
            return None
        return self.messages.pop(0)

    async def unsubscribe(self, channel):
        self.unsubscribed.append(channel)

    async def aclose(self):
        self.closed = True


async def test_publish_sends_row_change_to_table_channel():
    redis = FakeRedis()
    feed = RealtimeFeed(client=redis)

    assert await feed.publish("orders", "UPDATE", new={"status": "ready"}, old={"status": "pending"}) is True

    channel, payload = redis.published[0]
    assert channel == "realtime:orders"
    assert payload["event"] == "UPDATE"
    assert payload["new"] == {"status": "ready"}
    assert payload["old"] == {"status": "pending"}
    assert "commit_timestamp" in payload


async def test_publish_failure_is_reported_not_raised():
    feed = RealtimeFeed(client=FakeRedis(ok=False))
    assert await feed.publish("orders", "INSERT", new={}) is False


async def test_events_yield_messages_and_idle_ticks():
    pubsub = FakePubSub([{"type": "message", "data": '{"event": "INSERT"}'}])
    feed = RealtimeFeed(client=FakeRedis())

    events = feed.events(pubsub)
    assert await events.__anext__() == '{"event": "INSERT"}'
    assert await events.__anext__() is None

    await feed.unsubscribe(pubsub, "reservations")
    assert pubsub.unsubscribed == [channel_for("reservations")]
    assert pubsub.closed is True


def test_opening_hours_label():
    assert opening_hours_label() == "12:00 PM - 11:00 PM"


async def test_availability_rejects_invalid_input():
    service = AvailabilityService()
    with pytest.raises(ValueError):
        await service.check(None, date="2030-13-45", time="19:00:00", number_of_people=2)
    with pytest.raises(ValueError):
        await service.check(None, date="2030-01-10", time="19:00:00", number_of_people="muitos")


async def test_availability_closing_hour_is_exclusive():
    service = AvailabilityService()
    now = datetime(2030, 1, 1, tzinfo=timezone.utc)

    available, reason = await service.check(
        None, date="2030-01-10", time="23:00:00", number_of_people=2, now=now
    )

    assert available is False
    assert reason.startswith("Restaurant is closed")


def test_is_missing_follows_truthiness():
    assert is_missing(None)
    assert is_missing("")
    assert is_missing(0)
    assert is_missing(False)
    assert not is_missing("0")
    assert not is_missing([])


def test_parse_int_takes_leading_number():
    assert parse_int("12 pessoas") == 12
    assert parse_int(7.9) == 7
    assert parse_int("doze") is None
    assert parse_int(True) is None


def test_sanitize_phone():
    assert sanitize_phone(" +55 (11) 90000-0000 ") == "+55 (11) 90000-0000"
    with pytest.raises(ValueError):
        sanitize_phone("0800-PIZZA")
