import json

import pytest

from models import NotificationType, PushSubscription
from notifications import (
    FanoutEvent,
    NotificationFanout,
    PushDeliveryError,
    PushGateway,
    build_payload,
)

from conftest import TOURNAMENT_ID, FakeNotifications, FakePlayers, FakeSubscriptions, FakeTransport


def _sub(user_id, n, tournament_id=TOURNAMENT_ID):
    endpoint = f"https://push.example/{user_id}/{n}"
    return PushSubscription(
        id=f"sub-{user_id}-{n}",
        user_id=user_id,
        tournament_id=tournament_id,
        endpoint=endpoint,
        subscription={"endpoint": endpoint, "keys": {"p256dh": "k", "auth": "a"}},
    )


def _event(**overrides):
    fields = dict(
        sender_id="p1",
        tournament_id=TOURNAMENT_ID,
        type=NotificationType.CHAT,
        title="New message from Alice",
        message="Anyone for a beer at the 19th?",
        push_title="💬 Alice",
    )
    fields.update(overrides)
    return FanoutEvent(**fields)


# ================================================================
# build_payload
# ================================================================

def test_payload_carries_message_twice_and_icons():
    payload = json.loads(build_payload("Title", "Body"))
    assert payload == {
        "title": "Title",
        "message": "Body",
        "body": "Body",
        "icon": "/icon-192.png",
        "badge": "/badge-72.png",
        "url": "/",
    }


def test_delivery_error_gone():
    assert PushDeliveryError("x", status_code=410).is_gone
    assert not PushDeliveryError("x", status_code=500).is_gone
    assert not PushDeliveryError("x").is_gone


# ================================================================
# PushGateway
# ================================================================

@pytest.mark.asyncio
async def test_push_not_configured_is_success_with_nothing_sent():
    subs = FakeSubscriptions([_sub("p2", 1)])
    gateway = PushGateway(subs, None)

    result = await gateway.send(TOURNAMENT_ID, "t", "m")
    assert not gateway.configured
    assert result.success is True
    assert result.sent == 0
    assert result.message == "Push notifications not configured"


@pytest.mark.asyncio
async def test_push_with_no_subscriptions_sends_nothing():
    transport = FakeTransport()
    result = await PushGateway(FakeSubscriptions(), transport).send(TOURNAMENT_ID, "t", "m")

    assert result.success is True
    assert result.sent == 0
    assert transport.sent == []


@pytest.mark.asyncio
async def test_push_only_reaches_the_tournament():
    transport = FakeTransport()
    subs = FakeSubscriptions([_sub("p2", 1), _sub("x9", 1, tournament_id="other")])

    result = await PushGateway(subs, transport).send(TOURNAMENT_ID, "t", "m")
    assert result.sent == 1
    assert [e for e, _ in transport.sent] == ["https://push.example/p2/1"]


@pytest.mark.asyncio
async def test_push_to_single_user_reaches_all_their_devices():
    transport = FakeTransport()
    subs = FakeSubscriptions([_sub("p2", 1), _sub("p2", 2), _sub("p3", 1)])

    result = await PushGateway(subs, transport).send(TOURNAMENT_ID, "t", "m", user_id="p2")
    assert result.sent == 2
    assert result.succeeded == 2


@pytest.mark.asyncio
async def test_push_exclude_user():
    transport = FakeTransport()
    subs = FakeSubscriptions([_sub("p1", 1), _sub("p2", 1), _sub("p3", 1)])

    result = await PushGateway(subs, transport).send(
        TOURNAMENT_ID, "t", "m", exclude_user_id="p1"
    )
    assert result.sent == 2
    assert not any("/p1/" in e for e, _ in transport.sent)


@pytest.mark.asyncio
async def test_gone_subscription_is_removed():
    gone = _sub("p2", 1)
    transport = FakeTransport(refuse={gone.endpoint: 410})
    subs = FakeSubscriptions([gone, _sub("p3", 1)])
    gateway = PushGateway(subs, transport)

    result = await gateway.send(TOURNAMENT_ID, "t", "m")
    assert result.sent == 2            # attempted, not delivered
    assert result.succeeded == 1
    assert result.failed == 1
    assert result.removed == 1

    again = await gateway.send(TOURNAMENT_ID, "t", "m")
    assert again.sent == 1


@pytest.mark.asyncio
async def test_other_refusals_keep_the_subscription():
    flaky = _sub("p2", 1)
    transport = FakeTransport(refuse={flaky.endpoint: 500})
    subs = FakeSubscriptions([flaky])

    result = await PushGateway(subs, transport).send(TOURNAMENT_ID, "t", "m")
    assert result.failed == 1
    assert result.removed == 0
    assert subs.subscriptions == [flaky]


# ================================================================
# NotificationFanout
# ================================================================

@pytest.mark.asyncio
async def test_fanout_notifies_everyone_but_the_sender(players):
    notifications = FakeNotifications()
    transport = FakeTransport()
    subs = FakeSubscriptions([_sub("p1", 1), _sub("p2", 1), _sub("p3", 1)])
    fanout = NotificationFanout(
        FakePlayers(players), notifications, PushGateway(subs, transport)
    )

    result = await fanout.broadcast(_event())

    assert result.recipients == 2
    assert result.succeeded == 2
    assert sorted(n.player_id for n in notifications.created) == ["p2", "p3"]
    assert all(n.type == NotificationType.CHAT for n in notifications.created)
    assert result.push.sent == 2
    assert json.loads(transport.sent[0][1])["title"] == "💬 Alice"


@pytest.mark.asyncio
async def test_fanout_failure_for_one_recipient_is_isolated(players):
    notifications = FakeNotifications(failing={"p2"})
    fanout = NotificationFanout(
        FakePlayers(players), notifications, PushGateway(FakeSubscriptions(), None)
    )

    result = await fanout.broadcast(_event())

    assert result.failed == 1
    assert result.succeeded == 1
    assert [n.player_id for n in notifications.created] == ["p3"]
    failed = [o for o in result.outcomes if not o.success]
    assert failed[0].target == "p2"


@pytest.mark.asyncio
async def test_fanout_push_error_does_not_raise(players):
    class BrokenSubscriptions(FakeSubscriptions):
        async def find_for_tournament(self, *args, **kwargs):
            raise ConnectionError("database went away")

    notifications = FakeNotifications()
    fanout = NotificationFanout(
        FakePlayers(players), notifications, PushGateway(BrokenSubscriptions(), FakeTransport())
    )

    result = await fanout.broadcast(_event())
    assert result.succeeded == 2
    assert result.push is None
    assert "database went away" in result.push_error


@pytest.mark.asyncio
async def test_fanout_single_player_tournament(players):
    notifications = FakeNotifications()
    fanout = NotificationFanout(
        FakePlayers(players[:1]), notifications, PushGateway(FakeSubscriptions(), None)
    )

    result = await fanout.broadcast(_event())
    assert result.recipients == 0
    assert notifications.created == []
