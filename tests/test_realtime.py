import asyncio
import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from realtime import ChangeEvent, CoalescingRefresher, RealtimeBridge


def _notice(table="messages", event="INSERT", **columns):
    return json.dumps({"table": table, "event": event, **columns})


@pytest.fixture
def listener():
    conn = MagicMock()
    conn.add_listener = AsyncMock()
    conn.remove_listener = AsyncMock()
    conn.close = AsyncMock()
    return conn


@pytest.fixture
def bridge(listener):
    return RealtimeBridge(AsyncMock(return_value=listener))


# ================================================================
# RealtimeBridge
# ================================================================

@pytest.mark.asyncio
async def test_one_listen_per_table(bridge, listener):
    await bridge.subscribe("messages", lambda: None)
    await bridge.subscribe("messages", lambda: None)
    await bridge.subscribe("posts", lambda: None)

    channels = [c.args[0] for c in listener.add_listener.call_args_list]
    assert channels == ["realtime_messages", "realtime_posts"]
    assert bridge.active_tables == ["messages", "posts"]


@pytest.mark.asyncio
async def test_concurrent_subscribers_share_one_listen(bridge, listener):
    gate = asyncio.Event()

    async def slow_listen(channel, callback):
        await gate.wait()

    listener.add_listener.side_effect = slow_listen
    hits = []
    first = asyncio.ensure_future(bridge.subscribe("messages", lambda: hits.append(1)))
    second = asyncio.ensure_future(bridge.subscribe("messages", lambda: hits.append(2)))
    for _ in range(5):
        await asyncio.sleep(0)
    assert bridge.active_tables == []

    gate.set()
    await asyncio.gather(first, second)
    listener.add_listener.assert_called_once()

    bridge._on_notify(None, 1, "realtime_messages", _notice())
    assert sorted(hits) == [1, 2]


@pytest.mark.asyncio
async def test_failed_listen_fails_every_waiting_subscriber(bridge, listener):
    gate = asyncio.Event()

    async def broken_listen(channel, callback):
        await gate.wait()
        raise ConnectionError("listen failed")

    listener.add_listener.side_effect = broken_listen
    first = asyncio.ensure_future(bridge.subscribe("messages", lambda: None))
    second = asyncio.ensure_future(bridge.subscribe("messages", lambda: None))
    for _ in range(5):
        await asyncio.sleep(0)
    gate.set()

    results = await asyncio.gather(first, second, return_exceptions=True)
    assert all(isinstance(r, ConnectionError) for r in results)
    assert bridge.active_tables == []

    listener.add_listener.side_effect = None
    hits = []
    await bridge.subscribe("messages", lambda: hits.append(1))
    bridge._on_notify(None, 1, "realtime_messages", _notice())
    assert hits == [1]
    assert listener.add_listener.call_count == 2


@pytest.mark.asyncio
async def test_failed_listen_keeps_other_tables(bridge, listener):
    hits = []
    await bridge.subscribe("posts", lambda: hits.append("posts"))
    listener.add_listener.side_effect = ConnectionError("listen failed")

    with pytest.raises(ConnectionError):
        await bridge.subscribe("messages", lambda: None)

    assert bridge.active_tables == ["posts"]
    bridge._on_notify(None, 1, "realtime_posts", _notice(table="posts"))
    assert hits == ["posts"]


@pytest.mark.asyncio
async def test_dispatch_respects_filter_and_events(bridge):
    hits = []
    await bridge.subscribe(
        "messages", lambda: hits.append("t1"), column="tournament_id", value="t1"
    )
    await bridge.subscribe(
        "messages", lambda: hits.append("deletes"), events={ChangeEvent.DELETE}
    )

    bridge._on_notify(None, 1, "realtime_messages", _notice(tournament_id="t1"))
    bridge._on_notify(None, 1, "realtime_messages", _notice(tournament_id="t2"))
    bridge._on_notify(None, 1, "realtime_messages", _notice(event="DELETE", tournament_id="t2"))

    assert hits == ["t1", "deletes"]


@pytest.mark.asyncio
async def test_coroutine_callbacks_are_scheduled(bridge):
    seen = asyncio.Event()

    async def on_change():
        seen.set()

    await bridge.subscribe("posts", on_change)
    bridge._on_notify(None, 1, "realtime_posts", _notice(table="posts"))
    await asyncio.wait_for(seen.wait(), timeout=1)


@pytest.mark.asyncio
async def test_failing_callback_does_not_stop_others(bridge):
    hits = []

    def broken():
        raise RuntimeError("boom")

    await bridge.subscribe("messages", broken)
    await bridge.subscribe("messages", lambda: hits.append(1))
    bridge._on_notify(None, 1, "realtime_messages", _notice())
    assert hits == [1]


@pytest.mark.asyncio
async def test_malformed_notice_is_ignored(bridge):
    hits = []
    await bridge.subscribe("messages", lambda: hits.append(1))
    bridge._on_notify(None, 1, "realtime_messages", "not json")
    assert hits == []


@pytest.mark.asyncio
async def test_unknown_filter_column_rejected(bridge):
    with pytest.raises(ValueError):
        await bridge.subscribe("messages", lambda: None, column="message", value="x")


@pytest.mark.asyncio
async def test_unsubscribe_is_idempotent(bridge, listener):
    hits = []
    keep = await bridge.subscribe("messages", lambda: hits.append("keep"))
    drop = await bridge.subscribe("messages", lambda: hits.append("drop"))

    await bridge.unsubscribe(drop)
    await bridge.unsubscribe(drop)
    listener.remove_listener.assert_not_called()

    bridge._on_notify(None, 1, "realtime_messages", _notice())
    assert hits == ["keep"]
    assert keep.active and not drop.active

    await bridge.unsubscribe(keep)
    await bridge.unsubscribe(keep)
    listener.remove_listener.assert_called_once()
    assert bridge.active_tables == []


@pytest.mark.asyncio
async def test_close_releases_everything(bridge, listener):
    handle = await bridge.subscribe("messages", lambda: None)
    await bridge.close()

    assert not handle.active
    listener.close.assert_awaited_once()


# ================================================================
# CoalescingRefresher
# ================================================================

@pytest.mark.asyncio
async def test_triggers_during_a_run_coalesce_into_one():
    gate = asyncio.Event()
    calls = []

    async def refresh():
        calls.append(1)
        if len(calls) == 1:
            await gate.wait()

    refresher = CoalescingRefresher(refresh)
    refresher.trigger()
    await asyncio.sleep(0)
    for _ in range(5):
        refresher.trigger()
    gate.set()
    await refresher.refresh_now()

    # the first run plus a single rerun for all six triggers
    assert refresher.runs == 2


@pytest.mark.asyncio
async def test_refresh_errors_do_not_stop_later_runs():
    calls = []

    async def refresh():
        calls.append(1)
        if len(calls) == 1:
            raise RuntimeError("network down")

    refresher = CoalescingRefresher(refresh)
    await refresher.refresh_now()
    await refresher.refresh_now()
    assert len(calls) == 2


@pytest.mark.asyncio
async def test_polling_keeps_refreshing_without_notices():
    calls = []

    async def refresh():
        calls.append(1)

    refresher = CoalescingRefresher(refresh, interval=0.01)
    refresher.start()
    await asyncio.sleep(0.1)
    await refresher.stop()

    assert len(calls) >= 2
    settled = len(calls)
    await asyncio.sleep(0.05)
    assert len(calls) == settled
