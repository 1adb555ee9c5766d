import threading
import time

import pytest

from clubsync.session_logs import SessionLogStore, stream_session_logs


def test_append_and_read_in_order():
    store = SessionLogStore()
    store.append("s1", "first")
    store.append("s1", "second")
    store.append("s2", "other")

    assert [e.message for e in store.read("s1")] == ["first", "second"]
    assert [e.message for e in store.read("s1", since=1)] == ["second"]
    assert store.read("missing") == []


def test_missing_session_id_is_ignored():
    store = SessionLogStore()
    store.append(None, "lost")
    assert store.read(None) == []


def test_clear_removes_session():
    store = SessionLogStore()
    store.append("s1", "line")
    store.clear("s1")
    assert "s1" not in store
    assert store.read("s1") == []


def test_expire_drops_sessions_past_ttl():
    store = SessionLogStore(ttl=120)
    store.append("old", "line")

    assert store.expire(now=time.monotonic()) == []
    assert store.expire(now=time.monotonic() + 121) == ["old"]
    assert "old" not in store


def test_concurrent_appends_are_not_lost():
    store = SessionLogStore()

    def worker(n):
        for i in range(200):
            store.append("shared", f"{n}-{i}")

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(store.read("shared")) == 1600


@pytest.mark.asyncio
async def test_stream_replays_lines_then_clears():
    store = SessionLogStore()
    store.append("s1", "📊 Extracted 2 clubs")
    store.append("s1", "✅ Preview completed")

    frames = [f async for f in stream_session_logs(store, "s1", poll_interval=0.01, duration=0.05)]

    assert frames[0] == "retry: 2000\n"
    assert frames[1:] == ["data: 📊 Extracted 2 clubs\n\n", "data: ✅ Preview completed\n\n"]
    assert "s1" not in store
