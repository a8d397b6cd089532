import threading

import pytest

from pistream.handoff import HandoffQueue


def test_fifo_then_none_after_finish():
    q = HandoffQueue()
    for i in range(5):
        q.push(i)
    q.finish()
    assert [q.pop() for _ in range(5)] == [0, 1, 2, 3, 4]
    assert q.pop() is None
    assert q.pop() is None


def test_consumer_blocks_until_items_arrive():
    q = HandoffQueue()
    seen = []

    def consume():
        for item in q:
            seen.append(item)

    t = threading.Thread(target=consume)
    t.start()
    for i in range(100):
        q.push(i)
    q.finish()
    t.join(timeout=10)
    assert not t.is_alive()
    assert seen == list(range(100))


def test_finish_unblocks_waiting_consumer():
    q = HandoffQueue()
    out = []
    t = threading.Thread(target=lambda: out.append(q.pop()))
    t.start()
    q.finish()
    t.join(timeout=10)
    assert not t.is_alive()
    assert out == [None]


def test_finish_is_one_shot():
    q = HandoffQueue()
    q.finish()
    assert q.finished
    with pytest.raises(RuntimeError):
        q.finish()
    with pytest.raises(RuntimeError):
        q.push(1)


def test_len_tracks_pending_items():
    q = HandoffQueue()
    q.push("a")
    q.push("b")
    assert len(q) == 2
    q.pop()
    assert len(q) == 1
