from liveflow.packet_queue import PacketQueue


def test_pop_empty_returns_none():
    assert PacketQueue(4).pop() is None


def test_pop_returns_most_recent():
    queue = PacketQueue(4)
    first, second, third = object(), object(), object()
    for item in (first, second, third):
        queue.push(item)
    assert queue.pop() is third
    assert queue.pop() is second
    assert len(queue) == 1


def test_full_queue_replaces_newest():
    queue = PacketQueue(2)
    first, second, third = object(), object(), object()
    queue.push(first)
    queue.push(second)
    queue.push(third)
    assert queue.all() == [first, third]


def test_all_empties_queue():
    queue = PacketQueue(3)
    items = [object(), object()]
    for item in items:
        queue.push(item)
    assert queue.all() == items
    assert len(queue) == 0
    assert queue.all() == []


def test_unbounded_queue_keeps_everything():
    queue = PacketQueue()
    items = [object() for _ in range(50)]
    for item in items:
        queue.push(item)
    assert len(queue) == len(items)
    assert queue.all() == items