import pytest

from liveflow.pool import MAX_POOL_SIZE, Pool


def test_get_returns_requested_length_of_zeros():
    pool = Pool()
    view = pool.get(5)
    assert bytes(view) == bytes(5)


def test_consecutive_views_do_not_overlap():
    pool = Pool()
    first = pool.get(8)
    second = pool.get(8)
    first[:] = b"\xaa" * 8
    assert bytes(second) == bytes(8)
    assert bytes(first) == b"\xaa" * 8


def test_full_pool_starts_fresh_buffer_without_touching_old_views():
    pool = Pool()
    whole = pool.get(MAX_POOL_SIZE)
    assert len(whole) == MAX_POOL_SIZE
    extra = pool.get(4)
    extra[:] = b"\x01\x02\x03\x04"
    assert bytes(whole[:4]) == bytes(4)
    assert bytes(extra) == b"\x01\x02\x03\x04"


def test_remaining_space_reused_when_it_fits():
    pool = Pool()
    pool.get(MAX_POOL_SIZE - 3)
    tail = pool.get(3)
    assert len(tail) == 3
    after = pool.get(3)
    after[:] = b"\xff\xff\xff"
    assert bytes(tail) == bytes(3)


def test_oversized_request_raises():
    with pytest.raises(ValueError):
        Pool().get(MAX_POOL_SIZE + 1)


def test_negative_request_raises():
    with pytest.raises(ValueError):
        Pool().get(-1)