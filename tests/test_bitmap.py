import pytest

from minios.bitmap import Bitmap, byte_count


def test_byte_count_rounds_up():
    assert byte_count(0) == 0
    assert byte_count(1) == 1
    assert byte_count(8) == 1
    assert byte_count(9) == 2


def test_init_clear():
    bm = Bitmap(20, 0)
    assert len(bm) == 20
    assert all(bm.get(i) == 0 for i in range(20))


def test_init_set():
    bm = Bitmap(13, 1)
    assert all(bm.is_set(i) for i in range(13))


def test_set_range_and_clear():
    bm = Bitmap(32, 0)
    bm.set_range(3, 10, 1)
    assert [bm.get(i) for i in range(32)] == [0] * 3 + [1] * 10 + [0] * 19
    bm.set_range(5, 2, 0)
    assert not bm.is_set(5)
    assert not bm.is_set(6)
    assert bm.is_set(4)
    assert bm.is_set(7)


def test_set_range_clamps_at_end():
    bm = Bitmap(10, 0)
    bm.set_range(8, 100, 1)
    assert [bm.get(i) for i in range(10)] == [0] * 8 + [1, 1]


def test_get_out_of_range():
    bm = Bitmap(4, 0)
    with pytest.raises(IndexError):
        bm.get(4)


def test_alloc_returns_first_free_run():
    bm = Bitmap(16, 0)
    assert bm.alloc(4) == 0
    assert bm.alloc(4) == 4
    assert all(bm.is_set(i) for i in range(8))
    assert not bm.is_set(8)


def test_alloc_skips_short_gaps():
    bm = Bitmap(16, 1)
    bm.set_range(2, 2, 0)
    bm.set_range(6, 5, 0)
    start = bm.alloc(3)
    assert start == 6
    assert all(bm.is_set(i) for i in range(6, 9))
    assert not bm.is_set(9)
    assert not bm.is_set(2)


def test_alloc_fails_when_no_room():
    bm = Bitmap(8, 0)
    assert bm.alloc(9) is None
    assert bm.alloc(8) == 0
    assert bm.alloc(1) is None


def test_alloc_zero_count_fails():
    bm = Bitmap(8, 0)
    assert bm.alloc(0) is None
    assert not any(bm.is_set(i) for i in range(8))


def test_alloc_free_round_trip():
    bm = Bitmap(12, 0)
    first = bm.alloc(5)
    bm.set_range(first, 5, 0)
    assert bm.alloc(5) == first