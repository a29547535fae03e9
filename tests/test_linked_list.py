import threading

import pytest

from threadkit.linked_list import ThreadsafeList


def _contents(lst):
    seen = []
    lst.for_each(seen.append)
    return seen


def test_push_front_orders_newest_first():
    lst = ThreadsafeList()
    for value in [1, 2, 3]:
        lst.push_front(value)
    assert _contents(lst) == [3, 2, 1]


def test_empty_list_has_no_contents():
    lst = ThreadsafeList()
    assert _contents(lst) == []
    assert lst.find_first_if(lambda v: True) is None


def test_find_first_if_returns_frontmost_match():
    lst = ThreadsafeList()
    for value in [2, 5, 4, 7]:
        lst.push_front(value)
    assert lst.find_first_if(lambda v: v % 2 == 0) == 4
    assert lst.find_first_if(lambda v: v > 100) is None


def test_remove_if_removes_adjacent_matches():
    lst = ThreadsafeList()
    for value in range(10):
        lst.push_front(value)
    lst.remove_if(lambda v: v % 2 == 0)
    assert _contents(lst) == [9, 7, 5, 3, 1]
    lst.remove_if(lambda v: True)
    assert _contents(lst) == []


def test_exception_in_callback_leaves_list_usable():
    lst = ThreadsafeList()
    lst.push_front("a")
    lst.push_front("b")

    def boom(value):
        raise KeyError(value)

    with pytest.raises(KeyError):
        lst.for_each(boom)
    with pytest.raises(KeyError):
        lst.remove_if(boom)
    assert _contents(lst) == ["b", "a"]


def test_concurrent_push_front():
    lst = ThreadsafeList()

    def pusher(base):
        for offset in range(50):
            lst.push_front(base + offset)

    threads = [threading.Thread(target=pusher, args=(b * 100,)) for b in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(10)
    contents = _contents(lst)
    assert sorted(contents) == sorted(b * 100 + o for b in range(4) for o in range(50))