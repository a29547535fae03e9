import random

import pytest

from threadkit.pool import ThreadPool
from threadkit.sorting import (
    async_quick_sort,
    parallel_quick_sort,
    pool_quick_sort,
    sequential_quick_sort,
)


def _random_ints(count, seed):
    rng = random.Random(seed)
    return [rng.randint(-500, 500) for _ in range(count)]


def _all_sorted(data):
    return [
        sequential_quick_sort(data),
        async_quick_sort(data),
        parallel_quick_sort(data),
        pool_quick_sort(data),
    ]


def test_empty_input_gives_empty_list():
    assert sequential_quick_sort([]) == []
    assert async_quick_sort([]) == []
    assert parallel_quick_sort([]) == []
    assert pool_quick_sort([]) == []


def test_input_is_not_modified():
    data = _random_ints(50, 3)
    original = list(data)
    results = [
        sequential_quick_sort(data),
        async_quick_sort(data),
        parallel_quick_sort(data),
        pool_quick_sort(data),
    ]
    assert data == original
    assert results == [sorted(original)] * 4


def test_duplicates_are_kept():
    data = [5, 1, 5, 3, 1, 5, 3] * 5
    results = [
        sequential_quick_sort(data),
        async_quick_sort(data),
        parallel_quick_sort(data),
        pool_quick_sort(data),
    ]
    for result in results:
        assert result == sorted(data)
        assert len(result) == len(data)


def test_sorts_strings():
    data = ["pear", "apple", "fig", "banana", "cherry", "date"]
    expected = sorted(data)
    assert sequential_quick_sort(data) == expected
    assert async_quick_sort(data) == expected
    assert parallel_quick_sort(data) == expected
    assert pool_quick_sort(data) == expected


def test_accepts_any_iterable():
    data = _random_ints(40, 11)
    expected = sorted(data)
    assert sequential_quick_sort(iter(data)) == expected
    assert async_quick_sort(iter(data)) == expected
    assert parallel_quick_sort(iter(data)) == expected
    assert pool_quick_sort(iter(data)) == expected


def test_incomparable_items_raise():
    data = [3, "a", 1, 2]
    with pytest.raises(TypeError):
        sequential_quick_sort(data)
    with pytest.raises(TypeError):
        async_quick_sort(data)
    with pytest.raises(TypeError):
        parallel_quick_sort(data)
    with pytest.raises(TypeError):
        pool_quick_sort(data)


def test_all_sorts_agree():
    data = _random_ints(120, 13)
    assert _all_sorted(data) == [sorted(data)] * 4


def test_pool_sort_with_given_pool():
    data = _random_ints(150, 21)
    with ThreadPool(thread_count=2) as pool:
        assert pool_quick_sort(data, pool) == sorted(data)
        assert pool.submit(len, data).result(timeout=10) == len(data)


def test_pool_sort_with_zero_thread_pool_runs_on_caller():
    data = _random_ints(80, 5)
    pool = ThreadPool(thread_count=0)
    try:
        assert pool_quick_sort(data, pool) == sorted(data)
    finally:
        pool.shutdown()


def test_sorted_input_stays_sorted():
    data = list(range(60))
    assert parallel_quick_sort(data) == data
    assert sequential_quick_sort(list(reversed(data))) == data