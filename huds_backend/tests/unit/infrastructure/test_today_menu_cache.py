"""Tests for TodayMenuCache."""

import threading
from typing import Callable

from huds_backend.domain.menu.models import CondensedMenu
from huds_backend.infrastructure.cache.today_menu_cache import TodayMenuCache


def test_empty_cache_misses() -> None:
    cache = TodayMenuCache()

    assert cache.get() is None
    assert cache.get_for("03/04/2024") is None


def test_hit_for_matching_date(make_menu: Callable[..., CondensedMenu]) -> None:
    cache = TodayMenuCache()
    menu = make_menu("03/04/2024")

    cache.set(menu)

    assert cache.get_for("03/04/2024") is menu


def test_miss_for_other_date(make_menu: Callable[..., CondensedMenu]) -> None:
    cache = TodayMenuCache()
    cache.set(make_menu("03/04/2024"))

    assert cache.get_for("03/05/2024") is None


def test_menu_without_dinner_is_a_miss(make_menu: Callable[..., CondensedMenu]) -> None:
    cache = TodayMenuCache()
    cache.set(make_menu("03/04/2024", dinner=False))

    assert cache.get_for("03/04/2024") is None
    assert cache.get() is not None


def test_set_replaces_previous_snapshot(make_menu: Callable[..., CondensedMenu]) -> None:
    cache = TodayMenuCache()
    cache.set(make_menu("03/04/2024"))
    latest = make_menu("03/05/2024")

    cache.set(latest)

    assert cache.get() is latest


def test_clear(make_menu: Callable[..., CondensedMenu]) -> None:
    cache = TodayMenuCache()
    cache.set(make_menu("03/04/2024"))

    cache.clear()

    assert cache.get() is None


def test_concurrent_readers_see_whole_snapshots(
    make_menu: Callable[..., CondensedMenu],
) -> None:
    cache = TodayMenuCache()
    first = make_menu("03/04/2024")
    second = make_menu("03/05/2024")
    cache.set(first)
    seen: list[object] = []

    def read() -> None:
        for _ in range(200):
            seen.append(cache.get())

    def write() -> None:
        for i in range(200):
            cache.set(second if i % 2 else first)

    threads = [threading.Thread(target=read) for _ in range(4)]
    threads.append(threading.Thread(target=write))
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert all(menu is first or menu is second for menu in seen)
