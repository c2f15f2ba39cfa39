from __future__ import annotations

from ledgerbook.navigation import NavigationDepth


def test_increment_decrement_clamps_at_zero() -> None:
    nav = NavigationDepth()
    assert nav.increment() == 1
    assert nav.increment() == 2
    assert nav.decrement() == 1
    assert nav.decrement() == 0
    assert nav.decrement() == 0
    assert nav.depth == 0


def test_subscribers_are_notified_until_unsubscribed() -> None:
    nav = NavigationDepth()
    seen: list[int] = []
    unsubscribe = nav.subscribe(seen.append)

    nav.increment()
    nav.increment()
    nav.decrement()
    unsubscribe()
    nav.increment()

    assert seen == [1, 2, 1]
    assert nav.depth == 2


def test_instances_are_independent() -> None:
    a, b = NavigationDepth(), NavigationDepth(initial=3)
    a.increment()
    assert (a.depth, b.depth) == (1, 3)
