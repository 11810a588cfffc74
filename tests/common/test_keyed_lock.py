from __future__ import annotations

import threading
import time

from src.attendance_bot.attendance_bot.common.keyed_lock import KeyedLock


def test_same_key_is_serialized():
    locks = KeyedLock()
    inside = []
    overlaps = []

    def worker():
        with locks.hold(("U1", "2025-07-01")):
            if inside:
                overlaps.append(True)
            inside.append(1)
            time.sleep(0.01)
            inside.pop()

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert overlaps == []
    assert locks.active_keys() == 0


def test_different_keys_do_not_block_each_other():
    locks = KeyedLock()
    with locks.hold("a"):
        acquired = threading.Event()

        def other():
            with locks.hold("b"):
                acquired.set()

        t = threading.Thread(target=other)
        t.start()
        assert acquired.wait(1.0)
        t.join()
        assert locks.active_keys() == 1
