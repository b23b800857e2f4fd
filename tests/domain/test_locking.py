"""Unit tests for KeyedLocks."""

import threading
import time

import pytest

from wms.domain.exceptions import BusyError
from wms.domain.service.locking import KeyedLocks


class TestKeyedLocks:

    def test_yields_sorted_unique_keys(self):
        locks = KeyedLocks("test")
        with locks.hold(["b", "a", "b"], timeout=1.0) as ordered:
            assert ordered == ["a", "b"]

    def test_released_after_block(self):
        locks = KeyedLocks("test")
        with locks.hold(["a"], timeout=1.0):
            pass
        with locks.hold(["a"], timeout=0.1):
            pass

    def test_released_when_block_raises(self):
        locks = KeyedLocks("test")
        with pytest.raises(RuntimeError):
            with locks.hold(["a", "b"], timeout=1.0):
                raise RuntimeError("boom")
        with locks.hold(["a", "b"], timeout=0.1):
            pass

    def test_busy_when_held_elsewhere(self):
        locks = KeyedLocks("test")
        held = threading.Event()
        done = threading.Event()

        def holder():
            with locks.hold(["b"], timeout=1.0):
                held.set()
                done.wait(5)

        t = threading.Thread(target=holder)
        t.start()
        try:
            held.wait(5)
            with pytest.raises(BusyError, match="test lock 'b'"):
                with locks.hold(["a", "b"], timeout=0.05):
                    pass
            # "a" was taken first and must have been let go
            with locks.hold(["a"], timeout=0.1):
                pass
        finally:
            done.set()
            t.join()

    def test_disjoint_keys_do_not_contend(self):
        locks = KeyedLocks("test")
        with locks.hold(["a"], timeout=1.0):
            result = []

            def other():
                with locks.hold(["b"], timeout=0.5):
                    result.append("ok")

            t = threading.Thread(target=other)
            t.start()
            t.join()
        assert result == ["ok"]

    def test_idle_keys_are_forgotten(self):
        locks = KeyedLocks("test")
        for key in map(str, range(100)):
            with locks.hold([key], timeout=1.0):
                assert len(locks) == 1
        assert len(locks) == 0

    def test_failed_acquire_forgets_keys(self):
        locks = KeyedLocks("test")
        with locks.hold(["b"], timeout=1.0):
            result = []

            def other():
                try:
                    with locks.hold(["a", "b"], timeout=0.05):
                        pass
                except BusyError:
                    result.append(len(locks))

            t = threading.Thread(target=other)
            t.start()
            t.join()
        assert result == [1]
        assert len(locks) == 0

    def test_no_timeout_waits_for_holder(self):
        locks = KeyedLocks("test")
        held = threading.Event()

        def holder():
            with locks.hold(["a"], timeout=1.0):
                held.set()
                time.sleep(0.2)

        t = threading.Thread(target=holder)
        t.start()
        held.wait(5)
        with locks.hold(["a"], timeout=None) as ordered:
            assert ordered == ["a"]
        t.join()
        assert len(locks) == 0
