"""
Unit Tests for Sync Queue

Tests bounded put/get, close semantics and statistics.

Author: photoutils Project
License: MIT
"""

import threading
import pytest

from photoutils.core.sync_queue import QueueClosedError, SyncQueue


class TestSyncQueue:
    """Test suite for the work queue."""

    def test_items_then_end_marker(self):
        """Test that pending items are delivered before the close marker."""
        work_queue = SyncQueue(max_size=5, consumers=1)
        work_queue.put("a")
        work_queue.put("b")
        work_queue.close()

        assert work_queue.get() == "a"
        assert work_queue.get() == "b"
        assert work_queue.get() is None

    def test_every_consumer_sees_close(self):
        """Test that each consumer receives exactly one end marker."""
        work_queue = SyncQueue(max_size=3, consumers=3)
        work_queue.close()

        assert [work_queue.get() for _ in range(3)] == [None, None, None]
        assert work_queue.size() == 0

    def test_put_after_close_raises(self):
        """Test that a closed queue rejects new work."""
        work_queue = SyncQueue(max_size=1, consumers=1)
        work_queue.close()

        with pytest.raises(QueueClosedError):
            work_queue.put("late")

    def test_close_is_idempotent(self):
        """Test that closing twice adds no extra markers."""
        work_queue = SyncQueue(max_size=2, consumers=1)
        work_queue.close()
        work_queue.close()

        assert work_queue.size() == 1

    def test_put_blocks_when_full(self):
        """Test backpressure on the producer."""
        work_queue = SyncQueue(max_size=1, consumers=1)
        work_queue.put("first")
        done = threading.Event()

        def producer():
            work_queue.put("second")
            done.set()

        thread = threading.Thread(target=producer, daemon=True)
        thread.start()

        assert not done.wait(0.2)
        assert work_queue.get() == "first"
        assert done.wait(5)
        assert work_queue.get() == "second"
        thread.join(5)

    def test_each_item_consumed_once(self):
        """Test that concurrent consumers never share an item."""
        work_queue = SyncQueue(max_size=4, consumers=4)
        seen = []
        lock = threading.Lock()

        def consumer():
            while True:
                item = work_queue.get()
                if item is None:
                    return
                with lock:
                    seen.append(item)

        threads = [threading.Thread(target=consumer) for _ in range(4)]
        for thread in threads:
            thread.start()
        for i in range(200):
            work_queue.put(i)
        work_queue.close()
        for thread in threads:
            thread.join(10)

        assert sorted(seen) == list(range(200))

    def test_statistics(self):
        """Test enqueue and processing counters."""
        work_queue = SyncQueue(max_size=3, consumers=1)
        work_queue.put("a")
        work_queue.put("b")
        work_queue.get()

        stats = work_queue.get_statistics()

        assert stats["total_enqueued"] == 2
        assert stats["total_processed"] == 1
        assert stats["max_size"] == 3
        assert stats["closed"] is False

    def test_invalid_sizes(self):
        """Test that empty bounds are rejected."""
        with pytest.raises(ValueError):
            SyncQueue(max_size=0, consumers=1)
        with pytest.raises(ValueError):
            SyncQueue(max_size=1, consumers=0)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
