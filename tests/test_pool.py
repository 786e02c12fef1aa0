from __future__ import annotations

import random
import threading
import time
import unittest

from fastls.fs.pool import MAX_WORKERS, PoolClosedError, WorkerPool, default_worker_count
from fastls.runtime_logging import configure_runtime_logging


class WorkerPoolTests(unittest.TestCase):
    def setUp(self) -> None:
        configure_runtime_logging(level="off")

    def test_more_tasks_than_capacity_all_complete_once(self) -> None:
        seen: list[int] = []
        lock = threading.Lock()

        def task(value: int) -> int:
            time.sleep(random.random() / 1000)
            with lock:
                seen.append(value)
            return value * 2

        with WorkerPool(3, queue_factor=1) as pool:
            count = pool.capacity * 10
            outcomes = pool.run_all(task, range(count))

        self.assertEqual(len(outcomes), count)
        self.assertEqual([outcome.value for outcome in outcomes], [value * 2 for value in range(count)])
        self.assertEqual(sorted(seen), list(range(count)))

    def test_concurrency_never_exceeds_worker_count(self) -> None:
        running = 0
        peak = 0
        lock = threading.Lock()

        def task(_: int) -> None:
            nonlocal running, peak
            with lock:
                running += 1
                peak = max(peak, running)
            time.sleep(0.002)
            with lock:
                running -= 1

        with WorkerPool(4) as pool:
            pool.run_all(task, range(40))

        self.assertLessEqual(peak, 4)
        self.assertGreaterEqual(peak, 1)

    def test_task_failure_is_captured_per_task(self) -> None:
        def task(value: int) -> int:
            if value % 3 == 0:
                raise RuntimeError(f"bad {value}")
            return value

        with WorkerPool(2) as pool:
            outcomes = pool.run_all(task, range(9))

        failed = [index for index, outcome in enumerate(outcomes) if not outcome.ok]
        self.assertEqual(failed, [0, 3, 6])
        self.assertEqual(str(outcomes[3].error), "bad 3")
        self.assertEqual(outcomes[4].value, 4)

    def test_shutdown_drains_queued_tasks(self) -> None:
        done: list[int] = []
        lock = threading.Lock()

        def task(value: int) -> None:
            time.sleep(0.001)
            with lock:
                done.append(value)

        pool = WorkerPool(2, queue_factor=4)
        for value in range(12):
            pool.submit(task, value)
        pool.shutdown()

        self.assertEqual(sorted(done), list(range(12)))
        self.assertTrue(pool.closed)
        self.assertEqual(pool.submitted, 12)

    def test_submit_after_shutdown_is_rejected(self) -> None:
        pool = WorkerPool(1)
        pool.shutdown()
        with self.assertRaises(PoolClosedError):
            pool.submit(lambda: None)

    def test_explicit_worker_count_is_capped(self) -> None:
        with WorkerPool(500, queue_factor=1) as pool:
            self.assertEqual(pool.max_workers, MAX_WORKERS)
            self.assertEqual(pool.capacity, MAX_WORKERS * 2)

    def test_zero_or_negative_workers_are_rejected(self) -> None:
        for count in (0, -3):
            with self.assertRaises(ValueError):
                WorkerPool(count)

    def test_default_worker_count_is_capped(self) -> None:
        self.assertLessEqual(default_worker_count(), MAX_WORKERS)
        self.assertEqual(default_worker_count(ceiling=1), 1)
        self.assertLessEqual(default_worker_count(workers_per_cpu=1000), MAX_WORKERS)


if __name__ == "__main__":
    unittest.main()
