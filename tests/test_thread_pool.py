import threading

import pytest

from voxstream.thread_pool import ThreadPool


def test_runs_posted_jobs():
    results = []
    threads = []
    lock = threading.Lock()
    done = threading.Semaphore(0)

    def job(i):
        with lock:
            results.append(i)
            threads.append(threading.current_thread())
        done.release()

    with ThreadPool(3) as pool:
        for i in range(20):
            pool.post(lambda i=i: job(i))
        for _ in range(20):
            assert done.acquire(timeout=5)
        workers = set(pool._workers)
    assert sorted(results) == list(range(20))
    assert len(workers) == 3
    assert all(t in workers for t in threads)
    assert threading.main_thread() not in threads


def test_single_worker_preserves_order():
    results = []
    finished = threading.Event()

    with ThreadPool(1) as pool:
        for i in range(10):
            pool.post(lambda i=i: results.append(i))
        pool.post(finished.set)
        assert finished.wait(timeout=5)
    assert results == list(range(10))


def test_workers_run_concurrently():
    n = 4
    barrier = threading.Barrier(n, timeout=5)
    passed = []
    lock = threading.Lock()
    done = threading.Semaphore(0)

    def job():
        barrier.wait()
        with lock:
            passed.append(True)
        done.release()

    with ThreadPool(n) as pool:
        for _ in range(n):
            pool.post(job)
        for _ in range(n):
            assert done.acquire(timeout=5)
    assert len(passed) == n


def test_failing_job_does_not_kill_worker():
    finished = threading.Event()

    def boom():
        raise RuntimeError("boom")

    with ThreadPool(1) as pool:
        pool.post(boom)
        pool.post(finished.set)
        assert finished.wait(timeout=5)


def test_post_after_shutdown_raises():
    pool = ThreadPool(2)
    pool.shutdown()
    with pytest.raises(RuntimeError):
        pool.post(lambda: None)


def test_shutdown_is_idempotent_and_joins_workers():
    pool = ThreadPool(2)
    pool.shutdown()
    pool.shutdown()
    assert all(not w.is_alive() for w in pool._workers)