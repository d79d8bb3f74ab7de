import threading
import time

from contactbook.store.rwlock import ReadWriteLock


def test_readers_share_the_lock() -> None:
    lock = ReadWriteLock()
    both_inside = threading.Barrier(2, timeout=2)
    errors: list[BaseException] = []

    def reader() -> None:
        with lock.read():
            try:
                both_inside.wait()
            except threading.BrokenBarrierError as exc:
                errors.append(exc)

    threads = [threading.Thread(target=reader) for _ in range(2)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=5)

    assert errors == []


def test_writer_excludes_readers() -> None:
    lock = ReadWriteLock()
    reader_done = threading.Event()

    def reader() -> None:
        with lock.read():
            reader_done.set()

    with lock.write():
        thread = threading.Thread(target=reader)
        thread.start()
        assert not reader_done.wait(timeout=0.2)

    thread.join(timeout=5)
    assert reader_done.is_set()


def test_writer_waits_for_active_reader() -> None:
    lock = ReadWriteLock()
    writer_done = threading.Event()

    def writer() -> None:
        with lock.write():
            writer_done.set()

    with lock.read():
        thread = threading.Thread(target=writer)
        thread.start()
        assert not writer_done.wait(timeout=0.2)

    thread.join(timeout=5)
    assert writer_done.is_set()


def test_abandoned_writer_wakes_parked_readers() -> None:
    lock = ReadWriteLock()
    real_wait = lock._cond.wait
    give_up = threading.Event()
    reader_in = threading.Event()
    writer_errors: list[BaseException] = []

    def wait(timeout: float | None = None) -> bool:
        if threading.current_thread() is writer_thread:
            while not give_up.is_set():
                real_wait(0.05)
            raise RuntimeError("writer interrupted")
        return real_wait(timeout)

    lock._cond.wait = wait

    def writer() -> None:
        try:
            with lock.write():
                pass
        except RuntimeError as exc:
            writer_errors.append(exc)

    def reader() -> None:
        with lock.read():
            reader_in.set()

    with lock.read():
        writer_thread = threading.Thread(target=writer, daemon=True)
        writer_thread.start()
        while lock._writers_waiting == 0:
            time.sleep(0.01)

        reader_thread = threading.Thread(target=reader, daemon=True)
        reader_thread.start()
        assert not reader_in.wait(timeout=0.2)

        give_up.set()
        writer_thread.join(timeout=5)
        assert len(writer_errors) == 1
        # Still holding our read lock, so only the writer's exit can wake the reader.
        assert reader_in.wait(timeout=2)

    reader_thread.join(timeout=5)
    assert lock._writers_waiting == 0
