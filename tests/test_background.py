import threading

from docinbox.services.background import BackgroundRunner


def test_duplicate_key_is_rejected_while_pending() -> None:
    runner = BackgroundRunner(max_workers=1, max_pending=4)
    gate = threading.Event()
    calls: list[str] = []

    def _work(name: str) -> None:
        gate.wait(5)
        calls.append(name)

    first = runner.submit("k1", _work, "first")
    second = runner.submit("k1", _work, "second")
    assert first is not None
    assert second is None
    assert runner.is_pending("k1")

    gate.set()
    first.result(timeout=5)
    runner.shutdown()

    assert calls == ["first"]
    assert not runner.is_pending("k1")


def test_full_queue_rejects_new_keys() -> None:
    runner = BackgroundRunner(max_workers=1, max_pending=2)
    gate = threading.Event()

    assert runner.submit("a", gate.wait, 5) is not None
    assert runner.submit("b", gate.wait, 5) is not None
    assert runner.submit("c", gate.wait, 5) is None
    assert runner.pending_count() == 2

    gate.set()
    runner.shutdown()
    assert runner.pending_count() == 0


def test_failing_unit_is_contained_and_key_released(caplog) -> None:
    runner = BackgroundRunner(max_workers=1)

    def _boom() -> None:
        raise ValueError("boom")

    future = runner.submit("k", _boom)
    assert future is not None
    assert future.result(timeout=5) is None
    runner.shutdown()

    assert not runner.is_pending("k")
    assert "background unit k failed" in caplog.text


def test_submit_after_shutdown_returns_none() -> None:
    runner = BackgroundRunner(max_workers=1)
    runner.shutdown()

    assert runner.submit("k", lambda: None) is None
    assert not runner.is_pending("k")
