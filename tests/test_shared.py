from __future__ import annotations

import threading

import pytest

from living_hash import LivingHash, SharedLivingHash, SpongeConfiguration


def test_shared_engine_serializes_concurrent_calls() -> None:
    shared = SharedLivingHash()
    barrier = threading.Barrier(8)

    def worker(seed: int) -> None:
        barrier.wait()
        for i in range(5):
            shared.absorb(bytes([seed, i]))
            shared.squeeze(40)

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    trace = shared.get_trace()
    assert len(trace) == 80
    assert [record.step_index for record in trace] == list(range(80))
    previous = (0,) * 25
    for record in trace:
        assert record.state_diff == tuple(a ^ b for a, b in zip(previous, record.resulting_state))
        previous = record.resulting_state


def test_locked_yields_the_wrapped_engine() -> None:
    engine = LivingHash()
    shared = SharedLivingHash(engine)

    with shared.locked() as inner:
        inner.absorb(b"x")
        inner.squeeze(4)

    assert inner is engine
    assert shared.get_step(1).input_bytes == engine.get_step(1).input_bytes
    assert shared.get_step(2) is None
    assert shared.trace_commitment().step_count == 2


def test_shared_accepts_configuration() -> None:
    shared = SharedLivingHash(config=SpongeConfiguration(576, 1024))
    assert shared.config.rate_bytes == 72


def test_shared_rejects_engine_and_configuration() -> None:
    with pytest.raises(ValueError):
        SharedLivingHash(LivingHash(), SpongeConfiguration())


def test_locked_section_blocks_concurrent_absorb() -> None:
    shared = SharedLivingHash()
    started = threading.Event()
    finished = threading.Event()

    def absorb() -> None:
        started.set()
        shared.absorb(b"late")
        finished.set()

    with shared.locked() as engine:
        engine.absorb(b"first")
        worker = threading.Thread(target=absorb)
        worker.start()
        assert started.wait(timeout=5)
        assert not finished.wait(timeout=0.2)
        engine.squeeze(32)
        assert engine.step_count == 2

    worker.join(timeout=5)
    assert finished.is_set()
    phases = [record.phase.value for record in shared.get_trace()]
    assert phases == ["absorb", "squeeze", "absorb"]
    assert shared.get_step(2).input_bytes.startswith(b"late")
