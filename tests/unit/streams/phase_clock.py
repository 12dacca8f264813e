"""Unit tests for the phase-wide first-connect start time."""

from __future__ import annotations

import itertools
import threading

from msak.streams import PhaseClock


def test_unclaimed_clock_reports_zero_elapsed() -> None:
    clock = PhaseClock()
    assert clock.start is None
    assert clock.elapsed(100.0) == 0.0


def test_start_is_first_claim_for_every_permutation() -> None:
    timestamps = [10.0, 10.5, 11.25, 12.0]
    for order in itertools.permutations(timestamps):
        clock = PhaseClock()
        returned = [clock.claim(ts) for ts in order]
        assert clock.start == order[0]
        assert returned == [order[0]] * len(order)


def test_elapsed_is_measured_from_start() -> None:
    clock = PhaseClock()
    clock.claim(5.0)
    assert clock.elapsed(7.5) == 2.5
    assert clock.elapsed(4.0) == 0.0


def test_concurrent_claims_agree_on_one_start() -> None:
    clock = PhaseClock()
    barrier = threading.Barrier(8)
    results: list[float] = []
    lock = threading.Lock()

    def claim(ts: float) -> None:
        barrier.wait()
        value = clock.claim(ts)
        with lock:
            results.append(value)

    threads = [threading.Thread(target=claim, args=(float(i),)) for i in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    assert len(set(results)) == 1
    assert results[0] == clock.start
