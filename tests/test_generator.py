import multiprocessing
import re
import signal
import time

import pytest

import ethvanity.worker
from ethvanity.core import generate_keypair
from ethvanity.generator import GeneratorStats, SearchResult, VanityGenerator, search

requires_fork = pytest.mark.skipif(
    "fork" not in multiprocessing.get_all_start_methods(),
    reason="patched functions only reach workers through fork",
)


def assert_valid_match(keypair, pattern):
    assert keypair.address[: len(pattern)].lower() == pattern
    assert re.fullmatch(r"[0-9a-fA-F]{40}", keypair.address)
    assert re.fullmatch(r"[0-9a-f]{64}", keypair.private_key)


def test_search_single_digit_four_workers():
    keypair = search("0", 4)
    assert_valid_match(keypair, "0")


@pytest.mark.parametrize("workers", [1, 8])
def test_search_worker_counts(workers):
    keypair = search("0", workers)
    assert_valid_match(keypair, "0")


def test_search_case_insensitive():
    keypair = search("a", 2, case_sensitive=False)
    assert keypair.address[0] in "aA"


def test_search_rejects_zero_workers():
    with pytest.raises(ValueError):
        search("0", 0)


def test_auto_worker_count():
    assert VanityGenerator("0").num_workers >= 1
    assert VanityGenerator("0", num_workers=3).num_workers == 3


def test_get_difficulty():
    gen = VanityGenerator("dead", case_sensitive=False)
    assert gen.get_difficulty() == {
        "expected_attempts": 16 ** 4,
        "difficulty_description": "Seconds",
    }


def test_run_blocking_invokes_callbacks():
    gen = VanityGenerator("0", num_workers=2)
    seen = {"progress": [], "result": [], "complete": 0}
    gen.on_progress = seen["progress"].append
    gen.on_result = seen["result"].append

    def on_complete():
        seen["complete"] += 1

    gen.on_complete = on_complete

    result = gen.run_blocking(progress_interval=0.01)

    assert isinstance(result, SearchResult)
    assert_valid_match(result.keypair, "0")
    assert seen["result"] == [result]
    assert seen["complete"] == 1
    assert all(isinstance(s, GeneratorStats) for s in seen["progress"])
    assert not gen.is_running
    assert gen.result is result


def test_start_twice_raises():
    gen = VanityGenerator("g", num_workers=1)
    gen.start()
    try:
        with pytest.raises(RuntimeError):
            gen.start()
    finally:
        gen.stop()


def test_stop_cancels_unreachable_search():
    gen = VanityGenerator("g", num_workers=2)
    gen.start()
    time.sleep(0.2)
    stats = gen.poll()
    assert stats.is_running
    assert not stats.found

    assert gen.stop() is None
    assert not gen.is_running
    assert not gen.poll().is_running


def test_generator_can_be_restarted():
    gen = VanityGenerator("0", num_workers=1)
    gen.start()
    first = gen.wait()
    gen.start()
    second = gen.wait()
    assert first is not None and second is not None
    assert first.keypair != second.keypair


class SearchTimeout(Exception):
    pass


@pytest.mark.skipif(not hasattr(signal, "SIGALRM"), reason="needs SIGALRM")
def test_search_reaps_workers_when_interrupted():
    def on_alarm(signum, frame):
        raise SearchTimeout()

    previous = signal.signal(signal.SIGALRM, on_alarm)
    try:
        signal.alarm(1)
        with pytest.raises(SearchTimeout):
            search("g", 2)
    finally:
        signal.alarm(0)
        signal.signal(signal.SIGALRM, previous)

    assert multiprocessing.active_children() == []


def _no_entropy():
    raise OSError("random source unavailable")


@requires_fork
def test_all_workers_failing_raises(monkeypatch):
    monkeypatch.setattr(ethvanity.worker, "generate_keypair", _no_entropy)

    gen = VanityGenerator("0", num_workers=2, start_method="fork")
    gen.start()
    with pytest.raises(RuntimeError):
        gen.wait()
    assert not gen.is_running


def _first_worker_fails():
    if multiprocessing.current_process().name == "ethvanity-worker-0":
        raise OSError("random source unavailable")
    return generate_keypair()


@requires_fork
def test_search_survives_one_failing_worker(monkeypatch):
    monkeypatch.setattr(ethvanity.worker, "generate_keypair", _first_worker_fails)

    gen = VanityGenerator("0", num_workers=3, start_method="fork")
    gen.start()
    workers = list(gen._workers)
    result = gen.wait()

    assert_valid_match(result.keypair, "0")
    assert workers[0].exitcode == 1
