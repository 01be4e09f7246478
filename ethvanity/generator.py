"""
Generator orchestrator: manages multiprocessing workers and result collection.
"""

import logging
import multiprocessing
import os
import queue
import time
from multiprocessing import Process, Queue, Event, Lock, Value
from dataclasses import dataclass
from typing import Callable, Optional

from ethvanity.core import KeyPair
from ethvanity.difficulty import (
    describe_difficulty,
    difficulty,
    estimated_total_attempts,
    time_remaining,
)
from ethvanity.matcher import MatchPattern
from ethvanity.worker import claim_win, search_worker

logger = logging.getLogger(__name__)


@dataclass
class SearchResult:
    """The winning key pair of a search."""
    keypair: KeyPair
    elapsed: float
    total_checked: int
    rate: float


@dataclass
class GeneratorStats:
    """Live stats during generation."""
    total_checked: int = 0
    elapsed: float = 0.0
    rate: float = 0.0
    is_running: bool = False
    found: bool = False
    estimated_seconds: int = 0
    seconds_left: int = 0


class VanityGenerator:
    """Orchestrates parallel vanity address generation.

    Usage:
        gen = VanityGenerator(pattern="dead", num_workers=4)
        gen.on_progress = lambda stats: print(f"{stats.rate:.0f} keys/sec")
        gen.on_result = lambda result: print(f"Found: {result.keypair.address}")
        gen.start()
        # ... poll periodically ...
        result = gen.wait()

    The pattern is not validated here; run matcher.validate_hex_pattern
    first. An impossible pattern keeps the workers busy until stop().
    start_method picks the multiprocessing context ("fork", "spawn", ...);
    None uses the platform default.
    """

    def __init__(
        self,
        pattern: str,
        num_workers: int = 0,
        case_sensitive: bool = True,
        start_method: Optional[str] = None,
    ):
        self.pattern_str = pattern
        self.match_pattern = MatchPattern(pattern=pattern, case_sensitive=case_sensitive)
        self.num_workers = num_workers if num_workers > 0 else max(1, (os.cpu_count() or 2) - 1)
        self.expected_attempts = difficulty(pattern, case_sensitive)
        self._ctx = multiprocessing.get_context(start_method)

        # Callbacks
        self.on_progress: Optional[Callable[[GeneratorStats], None]] = None
        self.on_result: Optional[Callable[[SearchResult], None]] = None
        self.on_complete: Optional[Callable[[], None]] = None

        # Internal state
        self._workers: list[Process] = []
        self._result_queue: Optional[Queue] = None
        self._stop_event: Optional[Event] = None
        self._claim_lock: Optional[Lock] = None
        self._counter: Optional[Value] = None
        self._start_time: float = 0
        self._result: Optional[SearchResult] = None
        self._cancelled = False
        self._is_running = False

    def get_difficulty(self) -> dict:
        """Get difficulty estimate for the current pattern."""
        return {
            "expected_attempts": self.expected_attempts,
            "difficulty_description": describe_difficulty(self.expected_attempts),
        }

    def start(self) -> None:
        """Start worker processes (non-blocking)."""
        if self._is_running:
            raise RuntimeError("Generator is already running")

        self._result_queue = self._ctx.Queue()
        self._stop_event = self._ctx.Event()
        self._claim_lock = self._ctx.Lock()
        self._counter = self._ctx.Value("Q", 0)
        self._start_time = time.time()
        self._result = None
        self._cancelled = False
        self._workers = []
        self._is_running = True

        for i in range(self.num_workers):
            p = self._ctx.Process(
                target=search_worker,
                args=(
                    self.match_pattern,
                    self._result_queue,
                    self._stop_event,
                    self._claim_lock,
                    self._counter,
                ),
                daemon=True,
                name=f"ethvanity-worker-{i}",
            )
            p.start()
            self._workers.append(p)

        logger.info(
            "started %d workers for pattern %r (case_sensitive=%s)",
            self.num_workers, self.pattern_str, self.match_pattern.case_sensitive,
        )

    def _make_result(self, private_key: str, address: str) -> SearchResult:
        elapsed = time.time() - self._start_time
        total = self._counter.value
        return SearchResult(
            keypair=KeyPair(private_key=private_key, address=address),
            elapsed=elapsed,
            total_checked=total,
            rate=total / elapsed if elapsed > 0 else 0,
        )

    def _collect(self, timeout: Optional[float] = 0) -> None:
        """Move the winner from the queue into self._result.

        timeout=0 polls, None blocks until the item arrives.
        """
        if self._result is not None:
            return
        try:
            if timeout == 0:
                item = self._result_queue.get_nowait()
            else:
                item = self._result_queue.get(timeout=timeout)
        except queue.Empty:
            return

        self._result = self._make_result(*item)
        logger.info("match found: %s", self._result.keypair.address)
        if self.on_result:
            self.on_result(self._result)

    def poll(self) -> GeneratorStats:
        """Poll for progress and results. Call periodically from UI/CLI."""
        stats = GeneratorStats()

        if not self._is_running:
            stats.found = self._result is not None
            return stats

        self._collect()

        elapsed = time.time() - self._start_time
        total = self._counter.value

        stats.total_checked = total
        stats.elapsed = elapsed
        stats.rate = total / elapsed if elapsed > 0 else 0
        stats.found = self._result is not None
        stats.estimated_seconds = estimated_total_attempts(int(stats.rate), self.expected_attempts)
        stats.seconds_left = time_remaining(stats.estimated_seconds, int(elapsed))
        stats.is_running = any(w.is_alive() for w in self._workers)

        if self.on_progress:
            self.on_progress(stats)

        return stats

    def _finish(self) -> None:
        self._workers = []
        self._is_running = False
        logger.debug("search finished, result=%s", self._result is not None)
        if self.on_complete:
            self.on_complete()

    def wait(self) -> Optional[SearchResult]:
        """Block until every worker has exited, then return the winner.

        Returns None only if the search was cancelled with stop().
        Raises RuntimeError if all workers died without finding a match.
        """
        if not self._is_running:
            return self._result

        for w in self._workers:
            w.join()

        if not self._stop_event.is_set():
            codes = [w.exitcode for w in self._workers]
            self._finish()
            raise RuntimeError(f"All workers exited without a match (exit codes: {codes})")

        if not self._cancelled:
            # The winner set the flag before putting, and has exited since.
            self._collect(timeout=None)

        self._finish()
        return self._result

    def stop(self) -> Optional[SearchResult]:
        """Stop all workers and return the winner, if one was found first."""
        if not self._is_running:
            return self._result

        self._cancelled = claim_win(self._stop_event, self._claim_lock)
        if self._cancelled:
            logger.info("search cancelled")

        for w in self._workers:
            w.join(timeout=2.0)
            if w.is_alive():
                w.terminate()

        if not self._cancelled:
            self._collect(timeout=2.0)

        self._finish()
        return self._result

    @property
    def result(self) -> Optional[SearchResult]:
        return self._result

    @property
    def is_running(self) -> bool:
        return self._is_running

    def run_blocking(self, progress_interval: float = 0.5) -> Optional[SearchResult]:
        """Run synchronously with periodic progress callbacks. For CLI use."""
        self.start()
        try:
            while self.poll().is_running:
                time.sleep(progress_interval)
        except KeyboardInterrupt:
            return self.stop()
        return self.wait()


def search(pattern: str, workers: int, case_sensitive: bool = True) -> KeyPair:
    """Find a key pair whose checksummed address starts with pattern.

    Spawns exactly `workers` processes, joins all of them, and returns the
    single winning key pair. Blocks indefinitely for unreachable patterns;
    check them with matcher.is_possible_pattern beforehand.
    """
    if workers < 1:
        raise ValueError(f"workers must be a positive integer, got {workers}")

    gen = VanityGenerator(pattern, num_workers=workers, case_sensitive=case_sensitive)
    gen.start()
    try:
        return gen.wait().keypair
    except BaseException:
        gen.stop()
        raise
