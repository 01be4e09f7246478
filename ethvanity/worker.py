"""
Multiprocessing worker for vanity address generation.

IMPORTANT: This module must contain only top-level importable functions.
On macOS/Windows, multiprocessing uses 'spawn' which requires worker
targets to be importable by name from a module.
"""

import logging

from ethvanity.core import checksum_address, generate_keypair
from ethvanity.matcher import MatchPattern

logger = logging.getLogger(__name__)


def claim_win(stop_event, claim_lock) -> bool:
    """Set stop_event if nobody has yet. Returns True for the caller that set it."""
    with claim_lock:
        if stop_event.is_set():
            return False
        stop_event.set()
        return True


def search_worker(
    pattern: MatchPattern,
    result_queue,
    stop_event,
    claim_lock,
    counter,
    report_every: int = 500,
):
    """Worker process: generate keys in a tight loop and check for matches.

    Runs until a match is found or stop_event is set. The event is polled
    before every attempt.

    Args:
        pattern: MatchPattern (will be compiled locally).
        result_queue: multiprocessing.Queue - receives (private_key, address) on match.
        stop_event: multiprocessing.Event - signals all workers to stop.
        claim_lock: multiprocessing.Lock - makes test-and-set of stop_event atomic.
        counter: multiprocessing.Value('Q') - shared total-keys-checked counter.
        report_every: Attempts between counter updates.
    """
    compiled = pattern.compile()
    local_count = 0
    logger.debug("worker started, pattern=%r", pattern.pattern)

    try:
        while not stop_event.is_set():
            keypair = generate_keypair()
            address = checksum_address(keypair.address)
            local_count += 1

            if compiled.matches(address):
                if claim_win(stop_event, claim_lock):
                    logger.debug("worker claimed match %s", address)
                    result_queue.put((keypair.private_key, address))
                break

            if local_count >= report_every:
                with counter.get_lock():
                    counter.value += local_count
                local_count = 0
    finally:
        if local_count > 0:
            with counter.get_lock():
                counter.value += local_count
