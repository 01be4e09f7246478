"""
Difficulty and time estimates for progress reporting.

Callers feed these with the observed rate from the generator; the search
itself never consults them.
"""

from typing import Union

HEX_SYMBOLS = 16
# Rough effective alphabet when checksum casing must also match.
CASED_SYMBOLS = 22


def difficulty(pattern: Union[str, int], case_sensitive: bool) -> int:
    """Expected number of attempts for a prefix of this length.

    Args:
        pattern: The pattern itself or its length.
        case_sensitive: Whether checksum casing has to match too.
    """
    length = pattern if isinstance(pattern, int) else len(pattern)
    base = CASED_SYMBOLS if case_sensitive else HEX_SYMBOLS
    return base ** length


def estimated_total_attempts(throughput: int, expected: int) -> int:
    """Expected search duration in seconds for a given rate (keys/sec).

    Returns 0 when the rate is still unknown.
    """
    if throughput == 0:
        return 0
    return expected // throughput


def time_remaining(estimated_total: int, elapsed: int) -> int:
    if elapsed > estimated_total:
        return 0
    return estimated_total - elapsed


def describe_difficulty(expected: int) -> str:
    if expected < 100:
        return "Instant"
    elif expected < 100_000:
        return "Seconds"
    elif expected < 10_000_000:
        return "Minutes"
    elif expected < 1_000_000_000:
        return "Hours"
    elif expected < 100_000_000_000:
        return "Days"
    else:
        return "Weeks+ (consider a shorter pattern)"
