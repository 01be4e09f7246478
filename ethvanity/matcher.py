"""Pattern matching for vanity address search."""

from dataclasses import dataclass

HEX_DIGITS = "0123456789abcdef"
MAX_PATTERN_LENGTH = 40


def score(candidate: str, pattern: str) -> int:
    """Count positions where candidate and pattern agree, up to len(pattern).

    Comparison is exact, so case matters.
    """
    return sum(1 for a, b in zip(candidate, pattern) if a == b)


def is_full_match(candidate: str, pattern: str) -> bool:
    return score(candidate, pattern) == len(pattern)


def is_possible_pattern(pattern: str) -> bool:
    """True if every character of the pattern is a lowercase hex digit."""
    return all(c in HEX_DIGITS for c in pattern)


@dataclass(frozen=True)
class MatchPattern:
    """Immutable, picklable pattern specification for workers."""
    pattern: str
    case_sensitive: bool = True

    def compile(self) -> "CompiledPattern":
        """Return a CompiledPattern ready for fast matching in a worker."""
        if self.case_sensitive:
            return CompiledPattern(self.pattern, False)
        return CompiledPattern(self.pattern.lower(), True)


class CompiledPattern:
    """Worker-local pattern for fast matching."""

    __slots__ = ("pattern", "length", "_fold_case")

    def __init__(self, pattern: str, fold_case: bool):
        self.pattern = pattern
        self.length = len(pattern)
        self._fold_case = fold_case

    def matches(self, address: str) -> bool:
        """Test a 40-char checksummed address against this pattern."""
        if self._fold_case:
            address = address.lower()
        return score(address, self.pattern) == self.length


def validate_hex_pattern(pattern: str) -> str:
    """Validate a user-supplied pattern before starting a search.

    Strips surrounding whitespace and an optional 0x prefix.
    Returns the cleaned pattern.
    Raises ValueError for invalid patterns.
    """
    cleaned = pattern.strip().removeprefix("0x")
    if not cleaned:
        raise ValueError("Pattern cannot be empty.")
    if not is_possible_pattern(cleaned):
        raise ValueError(
            f"Pattern '{pattern}' contains invalid characters. "
            "Only 0-9 and lowercase a-f are valid."
        )
    if len(cleaned) > MAX_PATTERN_LENGTH:
        raise ValueError(
            f"Pattern length {len(cleaned)} exceeds maximum address length "
            f"of {MAX_PATTERN_LENGTH} hex chars."
        )
    return cleaned
