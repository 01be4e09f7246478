"""ethvanity - Ethereum vanity address generator."""

__version__ = "0.1.0"

from ethvanity.core import KeyPair, checksum_address, generate_keypair
from ethvanity.difficulty import difficulty, estimated_total_attempts, time_remaining
from ethvanity.generator import VanityGenerator, search
from ethvanity.matcher import is_possible_pattern, score

__all__ = [
    "KeyPair",
    "VanityGenerator",
    "checksum_address",
    "difficulty",
    "estimated_total_attempts",
    "generate_keypair",
    "is_possible_pattern",
    "score",
    "search",
    "time_remaining",
]
