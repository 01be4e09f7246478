"""
Command-line interface for ethvanity.

Usage:
    python -m ethvanity dead
    python -m ethvanity cafe --workers 8
    python -m ethvanity beef --case-insensitive
    python -m ethvanity 0000 --dry-run
"""

import argparse
import logging
import sys
from typing import Optional

from ethvanity import __version__
from ethvanity.generator import VanityGenerator, GeneratorStats
from ethvanity.matcher import validate_hex_pattern
from ethvanity.verify import verify_keypair


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ethvanity",
        description="Ethereum Vanity Address Generator",
        epilog=(
            "Examples:\n"
            "  ethvanity dead\n"
            "  ethvanity cafe --workers 8\n"
            "  ethvanity beef --case-insensitive\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version", action="version", version=f"ethvanity {__version__}"
    )
    parser.add_argument(
        "pattern", metavar="HEX",
        help="Find address starting with this hex string (0-9, a-f)",
    )
    parser.add_argument(
        "--workers", "-w", type=int, default=0,
        help="Number of worker processes (default: auto)",
    )
    parser.add_argument(
        "--case-insensitive", "-i", action="store_true",
        help="Ignore checksum casing when matching",
    )
    parser.add_argument(
        "--no-verify", action="store_true",
        help="Skip re-deriving the address from the found private key",
    )
    parser.add_argument(
        "--dry-run", action="store_true",
        help="Show difficulty estimate without searching",
    )
    parser.add_argument(
        "--quiet", "-q", action="store_true",
        help="Minimal output (just the address and private key)",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Enable debug logging",
    )

    return parser


def format_time(seconds: float) -> str:
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    elif seconds < 3600:
        return f"{seconds / 60:.1f}m"
    elif seconds < 86400:
        return f"{seconds / 3600:.1f}h"
    else:
        return f"{seconds / 86400:.1f}d"


def format_rate(rate: float) -> str:
    if rate < 1000:
        return f"{rate:.0f}"
    elif rate < 1_000_000:
        return f"{rate / 1000:.1f}K"
    else:
        return f"{rate / 1_000_000:.2f}M"


def progress_callback(stats: GeneratorStats, quiet: bool = False) -> None:
    if quiet:
        return
    remaining = format_time(stats.seconds_left) if stats.estimated_seconds else "?"
    sys.stderr.write(
        f"\r  Checked: {stats.total_checked:,}  |  "
        f"Rate: {format_rate(stats.rate)}/sec  |  "
        f"Elapsed: {format_time(stats.elapsed)}  |  "
        f"Left: ~{remaining}  "
    )
    sys.stderr.flush()


def main(argv: Optional[list[str]] = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(processName)s %(name)s %(levelname)s: %(message)s",
    )

    try:
        pattern = validate_hex_pattern(args.pattern)
        if args.workers < 0:
            raise ValueError("Worker count cannot be negative.")
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    gen = VanityGenerator(
        pattern=pattern,
        num_workers=args.workers,
        case_sensitive=not args.case_insensitive,
    )
    difficulty_info = gen.get_difficulty()

    if not args.quiet:
        print(f"ethvanity v{__version__}")
        print(f"  Pattern:    0x{pattern}")
        print(f"  Case:       {'insensitive' if args.case_insensitive else 'checksum'}")
        print(f"  Workers:    {gen.num_workers}")
        print(f"  Expected:   ~{difficulty_info['expected_attempts']:,} attempts")
        print(f"  Difficulty: {difficulty_info['difficulty_description']}")
        print()

    if args.dry_run:
        return 0

    gen.on_progress = lambda stats: progress_callback(stats, args.quiet)

    if not args.quiet:
        print("Searching...")

    result = gen.run_blocking(progress_interval=0.5)

    if not args.quiet:
        sys.stderr.write("\n")

    if result is None:
        print("No result found (search was interrupted).", file=sys.stderr)
        return 1

    keypair = result.keypair

    if args.quiet:
        print(f"0x{keypair.address}")
        print(keypair.private_key)
    else:
        print(f"\n{'=' * 60}")
        print("  MATCH FOUND")
        print(f"  Address:      0x{keypair.address}")
        print(f"  Private Key:  {keypair.private_key}")
        print(f"  Time:         {format_time(result.elapsed)}")
        print(f"  Keys Checked: {result.total_checked:,}")
        print(f"  Rate:         {format_rate(result.rate)}/sec")
        print(f"{'=' * 60}")

    if not args.no_verify:
        v = verify_keypair(keypair.private_key, keypair.address)
        if not v["address_match"] or not v["checksum_match"]:
            print(f"Verification FAILED: {v['error']}", file=sys.stderr)
            return 1
        if not args.quiet:
            print("\n  Verification: PASS")

    return 0
