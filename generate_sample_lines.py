#!/usr/bin/env python3
"""
Sample dataset generator for line shuffler benchmarks.

Writes a large newline-delimited file of numbered, variable-length records.
Every line is unique (it starts with its line number), so the output of a
shuffle run can be checked for lost or duplicated lines by sorting.
Files ending in .gz or .bz2 are written compressed.
"""

import argparse
import bz2
import gzip
import random
import sys

# Large buffer for efficient streaming writes
BUFFER_SIZE = 1024 * 1024  # 1MB

ALPHABET = "abcdefghijklmnopqrstuvwxyz0123456789"


def open_output(output_path: str):
    """Open output_path for binary writing, compressing by extension."""
    if output_path.endswith(".gz"):
        return gzip.open(output_path, "wb")
    if output_path.endswith(".bz2"):
        return bz2.open(output_path, "wb")
    return open(output_path, "wb", buffering=BUFFER_SIZE)


def generate_line(number: int, min_length: int, max_length: int, rng: random.Random) -> bytes:
    """Build one record: '<number>\\t<random payload>\\n'."""
    length = rng.randint(min_length, max_length)
    payload = "".join(rng.choices(ALPHABET, k=length))
    return f"{number}\t{payload}\n".encode("ascii")


def generate_sample_dataset(
    output_path: str,
    num_lines: int,
    min_length: int,
    max_length: int,
    seed: int,
) -> int:
    """
    Generate a sample dataset, streaming output line-by-line.

    Args:
        output_path: Path to output file.
        num_lines: Number of lines to write.
        min_length: Minimum payload length per line.
        max_length: Maximum payload length per line.
        seed: Random seed for reproducibility.

    Returns:
        Total number of bytes written (uncompressed).
    """
    rng = random.Random(seed)
    total_bytes = 0

    with open_output(output_path) as f:
        for number in range(num_lines):
            line = generate_line(number, min_length, max_length, rng)
            f.write(line)
            total_bytes += len(line)

            # Progress indicator every million lines
            if (number + 1) % 1_000_000 == 0:
                print(f"  Generated {number + 1:,}/{num_lines:,} lines...", file=sys.stderr)

    return total_bytes


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Generate a sample line dataset for shuffling.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Generate ~1 GB of lines
  python generate_sample_lines.py --out data/sample.txt --lines 12000000

  # Generate a gzip-compressed input
  python generate_sample_lines.py --out data/sample.txt.gz --lines 1000000
""",
    )

    parser.add_argument(
        "--out",
        required=True,
        help="Output file path (.gz/.bz2 for compressed output)",
    )
    parser.add_argument(
        "--lines",
        type=int,
        default=1_000_000,
        help="Number of lines (default: 1000000)",
    )
    parser.add_argument(
        "--min-length",
        type=int,
        default=40,
        help="Minimum payload length (default: 40)",
    )
    parser.add_argument(
        "--max-length",
        type=int,
        default=120,
        help="Maximum payload length (default: 120)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=1,
        help="Random seed for reproducibility (default: 1)",
    )

    args = parser.parse_args()

    # Validate
    if args.lines < 0:
        parser.error("--lines must not be negative")
    if args.min_length < 0 or args.max_length < args.min_length:
        parser.error("--max-length must be at least --min-length, both non-negative")

    print(f"Output: {args.out}", file=sys.stderr)
    print(f"Lines: {args.lines:,}", file=sys.stderr)
    print(f"Payload length: {args.min_length}-{args.max_length}", file=sys.stderr)
    print(f"Seed: {args.seed}", file=sys.stderr)

    total_bytes = generate_sample_dataset(
        output_path=args.out,
        num_lines=args.lines,
        min_length=args.min_length,
        max_length=args.max_length,
        seed=args.seed,
    )

    print(f"Done! Wrote {args.lines:,} lines ({total_bytes:,} bytes) to {args.out}", file=sys.stderr)


if __name__ == "__main__":
    main()
