"""Command-line interface for line shuffler."""

import argparse
import logging
import sys

from line_shuffler.errors import ConfigError, ShuffleInterrupted
from line_shuffler.partition.types import DEFAULT_PARTITION_COUNT
from line_shuffler.progress.types import DEFAULT_PROGRESS_INTERVAL
from line_shuffler.runner.run import main_shuffle

logger = logging.getLogger("line_shuffler")

# Exit status for a run cancelled with Ctrl-C (128 + SIGINT).
EXIT_INTERRUPTED = 130


def configure_logging(level: int = logging.INFO) -> None:
    """Configure logging to write to stderr."""
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return number


def positive_float(value: str) -> float:
    number = float(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {value}")
    return number


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        prog="line-shuffler",
        description="Shuffle the lines of a large file into randomly ordered partitions.",
    )

    parser.add_argument(
        "input_file",
        help="Path to the input file (.gz and .bz2 are decompressed on the fly)",
    )

    parser.add_argument(
        "-c",
        "--count",
        type=positive_int,
        default=DEFAULT_PARTITION_COUNT,
        help=f"Number of output partitions (default: {DEFAULT_PARTITION_COUNT})",
    )

    parser.add_argument(
        "-o",
        "--output-directory",
        default=".",
        help="Directory for the shuffled partitions (default: current directory)",
    )

    parser.add_argument(
        "-j",
        "--workers",
        type=positive_int,
        default=None,
        help="Partitions shuffled in parallel (default: number of CPUs)",
    )

    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for a reproducible shuffle",
    )

    progress = parser.add_mutually_exclusive_group()
    progress.add_argument(
        "--interval",
        type=positive_float,
        default=DEFAULT_PROGRESS_INTERVAL,
        help=f"Seconds between progress updates (default: {DEFAULT_PROGRESS_INTERVAL})",
    )
    progress.add_argument(
        "--no-progress",
        action="store_true",
        help="Do not print progress updates",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Logging level (default: INFO)",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """Entry point for CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        # Configure logging based on --log-level
        configure_logging(getattr(logging, args.log_level))
        main_shuffle(
            input_path=args.input_file,
            partition_count=args.count,
            output_directory=args.output_directory,
            workers=args.workers,
            seed=args.seed,
            progress_interval=None if args.no_progress else args.interval,
        )
    except ConfigError as exc:
        logger.error("%s", exc)
        return 2
    except ShuffleInterrupted as exc:
        logger.error("INTERRUPTED: %s", exc)
        return EXIT_INTERRUPTED
    except KeyboardInterrupt:
        logger.error("INTERRUPTED")
        return EXIT_INTERRUPTED
    except OSError as exc:
        logger.error("%s", exc)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
