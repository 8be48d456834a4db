"""CLI interface for batch image generation."""
import sys
import argparse
import logging
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from plumage_batch import __version__
from plumage_batch.domain.exceptions import BatchError
from plumage_batch.domain.planning import plan_ranges
from plumage_batch.infrastructure.config import ConfigLoader, BatchConfig
from plumage_batch.application.factories import create_orchestrator_from_config
from plumage_batch.shared.logging import setup_logger, get_logger

DESCRIPTION = """\
Generates <count> images in <out-dir>.
$PARALLEL controls number of jobs.
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='plumage-batch',
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument('output_dir', nargs='?', type=Path, metavar='out-dir',
                        help='Output directory (or BATCH_OUTPUT_DIR)')
    parser.add_argument('count', nargs='?', type=int,
                        help='Number of images (or BATCH_COUNT)')
    parser.add_argument('--parallel', '-p', type=int, dest='parallelism',
                        help='Number of workers (default: $PARALLEL, else CPU count)')
    parser.add_argument('--config', type=Path, help='Config YAML file')
    parser.add_argument('--on-error', choices=['continue', 'abort'],
                        help='After a failed item: let other workers continue (default) or stop all')
    parser.add_argument('--producer', type=Path, dest='producer_path',
                        help='Path to the plumage executable')
    parser.add_argument('--converter', help='Converter command (default: convert)')
    parser.add_argument('--dry-run', action='store_true',
                        help='Print the worker ranges and exit')
    parser.add_argument('--verbose', '-v', action='store_true', help='Verbose')
    parser.add_argument('--log-file', type=Path, help='Also write logs to this file')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    return parser


def print_plan(config: BatchConfig) -> None:
    """Print one line per worker: index, range and size."""
    ranges = plan_ranges(config.count, config.resolve_parallelism())
    for index, item_range in enumerate(ranges):
        print(f"worker {index}: {item_range} ({len(item_range)} items)")


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    log_level = logging.DEBUG if args.verbose else logging.INFO
    setup_logger('plumage_batch', level=log_level, log_file=args.log_file)
    logger = get_logger('plumage_batch.cli')

    # Real environment wins over .env
    load_dotenv(dotenv_path=Path.cwd() / '.env', override=False)

    try:
        overrides = {
            'output_dir': args.output_dir,
            'count': args.count,
            'parallelism': args.parallelism,
            'on_error': args.on_error,
            'producer_path': args.producer_path,
            'converter': args.converter,
        }
        loader = ConfigLoader(config_path=args.config)

        settings = loader.load_partial(overrides)
        if 'output_dir' not in settings or 'count' not in settings:
            parser.print_usage(sys.stderr)
            return 1

        config = loader.build(settings)

        if args.dry_run:
            print_plan(config)
            return 0

        orchestrator = create_orchestrator_from_config(config)
        result = orchestrator.run(config.to_request())

        if result.success:
            return 0
        return 1

    except BatchError as e:
        logger.error(f"Error: {e}")
        return 1
    except KeyboardInterrupt:
        logger.warning("Interrupted")
        return 130


def entrypoint() -> None:
    sys.exit(main())


if __name__ == '__main__':
    entrypoint()
