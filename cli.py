import os
import sys
import json
import logging
import argparse

import uvloop

# Add the current directory to Python path for imports
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from configuration import (
    BUCKET_NAME, DEFAULT_NUM_KEYS, DEFAULT_OBJECT_LENGTH, LOG_FORMAT, LOG_LEVEL, MAX_KEYS
)
from common.operations import Backend, Operation

# Set up logging (only if not already configured)
if not logging.root.handlers:
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
logger = logging.getLogger(__name__)


class AcceleratorBenchmarkCLI:
    """CLI interface for accelerator benchmarks and content checks."""

    def __init__(self):
        self.parser = self._create_parser()

    def _create_parser(self):
        """Create the argument parser."""
        parser = argparse.ArgumentParser(
            description='Accelerator vs origin benchmark CLI',
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
  # Put, delete, list and get against both backends
  python cli.py --operation all --bucket my-bucket

  # Time to first byte through the accelerator only
  python cli.py --operation get_ttfb --bucket my-bucket --backend accelerator

  # Put 5 objects of 10 bytes
  python cli.py --operation put --bucket my-bucket --num-keys 5 --object-length 10

  # Compare one object after the origin copy was removed
  python cli.py --operation compare --bucket my-bucket --key data.gz --bucket-clean
            """
        )

        parser.add_argument('--operation', choices=[op.value for op in Operation],
                            default=Operation.ALL.value,
                            help='Operation to run (default: all)')
        parser.add_argument('--bucket', type=str, default=BUCKET_NAME,
                            help='Bucket name (default: $BUCKET_NAME)')
        parser.add_argument('--key', type=str,
                            help='Object key for single-object operations')
        parser.add_argument('--num-keys', type=int, default=DEFAULT_NUM_KEYS,
                            help=f'Number of keys, at most {MAX_KEYS} (default: {DEFAULT_NUM_KEYS})')
        parser.add_argument('--object-length', type=int, default=DEFAULT_OBJECT_LENGTH,
                            help=f'Put payload length in bytes (default: {DEFAULT_OBJECT_LENGTH})')
        parser.add_argument('--backend', choices=[b.value for b in Backend],
                            help='Run against one backend only (default: both)')
        parser.add_argument('--bucket-clean', action='store_true',
                            help='Origin copy no longer exists; skip the origin fetch on compare')
        parser.add_argument('--log-level', type=str, default=None,
                            help='Override the log level')

        return parser

    @staticmethod
    def build_event(args) -> dict:
        """Translate parsed arguments into a request event."""
        event = {
            'operation': args.operation,
            'bucket': args.bucket,
            'numKeys': args.num_keys,
            'objectLength': args.object_length,
            'bucketClean': args.bucket_clean,
        }
        if args.key:
            event['key'] = args.key
        if args.backend:
            event['backend'] = args.backend
        return event

    def run(self, args=None):
        """Run the CLI with the given arguments."""
        if args is None:
            args = sys.argv[1:]

        parsed_args = self.parser.parse_args(args)
        if parsed_args.log_level:
            logging.getLogger().setLevel(parsed_args.log_level.upper())

        from handler import handle_request

        try:
            response = uvloop.run(handle_request(self.build_event(parsed_args)))
        except KeyboardInterrupt:
            logger.info("Operation interrupted by user")
            return 1

        print(json.dumps(response, indent=2, default=str))
        return 1 if 'errorMessage' in response else 0


def main():
    """Main entry point."""
    cli = AcceleratorBenchmarkCLI()
    sys.exit(cli.run())


if __name__ == '__main__':
    main()
