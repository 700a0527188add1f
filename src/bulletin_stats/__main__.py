"""Command-line interface for bulletin statistics extraction."""

import argparse
import logging
import sys
from pathlib import Path

from .config import RunConfig
from .errors import BulletinStatsError
from .pipeline import run_pipeline
from .utils import setup_logging


def parse_args(argv=None):
    """Parse command line arguments.
    
    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        prog='bulletin-stats',
        description='Extract positivity counts and percentages from public-health bulletins.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Default index page, write stats.json
  python -m bulletin_stats run
  
  # Custom output and only the five most recent bulletins
  python -m bulletin_stats run --output ./out/stats.json --limit 5
  
  # Load settings from YAML, override the output
  python -m bulletin_stats run --config config.yaml --output stats.json
"""
    )
    
    subparsers = parser.add_subparsers(dest='command', help='Command to run')
    
    run_parser = subparsers.add_parser('run', help='Run extraction pipeline')
    run_parser.add_argument('--config', type=Path, help='Load config from YAML file')
    run_parser.add_argument('--manifest-url', type=str,
                            help='Index page listing the bulletins')
    run_parser.add_argument('--output', type=Path,
                            help='Output JSON file (default: stats.json)')
    run_parser.add_argument('--user-agent', type=str, help='Custom user agent string')
    run_parser.add_argument('--request-timeout', type=int,
                            help='HTTP request timeout in seconds (default: 30)')
    run_parser.add_argument('--politeness-delay', type=float,
                            help='Seconds to wait between requests (default: 0.5)')
    run_parser.add_argument('--limit', type=int,
                            help='Process only the first N bulletins')
    run_parser.add_argument('-v', '--verbose', action='store_true',
                            help='Enable debug logging')
    
    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        sys.exit(2)
    return args


def build_config(args) -> RunConfig:
    """Build the run configuration from YAML (if given) and CLI overrides."""
    overrides = {
        'manifest_url': args.manifest_url,
        'output_path': args.output,
        'user_agent': args.user_agent,
        'request_timeout': args.request_timeout,
        'politeness_delay': args.politeness_delay,
        'limit': args.limit,
    }
    overrides = {k: v for k, v in overrides.items() if v is not None}
    
    if args.config:
        config = RunConfig.from_yaml(args.config)
        for key, value in overrides.items():
            setattr(config, key, value)
        # Re-run validation on the merged values
        config.__post_init__()
        return config
    
    return RunConfig(**overrides)


def main(argv=None):
    """Main CLI entrypoint."""
    args = parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO)
    
    try:
        config = build_config(args)
        records = run_pipeline(config)
    except KeyboardInterrupt:
        print("\n\n⚠️  Interrupted by user", file=sys.stderr)
        sys.exit(130)
    except (BulletinStatsError, ValueError) as e:
        print(f"\n❌ Fatal error: {e}", file=sys.stderr)
        sys.exit(1)
    
    found = sum(1 for r in records if r.data is not None)
    print(f"\n✅ Processed {len(records)} bulletins, statistics found in {found}")
    print(f"Results saved to: {config.output_path}")
    sys.exit(0)


if __name__ == '__main__':
    main()
