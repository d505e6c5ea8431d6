import logging
import sys

from benchcook.config import LOG_LEVELS, load_config

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class SubcommandPlugin:
    """Base class for CLI subcommand plugins."""

    def get_name(self):
        raise NotImplementedError

    def get_parser(self, subparsers):
        """Register subcommand with argparse subparsers."""
        raise NotImplementedError

    def get_epilog(self):
        """Return examples or help text for this subcommand. Default is empty."""
        return ""

    def get_order(self):
        """Return the display order for this plugin. Lower numbers appear first. Default is 0."""
        return 0

    def run(self, args):
        """Run the subcommand logic."""
        raise NotImplementedError

    @staticmethod
    def add_common_arguments(parser):
        """Arguments shared by every subcommand that loads benchmark logs."""
        parser.add_argument("--data-dir", help="Directory of day-partitioned bzip2 logs (default: data)")
        parser.add_argument("--config", help="Path to ini config file (default: $BENCHCOOK_CONFIG)")
        parser.add_argument("--log-level", choices=LOG_LEVELS, help="Level of messages to display")

    @staticmethod
    def resolve_config(args):
        """Load the ini config, apply command line overrides and set up logging.

        Exits with status 1 if the config cannot be loaded.
        """
        try:
            config = load_config(getattr(args, "config", None))
            config = config.with_overrides(
                data_dir=getattr(args, "data_dir", None),
                output=getattr(args, "output", None),
                jobs=getattr(args, "jobs", None),
                log_level=getattr(args, "log_level", None),
            )
        except (OSError, ValueError) as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)

        logging.basicConfig(stream=sys.stderr, level=config.log_level, format=LOG_FORMAT, force=True)
        return config
