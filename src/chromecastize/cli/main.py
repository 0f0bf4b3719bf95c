"""Main CLI interface for chromecastize."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import TYPE_CHECKING

from ..config import ChromecastizeConfig, get_config
from ..config.constants import EXIT_FAILURE, EXIT_INTERRUPTED, EXIT_OK
from ..core import ConfigurationGap, ToolUnavailable, walk_arguments
from ..processors import ChromecastProcessor
from .summary_table import print_summary_table

if TYPE_CHECKING:
    from pathlib import Path

LOG = logging.getLogger(__name__)


class ChromecastizeCLI:
    """Command line driver: validate arguments, then process paths in order."""

    def __init__(self, config: ChromecastizeConfig | None = None, config_path: Path | None = None) -> None:
        if config is None:
            config = ChromecastizeConfig.load_from_file(config_path) if config_path else get_config()
        self.config = config

    @staticmethod
    def setup_logging(level_name: str) -> None:
        """Setup logging from the configured level name."""
        level = getattr(logging, level_name.upper(), logging.INFO)
        log_format = "%(levelname)s: %(name)s: %(message)s" if level <= logging.DEBUG else "%(message)s"

        logging.basicConfig(level=level, format=log_format, handlers=[logging.StreamHandler(sys.stderr)])

    @staticmethod
    def build_parser() -> argparse.ArgumentParser:
        """Build the argument parser."""
        parser = argparse.ArgumentParser(
            prog="chromecastize",
            allow_abbrev=False,
            description="Check video files for Chromecast compatibility and convert the ones that are not",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Override flags apply to every path that follows them.

Examples:
  # Check and convert a whole library
  chromecastize /path/to/videos

  # Force MP4 output for one folder, MKV for the next
  chromecastize --mp4 /path/to/phone --mkv /path/to/movies
            """,
        )
        parser.add_argument("paths", nargs="*", help="Video files or directories (searched recursively)")
        parser.add_argument("--mp4", action="store_true", help="Force MP4 output for the following paths")
        parser.add_argument("--mkv", action="store_true", help="Force MKV output for the following paths")
        return parser

    def run(self, args: list[str] | None = None) -> int:
        """Run the CLI with given arguments."""
        argv = list(sys.argv[1:] if args is None else args)
        parser = self.build_parser()
        # Unrecognised tokens are left to the walker, which reports them as missing files
        parser.parse_known_intermixed_args(argv)

        if not argv:
            parser.print_usage()
            return EXIT_FAILURE

        self.setup_logging(self.config.global_.log_level)
        processor = ChromecastProcessor(self.config)

        try:
            processor.check_tools()
        except ToolUnavailable as e:
            LOG.error("%s", e)
            return EXIT_FAILURE

        processor.prepare()

        try:
            results = processor.process_units(walk_arguments(argv))
        except ConfigurationGap as e:
            LOG.error("%s (file: %s)", e, e.file_path)
            return EXIT_FAILURE
        except KeyboardInterrupt:
            LOG.info("Operation cancelled by user")
            return EXIT_INTERRUPTED

        print_summary_table(results)
        return EXIT_OK


def main() -> int:
    """Entry point for the CLI."""
    cli = ChromecastizeCLI()
    return cli.run()


if __name__ == "__main__":
    sys.exit(main())
