#!/usr/bin/env python3
"""
git-set-mtime - Set files' mtime by latest git commit time.

Usage:
    git set-mtime                 Set mtimes for the current repository

Any argument prints this usage and exits without doing anything.
"""

import argparse
import logging
import sys
from typing import List, Optional

from . import __version__
from .core.config_loader import load_config, log_level
from .core.constants import EXIT_ERROR, EXIT_INTERRUPTED, EXIT_OK
from .core.git import GitRepository
from .core.runner import run


def create_parser() -> argparse.ArgumentParser:
    """Create the parser used to render usage text."""
    return argparse.ArgumentParser(
        prog='git set-mtime',
        usage='$ %(prog)s',
        description='Set files mtime by latest git commit time.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Version: {__version__}

Every tracked file gets the committer time of the newest commit that
touched it; every directory gets the newest time found beneath it.
Files with uncommitted changes are left alone.

Configuration: ~/.config/git-set-mtime/config.yaml, .git-set-mtime.yaml
Log level:     GIT_SET_MTIME_LOG_LEVEL=INFO
        """
    )


def _setup_logging(level: int) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main(args: Optional[List[str]] = None) -> int:
    """Main entry point."""
    if args is None:
        args = sys.argv[1:]

    if args:
        create_parser().print_help(sys.stderr)
        return EXIT_OK

    level = logging.WARNING
    try:
        repo = GitRepository.discover()
        config = load_config(repo.root)
        level = log_level(config)
        _setup_logging(level)
        run(repo, config)
    except KeyboardInterrupt:
        print("\nOperation cancelled.", file=sys.stderr)
        return EXIT_INTERRUPTED
    except Exception as e:
        if level <= logging.DEBUG:
            import traceback
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    return EXIT_OK


if __name__ == '__main__':
    sys.exit(main())
