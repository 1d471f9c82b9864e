"""
Pipeline runner - enumerate, scan history, apply.

Nothing is written to the filesystem until the history producer has been
reaped successfully, so every fatal error before the apply phase leaves
the working tree untouched.
"""

import logging
from typing import Any, Dict, Optional

from ..utils.helpers import summarize_paths
from .apply import TimestampWriter, apply_times
from .config_loader import load_config, skip_modified, trust_order, update_directories
from .engine import ResolutionEngine, ScanResult
from .git import GitRepository

logger = logging.getLogger("git-set-mtime.runner")


def scan(repo: GitRepository, config: Optional[Dict[str, Any]] = None) -> ScanResult:
    """Resolve commit times for the repository's tracked files."""
    tracked = repo.tracked_files()
    excluded = repo.modified_files() if skip_modified(config) else []
    if excluded:
        logger.info("Skipping %d locally modified files: %s", len(excluded), summarize_paths(excluded))

    engine = ResolutionEngine(tracked, excluded=excluded, trust_order=trust_order(config))
    with repo.open_history() as stream:
        result = engine.consume(stream.lines())
        if result.completed:
            stream.cancel()
        stream.wait()

    if result.unresolved:
        logger.info(
            "%d files not found in history: %s",
            len(result.unresolved),
            summarize_paths(result.unresolved),
        )
    return result


def run(
    repo: Optional[GitRepository] = None, config: Optional[Dict[str, Any]] = None
) -> ScanResult:
    """
    Set mtimes for repo (default: the repository containing the cwd).

    Returns:
        The scan result that was applied.
    """
    if repo is None:
        repo = GitRepository.discover()
    if config is None:
        config = load_config(repo.root)
    result = scan(repo, config)
    writer = TimestampWriter(repo.root)
    written = apply_times(result, writer, directories=update_directories(config))
    logger.info(
        "Set mtime on %d files and %d directories (%d records read)",
        len(result.resolved),
        written - len(result.resolved),
        result.records_read,
    )
    return result
