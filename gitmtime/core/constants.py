"""
git-set-mtime constants - central definition of git argv and record syntax.
"""

import re

# Separator git emits between paths under -z
PATH_SEPARATOR = "\x00"
# Doubled separator ends the path list of one commit
END_OF_LIST = PATH_SEPARATOR * 2

# committer <name> <email> <epoch> <utc offset>
COMMITTER_RE = re.compile(r"^committer .*? (\d+) (?:[-+]\d+)$")

# Relative paths bottom out here
ROOT_DIR = "."

GIT_TOPLEVEL_ARGS = ("git", "rev-parse", "--show-toplevel")
GIT_TRACKED_ARGS = ("git", "ls-files", "-z")
GIT_MODIFIED_ARGS = ("git", "ls-files", "--modified", "-z")
GIT_HISTORY_ARGS = (
    "git",
    "log",
    "-m",
    "-r",
    "--name-only",
    "--no-color",
    "--pretty=raw",
    "-z",
)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_INTERRUPTED = 130

LOG_LEVEL_ENV = "GIT_SET_MTIME_LOG_LEVEL"
