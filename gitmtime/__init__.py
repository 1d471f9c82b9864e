"""git-set-mtime - set file modification times from git commit history."""

__version__ = "0.1.0"
