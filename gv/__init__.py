"""gv: commit-driven semantic versioning for git repositories."""

__version__ = "0.1.0"
