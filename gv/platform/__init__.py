"""Platform helpers: subprocess execution and file writes."""

from .files import atomic_write_text, read_text
from .process import ProcessError, run

__all__ = [
    "ProcessError",
    "atomic_write_text",
    "read_text",
    "run",
]
