"""CLI command modules.

- publish: full publish run, tag resolution preview, chart listing
"""

from .publish import charts, run, tags

__all__ = ["charts", "run", "tags"]
