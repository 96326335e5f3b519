"""
Rostr - Logging setup.

Modules log through `logging.getLogger(__name__)`; the CLI installs a
Rich handler on the root logger once at startup.
"""

import logging

from rich.logging import RichHandler

_configured = False


def configure_logging(level: str = "INFO") -> None:
    """Install a RichHandler on the root logger (idempotent)."""
    global _configured

    root = logging.getLogger()
    root.setLevel(level)

    if _configured:
        return

    handler = RichHandler(rich_tracebacks=True, show_path=False)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    root.addHandler(handler)
    _configured = True
