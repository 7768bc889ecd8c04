"""fluxgraph utility modules.

- logging: Console logging with human/verbose/JSON modes
"""

from fluxgraph.utils.logging import configure_from_cli, get_logger, setup_logging

__all__ = [
    "configure_from_cli",
    "get_logger",
    "setup_logging",
]
