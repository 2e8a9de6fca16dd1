"""Logging setup for the command-line entry point.

Library modules only call logging.getLogger(__name__); handlers are
installed here, once, by the CLI.
"""

import logging
import sys

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level: str = 'WARNING') -> logging.Logger:
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.WARNING))

    # Re-running main() in one process (tests) must not stack handlers
    for handler in list(root_logger.handlers):
        if getattr(handler, '_cmap_tool', False):
            root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._cmap_tool = True
    root_logger.addHandler(handler)

    return logging.getLogger('cmap_tool')
