"""
Logging setup for applications built on graphneat.

The package itself only emits messages through loguru and stays silent
until an application enables it, either with 'logger.enable("graphneat")'
or with 'setup_logger()' below.
"""

import sys
from typing import TextIO

from loguru import logger

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} | {message}"

def setup_logger(level: str = "INFO", sink: TextIO | None = None) -> int:
    """
    Route graphneat's log messages to a single console sink.

    Parameters:
        level: Minimum level emitted (TRACE, DEBUG, INFO, WARNING, ERROR, CRITICAL)
        sink:  Stream receiving the messages (defaults to 'sys.stderr')

    Returns:
        The loguru handler ID, which can be passed to 'logger.remove()'
    """
    # Remove any existing handlers to avoid duplicates
    logger.remove()

    handler_id = logger.add(sink if sink is not None else sys.stderr,
                            level=level,
                            format=LOG_FORMAT,
                            colorize=False,
                            backtrace=True,
                            diagnose=False)
    logger.enable("graphneat")
    return handler_id
