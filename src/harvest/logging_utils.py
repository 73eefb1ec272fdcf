"""
Console logging for harvest runs.
"""

import logging


LOGGER_NAME = "src.harvest"
HANDLER_NAME = "harvest-console"
FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def enable_console_logging(level: int = logging.INFO) -> logging.Logger:
    """
    Attach one stream handler to the package logger.

    The package logger stops propagating to the root logger while the
    handler is attached, so an application that already logs to the console
    does not see every line twice. Calling it again only updates the level.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    if not any(h.get_name() == HANDLER_NAME for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.set_name(HANDLER_NAME)
        handler.setFormatter(logging.Formatter(FORMAT))
        logger.addHandler(handler)
    logger.propagate = False
    return logger
