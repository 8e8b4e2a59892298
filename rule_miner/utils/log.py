import logging
import sys

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level=logging.INFO, stream=None) -> logging.Logger:
    """
    Attach a stream handler to the package logger.

    Calling it again only updates the level; no duplicate handlers are added.
    """
    logger = logging.getLogger('rule_miner')
    logger.setLevel(level)
    if not any(getattr(h, '_rule_miner_handler', False) for h in logger.handlers):
        handler = logging.StreamHandler(stream or sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._rule_miner_handler = True
        logger.addHandler(handler)
    return logger
