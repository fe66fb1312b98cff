"""Logging configuration for pairheap."""
import logging
import sys

from pairheap import config

_FORMAT = "%(levelname)s %(asctime)s %(filename)s:%(lineno)d] %(message)s"
_DATE_FORMAT = "%m-%d %H:%M:%S"

_root_logger = logging.getLogger("pairheap")
_default_handler = None


def _setup_logger():
    global _default_handler
    _root_logger.setLevel(config.LOG_LEVEL)
    if _default_handler is None:
        _default_handler = logging.StreamHandler(sys.stdout)
        _default_handler.setLevel(logging.DEBUG)
        _root_logger.addHandler(_default_handler)
    _default_handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATE_FORMAT))
    # Records stop at the package logger so applications configuring the
    # root logger do not print them twice.
    _root_logger.propagate = False


_setup_logger()


def init_logger(name: str):
    """
    Return a logger that writes through the package handler.
    :param name: module name, normally __name__
    :return: logging.Logger under the "pairheap" namespace
    """
    logger = logging.getLogger(name)
    if not name.startswith("pairheap"):
        logger.setLevel(config.LOG_LEVEL)
        logger.addHandler(_default_handler)
        logger.propagate = False
    return logger
