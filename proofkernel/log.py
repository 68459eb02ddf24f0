import logging
import sys

from .config import Config

ROOT_LOGGER = "proofkernel"


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    """Return a logger under the package namespace, configuring the root once."""
    root = logging.getLogger(ROOT_LOGGER)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        formatter = logging.Formatter(
            '%(asctime)s - [%(levelname)s] - %(name)s - %(message)s'
        )
        handler.setFormatter(formatter)
        root.addHandler(handler)
        root.setLevel(getattr(logging, Config.LOG_LEVEL, logging.WARNING))
    if name == ROOT_LOGGER or name.startswith(ROOT_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
