import typing as T
import logging

logger = logging.getLogger("pybwt")


# basically log(*args), but debug, on the package logger
def log(*args: T.Any) -> None:
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(" ".join(map(str, args)))
