from __future__ import annotations

import functools
import logging
import typing as tp

import async_timeout

_LOGGER = logging.getLogger(__name__)


def set_timeout(timeout: int):
    def set_timeout_decorator(func: tp.Callable):
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            async with async_timeout.timeout(timeout):
                return await func(*args, **kwargs)

        return wrapper

    return set_timeout_decorator


def log_request(action: str):
    """Log start and failure of an IPFS request. Errors are re-raised."""

    def log_request_decorator(func: tp.Callable):
        @functools.wraps(func)
        async def wrapper(obj, *args, **kwargs):
            _LOGGER.debug(f"Start {action}")
            try:
                return await func(obj, *args, **kwargs)
            except Exception as e:
                _LOGGER.debug(f"Exception in {action}: {e!r}")
                raise

        return wrapper

    return log_request_decorator
