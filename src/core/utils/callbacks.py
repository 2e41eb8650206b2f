"""
Adapter from callback-style SDK methods to awaitables.

SendSafely SDK methods report completion through a trailing
``callback(error, result)`` argument instead of returning a value. The
adapter turns one such call into a single-resolution future that the
caller can await.
"""

import asyncio
import logging
from collections.abc import Callable
from typing import Any, TypeVar

from core.errors.exceptions import SdkError, SdkProtocolError, get_status_code

logger = logging.getLogger(__name__)

T = TypeVar("T")

SdkCallback = Callable[[Any, Any], None]

NO_RESULT_MESSAGE = "No result returned from SDK method"


def _is_error(error: Any) -> bool:
    """None, False, 0 and "" mean no error; any other value is a failure."""
    if error is None:
        return False
    if isinstance(error, (str, int, float)):
        return bool(error)
    return True


def _as_exception(error: Any) -> BaseException:
    """Wrap non-exception error values the SDK may hand to its callback."""
    if isinstance(error, BaseException):
        return error

    if isinstance(error, dict):
        message = error.get("message") or str(error)
    else:
        message = getattr(error, "message", None) or str(error)
    return SdkError(str(message), status_code=get_status_code(error))


async def wrap_sdk_callback(
    fn: Callable[[Callable[[Any, T | None], None]], Any],
) -> T:
    """
    Run one callback-style SDK call and await its outcome.

    Resolution policy:
        - callback(error, ...) with error set -> the error is raised; None,
          False, 0 and "" count as no error
        - callback(None, result) with result set -> result is returned
        - callback(None, None) -> SdkProtocolError, never an empty result

    The first invocation of the callback settles the future; later
    invocations are ignored. Callbacks fired from SDK worker threads are
    marshalled back onto the awaiting event loop.

    Args:
        fn: Function that starts the SDK call, given the completion callback

    Returns:
        The result passed to the callback
    """
    loop = asyncio.get_running_loop()
    future: asyncio.Future = loop.create_future()

    def settle(error: Any, result: Any) -> None:
        if future.done():
            logger.debug("Ignoring repeated SDK callback invocation")
            return
        if _is_error(error):
            future.set_exception(_as_exception(error))
        elif result is not None:
            future.set_result(result)
        else:
            future.set_exception(SdkProtocolError(NO_RESULT_MESSAGE))

    def callback(error: Any = None, result: Any = None) -> None:
        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None

        if running is loop:
            settle(error, result)
        else:
            loop.call_soon_threadsafe(settle, error, result)

    fn(callback)
    return await future


__all__ = ["NO_RESULT_MESSAGE", "SdkCallback", "wrap_sdk_callback"]
