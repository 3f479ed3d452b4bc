"""
Bounded External Call Module

Wraps a single outbound provider call with a deadline and classifies how it
ended. The call and the deadline race under asyncio.wait_for: if the deadline
wins, the call is cancelled and UpstreamTimeoutError is raised; if the call
wins, the timer is discarded.

Classification:
- deadline elapsed (or the SDK/httpx client timed out first) -> UpstreamTimeoutError (504)
- provider answered with a non-2xx status -> body logged, UpstreamError (502)
- provider unreachable (DNS, connect, TLS) -> UpstreamError (502)
- anything else propagates unchanged for the service to handle

Dependencies:
- asyncio: For the deadline race.
- openai: For the SDK's timeout, connection and status error types.
- httpx: For the raw HTTP client's timeout, transport and status error types.
- loguru: For logging upstream failures.

Author: @kcaparas1630
"""
import asyncio
from typing import Awaitable, Callable, TypeVar
import httpx
import openai
from loguru import logger
from app.errors.exceptions import UpstreamError, UpstreamTimeoutError

T = TypeVar("T")


def _status_and_body(exc: Exception):
    if isinstance(exc, openai.APIStatusError):
        return exc.status_code, exc.response.text if exc.response is not None else ""
    response = exc.response
    return response.status_code, response.text


async def bounded_call(
    call: Callable[[], Awaitable[T]],
    timeout: float,
    provider: str,
    log=logger,
) -> T:
    """
    Run one upstream call with a deadline.

    Args:
        call: Zero-argument factory returning the awaitable to run. The factory
            is only invoked once, inside the deadline.
        timeout: Seconds to wait before cancelling the call.
        provider: Provider name used in the client-facing error ("Groq", "OpenAI").
        log: Logger to report failures to.

    Returns:
        Whatever the awaited call returns.

    Raises:
        UpstreamTimeoutError: The deadline elapsed first.
        UpstreamError: The provider returned a failure status or could not be reached.
    """
    try:
        return await asyncio.wait_for(call(), timeout=timeout)
    except (asyncio.TimeoutError, openai.APITimeoutError, httpx.TimeoutException) as e:
        log.error(f"{provider} request timed out after {timeout}s: {type(e).__name__}")
        raise UpstreamTimeoutError(provider) from e
    except (openai.APIStatusError, httpx.HTTPStatusError) as e:
        status, body = _status_and_body(e)
        log.error(f"{provider} API error | status={status} body={body}")
        raise UpstreamError(provider) from e
    except (openai.APIConnectionError, httpx.RequestError) as e:
        log.error(f"{provider} unreachable: {type(e).__name__}: {e}")
        raise UpstreamError(provider) from e
