# ==============================================================================
# Retry Configuration
# ==============================================================================
"""
Retry configuration for connection checks.

Bulk writes are never retried here: a failed flush keeps its buffer and the
caller decides when to flush again. Only status checks retry, using a light
policy of 3 attempts with exponential backoff (~7 seconds).
"""

import logging
from typing import Tuple, Type

from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

# ==============================================================================
# Retry Constants
# ==============================================================================

# Light retry configuration: 3 attempts
# Exponential backoff: 1s, 2s, 4s = ~7s total
RETRY_ATTEMPTS_LIGHT = 3
RETRY_WAIT_MIN = 1  # seconds
RETRY_WAIT_MAX = 4  # seconds


def log_retry_attempt_light(logger: logging.Logger):
    """
    Create a callback that logs retry attempts for light retry.

    Args:
        logger: Logger instance to use for logging

    Returns:
        Callback function for tenacity's before_sleep parameter
    """

    def _log_retry(retry_state: RetryCallState) -> None:
        exception = retry_state.outcome.exception() if retry_state.outcome else None
        logger.warning(
            "Retry attempt %d/%d after error: %s",
            retry_state.attempt_number,
            RETRY_ATTEMPTS_LIGHT,
            exception,
        )

    return _log_retry


def retry_light(
    exception_types: Tuple[Type[Exception], ...],
    logger: logging.Logger,
    wait_min: float = RETRY_WAIT_MIN,
    wait_max: float = RETRY_WAIT_MAX,
):
    """
    Create a light retry decorator (3 attempts, ~7 seconds).

    Use this for status checks and non-critical operations.

    Args:
        exception_types: Tuple of exception types to retry on
        logger: Logger instance for retry logging
        wait_min: Minimum backoff in seconds
        wait_max: Maximum backoff in seconds

    Returns:
        Tenacity retry decorator

    Example:
        @retry_light((ConnectionError, TimeoutError), logger)
        def check_service_status():
            ...
    """
    return retry(
        stop=stop_after_attempt(RETRY_ATTEMPTS_LIGHT),
        wait=wait_exponential(multiplier=1, min=wait_min, max=wait_max),
        retry=retry_if_exception_type(exception_types),
        before_sleep=log_retry_attempt_light(logger),
        reraise=True,
    )
