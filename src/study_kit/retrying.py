# src/study_kit/retrying.py

import logging

from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)


def transport_retrying(
    max_retries: int,
    retry_on: type[BaseException] | tuple[type[BaseException], ...],
    logger: logging.Logger,
) -> AsyncRetrying:
    """Retry policy shared by every outbound client.

    `max_retries` counts attempts, so 1 means a single try. Only the given
    exception types are retried; the last one is re-raised unchanged so the
    caller can classify it.
    """
    return AsyncRetrying(
        stop=stop_after_attempt(max(1, max_retries)),
        wait=wait_exponential(multiplier=0.5, min=0.5, max=10),
        retry=retry_if_exception_type(retry_on),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )
