"""Retry policy for calls to the completion service"""

import logging
from dataclasses import dataclass
from typing import Callable, Tuple, Type, TypeVar

from tenacity import (
    Retrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_random_exponential,
)

from app.config import Settings
from app.exceptions import UpstreamUnavailableError

logger = logging.getLogger("macrolog.retry")

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    """
    Bounded retry with randomised exponential backoff.

    ``max_attempts=1`` means a single attempt and no waiting, which is the
    default. Only the listed exception types are retried; the last error is
    re-raised unchanged once attempts run out.
    """

    max_attempts: int = 1
    multiplier_sec: float = 0.5
    max_wait_sec: float = 8.0
    retry_on: Tuple[Type[BaseException], ...] = (UpstreamUnavailableError,)

    @classmethod
    def from_settings(cls, settings: Settings) -> "RetryPolicy":
        return cls(
            max_attempts=settings.estimator_max_attempts,
            multiplier_sec=settings.estimator_retry_multiplier_sec,
            max_wait_sec=settings.estimator_retry_max_wait_sec,
        )

    def call(self, fn: Callable[..., T], *args, **kwargs) -> T:
        if self.max_attempts <= 1:
            return fn(*args, **kwargs)

        retrying = Retrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_random_exponential(
                multiplier=self.multiplier_sec, max=self.max_wait_sec
            ),
            retry=retry_if_exception_type(self.retry_on),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )
        return retrying(fn, *args, **kwargs)
