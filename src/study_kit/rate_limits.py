# src/study_kit/rate_limits.py

"""Read rate-limit signals from provider response headers.

Providers disagree on header names and on how the reset time is written:

- Hugging Face: ``x-ratelimit-*`` with the reset as a unix timestamp
- OpenAI: ``x-ratelimit-*-requests`` with the reset as a duration (``6m0s``)
- Anthropic: ``anthropic-ratelimit-requests-*`` with the reset as RFC 3339

All of them may also send ``retry-after`` in seconds.
"""

import logging
import re
from collections.abc import Mapping
from datetime import datetime, timedelta, timezone

from study_kit.errors import RateLimitInfo

logger = logging.getLogger(__name__)

LOW_QUOTA_WARNING = 10

_REMAINING_HEADERS = (
    "x-ratelimit-remaining",
    "x-ratelimit-remaining-requests",
    "anthropic-ratelimit-requests-remaining",
)
_LIMIT_HEADERS = (
    "x-ratelimit-limit",
    "x-ratelimit-limit-requests",
    "anthropic-ratelimit-requests-limit",
)
_RESET_HEADERS = (
    "x-ratelimit-reset",
    "x-ratelimit-reset-requests",
    "anthropic-ratelimit-requests-reset",
    "retry-after",
)

_DURATION_PART = re.compile(r"(\d+(?:\.\d+)?)(ms|h|m|s)")
_UNIT_SECONDS = {"ms": 0.001, "s": 1.0, "m": 60.0, "h": 3600.0}

# Values above this are unix timestamps, below it relative seconds.
_EPOCH_CUTOFF = 1_000_000_000


def _first(headers: Mapping[str, str], names: tuple[str, ...]) -> str | None:
    lowered = {k.lower(): v for k, v in headers.items()}
    for name in names:
        if name in lowered:
            return lowered[name]
    return None


def _parse_int(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(float(value))
    except ValueError:
        logger.debug("Ignoring non-numeric rate-limit header value: %r", value)
        return None


def _parse_reset(value: str | None, now: datetime) -> datetime | None:
    if value is None:
        return None
    value = value.strip()

    try:
        number = float(value)
    except ValueError:
        pass
    else:
        if number > _EPOCH_CUTOFF:
            return datetime.fromtimestamp(number, tz=timezone.utc)
        return now + timedelta(seconds=number)

    parts = _DURATION_PART.findall(value)
    if parts and "".join(n + u for n, u in parts) == value:
        seconds = sum(float(n) * _UNIT_SECONDS[u] for n, u in parts)
        return now + timedelta(seconds=seconds)

    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        logger.debug("Ignoring unparseable rate-limit reset value: %r", value)
        return None


def parse_rate_limit_headers(
    headers: Mapping[str, str] | None,
    now: datetime | None = None,
) -> RateLimitInfo | None:
    """Extract quota signals, or None when the response carries none."""
    if not headers:
        return None
    now = now or datetime.now(timezone.utc)

    info = RateLimitInfo(
        remaining=_parse_int(_first(headers, _REMAINING_HEADERS)),
        limit=_parse_int(_first(headers, _LIMIT_HEADERS)),
        reset_at=_parse_reset(_first(headers, _RESET_HEADERS), now),
    )
    if info == RateLimitInfo():
        return None
    return info


def log_rate_limit_status(info: RateLimitInfo | None, source: str) -> None:
    if info is None:
        return
    if info.remaining is not None and info.limit is not None:
        logger.info(
            "%s rate limit: %d/%d requests remaining",
            source,
            info.remaining,
            info.limit,
        )
    if info.remaining is not None and info.remaining < LOW_QUOTA_WARNING:
        logger.warning(
            "%s is approaching its rate limit (%d requests left, resets at %s)",
            source,
            info.remaining,
            info.reset_at.isoformat() if info.reset_at else "unknown",
        )
