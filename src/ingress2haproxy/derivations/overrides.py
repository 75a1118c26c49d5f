"""Operator overrides: patch a RenderConfiguration from string settings.

The override map comes from operator configuration (a ConfigMap on
Kubernetes, the [overrides] table of ingress2haproxy.toml here) and is
untyped. Only the keys listed in OVERRIDE_FIELDS are honoured, each
with its own parser. A bad value is reported and skipped; it never
aborts the render.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Mapping
from typing import Any, NamedTuple

from ingress2haproxy.models.haproxy import RenderConfiguration

logger = logging.getLogger(__name__)

_TRUE_VALUES = {"1", "t", "true", "y", "yes", "on"}
_FALSE_VALUES = {"0", "f", "false", "n", "no", "off"}

# HAProxy time format: a number with an optional unit, default ms.
_DURATION_RE = re.compile(r"^\d+(us|ms|s|m|h|d)?$")


def parse_str(value: str) -> str:
    return value.strip()


def parse_bool(value: str) -> bool:
    """Parse a loosely spelled boolean.

    >>> parse_bool("true"), parse_bool("Off"), parse_bool("1")
    (True, False, True)
    """
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ValueError(f"not a boolean: {value!r}")


def parse_positive_int(value: str) -> int:
    number = int(value.strip())
    if number <= 0:
        raise ValueError(f"must be positive: {value!r}")
    return number


def parse_duration(value: str) -> str:
    """Validate an HAProxy duration such as '5s' or '1500'."""
    normalized = value.strip()
    if not _DURATION_RE.match(normalized):
        raise ValueError(f"not a duration: {value!r}")
    return normalized


class OverrideField(NamedTuple):
    """An override key accepted from operator configuration."""

    key: str
    attr: str
    parse: Callable[[str], Any]


OVERRIDE_FIELDS: tuple[OverrideField, ...] = (
    OverrideField("syslog-endpoint", "syslog", parse_str),
    OverrideField("max-connections", "max_connections", parse_positive_int),
    OverrideField("balance-algorithm", "balance_algorithm", parse_str),
    OverrideField("forwardfor", "forwardfor", parse_bool),
    OverrideField("timeout-connect", "timeout_connect", parse_duration),
    OverrideField("timeout-client", "timeout_client", parse_duration),
    OverrideField("timeout-server", "timeout_server", parse_duration),
    OverrideField("timeout-http-request", "timeout_http_request", parse_duration),
    OverrideField("timeout-keep-alive", "timeout_keep_alive", parse_duration),
    OverrideField("timeout-tunnel", "timeout_tunnel", parse_duration),
)

_FIELDS_BY_KEY = {f.key: f for f in OVERRIDE_FIELDS}


def merge_overrides(
    config: RenderConfiguration,
    overrides: Mapping[str, str] | None,
) -> list[str]:
    """Apply operator overrides to config in place.

    Unknown keys are ignored. Values that fail to parse are logged as
    warnings and leave the corresponding field untouched.

    Returns:
        The keys that were rejected because their value did not parse.
    """
    rejected: list[str] = []
    if not overrides:
        return rejected

    for key, value in overrides.items():
        override = _FIELDS_BY_KEY.get(key)
        if override is None:
            logger.debug("ignoring unknown override %r", key)
            continue
        try:
            parsed = override.parse(str(value))
        except ValueError as e:
            logger.warning("error decoding config %s=%r: %s", key, value, e)
            rejected.append(key)
            continue
        setattr(config, override.attr, parsed)

    return rejected
