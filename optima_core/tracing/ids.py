"""Trace-id and request-id generation.

Trace id format: ``{timestamp_hex}-{random_hex}-{service_short}``,
e.g. ``67890abc-f1e2d3c4b5a6-auth``.
Request id format: ``{prefix}_{random_hex}``, e.g. ``auth_f1e2d3c4b5a6``.
"""

from __future__ import annotations

import re
import secrets
import time
from dataclasses import dataclass


RANDOM_HEX_LENGTH = 12

# Leading hex digits; trailing junk after them is ignored.
TIMESTAMP_HEX_PATTERN = re.compile(r"\s*([0-9a-fA-F]+)")


@dataclass(frozen=True)
class ParsedTraceId:
    valid: bool
    timestamp: int | None = None
    random: str | None = None
    service_short: str | None = None
    raw: str | None = None


def _random_hex(length: int) -> str:
    return secrets.token_hex((length + 1) // 2)[:length]


def generate_trace_id(service_short: str = "svc") -> str:
    timestamp = format(int(time.time()), "x")
    return f"{timestamp}-{_random_hex(RANDOM_HEX_LENGTH)}-{service_short}"


def generate_request_id(prefix: str = "req") -> str:
    return f"{prefix}_{_random_hex(RANDOM_HEX_LENGTH)}"


def parse_trace_id(trace_id: str) -> ParsedTraceId:
    """Split a trace id into its parts.

    Never raises: malformed input yields ``valid=False`` with the raw value,
    so callers must check ``valid`` before trusting the other fields. Service
    names may themselves contain dashes.
    """

    parts = trace_id.split("-")
    if len(parts) < 3:
        return ParsedTraceId(valid=False, raw=trace_id)

    timestamp_hex, random, *service_parts = parts
    match = TIMESTAMP_HEX_PATTERN.match(timestamp_hex)
    if match is None:
        return ParsedTraceId(valid=False, raw=trace_id)

    return ParsedTraceId(
        valid=True,
        timestamp=int(match.group(1), 16),
        random=random,
        service_short="-".join(service_parts),
    )
