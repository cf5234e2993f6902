"""Conversion between OTEL trace identifiers and the X-Ray trace id format.

An X-Ray trace id looks like ``1-5759e988-bd862e3fe1be46a994272793``: a
version digit, eight hex characters of epoch seconds and 24 hex characters of
randomness. An OTEL trace id is the same 128 bits rendered as 32 lowercase hex
characters, so the conversion is a split at offset 8. The timestamp semantics
only hold when the ids are produced by ``AwsXRayIdGenerator``.
"""

from __future__ import annotations

import re

XRAY_VERSION = "1"
OTEL_TRACE_ID_LENGTH = 32
XRAY_EPOCH_LENGTH = 8

_XRAY_TRACE_ID_RE = re.compile(r"^1-([0-9a-fA-F]{8})-([0-9a-fA-F]{24})$")


def to_xray_trace_id(trace_id: str) -> str | None:
    """Render a 32 hex character trace id in X-Ray format.

    Returns None when the id is not exactly 32 characters long; callers treat
    that as "no vendor id available".
    """
    if trace_id is None or len(trace_id) != OTEL_TRACE_ID_LENGTH:
        return None
    return f"{XRAY_VERSION}-{trace_id[:XRAY_EPOCH_LENGTH]}-{trace_id[XRAY_EPOCH_LENGTH:]}"


def from_xray_trace_id(xray_trace_id: str) -> str | None:
    """Recover the 32 hex character trace id from an X-Ray trace id, or None if malformed."""
    if not xray_trace_id:
        return None
    match = _XRAY_TRACE_ID_RE.match(xray_trace_id)
    if match is None:
        return None
    return (match.group(1) + match.group(2)).lower()
